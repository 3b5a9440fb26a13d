"""
API tests for the root endpoints and the shared error format.
"""


class TestRootEndpoints:
    """Test cases for service metadata routes."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Skill Link API"
        assert response.json()["health"] == "/api/health"

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestErrorFormat:
    """Every failure uses the `{error, message}` body."""

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": "Route GET /api/nothing-here not found"}

    def test_domain_error_carries_stack_outside_production(self, client, employer):
        _, headers = employer

        response = client.get("/api/jobs/999", headers=headers)

        body = response.json()
        assert body["error"] == "NotFound"
        assert body["message"] == "Job not found"
        assert isinstance(body["stack"], list)

    def test_schema_error(self, client, employer):
        _, headers = employer

        response = client.post("/api/jobs", headers=headers, json={"title": "x", "budgetRange": {"min": "lots"}})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert body["details"][0]["field"] == "budgetRange.min"

    def test_path_parameter_type(self, client, employer):
        _, headers = employer

        response = client.get("/api/jobs/not-a-number", headers=headers)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "path.job_id"

    def test_missing_token(self, client):
        response = client.get("/api/projects")

        assert response.status_code == 401
        assert response.json() == {"error": "RequestError", "message": "Authentication required"}
        assert response.headers["www-authenticate"] == "Bearer"
