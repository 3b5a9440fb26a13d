"""
API tests for worker discovery, job lists and the worker dashboard.
"""

import pytest

from conftest import create_job, register, open_project


@pytest.fixture
def plumber(client):
    return register(
        client, "plumber@example.com", "skilled_worker", "Ngozi", "Eze",
        skilledWorker={
            "fullName": "Ngozi Eze",
            "professionalTitle": "Plumber",
            "primarySkills": ["Plumbing", "Tiling"],
            "location": "Lagos",
            "hourlyRate": 30,
            "availability": "part-time",
        },
    )


class TestPublicDirectory:
    """Test cases for the public worker search."""

    def test_lists_active_workers_only(self, client, worker, plumber, employer):
        body = client.get("/api/workers/public").json()

        names = sorted(item["displayName"] for item in body["items"])
        assert names == ["Ngozi Eze", "Tunde Bello"]
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 2}
        assert "email" not in body["items"][0]

    def test_filter_by_skill_is_case_insensitive(self, client, worker, plumber):
        items = client.get("/api/workers/public", params={"skills": "PLUMBING"}).json()["items"]

        assert [item["displayName"] for item in items] == ["Ngozi Eze"]

    def test_all_skills_must_match(self, client, worker, plumber):
        items = client.get("/api/workers/public", params={"skills": "wiring,plumbing"}).json()["items"]

        assert items == []

    def test_filter_by_rate_and_location(self, client, worker, plumber):
        cheap = client.get("/api/workers/public", params={"maxRate": 40}).json()["items"]
        in_abuja = client.get("/api/workers/public", params={"location": "abuja"}).json()["items"]

        assert [item["displayName"] for item in cheap] == ["Ngozi Eze"]
        assert [item["displayName"] for item in in_abuja] == ["Tunde Bello"]

    def test_text_search(self, client, worker, plumber):
        items = client.get("/api/workers/public", params={"q": "electric"}).json()["items"]

        assert [item["displayName"] for item in items] == ["Tunde Bello"]

    def test_availability_filter(self, client, worker, plumber):
        items = client.get("/api/workers/public", params={"availability": "Part-Time"}).json()["items"]

        assert [item["displayName"] for item in items] == ["Ngozi Eze"]

    def test_paging(self, client, worker, plumber):
        body = client.get("/api/workers/public", params={"page": 2, "limit": 1}).json()

        assert len(body["items"]) == 1
        assert body["pagination"]["total"] == 2

    def test_meta(self, client, worker, plumber):
        meta = client.get("/api/workers/meta").json()

        assert meta["skills"] == ["Plumbing", "solar", "Tiling", "wiring"]
        assert meta["locations"] == ["Abuja", "Lagos"]
        assert meta["availability"] == ["full-time", "part-time"]
        assert meta["rate"] == {"min": 30.0, "max": 50.0}

    def test_profile(self, client, worker):
        worker_user, _ = worker

        response = client.get(f"/api/workers/{worker_user['id']}")

        assert response.status_code == 200
        assert response.json()["worker"]["skilledWorker"]["professionalTitle"] == "Electrician"

    def test_employer_is_not_a_worker(self, client, employer):
        employer_user, _ = employer

        response = client.get(f"/api/workers/{employer_user['id']}")

        assert response.status_code == 404
        assert response.json()["message"] == "Worker not found"


class TestWorkerJobs:
    """Test cases for the worker's invitation and job lists."""

    def test_invitations(self, client, employer, worker):
        _, headers = employer
        worker_user, worker_headers = worker
        job = create_job(client, headers, title="Install inverter")
        client.post("/api/invites", headers=headers, json={"jobId": job["id"], "workerId": worker_user["id"]})

        body = client.get("/api/workers/jobs/invitations", headers=worker_headers).json()

        assert [i["job"]["title"] for i in body["invitations"]] == ["Install inverter"]
        assert body["pagination"]["total"] == 1

    def test_invitation_text_filters(self, client, employer, worker):
        _, headers = employer
        worker_user, worker_headers = worker
        for title, skills in (("Install inverter", ["solar"]), ("Fix sockets", ["wiring"])):
            job = create_job(client, headers, title=title, requiredSkills=skills)
            client.post("/api/invites", headers=headers, json={"jobId": job["id"], "workerId": worker_user["id"]})

        by_q = client.get("/api/workers/jobs/invitations", headers=worker_headers, params={"q": "inverter"}).json()
        by_category = client.get(
            "/api/workers/jobs/invitations", headers=worker_headers, params={"category": "wiring"}
        ).json()

        assert [i["job"]["title"] for i in by_q["invitations"]] == ["Install inverter"]
        assert [i["job"]["title"] for i in by_category["invitations"]] == ["Fix sockets"]

    def test_category_ignores_description(self, client, employer, worker):
        """Category looks at skills and timeline, never at the description."""
        _, headers = employer
        worker_user, worker_headers = worker
        job = create_job(client, headers, requiredSkills=["solar"])
        client.post("/api/invites", headers=headers, json={"jobId": job["id"], "workerId": worker_user["id"]})

        by_category = client.get(
            "/api/workers/jobs/invitations", headers=worker_headers, params={"category": "office"}
        ).json()
        by_q = client.get("/api/workers/jobs/invitations", headers=worker_headers, params={"q": "office"}).json()
        by_timeline = client.get(
            "/api/workers/jobs/invitations", headers=worker_headers, params={"category": "2 weeks"}
        ).json()

        assert by_category["invitations"] == []
        assert len(by_q["invitations"]) == 1
        assert len(by_timeline["invitations"]) == 1

    def test_date_filter(self, client, employer, worker):
        _, headers = employer
        worker_user, worker_headers = worker
        job = create_job(client, headers)
        client.post("/api/invites", headers=headers, json={"jobId": job["id"], "workerId": worker_user["id"]})

        body = client.get(
            "/api/workers/jobs/invitations", headers=worker_headers, params={"dateFrom": "2999-01-01"}
        ).json()

        assert body["invitations"] == []

    def test_active_then_completed(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, invite, project = open_project(client, employer, worker)

        active = client.get("/api/workers/jobs/active", headers=worker_headers).json()["activeJobs"]
        assert [j["id"] for j in active] == [invite["id"]]

        client.patch(f"/api/projects/{project['id']}", headers=headers, json={"status": "completed"})

        assert client.get("/api/workers/jobs/active", headers=worker_headers).json()["activeJobs"] == []
        completed = client.get("/api/workers/jobs/completed", headers=worker_headers).json()["completedJobs"]
        assert [j["status"] for j in completed] == ["completed"]

    def test_accept_through_worker_route(self, client, employer, worker):
        _, headers = employer
        worker_user, worker_headers = worker
        job = create_job(client, headers)
        invite = client.post(
            "/api/invites", headers=headers, json={"jobId": job["id"], "workerId": worker_user["id"]}
        ).json()["invite"]

        response = client.post(f"/api/workers/jobs/invitations/{invite['id']}/accept", headers=worker_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Invitation accepted successfully"
        assert body["project"]["assignedTo"] == worker_user["id"]

    def test_decline_through_worker_route(self, client, employer, worker):
        _, headers = employer
        worker_user, worker_headers = worker
        job = create_job(client, headers)
        invite = client.post(
            "/api/invites", headers=headers, json={"jobId": job["id"], "workerId": worker_user["id"]}
        ).json()["invite"]

        response = client.post(f"/api/workers/jobs/invitations/{invite['id']}/decline", headers=worker_headers)

        assert response.json()["invite"]["status"] == "declined"


class TestWorkerDashboard:
    """Test cases for GET /api/workers/dashboard."""

    def test_empty_dashboard(self, client, worker):
        _, worker_headers = worker

        body = client.get("/api/workers/dashboard", headers=worker_headers).json()

        assert body["summary"] == {
            "activeProjects": 0,
            "completedProjects": 0,
            "currentRating": 0.0,
            "totalEarnings": 0.0,
        }
        assert body["recentJobs"] == []
        assert body["earningsReview"] == []

    def test_dashboard_after_work(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        client.post("/api/employers/wallet/deposit", headers=headers, json={"amount": 500})
        client.post(f"/api/employers/projects/{project['id']}/payments", headers=headers, json={"amount": 200})
        client.post(f"/api/projects/{project['id']}/messages", headers=headers, json={"text": "Great start"})

        body = client.get("/api/workers/dashboard", headers=worker_headers).json()

        assert body["summary"]["activeProjects"] == 1
        assert body["summary"]["totalEarnings"] == 200.0
        assert body["recentJobs"][0]["employer"] == "Okafor Builds"
        assert body["latestMessages"][0]["text"] == "Great start"
        assert body["ongoingJobs"][0]["id"] == project["id"]
        assert [month["amount"] for month in body["earningsReview"]] == [200.0]
