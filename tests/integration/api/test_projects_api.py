"""
API tests for projects, their shared streams and quick actions.
"""

from conftest import register, open_project


class TestProjectCrud:
    """Test cases for project creation, reads and updates."""

    def test_create_with_milestones(self, client, employer, worker):
        employer_user, headers = employer
        worker_user, _ = worker

        response = client.post("/api/projects", headers=headers, json={
            "title": "Solar install",
            "budget": 1200,
            "assignedTo": worker_user["id"],
            "milestones": [{"title": "Survey"}, {"title": "Install", "deadline": "2030-01-10T00:00:00Z"}],
        })

        assert response.status_code == 201
        project = response.json()["project"]
        assert project["currency"] == "NGN"
        assert project["budget"] == 1200.0
        assert project["progress"] == 0
        assert project["assignee"]["id"] == worker_user["id"]
        assert [m["status"] for m in project["milestones"]] == ["not_started", "not_started"]
        assert project["milestones"][1]["deadline"].startswith("2030-01-10")

    def test_create_requires_title(self, client, employer):
        _, headers = employer

        response = client.post("/api/projects", headers=headers, json={"budget": 10})

        assert response.status_code == 400
        assert response.json()["message"] == "title is required"

    def test_create_with_unknown_worker(self, client, employer):
        _, headers = employer

        response = client.post("/api/projects", headers=headers, json={"title": "X", "assignedTo": 999})

        assert response.status_code == 404

    def test_workers_cannot_create(self, client, worker):
        _, headers = worker

        response = client.post("/api/projects", headers=headers, json={"title": "Mine"})

        assert response.status_code == 403

    def test_assignment_notifies_worker(self, client, employer, worker):
        _, headers = employer
        worker_user, worker_headers = worker

        client.post("/api/projects", headers=headers, json={"title": "Solar install", "assignedTo": worker_user["id"]})

        titles = [n["title"] for n in client.get("/api/notifications", headers=worker_headers).json()["notifications"]]
        assert titles == ["New project assignment"]

    def test_list_for_both_members(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        _, stranger_headers = register(client, "stranger@example.com", "skilled_worker")

        assert [p["id"] for p in client.get("/api/projects", headers=headers).json()["projects"]] == [project["id"]]
        assert [p["id"] for p in client.get("/api/projects", headers=worker_headers).json()["projects"]] == [project["id"]]
        assert client.get("/api/projects", headers=stranger_headers).json()["projects"] == []

    def test_get_members_only(self, client, employer, worker):
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        _, stranger_headers = register(client, "stranger@example.com", "skilled_worker")

        assert client.get(f"/api/projects/{project['id']}", headers=worker_headers).status_code == 200
        response = client.get(f"/api/projects/{project['id']}", headers=stranger_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "AuthorizationError"

    def test_get_missing(self, client, employer):
        _, headers = employer

        response = client.get("/api/projects/999", headers=headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"

    def test_update_whitelist(self, client, employer, worker):
        employer_user, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = client.patch(f"/api/projects/{project['id']}", headers=headers, json={
            "title": "Rewire office (phase 1)",
            "progress": 40,
            "createdBy": 999,
            "version": 99,
        })

        assert response.status_code == 200
        updated = response.json()["project"]
        assert updated["title"] == "Rewire office (phase 1)"
        assert updated["progress"] == 40
        assert updated["createdBy"] == employer_user["id"]

    def test_assignee_cannot_update(self, client, employer, worker):
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)

        response = client.patch(f"/api/projects/{project['id']}", headers=worker_headers, json={"title": "Mine"})

        assert response.status_code == 403

    def test_progress_out_of_range(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = client.patch(f"/api/projects/{project['id']}", headers=headers, json={"progress": 150})

        assert response.status_code == 400

    def test_complete_closes_engagement(self, client, employer, worker):
        """Completion completes the invite and keeps the job closed."""
        _, headers = employer
        _, worker_headers = worker
        job, invite, project = open_project(client, employer, worker)

        response = client.patch(f"/api/projects/{project['id']}", headers=headers, json={"status": "completed"})

        assert response.status_code == 200
        assert response.json()["project"]["status"] == "completed"
        assert response.json()["project"]["progress"] == 100
        invite = client.get(f"/api/invites/{invite['id']}", headers=headers).json()["invite"]
        assert invite["status"] == "completed"
        assert client.get(f"/api/jobs/{job['id']}", headers=headers).json()["job"]["isActive"] is False

        titles = [n["title"] for n in client.get("/api/notifications", headers=worker_headers).json()["notifications"]]
        assert "Project completed" in titles

    def test_archived_cannot_reopen(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)
        client.patch(f"/api/projects/{project['id']}", headers=headers, json={"status": "archived"})

        response = client.patch(f"/api/projects/{project['id']}", headers=headers, json={"status": "active"})

        assert response.status_code == 400


class TestMilestones:
    """Test cases for role-gated milestone edits."""

    def _project_with_milestone(self, client, employer, worker):
        _, headers = employer
        worker_user, _ = worker
        project = client.post("/api/projects", headers=headers, json={
            "title": "Solar install",
            "assignedTo": worker_user["id"],
            "milestones": [{"title": "Survey"}],
        }).json()["project"]
        return project, project["milestones"][0]

    def test_worker_submits(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        project, milestone = self._project_with_milestone(client, employer, worker)

        response = client.patch(
            f"/api/projects/{project['id']}/milestones/{milestone['id']}",
            headers=worker_headers, json={"status": "submitted"},
        )

        assert response.status_code == 200
        assert response.json()["milestone"]["status"] == "submitted"
        titles = [n["title"] for n in client.get("/api/notifications", headers=headers).json()["notifications"]]
        assert "Milestone submitted" in titles

    def test_worker_cannot_approve(self, client, employer, worker):
        _, worker_headers = worker
        project, milestone = self._project_with_milestone(client, employer, worker)

        response = client.patch(
            f"/api/projects/{project['id']}/milestones/{milestone['id']}",
            headers=worker_headers, json={"status": "approved"},
        )

        assert response.status_code == 403

    def test_worker_cannot_rename(self, client, employer, worker):
        _, worker_headers = worker
        project, milestone = self._project_with_milestone(client, employer, worker)

        response = client.patch(
            f"/api/projects/{project['id']}/milestones/{milestone['id']}",
            headers=worker_headers, json={"title": "Renamed"},
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Workers can only update milestone status"

    def test_creator_edits_and_approves(self, client, employer, worker):
        _, headers = employer
        project, milestone = self._project_with_milestone(client, employer, worker)

        response = client.patch(
            f"/api/projects/{project['id']}/milestones/{milestone['id']}",
            headers=headers, json={"title": "Site survey", "status": "approved"},
        )

        assert response.status_code == 200
        assert response.json()["milestone"]["title"] == "Site survey"
        assert response.json()["project"]["milestones"][0]["status"] == "approved"

    def test_unknown_milestone(self, client, employer, worker):
        _, headers = employer
        project, _ = self._project_with_milestone(client, employer, worker)

        response = client.patch(f"/api/projects/{project['id']}/milestones/999", headers=headers, json={"status": "approved"})

        assert response.status_code == 404


class TestStreams:
    """Test cases for messages, submissions and the event log."""

    def test_messages(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        base = f"/api/projects/{project['id']}/messages"

        assert client.post(base, headers=headers, json={"text": "Hello"}).status_code == 201
        assert client.post(base, headers=worker_headers, json={"text": "  Hi there  "}).status_code == 201

        body = client.get(base, headers=worker_headers, params={"page": 1, "limit": 10}).json()
        assert [m["text"] for m in body["messages"]] == ["Hello", "Hi there"]
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 2}

    def test_message_requires_text(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = client.post(f"/api/projects/{project['id']}/messages", headers=headers, json={"text": "   "})

        assert response.status_code == 400

    def test_outsider_cannot_message(self, client, employer, worker):
        _, _, project = open_project(client, employer, worker)
        _, stranger_headers = register(client, "stranger@example.com", "skilled_worker")

        response = client.post(f"/api/projects/{project['id']}/messages", headers=stranger_headers, json={"text": "Hi"})

        assert response.status_code == 403

    def test_message_notifies_counterpart(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)

        client.post(f"/api/projects/{project['id']}/messages", headers=worker_headers, json={"text": "Started today"})

        notifications = client.get("/api/notifications", headers=headers).json()["notifications"]
        assert notifications[0]["message"] == "Started today"

    def test_submissions(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        base = f"/api/projects/{project['id']}/submissions"

        response = client.post(base, headers=worker_headers, json={"url": "https://files.example.com/plan.pdf"})

        assert response.status_code == 201
        submission = response.json()["submission"]
        assert submission["filename"] == "plan.pdf"
        assert submission["uploadedAt"]

        listed = client.get(base, headers=headers).json()
        assert listed["pagination"]["total"] == 1

        assert client.delete(f"{base}/{submission['id']}", headers=headers).status_code == 204
        assert client.get(base, headers=headers).json()["submissions"] == []

    def test_submission_requires_url(self, client, employer, worker):
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)

        response = client.post(f"/api/projects/{project['id']}/submissions", headers=worker_headers, json={"note": "x"})

        assert response.status_code == 400
        assert response.json()["message"] == "url is required"

    def test_delete_missing_submission(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = client.delete(f"/api/projects/{project['id']}/submissions/999", headers=headers)

        assert response.status_code == 404


class TestQuickActions:
    """Test cases for the event-producing quick actions."""

    def test_request_payment(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)

        response = client.post(
            f"/api/projects/{project['id']}/actions/request-payment",
            headers=worker_headers, json={"amount": 150, "note": "Phase 1"},
        )

        assert response.status_code == 201
        event = response.json()["event"]
        assert event["type"] == "payment_request"
        assert event["data"]["amount"] == 150.0
        assert event["resolved"] is False

        events = client.get(f"/api/projects/{project['id']}/events", headers=headers).json()["events"]
        assert [e["id"] for e in events] == [event["id"]]

    def test_only_assignee_requests_payment(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = client.post(f"/api/projects/{project['id']}/actions/request-payment", headers=headers, json={"amount": 10})

        assert response.status_code == 403

    def test_payment_amount_must_be_positive(self, client, employer, worker):
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)

        response = client.post(
            f"/api/projects/{project['id']}/actions/request-payment", headers=worker_headers, json={"amount": 0},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "amount must be greater than 0"

    def test_extend_deadline(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = client.post(
            f"/api/projects/{project['id']}/actions/extend-deadline",
            headers=headers, json={"newDeadline": "2030-03-01T00:00:00", "reason": "Scope grew"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["project"]["deadline"].startswith("2030-03-01")
        assert body["event"]["data"]["previousDeadline"] is None
        assert body["event"]["text"] == "Scope grew"

    def test_extension_request_and_approval(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        actions = f"/api/projects/{project['id']}/actions"

        request = client.post(
            f"{actions}/request-deadline-extension",
            headers=worker_headers, json={"proposedDate": "2030-05-01T00:00:00"},
        ).json()["event"]
        unchanged = client.get(f"/api/projects/{project['id']}", headers=headers).json()["project"]
        assert unchanged["deadline"] is None

        response = client.post(f"{actions}/approve-deadline-extension/{request['id']}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["project"]["deadline"].startswith("2030-05-01")
        assert body["event"]["relatedEventId"] == request["id"]

        events = client.get(f"/api/projects/{project['id']}/events", headers=headers).json()["events"]
        original = next(e for e in events if e["id"] == request["id"])
        assert original["resolved"] is True
        assert original["data"]["approved"] is True
        assert original["data"]["proposedDate"].startswith("2030-05-01")

    def test_approval_with_override_date(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        actions = f"/api/projects/{project['id']}/actions"
        request = client.post(
            f"{actions}/request-deadline-extension",
            headers=worker_headers, json={"proposedDate": "2030-05-01T00:00:00"},
        ).json()["event"]

        response = client.post(
            f"{actions}/approve-deadline-extension/{request['id']}",
            headers=headers, json={"newDeadline": "2030-04-15T00:00:00"},
        )

        assert response.json()["project"]["deadline"].startswith("2030-04-15")

    def test_extension_approved_once(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        actions = f"/api/projects/{project['id']}/actions"
        request = client.post(
            f"{actions}/request-deadline-extension",
            headers=worker_headers, json={"proposedDate": "2030-05-01T00:00:00"},
        ).json()["event"]
        client.post(f"{actions}/approve-deadline-extension/{request['id']}", headers=headers)

        response = client.post(f"{actions}/approve-deadline-extension/{request['id']}", headers=headers)

        assert response.status_code == 409

    def test_direct_extension_cannot_be_approved(self, client, employer, worker):
        """Only worker requests are approvable; the worker hears nothing."""
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        actions = f"/api/projects/{project['id']}/actions"
        direct = client.post(
            f"{actions}/extend-deadline", headers=headers, json={"newDeadline": "2030-03-01T00:00:00"},
        ).json()["event"]
        before = client.get("/api/notifications", headers=worker_headers).json()["total"]

        response = client.post(
            f"{actions}/approve-deadline-extension/{direct['id']}",
            headers=headers, json={"newDeadline": "2030-04-15T00:00:00"},
        )

        assert response.status_code == 404
        after = client.get("/api/notifications", headers=worker_headers).json()["total"]
        assert after == before
        current = client.get(f"/api/projects/{project['id']}", headers=headers).json()["project"]
        assert current["deadline"].startswith("2030-03-01")

    def test_worker_cannot_approve_extension(self, client, employer, worker):
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        actions = f"/api/projects/{project['id']}/actions"
        request = client.post(
            f"{actions}/request-deadline-extension",
            headers=worker_headers, json={"proposedDate": "2030-05-01T00:00:00"},
        ).json()["event"]

        response = client.post(f"{actions}/approve-deadline-extension/{request['id']}", headers=worker_headers)

        assert response.status_code == 403

    def test_contact_support(self, client, employer, worker):
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)

        response = client.post(
            f"/api/projects/{project['id']}/actions/contact-support",
            headers=worker_headers, json={"text": "Employer unreachable"},
        )

        assert response.status_code == 201
        assert response.json()["event"]["type"] == "support"
        titles = [n["title"] for n in client.get("/api/notifications", headers=worker_headers).json()["notifications"]]
        assert "Support request received" in titles
