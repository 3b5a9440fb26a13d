"""
API tests for wallets, worker payouts and withdrawals.
"""

import pytest

from conftest import register, open_project


def deposit(client, headers, amount):
    response = client.post("/api/employers/wallet/deposit", headers=headers, json={"amount": amount})
    assert response.status_code == 201, response.text
    return response.json()["deposit"]


def pay(client, headers, project_id, amount, event_id=None):
    payload = {"amount": amount}
    if event_id is not None:
        payload["eventId"] = event_id
    return client.post(f"/api/employers/projects/{project_id}/payments", headers=headers, json=payload)


class TestDeposits:
    """Test cases for employer wallet top-ups."""

    def test_deposit_credits_wallet(self, client, employer):
        employer_user, headers = employer

        record = deposit(client, headers, 1000)

        assert record["type"] == "deposit"
        assert record["status"] == "completed"
        assert record["employerId"] == employer_user["id"]
        overview = client.get("/api/employers/payments/overview", headers=headers).json()
        assert overview == {"accountBalance": 1000.0, "totalSpent": 0.0, "pendingPayments": 0.0}

    @pytest.mark.parametrize("amount", [0, -5, None])
    def test_deposit_requires_positive_amount(self, client, employer, amount):
        _, headers = employer

        response = client.post("/api/employers/wallet/deposit", headers=headers, json={"amount": amount})

        assert response.status_code == 400

    def test_workers_cannot_deposit(self, client, worker):
        _, headers = worker

        response = client.post("/api/employers/wallet/deposit", headers=headers, json={"amount": 10})

        assert response.status_code == 403


class TestPayWorker:
    """Test cases for employer payouts."""

    def test_payment_moves_balances(self, client, employer, worker):
        employer_user, headers = employer
        worker_user, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, 1000)

        response = pay(client, headers, project["id"], 400)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Payment sent to worker"
        assert body["payment"]["type"] == "earning"
        assert body["payment"]["workerId"] == worker_user["id"]
        assert body["payment"]["projectId"] == project["id"]

        employer_overview = client.get("/api/employers/payments/overview", headers=headers).json()
        assert employer_overview["accountBalance"] == 600.0
        assert employer_overview["totalSpent"] == 400.0

        worker_overview = client.get("/api/workers/payments/overview", headers=worker_headers).json()
        assert worker_overview == {
            "availableBalance": 400.0,
            "totalEarnings": 400.0,
            "pendingWithdrawals": 0.0,
            "totalWithdrawn": 0.0,
        }

    def test_insufficient_balance(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, 100)

        response = pay(client, headers, project["id"], 400)

        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient employer balance"
        overview = client.get("/api/employers/payments/overview", headers=headers).json()
        assert overview["accountBalance"] == 100.0
        assert client.get("/api/workers/payments/overview", headers=worker_headers).json()["availableBalance"] == 0.0

    def test_only_creator_pays(self, client, employer, worker):
        _, _, project = open_project(client, employer, worker)
        _, other_headers = register(client, "other@example.com", "employer")
        deposit(client, other_headers, 1000)

        response = pay(client, other_headers, project["id"], 50)

        assert response.status_code == 403
        assert response.json()["message"] == "Only project creator can pay"

    def test_amount_required(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)

        response = pay(client, headers, project["id"], 0)

        assert response.status_code == 400

    def test_unassigned_project(self, client, employer):
        _, headers = employer
        project = client.post("/api/projects", headers=headers, json={"title": "Solo"}).json()["project"]
        deposit(client, headers, 100)

        response = pay(client, headers, project["id"], 10)

        assert response.status_code == 400
        assert response.json()["message"] == "No worker assigned"

    def test_missing_project(self, client, employer):
        _, headers = employer

        assert pay(client, headers, 999, 10).status_code == 404

    def test_paying_a_request_resolves_it(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, 1000)
        request = client.post(
            f"/api/projects/{project['id']}/actions/request-payment",
            headers=worker_headers, json={"amount": 250},
        ).json()["event"]
        assert client.get("/api/employers/payments/overview", headers=headers).json()["pendingPayments"] == 250.0

        payment = pay(client, headers, project["id"], 250, event_id=request["id"]).json()["payment"]

        events = client.get(f"/api/projects/{project['id']}/events", headers=headers).json()["events"]
        resolved = next(e for e in events if e["id"] == request["id"])
        assert resolved["resolved"] is True
        assert resolved["data"]["paid"] is True
        assert resolved["data"]["paymentId"] == payment["id"]
        assert resolved["data"]["amount"] == 250.0
        assert client.get("/api/employers/payments/overview", headers=headers).json()["pendingPayments"] == 0.0

    def test_request_paid_once(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, 1000)
        request = client.post(
            f"/api/projects/{project['id']}/actions/request-payment",
            headers=worker_headers, json={"amount": 100},
        ).json()["event"]
        pay(client, headers, project["id"], 100, event_id=request["id"])

        response = pay(client, headers, project["id"], 100, event_id=request["id"])

        assert response.status_code == 409
        overview = client.get("/api/employers/payments/overview", headers=headers).json()
        assert overview["accountBalance"] == 900.0

    def test_payment_notifies_worker(self, client, employer, worker):
        _, headers = employer
        _, worker_headers = worker
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, 1000)

        pay(client, headers, project["id"], 100)

        titles = [n["title"] for n in client.get("/api/notifications", headers=worker_headers).json()["notifications"]]
        assert titles[0] == "Payment received"

    def test_employer_history(self, client, employer, worker):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, 1000)
        pay(client, headers, project["id"], 100)
        pay(client, headers, project["id"], 200)

        body = client.get("/api/employers/payments/history", headers=headers).json()

        assert [row["amount"] for row in body["history"]] == [200.0, 100.0]
        assert body["history"][0]["worker"] == "Tunde Bello"
        assert body["history"][0]["project"] == "Rewire office"
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 2}


class TestWithdrawals:
    """Test cases for worker withdrawals."""

    def _fund_worker(self, client, employer, worker, amount):
        _, headers = employer
        _, _, project = open_project(client, employer, worker)
        deposit(client, headers, amount)
        assert pay(client, headers, project["id"], amount).status_code == 201

    def test_withdrawal_is_pending_and_debits(self, client, employer, worker):
        _, worker_headers = worker
        self._fund_worker(client, employer, worker, 300)

        response = client.post("/api/workers/payments/withdrawals", headers=worker_headers, json={
            "amount": 120, "note": "Bank transfer",
        })

        assert response.status_code == 201
        withdrawal = response.json()["withdrawal"]
        assert withdrawal["type"] == "withdrawal"
        assert withdrawal["status"] == "pending"
        assert withdrawal["note"] == "Bank transfer"
        overview = client.get("/api/workers/payments/overview", headers=worker_headers).json()
        assert overview["availableBalance"] == 180.0
        assert overview["pendingWithdrawals"] == 120.0
        assert overview["totalEarnings"] == 300.0

    def test_insufficient_balance(self, client, worker):
        _, worker_headers = worker

        response = client.post("/api/workers/payments/withdrawals", headers=worker_headers, json={"amount": 10})

        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient balance"

    def test_employers_cannot_withdraw(self, client, employer):
        _, headers = employer

        response = client.post("/api/workers/payments/withdrawals", headers=headers, json={"amount": 10})

        assert response.status_code == 403

    def test_worker_history(self, client, employer, worker):
        _, worker_headers = worker
        self._fund_worker(client, employer, worker, 300)
        client.post("/api/workers/payments/withdrawals", headers=worker_headers, json={"amount": 50})

        history = client.get("/api/workers/payments/history", headers=worker_headers).json()["history"]

        assert [row["type"] for row in history] == ["withdrawal", "earning"]
        assert history[1]["employer"] == "Okafor Builds"
