import pytest

from domain.plan import plan_crud

PLAN = {
    "planName": "Morning Flow",
    "yogaType": "Vinyasa",
    "meditationTime": 15,
    "durationWeeks": 4,
    "dailySchedule": [
        {"day": "Monday", "activity": "Sun salutations"},
        {"day": "Tuesday", "activity": "Standing poses"},
    ],
    "notes": "Keep it gentle",
}


def create_plan(client, **overrides):
    payload = dict(PLAN, **overrides)
    response = client.post("/api/plans", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["plan"]


def test_create_plan(auth, client, mailer, sms):
    user = auth.signup_and_login()

    response = client.post("/api/plans", json=PLAN)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Plan created successfully"
    plan = body["plan"]
    assert plan["planName"] == "Morning Flow"
    assert plan["userId"] == user["id"]
    assert plan["completed"] is False
    assert plan["dailySchedule"][0]["day"] == "Monday"
    assert plan["createdAt"]

    assert mailer.outbox[-1]["subject"] == "Yoga Plan Created Successfully"
    assert "Morning Flow" in mailer.outbox[-1]["text"]
    assert sms.outbox[-1]["to"] == "+919876543210"


def test_create_plan_without_phone_skips_sms(auth, client, sms):
    auth.signup_and_login(phone=None)

    create_plan(client)

    assert sms.outbox == []


def test_create_plan_requires_session(client):
    assert client.post("/api/plans", json=PLAN).status_code == 401


@pytest.mark.parametrize("overrides", [
    {"planName": "ab"},
    {"yogaType": ""},
    {"meditationTime": 0},
    {"meditationTime": 181},
    {"durationWeeks": 53},
    {"dailySchedule": "every day"},
    {"notes": "x" * 1001},
])
def test_create_plan_validation(auth, client, overrides):
    auth.signup_and_login()

    response = client.post("/api/plans", json=dict(PLAN, **overrides))

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_list_plans_newest_first_and_scoped_to_owner(auth, client):
    auth.signup_and_login(email="other@example.com", phone="+15550001111")
    create_plan(client, planName="Other Plan")
    client.post("/api/users/logout")

    auth.signup_and_login()
    first = create_plan(client, planName="First Plan")
    second = create_plan(client, planName="Second Plan")

    response = client.get("/api/plans")

    assert response.status_code == 200
    names = [plan["planName"] for plan in response.json()]
    assert names == ["Second Plan", "First Plan"]
    assert {plan["id"] for plan in response.json()} == {first["id"], second["id"]}


def test_mark_plan_completed(auth, client, mailer):
    auth.signup_and_login()
    plan = create_plan(client)

    response = client.patch(f"/api/plans/{plan['id']}/complete")

    assert response.status_code == 200
    assert response.json()["message"] == "Plan marked as completed"
    assert response.json()["plan"]["completed"] is True
    assert mailer.outbox[-1]["subject"] == "Yoga Plan Completed"


def test_delete_plan(auth, client, db):
    auth.signup_and_login()
    plan = create_plan(client)

    response = client.delete(f"/api/plans/{plan['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Plan deleted successfully"
    assert plan_crud.get_plan_by_id(db, plan["id"]) is None


def test_missing_plan_returns_404(auth, client):
    auth.signup_and_login()

    assert client.delete("/api/plans/999").status_code == 404
    assert client.patch("/api/plans/999/complete").status_code == 404


def test_other_owner_cannot_delete_or_complete(auth, client, db):
    auth.signup_and_login(email="owner@example.com", phone="+15550001111")
    plan = create_plan(client)
    client.post("/api/users/logout")

    auth.signup_and_login()

    delete = client.delete(f"/api/plans/{plan['id']}")
    complete = client.patch(f"/api/plans/{plan['id']}/complete")

    assert delete.status_code == 403
    assert complete.status_code == 403
    assert "your own plans" in delete.json()["message"]

    stored = plan_crud.get_plan_by_id(db, plan["id"])
    assert stored is not None
    assert stored.completed is False


def test_plan_stats(auth, client):
    auth.signup_and_login()

    empty = client.get("/api/plans/stats")
    assert empty.status_code == 200
    assert empty.json() == {"totalPlans": 0, "completedPlans": 0, "pendingPlans": 0, "completionRate": 0}

    plans = [create_plan(client, planName=f"Plan {i}") for i in range(3)]
    client.patch(f"/api/plans/{plans[0]['id']}/complete")

    stats = client.get("/api/plans/stats").json()
    assert stats["totalPlans"] == 3
    assert stats["completedPlans"] == 1
    assert stats["pendingPlans"] == 2
    assert stats["completionRate"] == 33.33


def test_plan_notification_failure_does_not_fail_request(auth, client, mailer):
    auth.signup_and_login()
    mailer.fail = True

    response = client.post("/api/plans", json=PLAN)

    assert response.status_code == 201
