from __future__ import annotations

import pytest

ADMIN = {"email": "admin@company.com", "password": "admin123"}


def login(client, email: str, password: str):
    return client.post("/login", json={"email": email, "password": password})


@pytest.fixture
def admin_client(client):
    assert login(client, **ADMIN).status_code == 200
    return client


@pytest.fixture
def employee_id(admin_client) -> int:
    resp = admin_client.post(
        "/admin/employees",
        json={
            "name": "Manoj",
            "email": "manoj@company.com",
            "password": "pass123",
            "designation": "Android Developer",
            "department": "Engineering",
            "joining_date": "2025-06-01",
        },
    )
    assert resp.status_code == 201
    return resp.get_json()["user_id"]


def test_admin_login_routes_to_dashboard(client):
    resp = login(client, **ADMIN)

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["route"] == "admin_dashboard"
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]


def test_wrong_password_is_rejected(client):
    resp = login(client, "admin@company.com", "nope")

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid email or password"
    assert client.get("/session").get_json()["user"] is None


def test_logout_returns_to_login(admin_client):
    assert admin_client.post("/logout").get_json()["route"] == "login"
    assert admin_client.post("/logout").status_code == 200
    assert admin_client.get("/admin/dashboard").status_code == 401


def test_guards(client, employee_id):
    client.post("/logout")
    assert client.get("/me/home").status_code == 401

    login(client, "manoj@company.com", "pass123")
    assert client.get("/admin/dashboard").status_code == 403
    assert client.get("/me/home").status_code == 200


def test_admin_dashboard_empty_feed_message(admin_client):
    body = admin_client.get("/admin/dashboard").get_json()

    assert body["employee_count"] == 0
    assert body["recent_activity"] == []
    assert body["empty_message"] == "No recent activities"


def test_validation_errors_are_400(admin_client):
    resp = admin_client.post("/admin/employees", json={"name": "", "email": "x@company.com", "password": "pass123"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_task_flow(admin_client, employee_id):
    resp = admin_client.post(
        "/admin/tasks",
        json={"employee_id": employee_id, "title": "Login screen", "priority": "High", "assigned_date": "2026-01-01"},
    )
    task_id = resp.get_json()["task_id"]

    high = admin_client.get("/admin/tasks", query_string={"filter": "High Priority"}).get_json()
    assert [t["task_id"] for t in high["tasks"]] == [task_id]
    assert admin_client.get("/admin/tasks?filter=Done").get_json()["empty_message"] == "No Tasks Found"
    assert admin_client.get("/admin/tasks?filter=Someday").status_code == 400

    admin_client.post("/logout")
    login(admin_client, "manoj@company.com", "pass123")
    assert admin_client.patch(f"/tasks/{task_id}/status", json={"status": "Done"}).status_code == 200

    mine = admin_client.get("/me/tasks").get_json()
    assert mine["counters"]["completion_percentage"] == 100


def test_employee_cannot_update_someone_elses_task(admin_client, employee_id):
    other = admin_client.post(
        "/admin/employees", json={"name": "Krish", "email": "krish@company.com", "password": "pass123"}
    ).get_json()["user_id"]
    task_id = admin_client.post("/admin/tasks", json={"employee_id": other, "title": "Theirs"}).get_json()["task_id"]

    admin_client.post("/logout")
    login(admin_client, "manoj@company.com", "pass123")

    assert admin_client.patch(f"/tasks/{task_id}/status", json={"status": "Done"}).status_code == 403
    assert admin_client.patch("/tasks/999/status", json={"status": "Done"}).status_code == 404


def test_review_and_attendance(admin_client, employee_id):
    scores = {"quality": 5, "communication": 4.5, "innovation": 4.5, "timeliness": 5, "attendance": 4.5}
    assert admin_client.post("/admin/reviews", json={"employee_id": employee_id, **scores}).status_code == 201
    bad = admin_client.post("/admin/reviews", json={"employee_id": employee_id, **scores, "quality": 7})
    assert bad.status_code == 400

    att = admin_client.post("/admin/attendance", json={"employee_id": "all", "date": "2026-02-01"})
    assert att.status_code == 201
    assert len(att.get_json()["attendance_ids"]) == 1
    assert admin_client.post("/admin/attendance", json={"employee_id": employee_id, "policy": "merge"}).status_code == 400

    detail = admin_client.get(f"/admin/employees/{employee_id}").get_json()
    assert detail["average_rating"] == 4.7
    assert detail["attendance_summary"]["Present"] == 1

    admin_client.post("/logout")
    login(admin_client, "manoj@company.com", "pass123")
    mine = admin_client.get("/me/reviews").get_json()
    assert mine["latest_label"] == "Excellent"
    assert len(admin_client.get("/me/attendance").get_json()["attendance"]) == 1


def test_admin_cannot_delete_admin(admin_client, app_container):
    admin_id = app_container.session.current_user.user_id

    assert admin_client.delete(f"/admin/employees/{admin_id}").status_code == 400


def test_messages_flow(admin_client, employee_id, app_container):
    admin_id = app_container.session.current_user.user_id
    assert admin_client.post(f"/messages/{employee_id}", json={"message": "Hi Manoj"}).status_code == 201
    assert admin_client.post(f"/messages/{employee_id}", json={"message": "   "}).status_code == 400

    admin_client.post("/logout")
    login(admin_client, "manoj@company.com", "pass123")
    assert admin_client.get("/messages/unread").get_json()["unread_count"] == 1

    convo = admin_client.get(f"/messages/{admin_id}").get_json()
    assert convo["other_user"]["name"] == "Admin User"
    assert [m["message"] for m in convo["messages"]] == ["Hi Manoj"]
    assert admin_client.get("/messages/unread").get_json()["unread_count"] == 0


def test_conversation_with_deleted_user_shows_unknown(admin_client):
    body = admin_client.get("/messages/4242").get_json()

    assert body["other_user"]["name"] == "Unknown User"
    assert body["empty_message"] == "No messages yet"


@pytest.mark.parametrize(
    "path,payload",
    [
        ("/admin/tasks", {"employee_id": "abc", "title": "Odd"}),
        ("/admin/reviews", {"employee_id": "abc", "quality": 4}),
        ("/admin/attendance", {"employee_id": "abc"}),
        ("/admin/attendance", {}),
    ],
)
def test_non_numeric_employee_id_is_400(admin_client, path, payload):
    resp = admin_client.post(path, json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_reassigning_task_to_bad_id_is_400(admin_client, employee_id):
    task_id = admin_client.post("/admin/tasks", json={"employee_id": employee_id, "title": "Mine"}).get_json()["task_id"]

    resp = admin_client.put(f"/admin/tasks/{task_id}", json={"employee_id": "xyz"})

    assert resp.status_code == 400


def test_padded_email_cannot_log_in(client):
    assert login(client, "  admin@company.com  ", "admin123").status_code == 401
