from sqlalchemy.exc import OperationalError

from app.services.daily_redeem import daily_redeem_service
from tests.helpers.seed import create_avatar, create_student, equip_avatar


def test_get_redeem_status(client, db_session):
    student = create_student(db_session, "Sam", points_total=10)
    fox = create_avatar(db_session, name="Fox", daily_free_points=20)
    equip_avatar(db_session, student, avatar=fox)

    response = client.get(f"/daily-redeem/students/{student.id}/status")

    assert response.status_code == 200
    assert response.headers.get("X-Request-ID")
    body = response.json()
    assert body["message"] == "Redeem status fetched successfully"
    data = body["data"]
    assert data["student_id"] == student.id
    assert data["avatar_name"] == "Fox"
    assert data["avatar_points"] == 20
    assert data["can_redeem"] is True
    assert data["available_points"] == data["regular_points"] + data["event_points"] + (
        data["camp_role_points"] if data["camp_role_status"] == "available" else 0
    )


def test_get_redeem_status_for_unknown_student(client):
    response = client.get("/daily-redeem/students/999/status")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["available_points"] == 0
    assert data["can_redeem"] is False
    assert data["contribution_chips"] == []


def test_batch_status(client, db_session):
    sam = create_student(db_session, "Sam")
    kim = create_student(db_session, "Kim")

    response = client.post("/daily-redeem/status-batch", json={"student_ids": [sam.id, kim.id]})

    assert response.status_code == 200
    data = response.json()["data"]
    assert set(data["statuses"]) == {str(sam.id), str(kim.id)}
    assert data["leaderboard_snapshot_date"]


def test_snapshot_endpoint_freezes_awards(client, db_session):
    sam = create_student(db_session, "Sam", points_total=100)

    first = client.get("/daily-redeem/snapshot").json()["data"]
    second = client.get("/daily-redeem/snapshot").json()["data"]

    assert first == second
    assert {"board_key": "total", "subject_id": sam.id, "rank": 1, "board_points": 50} in first["awards"]


def test_invalid_student_id_is_a_validation_error(client):
    response = client.get("/daily-redeem/students/abc/status")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_store_failure_maps_to_service_unavailable(client, monkeypatch):
    def unavailable(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(daily_redeem_service, "compute_status", unavailable)

    response = client.get("/daily-redeem/students/1/status")

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "STORE_UNAVAILABLE"
    assert error["message"] == "Redeem status unavailable, try again."
