TODAY = "2025-03-10"


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "OK"


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Not found - /api/nope"}


def test_attendance_requires_login(client):
    resp = client.post("/api/attendance/clock-in", json={"date": TODAY, "clockInTime": "09:00"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_register_cannot_create_admin(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Mallory", "email": "m@example.com", "password": "secret1", "role": "ADMIN"},
    )

    assert resp.status_code == 400


def test_login_logout_and_profile(client, intern_client):
    resp = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "wrong1"})
    assert resp.status_code == 401

    resp = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret1"})
    assert resp.status_code == 200
    assert "password" not in resp.get_json()["user"]

    resp = client.put("/api/auth/profile", json={"name": "Ada L."})
    assert resp.get_json()["user"]["name"] == "Ada L."

    client.post("/api/auth/logout")
    assert client.get("/api/auth/profile").status_code == 401


def test_clock_in_validation_errors(intern_client):
    resp = intern_client.post("/api/attendance/clock-in", json={"date": "2025/03/10", "clockInTime": "09:00"})
    assert resp.status_code == 400

    resp = intern_client.post("/api/attendance/clock-in", json={"date": TODAY, "clockInTime": "9am"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_attendance_day_flow(intern_client, clock):
    resp = intern_client.get("/api/attendance/today")
    assert resp.get_json() == {"attendance": None}

    resp = intern_client.get("/api/attendance/break-status")
    assert resp.get_json()["hasClockedIn"] is False

    resp = intern_client.post("/api/attendance/clock-in", json={"date": TODAY, "clockInTime": "09:20"})
    assert resp.status_code == 201
    attendance = resp.get_json()["attendance"]
    assert attendance["status"] == "LATE"
    assert attendance["breaks"] == []
    assert "clockOutTime" not in attendance

    resp = intern_client.post("/api/attendance/clock-in", json={"date": TODAY, "clockInTime": "09:25"})
    assert resp.status_code == 409

    assert intern_client.post("/api/attendance/end-break").status_code == 404
    clock.set("12:00")
    assert intern_client.post("/api/attendance/start-break").status_code == 200
    assert intern_client.post("/api/attendance/start-break").status_code == 409

    status = intern_client.get("/api/attendance/break-status").get_json()
    assert status["onBreak"] is True
    assert status["currentBreak"]["breakStartTime"] == "12:00"

    clock.set("12:30")
    resp = intern_client.post("/api/attendance/end-break")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["breakDuration"] == 30
    assert body["attendance"]["breaks"][0]["breakEndTime"] == "12:30"
    assert body["attendance"]["totalBreakMinutes"] == 30

    clock.set("17:20")
    resp = intern_client.post("/api/attendance/clock-out", json={"clockOutTime": "17:20"})
    assert resp.status_code == 200
    assert resp.get_json()["attendance"]["totalHours"] == 7.5

    today = intern_client.get("/api/attendance/today").get_json()["attendance"]
    assert today["date"] == TODAY
    assert today["clockOutTime"] == "17:20"

    assert intern_client.post("/api/attendance/clock-out", json={"clockOutTime": "18:00"}).status_code == 409
    assert intern_client.post("/api/attendance/start-break").status_code == 409

    history = intern_client.get("/api/attendance/history?limit=5").get_json()["attendance"]
    assert len(history) == 1
    assert intern_client.get("/api/attendance/history?limit=0").status_code == 400


def test_reports_submit_and_admin_review(intern_client, admin_client):
    payload = {
        "date": "2025-03-10",
        "taskTitle": "API docs",
        "taskDescription": "Documented the attendance endpoints.",
        "toolsUsed": ["Markdown"],
        "timeSpent": "3h",
    }
    resp = intern_client.post("/api/reports/submit", json=payload)
    assert resp.status_code == 201
    report_id = resp.get_json()["report"]["id"]

    assert intern_client.post("/api/reports/submit", json=payload).status_code == 409

    mine = intern_client.get("/api/reports/my-reports?limit=5").get_json()
    assert mine["pagination"] == {"page": 1, "limit": 5, "total": 1, "pages": 1}

    assert intern_client.get("/api/admin/reports").status_code == 403

    pending = admin_client.get("/api/admin/reports?status=pending").get_json()["reports"]
    assert [r["id"] for r in pending] == [report_id]

    resp = admin_client.put(f"/api/admin/reports/{report_id}/review", json={"status": "approved"})
    assert resp.status_code == 200
    assert resp.get_json()["report"]["status"] == "APPROVED"

    assert admin_client.put("/api/admin/reports/missing/review", json={"status": "REJECTED"}).status_code == 404


def test_admin_views_attendance(intern_client, admin_client):
    intern_client.post("/api/attendance/clock-in", json={"date": TODAY, "clockInTime": "09:00"})

    users = admin_client.get("/api/admin/users").get_json()["users"]
    intern = next(u for u in users if u["email"] == "ada@example.com")

    resp = admin_client.get(f"/api/admin/users/{intern['id']}/attendance")
    assert resp.status_code == 200
    assert resp.get_json()["attendance"][0]["status"] == "PRESENT"

    found = admin_client.get(f"/api/admin/attendance?date={TODAY}&status=PRESENT").get_json()["attendance"]
    assert [a["userId"] for a in found] == [intern["id"]]

    assert admin_client.get("/api/admin/attendance?status=SICK").status_code == 400
    assert admin_client.get("/api/admin/users/missing/attendance").status_code == 404


def test_admin_intern_details_bundles_attendance_and_reports(intern_client, admin_client):
    intern_client.post("/api/attendance/clock-in", json={"date": TODAY, "clockInTime": "09:00"})
    intern_client.post(
        "/api/reports/submit",
        json={
            "date": TODAY,
            "taskTitle": "Onboarding",
            "taskDescription": "Set up the dev environment.",
            "toolsUsed": [],
            "timeSpent": "45m",
        },
    )
    users = admin_client.get("/api/admin/users").get_json()["users"]
    intern_id = next(u["id"] for u in users if u["email"] == "ada@example.com")

    resp = admin_client.get(f"/api/admin/interns/{intern_id}/details")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["intern"]["email"] == "ada@example.com"
    assert "password" not in body["intern"]
    assert [a["date"] for a in body["attendance"]] == [TODAY]
    assert [r["taskTitle"] for r in body["reports"]] == ["Onboarding"]

    assert admin_client.get("/api/admin/interns/missing/details").status_code == 404
    assert intern_client.get(f"/api/admin/interns/{intern_id}/details").status_code == 403
