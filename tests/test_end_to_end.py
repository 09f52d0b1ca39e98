"""
Whole flows through the HTTP API, starting from an empty database.
"""

API = "/api/v1"


def _register_and_login(client, email: str, password: str) -> dict:
    registered = client.post(
        f"{API}/auth/register",
        json={"firstName": "Alex", "lastName": "Student", "email": email, "password": password},
    )
    assert registered.status_code == 201

    login = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200
    return {"Authorization": f"Bearer {login.json()['data']['token']}"}


def test_new_student_cannot_use_admin_routes(client):
    headers = _register_and_login(client, "a@example.com", "secret1")

    response = client.get(f"{API}/admin/courses", headers=headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "Access denied. admin role required",
    }


def test_course_created_by_admin_counts_enrollments(client, admin_headers):
    created = client.post(
        f"{API}/admin/courses",
        json={"title": "SQL 101", "price": 0, "durationHours": 5},
        headers=admin_headers,
    )
    assert created.status_code == 201
    course_id = created.json()["data"]["id"]

    catalog = client.get(f"{API}/courses").json()["data"]
    listed = [c for c in catalog if c["id"] == course_id]
    assert listed and listed[0]["title"] == "SQL 101"
    assert listed[0]["enrollmentCount"] == 0

    student_headers = _register_and_login(client, "sql.student@example.com", "secret1")
    enrolled = client.post(
        f"{API}/enrollments/courses/{course_id}/enroll", headers=student_headers
    )
    assert enrolled.status_code == 201

    count = client.get(
        f"{API}/admin/courses/{course_id}/enrollment-count", headers=admin_headers
    )
    assert count.status_code == 200
    assert count.json()["data"] == {"courseId": course_id, "enrollmentCount": 1}

    mine = client.get(f"{API}/enrollments/enrollments", headers=student_headers).json()
    assert [e["course"]["title"] for e in mine["data"]] == ["SQL 101"]


def test_deactivated_course_keeps_its_history(client, admin_headers):
    course_id = client.post(
        f"{API}/admin/courses",
        json={"title": "Legacy Course", "price": 10},
        headers=admin_headers,
    ).json()["data"]["id"]
    student_headers = _register_and_login(client, "history@example.com", "secret1")
    client.post(f"{API}/enrollments/courses/{course_id}/enroll", headers=student_headers)

    deleted = client.delete(f"{API}/admin/courses/{course_id}", headers=admin_headers)

    assert deleted.json()["message"] == "Course deactivated due to existing enrollments"
    assert client.get(f"{API}/courses/{course_id}").status_code == 404
    users = client.get(f"{API}/admin/courses/{course_id}/users", headers=admin_headers).json()
    assert users["total"] == 1
    assert users["data"][0]["email"] == "history@example.com"


def test_service_index_and_health(client):
    root = client.get("/")
    index = client.get(API)
    health = client.get(f"{API}/health")

    assert root.json() == {"message": "Learnify Server is running!"}
    assert index.json()["endpoints"]["courses"] == f"{API}/courses"
    assert health.status_code == 200
    assert health.json()["status"] == "OK"
    assert health.json()["database"] == "Connected"
