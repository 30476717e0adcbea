# =============================================================================
# tests/test_api.py - HTTP Contract Tests
# =============================================================================
# Drives the FastAPI app through TestClient with services wired to the
# in-memory fakes (see conftest.py).
# =============================================================================

from fastapi.testclient import TestClient


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _signup(client, email="a@x.com", password="p") -> str:
    response = client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201
    return response.json()["token"]


def _create(client, headers, name="buy milk", due="2025-01-01", **extra) -> dict:
    response = client.post("/tasks", json={"taskName": name, "dueDate": due, **extra}, headers=headers)
    assert response.status_code == 201
    return response.json()["task"]


# =============================================================================
# End-to-end Scenario
# =============================================================================

class TestScenario:
    def test_signup_create_list(self, client):
        token = _signup(client)

        created = client.post(
            "/tasks",
            json={"taskName": "buy milk", "dueDate": "2025-01-01"},
            headers=_bearer(token),
        )
        assert created.status_code == 201
        task = created.json()["task"]
        assert task["id"]
        assert task["description"] == ""

        first = client.get("/tasks", headers=_bearer(token))
        assert first.status_code == 200
        assert first.json()["cached"] is False
        assert [t["id"] for t in first.json()["tasks"]] == [task["id"]]

        second = client.get("/tasks", headers=_bearer(token))
        assert second.json()["cached"] is True
        assert second.json()["tasks"] == first.json()["tasks"]
        assert "from cache" in second.json()["message"]


# =============================================================================
# Auth Endpoints
# =============================================================================

class TestAuthEndpoints:
    def test_signup_response_shape(self, client):
        response = client.post("/auth/signup", json={"email": "a@x.com", "password": "p"})

        body = response.json()
        assert body["message"] == "User registered successfully"
        assert set(body["user"]) == {"id", "email", "createdAt"}

    def test_login_yields_valid_token(self, client):
        _signup(client)

        response = client.post("/auth/login", json={"email": "a@x.com", "password": "p"})

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        verify = client.get("/auth/verify", headers=_bearer(response.json()["token"]))
        assert verify.status_code == 200
        assert verify.json()["email"] == "a@x.com"
        assert verify.json()["userId"] == response.json()["user"]["id"]

    def test_signup_missing_field(self, client):
        response = client.post("/auth/signup", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    def test_signup_duplicate(self, client):
        _signup(client)

        response = client.post("/auth/signup", json={"email": "a@x.com", "password": "q"})

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_RESOURCE"

    def test_login_wrong_password(self, client):
        _signup(client)

        response = client.post("/auth/login", json={"email": "a@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_login_missing_body(self, client):
        response = client.post("/auth/login")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


# =============================================================================
# Bearer Credential Enforcement
# =============================================================================

class TestCredentialEnforcement:
    def test_missing_token(self, client):
        response = client.get("/tasks")

        assert response.status_code == 401
        assert response.json()["message"] == "Access token required"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_wrong_scheme_counts_as_missing(self, client, owner_token):
        response = client.get("/tasks", headers={"Authorization": f"Token {owner_token}"})

        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/tasks", headers=_bearer("garbage"))

        assert response.status_code == 403
        assert response.json()["code"] == "INVALID_CREDENTIAL"

    def test_every_task_route_is_protected(self, client):
        routes = [
            ("post", "/tasks"),
            ("get", "/tasks"),
            ("get", "/tasks/550e8400-e29b-41d4-a716-446655440000"),
            ("post", "/tasks/update"),
            ("post", "/tasks/delete"),
            ("post", "/clear-cache"),
        ]
        for method, path in routes:
            assert getattr(client, method)(path).status_code == 401, path


# =============================================================================
# Task Endpoints
# =============================================================================

class TestTaskEndpoints:
    def test_create_missing_fields(self, client, auth_headers):
        response = client.post("/tasks", json={"description": "x"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Task name and due date are required"

    def test_create_bad_date(self, client, auth_headers):
        response = client.post("/tasks", json={"taskName": "x", "dueDate": "someday"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_create_with_timestamp_due_date(self, client, auth_headers):
        task = _create(client, auth_headers, due="2025-01-01T10:30:00.000Z")

        assert task["dueDate"] == "2025-01-01"

    def test_update_with_timestamp_due_date(self, client, auth_headers):
        task = _create(client, auth_headers)

        response = client.post(
            "/tasks/update",
            json={"id": task["id"], "dueDate": "2025-03-04T18:00:00.000Z"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["task"]["dueDate"] == "2025-03-04"

    def test_get_one_cached_on_repeat(self, client, auth_headers):
        task = _create(client, auth_headers)

        first = client.get(f"/tasks/{task['id']}", headers=auth_headers)
        second = client.get(f"/tasks/{task['id']}", headers=auth_headers)

        assert first.status_code == 200
        assert (first.json()["cached"], second.json()["cached"]) == (False, True)
        assert second.json()["task"] == task

    def test_get_other_owners_task(self, client, auth_headers):
        task = _create(client, auth_headers)
        stranger = _signup(client, email="b@x.com")

        response = client.get(f"/tasks/{task['id']}", headers=_bearer(stranger))

        assert response.status_code == 404
        assert response.json()["message"] == "Task not found"

    def test_get_malformed_id(self, client, auth_headers):
        assert client.get("/tasks/not-a-uuid", headers=auth_headers).status_code == 404

    def test_update_description_only(self, client, auth_headers):
        task = _create(client, auth_headers, description="old")

        response = client.post(
            "/tasks/update",
            json={"id": task["id"], "description": "new"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        updated = response.json()["task"]
        assert updated["description"] == "new"
        assert updated["taskName"] == task["taskName"]
        assert updated["dueDate"] == task["dueDate"]

    def test_update_trailing_slash(self, client, auth_headers):
        task = _create(client, auth_headers)

        response = client.post(
            "/tasks/update/",
            json={"id": task["id"], "taskName": "renamed"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["task"]["taskName"] == "renamed"

    def test_update_missing_id(self, client, auth_headers):
        response = client.post("/tasks/update", json={"description": "x"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Task ID is required"

    def test_update_other_owners_task(self, client, auth_headers):
        task = _create(client, auth_headers)
        stranger = _signup(client, email="b@x.com")

        response = client.post(
            "/tasks/update",
            json={"id": task["id"], "taskName": "hijacked"},
            headers=_bearer(stranger),
        )

        assert response.status_code == 404
        mine = client.get(f"/tasks/{task['id']}", headers=auth_headers).json()["task"]
        assert mine["taskName"] == "buy milk"

    def test_update_refreshes_list(self, client, auth_headers):
        task = _create(client, auth_headers)
        client.get("/tasks", headers=auth_headers)

        client.post("/tasks/update", json={"id": task["id"], "taskName": "buy bread"}, headers=auth_headers)

        listing = client.get("/tasks", headers=auth_headers).json()
        assert listing["cached"] is False
        assert listing["tasks"][0]["taskName"] == "buy bread"

    def test_delete(self, client, auth_headers):
        task = _create(client, auth_headers)

        response = client.post("/tasks/delete", json={"id": task["id"]}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["task"]["id"] == task["id"]
        assert client.get(f"/tasks/{task['id']}", headers=auth_headers).status_code == 404

    def test_delete_unknown_is_404(self, client, auth_headers):
        response = client.post(
            "/tasks/delete",
            json={"id": "00000000-0000-0000-0000-000000000000"},
            headers=auth_headers,
        )

        assert response.status_code == 404

    def test_delete_non_canonical_id_is_404(self, client, auth_headers):
        task = _create(client, auth_headers)

        response = client.post(
            "/tasks/delete",
            json={"id": f"urn:uuid:{task['id']}"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "TASK_NOT_FOUND"
        assert client.get(f"/tasks/{task['id']}", headers=auth_headers).status_code == 200

    def test_delete_missing_id(self, client, auth_headers):
        response = client.post("/tasks/delete", json={}, headers=auth_headers)

        assert response.status_code == 400

    def test_clear_cache(self, client, auth_headers, fake_redis):
        _create(client, auth_headers)
        client.get("/tasks", headers=auth_headers)

        response = client.post("/clear-cache", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Cache cleared successfully for user"
        assert fake_redis.data == {}


# =============================================================================
# Failure Handling
# =============================================================================

class TestFailureHandling:
    def test_cache_outage_is_invisible(self, client, auth_headers, fake_redis):
        fake_redis.fail = True

        task = _create(client, auth_headers)
        listing = client.get("/tasks", headers=auth_headers)
        one = client.get(f"/tasks/{task['id']}", headers=auth_headers)
        cleared = client.post("/clear-cache", headers=auth_headers)

        assert (listing.status_code, one.status_code, cleared.status_code) == (200, 200, 200)
        assert listing.json()["cached"] is False

    def test_store_failure_is_generic_500(self, client, auth_headers, task_store):
        task_store.fail = True

        response = client.get("/tasks", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error", "code": "INTERNAL_ERROR"}

    def test_unexpected_error_is_generic_500(self, app, auth_headers, task_service, monkeypatch):
        async def explode(owner_id):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(task_service, "list_tasks", explode)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/tasks", headers=auth_headers)

        assert response.status_code == 500
        assert "secret" not in response.text
        assert response.json()["message"] == "Internal server error"

    def test_unknown_route(self, client):
        response = client.get("/no-such-route")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found", "code": "NOT_FOUND"}

    def test_wrong_method(self, client):
        response = client.get("/auth/login")

        assert response.status_code == 405
        assert response.json() == {"message": "Method Not Allowed", "code": "METHOD_NOT_ALLOWED"}
        assert "POST" in response.headers["allow"]


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        response = client.get("/health/ready")

        assert response.json()["status"] == "ready"

    def test_ready_degraded_without_cache(self, client, fake_redis):
        fake_redis.fail = True

        body = client.get("/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"] == {"database": "healthy", "cache": "unhealthy"}

    def test_live(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"
