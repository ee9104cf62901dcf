"""
Integration tests for API endpoints.
"""
import io


class TestHealthEndpoints:
    """Test cases for health check endpoints"""

    def test_root_endpoint(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "Gateway API"
        assert data["status"] == "running"
        assert data["environment"] == "Development"

    def test_versioned_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.headers["api-supported-versions"] == "1.0"

    def test_unversioned_health_uses_default_version(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.headers["api-supported-versions"] == "1.0"


class TestVersioning:
    """Test cases for API version negotiation"""

    def test_explicit_supported_version(self, client):
        response = client.get("/api/health", params={"api-version": "1.0"})
        assert response.status_code == 200

    def test_unsupported_version_query(self, client):
        response = client.get("/api/health", params={"api-version": "2.0"})

        assert response.status_code == 400
        assert response.json()["error"] == "unsupported_api_version"

    def test_unsupported_version_header(self, client):
        response = client.get("/api/health", headers={"api-version": "3"})
        assert response.status_code == 400

    def test_unsupported_version_segment(self, client):
        response = client.get("/api/v2/health")

        assert response.status_code == 400
        assert "1.0" in response.json()["message"]

    def test_non_api_paths_not_versioned(self, client):
        response = client.get("/")
        assert "api-supported-versions" not in response.headers


class TestAuthEndpoints:
    """Test cases for authentication endpoints"""

    def test_login_with_valid_credentials(self, client, user_repo, regular_user, test_settings):
        response = client.post("/api/v1/auth/token", json={
            "username": "alice",
            "password": "correct-horse-battery"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert test_settings.jwt.cookie_name in response.cookies
        assert user_repo.logins == [regular_user.id]

    def test_login_with_wrong_password(self, client):
        response = client.post("/api/v1/auth/token", json={
            "username": "alice",
            "password": "not-the-password"
        })

        assert response.status_code == 401
        data = response.json()
        assert data["error"] == "unauthorized"
        assert data["message"] == "Invalid username or password"

    def test_login_token_is_usable(self, client):
        token = client.post("/api/v1/auth/token", json={
            "username": "admin",
            "password": "correct-horse-battery"
        }).json()["access_token"]

        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["user_name"] == "admin"

    def test_me_returns_claims(self, client, user_headers, regular_user):
        response = client.get("/api/v1/auth/me", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["authenticated"] is True
        assert data["user_id"] == regular_user.id
        assert data["full_name"] == "Alice"
        assert data["role"] == "User"
        assert data["scopes"] == ["authenticated", "User"]

    def test_me_without_credentials(self, client):
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_me_with_invalid_token(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_logout_clears_cookie(self, client):
        response = client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert "access_token=" in response.headers["set-cookie"]


class TestUserEndpoints:
    """Test cases for user management endpoints"""

    def test_admin_creates_user(self, client, admin_headers, user_repo):
        response = client.post("/api/v1/users", headers=admin_headers, json={
            "username": "carol",
            "password": "a-long-password",
            "full_name": "Carol C",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "carol"
        assert data["role"] == "User"
        assert "password_hash" not in data
        assert len(user_repo.users) == 3

    def test_duplicate_username(self, client, admin_headers):
        response = client.post("/api/v1/users", headers=admin_headers, json={
            "username": "alice",
            "password": "a-long-password",
        })

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_unknown_role(self, client, admin_headers):
        response = client.post("/api/v1/users", headers=admin_headers, json={
            "username": "dave",
            "password": "a-long-password",
            "role": "Superuser",
        })
        assert response.status_code == 400

    def test_regular_user_cannot_create(self, client, user_headers):
        response = client.post("/api/v1/users", headers=user_headers, json={
            "username": "eve",
            "password": "a-long-password",
        })
        assert response.status_code == 403

    def test_user_reads_own_profile(self, client, user_headers, regular_user):
        response = client.get(f"/api/v1/users/{regular_user.id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    def test_user_cannot_read_others(self, client, user_headers, admin_user):
        response = client.get(f"/api/v1/users/{admin_user.id}", headers=user_headers)
        assert response.status_code == 403

    def test_admin_reads_missing_user(self, client, admin_headers):
        response = client.get("/api/v1/users/does-not-exist", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_admin_deactivates_user(self, client, admin_headers, regular_user):
        response = client.delete(f"/api/v1/users/{regular_user.id}", headers=admin_headers)

        assert response.status_code == 204
        assert regular_user.is_active is False

        listing = client.get("/api/v1/users", headers=admin_headers).json()
        assert [u["username"] for u in listing] == ["admin"]


class TestFileEndpoints:
    """Test cases for the file upload API"""

    def test_upload_and_list(self, client, user_headers, test_settings):
        response = client.post(
            "/api/v1/files",
            headers=user_headers,
            files={"file": ("report 2024.txt", io.BytesIO(b"quarterly"), "text/plain")},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "report_2024.txt"
        assert data["size"] == 9
        assert data["url"] == "/files/report_2024.txt"
        assert (test_settings.files_root / "report_2024.txt").read_bytes() == b"quarterly"

        listing = client.get("/api/v1/files", headers=user_headers).json()
        assert listing["total"] == 1
        assert listing["files"][0]["name"] == "report_2024.txt"

    def test_upload_requires_authentication(self, client):
        response = client.post(
            "/api/v1/files",
            files={"file": ("a.txt", io.BytesIO(b"x"), "text/plain")},
        )
        assert response.status_code == 401

    def test_upload_name_clash_gets_unique_name(self, client, user_headers):
        for _ in range(2):
            response = client.post(
                "/api/v1/files",
                headers=user_headers,
                files={"file": ("same.txt", io.BytesIO(b"x"), "text/plain")},
            )
            assert response.status_code == 201

        names = [f["name"] for f in client.get("/api/v1/files", headers=user_headers).json()["files"]]
        assert len(names) == 2
        assert "same.txt" in names

    def test_delete_requires_admin(self, client, user_headers, admin_headers, test_settings):
        (test_settings.files_root / "old.txt").write_text("x")

        assert client.delete("/api/v1/files/old.txt", headers=user_headers).status_code == 403
        assert client.delete("/api/v1/files/old.txt", headers=admin_headers).status_code == 204
        assert not (test_settings.files_root / "old.txt").exists()

    def test_delete_missing_file(self, client, admin_headers):
        response = client.delete("/api/v1/files/missing.txt", headers=admin_headers)
        assert response.status_code == 404
