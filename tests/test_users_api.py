"""Tests for the user management endpoints"""

from uuid import uuid4

STRONG = "Analyt1cal!"


class TestRegistration:
    def test_register_user(self, client, registration_payload):
        response = client.post("/api/users", json=registration_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["user"]["email"] == "ada@example.com"
        assert "password" not in data["user"]
        assert "password_hash" not in data["user"]

    def test_email_is_normalized(self, client, registration_payload):
        registration_payload["email"] = "Ada@Example.COM"

        response = client.post("/api/users", json=registration_payload)

        assert response.json()["user"]["email"] == "ada@example.com"

    def test_weak_password_returns_every_violation(self, client, registration_payload):
        registration_payload["password"] = "abcdefgh"
        registration_payload["password_confirmation"] = "abcdefgh"

        response = client.post("/api/users", json=registration_payload)

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "TRS-400"
        assert data["message"] == "Password validation failed"
        assert data["details"]["errors"] == [
            "Password must contain at least one uppercase letter",
            "Password must contain at least one number",
            "Password must contain at least one special character",
        ]

    def test_mismatched_confirmation(self, client, registration_payload):
        registration_payload["password_confirmation"] = "Analyt1cal?"

        response = client.post("/api/users", json=registration_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Passwords do not match"

    def test_duplicate_email(self, client, registration_payload, registered_user):
        response = client.post("/api/users", json=registration_payload)

        assert response.status_code == 409
        assert response.json()["message"] == "Email already exists"

    def test_malformed_body(self, client):
        response = client.post("/api/users", json={"email": "not-an-email"})

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Request validation failed"
        fields = {error["field"] for error in data["details"]["errors"]}
        assert "body.email" in fields
        assert "body.password" in fields

    def test_null_character_in_password(self, client, registration_payload):
        registration_payload["password"] = "Abcdef1!\x00x"
        registration_payload["password_confirmation"] = "Abcdef1!\x00x"

        response = client.post("/api/users", json=registration_payload)

        assert response.status_code == 400
        assert response.json()["details"]["errors"] == [
            "Password cannot contain null characters"
        ]

    def test_validation_errors_never_echo_passwords(self, client, registration_payload):
        registration_payload["first_name"] = ""

        response = client.post("/api/users", json=registration_payload)

        assert response.status_code == 400
        assert STRONG not in response.text


class TestUserResources:
    def test_get_user(self, client, registered_user):
        response = client.get(f"/api/users/{registered_user['id']}")

        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    def test_get_unknown_user(self, client):
        response = client.get(f"/api/users/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "TRS-404"

    def test_list_users(self, client, registered_user):
        response = client.get("/api/users", params={"page": 1, "per_page": 10})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == registered_user["id"]

    def test_update_user(self, client, registered_user):
        response = client.put(
            f"/api/users/{registered_user['id']}",
            json={"last_name": "King"},
        )

        assert response.status_code == 200
        assert response.json()["last_name"] == "King"
        assert response.json()["first_name"] == "Ada"

    def test_delete_user(self, client, registered_user):
        response = client.delete(f"/api/users/{registered_user['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "User successfully deleted!"
        assert client.get(f"/api/users/{registered_user['id']}").status_code == 404

    def test_lookup_by_email(self, client, registered_user):
        response = client.post("/api/users/byemail", json={"email": "ADA@example.com"})

        assert response.status_code == 202
        assert response.json() == {"answer": registered_user["id"]}

    def test_lookup_unknown_email(self, client):
        response = client.post("/api/users/byemail", json={"email": "nobody@example.com"})

        assert response.status_code == 404
        assert response.json()["message"] == "No user found with this email"


class TestChangePassword:
    def test_change_then_login_with_new_password(self, client, registered_user):
        response = client.post(
            f"/api/users/{registered_user['id']}/password",
            json={
                "current_password": STRONG,
                "new_password": "Differ3nt!",
                "new_password_confirmation": "Differ3nt!",
            },
        )
        assert response.status_code == 200

        old = client.post("/api/auth/login", json={"username": "ada@example.com", "password": STRONG})
        new = client.post("/api/auth/login", json={"username": "ada@example.com", "password": "Differ3nt!"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_wrong_current_password(self, client, registered_user):
        response = client.post(
            f"/api/users/{registered_user['id']}/password",
            json={
                "current_password": "Wr0ng!pass",
                "new_password": "Differ3nt!",
                "new_password_confirmation": "Differ3nt!",
            },
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"
