"""End-to-end tests of the users API against an in-memory SQLite database."""

from fastapi import status

NEW_USER = {
    "username": "systemtestuser",
    "email": "systemtest@example.com",
    "password": "password",
}


class TestUsersApi:
    def test_create_and_retrieve_user(self, client):
        created = client.post("/users", json=NEW_USER)

        assert created.status_code == status.HTTP_201_CREATED
        user_id = created.json()["id"]
        assert user_id is not None

        fetched = client.get(f"/users/{user_id}")

        assert fetched.status_code == status.HTTP_200_OK
        body = fetched.json()
        assert body["id"] == user_id
        assert body["username"] == "systemtestuser"
        assert body["email"] == "systemtest@example.com"
        assert "password" not in body

    def test_unknown_user_is_404(self, client):
        response = client.get("/users/999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_id_beyond_integer_range_is_404(self, client):
        oversized_id = "99999999999999999999"

        assert client.get(f"/users/{oversized_id}").status_code == status.HTTP_404_NOT_FOUND
        assert client.delete(f"/users/{oversized_id}").status_code == status.HTTP_404_NOT_FOUND
        assert (
            client.put(f"/users/{oversized_id}", json=NEW_USER).status_code
            == status.HTTP_404_NOT_FOUND
        )

    def test_duplicate_email_is_409(self, client):
        assert client.post("/users", json=NEW_USER).status_code == status.HTTP_201_CREATED

        duplicate = client.post(
            "/users", json={**NEW_USER, "username": "someoneelse"}
        )

        assert duplicate.status_code == status.HTTP_409_CONFLICT
        assert duplicate.content == b""
        assert len(client.get("/users").json()) == 1

    def test_duplicate_username_is_409(self, client):
        assert client.post("/users", json=NEW_USER).status_code == status.HTTP_201_CREATED

        duplicate = client.post(
            "/users", json={**NEW_USER, "email": "other@example.com"}
        )

        assert duplicate.status_code == status.HTTP_409_CONFLICT

    def test_update_user(self, client):
        user_id = client.post("/users", json=NEW_USER).json()["id"]
        other = {"username": "other", "email": "other@example.com", "password": "pw"}
        assert client.post("/users", json=other).status_code == status.HTTP_201_CREATED

        renamed = client.put(
            f"/users/{user_id}", json={**NEW_USER, "username": "renamed"}
        )
        clashing = client.put(f"/users/{user_id}", json={**NEW_USER, "email": "other@example.com"})
        missing = client.put("/users/424242", json=NEW_USER)

        assert renamed.status_code == status.HTTP_200_OK
        assert renamed.json()["username"] == "renamed"
        assert client.get("/users/username/renamed").status_code == status.HTTP_200_OK
        assert clashing.status_code == status.HTTP_409_CONFLICT
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_user(self, client):
        user_id = client.post("/users", json=NEW_USER).json()["id"]

        assert client.delete(f"/users/{user_id}").status_code == status.HTTP_204_NO_CONTENT
        assert client.delete(f"/users/{user_id}").status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f"/users/{user_id}").status_code == status.HTTP_404_NOT_FOUND

    def test_lookup_by_email(self, client):
        client.post("/users", json=NEW_USER)

        found = client.get("/users/email/systemtest@example.com")
        missing = client.get("/users/email/nobody@example.com")

        assert found.status_code == status.HTTP_200_OK
        assert found.json()["username"] == "systemtestuser"
        assert missing.status_code == status.HTTP_404_NOT_FOUND
