"""
API integration tests for user endpoints.
"""

from typing import Any

import pytest
from httpx import AsyncClient

from taskdesk.storage.memory import MemStorage


async def _create(client: AsyncClient, payload: dict[str, Any]) -> dict[str, Any]:
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateUser:
    """Tests for POST /api/users."""

    @pytest.mark.asyncio
    async def test_create_returns_full_record(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        response = await async_client.post("/api/users", json=user_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["uid"] == "firebase-uid-sarah"
        assert data["fullName"] == "Sarah Reporter"
        assert data["role"] == "Reporter"
        assert data["profileComplete"] is True
        assert data["isActive"] is True
        assert data["photoUrl"] == ""
        assert "createdAt" in data and "updatedAt" in data
        assert "full_name" not in data

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_role(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        response = await async_client.post(
            "/api/users", json={**user_payload, "role": "Intern"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Invalid request data"
        assert any("role" in error["field"] for error in data["errors"])

    @pytest.mark.asyncio
    async def test_create_rejects_missing_field(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        del user_payload["fullName"]

        response = await async_client.post("/api/users", json=user_payload)

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert errors and all({"field", "message", "type"} <= set(e) for e in errors)

    @pytest.mark.asyncio
    async def test_create_rejects_bad_email(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        response = await async_client.post(
            "/api/users", json={**user_payload, "email": "not-an-email"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_uid_returns_409(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        await _create(async_client, user_payload)

        response = await async_client.post(
            "/api/users", json={**user_payload, "email": "other@example.com"}
        )

        assert response.status_code == 409
        assert response.json() == {
            "message": "User with this uid already exists",
            "field": "uid",
        }

    @pytest.mark.asyncio
    async def test_duplicate_email_returns_409(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        await _create(async_client, user_payload)

        response = await async_client.post(
            "/api/users", json={**user_payload, "uid": "another-uid"}
        )

        assert response.status_code == 409
        assert response.json()["field"] == "email"


class TestReadUsers:
    """Tests for GET /api/users endpoints."""

    @pytest.mark.asyncio
    async def test_list_is_empty_initially(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_by_id_and_uid(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        created = await _create(async_client, user_payload)

        by_id = await async_client.get(f"/api/users/{created['id']}")
        by_uid = await async_client.get("/api/users/uid/firebase-uid-sarah")

        assert by_id.status_code == 200
        assert by_id.json() == created
        assert by_uid.json() == created

    @pytest.mark.asyncio
    async def test_missing_user_returns_404(self, async_client: AsyncClient) -> None:
        by_id = await async_client.get("/api/users/99")
        by_uid = await async_client.get("/api/users/uid/nobody")

        assert by_id.status_code == 404
        assert by_id.json() == {"message": "User not found"}
        assert by_uid.status_code == 404

    @pytest.mark.asyncio
    async def test_non_integer_id_returns_400(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/users/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

    @pytest.mark.asyncio
    async def test_filter_by_role(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
        admin_payload: dict[str, Any],
    ) -> None:
        await _create(async_client, user_payload)
        await _create(async_client, admin_payload)

        response = await async_client.get("/api/users", params={"role": "Admin"})

        assert response.status_code == 200
        assert [u["uid"] for u in response.json()] == ["firebase-uid-john"]

    @pytest.mark.asyncio
    async def test_filter_by_unknown_role_returns_400(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/users", params={"role": "Intern"})

        assert response.status_code == 400


class TestUpdateUser:
    """Tests for PUT /api/users/{id}."""

    @pytest.mark.asyncio
    async def test_partial_update(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        created = await _create(async_client, user_payload)

        response = await async_client.put(
            f"/api/users/{created['id']}",
            json={"role": "Cameraman", "isActive": False},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "Cameraman"
        assert data["isActive"] is False
        assert data["fullName"] == created["fullName"]
        assert data["createdAt"] == created["createdAt"]
        assert data["updatedAt"] != created["updatedAt"]

    @pytest.mark.asyncio
    async def test_empty_update_changes_only_updated_at(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        created = await _create(async_client, user_payload)

        response = await async_client.put(f"/api/users/{created['id']}", json={})

        data = response.json()
        assert response.status_code == 200
        assert data.pop("updatedAt") != created.pop("updatedAt")
        assert data == created

    @pytest.mark.asyncio
    async def test_explicit_null_for_required_field_returns_400(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        created = await _create(async_client, user_payload)

        response = await async_client.put(
            f"/api/users/{created['id']}", json={"fullName": None}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_missing_user_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.put("/api/users/5", json={"fullName": "Ghost"})

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_update_to_taken_uid_returns_409(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
        admin_payload: dict[str, Any],
    ) -> None:
        await _create(async_client, user_payload)
        admin = await _create(async_client, admin_payload)

        response = await async_client.put(
            f"/api/users/{admin['id']}", json={"uid": user_payload["uid"]}
        )

        assert response.status_code == 409
        assert response.json()["field"] == "uid"


class TestDeleteUser:
    """Tests for DELETE /api/users endpoints."""

    @pytest.mark.asyncio
    async def test_delete_by_id(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
    ) -> None:
        created = await _create(async_client, user_payload)

        response = await async_client.delete(f"/api/users/{created['id']}")
        again = await async_client.delete(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert again.status_code == 404
        assert (await async_client.get(f"/api/users/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_by_uid(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
        storage: MemStorage,
    ) -> None:
        await _create(async_client, user_payload)

        response = await async_client.delete("/api/users/uid/firebase-uid-sarah")

        assert response.status_code == 200
        assert storage.get_all_users() == []

    @pytest.mark.asyncio
    async def test_delete_by_unknown_uid_leaves_store_untouched(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
        storage: MemStorage,
    ) -> None:
        await _create(async_client, user_payload)

        response = await async_client.delete("/api/users/uid/nobody")

        assert response.status_code == 404
        assert len(storage.get_all_users()) == 1

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(
        self,
        async_client: AsyncClient,
        user_payload: dict[str, Any],
        admin_payload: dict[str, Any],
    ) -> None:
        first = await _create(async_client, user_payload)
        await async_client.delete(f"/api/users/{first['id']}")

        second = await _create(async_client, admin_payload)

        assert second["id"] == first["id"] + 1
