"""Integration tests for the auth and profile API."""

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

BASE = "/api/v1/auth"


async def _register(client: AsyncClient, payload: dict[str, Any]) -> dict[str, Any]:
    response = await client.post(f"{BASE}/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_profile(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        response = await api_client.post(f"{BASE}/register", json=registration_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["email"] == "test@example.com"
        assert data["nickname"] == "테스트유저"
        assert data["birthDate"] == "20030913"
        assert data["birthYear"] == 2003
        assert data["gender"] == "F"
        assert data["daysSinceJoined"] == 1
        assert data["isAdmin"] is False
        assert isinstance(data["age"], int)
        assert "password" not in data
        assert "passwordHash" not in data

    @pytest.mark.asyncio
    async def test_missing_fields(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            f"{BASE}/register", json={"email": "test@example.com"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "MISSING_FIELDS"
        assert body["details"]["missing"] == ["password", "nickname", "birthDate"]

    @pytest.mark.asyncio
    async def test_all_invalid_fields_reported(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        payload = {
            **registration_payload,
            "email": "not-an-email",
            "nickname": "no spaces",
            "birthDate": "20230231",
            "profileImage": "https://example.com/avatar.svg",
        }

        response = await api_client.post(f"{BASE}/register", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_FAILED"
        fields = {item["field"] for item in body["details"]}
        assert fields == {"email", "nickname", "birthDate", "profileImage"}

    @pytest.mark.asyncio
    async def test_overlong_profile_image_is_rejected(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        url = "https://cdn.example.com/" + "a" * 500 + ".png"

        response = await api_client.post(
            f"{BASE}/register", json={**registration_payload, "profileImage": url}
        )

        assert response.status_code == 400
        (violation,) = response.json()["details"]
        assert violation["field"] == "profileImage"
        assert violation["code"] == "INVALID_IMAGE_URL"

    @pytest.mark.asyncio
    async def test_duplicate_email(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        await _register(api_client, registration_payload)

        response = await api_client.post(
            f"{BASE}/register",
            json={**registration_payload, "email": "TEST@example.com", "nickname": "다른유저"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "EMAIL_TAKEN"

    @pytest.mark.asyncio
    async def test_duplicate_nickname(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        await _register(api_client, registration_payload)

        response = await api_client.post(
            f"{BASE}/register",
            json={**registration_payload, "email": "other@example.com"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "NICKNAME_TAKEN"

    @pytest.mark.asyncio
    async def test_wrong_json_type_is_validation_error(self, api_client: AsyncClient) -> None:
        response = await api_client.post(f"{BASE}/register", json={"email": ["a"]})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_FAILED"


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        created = await _register(api_client, registration_payload)

        response = await api_client.post(
            f"{BASE}/login",
            json={"email": "Test@Example.com", "password": "password123"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == created["id"]
        assert "password" not in data
        assert "token" not in response.json()

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        await _register(api_client, registration_payload)

        wrong = await api_client.post(
            f"{BASE}/login", json={"email": "test@example.com", "password": "wrong-pass"}
        )
        unknown = await api_client.post(
            f"{BASE}/login", json={"email": "nobody@example.com", "password": "password123"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()
        assert wrong.json()["message"] == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, api_client: AsyncClient) -> None:
        response = await api_client.post(f"{BASE}/login", json={"email": "test@example.com"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "MISSING_FIELDS"


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_profile(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        created = await _register(api_client, registration_payload)

        response = await api_client.get(f"{BASE}/profile/{created['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["nickname"] == "테스트유저"
        assert data["bio"] == "테스트용 사용자입니다"
        assert "password" not in data

    @pytest.mark.asyncio
    async def test_get_unknown_profile(self, api_client: AsyncClient) -> None:
        response = await api_client.get(f"{BASE}/profile/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, api_client: AsyncClient) -> None:
        response = await api_client.get(f"{BASE}/profile/not-a-uuid")

        assert response.status_code == 404
        assert response.json()["error_code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_profile(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        created = await _register(api_client, registration_payload)

        response = await api_client.put(
            f"{BASE}/profile/{created['id']}",
            json={
                "nickname": "새닉네임",
                "bio": "",
                "gender": "M",
                "email": "hijack@example.com",
                "isAdmin": True,
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["nickname"] == "새닉네임"
        assert data["bio"] == ""
        assert data["gender"] == "M"
        assert data["email"] == "test@example.com"
        assert data["isAdmin"] is False

    @pytest.mark.asyncio
    async def test_update_to_taken_nickname(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        await _register(api_client, registration_payload)
        other = await _register(
            api_client,
            {**registration_payload, "email": "other@example.com", "nickname": "사용자1"},
        )

        response = await api_client.put(
            f"{BASE}/profile/{other['id']}", json={"nickname": "테스트유저"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "NICKNAME_TAKEN"

    @pytest.mark.asyncio
    async def test_update_keeping_own_nickname(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        created = await _register(api_client, registration_payload)

        response = await api_client.put(
            f"{BASE}/profile/{created['id']}", json={"nickname": "테스트유저"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["nickname"] == "테스트유저"

    @pytest.mark.asyncio
    async def test_update_invalid_bio(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        created = await _register(api_client, registration_payload)

        response = await api_client.put(
            f"{BASE}/profile/{created['id']}", json={"bio": "x" * 101}
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "bio"


class TestAvailability:
    @pytest.mark.asyncio
    async def test_check_email(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        before = await api_client.post(f"{BASE}/check-email", json={"email": "test@example.com"})
        await _register(api_client, registration_payload)
        after = await api_client.post(f"{BASE}/check-email", json={"email": "TEST@example.com"})

        assert before.status_code == after.status_code == 200
        assert before.json()["available"] is True
        assert after.json()["available"] is False

    @pytest.mark.asyncio
    async def test_check_nickname(
        self, api_client: AsyncClient, registration_payload: dict[str, str]
    ) -> None:
        await _register(api_client, registration_payload)

        taken = await api_client.post(f"{BASE}/check-nickname", json={"nickname": "테스트유저"})
        free = await api_client.post(f"{BASE}/check-nickname", json={"nickname": "빈닉네임"})

        assert taken.json()["available"] is False
        assert free.json()["available"] is True

    @pytest.mark.asyncio
    async def test_check_without_value(self, api_client: AsyncClient) -> None:
        response = await api_client.post(f"{BASE}/check-email", json={})

        assert response.status_code == 400
        assert response.json()["error_code"] == "MISSING_FIELDS"


class TestUnknownRoutes:
    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/v1/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "NOT_FOUND"
