from typing import Dict

from fastapi import status
from fastapi.testclient import TestClient

DEFAULT_CONSULTANTS = ["Graziele", "Gustavo", "Marcelo", "Pedro", "Poli", "Victor"]


class TestConsultants:
    endpoint = "/consultants"

    @classmethod
    def test_public_consultants_without_authentication(cls, client: TestClient) -> None:
        response = client.get(url="/public/consultants")

        assert (response.status_code, [item["name"] for item in response.json()]) == (
            status.HTTP_200_OK,
            DEFAULT_CONSULTANTS,
        )
        assert set(response.json()[0]) == {"id", "name"}

    @classmethod
    def test_consultants_listed_for_authenticated_user(
        cls, client: TestClient, pedro_headers: Dict[str, str]
    ) -> None:
        response = client.get(url=cls.endpoint, headers=pedro_headers)

        assert [item["name"] for item in response.json()] == DEFAULT_CONSULTANTS
        assert all(item["active"] for item in response.json())

    @classmethod
    def test_consultant_creation_forbidden_for_consultant(
        cls, client: TestClient, pedro_headers: Dict[str, str]
    ) -> None:
        response = client.post(
            url=cls.endpoint, json={"name": "Joana"}, headers=pedro_headers
        )

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_403_FORBIDDEN,
            "forbidden",
        )

    @classmethod
    def test_consultant_creation_with_missing_name(
        cls, client: TestClient, admin_headers: Dict[str, str]
    ) -> None:
        response = client.post(url=cls.endpoint, json={"name": "  "}, headers=admin_headers)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_400_BAD_REQUEST,
            "missing_name",
        )

    @classmethod
    def test_consultant_lifecycle(
        cls, client: TestClient, admin_headers: Dict[str, str]
    ) -> None:
        created = client.post(
            url=cls.endpoint,
            json={"name": "Joana", "email": "joana@example.com"},
            headers=admin_headers,
        )
        consultant_id = created.json()["id"]

        login_created = client.post(
            url=f"{cls.endpoint}/{consultant_id}/login",
            json={"username": "joana", "password": "joana-senha"},
            headers=admin_headers,
        )
        duplicated = client.post(
            url=f"{cls.endpoint}/{consultant_id}/login",
            json={"username": "joana", "password": "outra"},
            headers=admin_headers,
        )
        login = client.post(
            url="/auth/login", json={"username": "joana", "password": "joana-senha"}
        )
        updated = client.put(
            url=f"{cls.endpoint}/{consultant_id}",
            json={"active": False},
            headers=admin_headers,
        )
        public = client.get(url="/public/consultants")

        assert (created.status_code, created.json()["active"]) == (
            status.HTTP_201_CREATED,
            True,
        )
        assert (login_created.status_code, login_created.json()) == (
            status.HTTP_201_CREATED,
            {"ok": True},
        )
        assert (duplicated.status_code, duplicated.json()["error"]) == (
            status.HTTP_409_CONFLICT,
            "username_taken",
        )
        assert login.json()["user"] == {
            "role": "consultant",
            "consultant_id": consultant_id,
        }
        assert (updated.json()["name"], updated.json()["active"]) == ("Joana", False)
        assert "Joana" not in [item["name"] for item in public.json()]

    @classmethod
    def test_consultant_update_not_found(
        cls, client: TestClient, admin_headers: Dict[str, str]
    ) -> None:
        response = client.put(
            url=f"{cls.endpoint}/999999", json={"active": False}, headers=admin_headers
        )

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_404_NOT_FOUND,
            "not_found",
        )
