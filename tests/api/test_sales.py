from datetime import date
from typing import Any, Dict

from fastapi import status
from fastapi.testclient import TestClient


def installments_total(sale: Dict[str, Any]) -> float:
    return round(sum(installment["value"] for installment in sale["installments"]), 2)


class TestSalesCreation:
    endpoint = "/sales"

    @classmethod
    def test_sales_with_unauthorized_if_token_is_missing(cls, client: TestClient) -> None:
        response = client.get(url=cls.endpoint)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_401_UNAUTHORIZED,
            "unauthorized",
        )

    @classmethod
    def test_sales_with_unauthorized_if_token_is_unknown(cls, client: TestClient) -> None:
        response = client.get(url=cls.endpoint, headers={"x-session-token": "abc"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @classmethod
    def test_sales_created_with_explicit_quotas(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)
        sale = response.json()

        assert response.status_code == status.HTTP_201_CREATED
        assert (
            sale["consultant_name"],
            sale["base_value"],
            sale["quotas"],
            sale["unit_value"],
            sale["quotas_values"],
            sale["total_commission"],
        ) == ("Pedro", 400000.0, 2, 250000.0, [250000.0, 150000.0], 3200.0)
        assert [installment["number"] for installment in sale["installments"]] == [
            1, 2, 3, 4, 5, 6,
        ]
        assert [installment["due_date"] for installment in sale["installments"]][:2] == [
            "2026-02-15",
            "2026-03-15",
        ]
        assert installments_total(sale) == 3200.0

    @classmethod
    def test_sales_created_with_legacy_quotas_shape(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        del sale_payload["quotas_values"]
        sale_payload.update({"quotas": 3, "unit_value": 1000, "commission_percentage": 10})

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)
        sale = response.json()

        assert (sale["quotas_values"], sale["base_value"], sale["total_commission"]) == (
            [1000.0, 1000.0, 1000.0],
            3000.0,
            300.0,
        )

    @classmethod
    def test_sales_created_with_base_value_only(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        del sale_payload["quotas_values"]
        sale_payload["base_value"] = 5000

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)

        assert (response.json()["quotas_values"], response.json()["base_value"]) == (
            [5000.0],
            5000.0,
        )

    @classmethod
    def test_sales_created_with_explicit_installments(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
        reference_date: date,
    ) -> None:
        sale_payload["installments"] = [
            {"number": 2, "value": 1200, "due_date": "2020-03-01"},
            {"number": 1, "value": 2000, "due_date": "2020-02-01", "status": "paid"},
        ]

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)
        installments = response.json()["installments"]

        assert [
            (installment["number"], installment["value"], installment["status"])
            for installment in installments
        ] == [(1, 2000.0, "paid"), (2, 1200.0, "overdue")]
        assert installments[0]["paid_date"] == reference_date.isoformat()

    @classmethod
    def test_sales_created_in_the_past_store_overdue_installments(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale_payload["sale_date"] = "2026-01-31"

        created = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)
        sale_id = created.json()["id"]
        stored = client.get(url=f"{cls.endpoint}/{sale_id}", headers=admin_headers).json()
        replaced = client.put(
            url=f"{cls.endpoint}/{sale_id}/installments",
            json={"installments": stored["installments"]},
            headers=admin_headers,
        ).json()

        expected = [
            ("2026-02-28", "overdue"),
            ("2026-03-31", "overdue"),
            ("2026-04-30", "overdue"),
            ("2026-05-31", "overdue"),
            ("2026-06-30", "pending"),
            ("2026-07-31", "pending"),
        ]
        assert [
            (installment["due_date"], installment["status"])
            for installment in stored["installments"]
        ] == expected
        assert [
            (installment["due_date"], installment["status"])
            for installment in replaced["installments"]
        ] == expected

    @classmethod
    def test_sales_created_for_own_consultant_when_not_admin(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        consultant_ids: Dict[str, int],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale_payload["consultant_id"] = consultant_ids["Gustavo"]

        response = client.post(url=cls.endpoint, json=sale_payload, headers=pedro_headers)

        assert (response.status_code, response.json()["consultant_id"]) == (
            status.HTTP_201_CREATED,
            consultant_ids["Pedro"],
        )

    @classmethod
    def test_sales_with_missing_fields(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        del sale_payload["client_name"]
        del sale_payload["commission_percentage"]

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_400_BAD_REQUEST,
            "missing_fields",
        )
        assert "client_name" in response.json()["detail"]
        assert "commission_percentage" in response.json()["detail"]

    @classmethod
    def test_sales_with_missing_consultant_for_admin(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        del sale_payload["consultant_id"]

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_400_BAD_REQUEST,
            "missing_consultant",
        )

    @classmethod
    def test_sales_with_invalid_consultant(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale_payload["consultant_id"] = 999999

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)

        assert response.json()["error"] == "invalid_consultant"

    @classmethod
    def test_sales_with_invalid_argument(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        invalid_payloads = [
            {**sale_payload, "product": "Barco"},
            {**sale_payload, "commission_percentage": -1},
            {**sale_payload, "quotas_values": [100, -5]},
            {**sale_payload, "quotas_values": [1] * 51},
        ]

        responses = [
            client.post(url=cls.endpoint, json=payload, headers=admin_headers)
            for payload in invalid_payloads
        ]

        assert [(response.status_code, response.json()["error"]) for response in responses] == [
            (status.HTTP_400_BAD_REQUEST, "invalid_argument")
        ] * 4

    @classmethod
    def test_sales_with_validation_error(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale_payload["sale_date"] = "15/01/2026"

        response = client.post(url=cls.endpoint, json=sale_payload, headers=admin_headers)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "invalid_argument",
        )


class TestSalesVisibility:
    endpoint = "/sales"

    @classmethod
    def test_sales_listed_by_scope(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        pedro_headers: Dict[str, str],
        gustavo_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        client.post(url=cls.endpoint, json=sale_payload, headers=pedro_headers)
        client.post(
            url=cls.endpoint,
            json={**sale_payload, "client_name": "João", "sale_date": "2026-02-01"},
            headers=gustavo_headers,
        )

        admin_sales = client.get(url=cls.endpoint, headers=admin_headers).json()
        pedro_sales = client.get(url=cls.endpoint, headers=pedro_headers).json()

        assert [sale["client_name"] for sale in admin_sales] == ["João", "Maria Souza"]
        assert [sale["consultant_name"] for sale in pedro_sales] == ["Pedro"]

    @classmethod
    def test_sale_read_forbidden_for_other_consultant(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        gustavo_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale_id = client.post(
            url=cls.endpoint, json=sale_payload, headers=pedro_headers
        ).json()["id"]

        response = client.get(url=f"{cls.endpoint}/{sale_id}", headers=gustavo_headers)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_403_FORBIDDEN,
            "forbidden",
        )

    @classmethod
    def test_sale_not_found(cls, client: TestClient, admin_headers: Dict[str, str]) -> None:
        response = client.get(url=f"{cls.endpoint}/999999", headers=admin_headers)

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_404_NOT_FOUND,
            "not_found",
        )


class TestSalesEdition:
    endpoint = "/sales"

    @classmethod
    def create_sale(
        cls, client: TestClient, headers: Dict[str, str], payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        payload = {**payload, "quotas_values": [1000], "commission_percentage": 10}

        return client.post(url=cls.endpoint, json=payload, headers=headers).json()

    @classmethod
    def test_sale_edition_forbidden_for_other_consultant_and_allowed_for_admin(
        cls,
        client: TestClient,
        admin_headers: Dict[str, str],
        pedro_headers: Dict[str, str],
        gustavo_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)
        body = {"client_name": "Maria Souza Lima"}

        forbidden = client.put(
            url=f"{cls.endpoint}/{sale['id']}", json=body, headers=gustavo_headers
        )
        allowed = client.put(
            url=f"{cls.endpoint}/{sale['id']}", json=body, headers=admin_headers
        )

        assert (forbidden.status_code, forbidden.json()["error"]) == (
            status.HTTP_403_FORBIDDEN,
            "forbidden",
        )
        assert (allowed.status_code, allowed.json()["client_name"]) == (
            status.HTTP_200_OK,
            "Maria Souza Lima",
        )

    @classmethod
    def test_sale_quotas_edition_rescales_installments(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)

        response = client.put(
            url=f"{cls.endpoint}/{sale['id']}/quotas",
            json={"quotas_values": [1500, {"value": 500}]},
            headers=pedro_headers,
        )
        updated = response.json()

        assert (sale["total_commission"], installments_total(sale)) == (100.0, 100.0)
        assert (
            response.status_code,
            updated["base_value"],
            updated["quotas_values"],
            updated["total_commission"],
            installments_total(updated),
        ) == (status.HTTP_200_OK, 2000.0, [1500.0, 500.0], 200.0, 200.0)
        assert [installment["value"] for installment in updated["installments"]][:5] == [
            33.34
        ] * 5

    @classmethod
    def test_sale_quotas_edition_resizes_by_count(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)
        url = f"{cls.endpoint}/{sale['id']}/quotas"

        padded = client.put(url=url, json={"quotas": 3}, headers=pedro_headers).json()
        truncated = client.put(
            url=url,
            json={"quotas_values": [1000, 500, 250], "quotas": 2},
            headers=pedro_headers,
        ).json()

        assert (padded["quotas_values"], padded["base_value"], padded["total_commission"]) == (
            [1000.0, 0.0, 0.0],
            1000.0,
            100.0,
        )
        assert (
            truncated["quotas_values"],
            truncated["total_commission"],
            installments_total(truncated),
        ) == ([1000.0, 500.0], 150.0, 150.0)

    @classmethod
    def test_sale_quotas_edition_with_missing_quotas_values(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)

        response = client.put(
            url=f"{cls.endpoint}/{sale['id']}/quotas",
            json={"quotas_values": []},
            headers=pedro_headers,
        )

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_400_BAD_REQUEST,
            "missing_quotas_values",
        )

    @classmethod
    def test_sale_metadata_edition_keeps_installments(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)

        response = client.put(
            url=f"{cls.endpoint}/{sale['id']}",
            json={"commission_percentage": 20, "product": "auto"},
            headers=pedro_headers,
        )
        updated = response.json()

        assert (
            updated["product"],
            updated["commission_percentage"],
            updated["total_commission"],
            installments_total(updated),
        ) == ("Auto", 20.0, 200.0, 100.0)

    @classmethod
    def test_sale_metadata_edition_with_base_value_replaces_quotas(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)

        response = client.put(
            url=f"{cls.endpoint}/{sale['id']}",
            json={"base_value": 3000, "installments": []},
            headers=pedro_headers,
        )
        updated = response.json()

        assert (
            updated["quotas_values"],
            updated["total_commission"],
            installments_total(updated),
            len(updated["installments"]),
        ) == ([3000.0], 300.0, 300.0, 6)

    @classmethod
    def test_sale_installments_edition(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
        reference_date: date,
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)
        today = reference_date.isoformat()

        response = client.put(
            url=f"{cls.endpoint}/{sale['id']}/installments",
            json={
                "installments": [
                    {"value": 60, "due_date": "2099-01-10", "status": "paid"},
                    {"value": 40, "due_date": "2099-02-10", "bill_overdue": True},
                ]
            },
            headers=pedro_headers,
        )
        body = response.json()

        assert (response.status_code, body["ok"]) == (status.HTTP_200_OK, True)
        assert [
            (
                installment["number"],
                installment["value"],
                installment["status"],
                installment["display_status"],
                installment["paid_date"],
            )
            for installment in body["installments"]
        ] == [
            (1, 60.0, "paid", "paid", today),
            (2, 40.0, "pending", "bill_overdue", None),
        ]

    @classmethod
    def test_sale_installments_edition_with_missing_installments(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)

        response = client.put(
            url=f"{cls.endpoint}/{sale['id']}/installments",
            json={},
            headers=pedro_headers,
        )

        assert (response.status_code, response.json()["error"]) == (
            status.HTTP_400_BAD_REQUEST,
            "missing_installments",
        )

    @classmethod
    def test_sale_deleted(
        cls,
        client: TestClient,
        pedro_headers: Dict[str, str],
        sale_payload: Dict[str, Any],
    ) -> None:
        sale = cls.create_sale(client, pedro_headers, sale_payload)

        deleted = client.delete(url=f"{cls.endpoint}/{sale['id']}", headers=pedro_headers)
        response = client.get(url=f"{cls.endpoint}/{sale['id']}", headers=pedro_headers)

        assert (deleted.status_code, deleted.json()) == (status.HTTP_200_OK, {"ok": True})
        assert response.status_code == status.HTTP_404_NOT_FOUND
