import json
import os
import tempfile

os.environ.setdefault("DB_DIALECT", "sqlite")
os.environ.setdefault(
    "DB_FILE", os.path.join(tempfile.gettempdir(), "commissions-dashboard-tests.db")
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("REFERENCE_DATE", "2026-06-15")
os.environ.setdefault(
    "CONSULTANT_PASSWORDS_JSON",
    json.dumps({"pedro": "pedro-senha", "gustavo": "gustavo-senha"}),
)

import pytest

from datetime import date
from typing import Any, Dict
from fastapi.testclient import TestClient

from common.models.commissions import *
from common.database.session import create_tables, db_session, drop_tables
from common.repositories.commissions.consultant import ConsultantRepository
from api import app
from api.configurations.config import current_date
from api.services.auth import AuthService


@pytest.fixture(scope="function")
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture(scope="session", autouse=True)
def create_database() -> None:
    drop_tables()
    create_tables()


@pytest.fixture(scope="class", autouse=True)
def tables_teardown(create_database) -> None:
    db_session.query(InstallmentModel).delete()
    db_session.query(SaleQuotaModel).delete()
    db_session.query(SaleModel).delete()
    db_session.query(UserSessionModel).delete()
    db_session.query(UserModel).delete()
    db_session.query(ConsultantModel).delete()

    db_session.commit()

    AuthService().bootstrap()


def login(client: TestClient, username: str, password: str) -> Dict[str, str]:
    response = client.post(
        url="/auth/login", json={"username": username, "password": password}
    )
    client.cookies.clear()

    return {"x-session-token": response.json()["token"]}


@pytest.fixture(scope="function")
def admin_headers(client: TestClient) -> Dict[str, str]:
    return login(client, "admin", "admin")


@pytest.fixture(scope="function")
def pedro_headers(client: TestClient) -> Dict[str, str]:
    return login(client, "pedro", "pedro-senha")


@pytest.fixture(scope="function")
def gustavo_headers(client: TestClient) -> Dict[str, str]:
    return login(client, "gustavo", "gustavo-senha")


@pytest.fixture(scope="function")
def consultant_ids() -> Dict[str, int]:
    return {
        consultant.name: consultant.id
        for consultant in ConsultantRepository().list_all()
    }


@pytest.fixture(scope="function")
def sale_payload(consultant_ids: Dict[str, int]) -> Dict[str, Any]:
    return {
        "consultant_id": consultant_ids["Pedro"],
        "client_name": "Maria Souza",
        "product": "Imóvel",
        "sale_date": "2026-01-15",
        "insurance": True,
        "quotas_values": [250000, 150000],
        "commission_percentage": 0.8,
        "credit_generated": 400000,
    }


@pytest.fixture(scope="function")
def reference_date() -> date:
    return current_date()
