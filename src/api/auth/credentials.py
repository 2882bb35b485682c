import json

from typing import Dict

import bcrypt

from simple_common.logger import logger

PASSWORD_SYMBOLS = ["!", "@", "#", "$", "%", "&"]


def hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class CredentialStore:
    """
    Senhas iniciais dos logins de consultores. Senhas explícitas vêm da
    configuração; consultores sem senha configurada recebem uma senha gerada
    de forma determinística a partir do usuário e do id do consultor.
    """

    def __init__(self, passwords: Dict[str, str] = None) -> None:
        self.__passwords = dict(passwords or {})

    @classmethod
    def from_json(cls, raw_json: str) -> "CredentialStore":
        try:
            passwords = json.loads(raw_json or "{}")
        except ValueError:
            logger.warning("CONSULTANT_PASSWORDS_JSON inválido. Usando senhas geradas.")
            passwords = {}

        if not isinstance(passwords, dict):
            logger.warning("CONSULTANT_PASSWORDS_JSON não é um objeto. Ignorado.")
            passwords = {}

        return cls({str(key): str(value) for key, value in passwords.items()})

    @staticmethod
    def generate_password(username: str, consultant_id: int) -> str:
        clean = "".join(char for char in str(username or "consultor") if char.isalnum())
        part = (clean[:4] or "user").ljust(4, "x")
        number = int(consultant_id or 0)
        suffix = (number * 37 + 100) % 900 + 100
        symbol = PASSWORD_SYMBOLS[number % len(PASSWORD_SYMBOLS)]

        return f"Racon{part}{symbol}{suffix}"

    def password_for(self, username: str, consultant_id: int) -> str:
        return self.__passwords.get(username) or self.generate_password(
            username, consultant_id
        )
