import uuid

from datetime import datetime, timedelta
from typing import Any, Dict

from api.auth.actor import ADMIN_ROLE, CONSULTANT_ROLE, Actor
from api.auth.credentials import CredentialStore, hash_password, verify_password
from api.configurations.config import Settings, get_settings
from api.services.abstract_service import AbstractService
from common.exceptions import Conflict, EntityNotFound, MissingFields, Unauthorized
from common.models.commissions import ConsultantModel, UserModel
from common.repositories.commissions.consultant import ConsultantRepository
from common.repositories.commissions.user import UserRepository
from common.repositories.commissions.user_session import UserSessionRepository
from simple_common.utils import slugify


class AuthService(AbstractService):
    def __init__(self, settings: Settings = None) -> None:
        super().__init__()
        self.__repository = UserRepository()
        self.__session_repository = UserSessionRepository()
        self.__consultant_repository = ConsultantRepository()
        self.__settings = settings or get_settings()

    @property
    def _repository(self) -> UserRepository:
        return self.__repository

    def login(self, username: str, password: str) -> Dict[str, Any]:
        if not username or not password:
            raise MissingFields(detail="Usuário e senha são obrigatórios.")

        username = str(username).strip()
        try:
            user = self._repository.get_by_username(username)
        except EntityNotFound:
            self._logger.info(f"Tentativa de login com usuário inexistente: {username}")
            raise Unauthorized(
                detail="Usuário ou senha inválidos.", code="invalid_credentials"
            )

        if not verify_password(str(password), user.password_hash):
            self._logger.info(f"Senha inválida para o usuário {username}")
            raise Unauthorized(
                detail="Usuário ou senha inválidos.", code="invalid_credentials"
            )

        token = uuid.uuid4().hex
        expires_at = datetime.now() + timedelta(days=self.__settings.session_ttl_days)
        self.__session_repository.create(
            {"token": token, "user_id": user.id, "expires_at": expires_at}
        )

        self._logger.info(f"Login realizado para o usuário {username}")

        return {
            "token": token,
            "user": {"role": user.role, "consultant_id": user.consultant_id},
        }

    def logout(self, token: str) -> Dict[str, bool]:
        if token:
            self.__session_repository.delete_token(token)

        return {"ok": True}

    def resolve_actor(self, token: str) -> Actor:
        try:
            user_session = self.__session_repository.get_valid(token, datetime.now())
        except EntityNotFound:
            raise Unauthorized(detail="Sessão inválida ou expirada.")

        user = user_session.user

        return Actor(user_id=user.id, role=user.role, consultant_id=user.consultant_id)

    def create_user(
        self,
        username: str,
        password: str,
        role: str,
        consultant_id: int = None,
        commit_at_the_end: bool = True,
    ) -> UserModel:
        username = str(username).strip()
        try:
            self._repository.get_by_username(username)
        except EntityNotFound:
            pass
        else:
            raise Conflict(
                detail=f"Usuário {username} já existe.", code="username_taken"
            )

        return self._repository.create(
            {
                "username": username,
                "password_hash": hash_password(
                    str(password), self.__settings.bcrypt_rounds
                ),
                "role": role,
                "consultant_id": consultant_id,
            },
            commit_at_the_end=commit_at_the_end,
        )

    def bootstrap(self) -> None:
        """
        Garante o usuário administrador, os consultores padrão e o login de
        cada consultor ativo. Pode ser executado a cada inicialização.
        """
        try:
            self._repository.get_by_username(self.__settings.admin_user)
        except EntityNotFound:
            self.create_user(
                self.__settings.admin_user, self.__settings.admin_password, ADMIN_ROLE
            )
            self._logger.info(f"Admin criado: {self.__settings.admin_user}")

        for name in self.__settings.default_consultants:
            try:
                self.__consultant_repository.find_by_name(name)
            except EntityNotFound:
                self.__consultant_repository.create({"name": name, "active": True})
                self._logger.info(f"Consultor padrão criado: {name}")

        credential_store = CredentialStore.from_json(
            self.__settings.consultant_passwords_json
        )
        for consultant in self.__consultant_repository.list_active():
            self.ensure_consultant_login(consultant, credential_store)

    def ensure_consultant_login(
        self, consultant: ConsultantModel, credential_store: CredentialStore
    ) -> None:
        username = slugify(consultant.name)
        try:
            self._repository.get_by_username(username)
        except EntityNotFound:
            self.create_user(
                username,
                credential_store.password_for(username, consultant.id),
                CONSULTANT_ROLE,
                consultant.id,
            )
            self._logger.info(f"Login de consultor criado: {consultant.name} ({username})")
