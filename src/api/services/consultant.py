from typing import Any, Dict, List

from api.auth.actor import CONSULTANT_ROLE
from api.schemas.consultant import (
    ConsultantCreateSchema,
    ConsultantLoginCreateSchema,
    ConsultantUpdateSchema,
)
from api.services.abstract_service import AbstractService
from api.services.auth import AuthService
from common.exceptions import EntityNotFound, MissingFields
from common.models.commissions import ConsultantModel
from common.repositories.commissions.consultant import ConsultantRepository


class ConsultantService(AbstractService):
    def __init__(self) -> None:
        super().__init__()
        self.__repository = ConsultantRepository()

    @property
    def _repository(self) -> ConsultantRepository:
        return self.__repository

    @staticmethod
    def to_dict(consultant: ConsultantModel) -> Dict[str, Any]:
        return {
            "id": consultant.id,
            "name": consultant.name,
            "email": consultant.email,
            "active": bool(consultant.active),
        }

    def get(self, consultant_id: int) -> ConsultantModel:
        try:
            return self._repository.get_by_id(consultant_id)
        except EntityNotFound:
            raise EntityNotFound(detail=f"Consultor {consultant_id} não encontrado.")

    def list_all(self) -> List[Dict[str, Any]]:
        return [self.to_dict(consultant) for consultant in self._repository.list_all()]

    def list_public(self) -> List[Dict[str, Any]]:
        return [
            {"id": consultant.id, "name": consultant.name}
            for consultant in self._repository.list_active()
        ]

    def create(self, consultant: ConsultantCreateSchema) -> Dict[str, Any]:
        name = (consultant.name or "").strip()
        if not name:
            raise MissingFields(detail="Nome do consultor é obrigatório.", code="missing_name")

        created = self._repository.create(
            {
                "name": name,
                "email": consultant.email.strip() if consultant.email else None,
                "active": consultant.active,
            }
        )
        self._logger.info(f"Consultor {created.id} criado: {name}")

        return self.to_dict(created)

    def update(
        self, consultant_id: int, consultant: ConsultantUpdateSchema
    ) -> Dict[str, Any]:
        existing = self.get(consultant_id)

        attributes = {}
        fields = consultant.model_fields_set
        if "name" in fields and consultant.name:
            attributes["name"] = consultant.name.strip()
        if "email" in fields:
            attributes["email"] = consultant.email.strip() if consultant.email else None
        if "active" in fields and consultant.active is not None:
            attributes["active"] = consultant.active

        updated = self._repository.update_entity(existing, attributes)
        self._logger.info(f"Consultor {consultant_id} atualizado: {attributes}")

        return self.to_dict(updated)

    def create_login(
        self, consultant_id: int, login: ConsultantLoginCreateSchema
    ) -> Dict[str, bool]:
        self.get(consultant_id)

        if not login.username or not login.password:
            raise MissingFields(detail="Usuário e senha são obrigatórios.")

        AuthService().create_user(
            login.username, login.password, CONSULTANT_ROLE, consultant_id
        )
        self._logger.info(f"Login {login.username} criado para o consultor {consultant_id}")

        return {"ok": True}

    def find_or_create_by_name(self, name: str, commit_at_the_end: bool = True):
        """Retorna o consultor com o nome informado e se ele foi criado agora."""
        try:
            return self._repository.find_by_name(name), False
        except EntityNotFound:
            created = self._repository.create(
                {"name": name, "active": True}, commit_at_the_end=commit_at_the_end
            )
            self._logger.info(f"Consultor criado a partir de importação: {name}")
            return created, True
