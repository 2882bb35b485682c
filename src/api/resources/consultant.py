from typing import List

from fastapi import Depends, status
from fastapi_restful import set_responses

from api.auth.actor import Actor
from api.auth.auth_bearer import current_admin
from api.resources.abstract_resource import AbstractResource, PublicResource
from api.schemas import (
    BadRequestError,
    ConflictError,
    ConsultantCreateSchema,
    ConsultantLoginCreateSchema,
    ConsultantSchema,
    ConsultantUpdateSchema,
    ForbiddenError,
    NotFoundError,
    OkSchema,
    PublicConsultantSchema,
)
from api.services.consultant import ConsultantService


class PublicConsultantsResource(PublicResource):
    def path(self) -> str:
        return "/public/consultants"

    def tags(self) -> List[str]:
        return ["consultants"]

    @set_responses(List[PublicConsultantSchema], status.HTTP_200_OK)
    def get(self):
        """Consultores ativos, usado na tela de login."""
        return ConsultantService().list_public()


class ConsultantsResource(AbstractResource):
    def path(self) -> str:
        return "/consultants"

    def tags(self) -> List[str]:
        return ["consultants"]

    @set_responses(List[ConsultantSchema], status.HTTP_200_OK)
    def get(self):
        return ConsultantService().list_all()

    @set_responses(
        ConsultantSchema,
        status.HTTP_201_CREATED,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": BadRequestError},
            status.HTTP_403_FORBIDDEN: {"model": ForbiddenError},
        },
    )
    def post(
        self, consultant: ConsultantCreateSchema, _admin: Actor = Depends(current_admin)
    ):
        return ConsultantService().create(consultant)


class ConsultantResource(AbstractResource):
    def path(self) -> str:
        return "/consultants/{consultant_id}"

    def tags(self) -> List[str]:
        return ["consultants"]

    @set_responses(
        ConsultantSchema,
        status.HTTP_200_OK,
        responses={
            status.HTTP_403_FORBIDDEN: {"model": ForbiddenError},
            status.HTTP_404_NOT_FOUND: {"model": NotFoundError},
        },
    )
    def put(
        self,
        consultant_id: int,
        consultant: ConsultantUpdateSchema,
        _admin: Actor = Depends(current_admin),
    ):
        return ConsultantService().update(consultant_id, consultant)


class ConsultantLoginResource(AbstractResource):
    def path(self) -> str:
        return "/consultants/{consultant_id}/login"

    def tags(self) -> List[str]:
        return ["consultants"]

    @set_responses(
        OkSchema,
        status.HTTP_201_CREATED,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": BadRequestError},
            status.HTTP_403_FORBIDDEN: {"model": ForbiddenError},
            status.HTTP_404_NOT_FOUND: {"model": NotFoundError},
            status.HTTP_409_CONFLICT: {"model": ConflictError},
        },
    )
    def post(
        self,
        consultant_id: int,
        login: ConsultantLoginCreateSchema,
        _admin: Actor = Depends(current_admin),
    ):
        """Cria usuário de acesso para um consultor existente."""
        return ConsultantService().create_login(consultant_id, login)
