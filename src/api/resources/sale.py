from typing import List

from fastapi import Depends, status
from fastapi_restful import set_responses

from api.auth.actor import Actor
from api.auth.auth_bearer import current_actor
from api.resources.abstract_resource import AbstractResource
from api.schemas import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    OkSchema,
    SaleCreateSchema,
    SaleInstallmentsSchema,
    SaleInstallmentsUpdateSchema,
    SaleQuotasUpdateSchema,
    SaleSchema,
    SaleUpdateSchema,
)
from api.services.sale import SaleService

SALE_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": BadRequestError},
    status.HTTP_403_FORBIDDEN: {"model": ForbiddenError},
    status.HTTP_404_NOT_FOUND: {"model": NotFoundError},
}


class SalesResource(AbstractResource):
    def path(self) -> str:
        return "/sales"

    def tags(self) -> List[str]:
        return ["sales"]

    @set_responses(List[SaleSchema], status.HTTP_200_OK)
    def get(self, actor: Actor = Depends(current_actor)):
        """Vendas visíveis ao usuário, mais recentes primeiro."""
        return SaleService().list(actor)

    @set_responses(
        SaleSchema,
        status.HTTP_201_CREATED,
        responses={status.HTTP_400_BAD_REQUEST: {"model": BadRequestError}},
    )
    def post(self, sale: SaleCreateSchema, actor: Actor = Depends(current_actor)):
        """
        Registra uma venda com suas cotas e parcelas. As cotas podem vir como
        lista de valores, como quantidade e valor unitário, ou como valor base
        único. Sem parcelas informadas, gera 6 parcelas mensais.
        """
        return SaleService().create(actor, sale)


class SaleResource(AbstractResource):
    def path(self) -> str:
        return "/sales/{sale_id}"

    def tags(self) -> List[str]:
        return ["sales"]

    @set_responses(SaleSchema, status.HTTP_200_OK, responses=SALE_ERRORS)
    def get(self, sale_id: int, actor: Actor = Depends(current_actor)):
        return SaleService().get(actor, sale_id)

    @set_responses(SaleSchema, status.HTTP_200_OK, responses=SALE_ERRORS)
    def put(
        self, sale_id: int, sale: SaleUpdateSchema, actor: Actor = Depends(current_actor)
    ):
        return SaleService().update(actor, sale_id, sale)

    @set_responses(OkSchema, status.HTTP_200_OK, responses=SALE_ERRORS)
    def delete(self, sale_id: int, actor: Actor = Depends(current_actor)):
        return SaleService().delete(actor, sale_id)


class SaleQuotasResource(AbstractResource):
    def path(self) -> str:
        return "/sales/{sale_id}/quotas"

    def tags(self) -> List[str]:
        return ["sales"]

    @set_responses(SaleSchema, status.HTTP_200_OK, responses=SALE_ERRORS)
    def put(
        self,
        sale_id: int,
        quotas: SaleQuotasUpdateSchema,
        actor: Actor = Depends(current_actor),
    ):
        """Substitui as cotas e reescala as parcelas para a nova comissão."""
        return SaleService().update_quotas(actor, sale_id, quotas)


class SaleInstallmentsResource(AbstractResource):
    def path(self) -> str:
        return "/sales/{sale_id}/installments"

    def tags(self) -> List[str]:
        return ["sales"]

    @set_responses(SaleInstallmentsSchema, status.HTTP_200_OK, responses=SALE_ERRORS)
    def put(
        self,
        sale_id: int,
        installments: SaleInstallmentsUpdateSchema,
        actor: Actor = Depends(current_actor),
    ):
        return SaleService().update_installments(actor, sale_id, installments)
