from typing import List, Optional

from fastapi import Depends, status
from fastapi_restful import set_responses

from api.auth.actor import Actor
from api.auth.auth_bearer import current_actor
from api.resources.abstract_resource import AbstractResource
from api.schemas import (
    BadRequestError,
    RankingEntrySchema,
    ReceivablesSchema,
    SummarySchema,
)
from api.services.report import ReportService


class SummaryResource(AbstractResource):
    def path(self) -> str:
        return "/summary"

    def tags(self) -> List[str]:
        return ["reports"]

    @set_responses(SummarySchema, status.HTTP_200_OK)
    def get(self, actor: Actor = Depends(current_actor)):
        return ReportService().summary(actor)


class RankingResource(AbstractResource):
    def path(self) -> str:
        return "/ranking"

    def tags(self) -> List[str]:
        return ["reports"]

    @set_responses(
        List[RankingEntrySchema],
        status.HTTP_200_OK,
        responses={status.HTTP_400_BAD_REQUEST: {"model": BadRequestError}},
    )
    def get(self, start: Optional[str] = None, end: Optional[str] = None):
        """Ranking de consultores ativos por total vendido no período."""
        return ReportService().ranking(start, end)


class ReceivablesResource(AbstractResource):
    def path(self) -> str:
        return "/receivables"

    def tags(self) -> List[str]:
        return ["reports"]

    @set_responses(
        ReceivablesSchema,
        status.HTTP_200_OK,
        responses={status.HTTP_400_BAD_REQUEST: {"model": BadRequestError}},
    )
    def get(
        self,
        month: Optional[str] = None,
        consultant_id: Optional[str] = None,
        actor: Actor = Depends(current_actor),
    ):
        """Parcelas com vencimento no mês informado (AAAA-MM)."""
        return ReportService().receivables(actor, month, consultant_id)
