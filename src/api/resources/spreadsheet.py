from typing import List

from fastapi import Depends, Request, Response, status
from fastapi_restful import set_responses
from starlette.concurrency import run_in_threadpool

from api.auth.actor import Actor
from api.auth.auth_bearer import current_actor
from api.resources.abstract_resource import AbstractResource
from api.schemas import BadRequestError, ImportSummarySchema
from api.services.spreadsheet import SpreadsheetService

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExportResource(AbstractResource):
    def path(self) -> str:
        return "/export/xlsx"

    def tags(self) -> List[str]:
        return ["spreadsheet"]

    def get(self, scope: str = "me", actor: Actor = Depends(current_actor)):
        """Planilha com as vendas e parcelas. ``scope=all`` só para admin."""
        filename, content = SpreadsheetService().export_xlsx(actor, scope)

        return Response(
            content=content,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )


class ImportResource(AbstractResource):
    def path(self) -> str:
        return "/import/xlsx"

    def tags(self) -> List[str]:
        return ["spreadsheet"]

    @set_responses(
        ImportSummarySchema,
        status.HTTP_200_OK,
        responses={status.HTTP_400_BAD_REQUEST: {"model": BadRequestError}},
    )
    async def post(self, request: Request, actor: Actor = Depends(current_actor)):
        """Recebe o arquivo xlsx bruto no corpo da requisição."""
        content = await request.body()

        return await run_in_threadpool(SpreadsheetService().import_xlsx, actor, content)
