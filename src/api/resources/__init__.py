from api.resources.auth import LoginResource, LogoutResource, MeResource
from api.resources.consultant import (
    ConsultantLoginResource,
    ConsultantResource,
    ConsultantsResource,
    PublicConsultantsResource,
)
from api.resources.report import RankingResource, ReceivablesResource, SummaryResource
from api.resources.sale import (
    SaleInstallmentsResource,
    SaleQuotasResource,
    SaleResource,
    SalesResource,
)
from api.resources.spreadsheet import ExportResource, ImportResource
