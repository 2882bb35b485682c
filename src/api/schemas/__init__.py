from api.schemas.http_error import (
    HTTPErrorSchema,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from api.schemas.auth import (
    LoginSchema,
    LoginResponseSchema,
    MeResponseSchema,
    OkSchema,
)
from api.schemas.consultant import (
    ConsultantCreateSchema,
    ConsultantLoginCreateSchema,
    ConsultantSchema,
    ConsultantUpdateSchema,
    PublicConsultantSchema,
)
from api.schemas.sale import (
    InstallmentInputSchema,
    SaleCreateSchema,
    SaleInstallmentsSchema,
    SaleInstallmentsUpdateSchema,
    SaleQuotasUpdateSchema,
    SaleSchema,
    SaleUpdateSchema,
)
from api.schemas.report import RankingEntrySchema, ReceivablesSchema, SummarySchema
from api.schemas.spreadsheet import ImportSummarySchema
