from common.models.commissions.consultant import ConsultantModel
from common.models.commissions.user import UserModel
from common.models.commissions.user_session import UserSessionModel
from common.models.commissions.sale import SaleModel
from common.models.commissions.sale_quota import SaleQuotaModel
from common.models.commissions.installment import InstallmentModel
