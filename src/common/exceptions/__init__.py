from common.exceptions.base_error import ApiError
from common.exceptions.conflict import Conflict
from common.exceptions.entity_not_found import EntityNotFound
from common.exceptions.forbidden import Forbidden
from common.exceptions.internal_server_error import InternalServerError
from common.exceptions.invalid_argument import InvalidArgument
from common.exceptions.missing_fields import MissingFields
from common.exceptions.unauthorized import Unauthorized
