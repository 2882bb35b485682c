import time

from uuid import uuid4
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import Message
from fastapi.responses import JSONResponse
from fastapi_restful import Api
from starlette.exceptions import HTTPException as StarletteHTTPException
from mangum import Mangum
from typing import AsyncIterator, Callable

from api.configurations.config import get_settings
from api.configurations.resource_builder import ResourceBuilder
from api.services.auth import AuthService
from common.database.session import create_tables, db_session, request_scope
from common.exceptions import ApiError
from common.models import commissions  # noqa: F401
from simple_common.logger import bind_request, logger

ERROR_CODES_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: "invalid_argument",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


@asynccontextmanager
async def lifespan(_application: FastAPI) -> AsyncIterator[None]:
    create_tables()
    AuthService().bootstrap()
    db_session.remove()
    logger.info("Banco de dados preparado e usuários iniciais garantidos.")

    yield


def create_application() -> FastAPI:
    setting = get_settings()

    application = FastAPI(
        title=setting.app_name,
        description=setting.description,
        version=setting.version,
        docs_url=setting.docs_url,
        openapi_url=setting.openapi_url,
        root_path=setting.root_path,
        lifespan=lifespan,
    )

    api = Api(application)

    ResourceBuilder().add_resources(api)

    return application


app = create_application()
api_logger = logger


async def set_body(request: Request, body: bytes) -> None:
    async def receive() -> Message:
        return {"type": "http.request", "body": body}

    request._receive = receive


@app.middleware("http")
async def logging_middleware(request: Request, call_next: Callable) -> Response:
    request_body = await request.body()
    await set_body(request, request_body)

    content_type = request.headers.get("content-type", "")
    log_data = {
        "Requisição iniciada...": {
            "URL": f"{request.method} {request.url}",
            "query_params": {key: value for key, value in request.query_params.items()},
            "path_params": request.path_params,
            "Body": request_body if "json" in content_type else f"{len(request_body)} bytes",
        }
    }
    bind_request(request.method, str(request.url))
    api_logger.info(log_data)

    start_time = time.time()

    scope_token = request_scope.set(uuid4().hex)
    try:
        response: Response = await call_next(request)
    finally:
        db_session.remove()
        request_scope.reset(scope_token)

    process_time = (time.time() - start_time) * 1000
    formatted_process_time = "{0:.2f}".format(process_time)

    response_body = b""
    async for chunk in response.body_iterator:
        response_body += chunk

    log_data = {
        "Response": {
            "statusCode": response.status_code,
            "content": response_body
            if "json" in response.headers.get("content-type", "")
            else f"{len(response_body)} bytes",
            "completed_in": f"{formatted_process_time} ms",
        }
    }

    api_logger.info(log_data)

    return Response(
        content=response_body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
    )


@app.exception_handler(RequestValidationError)
def validation_exception_handler(_request: Request, exception: RequestValidationError):
    api_logger.exception(
        f"Erro de validação nos dados recebidos da requisição: {exception.errors()}",
        exc_info=exception,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(
            {"error": "invalid_argument", "detail": exception.errors()}
        ),
    )


@app.exception_handler(ApiError)
async def api_error_handler(_request: Request, exception: ApiError):
    api_logger.exception(
        f"Erro [{exception.code}] ao processar a requisição: {exception.detail}",
        exc_info=exception,
    )

    return JSONResponse(
        status_code=exception.status_code,
        content={"error": exception.code, "detail": exception.detail},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exception: StarletteHTTPException):
    api_logger.exception(
        f"Erro identificado ao processar a requisição: {exception.detail}",
        exc_info=exception,
    )

    return JSONResponse(
        status_code=exception.status_code,
        content={
            "error": ERROR_CODES_BY_STATUS.get(exception.status_code, "internal_error"),
            "detail": exception.detail,
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(_request: Request, exception: Exception):
    api_logger.exception(
        f"Erro desconhecido ao processar a requisição: {exception}", exc_info=exception
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": f"Erro desconhecido: {exception}"},
    )


handler = Mangum(app)
