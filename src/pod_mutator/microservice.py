"""
FastAPI entry point: load controllers and expose the admission webhook.
"""

from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi_router_controller import Controller
from starlette.middleware.base import BaseHTTPMiddleware

from pod_mutator.common.config import Option
from pod_mutator.common.error_types import ApplicationError
from pod_mutator.entities.directives import DirectiveKind

from . import controllers
from .dependencies import get_config, get_logger

config = get_config()
logger = get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info("Admission webhook ready, recognized annotations: %s", ", ".join(kind.value for kind in DirectiveKind))
    yield


app = FastAPI(
    lifespan=lifespan,
    title=config.get(Option.APP_NAME, "pod-mutator"),
    description=config.get(Option.APP_DESCRIPTION, "Mutating admission webhook for Pods"),
    version=config.get(Option.APP_VERSION, "0.1.0"),
    docs_url=config.get(Option.API_DOCS_PATH, "/docs"),
    openapi_tags=[
        {
            "name": config.get(Option.APP_NAME, "pod-mutator"),
            "description": config.get(Option.APP_DESCRIPTION, "Mutating admission webhook for Pods"),
        }
    ],
)


# region Middlewares
if config.get_bool(Option.LOG_REQUESTS_ENABLED):

    class LoggingMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next):
            logger.debug(f"Request {request.method} to {request.url}")
            body = await request.body()
            logger.debug(f"Request body: {body.decode('utf-8') if body else 'None'}")

            response = await call_next(request)

            logger.debug(f"Response status code: {response.status_code}")
            return response

    app.add_middleware(LoggingMiddleware)
# endregion / Middlewares


# region Exception Handlers
async def _exception_handler_for_application_exceptions(_request: Request, exc: Exception):
    """Map `ApplicationError` to a json response with the error's status code"""
    assert isinstance(exc, ApplicationError)
    logger.error("Rejected request: %s", exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def _exception_handler_to_enforce_json(_request: Request, exc: Exception):
    """Ensure to return a json response (matching ApiErrorResponseDto) in case of error"""
    if isinstance(exc, HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    logger.exception("Unexpected error: %s", exc)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, content={"detail": f"{exc.__class__.__name__}: {exc}"}
    )


app.add_exception_handler(ApplicationError, _exception_handler_for_application_exceptions)
app.add_exception_handler(Exception, _exception_handler_to_enforce_json)
# endregion / Exception Handlers


api_versions_to_load = filter(None, str(config.get(Option.API_VERSIONS, "v1")).split(","))
controllers.load(api_versions_to_load)
routers = Controller.routers()
for router in sorted(routers, key=lambda r: r.prefix):
    app.include_router(router)
