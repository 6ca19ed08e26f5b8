import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from session_gate.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from session_gate.adapter.services.jwt_token_issuer import JwtTokenIssuer
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.session_guard import SessionGuard
from .error import ClientError, ServerError
from .middleware import register_middleware

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()]
    message = "Invalid input: " + ", ".join(f for f in fields if f) if fields else "Invalid input"
    error_dict = {"code": "VALIDATION_ERROR", "message": message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES:
            from session_gate.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(title="Session Gate", version="0.1.0", lifespan=lifespan)

    # Immutable security configuration, built once per process
    auth_settings = AuthSettings.from_config(ApplicationConfig)
    app.state.auth_settings = auth_settings
    app.state.token_issuer = JwtTokenIssuer(auth_settings)
    app.state.password_hasher = BcryptPasswordHasher(auth_settings.bcrypt_rounds)
    app.state.session_guard = SessionGuard(auth_settings, app.state.token_issuer)

    # Guard first so CORS wraps it and answers preflights
    register_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    from session_gate.api.routes import auth, health_check, pages, user

    app.include_router(health_check.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(user.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(pages.router)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
