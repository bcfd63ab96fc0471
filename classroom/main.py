import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from classroom.api.auth.router import router as auth_router
from classroom.api.chat.router import router as chat_router
from classroom.api.classes.classes_router import lecturer_router, router as classes_router
from classroom.api.enrollments.router import router as enrollments_router
from classroom.api.recordings.router import router as recordings_router
from classroom.api.users.router import router as users_router
from classroom.core.config import settings
from classroom.core.exceptions import ServiceError
from classroom.db.session import create_all

logger = logging.getLogger(__name__)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = str(first.get("msg") or "Invalid request")
    # pydantic prefixes custom validator errors with "Value error, "
    return message.removeprefix("Value error, ")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": _first_validation_message(exc)})


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("Service error on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        await create_all()
    yield


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Virtual Classroom Backend", lifespan=lifespan)

    # CORS: credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(classes_router)
    app.include_router(lecturer_router)
    app.include_router(enrollments_router)
    app.include_router(chat_router)
    app.include_router(recordings_router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
