from __future__ import annotations

from http import HTTPStatus
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..logger import get_logger
from ..settings import ServerSettings, get_server_settings
from .auth import get_basic_auth_dependency
from .repositories import InMemoryRepository, Repository, get_repository
from .routers import records as records_router

logger = get_logger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "records",
        "description": "CRUD operations on collection records with sorting and cursor pagination.",
    },
]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Return errors as {"code": 404, "error": "Not Found", "message": "..."}.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": exc.status_code,
            "error": HTTPStatus(exc.status_code).phrase,
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "code": 422,
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "code": 422,
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[ServerSettings] = None,
    repository: Optional[Repository] = None,
) -> FastAPI:
    """
    Build the local record service.

    Args:
        settings: Service settings; read from the environment when omitted.
        repository: Storage backend; a fresh InMemoryRepository when omitted.
    """
    settings = settings or get_server_settings()
    repo = repository or InMemoryRepository()

    app = FastAPI(
        title="Records Service",
        description="Local record collection service with sorting and cursor pagination.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.dependency_overrides[get_repository] = lambda: repo

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Next-Page", "Total-Records"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/v1/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "http_api_version": "1.0", "paginate_by": settings.paginate_by}

    auth_dep = get_basic_auth_dependency(settings)
    app.include_router(records_router.router, dependencies=[Depends(auth_dep)])
    return app


app = create_app()
