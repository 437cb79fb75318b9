"""HTTP surface of the group resolution service."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from postlink.config.settings import Settings
from postlink.database.connection import Database
from postlink.database.repositories.group_repository import GroupRepository
from postlink.database.repositories.post_repository import PostRepository
from postlink.logging.logger import Log
from postlink.resolution.exceptions import GroupNotFoundError
from postlink.resolution.models import MatchStrategy
from postlink.resolution.resolver import GroupResolver
from postlink.service.exceptions import (
    MethodNotAllowedError,
    ServiceError,
    UnknownError,
    ValidationError,
)
from postlink.service.schemas import UploadResponseBody, parse_upload_request
from postlink.service.service import UploadService

router = APIRouter()


def get_upload_service(request: Request) -> UploadService:
    service: UploadService = request.app.state.upload_service
    return service


@router.post("/uploads")
async def create_upload(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise ValidationError(
            {"reason": f"body is not valid JSON: {exc}"},
            summary="Malformed request body",
        ) from exc

    upload_request = parse_upload_request(payload)
    try:
        outcome = await run_in_threadpool(service.create_post, upload_request)
    except (ServiceError, GroupNotFoundError):
        raise
    except Exception as exc:
        Log.exception(f"Error in uploads handler: {exc}")
        raise UnknownError(str(exc)) from exc

    message = (
        "File uploaded using fallback group"
        if outcome.matched_via is MatchStrategy.FALLBACK
        else "File uploaded successfully"
    )
    body = UploadResponseBody(
        message=message,
        group=outcome.group_id,
        matched_via=outcome.matched_via.value,
        matched_candidate=outcome.matched_candidate,
        members_copied=outcome.members_copied,
        post_id=outcome.post_id,
    )
    return body.model_dump(by_alias=True)


async def _service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        Log.error(f"Request failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _group_not_found_handler(
    _request: Request, exc: GroupNotFoundError
) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": "Group not found for filename",
            "details": {"originalFileName": exc.original_file_name},
        },
    )


async def _http_error_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 405:
        error = MethodNotAllowedError({"allowed": ["POST"]})
        return JSONResponse(
            status_code=405,
            content=error.to_body(),
            headers={"Allow": "POST"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "details": {}},
        headers=exc.headers,
    )


def create_app(
    service: UploadService,
    settings: Settings,
    database: Database | None = None,
) -> FastAPI:
    """Build the FastAPI application around an already constructed service."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        try:
            yield
        finally:
            if database is not None:
                database.close()
                Log.info("Database pool closed")

    app = FastAPI(title="postlink", lifespan=lifespan)
    app.state.upload_service = service
    app.include_router(router, prefix=settings.api_prefix)
    handlers = (
        (ServiceError, _service_error_handler),
        (GroupNotFoundError, _group_not_found_handler),
        (StarletteHTTPException, _http_error_handler),
    )
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, handler)  # type: ignore[arg-type]
    return app


def build_app(settings: Settings) -> FastAPI:
    """Wire database, repositories, resolver and service from settings."""
    database = Database.from_settings(settings)
    resolver = GroupResolver(
        GroupRepository(database),
        fallback_group_id=settings.fallback_group_id or None,
    )
    if settings.fallback_group_id:
        Log.warning(
            f"Fallback group '{settings.fallback_group_id}' is enabled; "
            "unresolved uploads will be shared with its members"
        )
    service = UploadService(resolver, PostRepository(database))
    return create_app(service, settings, database=database)
