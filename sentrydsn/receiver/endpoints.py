"""FastAPI endpoints resolving the DSN of Sentry SDK requests."""

import orjson
import structlog
from fastapi import APIRouter, HTTPException, Request, Response

from ..config import settings
from .dsn import dsn_from_request
from .errors import DSNError, DSNErrorKind
from .models import DSN

logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_STATUS_CODES = {
    DSNErrorKind.MISSING_CREDENTIALS: 401,
    DSNErrorKind.MISSING_PROJECT_ID: 404,
}

ERROR_DETAILS = {
    DSNErrorKind.MISSING_CREDENTIALS: "Invalid authentication",
    DSNErrorKind.MISSING_PROJECT_ID: "Project not found",
}


def resolve_request_dsn(request: Request) -> DSN:
    """
    Resolve the DSN of a request.

    Raises:
        HTTPException: 401 without credentials, 404 for an unknown endpoint
    """
    try:
        return dsn_from_request(
            request,
            auth_header_name=settings.auth_header,
            scheme=settings.dsn_scheme,
        )
    except DSNError as e:
        logger.info(
            "dsn_resolution_failed",
            path=request.url.path,
            kind=e.kind.value,
        )
        raise HTTPException(
            status_code=ERROR_STATUS_CODES[e.kind],
            detail=ERROR_DETAILS[e.kind],
        )


@router.api_route("/{path:path}", methods=["GET", "POST"])
async def resolve_dsn(path: str, request: Request) -> Response:
    """
    Report the DSN an ingestion request was sent with.

    Accepts the store, envelope and legacy store endpoints. The legacy
    endpoint yields an empty ``dsn`` with the keys still filled in.
    """
    dsn = resolve_request_dsn(request)

    content = {
        "dsn": dsn.url,
        "host": dsn.host,
        "project_id": dsn.project_id,
        "public_key": dsn.public_key,
        "legacy": dsn.is_legacy,
    }
    return Response(
        content=orjson.dumps(content),
        media_type="application/json",
    )
