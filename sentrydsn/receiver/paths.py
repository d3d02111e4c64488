"""Classification of Sentry ingestion paths."""

import re
from typing import List

import structlog

from .errors import MissingProjectIDError
from .models import EndpointKind, PathMatch

logger = structlog.get_logger(__name__)

API_SEGMENT = "api"

# ASCII digits only, str.isdigit() would accept other scripts
PROJECT_ID_PATTERN = re.compile(r"[0-9]+", re.ASCII)

# Checked in this order
PROJECT_ENDPOINTS = (
    (EndpointKind.STORE, "store"),
    (EndpointKind.ENVELOPE, "envelope"),
)
LEGACY_STORE_SEGMENTS = [API_SEGMENT, "store"]


def split_path(path: str) -> List[str]:
    """Split a URL path into segments, collapsing repeated separators."""
    return [segment for segment in path.split("/") if segment]


def classify_path(path: str) -> PathMatch:
    """
    Match a request path against the known ingestion endpoints.

    Recognised shapes, in priority order:
        /api/<project_id>/store/
        /api/<project_id>/envelope/
        /api/store/                  (legacy, no project id)

    Repeated slashes collapse and the trailing slash is optional. The
    project endpoints may sit below a prefix (e.g. ``/sentry/api/1/store/``)
    but must end the path. The legacy endpoint must be the whole path.

    Args:
        path: URL path component

    Returns:
        PathMatch with the endpoint kind and project id ("" for legacy)

    Raises:
        MissingProjectIDError: If the path matches none of the shapes
    """
    segments = split_path(path or "")

    if len(segments) >= 3:
        api, project_id, endpoint = segments[-3:]
        if api == API_SEGMENT and PROJECT_ID_PATTERN.fullmatch(project_id):
            for kind, name in PROJECT_ENDPOINTS:
                if endpoint == name:
                    return PathMatch(endpoint=kind, project_id=project_id)

    if segments == LEGACY_STORE_SEGMENTS:
        return PathMatch(endpoint=EndpointKind.LEGACY_STORE)

    logger.debug("dsn_path_unrecognized", path=path)
    raise MissingProjectIDError()
