"""Recover a client's DSN from an inbound Sentry ingestion request."""

from typing import Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import structlog
from starlette.requests import Request

from .auth import SENTRY_AUTH_HEADER, DSNAuth
from .errors import MissingCredentialsError, MissingProjectIDError
from .models import DSN, Credentials
from .paths import PROJECT_ID_PATTERN, classify_path

logger = structlog.get_logger(__name__)

DEFAULT_SCHEME = "https"

dsn_auth = DSNAuth()


def build_dsn(
    credentials: Credentials, host: str, project_id: str, scheme: str = DEFAULT_SCHEME
) -> DSN:
    """
    Assemble a DSN record from its parts.

    An empty project id (legacy /api/store/ endpoint) leaves ``url`` empty so
    callers can still look the project up by public key.
    """
    url = ""
    if project_id and credentials.public_key:
        userinfo = credentials.public_key
        if credentials.secret_key:
            userinfo = f"{userinfo}:{credentials.secret_key}"
        url = f"{scheme}://{userinfo}@{host}/{project_id}"

    return DSN(
        url=url,
        host=host,
        project_id=project_id,
        public_key=credentials.public_key,
        secret_key=credentials.secret_key,
    )


def extract_dsn(
    url: str,
    auth_header: Optional[str],
    fallback_host: str = "",
    scheme: str = DEFAULT_SCHEME,
) -> DSN:
    """
    Derive the client DSN of a request.

    Some routers and proxies strip the host from the request URL, in which
    case ``fallback_host`` (the transport level Host header) is used. A URL
    without a scheme is read as a request target: everything before ``?``
    is the path, so ``//api//1/store/`` is not mistaken for a host.

    The URL host keeps its original case and loses its port.

    Args:
        url: Full request URL or request target, including the query string
        auth_header: X-Sentry-Auth header value, if any
        fallback_host: Host to use when the URL carries none
        scheme: Scheme of the assembled DSN

    Returns:
        The DSN record

    Raises:
        MissingProjectIDError: If the path is not a known ingestion endpoint
            or the URL cannot be parsed. Checked before credentials.
        MissingCredentialsError: If neither the header nor the query string
            carries a public key
    """
    host, path, query = _split_request_url(url or "")
    host = host or fallback_host

    match = classify_path(path)

    resolved = dsn_auth.resolve_credentials(auth_header, parse_qs(query))

    dsn = build_dsn(resolved.credentials, host, match.project_id, scheme=scheme)

    logger.debug(
        "dsn_extracted",
        host=host,
        project_id=match.project_id,
        endpoint=match.endpoint.value,
        credential_source=resolved.source.value,
    )
    return dsn


def dsn_from_request(
    request: Request,
    auth_header_name: str = SENTRY_AUTH_HEADER,
    scheme: str = DEFAULT_SCHEME,
) -> DSN:
    """
    Derive the client DSN of a Starlette/FastAPI request.

    Only the request target (path and query) is passed on, so the host
    comes from the Host header, or from the server address when the
    header is missing.
    """
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"

    return extract_dsn(
        target,
        request.headers.get(auth_header_name),
        fallback_host=request.headers.get("host") or request.url.netloc,
        scheme=scheme,
    )


def parse_dsn(dsn: str) -> DSN:
    """
    Split a DSN string back into a DSN record.

    DSN format: https://<public_key>[:<secret_key>]@<host>/<project_id>

    Raises:
        MissingCredentialsError: If the DSN has no public key
        MissingProjectIDError: If the DSN path does not end in a project id,
            or its host or port is malformed
    """
    try:
        parts = urlsplit(dsn or "")
        # Raises ValueError for a non-numeric or out of range port
        parts.port
    except ValueError:
        raise MissingProjectIDError("sentry: malformed DSN host")

    if not parts.username:
        raise MissingCredentialsError()

    project_id = parts.path.rstrip("/").rsplit("/", 1)[-1]
    if not PROJECT_ID_PATTERN.fullmatch(project_id):
        raise MissingProjectIDError()

    return DSN(
        url=dsn,
        host=parts.netloc.rpartition("@")[2],
        project_id=project_id,
        public_key=parts.username,
        secret_key=parts.password or "",
    )


def _split_request_url(url: str) -> Tuple[str, str, str]:
    """Return (host, path, query) of an absolute URL or a request target."""
    # A request target may start with "//", which urlsplit reads as a host
    if url.startswith("/"):
        return ("",) + _split_target(url)

    try:
        parts = urlsplit(url)
    except ValueError:
        # Unclosed IPv6 literal
        raise MissingProjectIDError("sentry: malformed request URL")

    if not parts.scheme:
        return ("",) + _split_target(url)

    return _strip_port(parts.netloc.rpartition("@")[2]), parts.path, parts.query


def _strip_port(netloc_host: str) -> str:
    if netloc_host.startswith("["):
        return netloc_host[: netloc_host.find("]") + 1]
    return netloc_host.partition(":")[0]


def _split_target(target: str) -> Tuple[str, str]:
    path, _, query = target.split("#", 1)[0].partition("?")
    return path, query
