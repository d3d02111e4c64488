"""Error kinds raised while deriving a DSN from a request."""

from enum import Enum


class DSNErrorKind(str, Enum):
    """Closed set of DSN extraction failures."""

    MISSING_CREDENTIALS = "missing_credentials"
    MISSING_PROJECT_ID = "missing_project_id"


class DSNError(Exception):
    """Base class for DSN extraction failures."""

    kind: DSNErrorKind

    def __init__(self, message: str, kind: DSNErrorKind):
        super().__init__(message)
        self.kind = kind


class MissingCredentialsError(DSNError):
    """Neither the auth header nor the query string yielded a public key."""

    def __init__(self, message: str = "sentry: missing public key"):
        super().__init__(message, DSNErrorKind.MISSING_CREDENTIALS)


class MissingProjectIDError(DSNError):
    """The request path matches no known ingestion endpoint."""

    def __init__(self, message: str = "sentry: failed to parse project ID from path"):
        super().__init__(message, DSNErrorKind.MISSING_PROJECT_ID)
