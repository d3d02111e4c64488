"""Data models for DSN extraction."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict


class CredentialSource(str, Enum):
    """Where a credential pair was found."""

    HEADER = "header"
    QUERY = "query"


class EndpointKind(str, Enum):
    """Sentry ingestion endpoint shapes."""

    STORE = "store"
    ENVELOPE = "envelope"
    LEGACY_STORE = "legacy_store"


@dataclass(frozen=True)
class Credentials:
    """Public/secret key pair. The secret is empty when not supplied."""

    public_key: str
    secret_key: str = ""


@dataclass(frozen=True)
class ResolvedCredentials:
    """Credentials tagged with the source they were read from."""

    source: CredentialSource
    credentials: Credentials


@dataclass(frozen=True)
class PathMatch:
    """Result of classifying a request path."""

    endpoint: EndpointKind
    project_id: str = ""


class DSN(BaseModel):
    """
    Client DSN recovered from an inbound request.

    Format: https://<public_key>[:<secret_key>]@<host>/<project_id>

    ``url`` is empty for the legacy ``/api/store/`` endpoint, where the
    project has to be looked up from the public key downstream.
    """

    model_config = ConfigDict(frozen=True)

    url: str = ""
    host: str
    project_id: str = ""
    public_key: str
    secret_key: str = ""

    @property
    def is_legacy(self) -> bool:
        return not self.project_id

    def __str__(self) -> str:
        return self.url
