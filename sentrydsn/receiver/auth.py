"""Credential extraction for Sentry SDK requests."""

import re
from typing import Mapping, Optional, Sequence, Union

import structlog

from .errors import MissingCredentialsError
from .models import CredentialSource, Credentials, ResolvedCredentials

logger = structlog.get_logger(__name__)

SENTRY_AUTH_HEADER = "X-Sentry-Auth"

PUBLIC_KEY_PATTERN = re.compile(r"^sentry_key=([a-f0-9]{32})$")
SECRET_KEY_PATTERN = re.compile(r"^sentry_secret=([a-f0-9]{32})$")

QueryParams = Mapping[str, Union[str, Sequence[str]]]


class DSNAuth:
    """
    Sentry credential extractor.

    X-Sentry-Auth header format:
    Sentry sentry_version=7, sentry_client=sentry.python/1.0.0,
           sentry_key=<public_key>, sentry_secret=<secret_key>

    Or query parameters:
    ?sentry_key=<public_key>&sentry_secret=<secret_key>&sentry_version=7

    Credentials are taken from exactly one of the two sources, the header
    being tried first.
    """

    def parse_auth_header(self, header: Optional[str]) -> Credentials:
        """
        Parse the key pair out of an X-Sentry-Auth header.

        Args:
            header: Raw X-Sentry-Auth header value

        Returns:
            Credentials with the public key and, if present, the secret key

        Raises:
            MissingCredentialsError: If the header is empty or has no sentry_key
        """
        if not header:
            raise MissingCredentialsError()

        # Drop the "Sentry" scheme token, unless the header was sent without one
        parts = header.strip().split(None, 1)
        if len(parts) == 2 and "=" not in parts[0]:
            header = parts[1]
        elif len(parts) == 1 and "=" not in parts[0]:
            header = ""

        public_key = ""
        secret_key = ""
        for segment in header.split(","):
            segment = segment.strip()

            match = PUBLIC_KEY_PATTERN.match(segment)
            if match:
                public_key = match.group(1)

            match = SECRET_KEY_PATTERN.match(segment)
            if match:
                secret_key = match.group(1)

        if not public_key:
            raise MissingCredentialsError()

        return Credentials(public_key=public_key, secret_key=secret_key)

    def parse_query_params(self, query_params: Optional[QueryParams]) -> Credentials:
        """
        Read the key pair from URL query parameters.

        Args:
            query_params: Mapping of parameter name to a value or a list of
                values (as returned by ``urllib.parse.parse_qs``)

        Returns:
            Credentials read from sentry_key and sentry_secret

        Raises:
            MissingCredentialsError: If sentry_key is absent or empty
        """
        query_params = query_params or {}

        public_key = _first_value(query_params.get("sentry_key"))
        if not public_key:
            raise MissingCredentialsError()

        secret_key = _first_value(query_params.get("sentry_secret"))
        return Credentials(public_key=public_key, secret_key=secret_key)

    def resolve_credentials(
        self, auth_header: Optional[str], query_params: Optional[QueryParams] = None
    ) -> ResolvedCredentials:
        """
        Resolve credentials from the header, falling back to the query string.

        Values from the two sources are never mixed: a header carrying only a
        secret does not borrow the public key from the query string.

        Raises:
            MissingCredentialsError: If neither source has a public key
        """
        try:
            credentials = self.parse_auth_header(auth_header)
            source = CredentialSource.HEADER
        except MissingCredentialsError:
            credentials = self.parse_query_params(query_params)
            source = CredentialSource.QUERY

        logger.debug(
            "dsn_credentials_resolved",
            source=source.value,
            public_key=credentials.public_key,
            has_secret=bool(credentials.secret_key),
        )
        return ResolvedCredentials(source=source, credentials=credentials)


def _first_value(value: Union[str, Sequence[str], None]) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value[0] if value else ""
