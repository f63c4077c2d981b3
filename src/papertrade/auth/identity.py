"""Identity verification collaborators."""

import hmac
from typing import Protocol

from papertrade.core.exceptions import UnauthorizedError


class IdentityVerifier(Protocol):
    """Maps a bearer credential to a stable user id or raises UnauthorizedError."""

    def verify(self, token: str) -> str:
        ...


class StaticTokenVerifier:
    """
    Verifier backed by a fixed token -> user id table.

    Intended for development and tests; production deployments inject a
    verifier for their identity platform.
    """

    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    def verify(self, token: str) -> str:
        if not token:
            raise UnauthorizedError()
        for known, user_id in self._tokens.items():
            if hmac.compare_digest(known.encode(), token.encode()):
                return user_id
        raise UnauthorizedError("Invalid bearer token")
