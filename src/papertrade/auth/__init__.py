"""Authentication collaborators."""

from papertrade.auth.identity import IdentityVerifier, StaticTokenVerifier

__all__ = [
    "IdentityVerifier",
    "StaticTokenVerifier",
]
