"""Exception types raised while building and signing application JWTs."""

from __future__ import annotations

__all__ = [
    "JwtError",
    "ConfigurationError",
    "KeySpecError",
    "InvalidApplicationIdError",
    "InvalidClaimError",
    "JwtBuildError",
    "MissingCredentialsError",
    "MissingApplicationIdError",
    "MissingPrivateKeyError",
]


class JwtError(Exception):
    """Base exception for the vonage_jwt package."""


class ConfigurationError(JwtError):
    """Raised when an unsupported algorithm or setting is requested."""


class KeySpecError(JwtError):
    """Raised when key material cannot be decoded into a key object."""


class InvalidApplicationIdError(JwtError, ValueError):
    """Raised when an application id is not a valid UUID."""


class InvalidClaimError(JwtError, ValueError):
    """Raised when a claim key or value cannot be carried in a token."""


class JwtBuildError(JwtError):
    """Raised by ``JwtBuilder.build`` when required fields are missing."""


class MissingCredentialsError(JwtBuildError):
    pass


class MissingApplicationIdError(JwtBuildError):
    pass


class MissingPrivateKeyError(JwtBuildError):
    pass
