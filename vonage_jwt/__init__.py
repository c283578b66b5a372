"""Build, sign and verify application JWTs."""

from .claims import (  # noqa: F401
    APPLICATION_ID_CLAIM,
    DEFAULT_CLAIMS_MODES,
    ClaimValue,
)
from .config import JwtConfig  # noqa: F401
from .exceptions import (  # noqa: F401
    ConfigurationError,
    InvalidApplicationIdError,
    InvalidClaimError,
    JwtBuildError,
    JwtError,
    KeySpecError,
    MissingApplicationIdError,
    MissingCredentialsError,
    MissingPrivateKeyError,
)
from .generator import JwtGenerator  # noqa: F401
from .keys import KeyConverter  # noqa: F401
from .token import Jwt, JwtBuilder  # noqa: F401
from .verification import verify_signature  # noqa: F401

__version__ = "2.0.0"

__all__ = [
    "Jwt",
    "JwtBuilder",
    "JwtGenerator",
    "KeyConverter",
    "JwtConfig",
    "verify_signature",
    "APPLICATION_ID_CLAIM",
    "DEFAULT_CLAIMS_MODES",
    "ClaimValue",
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
