"""Token generation configuration management."""

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

from .claims import DEFAULT_CLAIMS_MODES
from .exceptions import ConfigurationError
from .keys import SIGNING_ALGORITHMS, SUPPORTED_KEY_ALGORITHMS

logger = logging.getLogger(__name__)


@dataclass
class JwtConfig:
    """Settings for building and signing application tokens."""

    # Application identity
    application_id: Optional[str] = None
    private_key_path: Optional[str] = None

    # Algorithms
    key_algorithm: str = "RSA"  # "RSA" | "EC"
    signing_algorithm: str = "RS256"

    # When iat/jti defaults are computed: "generate" | "build"
    default_claims_mode: str = "generate"

    @classmethod
    def from_env(cls) -> "JwtConfig":
        """Load configuration from environment variables."""

        logger.info("Loading JWT configuration from environment variables")
        return cls(
            application_id=os.getenv("VONAGE_APPLICATION_ID") or None,
            private_key_path=os.getenv("VONAGE_PRIVATE_KEY_PATH") or None,
            key_algorithm=os.getenv("VONAGE_JWT_KEY_ALGORITHM", "RSA").upper(),
            signing_algorithm=os.getenv("VONAGE_JWT_SIGNING_ALGORITHM", "RS256").upper(),
            default_claims_mode=os.getenv("VONAGE_JWT_DEFAULT_CLAIMS", "generate").lower(),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "JwtConfig":
        """Load configuration from JSON file."""

        try:
            logger.info(f"Loading JWT configuration from file: {config_path}")
            with open(config_path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"JWT config file not found: {config_path}, using defaults")
            return cls()
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"JWT config file {config_path} is not valid JSON") from exc

        if not isinstance(data, dict):
            raise ConfigurationError(f"JWT config file {config_path} must contain a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown JWT config keys", extra={"keys": unknown})

        config = cls(**{key: value for key, value in data.items() if key in known})
        config._normalize()
        logger.info("JWT configuration loaded successfully")
        return config

    def _normalize(self) -> None:
        """Apply the same casing rules as ``from_env``."""

        if isinstance(self.key_algorithm, str):
            self.key_algorithm = self.key_algorithm.upper()
        if isinstance(self.signing_algorithm, str):
            self.signing_algorithm = self.signing_algorithm.upper()
        if isinstance(self.default_claims_mode, str):
            self.default_claims_mode = self.default_claims_mode.lower()

    def validate(self) -> bool:
        """Validate configuration settings.

        Raises ConfigurationError for settings that would make token
        generation fail; incomplete identity settings only log a warning.
        """

        logger.info("Validating JWT configuration")

        if self.key_algorithm not in SUPPORTED_KEY_ALGORITHMS:
            raise ConfigurationError(f"Unsupported key algorithm: {self.key_algorithm}")

        allowed = SIGNING_ALGORITHMS[self.key_algorithm]
        if self.signing_algorithm not in allowed:
            raise ConfigurationError(
                f"Signing algorithm {self.signing_algorithm} does not match {self.key_algorithm} keys"
            )

        if self.default_claims_mode not in DEFAULT_CLAIMS_MODES:
            raise ConfigurationError(f"Unknown default claims mode: {self.default_claims_mode}")

        if bool(self.application_id) != bool(self.private_key_path):
            logger.warning(
                "Only one of application id and private key path is configured",
                extra={
                    "has_application_id": bool(self.application_id),
                    "has_private_key_path": bool(self.private_key_path),
                },
            )

        logger.info("JWT configuration validation completed")

        return True
