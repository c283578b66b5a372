"""Immutable token description and its fluent builder."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from .claims import (
    APPLICATION_ID_CLAIM,
    DEFAULT_CLAIMS_MODES,
    EXPIRES_AT_CLAIM,
    ISSUED_AT_CLAIM,
    JWT_ID_CLAIM,
    NOT_BEFORE_CLAIM,
    SUBJECT_CLAIM,
    ClaimValue,
    copy_claim_value,
    is_blank,
    to_datetime,
)
from .exceptions import (
    ConfigurationError,
    InvalidApplicationIdError,
    InvalidClaimError,
    KeySpecError,
    MissingApplicationIdError,
    MissingCredentialsError,
    MissingPrivateKeyError,
)
from .generator import JwtGenerator, fill_default_claims
from .keys import SIGNING_ALGORITHMS, KeyConverter
from .verification import verify_signature

if TYPE_CHECKING:  # pragma: no cover
    from .config import JwtConfig

__all__ = ["Jwt", "JwtBuilder"]


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Jwt:
    """Immutable description of a token for one application.

    ``claims`` always starts with the ``application_id`` claim. Instances are
    produced by ``JwtBuilder.build`` and are safe to share between threads.
    """

    application_id: uuid.UUID
    private_key_contents: str = field(repr=False)
    claims: Mapping[str, ClaimValue]
    signed: bool = True

    @staticmethod
    def builder() -> "JwtBuilder":
        return JwtBuilder()

    @staticmethod
    def verify_signature(token: str, secret: str) -> bool:
        """Return True iff ``token`` was signed by the HMAC-SHA256 ``secret``."""

        return verify_signature(token, secret)

    def generate(self, key_converter: Optional[KeyConverter] = None) -> str:
        """Generate the compact token; see ``JwtGenerator.generate``.

        The signing algorithm is the first one listed for the converter's key
        family, so RSA keys sign RS256 and EC keys sign ES256.
        """

        converter = key_converter or KeyConverter()
        algorithm = SIGNING_ALGORITHMS[converter.algorithm][0]
        return JwtGenerator(converter, algorithm=algorithm).generate(self)

    @property
    def issued_at(self) -> Optional[datetime]:
        return to_datetime(self.claims.get(ISSUED_AT_CLAIM))

    @property
    def not_before(self) -> Optional[datetime]:
        return to_datetime(self.claims.get(NOT_BEFORE_CLAIM))

    @property
    def expires_at(self) -> Optional[datetime]:
        return to_datetime(self.claims.get(EXPIRES_AT_CLAIM))

    @property
    def id(self) -> Optional[str]:
        return self.claims.get(JWT_ID_CLAIM)

    @property
    def subject(self) -> Optional[str]:
        return self.claims.get(SUBJECT_CLAIM)


class JwtBuilder:
    """Accumulates token settings; ``build`` validates and freezes them.

    A builder may be reused: ``build`` copies the accumulated claims, so
    settings added afterwards never reach an already built ``Jwt``. Builders
    are not safe for concurrent mutation.
    """

    def __init__(
        self,
        *,
        default_claims_mode: str = "generate",
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        if default_claims_mode not in DEFAULT_CLAIMS_MODES:
            raise ConfigurationError(
                f"default_claims_mode must be one of {', '.join(DEFAULT_CLAIMS_MODES)}, "
                f"got '{default_claims_mode}'"
            )

        self._application_id: Optional[uuid.UUID] = None
        self._private_key = ""
        self._signed = True
        self._claims: dict[str, ClaimValue] = {}
        self._default_claims_mode = default_claims_mode
        self._clock = clock
        self._id_factory = id_factory

    @classmethod
    def from_config(cls, config: "JwtConfig") -> "JwtBuilder":
        """Start a builder pre-populated from configuration."""

        builder = cls(default_claims_mode=config.default_claims_mode)
        if config.application_id:
            builder.application_id(config.application_id)
        if config.private_key_path:
            builder.private_key_path(config.private_key_path)
        return builder

    @property
    def signed(self) -> bool:
        return self._signed

    @property
    def private_key(self) -> str:
        return self._private_key

    def application_id(self, application_id: Union[uuid.UUID, str]) -> "JwtBuilder":
        if isinstance(application_id, uuid.UUID):
            self._application_id = application_id
            return self

        if not isinstance(application_id, str):
            raise InvalidApplicationIdError(
                f"application id must be a UUID or string, got {type(application_id).__name__}"
            )
        try:
            self._application_id = uuid.UUID(application_id)
        except ValueError as exc:
            raise InvalidApplicationIdError(f"'{application_id}' is not a valid UUID") from exc
        return self

    def unsigned(self) -> "JwtBuilder":
        """Mark the token as unsigned so no private key is required."""

        self._signed = False
        return self

    def private_key_contents(self, private_key_contents: str) -> "JwtBuilder":
        if not isinstance(private_key_contents, str):
            raise KeySpecError(
                f"private key contents must be text, got {type(private_key_contents).__name__}"
            )

        self._private_key = private_key_contents
        self._signed = not is_blank(private_key_contents)
        return self

    def private_key_path(self, private_key_path: Union[str, "os.PathLike[str]"]) -> "JwtBuilder":
        """Read the whole key file; raises OSError if it cannot be read."""

        contents = Path(private_key_path).read_text(encoding="utf-8")
        return self.private_key_contents(contents)

    def claims(self, claims: Mapping[str, Any]) -> "JwtBuilder":
        """Merge ``claims`` into the existing claims; new values win."""

        if not isinstance(claims, Mapping):
            raise InvalidClaimError(f"claims must be a mapping, got {type(claims).__name__}")
        for key, value in claims.items():
            self.add_claim(key, value)
        return self

    def add_claim(self, key: str, value: Any) -> "JwtBuilder":
        if not isinstance(key, str):
            raise InvalidClaimError(f"claim key must be a string, got {key!r}")

        self._claims[key] = copy_claim_value(value, path=key)
        return self

    def issued_at(self, iat: datetime) -> "JwtBuilder":
        return self.add_claim(ISSUED_AT_CLAIM, iat)

    def id(self, jti: str) -> "JwtBuilder":
        return self.add_claim(JWT_ID_CLAIM, jti)

    def not_before(self, nbf: datetime) -> "JwtBuilder":
        return self.add_claim(NOT_BEFORE_CLAIM, nbf)

    def expires_at(self, exp: datetime) -> "JwtBuilder":
        return self.add_claim(EXPIRES_AT_CLAIM, exp)

    def subject(self, subject: str) -> "JwtBuilder":
        return self.add_claim(SUBJECT_CLAIM, subject)

    def build(self) -> Jwt:
        """Validate the accumulated settings and return an immutable ``Jwt``.

        Raises MissingCredentialsError, MissingApplicationIdError or
        MissingPrivateKeyError, checked in that order.
        """

        self._validate()

        claims: dict[str, ClaimValue] = {APPLICATION_ID_CLAIM: str(self._application_id)}
        for key, value in self._claims.items():
            if key != APPLICATION_ID_CLAIM:
                claims[key] = copy_claim_value(value, path=key)

        if self._default_claims_mode == "build":
            defaults: dict[str, Any] = {}
            if self._clock is not None:
                defaults["clock"] = self._clock
            if self._id_factory is not None:
                defaults["id_factory"] = self._id_factory
            fill_default_claims(claims, **defaults)

        logger.debug(
            "Built token description",
            extra={
                "application_id": str(self._application_id),
                "signed": self._signed,
                "claim_names": list(claims),
            },
        )
        return Jwt(
            application_id=self._application_id,
            private_key_contents=self._private_key,
            claims=MappingProxyType(claims),
            signed=self._signed,
        )

    def _validate(self) -> None:
        if self._application_id is None and not self._private_key:
            raise MissingCredentialsError("Both an Application ID and Private Key are required.")
        if self._application_id is None:
            raise MissingApplicationIdError("Application ID is required.")
        if self._signed and is_blank(self._private_key):
            raise MissingPrivateKeyError("Private Key is required for signed token.")
