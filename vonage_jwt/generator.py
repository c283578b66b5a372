"""Turn a built ``Jwt`` into a compact token string."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, MutableMapping, Optional

from jose import jwt  # type: ignore[import]
from jose.exceptions import JOSEError  # type: ignore[import]
from jose.utils import base64url_encode  # type: ignore[import]

from .claims import (
    APPLICATION_ID_CLAIM,
    ISSUED_AT_CLAIM,
    JWT_ID_CLAIM,
    TIME_CLAIMS,
    is_blank,
    to_epoch_seconds,
    to_json_value,
)
from .exceptions import ConfigurationError, KeySpecError
from .keys import SIGNING_ALGORITHMS, KeyConverter

if TYPE_CHECKING:  # pragma: no cover
    from .config import JwtConfig
    from .token import Jwt

__all__ = ["JwtGenerator", "fill_default_claims", "UNSIGNED_ALGORITHM"]


logger = logging.getLogger(__name__)

_DEFAULT_ALGORITHM = "RS256"
UNSIGNED_ALGORITHM = "none"
_TOKEN_HEADERS = {"typ": "JWT"}


def _now_seconds() -> int:
    return int(time.time())


def _random_token_id() -> str:
    return str(uuid.uuid4())


def fill_default_claims(
    claims: MutableMapping[str, Any],
    clock: Callable[[], int] = _now_seconds,
    id_factory: Callable[[], str] = _random_token_id,
) -> MutableMapping[str, Any]:
    """Set ``iat`` and ``jti`` in place when they are missing or blank."""

    if is_blank(claims.get(ISSUED_AT_CLAIM)):
        claims[ISSUED_AT_CLAIM] = int(clock())
    if is_blank(claims.get(JWT_ID_CLAIM)):
        claims[JWT_ID_CLAIM] = id_factory()
    return claims


class JwtGenerator:
    """Produce signed (or unsecured) compact tokens from ``Jwt`` objects.

    Time claims given as datetimes are converted to epoch seconds, ``iat`` and
    ``jti`` are defaulted on every call, and signing is delegated to
    python-jose. Tokens without key material carry ``alg: none`` and an empty
    signature segment.
    """

    def __init__(
        self,
        key_converter: Optional[KeyConverter] = None,
        *,
        algorithm: str = _DEFAULT_ALGORITHM,
        clock: Optional[Callable[[], int]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._key_converter = key_converter or KeyConverter()
        allowed = SIGNING_ALGORITHMS[self._key_converter.algorithm]
        if algorithm not in allowed:
            raise ConfigurationError(
                f"signing algorithm '{algorithm}' cannot be used with "
                f"{self._key_converter.algorithm} keys (expected one of: {', '.join(allowed)})"
            )

        self._algorithm = algorithm
        self._clock = clock or _now_seconds
        self._id_factory = id_factory or _random_token_id

    @classmethod
    def from_config(cls, config: "JwtConfig", **kwargs: Any) -> "JwtGenerator":
        return cls(
            KeyConverter(config.key_algorithm),
            algorithm=config.signing_algorithm,
            **kwargs,
        )

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def generate(self, token: "Jwt") -> str:
        """Return the compact serialization of ``token``."""

        payload = self.payload(token)

        if not is_blank(token.private_key_contents):
            private_key = self._key_converter.private_key(token.private_key_contents)
            try:
                compact = jwt.encode(payload, private_key, algorithm=self._algorithm, headers=_TOKEN_HEADERS)
            except JOSEError as exc:
                raise KeySpecError(f"private key cannot sign {self._algorithm} tokens") from exc
            algorithm = self._algorithm
        else:
            compact = self._encode_unsigned(payload)
            algorithm = UNSIGNED_ALGORITHM

        logger.debug(
            "Generated application token",
            extra={
                "application_id": str(token.application_id),
                "algorithm": algorithm,
                "claim_names": list(payload),
            },
        )
        return compact

    def payload(self, token: "Jwt") -> dict[str, Any]:
        """Build the ordered claim set that will be serialized for ``token``."""

        claims: dict[str, Any] = {APPLICATION_ID_CLAIM: str(token.application_id)}
        for name, value in token.claims.items():
            if name == APPLICATION_ID_CLAIM:
                continue
            if name in TIME_CLAIMS and isinstance(value, datetime):
                claims[name] = to_epoch_seconds(value)
            else:
                claims[name] = to_json_value(value)

        return dict(fill_default_claims(claims, self._clock, self._id_factory))

    @staticmethod
    def _encode_unsigned(payload: dict[str, Any]) -> str:
        header = {"alg": UNSIGNED_ALGORITHM, **_TOKEN_HEADERS}
        segments = (
            base64url_encode(json.dumps(header, separators=(",", ":"), sort_keys=True).encode("utf-8")),
            base64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8")),
            b"",
        )
        return b".".join(segments).decode("utf-8")
