"""Claim names and claim-value handling shared by the builder and generator."""

from __future__ import annotations

import calendar
import math
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence, Union

from .exceptions import InvalidClaimError

__all__ = [
    "APPLICATION_ID_CLAIM",
    "ISSUED_AT_CLAIM",
    "EXPIRES_AT_CLAIM",
    "NOT_BEFORE_CLAIM",
    "JWT_ID_CLAIM",
    "SUBJECT_CLAIM",
    "TIME_CLAIMS",
    "DEFAULT_CLAIMS_MODES",
    "ClaimValue",
    "copy_claim_value",
    "is_blank",
    "to_epoch_seconds",
    "to_datetime",
    "to_json_value",
]


APPLICATION_ID_CLAIM = "application_id"
ISSUED_AT_CLAIM = "iat"
EXPIRES_AT_CLAIM = "exp"
NOT_BEFORE_CLAIM = "nbf"
JWT_ID_CLAIM = "jti"
SUBJECT_CLAIM = "sub"

TIME_CLAIMS = (ISSUED_AT_CLAIM, EXPIRES_AT_CLAIM, NOT_BEFORE_CLAIM)

# "generate": iat/jti defaulted on every generate() call
# "build": iat/jti defaulted once inside build()
DEFAULT_CLAIMS_MODES = ("generate", "build")

ClaimValue = Union[
    None,
    str,
    int,
    float,
    bool,
    datetime,
    Mapping[str, "ClaimValue"],
    Sequence["ClaimValue"],
]

_SCALARS = (str, int, float, bool, datetime, type(None))


def copy_claim_value(value: Any, *, path: str = "") -> ClaimValue:
    """Return a detached copy of ``value``, rejecting anything outside ClaimValue.

    Mappings become plain dicts and sequences become lists so that later
    mutation of the caller's objects never reaches a built token.
    """

    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidClaimError(f"claim value at '{path or '<root>'}' must be a finite number, got {value!r}")

    if isinstance(value, _SCALARS):
        return value

    if isinstance(value, Mapping):
        copied = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidClaimError(f"claim key at '{path or '<root>'}' must be a string, got {key!r}")
            copied[key] = copy_claim_value(item, path=f"{path}.{key}" if path else key)
        return copied

    if isinstance(value, (list, tuple)):
        return [copy_claim_value(item, path=f"{path}[{index}]") for index, item in enumerate(value)]

    raise InvalidClaimError(
        f"claim value at '{path or '<root>'}' has unsupported type {type(value).__name__}"
    )


def is_blank(value: Any) -> bool:
    """True for ``None`` and for strings that are empty or only whitespace."""

    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def to_epoch_seconds(value: datetime) -> int:
    """Whole seconds since the epoch; naive datetimes are taken as UTC."""

    return calendar.timegm(value.utctimetuple())


def to_datetime(value: Any) -> Optional[datetime]:
    """Read a stored time claim back as an aware UTC datetime, truncated to seconds."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return datetime.fromtimestamp(to_epoch_seconds(value), tz=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    raise InvalidClaimError(f"time claim holds {type(value).__name__}, not a timestamp")


def to_json_value(value: ClaimValue) -> Any:
    """Render nested datetimes as ISO-8601 strings for the token payload."""

    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: to_json_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_json_value(item) for item in value]
    return value
