"""HMAC-SHA256 signature checks for tokens issued with a shared secret."""

from __future__ import annotations

import logging

from jose import jws  # type: ignore[import]
from jose.constants import ALGORITHMS  # type: ignore[import]

__all__ = ["verify_signature"]


logger = logging.getLogger(__name__)


def verify_signature(token: str, secret: str) -> bool:
    """Return True iff ``token`` was signed with ``secret`` using HS256.

    Malformed tokens, other algorithms and signature mismatches all yield
    False; this function does not raise.
    """

    if not isinstance(token, str) or not isinstance(secret, str):
        return False

    try:
        jws.verify(token, secret.encode("utf-8"), algorithms=[ALGORITHMS.HS256])
    except Exception as exc:  # noqa: BLE001
        logger.debug("Token signature verification failed", extra={"reason": type(exc).__name__})
        return False

    return True
