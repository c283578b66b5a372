"""Top-level pytest configuration and shared fixtures for vonage_jwt tests."""

from __future__ import annotations

from pathlib import Path

import pytest

KEYS_DIR = Path(__file__).parent / "fixtures" / "keys"

APPLICATION_ID = "00000000-0000-4000-8000-000000000000"


def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover - configuration hook
    """Register global markers used across the repository."""

    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "jwt: Token building, signing and verification tests")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Ensure sensible default markers based on collection context."""

    for item in items:
        item.add_marker(pytest.mark.unit)

        fspath = str(item.fspath)
        if "jwt" in fspath:
            item.add_marker(pytest.mark.jwt)


@pytest.fixture
def application_id() -> str:
    return APPLICATION_ID


@pytest.fixture
def private_key_path() -> Path:
    return KEYS_DIR / "private.key"


@pytest.fixture
def private_key_contents(private_key_path: Path) -> str:
    return private_key_path.read_text(encoding="utf-8")


@pytest.fixture
def public_key_contents() -> str:
    return (KEYS_DIR / "public.key").read_text(encoding="utf-8")


@pytest.fixture
def ec_private_key_contents() -> str:
    return (KEYS_DIR / "ec_private.key").read_text(encoding="utf-8")


@pytest.fixture
def ec_public_key_contents() -> str:
    return (KEYS_DIR / "ec_public.key").read_text(encoding="utf-8")
