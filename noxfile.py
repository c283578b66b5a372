"""Nox sessions orchestrating vonage_jwt unit suites."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import nox


PYTHON_VERSIONS = ["3.11"]
PROJECT_ROOT = Path(__file__).parent

nox.options.sessions = [
    "tests_unit_jwt",
]


def _install_test_requirements(session: nox.Session) -> None:
    """Install the package with its testing toolchain inside the session environment."""

    session.install("-e", ".[test]")


def _build_env(session: nox.Session) -> dict[str, str]:
    env = dict(session.env)
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = ":".join(part for part in (str(PROJECT_ROOT), existing) if part)
    return env


def _run_suite(session: nox.Session, suite: str, targets: Iterable[str]) -> None:
    _install_test_requirements(session)

    env = _build_env(session)
    args = ["coverage", "run", f"--context={suite}", "-m", "pytest", *targets, *session.posargs]

    session.log("Running %s suite: %s", suite, " ".join(args))
    session.run(*args, env=env)
    session.run("coverage", "report", "-m", env=env)


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(unit_jwt)")
def tests_unit_jwt(session: nox.Session) -> None:
    """Execute token builder, generator and verifier unit suites with coverage."""

    _run_suite(session, "jwt", ["tests/unit/jwt"])
