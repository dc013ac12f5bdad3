"""CLI wrapper: Run the test suite against in-memory SQLite."""

from __future__ import annotations

import sys

from cli._runner import run

TEST_ENV = {
    "APP_ENV": "test",
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "KEYCLOAK_URL": "http://keycloak.test",
    "KEYCLOAK_REALM": "assets",
    "OBSERVABILITY_STRUCTURED_LOGS": "false",
}


def main() -> None:
    run([sys.executable, "-m", "pytest", "-q", *sys.argv[1:]], env=TEST_ENV)
