"""
Shared CLI runner helper.

Runs a tool inside the uv-managed environment and exits with its status.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence


def run(cmd: Sequence[str], env: Mapping[str, str] | None = None) -> None:
    """
    Run a command and propagate its exit code.

    Args:
        cmd: Command and arguments to execute
        env: Variables set for the child only when not already exported

    Example:
        >>> run([sys.executable, "-m", "pytest", "-q"], env={"APP_ENV": "test"})
    """
    child_env = {**(env or {}), **os.environ}
    result = subprocess.run(cmd, env=child_env)
    raise SystemExit(result.returncode)
