"""Async wrappers around the bedrock helper scripts.

The check script reports whether a bedrock token is already configured;
the configure script stores a new one. Both are opaque executables: this
module only spawns them, waits for them without blocking the event loop,
and reports their exit status and output.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ScriptResult(BaseModel):
    """Outcome of a finished script invocation."""

    model_config = {"frozen": True}

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_script(script: Path | str, *args: str) -> ScriptResult:
    """Run an executable directly (no shell) and collect its output.

    Raises:
        ScriptError: If the executable cannot be spawned or exits non-zero.
    """
    script = str(script)
    try:
        process = await asyncio.create_subprocess_exec(
            script,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        # ValueError: an argument holds a NUL byte and cannot reach execve.
        raise ScriptError(str(e), script=script) from e

    out, err = await process.communicate()
    result = ScriptResult(
        returncode=process.returncode,
        stdout=out.decode("utf-8", errors="replace"),
        stderr=err.decode("utf-8", errors="replace"),
    )
    if not result.ok:
        command = " ".join([script, *args])
        raise ScriptError(
            f"Command failed: {command}",
            script=script,
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


class BedrockScripts:
    """The pair of helper scripts living in one scripts directory."""

    def __init__(
        self,
        check_script: Path | str,
        configure_script: Path | str,
    ) -> None:
        self._check_script = Path(check_script)
        self._configure_script = Path(configure_script)

    @property
    def check_script(self) -> Path:
        return self._check_script

    @property
    def configure_script(self) -> Path:
        return self._configure_script

    async def check(self) -> str:
        """Run the check script and return its trimmed standard output."""
        logger.debug("Running %s", self._check_script)
        try:
            result = await run_script(self._check_script)
        except ScriptError as e:
            logger.warning("Bedrock check failed: %s", e.reason)
            raise
        return result.stdout.strip()

    async def configure(self, token: str) -> None:
        """Run the configure script with ``token`` as its only argument."""
        logger.debug("Running %s", self._configure_script)
        try:
            await run_script(self._configure_script, token)
        except ScriptError as e:
            logger.warning("Bedrock configure failed: %s", e.reason)
            raise
        logger.info("Bedrock token configured")


class ScriptError(Exception):
    """Raised when a helper script cannot be run or exits non-zero."""

    def __init__(
        self,
        message: str,
        script: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.script = script
        self.returncode = returncode
        self.stderr = stderr

    @property
    def reason(self) -> str:
        """Short description safe to log: never includes script arguments."""
        if self.returncode is None:
            return f"{self.script} could not be started"
        return f"{self.script} exited with status {self.returncode}"

    @property
    def detail(self) -> str:
        """What the caller sees: the script's stderr, else the error message."""
        return self.stderr or str(self)
