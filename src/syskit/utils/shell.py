"""Subprocess execution for the status tools syskit scrapes."""

from __future__ import annotations

import subprocess
from typing import Sequence

from pydantic import BaseModel, Field

from syskit.utils.errors import CommandError
from syskit.utils.logging import get_logger

logger = get_logger("shell")


class CommandResult(BaseModel):
    """Captured outcome of one finished command."""

    model_config = {"frozen": True}

    args: list[str] = Field(description="Command line that was run")
    returncode: int = Field(description="Process exit status")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error (empty when merged)")

    @property
    def success(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        if self.stderr:
            return f"{self.stdout}{self.stderr}"
        return self.stdout


class CommandRunner:
    """Runs external tools synchronously and captures their text output.

    A non-zero exit status is not an error: several macOS status tools
    (``spctl --status`` among them) exit 1 to report a disabled feature.
    Only a command that cannot be spawned or does not finish raises.

    Example:
        runner = CommandRunner(timeout=5)
        result = runner.run(["/usr/bin/fdesetup", "status"])
        print(result.stdout)
    """

    def __init__(self, timeout: float | None = 10.0) -> None:
        self.timeout = timeout

    def run(self, args: Sequence[str], merge_stderr: bool = False) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            args: Program and arguments
            merge_stderr: Capture standard error into the standard output stream

        Returns:
            CommandResult with the captured text

        Raises:
            CommandError: If the program is missing, not executable, or times out
        """
        args = [str(arg) for arg in args]
        logger.debug("Running %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandError(args, "not found") from e
        except PermissionError as e:
            raise CommandError(args, "permission denied") from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(args, f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise CommandError(args, str(e)) from e

        return CommandResult(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
