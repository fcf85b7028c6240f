"""Subprocess execution returning Results.

Two flavours:
- ``run`` captures stdout/stderr; used for git and gh queries whose output
  is parsed or whose error text is shown to the operator.
- ``run_silent`` lets the child write straight to the terminal; used for the
  build and packaging tools so their diagnostics reach the operator as they
  are produced.

Commands are always argv lists, never shell strings.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not start, timed out, or exited non-zero.

    Attributes:
        command: argv that was executed
        returncode: exit code, or -1 when the process never completed
        stdout: captured standard output (empty for run_silent)
        stderr: captured standard error, or the launch/timeout reason
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def detail(self) -> str:
        """Most useful diagnostic text: stderr, else stdout, else the summary."""
        return self.stderr.strip() or self.stdout.strip() or str(self)


def _timeout_error(cmd: list[str], timeout: float | None, stdout: object) -> ProcessError:
    return ProcessError(
        command=tuple(cmd),
        returncode=-1,
        stdout=stdout if isinstance(stdout, str) else "",
        stderr=f"Command timed out after {timeout}s",
    )


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and capture its output.

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.

    Example:
        match run(["git", "tag", "--list", "v1.4.0"], cwd=root):
            case Ok(out):
                exists = out.strip() == "v1.4.0"
            case Err(e):
                print(e.detail)
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(_timeout_error(cmd, timeout, e.stdout))
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    input: str | None = None,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output going straight to the terminal.

    Args:
        cmd: argv to execute
        cwd: working directory
        env: environment (inherits the current one if None)
        input: text written to the child's stdin, e.g. ``"y\\n"`` to accept
            a confirmation prompt; stdin is inherited when None
        timeout: seconds before the child is killed (None for no limit)

    Returns:
        Ok(None) on exit 0, Err(ProcessError) otherwise. Output is not
        captured, so the error only carries the exit code.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            input=input,
            text=input is not None,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(_timeout_error(cmd, timeout, None))
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
