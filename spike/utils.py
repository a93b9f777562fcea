"""Filesystem checks, line handling and external command execution."""

import logging
import os
import shlex
import subprocess
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when an external command cannot be run or exits with failure."""


def is_file(path) -> bool:
    """Return True if ``path`` exists and is not a directory."""
    try:
        return not os.path.isdir(path) and os.path.exists(path)
    except (OSError, ValueError):
        return False


def is_directory(path) -> bool:
    """Return True if ``path`` exists and is a directory."""
    try:
        return os.path.isdir(path)
    except (OSError, ValueError):
        return False


def remove_duplicates_and_empty_strings(items: Iterable[str]) -> list:
    """Drop empty strings and repeats, keeping first occurrences in order."""
    return [item for item in dict.fromkeys(items) if item != ""]


def join_lines(items: Iterable[str]) -> str:
    """Join strings with newlines."""
    return "\n".join(items)


def lines_to_list(text: str) -> list:
    """Split text into lines after trimming surrounding whitespace."""
    return text.strip().split("\n")


def _clean_output(stdout: bytes) -> list:
    return remove_duplicates_and_empty_strings(
        lines_to_list(stdout.decode("utf-8", errors="replace"))
    )


def run_command(name: str, args: Sequence[str]) -> list:
    """Run a command and return its unique, non-empty stdout lines."""
    argv = [name, *args]
    try:
        result = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise CommandError(f"failed to run command: {exc}") from exc
    return _clean_output(result.stdout)


def run_command_with_stdin(name: str, args: Sequence[str], stdin_lines: Iterable[str]) -> list:
    """Run a command with lines piped to stdin; return unique, non-empty stdout lines."""
    argv = [name, *args]
    logger.debug("Running command: %s", shlex.join(argv))
    data = join_lines(stdin_lines).encode("utf-8")
    try:
        process = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        raise CommandError(f"failed to start command: {exc}") from exc
    try:
        stdout, _ = process.communicate(data)
    except OSError as exc:
        process.kill()
        process.wait()
        raise CommandError(f"failed to write to stdin: {exc}") from exc
    if process.returncode != 0:
        raise CommandError(f"command failed: exit status {process.returncode}")
    return _clean_output(stdout)