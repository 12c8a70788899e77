"""GitHub Actions workflow command helpers."""

from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path


def _escape_data(value: str) -> str:
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _append_file_command(env_var: str, name: str, value: str) -> bool:
    path = os.environ.get(env_var)
    if not path:
        return False
    with Path(path).open("a", encoding="utf-8") as handle:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            handle.write(f"{name}={value}\n")
    return True


def set_output(name: str, value: str) -> None:
    """Set a step output for the workflow."""
    if not _append_file_command("GITHUB_OUTPUT", name, value):
        sys.stdout.write(f"::set-output name={name}::{_escape_data(value)}\n")


def export_variable(name: str, value: str) -> None:
    """Export an environment variable to later steps of the job."""
    os.environ[name] = value
    if not _append_file_command("GITHUB_ENV", name, value):
        sys.stdout.write(f"::set-env name={name}::{_escape_data(value)}\n")


def set_secret(value: str) -> None:
    """Mask a value in the job log."""
    if value:
        sys.stdout.write(f"::add-mask::{_escape_data(value)}\n")


def set_failed(message: str) -> None:
    """Emit an error annotation; callers are responsible for the exit code."""
    sys.stdout.write(f"::error::{_escape_data(message)}\n")
    sys.stdout.flush()
