"""Startup gate: privilege and required-tool checks."""

from __future__ import annotations

import os
import shutil
from typing import Callable, Iterable, Optional

from acpi_workspace.errors import PreflightError
from acpi_workspace.runtime import telemetry


def check_user(*, geteuid: Optional[Callable[[], int]] = None) -> None:
    uid = (geteuid or os.geteuid)()
    if uid != 0:
        raise PreflightError("acpied must be run as root!")


def check_executable(
    executable: str, *, which: Callable[[str], Optional[str]] = shutil.which
) -> None:
    if which(executable) is None:
        raise PreflightError(f"{executable} not found!")


def check_prerequisites(
    tools: Iterable[str],
    *,
    geteuid: Optional[Callable[[], int]] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> None:
    """Raise :class:`PreflightError` unless running as root with every tool on PATH."""

    with telemetry.span("preflight::check", component="preflight") as handle:
        check_user(geteuid=geteuid)
        for tool in tools:
            handle.add_metadata("tool", tool)
            check_executable(tool, which=which)


__all__ = ["check_prerequisites", "check_user", "check_executable"]
