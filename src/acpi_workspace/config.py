"""Workspace configuration and environment overrides."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping, Optional

ENV_PREFIX = "ACPI_WORKSPACE_"

DEFAULT_BASELINE_DIR = Path("/tmp/acpidump/origin")
DEFAULT_WORKING_DIR = Path("/tmp/acpidump/modified")
DEFAULT_LOG_FILE = Path("/var/log/acpied.log")
DEFAULT_INIT_COMMAND: tuple[str, ...] = ("bash", "/bin/acpied-init")
DEFAULT_APPLY_COMMAND = "acpied-apply"
DEFAULT_REQUIRED_TOOLS: tuple[str, ...] = ("grubby", "acpidump", "acpixtract", "iasl")

MAX_HISTORY_SIZE = 100
MAX_LOG_ENTRIES = 100
DEFAULT_PAGE_HEIGHT = 20
APPLY_DELIMITER = ","
SEARCH_MARKER = "/"


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Locations and external commands the workspace operates on."""

    baseline_dir: Path = DEFAULT_BASELINE_DIR
    working_dir: Path = DEFAULT_WORKING_DIR
    log_file: Path = DEFAULT_LOG_FILE
    init_command: tuple[str, ...] = DEFAULT_INIT_COMMAND
    apply_command: str = DEFAULT_APPLY_COMMAND
    required_tools: tuple[str, ...] = DEFAULT_REQUIRED_TOOLS
    history_size: int = MAX_HISTORY_SIZE
    log_capacity: int = MAX_LOG_ENTRIES
    page_height: int = DEFAULT_PAGE_HEIGHT
    # (binding id, replacement key tokens), applied in order at startup
    key_overrides: tuple[tuple[str, tuple[str, ...]], ...] = ()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WorkspaceConfig":
        env = os.environ if environ is None else environ
        config = cls()
        changes: dict[str, object] = {}

        for field_name, var in (
            ("baseline_dir", "BASELINE_DIR"),
            ("working_dir", "WORKING_DIR"),
            ("log_file", "LOG_FILE"),
        ):
            value = env.get(f"{ENV_PREFIX}{var}")
            if value:
                changes[field_name] = Path(value)

        init_command = env.get(f"{ENV_PREFIX}INIT_COMMAND")
        if init_command:
            changes["init_command"] = tuple(shlex.split(init_command))

        apply_command = env.get(f"{ENV_PREFIX}APPLY_COMMAND")
        if apply_command:
            changes["apply_command"] = apply_command

        changes["page_height"] = _env_int(
            env, f"{ENV_PREFIX}PAGE_HEIGHT", config.page_height
        )

        keys = env.get(f"{ENV_PREFIX}KEYS")
        if keys:
            changes["key_overrides"] = parse_key_overrides(keys.split(";"))
        return replace(config, **changes)

    def with_overrides(self, **changes: object) -> "WorkspaceConfig":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def parse_key_overrides(
    entries: Iterable[str],
) -> tuple[tuple[str, tuple[str, ...]], ...]:
    """Read ``binding=keys`` entries such as ``normal.line_end=z e``.

    Blank entries are skipped; anything else without a binding id or keys
    raises ``ValueError``.
    """

    overrides = []
    for entry in entries:
        if not entry.strip():
            continue
        binding_id, sep, keys = entry.partition("=")
        tokens = tuple(keys.split())
        if not sep or not binding_id.strip() or not tokens:
            raise ValueError(f"malformed key override: {entry.strip()!r}")
        overrides.append((binding_id.strip(), tokens))
    return tuple(overrides)


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(key)
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


__all__ = [
    "WorkspaceConfig",
    "parse_key_overrides",
    "ENV_PREFIX",
    "APPLY_DELIMITER",
    "SEARCH_MARKER",
    "MAX_HISTORY_SIZE",
    "MAX_LOG_ENTRIES",
]
