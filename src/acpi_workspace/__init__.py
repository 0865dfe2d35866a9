"""Modal workspace for editing extracted ACPI tables and applying changes."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "engine",
    "errors",
    "host",
    "keymaps",
    "modes",
    "preflight",
    "presentation",
    "runtime",
    "session",
    "workspace",
]

__version__ = "0.1.0"
