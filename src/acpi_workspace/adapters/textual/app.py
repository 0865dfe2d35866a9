"""Executable Textual app that hosts the workspace engine."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from acpi_workspace.config import WorkspaceConfig, parse_key_overrides
from acpi_workspace.engine import WorkspaceEngine
from acpi_workspace.errors import PreflightError, WorkspaceInitError
from acpi_workspace.host import SubprocessExecutor
from acpi_workspace.preflight import check_prerequisites
from acpi_workspace.presentation import WorkspaceView
from acpi_workspace.runtime import telemetry

from .controller import TextualUIHooks, TextualWorkspaceAdapter

EXIT_PREFLIGHT = 1
EXIT_INIT = 2


def _render_list(items: Sequence[str], selected: Optional[int]) -> str:
    return "\n".join(
        f"> {item}" if index == selected else f"  {item}"
        for index, item in enumerate(items)
    )


class WorkspaceApp(App[None]):
    """Document list, modified list, editor pane, and operation log."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#sidebar {
		width: 30;
	}

	#documents, #modified, #keys {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#content {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#search-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#oplog {
		height: 8;
		border: round $secondary;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit_workspace", "Quit"),
    ]

    def __init__(self, engine: WorkspaceEngine) -> None:
        super().__init__()
        self.engine = engine
        self.adapter: TextualWorkspaceAdapter | None = None
        self._widgets: dict[str, Static] = {}

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal():
            with Vertical(id="sidebar"):
                yield self._static("documents")
                yield self._static("modified")
                yield self._static("keys")
            with Vertical():
                yield self._static("content")
                yield self._static("search-line")
        yield self._static("oplog")
        yield self._static("status-line")
        yield Footer()

    def _static(self, widget_id: str) -> Static:
        widget = Static("", id=widget_id, markup=False)
        self._widgets[widget_id] = widget
        return widget

    def on_mount(self) -> None:
        self._widgets["documents"].border_title = "Documents"
        self._widgets["modified"].border_title = "Modified"
        self._widgets["keys"].border_title = "Keys"
        self._widgets["oplog"].border_title = "Log"
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualWorkspaceAdapter(self.engine, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        if self.adapter.handle_key_event(event.key, event.character) is not None:
            event.stop()
        if self.adapter.quit_requested:
            self.exit()

    def action_quit_workspace(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("c", modifiers=("ctrl",))
        self.exit()

    def _update_view(self, view: WorkspaceView) -> None:
        self._widgets["documents"].update(
            _render_list(view.documents, view.selected_document)
        )
        self._widgets["modified"].update(
            _render_list(view.modified, view.selected_modified)
        )
        content = self._widgets["content"]
        content.border_title = view.title or "no document"
        content.update(view.content)
        search = view.search_text
        if view.search_error:
            search = f"{search}  [{view.search_error}]"
        self._widgets["search-line"].update(search)
        self._widgets["oplog"].update("\n".join(view.log_lines))
        self._widgets["keys"].update(
            "\n".join(f"{keys:<8} {description}" for keys, description in view.key_help)
        )
        row, col = view.cursor
        self.sub_title = f"{view.mode.upper()}  {row + 1}:{col + 1}"

    def _update_status(self, status: str) -> None:
        self._widgets["status-line"].update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "search.error" and isinstance(payload, str):
            self._update_status(f"search: {payload}")

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("acpi_workspace.adapters.textual").debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit extracted ACPI tables and apply the modified ones."
    )
    parser.add_argument("--baseline-dir", type=Path, help="Pristine extracted tables")
    parser.add_argument("--working-dir", type=Path, help="Editable table copies")
    parser.add_argument("--log-file", type=Path, help="Durable operation log")
    parser.add_argument("--apply-command", help="Tool that applies modified tables")
    parser.add_argument(
        "--bind",
        action="append",
        default=[],
        metavar="BINDING=KEYS",
        help="Move a binding onto other keys, e.g. normal.apply=ctrl+p (repeatable)",
    )
    parser.add_argument(
        "--skip-preflight",
        action="store_true",
        help="Do not check for root privileges and required tools",
    )
    return parser.parse_args(argv)


def _load_config(args: argparse.Namespace) -> WorkspaceConfig:
    """Environment first, then command-line flags; ``--bind`` entries follow
    any ``ACPI_WORKSPACE_KEYS`` overrides."""

    config = WorkspaceConfig.from_env()
    return config.with_overrides(
        baseline_dir=args.baseline_dir,
        working_dir=args.working_dir,
        log_file=args.log_file,
        apply_command=args.apply_command,
        key_overrides=config.key_overrides + parse_key_overrides(args.bind),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset="tui")
    try:
        config = _load_config(args)
    except ValueError as exc:
        print(f"acpi-workspace: {exc}", file=sys.stderr)
        return EXIT_INIT

    if not args.skip_preflight:
        try:
            check_prerequisites(config.required_tools)
        except PreflightError as exc:
            print(f"acpi-workspace: {exc}", file=sys.stderr)
            return EXIT_PREFLIGHT

    try:
        engine = WorkspaceEngine.create(config, SubprocessExecutor())
    except WorkspaceInitError as exc:
        print(f"acpi-workspace: {exc}", file=sys.stderr)
        if exc.stderr:
            print(exc.stderr, file=sys.stderr)
        return EXIT_INIT

    WorkspaceApp(engine).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
