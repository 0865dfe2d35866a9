from __future__ import annotations

import pytest

from conftest import DOCUMENTS, FakeExecutor, extraction_handler

from acpi_workspace.engine import WorkspaceEngine
from acpi_workspace.errors import WorkspaceInitError
from acpi_workspace.modes import KeyInput
from acpi_workspace.presentation import project


@pytest.fixture
def engine(config, executor, clock) -> WorkspaceEngine:
    return WorkspaceEngine.create(config, executor, clock=clock)


def key_input(key: str) -> KeyInput:
    if key.startswith("ctrl+"):
        return KeyInput(key=key[len("ctrl+") :], modifiers=("ctrl",))
    if len(key) == 1:
        return KeyInput(key=key, text=key)
    return KeyInput(key=key)


def press(engine: WorkspaceEngine, *keys: str) -> None:
    for key in keys:
        engine.handle_key(key_input(key))


def messages(engine: WorkspaceEngine) -> list[str]:
    return [entry.message for entry in engine.log.entries]


def test_create_fails_when_extraction_fails(config, executor) -> None:
    executor.respond("bash", 2, stderr="boom\n")

    with pytest.raises(WorkspaceInitError):
        WorkspaceEngine.create(config, executor)


def test_document_navigation_loads_persisted_content(engine, config) -> None:
    (config.working_dir / "facp.dsl").write_text("persisted\n", encoding="utf-8")

    press(engine, "DOWN")
    assert engine.session.document.name == "dsdt.dsl"

    press(engine, "j", "DOWN")
    assert engine.session.document.name == "facp.dsl"
    assert engine.session.buffer.lines == ("persisted",)
    assert engine.session.buffer.cursor == (0, 0)
    assert len(engine.session.buffer.undo_history) == 0

    press(engine, "UP", "UP")
    assert engine.session.document.name == "ssdt1.dsl"
    assert messages(engine) == [
        "dsdt.dsl selected",
        "facp.dsl selected",
        "dsdt.dsl selected",
        "ssdt1.dsl selected",
    ]


def test_cursor_moves_do_not_log_or_dirty(engine) -> None:
    press(engine, "DOWN")
    before = messages(engine)

    press(engine, "j", "l", "l", "b", "$", "0", "G", "g", "g", "PAGEDOWN", "PAGEUP")

    assert messages(engine) == before
    assert engine.workspace.modified.items == []


def test_edit_then_undo_reverts_modified_set(engine, config) -> None:
    press(engine, "DOWN", "i", "z", "ESC")

    assert engine.workspace.modified.items == ["dsdt.dsl"]
    assert (config.working_dir / "dsdt.dsl").read_text(encoding="utf-8").startswith("z")

    press(engine, "u")

    assert engine.workspace.modified.items == []
    assert (config.working_dir / "dsdt.dsl").read_text(
        encoding="utf-8"
    ) == DOCUMENTS["dsdt.dsl"]


@pytest.mark.parametrize("baseline", ["abc", "abc\r\ndef\r\n"])
def test_undo_restores_baseline_bytes(config, clock, baseline: str) -> None:
    executor = FakeExecutor().on("bash", extraction_handler(config, {"a.dsl": baseline}))
    engine = WorkspaceEngine.create(config, executor, clock=clock)
    working = config.working_dir / "a.dsl"

    press(engine, "DOWN", "i", "z", "ESC")
    assert engine.workspace.modified.items == ["a.dsl"]
    assert working.read_bytes() == ("z" + baseline).encode("utf-8")

    press(engine, "u")
    assert engine.workspace.modified.items == []
    assert working.read_bytes() == baseline.encode("utf-8")


def test_undo_restores_after_x(engine) -> None:
    press(engine, "DOWN", "x")
    assert engine.session.buffer.lines[0].startswith("efinitionBlock")
    assert engine.workspace.is_modified("dsdt.dsl")

    press(engine, "u")
    assert engine.session.buffer.text == DOCUMENTS["dsdt.dsl"]
    assert not engine.workspace.is_modified("dsdt.dsl")


def test_edits_accumulate_across_documents(engine) -> None:
    press(engine, "DOWN", "o", "ESC", "DOWN", "DOWN", "d", "d")

    assert engine.workspace.modified.items == ["dsdt.dsl", "ssdt1.dsl"]


def test_apply_with_nothing_modified_does_nothing(engine, executor) -> None:
    press(engine, "ctrl+a")

    assert executor.calls_to("acpied-apply") == []
    assert messages(engine) == []


def test_apply_submits_modified_names(engine, executor) -> None:
    executor.respond("acpied-apply", 0, stdout="ok dsdt.dsl\nok ssdt1.dsl\n")
    press(engine, "DOWN", "x", "UP", "x")

    press(engine, "ctrl+a")

    assert executor.calls_to("acpied-apply") == [["acpied-apply", "dsdt.dsl,ssdt1.dsl"]]
    assert messages(engine)[-2:] == ["ok dsdt.dsl", "ok ssdt1.dsl"]
    assert engine.workspace.modified.items == ["dsdt.dsl", "ssdt1.dsl"]


def test_plain_a_is_not_apply(engine, executor) -> None:
    press(engine, "DOWN", "a")

    assert executor.calls_to("acpied-apply") == []
    assert engine.mode == "insert"
    assert engine.session.buffer.cursor == (0, 1)


def test_io_error_is_logged_and_session_continues(engine, config) -> None:
    press(engine, "DOWN")
    engine.session.document.working_path = config.working_dir / "gone" / "dsdt.dsl"

    result = engine.handle_key(key_input("x"))

    assert result.status == "io_error"
    assert messages(engine)[-1].startswith("error: ")
    press(engine, "j")
    assert engine.session.buffer.cursor[0] == 1
    assert not engine.quit_requested


def test_unreadable_document_leaves_selection_on_session_document(
    engine, config
) -> None:
    press(engine, "DOWN")
    (config.working_dir / "facp.dsl").unlink()

    result = engine.handle_key(key_input("DOWN"))

    assert result.status == "io_error"
    assert messages(engine)[-1].startswith("error: fail to read")
    view = project(engine)
    assert view.documents[view.selected_document] == engine.session.document.name
    assert view.title == "dsdt.dsl"


def test_ctrl_c_requests_quit(engine) -> None:
    press(engine, "ctrl+c")

    assert engine.quit_requested


def test_projection_reflects_state(engine) -> None:
    press(engine, "DOWN", "x", "/", "F")

    view = project(engine)

    assert view.documents == ("dsdt.dsl", "facp.dsl", "ssdt1.dsl")
    assert view.selected_document == 0
    assert view.modified == ("dsdt.dsl",)
    assert view.title == "dsdt.dsl"
    assert view.mode == "search"
    assert view.search_text == "/F"
    assert view.lines[0].startswith("efinitionBlock")
    assert view.log_lines[0] == "|2024-05-01 12:00:00| dsdt.dsl selected"


def test_key_overrides_from_config_are_honoured(config, executor, clock) -> None:
    config = config.with_overrides(
        key_overrides=(("normal.line_end", ("z", "e")), ("normal.apply", ("ctrl+p",)))
    )
    engine = WorkspaceEngine.create(config, executor, clock=clock)
    executor.respond("acpied-apply", 0, stdout="ok dsdt.dsl\n")

    press(engine, "DOWN", "$")
    assert engine.session.buffer.cursor == (0, 0)

    assert engine.handle_key(key_input("z")).status == "pending"
    press(engine, "e")
    first_line = DOCUMENTS["dsdt.dsl"].split("\n")[0]
    assert engine.session.buffer.cursor == (0, len(first_line))

    press(engine, "x", "ctrl+a")
    assert executor.calls_to("acpied-apply") == [["acpied-apply", "dsdt.dsl"]]


def test_unknown_key_override_fails_creation(config, executor) -> None:
    config = config.with_overrides(key_overrides=(("normal.nope", ("z",)),))

    with pytest.raises(WorkspaceInitError, match="normal.nope"):
        WorkspaceEngine.create(config, executor)

    assert executor.calls == []


def test_clashing_key_override_fails_creation(config, executor) -> None:
    config = config.with_overrides(key_overrides=(("normal.undo", ("x",)),))

    with pytest.raises(WorkspaceInitError, match="invalid key override"):
        WorkspaceEngine.create(config, executor)


def test_projection_lists_keys_of_active_mode(engine) -> None:
    assert ("ctrl+a", "Apply modified") in project(engine).key_help

    press(engine, "DOWN", "/")

    assert project(engine).key_help == (
        ("ENTER", "Install the pattern"),
        ("ESC", "Discard the pattern"),
    )
