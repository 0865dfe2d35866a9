import pytest

from acpi_workspace.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    apply_key_overrides,
    load_default_keymaps,
)
from acpi_workspace.keymaps.models import KeyStroke


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("g", "g"),
        action_id=action_id,
        when=when,
    )


def defaults() -> KeymapRegistry:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return registry


@pytest.mark.parametrize(
    ("text", "key", "modifiers"),
    [
        ("a", "a", ()),
        ("ctrl+a", "a", ("ctrl",)),
        ("Shift+Ctrl+x", "x", ("ctrl", "shift")),
        ("+", "+", ()),
        ("ctrl++", "+", ("ctrl",)),
    ],
)
def test_keystroke_parse(text: str, key: str, modifiers: tuple[str, ...]) -> None:
    stroke = KeyStroke.parse(text)

    assert (stroke.key, stroke.modifiers) == (key, modifiers)


def test_key_sequence_needs_a_stroke() -> None:
    assert KeySequence.from_strings("z", "ctrl+E").tokens == ("z", "ctrl+E")
    with pytest.raises(ValueError):
        KeySequence.from_strings()


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.gg")

    registry.register_binding(binding)

    assert list(registry.iter_bindings(mode="normal")) == [binding]
    assert list(registry.iter_bindings(mode="insert")) == []


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.gg"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="normal.gg.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["normal.gg"]


def test_register_binding_twice_is_rejected() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))

    with pytest.raises(ValueError):
        registry.register_binding(
            make_binding(binding_id="binding", sequence=make_sequence("d", "d"))
        )


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.gg"))


def test_same_keys_under_different_flags_coexist() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="loaded", when=(WhenClause("document_loaded"),))
    )
    registry.register_binding(
        make_binding(binding_id="empty", when=(WhenClause.parse("!document_loaded"),))
    )

    assert [b.id for b in registry.iter_bindings()] == ["default", "loaded", "empty"]


def test_rebind_moves_binding_and_bumps_revision() -> None:
    registry = defaults()
    before = registry.revision()

    rebound = registry.rebind("normal.apply", "ctrl+p")

    assert rebound.sequence.tokens == ("ctrl+p",)
    assert rebound.action_id == "workspace.apply"
    assert registry.get_binding("normal.apply") == rebound
    assert registry.revision() == before + 1


def test_rebind_onto_taken_key_conflicts() -> None:
    registry = defaults()

    with pytest.raises(KeymapConflictError):
        registry.rebind("normal.undo", "x")

    assert registry.get_binding("normal.undo").sequence.tokens == ("u",)


def test_rebind_unknown_binding_raises_key_error() -> None:
    with pytest.raises(KeyError):
        defaults().rebind("normal.missing", "z")


def test_apply_key_overrides_in_order() -> None:
    registry = defaults()

    apply_key_overrides(
        registry, [("normal.undo", ("U",)), ("normal.delete_char", ("u",))]
    )

    assert registry.get_binding("normal.undo").sequence.tokens == ("U",)
    assert registry.get_binding("normal.delete_char").sequence.tokens == ("u",)


def test_describe_lists_mode_bindings() -> None:
    registry = defaults()

    assert registry.describe("search") == [
        ("ENTER", "Install the pattern"),
        ("ESC", "Discard the pattern"),
    ]
    assert ("ctrl+a", "Apply modified") in registry.describe("normal")


def test_describe_follows_rebind() -> None:
    registry = defaults()

    registry.rebind("normal.line_end", "z", "e")

    assert ("z e", "Line end") in registry.describe("normal")
    assert ("$", "Line end") not in registry.describe("normal")


def test_default_keymaps_cover_every_mode() -> None:
    registry = defaults()

    assert {b.mode for b in registry.iter_bindings()} == {"insert", "normal", "search"}
    assert registry.get_binding("normal.quit").sequence.tokens == ("ctrl+c",)
    assert registry.get_binding("normal.apply").sequence.tokens == ("ctrl+a",)
    assert registry.get_binding("normal.append").sequence.tokens == ("a",)


def test_editing_defaults_are_gated_on_document() -> None:
    registry = defaults()

    assert registry.get_binding("normal.delete_char").when_map == {
        "document_loaded": True
    }
    assert registry.get_binding("normal.next_document").when == ()
