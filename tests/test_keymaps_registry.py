import pytest

from voider.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    normalize_token,
)
from voider.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "edit",
    key: str = "F2",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, mode=mode, key=key, action_id=action_id)


def test_normalize_token_orders_modifiers() -> None:
    assert normalize_token("shift+ctrl+s") == "CTRL+SHIFT+S"
    assert normalize_token("enter") == "ENTER"
    assert normalize_token("a") == "a"
    assert normalize_token("ctrl++") == "CTRL++"

    with pytest.raises(ValueError):
        normalize_token("hyper+x")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="edit.f2")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="edit")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="edit.f2"))

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding(binding_id="edit.f2.duplicate"))

    assert info.value.existing.id == "edit.f2"


def test_same_key_in_other_mode_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="edit.f2"))
    registry.register_binding(make_binding(binding_id="prompt.f2", mode="prompt"))

    assert registry.stats().modes == ("edit", "prompt")


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", key="F4")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.resolve("edit", "F2") is None
    assert registry.resolve("edit", "f4").binding == second


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.unregister_binding("binding") is None


def test_load_default_keymaps_binds_function_keys() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.resolve("edit", "F3").action.id == "search.start"
    assert registry.resolve("edit", "F5").action.id == "file.save"
    assert registry.resolve("edit", "F8").action.id == "editor.quit"
    assert registry.resolve("edit", "ctrl+s").action.id == "file.save"
    assert registry.resolve("prompt", "ESC").action.id == "prompt.cancel"
    assert registry.resolve("edit", "x") is None


def test_load_default_keymaps_is_repeatable() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)
    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)


def test_user_binding_can_override_default() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    registry.register_binding(
        Binding(id="edit.save_alt", mode="edit", key="F5", action_id="editor.quit"),
        replace=True,
    )

    assert registry.resolve("edit", "F5").action.id == "editor.quit"
    with pytest.raises(KeyError):
        registry.get_binding("edit.save")


def test_resolve_returns_registered_action() -> None:
    registry = KeymapRegistry()
    action = registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="edit.f2"))

    assert registry.get_action("core.test") is action
    assert registry.resolve("edit", "F2").action is action
    with pytest.raises(KeyError):
        registry.get_action("core.missing")
