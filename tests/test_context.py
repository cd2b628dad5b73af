import pytest

from rulekit.core import Context


def test_plain_values():
    ctx = Context({"a": 1})
    ctx.set("b", [1, 2])
    assert ctx["a"] == 1
    assert ctx.get("b") == [1, 2]
    assert ctx.get("missing") is None
    assert ctx.get("missing", 5) == 5


def test_lazy_entry_is_invoked_once():
    calls = []

    def producer():
        calls.append(1)
        return 42

    ctx = Context({"answer": producer})
    assert ctx["answer"] == 42
    assert ctx["answer"] == 42
    assert len(calls) == 1


def test_has_does_not_invoke_producers():
    calls = []
    ctx = Context({"lazy": lambda: calls.append(1)})
    assert ctx.has("lazy")
    assert "lazy" in ctx
    assert not ctx.has("other")
    assert calls == []


def test_set_overwrites_and_clears_memoised_result():
    ctx = Context({"x": lambda: 1})
    assert ctx["x"] == 1
    ctx.set("x", lambda: 2)
    assert ctx["x"] == 2
    ctx["x"] = 3
    assert ctx["x"] == 3


def test_producer_may_read_other_keys():
    ctx = Context({"base": 10})
    ctx.set("double", lambda: ctx["base"] * 2)
    assert ctx["double"] == 20


def test_protected_callable_is_stored_as_data():
    def handler():
        return "called"

    ctx = Context({"handler": Context.protect(handler)})
    assert ctx["handler"] is handler
    assert ctx.raw("handler") is handler


def test_raw_does_not_invoke():
    producer = lambda: 1  # noqa: E731
    ctx = Context({"x": producer})
    assert ctx.raw("x") is producer
    with pytest.raises(KeyError):
        ctx.raw("missing")


def test_mapping_protocol():
    ctx = Context({"a": 1, "b": 2})
    del ctx["a"]
    assert list(ctx) == ["b"]
    assert len(ctx) == 1
    with pytest.raises(KeyError):
        ctx["a"]
