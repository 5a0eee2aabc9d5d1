import pytest

from lispi import errors
from lispi.types.environment import Environment
from lispi.types.values import Namespace, Number, String


def test_define_and_lookup():
    env = Environment()
    env.define("x", Number(1.0))
    assert env.lookup("x") == Number(1.0)
    assert env.find("x") is env
    assert env.find("y") is None


def test_child_sees_parent_and_shadows_locally():
    parent = Environment()
    parent.define("x", Number(1.0))
    child = parent.child()
    assert child.lookup("x") == Number(1.0)

    child.define("x", Number(2.0))
    assert child.lookup("x") == Number(2.0)
    assert parent.lookup("x") == Number(1.0)
    assert child.find("x") is child
    assert child.root() is parent


def test_set_updates_nearest_binding():
    parent = Environment()
    parent.define("x", Number(1.0))
    child = parent.child()
    child.set("x", Number(5.0))
    assert parent.lookup("x") == Number(5.0)
    assert "x" not in child.vars

    with pytest.raises(errors.LispiUnboundSymbol):
        child.set("nope", Number(0.0))


def test_unbound_lookup():
    with pytest.raises(errors.LispiUnboundSymbol, match="missing"):
        Environment().child().lookup("missing")


@pytest.mark.parametrize("name", ["", None, 3])
def test_define_rejects_invalid_names(name):
    with pytest.raises(errors.LispiInvalidSymbol):
        Environment().define(name, Number(0.0))


def test_update_binds_in_current_frame():
    env = Environment()
    env.update({"a": Number(1.0), "b": String("x")})
    assert env.lookup("b") == String("x")
    assert set(env.vars) == {"a", "b"}


def test_qualified_lookup_through_namespace():
    env = Environment()
    env.define("m", Namespace("m", {"square": Number(4.0)}))
    scope = env.child()
    assert scope.lookup("m.square") == Number(4.0)

    with pytest.raises(errors.LispiExportNotFound, match="helper"):
        scope.lookup("m.helper")


def test_dotted_names_prefer_plain_bindings():
    env = Environment()
    env.define("a.b", Number(1.0))
    assert env.lookup("a.b") == Number(1.0)

    env.define("n", Number(2.0))
    with pytest.raises(errors.LispiUnboundSymbol):
        env.lookup("n.x")
    with pytest.raises(errors.LispiUnboundSymbol):
        env.lookup("q.x")


def test_string_forms():
    parent = Environment()
    parent.define("a", Number(1.0))
    child = parent.child()
    child.define("b", String("s"))
    assert str(parent) == "{a: 1}"
    assert str(child) == "{b: s} -> ..."
    assert repr(child) == "<Environment chain: {b: s} -> {a: 1}>"
