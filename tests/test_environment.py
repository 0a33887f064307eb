import pytest

from keikaku.builtins import PRIMITIVES
from keikaku.errors import UnknownDef
from keikaku.reader.position import Position, Span
from keikaku.types.environment import Environment
from keikaku.types.nil import Nil
from keikaku.types.primitive import PrimitiveOp
from keikaku.types.symbol import Symbol


def test_register_seeds_the_four_primitives(env):
    for name in ("+", "-", "*", "/"):
        assert isinstance(env.lookup(Symbol(name)), PrimitiveOp)
    assert set(env.vars) == {Symbol(name) for name in PRIMITIVES}


def test_define_returns_nil_and_overwrites():
    env = Environment()
    assert env.define(Symbol("x"), 1) is Nil
    env.define(Symbol("x"), 2)
    assert env.lookup(Symbol("x")) == 2
    assert len(env.vars) == 1


def test_define_requires_a_symbol():
    with pytest.raises(TypeError):
        Environment().define("x", 1)


def test_lookup_walks_the_chain(env):
    child = Environment(outer=env)
    child.define(Symbol("x"), 1)
    assert child.lookup(Symbol("x")) == 1
    assert isinstance(child.lookup(Symbol("+")), PrimitiveOp)
    assert child.find(Symbol("+")) is env
    assert child.root() is env
    assert Symbol("x") in child
    assert Symbol("x") not in env


def test_child_frames_shadow_without_touching_parent():
    parent = Environment()
    parent.define(Symbol("x"), 1)
    child = Environment(outer=parent)
    child.define(Symbol("x"), 2)
    assert child.lookup(Symbol("x")) == 2
    assert parent.lookup(Symbol("x")) == 1


def test_unknown_symbol_carries_span():
    span = Span(Position(2, 4), Position(2, 6))
    with pytest.raises(UnknownDef) as exc:
        Environment().lookup(Symbol("abc"), span)
    assert exc.value.span is span
    assert exc.value.symbol == Symbol("abc")


def test_symbols_compare_by_name():
    assert Symbol("a") == Symbol("a")
    assert hash(Symbol("a")) == hash(Symbol("a"))
    assert Symbol("a") != "a"


def test_symbol_names_are_interned():
    name = "".join(["ab", "c"])
    assert Symbol(name).name is Symbol("abc").name
    assert str(Symbol(name)) == "abc"
    with pytest.raises(AttributeError):
        Symbol("a").name = "b"


def test_str_and_repr():
    parent = Environment()
    parent.define(Symbol("x"), 1)
    child = Environment(outer=parent)
    child.define(Symbol("y"), Nil)
    assert str(parent) == "{x: 1}"
    assert str(child) == "{y: Nil} -> ..."
    assert repr(child) == "<Environment chain: {y: Nil} -> {x: 1}>"
