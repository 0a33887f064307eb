import pytest
from hypothesis import given, strategies as st

from keikaku.builtins import add, div, mul, sub, truncating_div
from keikaku.errors import DivisionByZero, InvalidType, WrongArity
from keikaku.reader.position import Position, Span
from keikaku.types.lambda_fn import Lambda
from keikaku.types.nil import Nil


def at(line, start, end=None):
    return Span(Position(line, start), Position(line, start if end is None else end))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", 3),
        ("(+ 1 2 3)", 6),
        ("(+)", 0),
        ("(*)", 1),
        ("(* 2 3 4)", 24),
        ("(- 5)", -5),
        ("(- -5)", 5),
        ("(- 5 2 1)", 2),
        ("(- 10 3 2)", 5),
        ("(- -10 -5)", -5),
        ("(/ 10 2)", 5),
        ("(/ 12 3)", 4),
        ("(/ 100 2 3)", 20),
        ("(/ 7 2)", 3),
        ("(/ -7 2)", -3),
        ("(/ 7 -2)", -3),
        ("(/ -7 -2)", 3),
        ("(+ (* 2 3) (- 10 4))", 12),
        ("(/ (* (+ 8 2) 5) (- 20 10))", 5),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", 57),
    ]
)
def test_arithmetic(interp, source, expected):
    assert interp.eval(source) == expected


def test_division_by_literal_zero_points_at_the_zero(interp):
    with pytest.raises(DivisionByZero) as exc:
        interp.eval("(/ 10 0)")
    assert exc.value.span == at(0, 6)


def test_division_by_cancelling_denominators_points_at_the_call(interp):
    with pytest.raises(DivisionByZero) as exc:
        interp.eval("(/ 10 1 -1)")
    assert exc.value.span == at(0, 0, 10)


@pytest.mark.parametrize("source", ["(-)", "(/)", "(/ 5)"])
def test_wrong_arity(interp, source):
    with pytest.raises(WrongArity) as exc:
        interp.eval(source)
    assert exc.value.span == at(0, 0, len(source) - 1)


@pytest.mark.parametrize(
    "source,bad_span",
    [
        ("(+ 1 () 2)", at(0, 5, 6)),
        ("(* 2 +)", at(0, 5)),
        ("(- ())", at(0, 3, 4)),
        ("(- () 1)", at(0, 3, 4)),
        ("(- 1 ())", at(0, 5, 6)),
        ("(/ () 1)", at(0, 3, 4)),
        ("(/ 1 ())", at(0, 5, 6)),
        ("(+ () ())", at(0, 3, 4)),
    ]
)
def test_invalid_type_points_at_first_offender(interp, source, bad_span):
    with pytest.raises(InvalidType) as exc:
        interp.eval(source)
    assert exc.value.span == bad_span


def test_truncating_div():
    assert truncating_div(9, 4) == 2
    assert truncating_div(-9, 4) == -2
    assert truncating_div(9, -4) == -2
    assert truncating_div(-9, -4) == 2


# ------------------ Properties ------------------

CALL = at(0, 0, 20)
_non_ints = st.sampled_from([Nil, Lambda([], []), "text"])


@st.composite
def args_with_a_bad_one(draw):
    ints = st.integers(min_value=-1000, max_value=1000).filter(lambda n: n != 0)
    values = draw(st.lists(ints | _non_ints, min_size=1, max_size=6))
    if all(type(v) is int for v in values):
        values[draw(st.integers(0, len(values) - 1))] = draw(_non_ints)
    return [(v, at(1, i)) for i, v in enumerate(values)]


@given(args_with_a_bad_one(), st.sampled_from([add, sub, mul, div]))
def test_any_non_integer_fails_at_first_offender(args, primitive):
    first_bad = next(span for value, span in args if type(value) is not int)
    with pytest.raises(InvalidType) as exc:
        primitive(CALL, args)
    assert exc.value.span == first_bad


@given(st.lists(st.integers(min_value=-10**6, max_value=10**6), max_size=8))
def test_add_and_mul_fold(values):
    args = [(v, at(0, i)) for i, v in enumerate(values)]
    product = 1
    for v in values:
        product *= v
    assert add(CALL, args) == sum(values)
    assert mul(CALL, args) == product
