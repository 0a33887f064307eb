import pytest

from keikaku.errors import RecursionTooDeep, UnknownDef, WrongArity
from keikaku.interpreter import Interpreter
from keikaku.reader.parser import read
from keikaku.types.environment import Environment
from keikaku.types.lambda_fn import Lambda
from keikaku.types.nil import Nil
from keikaku.types.symbol import Symbol


def make_lambda(formals, body, env=None):
    return Lambda([Symbol(f) for f in formals], read(body), env)


@pytest.fixture
def interp():
    i = Interpreter()
    i.env.define(Symbol("double"), make_lambda(["x"], "(* x 2)"))
    i.env.define(Symbol("add3"), make_lambda(["a", "b", "c"], "(+ a b c)"))
    return i


def test_lambda_application(interp):
    assert interp.eval("(double 21)") == 42
    assert interp.eval("(add3 1 2 3)") == 6


def test_arguments_are_evaluated_first(interp):
    assert interp.eval("(double (+ 1 2))") == 6
    assert interp.eval("(double (double 5))") == 20


def test_parameters_do_not_leak(interp):
    interp.eval("(double 4)")
    with pytest.raises(UnknownDef):
        interp.eval("x")


def test_parameters_shadow_and_restore_globals(interp):
    assert interp.eval("(def x 100) (double 4) x") == [Nil, 8, 100]


def test_body_forms_run_in_order_and_return_last():
    interp = Interpreter()
    interp.env.define(Symbol("f"), make_lambda(["x"], "(def y (+ x 1)) (* y 10)"))
    assert interp.eval("(f 2)") == 30
    # def inside the body binds in the call frame
    with pytest.raises(UnknownDef):
        interp.eval("y")


def test_empty_body_returns_nil():
    interp = Interpreter()
    interp.env.define(Symbol("noop"), make_lambda([], ""))
    assert interp.eval("(noop)") is Nil


def test_zero_argument_lambda_call():
    interp = Interpreter()
    interp.env.define(Symbol("answer"), make_lambda([], "42"))
    assert interp.eval("(answer)") == 42


@pytest.mark.parametrize("source", ["(double)", "(double 1 2)", "(add3 1 2)"])
def test_wrong_arity(interp, source):
    with pytest.raises(WrongArity) as exc:
        interp.eval(source)
    assert exc.value.span.start.column == 0


def test_lambdas_can_be_rebound_with_def(interp):
    assert interp.eval("(def twice double) (twice 5)") == [Nil, 10]


def test_lambda_is_a_value(interp):
    value = interp.eval("double")
    assert isinstance(value, Lambda)
    assert str(value) == "#lambda(x)#"


def test_captured_environment(interp):
    closure_env = Environment(outer=interp.env)
    closure_env.define(Symbol("k"), 10)
    interp.env.define(Symbol("addk"), make_lambda(["n"], "(+ n k)", closure_env))
    assert interp.eval("(addk 1)") == 11
    with pytest.raises(UnknownDef):
        interp.eval("k")


def test_runaway_recursion_is_caught():
    interp = Interpreter(max_depth=50)
    interp.env.define(Symbol("loop"), make_lambda(["n"], "(loop (+ n 1))"))
    with pytest.raises(RecursionTooDeep):
        interp.eval("(loop 0)")
    assert interp.evaluator.depth == 0


def test_default_depth_limit_stays_below_python_recursion_limit():
    interp = Interpreter()
    interp.env.define(Symbol("loop"), make_lambda([], "(loop)"))
    with pytest.raises(RecursionTooDeep):
        interp.eval("(loop)")


def test_large_depth_limit_still_raises_recursion_too_deep():
    # the Python stack runs out long before 100000 levels
    interp = Interpreter(max_depth=100000)
    interp.env.define(Symbol("loop"), make_lambda([], "(loop)"))
    with pytest.raises(RecursionTooDeep) as exc:
        interp.eval("(loop)")
    assert exc.value.limit == 100000
    assert interp.evaluator.depth == 0
    assert interp.eval("(+ 4 4)") == 8
