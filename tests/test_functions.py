from __future__ import annotations

from textwrap import dedent

import pytest

from monkey.types import MkyFn
from tests.support.harness import eval_value, run_runtime_case

SCENARIOS = [
    pytest.param("let identity = fn(x) { x; }; identity(5);", ("int", 5), None, id="identity-implicit"),
    pytest.param("let identity = fn(x) { return x; }; identity(5);", ("int", 5), None, id="identity-return"),
    pytest.param("let double = fn(x) { x * 2; }; double(5);", ("int", 10), None, id="double"),
    pytest.param("let add = fn(x, y) { x + y; }; add(5, 5);", ("int", 10), None, id="two-params"),
    pytest.param(
        "let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));",
        ("int", 20),
        None,
        id="nested-call-args",
    ),
    pytest.param("fn(x) { x; }(5)", ("int", 5), None, id="immediate-call"),
    pytest.param("fn() { 1 }()", ("int", 1), None, id="nullary"),
    pytest.param("fn() { }()", ("null", None), None, id="empty-body"),
    pytest.param("let f = fn() { let a = 1; }; f()", ("null", None), None, id="body-ending-in-let"),
    pytest.param("fn(x) { x }", ("function", None), None, id="function-value"),
    pytest.param(
        dedent(
            """\
            let newAdder = fn(x) {
              fn(y) { x + y };
            };
            let addTwo = newAdder(2);
            addTwo(2);
            """
        ),
        ("int", 4),
        None,
        id="closure",
    ),
    pytest.param(
        dedent(
            """\
            let newAdder = fn(x) { fn(y) { x + y } };
            let addOne = newAdder(1);
            let addTen = newAdder(10);
            addOne(5) + addTen(5);
            """
        ),
        ("int", 21),
        None,
        id="closures-independent",
    ),
    pytest.param(
        dedent(
            """\
            let fib = fn(n) {
              if (n < 2) { n } else { fib(n - 1) + fib(n - 2) }
            };
            fib(15);
            """
        ),
        ("int", 610),
        None,
        id="recursion",
    ),
    pytest.param(
        "let apply = fn(f, x) { f(x) }; apply(fn(n) { n * n }, 4)",
        ("int", 16),
        None,
        id="higher-order",
    ),
    pytest.param(
        "let compose = fn(f, g) { fn(x) { g(f(x)) } }; compose(fn(x) { x + 1 }, fn(x) { x * 10 })(2)",
        ("int", 30),
        None,
        id="compose",
    ),
    pytest.param(
        "let f = fn(x) { x }; f()",
        ("error", "wrong number of arguments: want=1, got=0"),
        None,
        id="too-few-args",
    ),
    pytest.param(
        "let f = fn(x) { x }; f(1, 2)",
        ("error", "wrong number of arguments: want=1, got=2"),
        None,
        id="too-many-args",
    ),
    pytest.param(
        "let f = fn(x) { x }; f(1) + f()",
        ("error", "wrong number of arguments: want=1, got=0"),
        None,
        id="arity-error-propagates",
    ),
    pytest.param(
        "let f = fn() { foo }; f(); 5",
        ("error", "identifier not found: foo"),
        None,
        id="error-in-body-stops-program",
    ),
    pytest.param("len", ("builtin", "len"), None, id="builtin-value"),
    pytest.param("let l = len; l([1, 2])", ("int", 2), None, id="builtin-alias"),
    pytest.param(
        "let apply = fn(f, x) { f(x) }; apply(first, [7, 8])",
        ("int", 7),
        None,
        id="builtin-as-argument",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_functions(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_function_object_shape() -> None:
    fn = eval_value("fn(x) { x + 2; };")

    assert isinstance(fn, MkyFn)
    assert [p.value for p in fn.parameters] == ["x"]
    assert fn.body.string() == "(x + 2)"


def test_function_inspect() -> None:
    assert eval_value("fn(x) { x + 2; }").inspect() == "fn(x) {\n(x + 2)\n}"
    assert eval_value("fn(a, b) { a }").inspect() == "fn(a, b) {\na\n}"


def test_builtin_inspect() -> None:
    assert eval_value("len").inspect() == "builtin function"


def test_deep_recursion_counts_down() -> None:
    result = eval_value(
        "let down = fn(n) { if (n == 0) { 0 } else { down(n - 1) } }; down(50)"
    )
    assert result.value == 0
