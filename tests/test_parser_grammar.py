from __future__ import annotations

from textwrap import dedent

import pytest

from monkey.tree import (
    ArrayLiteral,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    ReturnStatement,
    StringLiteral,
)
from tests.support.harness import parse_errors, parse_ok

PRECEDENCE_CASES = [
    pytest.param("-a * b", "((-a) * b)", id="prefix-binds-tighter"),
    pytest.param("!-a", "(!(-a))", id="prefix-nested"),
    pytest.param("a + b + c", "((a + b) + c)", id="sum-left-assoc"),
    pytest.param("a + b - c", "((a + b) - c)", id="sum-mixed"),
    pytest.param("a * b * c", "((a * b) * c)", id="product-left-assoc"),
    pytest.param("a * b / c", "((a * b) / c)", id="product-mixed"),
    pytest.param("a % b * c", "((a % b) * c)", id="mod-is-product"),
    pytest.param("a + b / c", "(a + (b / c))", id="product-over-sum"),
    pytest.param(
        "a + b * c + d / e - f",
        "(((a + (b * c)) + (d / e)) - f)",
        id="mixed-arith",
    ),
    pytest.param("3 + 4; -5 * 5", "(3 + 4)((-5) * 5)", id="two-statements"),
    pytest.param("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))", id="compare-over-eq"),
    pytest.param("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))", id="compare-over-neq"),
    pytest.param(
        "3 + 4 * 5 == 3 * 1 + 4 * 5",
        "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))",
        id="arith-around-eq",
    ),
    pytest.param("3 > 5 == false", "((3 > 5) == false)", id="bool-operand"),
    pytest.param("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)", id="group-inner"),
    pytest.param("(5 + 5) * 2", "((5 + 5) * 2)", id="group-lifts-sum"),
    pytest.param("-(5 + 5)", "(-(5 + 5))", id="group-under-prefix"),
    pytest.param("!(true == true)", "(!(true == true))", id="group-under-bang"),
    pytest.param("a + add(b * c) + d", "((a + add((b * c))) + d)", id="call-in-sum"),
    pytest.param(
        "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))",
        "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
        id="call-nested-args",
    ),
    pytest.param(
        "a * [1, 2, 3, 4][b * c] * d",
        "((a * ([1, 2, 3, 4][(b * c)])) * d)",
        id="index-binds-tightest",
    ),
    pytest.param(
        "add(a * b[2], b[1], 2 * [1, 2][1])",
        "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))",
        id="index-in-call-args",
    ),
    pytest.param("1.5 + 2", "(1.5 + 2)", id="float-literal"),
    pytest.param("f(1)(2)", "f(1)(2)", id="chained-call"),
]


@pytest.mark.parametrize("source, expected", PRECEDENCE_CASES)
def test_operator_precedence(source: str, expected: str) -> None:
    assert parse_ok(source).string() == expected


RENDER_CASES = [
    pytest.param("let x = 5;", "let x = 5;", id="let"),
    pytest.param("let y = x + 1", "let y = (x + 1);", id="let-no-semicolon"),
    pytest.param("return 10;", "return 10;", id="return"),
    pytest.param("if (x < y) { x }", "if(x < y) x", id="if"),
    pytest.param("if (x < y) { x } else { y }", "if(x < y) xelse y", id="if-else"),
    pytest.param(
        "if (a) { b } else if (c) { d } else { e }",
        "ifa belse ifc delse e",
        id="if-else-if-else",
    ),
    pytest.param("fn(x, y) { x + y; }", "fn(x, y)(x + y)", id="fn-literal"),
    pytest.param("fn() { 1 }", "fn()1", id="fn-nullary"),
    pytest.param("[]", "[]", id="empty-array"),
    pytest.param('"hello world"', "hello world", id="string"),
]


@pytest.mark.parametrize("source, expected", RENDER_CASES)
def test_program_rendering(source: str, expected: str) -> None:
    assert parse_ok(source).string() == expected


def test_let_statements() -> None:
    program = parse_ok(
        dedent(
            """\
            let x = 5;
            let y = true;
            let foobar = y;
            """
        )
    )

    assert len(program.statements) == 3
    for stmt, name in zip(program.statements, ["x", "y", "foobar"]):
        assert isinstance(stmt, LetStatement)
        assert stmt.token_literal() == "let"
        assert stmt.name.value == name
        assert stmt.name.token_literal() == name

    assert isinstance(program.statements[0].value, IntegerLiteral)
    assert isinstance(program.statements[1].value, Boolean)
    assert isinstance(program.statements[2].value, Identifier)


def test_return_statements() -> None:
    program = parse_ok("return 5; return 10; return add(15);")

    assert len(program.statements) == 3
    for stmt in program.statements:
        assert isinstance(stmt, ReturnStatement)
        assert stmt.token_literal() == "return"

    assert isinstance(program.statements[2].return_value, CallExpression)


def test_literal_expressions() -> None:
    program = parse_ok('foobar; 5; 2.5; "hi"; true; false;')
    exprs = [stmt.expression for stmt in program.statements]

    assert all(isinstance(stmt, ExpressionStatement) for stmt in program.statements)
    assert isinstance(exprs[0], Identifier) and exprs[0].value == "foobar"
    assert isinstance(exprs[1], IntegerLiteral) and exprs[1].value == 5
    assert isinstance(exprs[2], FloatLiteral) and exprs[2].value == 2.5
    assert isinstance(exprs[3], StringLiteral) and exprs[3].value == "hi"
    assert isinstance(exprs[4], Boolean) and exprs[4].value is True
    assert isinstance(exprs[5], Boolean) and exprs[5].value is False


@pytest.mark.parametrize(
    "source, operator",
    [
        pytest.param("!5;", "!", id="bang"),
        pytest.param("-15;", "-", id="minus"),
        pytest.param("!true;", "!", id="bang-bool"),
    ],
)
def test_prefix_expressions(source: str, operator: str) -> None:
    expr = parse_ok(source).statements[0].expression

    assert isinstance(expr, PrefixExpression)
    assert expr.operator == operator


@pytest.mark.parametrize(
    "operator", ["+", "-", "*", "/", "%", ">", "<", "==", "!="]
)
def test_infix_expressions(operator: str) -> None:
    expr = parse_ok(f"5 {operator} 7;").statements[0].expression

    assert isinstance(expr, InfixExpression)
    assert expr.operator == operator
    assert expr.left.value == 5
    assert expr.right.value == 7


def test_if_else_if_chain_structure() -> None:
    expr = parse_ok(
        "if (x < 1) { a } else if (x < 2) { b } else if (x < 3) { c } else { d }"
    ).statements[0].expression

    assert isinstance(expr, IfExpression)
    assert expr.condition.string() == "(x < 1)"
    assert [clause.condition.string() for clause in expr.else_ifs] == ["(x < 2)", "(x < 3)"]
    assert [clause.consequence.string() for clause in expr.else_ifs] == ["b", "c"]
    assert expr.alternative is not None
    assert expr.alternative.string() == "d"


def test_if_without_else() -> None:
    expr = parse_ok("if (x) { y }").statements[0].expression

    assert isinstance(expr, IfExpression)
    assert expr.else_ifs == ()
    assert expr.alternative is None


def test_function_literal_structure() -> None:
    expr = parse_ok("fn(x, y) { x + y; }").statements[0].expression

    assert isinstance(expr, FunctionLiteral)
    assert [p.value for p in expr.parameters] == ["x", "y"]
    assert len(expr.body.statements) == 1
    assert expr.body.statements[0].string() == "(x + y)"


@pytest.mark.parametrize(
    "source, params",
    [
        pytest.param("fn() {};", [], id="none"),
        pytest.param("fn(x) {};", ["x"], id="one"),
        pytest.param("fn(x, y, z) {};", ["x", "y", "z"], id="three"),
    ],
)
def test_function_parameters(source: str, params: list) -> None:
    expr = parse_ok(source).statements[0].expression
    assert [p.value for p in expr.parameters] == params


def test_call_expression_structure() -> None:
    expr = parse_ok("add(1, 2 * 3, 4 + 5);").statements[0].expression

    assert isinstance(expr, CallExpression)
    assert expr.function.string() == "add"
    assert [arg.string() for arg in expr.arguments] == ["1", "(2 * 3)", "(4 + 5)"]


def test_array_and_index_structure() -> None:
    arr = parse_ok("[1, 2 * 2, 3 + 3]").statements[0].expression
    assert isinstance(arr, ArrayLiteral)
    assert [el.string() for el in arr.elements] == ["1", "(2 * 2)", "(3 + 3)"]

    idx = parse_ok("myArray[1 + 1]").statements[0].expression
    assert isinstance(idx, IndexExpression)
    assert idx.left.string() == "myArray"
    assert idx.index.string() == "(1 + 1)"


def test_program_token_literal() -> None:
    assert parse_ok("let x = 1;").token_literal() == "let"
    assert parse_ok("").token_literal() == ""
    assert parse_ok("").statements == ()


ERROR_CASES = [
    pytest.param(
        "let = 5;",
        [
            "expected next token to be IDENT, got = instead",
            "no prefix parse function for = found",
        ],
        id="let-missing-name",
    ),
    pytest.param(
        "let x 5;",
        ["expected next token to be =, got INT instead"],
        id="let-missing-assign",
    ),
    pytest.param(
        "let 838383;",
        ["expected next token to be IDENT, got INT instead"],
        id="let-number-name",
    ),
    pytest.param("@", ["no prefix parse function for ILLEGAL found"], id="illegal"),
    pytest.param("a +", ["no prefix parse function for EOF found"], id="dangling-infix"),
    pytest.param(
        "9223372036854775808",
        ['could not parse "9223372036854775808" as integer'],
        id="int-overflow",
    ),
]


@pytest.mark.parametrize("source, expected", ERROR_CASES)
def test_parser_errors(source: str, expected: list) -> None:
    assert parse_errors(source) == expected


@pytest.mark.parametrize(
    "source, first_error",
    [
        pytest.param(
            "if (x { x }",
            "expected next token to be ), got { instead",
            id="if-missing-rparen",
        ),
        pytest.param(
            "if x { x }",
            "expected next token to be (, got IDENT instead",
            id="if-missing-lparen",
        ),
        pytest.param(
            "fn(x, 1) { x }",
            "expected next token to be IDENT, got INT instead",
            id="fn-bad-param",
        ),
        pytest.param(
            "[1, 2",
            "expected next token to be ], got EOF instead",
            id="array-unclosed",
        ),
        pytest.param(
            "add(1, 2",
            "expected next token to be ), got EOF instead",
            id="call-unclosed",
        ),
    ],
)
def test_parser_first_error(source: str, first_error: str) -> None:
    errors = parse_errors(source)
    assert errors, "expected at least one parser error"
    assert errors[0] == first_error


def test_errors_accumulate_across_statements() -> None:
    errors = parse_errors("let x 1; let y 2; let 3;")

    assert errors == [
        "expected next token to be =, got INT instead",
        "expected next token to be =, got INT instead",
        "expected next token to be IDENT, got INT instead",
    ]


def test_int64_max_is_accepted() -> None:
    expr = parse_ok("9223372036854775807").statements[0].expression
    assert expr.value == 2 ** 63 - 1
