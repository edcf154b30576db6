"""Tier 1 unit tests: Expressions."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from tests.helpers import parse_expr, assert_node_type
from ldscript_parser import parse_expression, LinkerScriptParseError
from ldscript_parser.ast_nodes import *


def num(value):
    return NumberLiteral(value=value)


def ident(name):
    return Identifier(name=name)


def binop(op, left, right):
    return BinaryOp(op=op, left=left, right=right)


class TestPrimaries:
    def test_number(self):
        assert_node_type(parse_expr("0x400"), NumberLiteral, value=0x400)

    def test_number_with_suffix(self):
        assert_node_type(parse_expr("128K"), NumberLiteral, value=128 * 1024)

    def test_location_counter(self):
        assert_node_type(parse_expr("."), Identifier, name=".")

    def test_identifier(self):
        assert_node_type(parse_expr("__stack_size__"), Identifier,
                         name="__stack_size__")

    def test_quoted_identifier_keeps_quotes(self):
        assert_node_type(parse_expr('"A-B"'), Identifier, name='"A-B"')

    def test_hyphenated_symbol(self):
        assert_node_type(parse_expr("A-B"), Identifier, name="A-B")

    def test_func_call(self):
        node = parse_expr("ALIGN(4)")
        assert node == FuncCall(name="ALIGN", args=[num(4)])

    def test_func_call_two_args(self):
        node = parse_expr("MAX(a, 0x10)")
        assert node == FuncCall(name="MAX", args=[ident("a"), num(16)])

    def test_func_call_no_args(self):
        node = parse_expr("SIZEOF_HEADERS()")
        assert node == FuncCall(name="SIZEOF_HEADERS", args=[])

    def test_func_call_space_before_paren(self):
        node = parse_expr("ADDR (.text)")
        assert node == FuncCall(name="ADDR", args=[ident(".text")])

    def test_parenthesized(self):
        assert parse_expr("((7))") == num(7)


class TestPrecedence:
    def test_mul_over_add(self):
        assert parse_expr("1 + 2 * 3") == binop("+", num(1), binop("*", num(2), num(3)))

    def test_parens_override(self):
        assert parse_expr("(1 + 2) * 3") == binop("*", binop("+", num(1), num(2)), num(3))

    def test_left_associative(self):
        assert parse_expr("10 - 4 - 3") == binop("-", binop("-", num(10), num(4)), num(3))

    def test_shift_below_add(self):
        assert parse_expr("1 << 2 + 3") == binop("<<", num(1), binop("+", num(2), num(3)))

    def test_logical_levels(self):
        node = parse_expr("a || b && c")
        assert node == binop("||", ident("a"), binop("&&", ident("b"), ident("c")))

    def test_bitwise_levels(self):
        node = parse_expr("a | b & c")
        assert node == binop("|", ident("a"), binop("&", ident("b"), ident("c")))

    def test_comparison_below_shift(self):
        node = parse_expr("a << 1 == b")
        assert node == binop("==", binop("<<", ident("a"), num(1)), ident("b"))

    @pytest.mark.parametrize("op", ["==", "!=", "<", ">", "<=", ">="])
    def test_comparisons(self, op):
        assert parse_expr(f"a {op} b") == binop(op, ident("a"), ident("b"))

    @pytest.mark.parametrize("op", ["*", "/", "%", "+", "-", "<<", ">>", "&", "|", "&&", "||"])
    def test_binary_ops(self, op):
        assert parse_expr(f"x {op} 2") == binop(op, ident("x"), num(2))

    def test_spaced_minus_is_subtraction(self):
        assert parse_expr("A - B") == binop("-", ident("A"), ident("B"))

    def test_ctor_count(self):
        node = parse_expr("(__CTOR_END__ - __CTOR_LIST__) / 4 - 2")
        expected = binop(
            "-",
            binop("/", binop("-", ident("__CTOR_END__"), ident("__CTOR_LIST__")), num(4)),
            num(2))
        assert node == expected


class TestUnary:
    @pytest.mark.parametrize("op", ["-", "~", "!"])
    def test_prefix(self, op):
        node = parse_expr(f"{op}x")
        assert node == UnaryOp(op=op, operand=ident("x"))

    def test_unary_binds_tighter_than_mul(self):
        node = parse_expr("-5 * 2")
        assert node == binop("*", UnaryOp(op="-", operand=num(5)), num(2))

    def test_double_negation(self):
        node = parse_expr("--x")
        assert node == UnaryOp(op="-", operand=UnaryOp(op="-", operand=ident("x")))

    def test_not_equal_is_not_unary(self):
        node = parse_expr("a != 0")
        assert_node_type(node, BinaryOp, op="!=")


class TestTernary:
    def test_simple(self):
        node = parse_expr("DEFINED(__stack_size__) ? __stack_size__ : 0x400")
        assert_node_type(node, TernaryOp)
        assert node.condition == FuncCall(name="DEFINED", args=[ident("__stack_size__")])
        assert node.if_true == ident("__stack_size__")
        assert node.if_false == num(0x400)

    def test_right_associative(self):
        node = parse_expr("a ? b : c ? d : e")
        expected = TernaryOp(condition=ident("a"), if_true=ident("b"),
                             if_false=TernaryOp(condition=ident("c"),
                                                if_true=ident("d"),
                                                if_false=ident("e")))
        assert node == expected

    def test_lowest_precedence(self):
        node = parse_expr("a || b ? 1 : 2 + 3")
        assert node.condition == binop("||", ident("a"), ident("b"))
        assert node.if_false == binop("+", num(2), num(3))


class TestParseExpression:
    def test_whole_input(self):
        node = parse_expression("ORIGIN(RAM) + LENGTH(RAM)")
        assert node == binop("+",
                             FuncCall(name="ORIGIN", args=[ident("RAM")]),
                             FuncCall(name="LENGTH", args=[ident("RAM")]))

    def test_surrounding_whitespace_and_comments(self):
        assert parse_expression("  /* c */ 42 // end") == num(42)

    def test_dangling_operator(self):
        with pytest.raises(LinkerScriptParseError):
            parse_expression("1 +")

    def test_trailing_input(self):
        with pytest.raises(LinkerScriptParseError, match="Unexpected input"):
            parse_expression("1 2")

    def test_empty(self):
        with pytest.raises(LinkerScriptParseError):
            parse_expression("")

    def test_position_recorded(self):
        node = parse_expression("\n  a + b")
        assert (node.line, node.col) == (2, 3)
        assert (node.right.line, node.right.col) == (2, 7)
