"""Tier 1 unit tests: symbol assignments, PROVIDE/HIDDEN and ASSERT."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from tests.helpers import parse_one, assert_node_type
from ldscript_parser import parse, LinkerScriptParseError
from ldscript_parser.ast_nodes import *


class TestAssignment:
    def test_simple(self):
        node = parse_one("x = 1;")
        assert node == Assign(name="x", op="=", expression=NumberLiteral(value=1))

    @pytest.mark.parametrize("op", ["+=", "-=", "*=", "/=", "<<=", ">>=", "&=", "|="])
    def test_compound_operators(self, op):
        node = parse_one(f"x {op} 1;")
        assert_node_type(node, Assign, name="x", op=op)

    @pytest.mark.parametrize("text,op", [
        ("x-=1;", "-="),
        ("x+=1;", "+="),
        ("x/=2;", "/="),
        ("x<<=1;", "<<="),
    ])
    def test_compact_spelling(self, text, op):
        assert_node_type(parse_one(text), Assign, name="x", op=op)

    def test_location_counter(self):
        node = parse_one(". = ALIGN(4);")
        assert node == Assign(name=".", expression=FuncCall(
            name="ALIGN", args=[NumberLiteral(value=4)]))

    def test_quoted_name(self):
        assert_node_type(parse_one('"my sym" = 0;'), Assign, name='"my sym"')

    def test_semicolon_required(self):
        with pytest.raises(LinkerScriptParseError, match="Expected ';'"):
            parse("x = 1")

    def test_missing_expression(self):
        with pytest.raises(LinkerScriptParseError, match="expression after '='"):
            parse("x = ;")

    def test_equality_is_not_assignment(self):
        with pytest.raises(LinkerScriptParseError):
            parse("x == 1;")


class TestProvideHidden:
    def test_provide(self):
        node = parse_one("PROVIDE(end = .);")
        assert node == Provide(name="end", expression=Identifier(name="."))

    def test_provide_spaced(self):
        node = parse_one("PROVIDE ( _end = . );")
        assert_node_type(node, Provide, name="_end")

    def test_provide_hidden_without_semicolon(self):
        node = parse_one("PROVIDE_HIDDEN(__init_array_start = .)")
        assert_node_type(node, ProvideHidden, name="__init_array_start")

    def test_hidden(self):
        node = parse_one("HIDDEN(guard = 0x2400 + 0x40);")
        assert_node_type(node, Hidden, name="guard")
        assert_node_type(node.expression, BinaryOp, op="+")

    def test_double_equals_is_error(self):
        with pytest.raises(LinkerScriptParseError, match="Expected '=' in PROVIDE"):
            parse("PROVIDE(x == 1);")

    def test_unclosed(self):
        with pytest.raises(LinkerScriptParseError, match="Expected '\\)'"):
            parse("HIDDEN(x = 1;")

    def test_provide_as_plain_symbol(self):
        node = parse_one("PROVIDE = 1;")
        assert_node_type(node, Assign, name="PROVIDE")


class TestAssert:
    def test_assert(self):
        node = parse_one('ASSERT(SIZEOF(.upper)==0,"Test");')
        expected = Assert(
            expression=BinaryOp(
                op="==",
                left=FuncCall(name="SIZEOF", args=[Identifier(name=".upper")]),
                right=NumberLiteral(value=0)),
            message="Test")
        assert node == expected

    def test_assert_without_semicolon(self):
        node = parse_one('ASSERT(. <= 0x8000, "too big")')
        assert_node_type(node, Assert, message="too big")

    def test_assert_needs_message(self):
        with pytest.raises(LinkerScriptParseError, match="quoted assertion message"):
            parse("ASSERT(1, oops);")

    def test_assert_needs_comma(self):
        with pytest.raises(LinkerScriptParseError, match="Expected ','"):
            parse('ASSERT(1 "msg");')


class TestStatementSequence:
    def test_statements_in_order(self, parse_snippet):
        tree = parse_snippet("a = 1; PROVIDE(b = a); HIDDEN(c = b)")
        assert [type(i).__name__ for i in tree.items] == ["Assign", "Provide", "Hidden"]

    def test_stray_semicolons_warn(self, parse_snippet_with_warnings):
        tree, warnings = parse_snippet_with_warnings("a = 1;;")
        assert len(tree.items) == 1
        assert warnings and warnings[0].startswith("L1:")
