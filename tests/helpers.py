"""Shared test utility functions for linker-script parser tests."""

import sys
from pathlib import Path
from collections import Counter
from typing import Iterator

sys.path.insert(0, str(Path(__file__).parent.parent))

from ldscript_parser import parse, parse_with_diagnostics, generate
from ldscript_parser.visitor import walk
from ldscript_parser.ast_nodes import *


def parse_one(text: str) -> AstNode:
    """Parse text, assert exactly 1 root item, return it."""
    tree = parse(text, filename="<test>")
    assert len(tree.items) == 1, \
        f"Expected 1 item, got {len(tree.items)}: {[type(s).__name__ for s in tree.items]}"
    return tree.items[0]


def parse_expr(text: str) -> Expression:
    """Wrap input as '_TEST_ = {text};' and return the expression node."""
    stmt = parse_one(f"_TEST_ = {text};")
    assert isinstance(stmt, Assign), \
        f"Expected Assign, got {type(stmt).__name__}"
    return stmt.expression


def parse_section_command(text: str) -> AstNode:
    """Parse text as the only command of a SECTIONS block."""
    sections = parse_one(f"SECTIONS {{\n{text}\n}}")
    assert isinstance(sections, Sections)
    assert len(sections.commands) == 1, \
        f"Expected 1 command, got {[type(c).__name__ for c in sections.commands]}"
    return sections.commands[0]


def parse_output_command(text: str) -> AstNode:
    """Parse text as the only body command of an output section."""
    section = parse_section_command(f".test : {{\n{text}\n}}")
    assert isinstance(section, OutputSection)
    assert len(section.content) == 1, \
        f"Expected 1 command, got {[type(c).__name__ for c in section.content]}"
    return section.content[0]


def assert_node_type(node, expected_type, **field_checks):
    """Assert node type and optionally check field values."""
    assert isinstance(node, expected_type), \
        f"Expected {expected_type.__name__}, got {type(node).__name__}"
    for field, expected in field_checks.items():
        actual = getattr(node, field, None)
        assert actual == expected, \
            f"{field}: expected {expected!r}, got {actual!r}"


def walk_ast(node) -> Iterator:
    """Depth-first traversal of all AST nodes."""
    yield from walk(node)


def count_node_types(tree: Script) -> Counter:
    """Recursively count all AST node types."""
    return Counter(type(n).__name__ for n in walk_ast(tree))


def collect_warnings(text: str) -> list:
    """Parse text and return only the warnings list."""
    _, warnings = parse_with_diagnostics(text, filename="<test>")
    return warnings


def roundtrip(text: str):
    """Parse, generate, re-parse; return ``(tree, generated, reparsed)``."""
    tree = parse(text, filename="<roundtrip>")
    generated = generate(tree)
    reparsed = parse(generated, filename="<roundtrip2>")
    return tree, generated, reparsed
