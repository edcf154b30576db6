"""Recursive descent + Pratt parser for GNU ld linker scripts."""

from . import ast_nodes as ast
from .parser_base import LinkerScriptParseError, ParserBase
from .expression_parser import ExpressionMixin
from .statement_parser import StatementMixin
from .memory_parser import MemoryMixin
from .section_parser import SectionMixin

__all__ = ['Parser', 'LinkerScriptParseError']


class Parser(SectionMixin, MemoryMixin, StatementMixin, ExpressionMixin,
             ParserBase):
    """Linker-script parser.

    ``parse()`` turns the whole text into a ``Script``; ``parse_expression()``
    reads a single expression.  Both raise ``LinkerScriptParseError`` on
    malformed input and leave non-fatal notes in ``self.warnings``.
    """

    def parse(self):
        loc = self._loc()
        items = []
        while True:
            self._skip_semicolons('script')
            if self._at_end():
                break
            item = self._parse_root_item()
            if item is None:
                self._error("Expected statement, command, MEMORY or SECTIONS")
            items.append(item)
        return ast.Script(items=items, **loc)

    def _parse_root_item(self):
        return self._first_of(
            self._parse_statement,
            self._parse_memory,
            self._parse_sections,
            self._parse_command,
        )

    def parse_expression(self):
        expr = self._expect_expression()
        if not self._at_end():
            self._error("Unexpected input after expression")
        return expr
