"""Statement and command parsing mixin for the linker-script parser."""

from . import ast_nodes as ast
from .keywords import _ASSIGN_OPS, _FILE_LIST_COMMANDS


class StatementMixin:
    """Mixin providing symbol assignments, assertions and commands."""

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------
    def _parse_statement(self):
        """ASSERT, PROVIDE_HIDDEN, PROVIDE, HIDDEN or ``name op expr;``."""
        return self._first_of(
            self._parse_assert,
            self._parse_provide_hidden,
            self._parse_provide,
            self._parse_hidden,
            self._parse_assignment,
        )

    def _parse_assert(self):
        loc = self._loc()
        if not self._match_kw('ASSERT') or not self._match('('):
            return None
        expr = self._expect_expression("assertion expression")
        self._expect(',')
        message = self._string()
        if message is None:
            self._error("Expected quoted assertion message")
        self._expect(')')
        self._match(';')
        return ast.Assert(expression=expr, message=message, **loc)

    def _parse_provide_hidden(self):
        return self._parse_wrapped_assignment('PROVIDE_HIDDEN', ast.ProvideHidden)

    def _parse_provide(self):
        return self._parse_wrapped_assignment('PROVIDE', ast.Provide)

    def _parse_hidden(self):
        return self._parse_wrapped_assignment('HIDDEN', ast.Hidden)

    def _parse_wrapped_assignment(self, keyword, node_cls):
        """``KEYWORD(name = expr)`` with an optional trailing ';'."""
        loc = self._loc()
        if not self._match_kw(keyword) or not self._match('('):
            return None
        name = self._expect_symbol(f"symbol name in {keyword}")
        if self._at('==') or not self._match('='):
            self._error(f"Expected '=' in {keyword}")
        expr = self._expect_expression(f"expression in {keyword}")
        self._expect(')')
        self._match(';')
        return node_cls(name=name, expression=expr, **loc)

    def _parse_assignment(self):
        loc = self._loc()
        name = self._symbol()
        if name is None:
            return None
        op = self._assign_op()
        if op is None:
            return None
        expr = self._expect_expression(f"expression after '{op}'")
        self._expect(';')
        return ast.Assign(name=name, op=op, expression=expr, **loc)

    def _assign_op(self):
        self.scan.skip_wsc()
        if self.scan.startswith('=='):
            return None
        for op in _ASSIGN_OPS:
            if self.scan.literal(op):
                return op
        return None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _parse_command(self):
        """INCLUDE, INSERT or a generic ``NAME(args)`` command."""
        return self._first_of(
            self._parse_include,
            self._parse_insert,
            self._parse_call_command,
        )

    def _parse_include(self):
        loc = self._loc()
        if not self._match_kw('INCLUDE'):
            return None
        path = self._filename()
        if path is None:
            self._error("Expected file name after INCLUDE")
        self._match(';')
        return ast.Include(path=path, **loc)

    def _parse_insert(self):
        loc = self._loc()
        if not self._match_kw('INSERT'):
            return None
        order = self._match_any_kw([o.value for o in ast.InsertOrder])
        if order is None:
            self._error("Expected BEFORE or AFTER after INSERT")
        section = self._expect_symbol("output section name after INSERT")
        self._match(';')
        return ast.Insert(order=ast.InsertOrder(order), section=section, **loc)

    def _parse_call_command(self):
        loc = self._loc()
        name = self._symbol()
        if name is None or name.startswith('"') or not self._match('('):
            return None
        if name in _FILE_LIST_COMMANDS:
            args = self._command_args(name, self._expect_file_arg)
        else:
            args = self._command_args(name, self._expect_command_arg)
        self._match(';')
        return ast.CallCommand(name=name, args=args, **loc)

    def _command_args(self, command, read_arg):
        """Arguments after '(' up to and including ')', commas optional."""
        args = []
        while not self._match(')'):
            if self._at_end():
                self._error(f"Expected ')' to close {command}")
            if args and self._match(','):
                continue
            args.append(read_arg(command))
        return args

    def _expect_file_arg(self, command):
        """A file name, or a nested list such as ``AS_NEEDED(libm.so)``."""
        loc = self._loc()
        name = self.scan.scan_filename()
        if name is None:
            self._error(f"Expected file name in {command}")
        if name in _FILE_LIST_COMMANDS and self._match('('):
            args = self._command_args(name, self._expect_file_arg)
            return ast.FuncCall(name=name, args=args, **loc)
        return ast.Identifier(name=name, **loc)

    def _expect_command_arg(self, command):
        """An expression or a bare file name, whichever reads further."""
        loc = self._loc()
        start = self._mark()
        expr = self._parse_expression(0)
        expr_end = self._mark()
        self._reset(start)
        filename = self.scan.scan_filename()
        if filename is not None and self._mark() > expr_end:
            return ast.Identifier(name=filename, **loc)
        if expr is None:
            self._error(f"Expected argument to {command}")
        self._reset(expr_end)
        return expr
