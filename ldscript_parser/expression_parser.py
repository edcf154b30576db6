"""Expression parsing mixin: Pratt parser for linker-script expressions."""

from . import ast_nodes as ast
from .keywords import (
    _BINARY_BP, _BINARY_OPS, _NOT_BINARY_PREFIXES,
    _TERNARY_BP, _UNARY_BP, _UNARY_OPS,
)


class ExpressionMixin:
    """Mixin providing expression parsing (Pratt parser).

    Expressions never commit: if an operator is not followed by a valid
    operand, the operator is left unconsumed and the expression ends before
    it, so the enclosing rule reports the error at the operator.
    """

    def _parse_expression(self, bp=0):
        """Parse an expression whose operators bind tighter than *bp*.

        Returns ``None`` (cursor restored) if no expression starts here.
        """
        start = self._mark()
        loc = self._loc()
        left = self._expr_nud()
        if left is None:
            self._reset(start)
            return None
        while True:
            self.scan.skip_wsc()
            mark = self._mark()
            # Ternary: cond ? then_expr : else_expr (right-associative)
            if bp < _TERNARY_BP and self.scan.literal('?'):
                if_true = self._parse_expression(0)
                if if_true is None or not self._match(':'):
                    self._reset(mark)
                    break
                if_false = self._parse_expression(_TERNARY_BP - 1)
                if if_false is None:
                    self._reset(mark)
                    break
                left = ast.TernaryOp(condition=left, if_true=if_true,
                                     if_false=if_false, **loc)
                continue
            op = self._binary_op()
            if op is None:
                break
            nbp = _BINARY_BP[op]
            if nbp <= bp:
                self._reset(mark)
                break
            right = self._parse_expression(nbp)
            if right is None:
                self._reset(mark)
                break
            left = ast.BinaryOp(op=op, left=left, right=right, **loc)
        return left

    def _binary_op(self):
        self.scan.skip_wsc()
        for prefix in _NOT_BINARY_PREFIXES:
            if self.scan.startswith(prefix):
                return None
        for op in _BINARY_OPS:
            if self.scan.literal(op):
                return op
        return None

    def _expr_nud(self):
        loc = self._loc()
        ch = self.scan.current()
        if ch in _UNARY_OPS and not self.scan.startswith('!='):
            self.scan.literal(ch)
            operand = self._parse_expression(_UNARY_BP)
            if operand is None:
                return None
            return ast.UnaryOp(op=ch, operand=operand, **loc)
        return self._expr_primary()

    def _expr_primary(self):
        loc = self._loc()
        value = self.scan.scan_number()
        if value is not None:
            return ast.NumberLiteral(value=value, **loc)
        if self.scan.literal('('):
            inner = self._parse_expression(0)
            if inner is None or not self._match(')'):
                return None
            return inner
        name = self.scan.scan_symbol()
        if name is None:
            return None
        # Function call: NAME(args...)
        if not name.startswith('"'):
            mark = self._mark()
            if self._match('('):
                args = self._parse_call_args()
                if args is not None:
                    return ast.FuncCall(name=name, args=args, **loc)
                self._reset(mark)
        return ast.Identifier(name=name, **loc)

    # ------------------------------------------------------------------
    # Function call arguments: (expr, expr, ...)
    # ------------------------------------------------------------------
    def _parse_call_args(self):
        """Parse comma-separated arguments after '(' up to and including ')'."""
        args = []
        if self._match(')'):
            return args
        while True:
            arg = self._parse_expression(0)
            if arg is None:
                return None
            args.append(arg)
            if self._match(','):
                continue
            if self._match(')'):
                return args
            return None

    # ------------------------------------------------------------------
    # Committed helpers
    # ------------------------------------------------------------------
    def _expect_expression(self, what="expression"):
        expr = self._parse_expression(0)
        if expr is None:
            self._error(f"Expected {what}")
        return expr

    def _parenthesized_expression(self, what):
        """``( expr )`` after an already-matched keyword; committed."""
        self._expect('(')
        expr = self._expect_expression(what)
        self._expect(')')
        return expr
