"""MEMORY block parsing mixin for the linker-script parser."""

from . import ast_nodes as ast
from .keywords import _LENGTH_KEYWORDS, _ORIGIN_KEYWORDS
from .parser_base import LinkerScriptParseError
from .scanner import U64_MAX
from .visitor import AstVisitor

_REGION_ATTRIBUTE_CHARS = frozenset('rRwWxXaAiIlL!')
_WORD_BITS = 64


class ConstantExpressionError(ValueError):
    """Raised when a MEMORY value cannot be folded to a number."""


class ConstantEvaluator(AstVisitor):
    """Fold an expression to an unsigned 64-bit value.

    Numbers, arithmetic/bitwise/logical operators, the ternary operator and
    ``ORIGIN(region)`` / ``LENGTH(region)`` of already-known regions are
    supported.  Anything else raises ``ConstantExpressionError``.
    """

    _BINARY = {
        '+': lambda a, b: a + b,
        '-': lambda a, b: a - b,
        '*': lambda a, b: a * b,
        # Shift counts of 64 or more clear every bit of a 64-bit value.
        '<<': lambda a, b: a << b if b < _WORD_BITS else 0,
        '>>': lambda a, b: a >> b if b < _WORD_BITS else 0,
        '&': lambda a, b: a & b,
        '|': lambda a, b: a | b,
        '&&': lambda a, b: int(bool(a and b)),
        '||': lambda a, b: int(bool(a or b)),
        '==': lambda a, b: int(a == b),
        '!=': lambda a, b: int(a != b),
        '<': lambda a, b: int(a < b),
        '>': lambda a, b: int(a > b),
        '<=': lambda a, b: int(a <= b),
        '>=': lambda a, b: int(a >= b),
    }

    def __init__(self, regions=()):
        self.regions = {r.name: r for r in regions}

    def evaluate(self, expr):
        try:
            return expr.accept(self) & U64_MAX
        except (OverflowError, MemoryError) as exc:
            raise ConstantExpressionError(
                "value does not fit in 64 bits") from exc

    def generic_visit(self, node):
        raise ConstantExpressionError(
            f"{type(node).__name__} is not a constant expression")

    def visit_NumberLiteral(self, node):
        return node.value

    def visit_Identifier(self, node):
        raise ConstantExpressionError(
            f"symbol {node.name!r} has no value in MEMORY")

    def visit_UnaryOp(self, node):
        value = node.operand.accept(self)
        if node.op == '-':
            return -value & U64_MAX
        if node.op == '~':
            return ~value & U64_MAX
        return int(not value)

    def visit_BinaryOp(self, node):
        left = node.left.accept(self)
        right = node.right.accept(self)
        if node.op in ('/', '%'):
            if right == 0:
                raise ConstantExpressionError("division by zero")
            return left // right if node.op == '/' else left % right
        return self._BINARY[node.op](left, right) & U64_MAX

    def visit_TernaryOp(self, node):
        if node.condition.accept(self):
            return node.if_true.accept(self)
        return node.if_false.accept(self)

    def visit_FuncCall(self, node):
        if node.name in ('ORIGIN', 'LENGTH') and len(node.args) == 1 \
                and isinstance(node.args[0], ast.Identifier):
            region = self.regions.get(node.args[0].name)
            if region is None:
                raise ConstantExpressionError(
                    f"unknown memory region {node.args[0].name!r}")
            return region.origin if node.name == 'ORIGIN' else region.length
        raise ConstantExpressionError(
            f"{node.name}() is not allowed in MEMORY")


class MemoryMixin:
    """Mixin providing ``MEMORY { ... }`` parsing."""

    def _parse_memory(self):
        loc = self._loc()
        if not self._match_kw('MEMORY') or not self._match('{'):
            return None
        regions = [self._expect_region([])]
        while not self._match('}'):
            regions.append(self._expect_region(regions))
        return ast.Memory(regions=regions, **loc)

    def _expect_region(self, known):
        """``name [(attrs)] : ORIGIN = expr, LENGTH = expr``; committed."""
        loc = self._loc()
        name = self._expect_symbol("memory region name")
        attributes = None
        if self._match('('):
            attributes = self._region_attributes()
            self._expect(')')
        self._expect(':')
        origin = self._region_value(_ORIGIN_KEYWORDS, known)
        self._expect(',')
        length = self._region_value(_LENGTH_KEYWORDS, known)
        return ast.Region(name=name, origin=origin, length=length,
                          attributes=attributes, **loc)

    def _region_attributes(self):
        self.scan.skip_wsc()
        start = self._mark()
        while self.scan.current() in _REGION_ATTRIBUTE_CHARS:
            self.scan.literal(self.scan.current())
        return self.scan.text[start:self._mark()]

    def _region_value(self, keywords, known):
        field = keywords[0]
        if self._match_any_kw(keywords) is None:
            self._error(f"Expected {field}")
        self._expect('=')
        loc = self._loc()
        expr = self._expect_expression(f"{field} value")
        try:
            return ConstantEvaluator(known).evaluate(expr)
        except ConstantExpressionError as exc:
            raise LinkerScriptParseError(
                f"Invalid {field} value: {exc}",
                loc['line'], loc['col'], self.filename) from exc
