"""AST node classes for the linker-script parse tree."""

from enum import Enum


class AstNode:
    """Base class for all AST nodes.

    Equality is structural: two nodes are equal when they have the same type
    and all slots other than the source position compare equal.
    """
    __slots__ = ('line', 'col')

    def __init__(self, line=0, col=0):
        self.line = line
        self.col = col

    def accept(self, visitor):
        """Double-dispatch: calls visitor.visit_<NodeType>(self)."""
        method_name = 'visit_' + type(self).__name__
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)

    def fields(self):
        """Yield ``(name, value)`` for every slot except line/col."""
        for cls in reversed(type(self).__mro__):
            for slot in cls.__dict__.get('__slots__', ()):
                if slot in ('line', 'col'):
                    continue
                yield slot, getattr(self, slot, None)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return list(self.fields()) == list(other.fields())

    __hash__ = None

    def __repr__(self):
        args = ', '.join(f"{name}={value!r}" for name, value in self.fields())
        return f"{type(self).__name__}({args})"


class Script(AstNode):
    """A whole document: the ordered list of root items."""
    __slots__ = ('items',)

    def __init__(self, items=None, **kw):
        super().__init__(**kw)
        self.items = items or []


# ---- Enumerations ----

class DataType(Enum):
    BYTE = 'BYTE'
    SHORT = 'SHORT'
    LONG = 'LONG'
    QUAD = 'QUAD'


class SectionType(Enum):
    NOLOAD = 'NOLOAD'
    DSECT = 'DSECT'
    COPY = 'COPY'
    INFO = 'INFO'
    OVERLAY = 'OVERLAY'


class SectionConstraint(Enum):
    ONLY_IF_RO = 'ONLY_IF_RO'
    ONLY_IF_RW = 'ONLY_IF_RW'


class InsertOrder(Enum):
    BEFORE = 'BEFORE'
    AFTER = 'AFTER'


# ---- Expression Nodes ----

class Expression(AstNode):
    """Base class for expression nodes."""
    __slots__ = ()


class Identifier(Expression):
    __slots__ = ('name',)

    def __init__(self, name='', **kw):
        super().__init__(**kw)
        self.name = name


class NumberLiteral(Expression):
    __slots__ = ('value',)

    def __init__(self, value=0, **kw):
        super().__init__(**kw)
        self.value = value


class FuncCall(Expression):
    __slots__ = ('name', 'args')

    def __init__(self, name='', args=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.args = args or []


class UnaryOp(Expression):
    __slots__ = ('op', 'operand')

    def __init__(self, op='', operand=None, **kw):
        super().__init__(**kw)
        self.op = op
        self.operand = operand


class BinaryOp(Expression):
    __slots__ = ('op', 'left', 'right')

    def __init__(self, op='', left=None, right=None, **kw):
        super().__init__(**kw)
        self.op = op
        self.left = left
        self.right = right


class TernaryOp(Expression):
    __slots__ = ('condition', 'if_true', 'if_false')

    def __init__(self, condition=None, if_true=None, if_false=None, **kw):
        super().__init__(**kw)
        self.condition = condition
        self.if_true = if_true
        self.if_false = if_false


# ---- Statements ----

class Statement(AstNode):
    """Base class for symbol assignments and assertions."""
    __slots__ = ()


class Assign(Statement):
    __slots__ = ('name', 'op', 'expression')

    def __init__(self, name='', op='=', expression=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.op = op
        self.expression = expression


class Hidden(Statement):
    __slots__ = ('name', 'expression')

    def __init__(self, name='', expression=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.expression = expression


class Provide(Statement):
    __slots__ = ('name', 'expression')

    def __init__(self, name='', expression=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.expression = expression


class ProvideHidden(Statement):
    __slots__ = ('name', 'expression')

    def __init__(self, name='', expression=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.expression = expression


class Assert(Statement):
    __slots__ = ('expression', 'message')

    def __init__(self, expression=None, message='', **kw):
        super().__init__(**kw)
        self.expression = expression
        self.message = message


# ---- Commands ----

class Command(AstNode):
    """Base class for directives."""
    __slots__ = ()


class CallCommand(Command):
    """Generic ``NAME(arg, ...)`` command such as ENTRY or OUTPUT_FORMAT."""
    __slots__ = ('name', 'args')

    def __init__(self, name='', args=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.args = args or []


class Include(Command):
    __slots__ = ('path',)

    def __init__(self, path='', **kw):
        super().__init__(**kw)
        self.path = path


class Insert(Command):
    __slots__ = ('order', 'section')

    def __init__(self, order=InsertOrder.AFTER, section='', **kw):
        super().__init__(**kw)
        self.order = order
        self.section = section


# ---- MEMORY ----

class Region(AstNode):
    __slots__ = ('name', 'origin', 'length', 'attributes')

    def __init__(self, name='', origin=0, length=0, attributes=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.origin = origin
        self.length = length
        self.attributes = attributes


class Memory(AstNode):
    __slots__ = ('regions',)

    def __init__(self, regions=None, **kw):
        super().__init__(**kw)
        self.regions = regions or []


# ---- Section patterns ----

class SectionPattern(AstNode):
    """Base class for file/section name matchers."""
    __slots__ = ()


class NamedPattern(SectionPattern):
    """A pattern wrapping a single glob string."""
    __slots__ = ('name',)

    def __init__(self, name='', **kw):
        super().__init__(**kw)
        self.name = name


class SimplePattern(NamedPattern):
    __slots__ = ()


class SortByName(NamedPattern):
    __slots__ = ()


class SortByAlignment(NamedPattern):
    __slots__ = ()


class SortByInitPriority(NamedPattern):
    __slots__ = ()


class SortNone(NamedPattern):
    __slots__ = ()


class ExcludeFile(SectionPattern):
    __slots__ = ('files', 'pattern')

    def __init__(self, files=None, pattern=None, **kw):
        super().__init__(**kw)
        self.files = files or []
        self.pattern = pattern


# ---- Output section commands ----

class Fill(AstNode):
    __slots__ = ('expression',)

    def __init__(self, expression=None, **kw):
        super().__init__(**kw)
        self.expression = expression


class Data(AstNode):
    __slots__ = ('d_type', 'value')

    def __init__(self, d_type=DataType.LONG, value=None, **kw):
        super().__init__(**kw)
        self.d_type = d_type
        self.value = value


class InputSection(AstNode):
    __slots__ = ('file', 'sections')

    def __init__(self, file=None, sections=None, **kw):
        super().__init__(**kw)
        self.file = file
        self.sections = sections or []


class KeepInputSection(InputSection):
    """Input section marked non-discardable by ``KEEP(...)``."""
    __slots__ = ()


# ---- SECTIONS ----

class OutputSection(AstNode):
    __slots__ = ('name', 'vma_address', 's_type', 'lma_address',
                 'section_align', 'align_with_input', 'subsection_align',
                 'constraint', 'content', 'region', 'lma_region', 'fillexp')

    def __init__(self, name='', vma_address=None, s_type=None,
                 lma_address=None, section_align=None,
                 align_with_input=False, subsection_align=None,
                 constraint=None, content=None, region=None,
                 lma_region=None, fillexp=None, **kw):
        super().__init__(**kw)
        self.name = name
        self.vma_address = vma_address
        self.s_type = s_type
        self.lma_address = lma_address
        self.section_align = section_align
        self.align_with_input = align_with_input
        self.subsection_align = subsection_align
        self.constraint = constraint
        self.content = content or []
        self.region = region
        self.lma_region = lma_region
        self.fillexp = fillexp


class Sections(AstNode):
    __slots__ = ('commands',)

    def __init__(self, commands=None, **kw):
        super().__init__(**kw)
        self.commands = commands or []
