"""Fluent construction of linker-script trees without going through text.

The builders produce the same node types as the parser, so a built script
compares equal to the parse of its generated text::

    script = (LinkerScriptBuilder()
              .with_memory(MemoryBuilder()
                           .with_region('FLASH', 0x08000000, kb(512))
                           .with_adjacent_region('RAM', kb(128)))
              .with_sections(SectionBuilder()
                             .with_output(output_section('.text')
                                          .add_command(input_section('*', ['.text*']))
                                          .region('FLASH')
                                          .build()))
              .with_command(call('ENTRY', ['Reset_Handler'])))
    text = script.generate()

Expression arguments may be nodes, ``int`` values or expression text.
"""

from . import ast_nodes as ast
from .keywords import _FILE_LIST_COMMANDS
from .parser import Parser
from .printer import generate


def kb(value):
    """Kibibytes to bytes."""
    return value * 1024


def mb(value):
    """Mebibytes to bytes."""
    return value * 1024 * 1024


def expression(value):
    """Coerce *value* to an expression node."""
    if isinstance(value, ast.Expression):
        return value
    if isinstance(value, int):
        if value < 0:
            return ast.UnaryOp(op='-', operand=ast.NumberLiteral(value=-value))
        return ast.NumberLiteral(value=value)
    if isinstance(value, str):
        return Parser(value).parse_expression()
    raise TypeError(f"Cannot build an expression from {type(value).__name__}")


def _optional_expression(value):
    return None if value is None else expression(value)


def pattern(value):
    """Coerce a glob string to a ``SimplePattern``; nodes pass through."""
    if isinstance(value, ast.SectionPattern):
        return value
    return ast.SimplePattern(name=value)


# ---- Statements ----

def assign(name, value, op='='):
    return ast.Assign(name=name, op=op, expression=expression(value))


def hidden(name, value):
    return ast.Hidden(name=name, expression=expression(value))


def provide(name, value):
    return ast.Provide(name=name, expression=expression(value))


def provide_hidden(name, value):
    return ast.ProvideHidden(name=name, expression=expression(value))


def assert_(value, message):
    return ast.Assert(expression=expression(value), message=message)


# ---- Commands ----

def call(name, args=()):
    """``NAME(args)``; text arguments of file-list commands are file names."""
    if name in _FILE_LIST_COMMANDS:
        args = [ast.Identifier(name=a) if isinstance(a, str) else a for a in args]
    return ast.CallCommand(name=name, args=[expression(a) for a in args])


def include(path):
    return ast.Include(path=path)


def insert(order, section):
    return ast.Insert(order=ast.InsertOrder(order), section=section)


# ---- Section patterns ----

def simple(name):
    return ast.SimplePattern(name=name)


def sort_by_name(name):
    return ast.SortByName(name=name)


def sort_by_alignment(name):
    return ast.SortByAlignment(name=name)


def sort_by_init_priority(name):
    return ast.SortByInitPriority(name=name)


def sort_none(name):
    return ast.SortNone(name=name)


def exclude_file(files, inner):
    return ast.ExcludeFile(files=list(files), pattern=pattern(inner))


# ---- Output section commands ----

def fill(value):
    return ast.Fill(expression=expression(value))


def data(d_type, value):
    return ast.Data(d_type=ast.DataType(d_type), value=expression(value))


def input_section(file, sections=()):
    return ast.InputSection(file=pattern(file),
                            sections=[pattern(s) for s in sections])


def keep_input_section(file, sections=()):
    return ast.KeepInputSection(file=pattern(file),
                                sections=[pattern(s) for s in sections])


class OutputSectionBuilder:
    """Chainable setters for an ``OutputSection``; ``build()`` returns it."""

    def __init__(self, name):
        self._name = name
        self._fields = {}
        self._content = []

    def vma_address(self, value):
        self._fields['vma_address'] = expression(value)
        return self

    def section_type(self, s_type):
        self._fields['s_type'] = ast.SectionType(s_type)
        return self

    def lma_address(self, value):
        self._fields['lma_address'] = expression(value)
        return self

    def section_align(self, value):
        self._fields['section_align'] = expression(value)
        return self

    def align_with_input(self, align=True):
        self._fields['align_with_input'] = align
        return self

    def subsection_align(self, value):
        self._fields['subsection_align'] = expression(value)
        return self

    def constraint(self, constraint):
        self._fields['constraint'] = ast.SectionConstraint(constraint)
        return self

    def add_command(self, command):
        self._content.append(command)
        return self

    def add_commands(self, commands):
        self._content.extend(commands)
        return self

    def region(self, name):
        self._fields['region'] = name
        return self

    def lma_region(self, name):
        self._fields['lma_region'] = name
        return self

    def fillexp(self, value):
        self._fields['fillexp'] = _optional_expression(value)
        return self

    def build(self):
        return ast.OutputSection(name=self._name, content=list(self._content),
                                 **self._fields)


def output_section(name):
    return OutputSectionBuilder(name)


class MemoryBuilder:
    """Collects MEMORY regions."""

    def __init__(self):
        self.regions = []

    def with_region(self, name, origin, length, attributes=None):
        self.regions.append(ast.Region(name=name, origin=origin,
                                       length=length, attributes=attributes))
        return self

    def with_adjacent_region(self, name, length, attributes=None):
        """Add a region starting where the previous one ends."""
        if not self.regions:
            raise ValueError(
                f"Region {name!r} has no preceding region to follow")
        last = self.regions[-1]
        return self.with_region(name, last.origin + last.length, length,
                                attributes)

    def build(self):
        return ast.Memory(regions=list(self.regions))


class SectionBuilder:
    """Collects SECTIONS commands in order."""

    def __init__(self):
        self.commands = []

    def with_statement(self, name, value, op='='):
        self.commands.append(assign(name, value, op))
        return self

    def with_command(self, command):
        self.commands.append(command)
        return self

    def with_output(self, section):
        if isinstance(section, OutputSectionBuilder):
            section = section.build()
        self.commands.append(section)
        return self

    def build(self):
        return ast.Sections(commands=list(self.commands))


class LinkerScriptBuilder:
    """Assembles MEMORY, SECTIONS, commands and statements into a Script.

    Root items are ordered MEMORY, SECTIONS, commands, statements.  Empty
    MEMORY or SECTIONS blocks are left out since the grammar requires at
    least one entry in each.
    """

    def __init__(self):
        self.memory = MemoryBuilder()
        self.sections = SectionBuilder()
        self.commands = []
        self.statements = []
        self.additional_content = []

    def with_memory(self, memory_builder):
        self.memory = memory_builder
        return self

    def with_sections(self, section_builder):
        self.sections = section_builder
        return self

    def with_commands(self, commands):
        self.commands = list(commands)
        return self

    def with_command(self, command):
        self.commands.append(command)
        return self

    def with_statements(self, statements):
        self.statements = list(statements)
        return self

    def with_statement(self, statement):
        self.statements.append(statement)
        return self

    def with_additional_content(self, text):
        """Raw text appended verbatim after the generated script."""
        self.additional_content.append(text)
        return self

    def build(self):
        items = []
        if self.memory.regions:
            items.append(self.memory.build())
        if self.sections.commands:
            items.append(self.sections.build())
        items.extend(self.commands)
        items.extend(self.statements)
        return ast.Script(items=items)

    def generate(self):
        text = generate(self.build())
        for content in self.additional_content:
            text += '\n' + content
        return text
