"""AST printer: converts AST nodes back to linker-script text.

The output re-parses to an equal tree; original formatting and comments are
not reproduced.
"""

import textwrap

from . import ast_nodes as ast
from .keywords import _BINARY_BP, _TERNARY_BP, _UNARY_BP

INDENTATION = '  '

_KIB = 1024
_MIB = 1024 * 1024

# Binding power of anything that never needs parentheses.
_ATOM_BP = 100

_SECTION_TYPE_NAMES = frozenset(t.value for t in ast.SectionType)


def format_region_length(length):
    """Render a region length as ``<n>M``, ``<n>K`` or plain decimal."""
    if length % _MIB == 0:
        return f"{length // _MIB}M"
    if length % _KIB == 0:
        return f"{length // _KIB}K"
    return str(length)


def _binding_power(node):
    if isinstance(node, ast.BinaryOp):
        return _BINARY_BP[node.op]
    if isinstance(node, ast.TernaryOp):
        return _TERNARY_BP
    if isinstance(node, ast.UnaryOp):
        return _UNARY_BP
    return _ATOM_BP


class ScriptPrinter:
    """Emit linker-script text from AST nodes."""

    def emit(self, node):
        """Dispatch to the appropriate emit method."""
        method = '_emit_' + type(node).__name__
        fn = getattr(self, method, None)
        if fn is None:
            raise TypeError(f"Cannot generate text for {type(node).__name__}")
        return fn(node)

    def _block(self, header, children):
        lines = [f"{header} {{"]
        for child in children:
            lines.append(textwrap.indent(self.emit(child), INDENTATION))
        lines.append("}")
        return '\n'.join(lines)

    # ---- Script ----

    def _emit_Script(self, node):
        return self.emit_items(node.items)

    def emit_items(self, items):
        out = []
        for item in items:
            text = self.emit(item)
            if isinstance(item, (ast.Memory, ast.Sections)):
                out.append(f"{text}\n\n")
            else:
                out.append(f"{text}\n")
        return ''.join(out)

    # ---- Statements ----

    def _emit_Assign(self, node):
        return f"{node.name} {node.op} {self.emit(node.expression)};"

    def _emit_Hidden(self, node):
        return f"HIDDEN({node.name} = {self.emit(node.expression)});"

    def _emit_Provide(self, node):
        return f"PROVIDE({node.name} = {self.emit(node.expression)});"

    def _emit_ProvideHidden(self, node):
        return f"PROVIDE_HIDDEN({node.name} = {self.emit(node.expression)});"

    def _emit_Assert(self, node):
        return f'ASSERT({self.emit(node.expression)}, "{node.message}");'

    # ---- Commands ----

    def _emit_CallCommand(self, node):
        args = ', '.join(self.emit(a) for a in node.args)
        return f"{node.name}({args});"

    def _emit_Include(self, node):
        return f"INCLUDE {node.path};"

    def _emit_Insert(self, node):
        return f"INSERT {node.order.value} {node.section};"

    # ---- MEMORY ----

    def _emit_Memory(self, node):
        return self._block("MEMORY", node.regions)

    def _emit_Region(self, node):
        attrs = f" ({node.attributes})" if node.attributes is not None else ''
        return (f"{node.name}{attrs} : ORIGIN = 0x{node.origin:X}, "
                f"LENGTH = {format_region_length(node.length)}")

    # ---- SECTIONS ----

    def _emit_Sections(self, node):
        return self._block("SECTIONS", node.commands)

    def _emit_OutputSection(self, node):
        head = [node.name]
        if node.vma_address is not None:
            vma = self.emit(node.vma_address)
            # "(NOLOAD)" would read back as a type tag.
            head.append(vma if vma in _SECTION_TYPE_NAMES else f"({vma})")
        if node.s_type is not None:
            head.append(f"({node.s_type.value})")
        head.append(':')
        if node.lma_address is not None:
            head.append(f"AT({self.emit(node.lma_address)}),")
        if node.section_align is not None:
            head.append(f"ALIGN({self.emit(node.section_align)}),")
        if node.align_with_input:
            head.append("ALIGN_WITH_INPUT,")
        if node.subsection_align is not None:
            head.append(f"SUBALIGN({self.emit(node.subsection_align)}),")
        if node.constraint is not None:
            head.append(f"{node.constraint.value},")
        text = self._block(' '.join(head), node.content)
        if node.region is not None:
            text += f" >{node.region}"
        if node.lma_region is not None:
            text += f" AT>{node.lma_region}"
        if node.fillexp is not None:
            text += f" ={self.emit(node.fillexp)}"
        return text

    def _emit_Fill(self, node):
        return f"FILL({self.emit(node.expression)})"

    def _emit_Data(self, node):
        return f"{node.d_type.value}({self.emit(node.value)})"

    def _emit_InputSection(self, node):
        text = self.emit(node.file)
        if node.sections:
            text += f"({' '.join(self.emit(s) for s in node.sections)})"
        return text

    def _emit_KeepInputSection(self, node):
        return f"KEEP({self._emit_InputSection(node)})"

    # ---- Section patterns ----

    def _emit_SimplePattern(self, node):
        return node.name

    def _emit_SortByName(self, node):
        return f"SORT_BY_NAME({node.name})"

    def _emit_SortByAlignment(self, node):
        return f"SORT_BY_ALIGNMENT({node.name})"

    def _emit_SortByInitPriority(self, node):
        return f"SORT_BY_INIT_PRIORITY({node.name})"

    def _emit_SortNone(self, node):
        return f"SORT_NONE({node.name})"

    def _emit_ExcludeFile(self, node):
        return f"EXCLUDE_FILE({' '.join(node.files)}) {self.emit(node.pattern)}"

    # ---- Expressions ----

    def _operand(self, node, min_bp):
        """Emit *node*, parenthesized if it binds looser than *min_bp*."""
        text = self.emit(node)
        if _binding_power(node) < min_bp:
            return f"({text})"
        return text

    def _emit_Identifier(self, node):
        return node.name

    def _emit_NumberLiteral(self, node):
        return str(node.value)

    def _emit_FuncCall(self, node):
        args = ', '.join(self.emit(a) for a in node.args)
        return f"{node.name}({args})"

    def _emit_UnaryOp(self, node):
        return f"{node.op}{self._operand(node.operand, _UNARY_BP)}"

    def _emit_BinaryOp(self, node):
        bp = _BINARY_BP[node.op]
        left = self._operand(node.left, bp)
        # Left-associative: an equal-precedence right operand needs parens.
        right = self._operand(node.right, bp + 1)
        return f"{left} {node.op} {right}"

    def _emit_TernaryOp(self, node):
        condition = self._operand(node.condition, _TERNARY_BP + 1)
        if_true = self.emit(node.if_true)
        if_false = self._operand(node.if_false, _TERNARY_BP)
        return f"{condition} ? {if_true} : {if_false}"


def generate(tree):
    """Render a ``Script``, a list of root items, or any single node."""
    printer = ScriptPrinter()
    if isinstance(tree, (list, tuple)):
        return printer.emit_items(tree)
    return printer.emit(tree)
