"""Visitor pattern for linker-script AST nodes.

Provides ``AstVisitor`` with a ``visit_<NodeType>`` method for every AST
node class.  The default implementation of each method calls
``generic_visit``, which recurses into child nodes.
"""

from . import ast_nodes as ast


class AstVisitor:
    """Base visitor with double-dispatch via ``AstNode.accept(visitor)``.

    Subclass and override ``visit_XXX`` methods for the node types you
    care about.  Unhandled nodes fall through to ``generic_visit``.
    """

    def generic_visit(self, node):
        """Default handler: recurse into child nodes."""
        for child in _iter_children(node):
            if isinstance(child, ast.AstNode):
                child.accept(self)
            elif isinstance(child, list):
                for item in child:
                    if isinstance(item, ast.AstNode):
                        item.accept(self)

    # -- Top-level --
    def visit_Script(self, node):
        return self.generic_visit(node)

    # -- Statements --
    def visit_Assign(self, node):
        return self.generic_visit(node)

    def visit_Hidden(self, node):
        return self.generic_visit(node)

    def visit_Provide(self, node):
        return self.generic_visit(node)

    def visit_ProvideHidden(self, node):
        return self.generic_visit(node)

    def visit_Assert(self, node):
        return self.generic_visit(node)

    # -- Commands --
    def visit_CallCommand(self, node):
        return self.generic_visit(node)

    def visit_Include(self, node):
        return self.generic_visit(node)

    def visit_Insert(self, node):
        return self.generic_visit(node)

    # -- MEMORY --
    def visit_Memory(self, node):
        return self.generic_visit(node)

    def visit_Region(self, node):
        return self.generic_visit(node)

    # -- SECTIONS --
    def visit_Sections(self, node):
        return self.generic_visit(node)

    def visit_OutputSection(self, node):
        return self.generic_visit(node)

    def visit_Fill(self, node):
        return self.generic_visit(node)

    def visit_Data(self, node):
        return self.generic_visit(node)

    def visit_InputSection(self, node):
        return self.generic_visit(node)

    def visit_KeepInputSection(self, node):
        return self.generic_visit(node)

    # -- Section patterns --
    def visit_SimplePattern(self, node):
        return self.generic_visit(node)

    def visit_SortByName(self, node):
        return self.generic_visit(node)

    def visit_SortByAlignment(self, node):
        return self.generic_visit(node)

    def visit_SortByInitPriority(self, node):
        return self.generic_visit(node)

    def visit_SortNone(self, node):
        return self.generic_visit(node)

    def visit_ExcludeFile(self, node):
        return self.generic_visit(node)

    # -- Expressions --
    def visit_Identifier(self, node):
        return self.generic_visit(node)

    def visit_NumberLiteral(self, node):
        return self.generic_visit(node)

    def visit_FuncCall(self, node):
        return self.generic_visit(node)

    def visit_UnaryOp(self, node):
        return self.generic_visit(node)

    def visit_BinaryOp(self, node):
        return self.generic_visit(node)

    def visit_TernaryOp(self, node):
        return self.generic_visit(node)


def _iter_children(node):
    """Yield all child attributes of an AST node that may contain sub-nodes."""
    for _, val in node.fields():
        if val is not None:
            yield val


class WalkVisitor(AstVisitor):
    """Visitor that collects all visited nodes into a flat list, depth-first."""

    def __init__(self):
        self.nodes = []

    def generic_visit(self, node):
        self.nodes.append(node)
        super().generic_visit(node)


def walk(node):
    """Return every node of the tree rooted at *node*, depth-first."""
    walker = WalkVisitor()
    node.accept(walker)
    return walker.nodes
