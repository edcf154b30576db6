"""Keyword and operator tables shared by the parser mixins and the printer."""

# Data emission commands inside an output section.
_DATA_KEYWORDS = frozenset({'BYTE', 'SHORT', 'LONG', 'QUAD'})

# Commands whose arguments are file names, never expressions.
_FILE_LIST_COMMANDS = frozenset({
    'INPUT', 'GROUP', 'AS_NEEDED', 'SEARCH_DIR', 'STARTUP', 'OUTPUT',
})

# Marker name of the output section whose contents are thrown away.
DISCARD = '/DISCARD/'

# MEMORY attribute spellings accepted for the two region fields.
_ORIGIN_KEYWORDS = ('ORIGIN', 'org', 'o')
_LENGTH_KEYWORDS = ('LENGTH', 'len', 'l')

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

# Assignment operators, longest first so that scanning is greedy.
_ASSIGN_OPS = ('<<=', '>>=', '+=', '-=', '*=', '/=', '&=', '|=', '=')

_UNARY_OPS = frozenset({'!', '-', '~'})

# Binding powers for binary operators (Pratt parsing).  The ternary
# operator sits below all of them at _TERNARY_BP.
_BINARY_BP = {
    '||': 10,
    '&&': 20,
    '|': 30,
    '&': 40,
    '==': 50,
    '!=': 50,
    '<': 50,
    '>': 50,
    '<=': 50,
    '>=': 50,
    '<<': 60,
    '>>': 60,
    '+': 70,
    '-': 70,
    '*': 80,
    '/': 80,
    '%': 80,
}

_TERNARY_BP = 5
_UNARY_BP = 90

# Binary operator spellings, longest first.  '=' is not an operator in
# expression context, so '==' must be matched before any shorter prefix
# and a lone '=' never is.
_BINARY_OPS = tuple(sorted(_BINARY_BP, key=len, reverse=True))

# Compound assignment operators end an expression rather than starting
# a binary operator ('a <<= 1' is not 'a << (= 1)').
_NOT_BINARY_PREFIXES = ('<<=', '>>=', '&=', '|=', '+=', '-=', '*=', '/=')
