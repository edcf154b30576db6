"""ldscript-parser - a hand-written recursive descent + Pratt parser and
generator for GNU ld linker scripts."""

from .parser import Parser, LinkerScriptParseError
from .printer import ScriptPrinter, generate
from . import ast_nodes as ast


def parse(text, filename="<input>"):
    """Parse linker-script source text and return an AST Script node."""
    return Parser(text, filename=filename).parse()


def parse_with_diagnostics(text, filename="<input>"):
    """Parse *text* and return ``(script, warnings)``."""
    parser = Parser(text, filename=filename)
    script = parser.parse()
    return script, parser.warnings


def parse_file(path):
    """Parse a linker-script file and return an AST Script node."""
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()
    return parse(text, filename=str(path))


def parse_expression(text):
    """Parse a single complete expression, e.g. ``"ORIGIN(RAM) + 4K"``."""
    return Parser(text).parse_expression()


class ValidationResult:
    """Result of linker-script validation: validity status and diagnostics."""

    __slots__ = ('valid', 'errors', 'warnings')

    def __init__(self, valid, errors=None, warnings=None):
        self.valid = valid
        self.errors = errors or []
        self.warnings = warnings or []

    def __bool__(self):
        return self.valid

    def __repr__(self):
        if self.valid:
            return "ValidationResult(valid=True)"
        return f"ValidationResult(valid=False, errors={self.errors!r})"


def validate_script(text, filename="<input>"):
    """Check whether *text* parses as a linker script.

    Returns a ``ValidationResult`` whose boolean value indicates validity.
    ``errors`` holds the localized parse error when parsing fails;
    ``warnings`` holds the parser's non-fatal notes.
    """
    parser = Parser(text, filename=filename)
    try:
        parser.parse()
    except LinkerScriptParseError as exc:
        return ValidationResult(False, [f"Parse error: {exc}"],
                                parser.warnings)
    return ValidationResult(True, warnings=parser.warnings)


def is_valid_script(text, filename="<input>"):
    """Return ``True`` if *text* is a valid linker script, ``False`` otherwise."""
    return validate_script(text, filename).valid
