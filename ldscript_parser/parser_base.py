"""Base class for the linker-script parser: error type and cursor helpers.

Every grammar rule follows the same convention:

* a rule that does not apply at the cursor returns ``None`` and leaves the
  cursor where it found it, so the caller can try its next alternative;
* once a rule has accepted the keyword or delimiter that identifies its
  construct, it is committed: a later mismatch raises
  ``LinkerScriptParseError`` instead of returning ``None``.

All token helpers skip whitespace and comments before matching.
"""

from .scanner import Scanner


class LinkerScriptParseError(Exception):
    """Parse error with source location."""
    def __init__(self, msg, line=0, col=0, filename="<input>"):
        self.msg = msg
        self.line = line
        self.col = col
        self.filename = filename
        prefix = "" if filename == "<input>" else f"{filename}:"
        super().__init__(f"{prefix}L{line}:{col}: {msg}")


class ParserBase:
    """Cursor management and shared utilities for the linker-script parser."""

    def __init__(self, text, filename="<input>"):
        self.filename = filename
        self.warnings = []
        self.scan = Scanner(text, warnings=self.warnings)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------
    def _mark(self):
        return self.scan.pos

    def _reset(self, mark):
        self.scan.pos = mark

    def _loc(self):
        """Location of the next token, for node construction."""
        self.scan.skip_wsc()
        line, col = self.scan.location()
        return {'line': line, 'col': col}

    def _at_end(self):
        self.scan.skip_wsc()
        return self.scan.at_end()

    def _warn(self, msg, loc=None):
        if loc is None:
            loc = self._loc()
        self.warnings.append(f"L{loc['line']}:{loc['col']}: {msg}")

    # ------------------------------------------------------------------
    # Alternatives
    # ------------------------------------------------------------------
    def _try(self, rule, *args):
        """Run *rule*; on a recoverable mismatch restore the cursor."""
        mark = self._mark()
        result = rule(*args)
        if result is None:
            self._reset(mark)
        return result

    def _first_of(self, *rules):
        """Ordered choice: the result of the first rule that matches."""
        for rule in rules:
            result = self._try(rule)
            if result is not None:
                return result
        return None

    def _commit(self, rule, expected, *args):
        """Run *rule* in committed context: a mismatch is a parse error."""
        result = self._try(rule, *args)
        if result is None:
            self._error(f"Expected {expected}")
        return result

    def _error(self, msg):
        self.scan.skip_wsc()
        line, col = self.scan.location()
        raise LinkerScriptParseError(
            f"{msg}, got {self.scan.excerpt()}", line, col, self.filename)

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------
    def _at(self, literal):
        self.scan.skip_wsc()
        return self.scan.startswith(literal)

    def _match(self, literal):
        self.scan.skip_wsc()
        return self.scan.literal(literal)

    def _match_kw(self, word):
        self.scan.skip_wsc()
        return self.scan.keyword(word)

    def _match_any_kw(self, words):
        """Consume the first keyword of *words* present; return it or None."""
        self.scan.skip_wsc()
        for word in words:
            if self.scan.keyword(word):
                return word
        return None

    def _expect(self, literal):
        if not self._match(literal):
            self._error(f"Expected {literal!r}")

    def _symbol(self):
        self.scan.skip_wsc()
        return self.scan.scan_symbol()

    def _expect_symbol(self, what="symbol name"):
        name = self._symbol()
        if name is None:
            self._error(f"Expected {what}")
        return name

    def _pattern(self):
        self.scan.skip_wsc()
        return self.scan.scan_pattern()

    def _filename(self):
        self.scan.skip_wsc()
        return self.scan.scan_filename()

    def _string(self):
        self.scan.skip_wsc()
        return self.scan.scan_string()

    def _skip_semicolons(self, where):
        """Accept stray ';' separators, recording a warning for each."""
        while self._at(';'):
            self._warn(f"Ignored empty statement ';' in {where}")
            self.scan.literal(';')
