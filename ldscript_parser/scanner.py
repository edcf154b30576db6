"""Character scanner for linker-script text.

The linker-script dialect is context sensitive (``*`` is a wildcard inside
an input-section pattern and a multiplication inside an expression,
``.note.GNU-stack`` is one name), so the grammar reads characters directly
instead of a pre-built token stream.  The ``Scanner`` owns the cursor, skips
whitespace and comments, and recognizes the lexical primitives; the parser
mixins decide which primitive applies at each position.
"""

import string

_WHITESPACE = frozenset(' \t\r\n\f\v')
_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)
_LETTERS = frozenset(string.ascii_letters)

# Unquoted symbol names: a letter, '_', '.' or '$' followed by the same set
# plus digits.  A hyphen is part of the name when another name character
# follows it ("A-B" is one symbol, "A - B" is a subtraction).
_NAME_START = _LETTERS | frozenset('_.$')
_NAME_CHARS = _NAME_START | _DIGITS

# File and section matchers additionally allow glob wildcards and the
# punctuation found in archive/member names.  '/' is handled separately so
# that a comment opener ends the pattern.
_PATTERN_CHARS = _NAME_CHARS | frozenset('-+:~!^\\*?[]')

_SIZE_SUFFIXES = {
    '': 1,
    'K': 1024,
    'k': 1024,
    'M': 1024 * 1024,
    'm': 1024 * 1024,
}

U64_MAX = (1 << 64) - 1


class Scanner:
    """Cursor over linker-script source text."""

    def __init__(self, text: str, warnings=None):
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.warnings = warnings if warnings is not None else []

    # ------------------------------------------------------------------
    # Core scanning helpers
    # ------------------------------------------------------------------
    def _ch(self):
        if self.pos < self.length:
            return self.text[self.pos]
        return '\0'

    def _peek(self, offset=1):
        p = self.pos + offset
        if p < self.length:
            return self.text[p]
        return '\0'

    def _advance(self):
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def current(self):
        """Character at the cursor, or NUL at end of input."""
        return self._ch()

    def at_end(self):
        return self.pos >= self.length

    def location(self, pos=None):
        """Return the 1-based ``(line, col)`` of *pos* (default: cursor)."""
        if pos is None:
            pos = self.pos
        line = self.text.count('\n', 0, pos) + 1
        col = pos - (self.text.rfind('\n', 0, pos) + 1) + 1
        return line, col

    def startswith(self, literal):
        return self.text.startswith(literal, self.pos)

    def excerpt(self, width=20):
        """Text at the cursor, for error messages."""
        if self.at_end():
            return 'end of input'
        snippet = self.text[self.pos:self.pos + width].split('\n', 1)[0]
        return repr(snippet)

    # ------------------------------------------------------------------
    # Whitespace and comments
    # ------------------------------------------------------------------
    def skip_wsc(self):
        """Skip whitespace, ``//`` line comments and ``/* */`` block comments."""
        while self.pos < self.length:
            ch = self._ch()
            if ch in _WHITESPACE:
                self._skip_whitespace()
            elif ch == '/' and self._peek() == '/':
                self._skip_line_comment()
            elif ch == '/' and self._peek() == '*':
                self._skip_block_comment()
            else:
                break

    def _skip_whitespace(self):
        while self.pos < self.length and self._ch() in _WHITESPACE:
            self._advance()

    def _skip_line_comment(self):
        while self.pos < self.length and self._ch() != '\n':
            self._advance()

    def _skip_block_comment(self):
        start = self.pos
        end = self.text.find('*/', self.pos + 2)
        if end < 0:
            line, col = self.location(start)
            self.warnings.append(
                f"L{line}:{col}: Unterminated block comment, "
                f"skipped to end of input")
            self.pos = self.length
            return
        self.pos = end + 2

    # ------------------------------------------------------------------
    # Literals and keywords
    # ------------------------------------------------------------------
    def literal(self, text):
        """Consume *text* if it appears at the cursor."""
        if self.text.startswith(text, self.pos):
            self.pos += len(text)
            return True
        return False

    def keyword(self, word):
        """Consume *word* when it is not the prefix of a longer name."""
        if not self.text.startswith(word, self.pos):
            return False
        end = self.pos + len(word)
        if end < self.length and self.text[end] in _NAME_CHARS:
            return False
        self.pos = end
        return True

    # ------------------------------------------------------------------
    # Lexical primitives
    # ------------------------------------------------------------------
    def scan_symbol(self):
        """Scan a symbol name; quoted names keep their quotes."""
        ch = self._ch()
        if ch == '"':
            start = self.pos
            if self.scan_string() is None:
                return None
            return self.text[start:self.pos]
        if ch not in _NAME_START:
            return None
        start = self.pos
        self._advance()
        while self.pos < self.length:
            ch = self._ch()
            if ch in _NAME_CHARS:
                self._advance()
            elif ch == '-' and self._peek() in _NAME_CHARS:
                self._advance()
            else:
                break
        return self.text[start:self.pos]

    def scan_pattern(self):
        """Scan a glob-like file or section matcher."""
        start = self.pos
        while self.pos < self.length:
            ch = self._ch()
            if ch in _PATTERN_CHARS:
                self._advance()
            elif ch == '/' and self._peek() not in ('*', '/'):
                self._advance()
            else:
                break
        if self.pos == start:
            return None
        return self.text[start:self.pos]

    def scan_filename(self):
        """Scan a quoted string (quotes kept) or a bare pattern-like name."""
        if self._ch() == '"':
            start = self.pos
            if self.scan_string() is None:
                return None
            return self.text[start:self.pos]
        return self.scan_pattern()

    def scan_string(self):
        """Scan a double-quoted string and return its contents."""
        if self._ch() != '"':
            return None
        end = self.text.find('"', self.pos + 1)
        if end < 0:
            return None
        value = self.text[self.pos + 1:end]
        self.pos = end + 1
        return value

    def scan_number(self):
        """Scan a decimal or hexadecimal integer with an optional K/M suffix.

        Returns the value, or ``None`` (cursor unchanged) if the text at the
        cursor is not a well-formed number.
        """
        start = self.pos
        if self._ch() not in _DIGITS:
            return None
        if self._ch() == '0' and self._peek() in 'xX' and self._peek(2) in _HEX_DIGITS:
            self.pos += 2
            digits_start = self.pos
            while self._ch() in _HEX_DIGITS:
                self._advance()
            value = int(self.text[digits_start:self.pos], 16)
        else:
            while self._ch() in _DIGITS:
                self._advance()
            value = int(self.text[start:self.pos])

        suffix_start = self.pos
        while self._ch() in _LETTERS:
            self._advance()
        multiplier = _SIZE_SUFFIXES.get(self.text[suffix_start:self.pos])
        if multiplier is None or self._ch() in _NAME_CHARS:
            self.pos = start
            return None
        value *= multiplier
        if value > U64_MAX:
            self.pos = start
            return None
        return value
