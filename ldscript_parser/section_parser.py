"""SECTIONS block parsing mixin for the linker-script parser."""

from . import ast_nodes as ast
from .keywords import DISCARD, _DATA_KEYWORDS

_SORT_PATTERNS = (
    # SORT is an alias of SORT_BY_NAME.
    ('SORT_BY_NAME', ast.SortByName),
    ('SORT_BY_ALIGNMENT', ast.SortByAlignment),
    ('SORT_BY_INIT_PRIORITY', ast.SortByInitPriority),
    ('SORT_NONE', ast.SortNone),
    ('SORT', ast.SortByName),
)

_SECTION_TYPES = tuple(t.value for t in ast.SectionType)
_CONSTRAINTS = tuple(c.value for c in ast.SectionConstraint)


class SectionMixin:
    """Mixin providing ``SECTIONS { ... }`` parsing."""

    def _parse_sections(self):
        loc = self._loc()
        if not self._match_kw('SECTIONS') or not self._match('{'):
            return None
        commands = []
        while True:
            self._skip_semicolons('SECTIONS')
            if commands and self._match('}'):
                break
            commands.append(self._commit(self._parse_section_command,
                                         "statement, command or output section"))
        return ast.Sections(commands=commands, **loc)

    def _parse_section_command(self):
        return self._first_of(
            self._parse_statement,
            self._parse_output_section,
            self._parse_command,
        )

    # ------------------------------------------------------------------
    # Output section
    # ------------------------------------------------------------------
    def _parse_output_section(self):
        """Output-section definition; committed once its ':' is matched."""
        loc = self._loc()
        if self.scan.literal(DISCARD):
            name = DISCARD
        else:
            name = self._symbol()
            if name is None:
                return None
        s_type1 = self._try(self._parse_section_type)
        vma_address = self._parse_expression(0)
        type_loc = self._loc()
        s_type2 = self._try(self._parse_section_type)
        if not self._match(':'):
            return None
        if s_type1 is not None and s_type2 is not None:
            self._warn(f"Section type given twice for {name}; "
                       f"keeping ({s_type1.value})", type_loc)

        section = ast.OutputSection(
            name=name,
            vma_address=vma_address,
            s_type=s_type1 if s_type1 is not None else s_type2,
            **loc)

        # Header attributes, each optional and in fixed order.
        if self._match_kw('AT'):
            section.lma_address = self._parenthesized_expression("LMA address")
            self._match(',')
        if self._match_kw('ALIGN'):
            section.section_align = self._parenthesized_expression("alignment")
            self._match(',')
        if self._match_kw('ALIGN_WITH_INPUT'):
            section.align_with_input = True
            self._match(',')
        if self._match_kw('SUBALIGN'):
            section.subsection_align = self._parenthesized_expression(
                "subsection alignment")
            self._match(',')
        constraint = self._match_any_kw(_CONSTRAINTS)
        if constraint is not None:
            section.constraint = ast.SectionConstraint(constraint)
            self._match(',')

        self._expect('{')
        while True:
            self._skip_semicolons(name)
            if self._match('}'):
                break
            section.content.append(self._commit(
                self._parse_output_section_command,
                f"output section command or '}}' in {name}"))

        # Trailer.
        if self._match('>'):
            section.region = self._expect_symbol("memory region after '>'")
        mark = self._mark()
        if self._match_kw('AT'):
            if self._match('>'):
                section.lma_region = self._expect_symbol(
                    "memory region after 'AT>'")
            else:
                self._reset(mark)
        if self._match('='):
            section.fillexp = self._expect_expression("fill expression")
        self._match(',')
        return section

    def _parse_section_type(self):
        if not self._match('('):
            return None
        s_type = self._match_any_kw(_SECTION_TYPES)
        if s_type is None or not self._match(')'):
            return None
        return ast.SectionType(s_type)

    # ------------------------------------------------------------------
    # Output section commands
    # ------------------------------------------------------------------
    def _parse_output_section_command(self):
        return self._first_of(
            self._parse_statement,
            self._parse_keep,
            self._parse_data,
            self._parse_fill,
            self._parse_input_section,
        )

    def _parse_data(self):
        loc = self._loc()
        keyword = self._match_any_kw(sorted(_DATA_KEYWORDS))
        if keyword is None or not self._at('('):
            return None
        value = self._parenthesized_expression(f"{keyword} value")
        self._match(';')
        return ast.Data(d_type=ast.DataType(keyword), value=value, **loc)

    def _parse_fill(self):
        loc = self._loc()
        if not self._match_kw('FILL') or not self._at('('):
            return None
        expr = self._parenthesized_expression("fill value")
        self._match(';')
        return ast.Fill(expression=expr, **loc)

    def _parse_keep(self):
        loc = self._loc()
        if not self._match_kw('KEEP') or not self._match('('):
            return None
        inner = self._commit(self._parse_input_section,
                             "input section description in KEEP")
        self._expect(')')
        return ast.KeepInputSection(file=inner.file, sections=inner.sections,
                                    **loc)

    def _parse_input_section(self):
        """``file-pattern [( section-pattern ... )]``."""
        loc = self._loc()
        file = self._parse_section_pattern()
        if file is None:
            return None
        sections = []
        if self._match('('):
            while not (sections and self._match(')')):
                if sections:
                    self._match(',')
                sections.append(self._commit(self._parse_section_pattern,
                                             "section name pattern"))
        return ast.InputSection(file=file, sections=sections, **loc)

    # ------------------------------------------------------------------
    # Section patterns
    # ------------------------------------------------------------------
    def _parse_section_pattern(self):
        return self._first_of(
            self._parse_exclude_file,
            self._parse_sorted_pattern,
            self._parse_simple_pattern,
        )

    def _parse_exclude_file(self):
        loc = self._loc()
        if not self._match_kw('EXCLUDE_FILE') or not self._match('('):
            return None
        files = []
        while not (files and self._match(')')):
            pattern = self._pattern()
            if pattern is None:
                self._error("Expected file name pattern in EXCLUDE_FILE")
            files.append(pattern)
        inner = self._commit(self._parse_section_pattern,
                             "pattern after EXCLUDE_FILE(...)")
        return ast.ExcludeFile(files=files, pattern=inner, **loc)

    def _parse_sorted_pattern(self):
        loc = self._loc()
        for keyword, node_cls in _SORT_PATTERNS:
            if self._match_kw(keyword):
                break
        else:
            return None
        if not self._match('('):
            return None
        if keyword == 'SORT':
            self._warn("SORT normalized to SORT_BY_NAME", loc)
        name = self._pattern()
        if name is None:
            self._error(f"Expected pattern in {keyword}")
        self._expect(')')
        return node_cls(name=name, **loc)

    def _parse_simple_pattern(self):
        loc = self._loc()
        name = self._pattern()
        if name is None:
            return None
        return ast.SimplePattern(name=name, **loc)
