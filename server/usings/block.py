"""
A contiguous region of using directives found in a source file.
"""

from typing import List, Optional

from .statement import UsingStatement


class UsingBlock:
    """An ordered run of statements plus the content that precedes them.

    ``start_line`` and ``end_line`` are 0-based indices into the original
    source and include the leading content. Diagnostics are mapped onto
    statement indices through ``start_line + len(leading_content)``, so the
    statement list must keep one entry per source line until unused
    directives have been removed.
    """

    def __init__(
        self,
        start_line: int,
        end_line: int,
        statements: List[UsingStatement],
        leading_content: Optional[List[UsingStatement]] = None,
        has_trailing_line_ending: bool = False,
        start_offset: int = 0,
    ):
        self.start_line = start_line
        self.end_line = end_line
        self.statements = list(statements)
        self.leading_content = list(leading_content or [])
        # Whether the captured text is followed by a line ending in the source
        self.has_trailing_line_ending = has_trailing_line_ending
        # Character offset of the block in the source it was extracted from
        self.start_offset = start_offset

    @classmethod
    def from_lines(
        cls,
        start_line: int,
        lines: List[str],
        leading_lines: Optional[List[str]] = None,
    ) -> "UsingBlock":
        """Build a block by parsing raw lines (no block-comment tracking)."""
        leading_lines = leading_lines or []
        end_line = start_line + len(leading_lines) + len(lines) - 1
        return cls(
            start_line=start_line,
            end_line=end_line,
            statements=[UsingStatement.parse(line) for line in lines],
            leading_content=[UsingStatement.parse(line) for line in leading_lines],
        )

    @property
    def first_statement_line(self) -> int:
        """Source line index of ``statements[0]``."""
        return self.start_line + len(self.leading_content)

    def actual_using_count(self) -> int:
        return sum(1 for s in self.statements if s.is_directive)

    def to_lines(self) -> List[str]:
        """Render the block back to lines.

        Trailing blank lines are trimmed from the leading content and the
        statements, and a single blank line closes a non-empty rendering so
        the block owns the separator to whatever follows it.
        """
        leading = _trim_trailing_blanks(self.leading_content)
        body = _trim_trailing_blanks(self.statements)

        lines: List[str] = [s.text for s in leading]
        for stmt in body:
            lines.extend(stmt.to_lines())

        if lines:
            lines.append("")
        return lines

    def render(self, line_ending: str) -> str:
        """Render the block as text that replaces its original substring."""
        lines = self.to_lines()
        if not lines:
            return ""
        text = line_ending.join(lines)
        if self.has_trailing_line_ending:
            text += line_ending
        return text

    def __repr__(self) -> str:
        return (f"UsingBlock(lines {self.start_line}-{self.end_line}, "
                f"{len(self.statements)} statement(s), {len(self.leading_content)} leading)")


def _trim_trailing_blanks(statements: List[UsingStatement]) -> List[UsingStatement]:
    end = len(statements)
    while end > 0 and statements[end - 1].is_blank:
        end -= 1
    return statements[:end]
