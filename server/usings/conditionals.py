"""
Preprocessor-directive handling inside using blocks.

Conditional regions (``#if ... #endif``, ``#region ... #endregion``) are
lifted out of the sortable statements before sorting and appended back
verbatim afterwards, so no directive ever moves into or out of a region.
Preprocessor lines outside any region split the statements into segments
that are sorted independently.
"""

import re
from typing import List, Optional, Sequence, Tuple

from .statement import UsingStatement

# Directives that start a lifted block when met outside of one
_BLOCK_START_RE = re.compile(
    r'^#\s*(if|endif|region|endregion|define|undef|pragma|error|warning|line|nullable)\b'
)
_OPEN_RE = re.compile(r'^#\s*(if|region)\b')
_CLOSE_RE = re.compile(r'^#\s*(endif|endregion)\b')
_RANGE_RE = re.compile(r'^#\s*(if|elif|else|endif|region|endregion)\b')


def _directive_text(stmt: UsingStatement) -> Optional[str]:
    if not stmt.is_conditional_directive:
        return None
    return stmt.text.strip()


def is_opening(stmt: UsingStatement) -> bool:
    text = _directive_text(stmt)
    return bool(text and _OPEN_RE.match(text))


def is_closing(stmt: UsingStatement) -> bool:
    text = _directive_text(stmt)
    return bool(text and _CLOSE_RE.match(text))


class ConditionalBlockHandler:
    """Separates conditional regions from regular using statements."""

    def has_conditionals(self, statements: Sequence[UsingStatement]) -> bool:
        return any(s.is_conditional_directive for s in statements)

    def separate(
        self, statements: Sequence[UsingStatement]
    ) -> Tuple[List[List[UsingStatement]], List[UsingStatement]]:
        """
        Split statements into conditional blocks and the remaining statements.

        Nesting is tracked with a depth counter: a block closes at the
        ``#endif``/``#endregion`` that balances its opener. ``#else`` and
        ``#elif`` stay inside the block. A single-line directive met outside
        a block (``#pragma``, ``#nullable``, a stray ``#endif``) forms a block
        of its own. An unterminated block is returned as the last block.

        Returns:
            (conditional_blocks, remaining)
        """
        blocks: List[List[UsingStatement]] = []
        remaining: List[UsingStatement] = []
        current: Optional[List[UsingStatement]] = None
        depth = 0

        for stmt in statements:
            if current is None:
                text = _directive_text(stmt)
                if text is None or not _BLOCK_START_RE.match(text):
                    remaining.append(stmt)
                    continue
                current = [stmt]
                if is_opening(stmt):
                    depth = 1
                else:
                    blocks.append(current)
                    current = None
                continue

            current.append(stmt)
            if is_opening(stmt):
                depth += 1
            elif is_closing(stmt):
                depth -= 1
                if depth == 0:
                    blocks.append(current)
                    current = None

        if current is not None:
            blocks.append(current)

        return blocks, remaining

    def split_at_barriers(
        self, statements: Sequence[UsingStatement]
    ) -> List[Tuple[List[UsingStatement], Optional[UsingStatement]]]:
        """
        Cut statements at every preprocessor line met outside a region.

        A stray ``#endif``/``#else`` belongs to a region opened above the
        statements, and ``#pragma``/``#nullable`` take effect from their own
        line on, so nothing is sorted across such a line. Balanced regions
        stay inside their segment.

        Returns:
            (segment, barrier) pairs in order; the last barrier is None
        """
        segments: List[Tuple[List[UsingStatement], Optional[UsingStatement]]] = []
        current: List[UsingStatement] = []
        depth = 0

        for stmt in statements:
            if stmt.is_conditional_directive:
                if is_opening(stmt):
                    depth += 1
                elif is_closing(stmt) and depth > 0:
                    depth -= 1
                elif depth == 0:
                    segments.append((current, stmt))
                    current = []
                    continue
            current.append(stmt)

        segments.append((current, None))
        return segments

    def recombine(
        self,
        sorted_usings: List[UsingStatement],
        conditional_blocks: List[List[UsingStatement]],
    ) -> List[UsingStatement]:
        """Sorted usings first, then each block followed by one blank line, trailing blanks trimmed."""
        result = list(sorted_usings)
        for block in conditional_blocks:
            result.extend(block)
            result.append(UsingStatement.blank_line())

        while result and result[-1].is_blank:
            result.pop()
        return result


def find_conditional_ranges(statements: Sequence[UsingStatement]) -> List[Tuple[int, int]]:
    """
    Find (start, end) index ranges of conditional regions, inclusive.

    ``#else``/``#elif`` end the current ``#if`` range and start a new one
    at their own index. Unbalanced closers are ignored.
    """
    ranges: List[Tuple[int, int]] = []
    stack: List[Tuple[str, int]] = []

    for index, stmt in enumerate(statements):
        text = _directive_text(stmt)
        if not text:
            continue
        match = _RANGE_RE.match(text)
        if not match:
            continue

        directive = match.group(1)
        if directive in ("if", "region"):
            stack.append((directive, index))
        elif directive in ("elif", "else"):
            if stack and stack[-1][0] == "if":
                ranges.append((stack[-1][1], index))
                stack[-1] = ("if", index)
        elif stack:
            opener, start = stack.pop()
            if (directive == "endif" and opener == "if") or (directive == "endregion" and opener == "region"):
                ranges.append((start, index))

    return ranges


def is_in_conditional_range(index: int, ranges: Sequence[Tuple[int, int]]) -> bool:
    return any(start <= index <= end for start, end in ranges)
