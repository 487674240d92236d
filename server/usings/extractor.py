"""
Locates using-directive regions in C# source text and splices processed
regions back in.

The scanner walks the source one line at a time with a small state
machine, so there is no backtracking regex over the whole file. A region
is the run of leading comments, preprocessor lines and blank lines that
precedes a using directive, the directive itself, and every following line
up to the last directive (or closing preprocessor line) of the contiguous
run, plus the blank lines after it.
"""

import logging
import re
from typing import List, Tuple

from .block import UsingBlock
from .statement import UsingStatement, is_using_directive

logger = logging.getLogger(__name__)

# Line kinds produced by the scanner
BLANK = "blank"
COMMENT = "comment"
COMMENT_OPEN = "comment_open"  # "/*" without a closing "*/" on the same line
PREPROCESSOR = "preprocessor"
DIRECTIVE = "directive"
OTHER = "other"

_REGION_TAIL_RE = re.compile(r'^#\s*(endif|endregion|else|elif)\b')

# (original substring, block) in document order
BlockMap = List[Tuple[str, UsingBlock]]


def classify_line(line: str) -> str:
    """Classify a line outside of a block comment."""
    trimmed = line.strip()
    if not trimmed:
        return BLANK
    if trimmed.startswith('/*'):
        return COMMENT if trimmed.find('*/', 2) >= 0 else COMMENT_OPEN
    if trimmed.startswith('//'):
        return COMMENT
    if trimmed.startswith('#'):
        return PREPROCESSOR
    if is_using_directive(trimmed):
        return DIRECTIVE
    return OTHER


class UsingBlockExtractor:
    """Extracts using blocks from C# source code."""

    def extract(self, source: str, line_ending: str) -> BlockMap:
        """
        Find every using region in the source.

        Args:
            source: Full document text
            line_ending: The document's newline sequence ("\\n" or "\\r\\n")

        Returns:
            List of (original substring, UsingBlock) pairs in document order.
            Regions with leading content but no directive are not returned.
        """
        lines = source.split(line_ending)
        offsets = _line_offsets(lines, line_ending)
        blocks: BlockMap = []

        run_start = None
        in_block_comment = False
        i = 0
        while i < len(lines):
            line = lines[i]

            if in_block_comment:
                if '*/' in line:
                    in_block_comment = False
                i += 1
                continue

            kind = classify_line(line)
            if kind == DIRECTIVE:
                start = run_start if run_start is not None else i
                block, original = self._build_block(lines, offsets, line_ending, start, i)
                blocks.append((original, block))
                logger.debug(f"Found using block at lines {block.start_line}-{block.end_line}")
                i = block.end_line + 1
                run_start = None
                continue

            if kind == OTHER:
                run_start = None
            else:
                if run_start is None:
                    run_start = i
                if kind == COMMENT_OPEN:
                    in_block_comment = True
            i += 1

        return blocks

    def replace(self, source: str, line_ending: str, blocks: BlockMap) -> str:
        """
        Replace each captured region with its block's current rendering.

        Each original substring is replaced at its first occurrence at or
        after the end of the previous replacement; the recorded offset is
        tried first. Text outside the regions is left untouched.
        """
        parts: List[str] = []
        cursor = 0

        for original, block in blocks:
            if block.start_offset >= cursor and source.startswith(original, block.start_offset):
                index = block.start_offset
            else:
                index = source.find(original, cursor)
            if index < 0:
                logger.warning(f"Could not locate using block (lines {block.start_line}-{block.end_line}) in source")
                continue

            parts.append(source[cursor:index])
            parts.append(block.render(line_ending))
            cursor = index + len(original)

        parts.append(source[cursor:])
        return "".join(parts)

    def _build_block(
        self,
        lines: List[str],
        offsets: List[int],
        line_ending: str,
        start: int,
        first_directive: int,
    ) -> Tuple[UsingBlock, str]:
        """Expand forward from the first directive and build the block."""
        last = self._find_region_end(lines, first_directive)

        end = last
        while end + 1 < len(lines) and not lines[end + 1].strip():
            end += 1

        statements = _parse_region(lines[start:end + 1])
        leading_count = first_directive - start
        # Comments directly above the first directive belong to it
        while leading_count > 0 and statements[leading_count - 1].is_comment:
            leading_count -= 1
        has_trailing_line_ending = end < len(lines) - 1

        original = line_ending.join(lines[start:end + 1])
        if has_trailing_line_ending:
            original += line_ending

        block = UsingBlock(
            start_line=start,
            end_line=end,
            statements=statements[leading_count:],
            leading_content=statements[:leading_count],
            has_trailing_line_ending=has_trailing_line_ending,
            start_offset=offsets[start],
        )
        return block, original

    def _find_region_end(self, lines: List[str], first_directive: int) -> int:
        """Index of the last directive or closing preprocessor line of the region."""
        last = first_directive
        in_block_comment = False

        for j in range(first_directive + 1, len(lines)):
            line = lines[j]
            if in_block_comment:
                if '*/' in line:
                    in_block_comment = False
                continue

            kind = classify_line(line)
            if kind == DIRECTIVE:
                last = j
            elif kind == PREPROCESSOR:
                if _REGION_TAIL_RE.match(line.strip()):
                    last = j
            elif kind == COMMENT_OPEN:
                in_block_comment = True
            elif kind == OTHER:
                break

        return last


def _parse_region(lines: List[str]) -> List[UsingStatement]:
    """Parse region lines, keeping block-comment interiors as comments."""
    statements = []
    in_block_comment = False

    for line in lines:
        if in_block_comment:
            statements.append(UsingStatement.comment(line))
            if '*/' in line:
                in_block_comment = False
            continue

        if classify_line(line) == COMMENT_OPEN:
            in_block_comment = True
            statements.append(UsingStatement.comment(line))
            continue

        statements.append(UsingStatement.parse(line))

    return statements


def _line_offsets(lines: List[str], line_ending: str) -> List[int]:
    offsets = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line) + len(line_ending)
    return offsets
