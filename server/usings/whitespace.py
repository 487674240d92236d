"""
Blank-line normalization around comments and preprocessor lines.
"""

import re
from typing import List, Optional, Sequence

from .statement import UsingStatement

_OPEN_RE = re.compile(r'^#\s*(if|region)\b')
_CLOSE_RE = re.compile(r'^#\s*(endif|endregion)\b')
_MIDDLE_RE = re.compile(r'^#\s*(else|elif)\b')


def _is_directive(stmt: Optional[UsingStatement]) -> bool:
    return stmt is not None and stmt.is_directive


class WhitespaceNormalizer:
    """
    Adds the blank lines that surround comments and conditional regions.

    This is the only stage besides group splitting that inserts blank
    lines. Checks on the preceding line look at what has already been
    emitted, so a blank is never added twice and a second pass over the
    output changes nothing.
    """

    def normalize(self, statements: Sequence[UsingStatement]) -> List[UsingStatement]:
        result: List[UsingStatement] = []

        for i, stmt in enumerate(statements):
            prev = result[-1] if result else None
            nxt = statements[i + 1] if i + 1 < len(statements) else None

            if stmt.is_conditional_directive:
                text = stmt.text.strip()

                if _OPEN_RE.match(text):
                    if prev is not None and not prev.is_blank and not prev.is_comment:
                        result.append(UsingStatement.blank_line())
                    result.append(stmt)
                    if _is_directive(nxt):
                        result.append(UsingStatement.blank_line())
                    continue

                if _CLOSE_RE.match(text):
                    if _is_directive(prev):
                        result.append(UsingStatement.blank_line())
                    result.append(stmt)
                    if nxt is not None and not nxt.is_blank:
                        result.append(UsingStatement.blank_line())
                    continue

                if _MIDDLE_RE.match(text):
                    if _is_directive(prev):
                        result.append(UsingStatement.blank_line())
                    result.append(stmt)
                    if _is_directive(nxt):
                        result.append(UsingStatement.blank_line())
                    continue

                # #pragma, #nullable, #define and friends
                result.append(stmt)
                continue

            if stmt.is_comment:
                result.append(stmt)
                # Orphaned comments are set apart from the directive below
                if _is_directive(nxt):
                    result.append(UsingStatement.blank_line())
                continue

            if stmt.is_blank and prev is not None and prev.is_blank:
                continue

            result.append(stmt)

        return result
