"""
Blank-line separation of using directives by root namespace.
"""

from typing import List, Sequence

from .config import FormatOptions
from .statement import UsingStatement


class UsingGroupSplitter:
    """Splits using statements into groups by root namespace."""

    def __init__(self, config: FormatOptions):
        self.config = config

    def split(self, statements: Sequence[UsingStatement]) -> List[UsingStatement]:
        """
        Insert blank lines between runs of differing root namespace.

        Leading content (orphaned comments) is closed with a blank line.
        Aliases get one blank line before the first of them when their root
        differs from the last tracked root, and none among themselves.
        Blank lines, comments and preprocessor lines pass through without
        touching the tracked state.
        """
        first_using = next((i for i, s in enumerate(statements) if s.is_directive), -1)
        if first_using == -1:
            return list(statements)

        leading = list(statements[:first_using])
        if leading and not leading[-1].is_blank:
            leading.append(UsingStatement.blank_line())

        result = leading
        placement = self.config.static_placement
        previous_root = ""
        previous_was_static = False

        for stmt in statements[first_using:]:
            if not stmt.is_directive:
                result.append(stmt)
                continue

            if stmt.is_alias:
                if previous_root and stmt.root_namespace != previous_root:
                    result.append(UsingStatement.blank_line())
                    # Reset so consecutive aliases stay together
                    previous_root = ""
                result.append(stmt)
                continue

            if stmt.is_static and placement == "bottom":
                if not previous_was_static and previous_root:
                    result.append(UsingStatement.blank_line())
                elif previous_was_static and previous_root and stmt.root_namespace != previous_root:
                    result.append(UsingStatement.blank_line())
                result.append(stmt)
                previous_root = stmt.root_namespace
                previous_was_static = True
                continue

            # Regular usings, and statics in groupedWithNamespace/intermixed mode
            if previous_root and stmt.root_namespace != previous_root:
                result.append(UsingStatement.blank_line())
            result.append(stmt)
            previous_root = stmt.root_namespace
            previous_was_static = stmt.is_static and placement == "groupedWithNamespace"

        return result
