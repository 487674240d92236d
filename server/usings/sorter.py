"""
Sorting and de-duplication of using statements.
"""

import logging
from typing import Callable, Dict, List, Sequence

from .comparator import UsingStatementComparator
from .config import FormatOptions
from .statement import UsingStatement

logger = logging.getLogger(__name__)


class UsingSorter:
    """Sorts using statements according to configuration."""

    def __init__(self, config: FormatOptions):
        self.config = config
        self.comparator = UsingStatementComparator(config.sort_order)

    def sort(self, statements: Sequence[UsingStatement]) -> List[UsingStatement]:
        """
        Sort a run of statements.

        Comments directly above a directive travel with it. The result is
        ordered as: orphaned comments, regular and static directives
        (arranged per ``static_placement``), aliases, preprocessor lines.
        """
        with_comments = self._attach_comments(statements)

        orphaned_comments = _filter_by(with_comments, lambda s: s.is_comment)
        directives = _filter_by(with_comments, lambda s: s.is_conditional_directive)
        aliases = _filter_by(with_comments, lambda s: s.is_directive and s.is_alias)

        placement = self.config.static_placement
        if placement == "intermixed":
            regular = _filter_by(with_comments, lambda s: s.is_directive and not s.is_alias)
            static: List[UsingStatement] = []
        else:
            regular = _filter_by(with_comments, lambda s: s.is_directive and not s.is_alias and not s.is_static)
            static = _filter_by(with_comments, lambda s: s.is_directive and not s.is_alias and s.is_static)

        logger.debug(
            f"Categorized: {len(orphaned_comments)} orphaned comment(s), {len(regular)} regular using(s), "
            f"{len(static)} static using(s), {len(aliases)} alias(es), {len(directives)} directive(s)"
        )

        sorted_regular = self.sort_and_deduplicate(regular)
        sorted_static = self.sort_and_deduplicate(static)
        sorted_aliases = self.sort_and_deduplicate(aliases)

        duplicates = (len(regular) - len(sorted_regular)
                      + len(static) - len(sorted_static)
                      + len(aliases) - len(sorted_aliases))
        if duplicates:
            logger.debug(f"Removed {duplicates} duplicate(s) during sorting")

        if placement == "groupedWithNamespace":
            usings = interleave_by_namespace(sorted_regular, sorted_static)
        else:
            # intermixed keeps statics inside sorted_regular
            usings = sorted_regular + sorted_static

        return orphaned_comments + usings + sorted_aliases + directives

    def sort_and_deduplicate(self, statements: List[UsingStatement]) -> List[UsingStatement]:
        return remove_duplicates(self.comparator.sort(statements))

    def _attach_comments(self, statements: Sequence[UsingStatement]) -> List[UsingStatement]:
        """Attach runs of comments to the directive that follows them.

        A comment run interrupted by a preprocessor line or a blank line
        stays in place as orphaned comments.
        """
        result: List[UsingStatement] = []
        pending: List[UsingStatement] = []

        for stmt in statements:
            if stmt.is_comment:
                pending.append(stmt)
            elif stmt.is_directive:
                if pending:
                    stmt.set_attached_comments(pending)
                    pending = []
                result.append(stmt)
            else:
                result.extend(pending)
                pending = []
                result.append(stmt)

        result.extend(pending)
        return result


def remove_duplicates(statements: Sequence[UsingStatement]) -> List[UsingStatement]:
    """Drop directives whose key was already seen; other lines always pass."""
    seen = set()
    result = []
    for stmt in statements:
        key = stmt.dedup_key
        if key:
            if key in seen:
                continue
            seen.add(key)
        result.append(stmt)
    return result


def interleave_by_namespace(regular: List[UsingStatement],
                            static: List[UsingStatement]) -> List[UsingStatement]:
    """Place each root namespace's static usings right after its regular ones."""
    static_by_root: Dict[str, List[UsingStatement]] = {}
    for stmt in static:
        static_by_root.setdefault(stmt.root_namespace, []).append(stmt)

    result: List[UsingStatement] = []
    for index, stmt in enumerate(regular):
        result.append(stmt)
        is_last_of_group = (index == len(regular) - 1
                            or regular[index + 1].root_namespace != stmt.root_namespace)
        if is_last_of_group and stmt.root_namespace in static_by_root:
            result.extend(static_by_root.pop(stmt.root_namespace))

    # Statics whose namespace has no regular using
    for leftovers in static_by_root.values():
        result.extend(leftovers)
    return result


def _filter_by(statements: Sequence[UsingStatement],
               predicate: Callable[[UsingStatement], bool]) -> List[UsingStatement]:
    return [s for s in statements if predicate(s)]
