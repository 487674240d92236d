"""
Ordering of using directives.
"""

import functools
import re
from typing import List, Sequence, Tuple, Union

from .statement import UsingStatement

_USING_PREFIX_RE = re.compile(r'^\s*using\s+')
_TERMINATOR_RE = re.compile(r';\s*$')


class UsingStatementComparator:
    """Compares using statements for sorting.

    Order, most significant first:
      1. priority rank, descending: the first configured prefix that the
         namespace starts with (case-sensitive) ranks highest; unmatched
         namespaces rank 0
      2. case-insensitive comparison
      3. shorter namespace first
      4. at the first position where the two differ only in case, the
         lowercase character wins

    Every step compares a component of ``key()``, which makes the order a
    strict weak ordering.
    """

    def __init__(self, sort_order: Union[str, Sequence[str]] = "System"):
        if isinstance(sort_order, str):
            sort_order = sort_order.split()
        self.priority_namespaces: List[str] = [ns for ns in sort_order if ns]

    def compare(self, a: UsingStatement, b: UsingStatement) -> int:
        """Negative if a sorts before b, positive if after, 0 if equivalent."""
        key_a = self.key(a)
        key_b = self.key(b)
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0

    def key(self, statement: UsingStatement) -> Tuple[int, str, int, Tuple[int, ...]]:
        namespace = self.normalize_namespace(statement.sort_key)
        return (
            -self.get_priority(namespace),
            namespace.lower(),
            len(namespace),
            tuple(0 if c == c.lower() else 1 for c in namespace),
        )

    def sort(self, statements: Sequence[UsingStatement]) -> List[UsingStatement]:
        """Stable sort of the given statements."""
        return sorted(statements, key=functools.cmp_to_key(self.compare))

    def normalize_namespace(self, namespace: str) -> str:
        """Strip a leading ``using`` keyword and trailing semicolon."""
        namespace = _USING_PREFIX_RE.sub('', namespace)
        return _TERMINATOR_RE.sub('', namespace).strip()

    def get_priority(self, namespace: str) -> int:
        """Rank of the first matching priority prefix, counted from the end."""
        count = len(self.priority_namespaces)
        for index, prefix in enumerate(self.priority_namespaces):
            if namespace.startswith(prefix):
                return count - index
        return 0
