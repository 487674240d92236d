"""
Removal of using directives that the analyzer reports as unnecessary.
"""

import logging
from typing import List, Set

from .block import UsingBlock
from .conditionals import find_conditional_ranges, is_in_conditional_range
from .config import FormatOptions
from .diagnostics import DiagnosticProvider
from .statement import UsingStatement

logger = logging.getLogger(__name__)


class UnusedUsingRemover:
    """Removes unused using statements based on analyzer diagnostics."""

    def __init__(self, diagnostic_provider: DiagnosticProvider, config: FormatOptions):
        self.diagnostic_provider = diagnostic_provider
        self.config = config

    def remove(self, block: UsingBlock) -> List[UsingStatement]:
        """
        Return the block's statements without the unused directives.

        The block itself is not modified. Only actual directives are ever
        dropped; a diagnostic that lands on a comment, blank or
        preprocessor line is ignored.
        """
        statements = list(block.statements)
        if self.config.disable_unused_removal:
            logger.debug("Unused using removal is disabled")
            return statements

        indices = self.get_unused_indices(block)
        if not self.config.process_directives_in_conditional_blocks:
            indices = self._drop_conditional(indices, block)

        if indices:
            logger.debug(f"Removing {len(indices)} unused using statement(s) at indices {sorted(indices)}")

        return [s for i, s in enumerate(statements) if i not in indices]

    def get_unused_indices(self, block: UsingBlock) -> Set[int]:
        """Statement indices covered by unused-directive diagnostics."""
        not_found_lines = self.diagnostic_provider.get_namespace_not_found_lines()
        offset = block.first_statement_line
        indices: Set[int] = set()

        for diagnostic in self.diagnostic_provider.get_unused_directive_diagnostics():
            for line in diagnostic.lines:
                if line in not_found_lines:
                    logger.debug(f"Skipping file line {line}: namespace not found")
                    continue

                index = line - offset
                if 0 <= index < len(block.statements) and block.statements[index].is_directive:
                    indices.add(index)

        return indices

    def _drop_conditional(self, indices: Set[int], block: UsingBlock) -> Set[int]:
        # Ranges are computed over leading content + statements so that an
        # #if opened in the leading content still protects its directives
        leading_count = len(block.leading_content)
        ranges = find_conditional_ranges(block.leading_content + block.statements)

        kept = set()
        for index in indices:
            if is_in_conditional_range(index + leading_count, ranges):
                logger.debug(f"Preserving statement {index}: inside a conditional region")
            else:
                kept.add(index)
        return kept
