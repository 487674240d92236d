"""
The per-block transformation pipeline.
"""

import logging
from typing import List, Optional

from .block import UsingBlock
from .conditionals import ConditionalBlockHandler
from .config import FormatOptions
from .diagnostics import DiagnosticProvider, StaticDiagnosticProvider
from .grouping import UsingGroupSplitter
from .sorter import UsingSorter
from .statement import UsingStatement
from .unused import UnusedUsingRemover
from .whitespace import WhitespaceNormalizer

logger = logging.getLogger(__name__)


class UsingBlockProcessor:
    """
    Runs one block through the fixed pipeline:

    1. remove unused directives
    2. drop blank lines
    3. sort between stray preprocessor lines (conditional regions lifted
       out and appended back)
    4. split into namespace groups, if enabled
    5. normalize blank lines around comments and preprocessor lines
    6. separate the leading content from the first statement

    The block's statement list is replaced after every stage.
    """

    def __init__(
        self,
        block: UsingBlock,
        config: FormatOptions,
        diagnostic_provider: Optional[DiagnosticProvider] = None,
    ):
        self.block = block
        self.config = config
        self.diagnostic_provider = diagnostic_provider or StaticDiagnosticProvider()

    def process(self) -> UsingBlock:
        self.remove_unused()
        self.filter_blank_lines()
        self.sort_statements()
        self.split_into_groups()
        self.normalize_whitespace()
        self.normalize_leading_whitespace()
        return self.block

    def remove_unused(self) -> None:
        before = len(self.block.statements)
        remover = UnusedUsingRemover(self.diagnostic_provider, self.config)
        self.block.statements = remover.remove(self.block)
        removed = before - len(self.block.statements)
        if removed:
            logger.debug(f"Removed {removed} unused using statement(s): {before} -> {before - removed}")

    def filter_blank_lines(self) -> None:
        self.block.statements = [s for s in self.block.statements if not s.is_blank]

    def sort_statements(self) -> None:
        statements = self.block.statements
        handler = ConditionalBlockHandler()

        if not handler.has_conditionals(statements):
            self.block.statements = UsingSorter(self.config).sort(statements)
            return

        segments = handler.split_at_barriers(statements)
        if len(segments) > 1:
            logger.debug(f"Sorting {len(segments)} segment(s) separated by preprocessor lines")

        result: List[UsingStatement] = []
        for segment, barrier in segments:
            result.extend(self._sort_segment(segment, handler))
            if barrier is not None:
                result.append(barrier)
        self.block.statements = result

    def _sort_segment(self, statements: List[UsingStatement],
                      handler: ConditionalBlockHandler) -> List[UsingStatement]:
        sorter = UsingSorter(self.config)
        if not handler.has_conditionals(statements):
            return sorter.sort(statements)

        conditional_blocks, remaining = handler.separate(statements)
        logger.debug(f"Sorting around {len(conditional_blocks)} conditional block(s)")
        return handler.recombine(sorter.sort(remaining), conditional_blocks)

    def split_into_groups(self) -> None:
        if not self.config.split_groups or not self.block.statements:
            return

        before = len(self.block.statements)
        self.block.statements = UsingGroupSplitter(self.config).split(self.block.statements)
        added = len(self.block.statements) - before
        if added:
            logger.debug(f"Added {added} blank line(s) between groups")

    def normalize_whitespace(self) -> None:
        self.block.statements = WhitespaceNormalizer().normalize(self.block.statements)

    def normalize_leading_whitespace(self) -> None:
        statements = self.block.statements
        if self.block.leading_content and statements and not statements[0].is_blank:
            self.block.statements = [UsingStatement.blank_line()] + statements
