"""
Entry point that organizes the using directives of a whole document.
"""

import logging
from typing import Iterable, Optional

from .config import FormatOptions
from .diagnostics import DiagnosticInput, DiagnosticProvider, StaticDiagnosticProvider
from .extractor import UsingBlockExtractor
from .processor import UsingBlockProcessor
from .project import ProjectValidator
from .types import OrganizationResult, SourceDocument, detect_line_ending

logger = logging.getLogger(__name__)


class UsingBlockOrganizer:
    """
    Orchestrates extraction, per-block processing and replacement.

    Args:
        config: Formatting options
        diagnostic_provider: Analyzer diagnostics for the document; no
            diagnostics means nothing is reported unused
        validator: Project-readiness gate, consulted before unused
            directives are removed from a document with a file path.
            Pass None to skip the check.
    """

    def __init__(
        self,
        config: Optional[FormatOptions] = None,
        diagnostic_provider: Optional[DiagnosticProvider] = None,
        validator: Optional[ProjectValidator] = None,
    ):
        self.config = config or FormatOptions()
        self.diagnostic_provider = diagnostic_provider or StaticDiagnosticProvider()
        self.validator = validator
        self.extractor = UsingBlockExtractor()

    def organize(self, document: SourceDocument) -> OrganizationResult:
        if self.validator is not None and document.file_path and not self.config.disable_unused_removal:
            validation = self.validator.validate(document.file_path)
            if not validation.is_valid:
                logger.warning(f"Project validation failed for {document.file_path}: {validation.message}")
                return OrganizationResult.error(validation.message)

        line_ending = document.line_ending_string
        blocks = self.extractor.extract(document.content, line_ending)
        logger.debug(f"Extracted {len(blocks)} using block(s) from document")

        if not blocks:
            return OrganizationResult.no_change()

        total = sum(block.actual_using_count() for _, block in blocks)
        logger.debug(f"Total using statements in document: {total}")

        for index, (_, block) in enumerate(blocks, start=1):
            logger.debug(f"Processing block {index} of {len(blocks)}: {block!r}")
            UsingBlockProcessor(block, self.config, self.diagnostic_provider).process()

        new_content = self.extractor.replace(document.content, line_ending, blocks)
        if new_content == document.content:
            logger.debug("No changes were made to the document")
            return OrganizationResult.no_change()

        logger.info(f"Organized {len(blocks)} using block(s)")
        return OrganizationResult.success_with(new_content)


def organize_source(
    text: str,
    line_ending: Optional[str] = None,
    config: Optional[FormatOptions] = None,
    diagnostics: Optional[Iterable[DiagnosticInput]] = None,
) -> str:
    """
    Organize the using directives of a source text and return the new text.

    Args:
        text: Source text
        line_ending: "\\n" or "\\r\\n"; detected from the text when None
        config: Formatting options, defaults when None
        diagnostics: Analyzer diagnostics (payloads or AnalyzerDiagnostic)

    Returns:
        The organized text, or ``text`` itself when nothing changes
    """
    if line_ending is None:
        style = detect_line_ending(text)
    elif line_ending == "\r\n":
        style = "CRLF"
    elif line_ending == "\n":
        style = "LF"
    else:
        raise ValueError(f"Unsupported line ending: {line_ending!r}")

    organizer = UsingBlockOrganizer(config, StaticDiagnosticProvider(diagnostics))
    result = organizer.organize(SourceDocument(content=text, line_ending=style))
    return result.content if result.has_changes() else text
