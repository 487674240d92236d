"""
C# using-directive organizer package.

This package finds the using-directive regions of C# source files and
rewrites them: unused directives removed, duplicates dropped, sorted by a
configurable namespace priority and split into namespace groups.
"""

from .types import (
    StaticPlacement, LineEnding, SourceDocument, OrganizationResult, ValidationResult,
    line_ending_string, detect_line_ending
)

from .statement import UsingStatement, is_using_directive
from .block import UsingBlock
from .extractor import UsingBlockExtractor
from .comparator import UsingStatementComparator
from .sorter import UsingSorter
from .conditionals import ConditionalBlockHandler, find_conditional_ranges
from .grouping import UsingGroupSplitter
from .whitespace import WhitespaceNormalizer
from .unused import UnusedUsingRemover
from .processor import UsingBlockProcessor
from .organizer import UsingBlockOrganizer, organize_source

from .diagnostics import (
    AnalyzerDiagnostic, UnusedDirectiveDiagnostic, DiagnosticProvider,
    StaticDiagnosticProvider, load_diagnostics_file
)

from .project import ProjectValidator, find_project_file, is_unity_project, is_project_restored

from .config import (
    FormatOptions, load_config, get_default_config, save_config, find_config_file
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "StaticPlacement", "LineEnding", "SourceDocument", "OrganizationResult", "ValidationResult",
    "line_ending_string", "detect_line_ending",

    # Pipeline
    "UsingStatement", "is_using_directive", "UsingBlock", "UsingBlockExtractor",
    "UsingStatementComparator", "UsingSorter", "ConditionalBlockHandler", "find_conditional_ranges",
    "UsingGroupSplitter", "WhitespaceNormalizer", "UnusedUsingRemover", "UsingBlockProcessor",
    "UsingBlockOrganizer", "organize_source",

    # Diagnostics
    "AnalyzerDiagnostic", "UnusedDirectiveDiagnostic", "DiagnosticProvider",
    "StaticDiagnosticProvider", "load_diagnostics_file",

    # Project readiness
    "ProjectValidator", "find_project_file", "is_unity_project", "is_project_restored",

    # Config
    "FormatOptions", "load_config", "get_default_config", "save_config", "find_config_file"
]
