"""
Core types for the using-directive organizer.

This module provides shared dataclasses and type aliases used across the
engine, the command-line entry point and the HTTP service.
"""

from dataclasses import dataclass
from typing import Literal, Optional


# Type aliases for clarity
StaticPlacement = Literal["intermixed", "groupedWithNamespace", "bottom"]
LineEnding = Literal["LF", "CRLF"]

STATIC_PLACEMENTS = ("intermixed", "groupedWithNamespace", "bottom")

_LINE_ENDING_STRINGS = {
    "LF": "\n",
    "CRLF": "\r\n",
}


def line_ending_string(line_ending: LineEnding) -> str:
    """Return the newline sequence for a line-ending style."""
    try:
        return _LINE_ENDING_STRINGS[line_ending]
    except KeyError:
        raise ValueError(f"Unknown line ending: {line_ending!r}") from None


def detect_line_ending(text: str) -> LineEnding:
    """Detect the line-ending style of a text. CRLF wins if present at all."""
    return "CRLF" if "\r\n" in text else "LF"


@dataclass(frozen=True)
class SourceDocument:
    """A C# source document as handed over by the host editor."""
    content: str
    line_ending: LineEnding = "LF"
    file_path: Optional[str] = None

    @property
    def line_ending_string(self) -> str:
        return line_ending_string(self.line_ending)

    @classmethod
    def from_text(cls, text: str, file_path: Optional[str] = None) -> "SourceDocument":
        return cls(content=text, line_ending=detect_line_ending(text), file_path=file_path)

    @classmethod
    def from_file(cls, file_path: str, encoding: str = "utf-8") -> "SourceDocument":
        """Read a file without newline translation so CRLF survives."""
        with open(file_path, "r", encoding=encoding, newline="") as f:
            text = f.read()
        return cls.from_text(text, file_path=file_path)


@dataclass(frozen=True)
class OrganizationResult:
    """Outcome of organizing the using directives of one document.

    Attributes:
        success: False only when a precondition failed
        content: The new document text; only meaningful when ``changed``
        message: User-facing message for failures, informational otherwise
        changed: Whether ``content`` replaces the document; an empty
            ``content`` is a valid replacement
    """
    success: bool
    content: str = ""
    message: str = ""
    changed: bool = False

    @classmethod
    def success_with(cls, content: str) -> "OrganizationResult":
        return cls(success=True, content=content, changed=True)

    @classmethod
    def error(cls, message: str) -> "OrganizationResult":
        return cls(success=False, message=message)

    @classmethod
    def no_change(cls) -> "OrganizationResult":
        return cls(success=True, message="No changes needed")

    def has_changes(self) -> bool:
        """True if the caller should write ``content`` back."""
        return self.success and self.changed


@dataclass(frozen=True)
class ValidationResult:
    """Result of the project-readiness precondition check."""
    is_valid: bool
    message: str = ""

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message)
