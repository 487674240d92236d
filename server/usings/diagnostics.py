"""
Analyzer diagnostics as seen by the organizer.

Editors report diagnostics in two incompatible shapes. OmniSharp gives a
plain string code together with ``source: "csharp"``; the Roslyn-based
language server gives a structured code ``{"value": ..., "target": ...}``.
Both shapes are resolved here, once, into ``AnalyzerDiagnostic`` values so
the rest of the engine never looks at raw payloads.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Union

import jsonschema

logger = logging.getLogger(__name__)

# Unnecessary using directive
UNUSED_DIRECTIVE_CODES = frozenset({"CS8019", "IDE0005"})
# The type or namespace name could not be found
NAMESPACE_NOT_FOUND_CODES = frozenset({"CS0246"})

OMNISHARP_SOURCE = "csharp"

_POSITION_SCHEMA = {
    "type": "object",
    "properties": {
        "line": {"type": "integer", "minimum": 0},
        "character": {"type": "integer", "minimum": 0},
    },
    "required": ["line"],
}

# JSON Schema for one editor diagnostic payload
DIAGNOSTIC_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "range": {
            "type": "object",
            "properties": {
                "start": _POSITION_SCHEMA,
                "end": _POSITION_SCHEMA,
            },
            "required": ["start", "end"],
        },
        "code": {
            "oneOf": [
                {"type": "string"},
                {"type": "integer"},
                {
                    "type": "object",
                    "properties": {
                        "value": {"type": ["string", "integer"]},
                        "target": {"type": "string"},
                    },
                    "required": ["value"],
                },
            ]
        },
        "source": {"type": "string"},
        "message": {"type": "string"},
        "severity": {"type": ["string", "integer"]},
    },
    "required": ["range", "code"],
}

_validator = jsonschema.Draft7Validator(DIAGNOSTIC_JSON_SCHEMA)


@dataclass(frozen=True)
class AnalyzerDiagnostic:
    """A diagnostic normalized from either editor shape.

    Attributes:
        start_line: 0-based first line of the range
        end_line: 0-based last line of the range
        code: Diagnostic code, e.g. "CS8019"
        code_format: "omnisharp" (plain code) or "roslyn" (structured code)
        source: Reporting tool, if given
        message: Analyzer message, if given
    """
    start_line: int
    end_line: int
    code: str
    code_format: str
    source: Optional[str] = None
    message: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> Optional["AnalyzerDiagnostic"]:
        """
        Resolve a raw payload, or return None if it does not match either shape.
        """
        if not _validator.is_valid(payload):
            logger.debug(f"Ignoring malformed diagnostic payload: {payload!r}")
            return None

        raw_code = payload["code"]
        if isinstance(raw_code, dict):
            code = str(raw_code["value"])
            code_format = "roslyn"
        else:
            code = str(raw_code)
            code_format = "omnisharp"

        start_line = payload["range"]["start"]["line"]
        end_line = payload["range"]["end"]["line"]
        if end_line < start_line:
            logger.debug(f"Ignoring diagnostic with inverted range: {payload!r}")
            return None

        return cls(
            start_line=start_line,
            end_line=end_line,
            code=code,
            code_format=code_format,
            source=payload.get("source"),
            message=payload.get("message", ""),
        )

    def is_unused_directive(self) -> bool:
        if self.code_format == "omnisharp":
            return self.source == OMNISHARP_SOURCE and self.code == "CS8019"
        return self.code in UNUSED_DIRECTIVE_CODES

    def is_namespace_not_found(self) -> bool:
        if self.code_format == "omnisharp":
            return self.source == OMNISHARP_SOURCE and self.code in NAMESPACE_NOT_FOUND_CODES
        return self.code in NAMESPACE_NOT_FOUND_CODES

    @property
    def lines(self) -> range:
        """Every line covered by the diagnostic."""
        return range(self.start_line, self.end_line + 1)


@dataclass(frozen=True)
class UnusedDirectiveDiagnostic:
    """An "unnecessary using directive" report over a line range."""
    start_line: int
    end_line: int
    code: str

    @property
    def lines(self) -> range:
        return range(self.start_line, self.end_line + 1)


DiagnosticInput = Union[AnalyzerDiagnostic, Dict[str, Any]]


def normalize_diagnostics(items: Optional[Iterable[DiagnosticInput]]) -> List[AnalyzerDiagnostic]:
    """Resolve payloads into diagnostics, dropping the ones that do not parse."""
    result = []
    for item in items or []:
        if isinstance(item, AnalyzerDiagnostic):
            result.append(item)
            continue
        diagnostic = AnalyzerDiagnostic.from_payload(item)
        if diagnostic is not None:
            result.append(diagnostic)
    return result


class DiagnosticProvider(ABC):
    """Source of analyzer diagnostics for one document."""

    @abstractmethod
    def get_all_diagnostics(self) -> List[AnalyzerDiagnostic]:
        ...

    def get_unused_directive_diagnostics(self) -> List[UnusedDirectiveDiagnostic]:
        unused = [
            UnusedDirectiveDiagnostic(d.start_line, d.end_line, d.code)
            for d in self.get_all_diagnostics()
            if d.is_unused_directive()
        ]
        logger.debug(f"Found {len(unused)} unused using diagnostic(s)")
        return unused

    def get_namespace_not_found_lines(self) -> Set[int]:
        """Start lines of "namespace not found" errors."""
        return {d.start_line for d in self.get_all_diagnostics() if d.is_namespace_not_found()}


class StaticDiagnosticProvider(DiagnosticProvider):
    """Serves a fixed snapshot of diagnostics."""

    def __init__(self, diagnostics: Optional[Iterable[DiagnosticInput]] = None):
        self._diagnostics = normalize_diagnostics(diagnostics)

    def get_all_diagnostics(self) -> List[AnalyzerDiagnostic]:
        return list(self._diagnostics)


def load_diagnostics_file(path: str) -> StaticDiagnosticProvider:
    """
    Load diagnostics from a JSON file holding an array of payloads.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a JSON array
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Diagnostics file {path} must contain a JSON array")
    return StaticDiagnosticProvider(data)
