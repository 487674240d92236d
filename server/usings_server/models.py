from typing import List, Dict, Optional, Literal, Any
from pydantic import BaseModel

# ---- Organize Models ----

class OrganizeRequest(BaseModel):
    """A document as the editor holds it, plus its settings and diagnostics."""
    content: str
    line_ending: Optional[Literal["LF", "CRLF"]] = None  # Detected from content when absent
    file_path: Optional[str] = None  # Needed for the project-readiness check
    options: Dict[str, Any] = {}  # Editor settings, camelCase (sortOrder, splitGroups, ...)
    diagnostics: List[Dict[str, Any]] = []  # Raw editor diagnostics for the document
    validate_project: Optional[bool] = None  # Server default when absent

class OrganizeResponse(BaseModel):
    success: bool
    changed: bool = False
    content: str = ""  # Organized text; empty when unchanged or on failure
    message: str = ""

# ---- Health ----

class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    version: str
    auth_required: bool
    timestamp: int
