import time
import uuid
import logging
from dataclasses import replace
from fastapi import FastAPI, HTTPException, Depends, Request, Body
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from usings import (
    FormatOptions, ProjectValidator, SourceDocument, StaticDiagnosticProvider,
    UsingBlockOrganizer, detect_line_ending, load_config, __version__
)

from .models import OrganizeRequest, OrganizeResponse, HealthResponse
from .settings import settings
from .auth import get_current_user, UserContext

logger = logging.getLogger(__name__)

if settings.debug:
    logging.basicConfig(level=logging.DEBUG)


app = FastAPI(title="Organize Usings: C# using-directive organizer")

# CORS configuration from settings
# If no origins configured, allow localhost for development
allowed_origins = settings.allowed_origins if settings.allowed_origins else [
    "http://localhost:*",
    "http://127.0.0.1:*",
    "vscode-webview://*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "X-API-Key", "Authorization"],
)


def _get_or_create_request_id(request: Request) -> str:
    """Get request ID from header or generate one."""
    return request.headers.get("X-Request-Id") or str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Stamps every response with a request ID and logs the request."""

    async def dispatch(self, request: Request, call_next):
        request_id = _get_or_create_request_id(request)
        start_time = time.time()
        request.state.request_id = request_id

        response = await call_next(request)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"path={request.url.path} status={response.status_code} "
            f"duration_ms={duration_ms} request_id={request_id}"
        )
        response.headers["X-Request-Id"] = request_id
        return response


app.add_middleware(RequestIdMiddleware)


def _resolve_options(req: OrganizeRequest) -> FormatOptions:
    """Server defaults overlaid with the request's editor settings."""
    defaults = load_config(settings.config_path)
    overrides = FormatOptions.from_mapping(req.options)
    explicit = {
        name: getattr(overrides, name)
        for name in FormatOptions.__dataclass_fields__
        if name in req.options or _camel(name) in req.options
    }
    return replace(defaults, **explicit)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@app.get("/health", response_model=HealthResponse)
def health():
    """
    Health check endpoint - no authentication required.
    """
    return HealthResponse(
        version=__version__,
        auth_required=bool(settings.api_keys),
        timestamp=int(time.time()),
    )


@app.post("/organize", response_model=OrganizeResponse)
def organize(
    req: OrganizeRequest = Body(...),
    user: UserContext = Depends(get_current_user)
):
    """
    Organize the using directives of one document.

    A project that is not ready is reported with ``success=false`` and a
    user-facing message, not as an HTTP error.
    """
    try:
        options = _resolve_options(req)
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid options: {e}")

    validate_project = settings.validate_project if req.validate_project is None else req.validate_project
    document = SourceDocument(
        content=req.content,
        line_ending=req.line_ending or detect_line_ending(req.content),
        file_path=req.file_path,
    )
    organizer = UsingBlockOrganizer(
        options,
        StaticDiagnosticProvider(req.diagnostics),
        ProjectValidator() if validate_project else None,
    )

    result = organizer.organize(document)
    return OrganizeResponse(
        success=result.success,
        changed=result.has_changes(),
        content=result.content,
        message=result.message,
    )


def cli():
    import uvicorn
    uvicorn.run("usings_server.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

if __name__ == "__main__":
    cli()
