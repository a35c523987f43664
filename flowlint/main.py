"""FastAPI application exposing the flowchart linter."""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowlint import __version__
from flowlint.analysis.linter import analyze, sort_issues
from flowlint.config import settings
from flowlint.log import configure_logging
from flowlint.models import (
    FixRequest,
    IssueWithFixes,
    LintRequest,
    LintResponse,
    SourceResponse,
)
from flowlint.parsing.sanitize import sanitize
from flowlint.synthesis.fix_generator import apply_fix, generate_fixes

configure_logging()

logger = structlog.get_logger()

app = FastAPI(
    title="flowlint",
    description="Static analysis and quick-fixes for flowchart diagram source",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event() -> None:
    """Initialize application on startup."""
    logger.info("flowlint_starting", version=__version__, log_level=settings.log_level)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "flowlint",
        "version": __version__,
        "status": "operational",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/v1/lint", response_model=LintResponse)
async def lint(request: LintRequest) -> LintResponse:
    """Analyze diagram source and return issues with their candidate fixes."""
    issues = analyze(request.source)
    if request.sort:
        issues = sort_issues(issues)
    logger.info("api_lint", total_issues=len(issues))
    return LintResponse(issues=[
        IssueWithFixes(issue=issue, candidates=generate_fixes(issue))
        for issue in issues
    ])


@app.post("/api/v1/fix", response_model=SourceResponse)
async def fix(request: FixRequest) -> SourceResponse:
    """Apply one quick-fix and return the new source."""
    source = apply_fix(request.source, request.fix)
    return SourceResponse(source=source, changed=source != request.source)


@app.post("/api/v1/sanitize", response_model=SourceResponse)
async def sanitize_source(request: LintRequest) -> SourceResponse:
    """Return the source as it should be handed to the rendering library."""
    source = sanitize(request.source)
    return SourceResponse(source=source, changed=source != request.source)
