"""
API Endpoint for SEO Analysis

FastAPI handler that:
1. Receives blog content (HTML or Markdown) with optional SEO metadata
2. Runs the SEO analysis engine and returns the full report
3. Optionally validates every discovered link with live HEAD requests
4. Validates single URLs or batches on demand
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from src import __version__
from src.seo_analyzer import (
    AnalysisFailedError,
    InvalidRequestError,
    URLValidator,
    analyze_seo,
    parse_request,
    require_valid_url,
    with_url_validation,
)
from src.utils.config import get_settings

# Configure logging to stdout
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,  # Explicitly use stdout
    force=True,  # Override any existing config
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

SERVICE_NAME = "Defang Blog SEO Analyzer"

# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="SEO scoring for Defang blog drafts with live link validation",
    version=__version__,
)


# ============================================================================
# STARTUP / SHUTDOWN - Shared URL validator
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Create the shared URL validator."""
    app.state.url_validator = URLValidator()
    logger.info("URL validator ready")


@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared URL validator."""
    validator = getattr(app.state, "url_validator", None)
    if validator is not None:
        await validator.close()
        app.state.url_validator = None


def get_url_validator(request: Request) -> URLValidator:
    """Shared validator, created lazily if startup did not run."""
    validator = getattr(request.app.state, "url_validator", None)
    if validator is None:
        validator = URLValidator()
        request.app.state.url_validator = validator
    return validator


# ============================================================================
# REQUEST MODELS
# ============================================================================

class SEOAnalyzeBody(BaseModel):
    """
    Request to analyze blog content.

    Fields are optional at the schema level so that missing values are
    reported with the engine's own 400 messages.
    """
    content: Optional[str] = None
    contentType: Optional[str] = Field(
        default=None,
        description="'html' or 'markdown'"
    )
    seoMetadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="title, description, keywords, ogTitle, ogDescription, ..."
    )
    validateUrls: bool = Field(
        default=False,
        description="Replace urlValidation with live HEAD-request results"
    )


class ValidateURLBody(BaseModel):
    """Request to validate a single URL."""
    url: Optional[str] = None


class ValidateURLsBody(BaseModel):
    """Request to validate a batch of URLs."""
    urls: Optional[List[str]] = None


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME}


@app.get("/api/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "environment": get_settings().ENVIRONMENT,
    }


@app.post("/api/seo-analyze")
async def seo_analyze(
    body: SEOAnalyzeBody,
    validator: URLValidator = Depends(get_url_validator),
):
    """
    Analyze blog content for SEO.

    Returns:
        {"result": SEOAnalysisResult}
    """
    try:
        request = parse_request(body.content, body.contentType, body.seoMetadata, body.validateUrls)
        result = await run_in_threadpool(analyze_seo, request)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except AnalysisFailedError:
        raise HTTPException(status_code=500, detail="Failed to analyze content")

    if request.validate_urls and result.url_validation:
        urls = [entry.url for entry in result.url_validation]
        try:
            validated = await validator.validate_many(urls)
        except Exception as e:
            logger.exception(f"Live URL validation failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to validate URLs")
        result = with_url_validation(result, validated)

    return {"result": result.to_dict()}


@app.post("/api/seo-analyze/validate-url")
async def validate_single_url(
    body: ValidateURLBody,
    validator: URLValidator = Depends(get_url_validator),
):
    """
    Validate one URL with a HEAD request.

    Returns:
        {"result": URLValidationResult}
    """
    try:
        url = require_valid_url(body.url)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)

    try:
        result = await validator.validate(url)
    except Exception as e:
        logger.exception(f"URL validation error for {url}: {e}")
        raise HTTPException(status_code=500, detail="Failed to validate URL")

    return {"result": result.to_dict()}


@app.post("/api/seo-analyze/validate-urls")
async def validate_many_urls(
    body: ValidateURLsBody,
    validator: URLValidator = Depends(get_url_validator),
):
    """
    Validate a batch of URLs concurrently.

    Returns:
        {"results": [URLValidationResult, ...]} in input order
    """
    if not body.urls:
        raise HTTPException(status_code=400, detail="URLs are required")

    try:
        urls = [require_valid_url(u) for u in body.urls]
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)

    try:
        results = await validator.validate_many(urls)
    except Exception as e:
        logger.exception(f"Batch URL validation error: {e}")
        raise HTTPException(status_code=500, detail="Failed to validate URLs")

    return {"results": [r.to_dict() for r in results]}


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.analyze:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
