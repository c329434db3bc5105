"""
SpamScore API — Main Application

POST /analyze        — Score an email (subject + body)
POST /analyze/batch  — Score up to 100 emails
POST /score          — Score a single text as subject or body
GET  /rules          — List the active rule table
GET  /health         — Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from spamscore.analyzer import EmailAnalyzer, trigger_summary
from spamscore.config import settings
from spamscore.logging import setup_logging, get_logger
from spamscore.schemas.analyze import (
    AnalyzeRequest,
    AnalyzeBatchRequest,
    AnalyzeBatchResponse,
    AnalysisResponse,
    EmailReportResponse,
    HealthResponse,
    RulesResponse,
    ScoreRequest,
)

logger = get_logger("api")

# Built once at import. Invalid thresholds in the environment fail here.
analyzer = EmailAnalyzer(config=settings.scoring_config())


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "SpamScore API starting",
        extra={"items": len(analyzer.rules)},
    )
    yield
    logger.info("SpamScore API shutting down")


app = FastAPI(
    title="SpamScore API",
    description="Weighted, rule-based spam scoring for email text",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — return structured error, don't leak internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The analysis could not be completed."},
    )


def _report_payload(subject: str, body: str) -> dict:
    report = analyzer.analyze(subject, body)
    payload = report.to_dict()
    payload["triggers"] = trigger_summary(report.all_matches)
    return payload


# ============================================================
# ROUTES
# ============================================================

@app.post("/analyze", response_model=EmailReportResponse)
async def analyze(request: AnalyzeRequest):
    """Score an email's subject and body."""
    payload = _report_payload(request.subject, request.body)
    logger.info(
        f"Analysis complete: score={payload['combined_score']:.2f} "
        f"tier={payload['overall_tier']}",
        extra={
            "combined_score": payload["combined_score"],
            "tier": payload["overall_tier"],
            "matches_count": len(payload["all_matches"]),
            "text_length": len(request.subject) + len(request.body),
        },
    )
    return payload


@app.post("/analyze/batch", response_model=AnalyzeBatchResponse)
async def analyze_batch(request: AnalyzeBatchRequest):
    """Score several emails. Each one is independent."""
    results = [_report_payload(item.subject, item.body) for item in request.items]
    logger.info(
        f"Batch complete: {len(results)} emails",
        extra={"items": len(results)},
    )
    return {"results": results, "total": len(results)}


@app.post("/score", response_model=AnalysisResponse)
async def score(request: ScoreRequest):
    """Score one text, as a subject line or as body text."""
    return analyzer.score(request.text, is_subject_line=request.is_subject_line).to_dict()


@app.get("/rules", response_model=RulesResponse)
async def get_rules():
    """Return the active rule table."""
    rules = analyzer.get_rules()
    phrase_count = sum(1 for r in rules if r["kind"] == "phrase")
    return {
        "version": settings.VERSION,
        "phrase_rules": phrase_count,
        "pattern_rules": len(rules) - phrase_count,
        "total_rules": len(rules),
        "rules": rules,
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check."""
    return {
        "status": "operational",
        "version": settings.VERSION,
        "total_rules": len(analyzer.rules),
        "config": analyzer.config.to_dict(),
    }


# --- Body Size Limit Middleware ---
_MAX_BODY_BYTES = 1_048_576  # 1 MB


@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """Reject requests exceeding 1MB — guards both Content-Length and chunked bodies."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > _MAX_BODY_BYTES:
                return JSONResponse(
                    status_code=413,
                    content={"detail": "Request body too large."},
                )
        except ValueError:
            pass  # Malformed content-length; let the framework handle it

    if request.method in ("POST", "PUT", "PATCH"):
        body = await request.body()
        if len(body) > _MAX_BODY_BYTES:
            return JSONResponse(
                status_code=413,
                content={"detail": "Request body too large."},
            )

    return await call_next(request)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} -> {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
