"""
PDF Summary Mailer API
FastAPI application that summarizes uploaded PDFs and emails the result.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.errors import PipelineError
from app.models.upload import HealthResponse
from app.routers import upload

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request"

settings = get_settings()

app = FastAPI(
    title="PDF Summary Mailer API",
    description="AI-powered PDF summaries delivered by email",
    version="0.1.0",
)

# The upload form is served from other origins; CORS_ORIGINS narrows it down
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload.router, tags=["upload"])


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """
    Client and document errors answer {"error": ...}; dependency and internal
    errors answer {"error": ..., "details": ...} so operators can see the cause.
    """
    if exc.status_code < 500:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    logger.error(f"Error processing upload ({exc.error_code}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": GENERIC_ERROR_MESSAGE, "details": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed form bodies (e.g. ``pdf`` sent as text) are client errors: 400, not 422."""
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    logger.info(f"Rejected malformed request to {request.url.path}: {problems}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request: " + "; ".join(problems)},
    )


@app.on_event("startup")
async def log_startup() -> None:
    logger.info("PDF Summary Mailer running at http://localhost:%s", settings.port)
    if not settings.smtp_host or not settings.anthropic_api_key:
        logger.warning(
            "SMTP_HOST or ANTHROPIC_API_KEY is not set; "
            "configure your .env file with SMTP and API credentials"
        )


@app.get("/")
async def root():
    return {"message": "PDF Summary Mailer API", "version": "0.1.0"}


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
