"""
FastAPI entrypoint for the prompt feedback service.

Routes:
- POST /analyze: prompt (+ optional model id) -> {pros, cons, improvedPrompt}
- GET  /models:  registered models and the default, for the UI picker
- GET  / and /healthz: health checks
"""

import os
import logging
from dotenv import load_dotenv, find_dotenv

# Load environment variables from .env file (optional).
# In hosted deployments, secrets should be provided via environment variables, not committed .env files.
# For local Windows dev, some editors save .env as UTF-16; support both UTF-8 and UTF-16 gracefully.
_dotenv_path = find_dotenv(usecwd=True) or None
if _dotenv_path:
    try:
        load_dotenv(_dotenv_path)
    except UnicodeError:
        load_dotenv(_dotenv_path, encoding="utf-16")
else:
    # No .env found; rely on process env
    load_dotenv()

# Configure logging with environment-based level
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)
logger.info("Prompt coach starting with LOG_LEVEL=%s", LOG_LEVEL)

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
import json

from .analyzer import ANALYSIS_FAILED, MISSING_PROMPT, ProviderFactory, analyze
from .errors import FeedbackError, InvalidInput
from .llm_client import GeminiProvider
from .models import default_model_id, list_models
from .schemas import AnalysisRequest, ErrorResponse, HealthResponse, ModelInfo, ModelsResponse

app = FastAPI(title="Prompt Coach")


@app.exception_handler(FeedbackError)
async def feedback_error_handler(request: Request, exc: FeedbackError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def all_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error during analysis", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": ANALYSIS_FAILED})


def get_provider_factory() -> ProviderFactory:
    return GeminiProvider


@app.get("/", response_model=HealthResponse)
def root():
    # Default host health checks may hit "/".
    return HealthResponse(ok=True, service="prompt_coach")


@app.get("/healthz", response_model=HealthResponse)
def healthz():
    return HealthResponse(ok=True)


@app.get("/models", response_model=ModelsResponse)
def models_endpoint():
    return ModelsResponse(
        models=[ModelInfo(id=m.id, name=m.name, description=m.description) for m in list_models()],
        default=default_model_id(),
    )


@app.post(
    "/analyze",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_endpoint(
    request: Request,
    provider_factory: ProviderFactory = Depends(get_provider_factory),
):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidInput(MISSING_PROMPT)
    if not isinstance(payload, dict):
        raise InvalidInput(MISSING_PROMPT)

    try:
        result = await analyze(
            AnalysisRequest.from_payload(payload),
            provider_factory=provider_factory,
        )
    except FeedbackError as e:
        logger.warning("analyze.failed status=%d error=%s", e.status_code, e.message)
        raise

    return JSONResponse(content=result)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
