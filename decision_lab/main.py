# decision_lab/main.py
"""FastAPI request boundary for the make/buy/partner decision lab.

Analysis and feedback try the AI collaborator first and fall back to the
deterministic rules in ``decision_lab.scoring`` and ``decision_lab.feedback``
whenever it is disabled or fails.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from decision_lab.ai import AIService, AIServiceError
from decision_lab.config import Settings, get_settings
from decision_lab.extraction import ContentExtractionError, ContentExtractor
from decision_lab.feedback import compute_local_feedback
from decision_lab.inputs import EXAMPLE_SCENARIO
from decision_lab.models import (
    AnalyzeRequest,
    ExtractedContent,
    FeedbackItem,
    FeedbackRequest,
    FinalAnalysis,
    HintRequest,
    HintResponse,
    InputHintsRequest,
    InputHintsResponse,
    ParseScenarioRequest,
    Scenario,
)
from decision_lab.scoring import compute_analysis

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

MIN_SCENARIO_CHARS = 100

router = APIRouter(prefix="/api", tags=["Decision Lab"])


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_extractor(request: Request) -> ContentExtractor:
    return request.app.state.extractor


def _require_ai(ai: AIService) -> None:
    if not ai.enabled:
        raise HTTPException(status_code=503, detail="AI provider is not configured")


# -------- Scenario --------
@router.get("/example-scenario", response_model=Scenario)
def example_scenario():
    return EXAMPLE_SCENARIO


@router.post("/parse-scenario", response_model=Scenario)
def parse_scenario(body: ParseScenarioRequest, ai: AIService = Depends(get_ai_service)):
    if len(body.input) < MIN_SCENARIO_CHARS:
        raise HTTPException(
            status_code=400,
            detail=f"Please provide more context (at least {MIN_SCENARIO_CHARS} characters)",
        )
    _require_ai(ai)
    try:
        return ai.parse_scenario(body.input, body.source_type)
    except AIServiceError as e:
        logger.error("Parse scenario error: %s", e)
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.post("/extract-content", response_model=ExtractedContent)
async def extract_content(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    extractor: ContentExtractor = Depends(get_extractor),
):
    try:
        if file is not None:
            data = await file.read()
            text = await run_in_threadpool(extractor.from_upload, data, file.content_type)
        elif url:
            text = await run_in_threadpool(extractor.from_url, url)
        else:
            raise HTTPException(status_code=400, detail="No file or URL provided")
    except ContentExtractionError as e:
        logger.warning("Content extraction rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ExtractedContent(text=text)


# -------- Hints --------
@router.post("/hint", response_model=HintResponse)
def hint(body: HintRequest, ai: AIService = Depends(get_ai_service)):
    _require_ai(ai)
    try:
        return HintResponse(hint=ai.generate_hint(body.framework, body.scenario, body.inputs))
    except AIServiceError as e:
        logger.error("Hint generation error: %s", e)
        raise HTTPException(status_code=502, detail="Failed to generate hint. Please try again.") from e


@router.post("/input-hints", response_model=InputHintsResponse)
def input_hints(body: InputHintsRequest, ai: AIService = Depends(get_ai_service)):
    _require_ai(ai)
    try:
        hints = ai.generate_input_hints(body.framework, body.scenario)
    except AIServiceError as e:
        logger.error("Input hints generation error: %s", e)
        raise HTTPException(status_code=502, detail="Failed to generate hints. Please try again.") from e
    return InputHintsResponse(framework=body.framework, hints=hints)


# -------- Analysis & feedback --------
@router.post("/analyze", response_model=FinalAnalysis)
def analyze(body: AnalyzeRequest, ai: AIService = Depends(get_ai_service)):
    if ai.enabled:
        try:
            return ai.analyze_results(body.scenario, body.stance, body.frameworks)
        except AIServiceError as e:
            logger.warning("AI analysis failed, using local calculation: %s", e)
    return compute_analysis(body.frameworks)


@router.post("/feedback", response_model=list[FeedbackItem])
def feedback(body: FeedbackRequest, ai: AIService = Depends(get_ai_service)):
    if ai.enabled:
        try:
            return ai.provide_feedback(body.scenario, body.stance, body.analysis)
        except AIServiceError as e:
            logger.warning("AI feedback failed, using local generation: %s", e)
    return compute_local_feedback(
        body.stance.decision,
        body.stance.reasoning,
        body.analysis.primary_recommendation,
    )


def create_app(
    settings: Optional[Settings] = None,
    ai_service: Optional[AIService] = None,
    extractor: Optional[ContentExtractor] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ai = app.state.ai_service
        logger.info(
            "Starting %s (AI provider: %s)",
            settings.app_name,
            ai.config.provider if ai.enabled else "disabled, local fallback only",
        )
        yield
        app.state.extractor.close()
        logger.info("Shutting down %s...", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ai_service = ai_service or AIService(settings.ai_config())
    app.state.extractor = extractor or ContentExtractor(settings)

    # -------- CORS --------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------- API Key protection --------
    @app.middleware("http")
    async def check_api_key(request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path == "/":  # preflight, health
            return await call_next(request)

        if settings.api_key:  # only check if API_KEY is set
            if request.headers.get("x-api-key") != settings.api_key:
                return JSONResponse(status_code=403, content={"detail": "Forbidden"})

        return await call_next(request)

    # -------- Health check --------
    @app.get("/")
    def home():
        return {"message": "Backend is working", "version": settings.app_version}

    app.include_router(router)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("decision_lab.main:app", host="0.0.0.0", port=8000, reload=True)
