"""FastAPI application for code-vuln-analyzer."""

import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from .analyzer import CodeAnalyzer
from .config import get_settings, selectable_models
from .errors import MissingCredentialError, RateLimitedError, RemoteAnalysisError
from .models import AnalyzeResponse, EnhanceResponse, Severity, SourceFile
from .report import build_response
from .samples import SAMPLE_FILES, generate_sample_file

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Code Vulnerability Analyzer",
    description="Detects security code smells in a source file with an LLM and a local rule-scan fallback",
    version="0.1.0",
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8000",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

analyzer = CodeAnalyzer()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/models")
async def models():
    """List the models that can be selected for remote analysis."""
    settings = get_settings()
    return {
        "default": settings.default_model,
        "models": [
            {"id": model_id, "label": label}
            for model_id, label in selectable_models(settings).items()
        ],
    }


@app.get("/samples/{file_type}")
async def sample(file_type: str):
    """Return a deliberately vulnerable sample file."""
    if file_type.lower() not in SAMPLE_FILES:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown sample type '{file_type}'. Available: {sorted(SAMPLE_FILES)}",
        )
    source = generate_sample_file(file_type)
    return {"file_name": source.name, "content": source.text()}


def _check_model(model: str | None) -> None:
    allowed = selectable_models(get_settings())
    if model and model not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid model '{model}'. Available: {sorted(allowed)}",
        )


def _parse_severities(severities: list[str] | None) -> list[Severity]:
    try:
        return [Severity(s.strip().lower()) for s in severities or [] if s.strip()]
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid severity in {severities}. Available: {[s.value for s in Severity]}",
        )


async def _read_source(file: UploadFile) -> SourceFile:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file selected")

    contents = await file.read()
    if len(contents) == 0:
        raise HTTPException(status_code=400, detail="Empty file")

    return SourceFile(name=file.filename, content=contents)


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    file: UploadFile = File(...),
    model: str | None = Form(default=None),
    severities: list[str] | None = Form(default=None),
) -> AnalyzeResponse:
    """
    Analyze an uploaded source file for security issues.

    - **file**: The source file (.js, .jsx, .ts, .tsx, .py, .java)
    - **model**: Optional OpenRouter model id (see /models)
    - **severities**: Optional severities to keep (repeat the field); all by default
    """
    _check_model(model)
    selected = _parse_severities(severities)
    source = await _read_source(file)
    logger.info(f"Analyzing file: {source.name} ({source.language.value})")

    try:
        outcome = await analyzer.run(source, model)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File is not valid UTF-8 text")
    except Exception as e:
        logger.error(f"Analysis failed: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")

    return build_response(source, outcome, selected)


@app.post("/enhance", response_model=EnhanceResponse)
async def enhance(
    file: UploadFile = File(...),
    model: str | None = Form(default=None),
) -> EnhanceResponse:
    """
    Ask the remote model for an improved version of an uploaded file.

    - **file**: The source file
    - **model**: Optional OpenRouter model id (see /models)

    Requires an OpenRouter API key; there is no local fallback.
    """
    _check_model(model)
    source = await _read_source(file)
    logger.info(f"Enhancing file: {source.name}")

    try:
        return await analyzer.enhance(source, model)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File is not valid UTF-8 text")
    except MissingCredentialError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RateLimitedError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except RemoteAnalysisError as e:
        logger.error(f"Enhancement failed: {e}")
        raise HTTPException(status_code=502, detail=f"Enhancement failed: {str(e)}")
