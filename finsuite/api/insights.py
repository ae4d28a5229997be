"""
AI insight API endpoints: concept explanations and document feasibility.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, status
from pydantic import BaseModel

from finsuite.auth.dependencies import get_current_user
from finsuite.config import get_settings
from finsuite.services.documents import (
    DocumentExtractionError,
    UnsupportedDocumentError,
    extract_text,
)
from finsuite.services.feasibility import InvalidModelResponseError
from finsuite.services.genai import (
    SUGGESTED_TOPICS,
    AIServiceError,
    AIServiceNotConfiguredError,
    GenAIService,
    get_genai_service,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(dependencies=[Depends(get_current_user)])


class ExplainRequest(BaseModel):
    topic: str


class ExplainResponse(BaseModel):
    topic: str
    explanation: str  # markdown


class FeasibilityResponse(BaseModel):
    filename: str
    feasibility_percentage: float
    explanation: str  # markdown


def ai_error_to_http(e: Exception) -> HTTPException:
    """Map AI service failures to HTTP errors."""
    if isinstance(e, AIServiceNotConfiguredError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if isinstance(e, InvalidModelResponseError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"{e}. Raw response:\n{e.preview}",
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Failed to reach the AI service. {e}",
    )


@router.get("/topics", response_model=List[str])
async def list_topics():
    """Suggested topics for the concept explainer."""
    return SUGGESTED_TOPICS


@router.post("/explain", response_model=ExplainResponse)
async def explain_concept(
    request: ExplainRequest,
    service: GenAIService = Depends(get_genai_service),
):
    """Explain a financial concept in markdown."""
    if not request.topic.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter a topic.",
        )

    try:
        explanation = await service.explain_concept(request.topic)
    except (AIServiceNotConfiguredError, AIServiceError) as e:
        raise ai_error_to_http(e)

    return ExplainResponse(topic=request.topic.strip(), explanation=explanation)


@router.post("/feasibility", response_model=FeasibilityResponse)
async def analyze_feasibility(
    file: UploadFile = File(...),
    service: GenAIService = Depends(get_genai_service),
):
    """Score an uploaded requirements document (PDF, DOCX or TXT)."""
    # One byte past the limit is enough to detect an oversized upload
    data = await file.read(settings.max_upload_bytes + 1)

    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_bytes // (1024 * 1024)}MB upload limit.",
        )

    try:
        text = extract_text(file.filename, data, file.content_type)
    except UnsupportedDocumentError as e:
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e))
    except DocumentExtractionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        result = await service.analyze_feasibility(text)
    except (AIServiceNotConfiguredError, AIServiceError, InvalidModelResponseError) as e:
        logger.warning(f"Feasibility analysis failed for {file.filename}: {e}")
        raise ai_error_to_http(e)

    return FeasibilityResponse(
        filename=file.filename,
        feasibility_percentage=result.feasibility_percentage,
        explanation=result.explanation,
    )
