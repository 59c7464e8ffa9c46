"""
Critique endpoint
"""
import base64
import traceback
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from critic.models.requests import CritiqueRequest
from critic.services.critique_service import CritiqueService
from critic.services.extraction import InvalidCategoryError

router = APIRouter()


def get_critique_service() -> CritiqueService:
    return CritiqueService()


@router.post("/critique")
async def critique(payload: Any = Body(None), service: CritiqueService = Depends(get_critique_service)):
    """
    Critique an uploaded work, or answer a follow-up question about it

    Args:
        fileBufferBase64: Base64-encoded file bytes (required)
        bluntness: Tone hint, nominally 0-10 (default 5), passed through as given
        followUpQuestion: (Optional) Question about an already critiqued file
        category: (Optional) "writing", "art" or "music" (default "music")

    Returns:
        fileId: sha256 of the file bytes
        initialCritique: {expertAdvice, intermediateGaps, rookieConcepts}
        or followUpReply: Reply text for the follow-up question
    """
    # No body, a non-object body and an empty payload all count as missing
    if not isinstance(payload, dict) or not payload.get("fileBufferBase64"):
        return JSONResponse(status_code=400, content={"error": "fileBufferBase64 is required"})

    try:
        request = CritiqueRequest.model_validate(payload)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        file_buffer = base64.b64decode(request.fileBufferBase64)

        result = await service.generate_critique_with_context(
            request.category,
            file_buffer,
            request.bluntness,
            request.followUpQuestion
        )

        return JSONResponse(status_code=200, content=result)

    except InvalidCategoryError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        print(f"[ERROR] Critique failed: {e}")
        traceback.print_exc()
        return JSONResponse(status_code=500, content={"error": str(e)})
