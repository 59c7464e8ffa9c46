"""
Pydantic request/response models
"""
from pydantic import BaseModel
from typing import Any, Optional


class CritiqueRequest(BaseModel):
    fileBufferBase64: Optional[str] = None
    bluntness: Any = 5  # intended 0-10, passed through as given
    followUpQuestion: Optional[str] = None
    category: str = "music"  # "writing", "art" or "music"


class CritiqueResult(BaseModel):
    expertAdvice: str = ""
    intermediateGaps: str = ""
    rookieConcepts: str = ""
