"""Free-text HR assistant endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from casework.api.dependencies import get_annotator
from casework.services.annotation import AnnotationService

router = APIRouter(prefix="/ai", tags=["ai"])


class ChatRequest(BaseModel):
    question: str = Field(..., max_length=4000)

    @field_validator("question")
    @classmethod
    def validate_question(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Question cannot be empty")
        return value


class ChatResponse(BaseModel):
    response: str


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, annotator: AnnotationService = Depends(get_annotator)) -> ChatResponse:
    return ChatResponse(response=await annotator.generate_hr_response(payload.question))
