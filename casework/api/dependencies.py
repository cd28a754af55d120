from __future__ import annotations

from fastapi import Request

from casework.services.annotation import AnnotationService
from casework.storage.base import Storage


async def get_storage(request: Request) -> Storage:
    return request.app.state.storage


async def get_annotator(request: Request) -> AnnotationService:
    return request.app.state.annotator
