# src/inkwell/api/v1/endpoints/media.py
"""Endpoints for the image-upload and writing-assistant collaborators."""

from typing import Annotated

from fastapi import APIRouter, Depends

from inkwell.api.v1.dependencies import CurrentUserDep
from inkwell.schemas.media import (
    AssistantResponse,
    GenerateContentRequest,
    ImproveContentRequest,
    UploadAuthResponse,
)
from inkwell.services.media import upload_auth_params
from inkwell.services.writing_assistant import WritingAssistantClient, get_writing_assistant

router = APIRouter(tags=["media"])


def get_writing_assistant_dep() -> WritingAssistantClient:
    """Return the shared writing assistant client."""
    return get_writing_assistant()


AssistantDep = Annotated[WritingAssistantClient, Depends(get_writing_assistant_dep)]


@router.get("/media/upload-auth", response_model=UploadAuthResponse)
async def get_upload_auth(current_user: CurrentUserDep) -> UploadAuthResponse:
    """Issue signed parameters for a direct image upload."""
    params = upload_auth_params()
    return UploadAuthResponse(
        token=params.token,
        expire=params.expire,
        signature=params.signature,
        public_key=params.public_key,
    )


@router.post("/assistant/generate", response_model=AssistantResponse)
async def generate_content(
    payload: GenerateContentRequest,
    current_user: CurrentUserDep,
    assistant: AssistantDep,
) -> AssistantResponse:
    """Draft a post body from its title, category and tags."""
    content = await assistant.generate_post_content(payload.title, payload.category, payload.tags)
    return AssistantResponse(content=content)


@router.post("/assistant/improve", response_model=AssistantResponse)
async def improve_content(
    payload: ImproveContentRequest,
    current_user: CurrentUserDep,
    assistant: AssistantDep,
) -> AssistantResponse:
    """Rewrite an existing post body."""
    content = await assistant.improve_content(payload.content, payload.mode)
    return AssistantResponse(content=content)
