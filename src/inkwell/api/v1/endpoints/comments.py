# src/inkwell/api/v1/endpoints/comments.py
"""Comment endpoints."""

from fastapi import APIRouter, Response, status

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.schemas.comment import CommentCreate, CommentResponse
from inkwell.services import comment_service
from inkwell.services.post_service import author_snapshot

router = APIRouter(tags=["comments"])


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a published post."""
    comment = comment_service.add_comment(db, post_id, current_user, comment_data.comment)
    out = CommentResponse.model_validate(comment)
    return out.model_copy(update={"author": author_snapshot(current_user)})


@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: int, db: SessionDep) -> list[CommentResponse]:
    """List the approved comments of a post, oldest first."""
    return comment_service.get_post_comments(db, post_id)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete a comment written by the caller or left on the caller's post."""
    comment_service.delete_comment(db, comment_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
