# src/inkwell/api/v1/endpoints/posts.py
"""Post lifecycle endpoints for the author's editor and dashboard."""

from fastapi import APIRouter, Query, Response, status

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.models import User
from inkwell.schemas.post import PostCreate, PostFields, PostResponse, PostStatus, PostUpdate
from inkwell.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Save the editor content as a draft or publish it directly."""
    post = post_service.create_post(db, current_user, post_data)
    return post_service.to_post_out(post, current_user)


@router.put("/draft", response_model=PostResponse)
async def save_draft(
    post_data: PostFields,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Create the caller's draft or patch the one in progress."""
    post = post_service.create_or_update_draft(db, current_user, post_data)
    return post_service.to_post_out(post, current_user)


@router.get("/draft", response_model=PostResponse | None)
async def get_draft(current_user: CurrentUserDep, db: SessionDep) -> PostResponse | None:
    """Return the caller's draft, or null when the draft slot is empty."""
    post = post_service.get_draft_post(db, current_user)
    if post is None:
        return None
    return post_service.to_post_out(post, current_user)


@router.get("/mine", response_model=list[PostResponse])
async def list_my_posts(
    current_user: CurrentUserDep,
    db: SessionDep,
    post_status: PostStatus | None = Query(None, alias="status", description="Filter by status"),
) -> list[PostResponse]:
    """List every post of the caller, newest first."""
    return post_service.get_user_posts(db, current_user, post_status)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> PostResponse:
    """Fetch a published post, or one of the caller's drafts, by id."""
    post = post_service.get_post_by_id(db, post_id, current_user)
    author = db.get(User, post.author_id)
    return post_service.to_post_out(post, author)


@router.post("/{post_id}/publish", response_model=PostResponse)
async def publish_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    post_data: PostUpdate | None = None,
) -> PostResponse:
    """Publish one of the caller's posts, applying an optional final patch."""
    post = post_service.publish(db, post_id, current_user, post_data)
    return post_service.to_post_out(post, current_user)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Apply a partial update to one of the caller's posts."""
    post = post_service.update_post(db, post_id, current_user, post_data)
    return post_service.to_post_out(post, current_user)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete one of the caller's posts with its engagement rows."""
    post_service.delete_post(db, post_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
