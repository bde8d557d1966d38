"""Unit tests for the ORM models and their database constraints."""

import pytest
from sqlalchemy.exc import IntegrityError

from inkwell.models import Comment, DailyStat, Follow, Like, Post, User
from inkwell.models.post import POST_STATUS_DRAFT


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert User.__tablename__ == "user_account"
    assert Post.__tablename__ == "post"
    assert Comment.__tablename__ == "comment"
    assert Like.__tablename__ == "post_like"
    assert Follow.__tablename__ == "follow"
    assert DailyStat.__tablename__ == "daily_stat"


def test_draft_slot_index_is_partial_and_unique():
    """Only draft rows take part in the one-draft-per-author index."""
    index = next(ix for ix in Post.__table__.indexes if ix.name == "uq_post_author_draft")
    assert index.unique
    assert [c.name for c in index.columns] == ["author_id"]
    assert "draft" in str(index.dialect_options["sqlite"]["where"])


def test_second_draft_rejected_by_database(db_session, test_user, make_post, now):
    make_post(test_user, status=POST_STATUS_DRAFT)
    db_session.add(
        Post(
            author_id=test_user.id,
            status=POST_STATUS_DRAFT,
            created_at=now,
            updated_at=now,
        )
    )

    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_duplicate_like_rejected_by_database(db_session, test_user, make_post, now):
    post = make_post(test_user)
    db_session.add(Like(post_id=post.id, user_id=test_user.id, created_at=now))
    db_session.flush()
    db_session.add(Like(post_id=post.id, user_id=test_user.id, created_at=now))

    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_self_follow_rejected_by_database(db_session, test_user, now):
    db_session.add(Follow(follower_id=test_user.id, following_id=test_user.id, created_at=now))

    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()
