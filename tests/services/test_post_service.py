"""Tests for the post lifecycle: draft slot, publishing, patching and deletion."""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from inkwell.models import Comment, DailyStat, Like, Post
from inkwell.models.post import POST_STATUS_DRAFT, POST_STATUS_PUBLISHED
from inkwell.schemas.post import PostCreate, PostFields, PostUpdate
from inkwell.services import comment_service, engagement, post_service
from inkwell.services.errors import NotFoundError, UnauthorizedError, ValidationError


def _count_drafts(db_session, author_id: int) -> int:
    return db_session.execute(
        select(func.count())
        .select_from(Post)
        .where(Post.author_id == author_id, Post.status == POST_STATUS_DRAFT)
    ).scalar_one()


class TestDraftSlot:
    def test_first_save_creates_draft(self, db_session, test_user, now) -> None:
        post = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Hello"), now=now
        )

        assert post.id is not None
        assert post.status == POST_STATUS_DRAFT
        assert post.title == "Hello"
        assert post.content == ""
        assert post.tags == []
        assert post.published_at is None
        assert post.view_count == 0
        assert post.like_count == 0

    def test_second_save_patches_existing_draft(self, db_session, test_user, now) -> None:
        first = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Hello", content="<p>one</p>"), now=now
        )
        second = post_service.create_or_update_draft(
            db_session,
            test_user,
            PostFields(content="<p>two</p>"),
            now=now + timedelta(minutes=5),
        )

        assert second.id == first.id
        assert second.title == "Hello"
        assert second.content == "<p>two</p>"
        assert _count_drafts(db_session, test_user.id) == 1

    def test_get_draft_post_returns_current_draft(self, db_session, test_user, now) -> None:
        assert post_service.get_draft_post(db_session, test_user) is None

        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Draft"), now=now
        )

        assert post_service.get_draft_post(db_session, test_user).id == draft.id

    def test_drafts_are_per_author(self, db_session, test_user, other_user, now) -> None:
        mine = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Mine"), now=now
        )
        theirs = post_service.create_or_update_draft(
            db_session, other_user, PostFields(title="Theirs"), now=now
        )

        assert mine.id != theirs.id

    def test_too_many_tags_rejected(self, db_session, test_user, now) -> None:
        tags = [f"tag{i}" for i in range(11)]
        with pytest.raises(ValidationError):
            post_service.create_or_update_draft(
                db_session, test_user, PostFields(title="Tags", tags=tags), now=now
            )

    def test_tags_are_normalized(self, db_session, test_user, now) -> None:
        post = post_service.create_or_update_draft(
            db_session,
            test_user,
            PostFields(title="Tags", tags=[" python ", "python", "", "web"]),
            now=now,
        )

        assert post.tags == ["python", "web"]


class TestCreatePost:
    def test_draft_status_goes_to_draft_slot(self, db_session, test_user, now) -> None:
        first = post_service.create_post(db_session, test_user, PostCreate(title="A"), now=now)
        second = post_service.create_post(db_session, test_user, PostCreate(title="B"), now=now)

        assert first.id == second.id
        assert second.title == "B"

    def test_publish_consumes_existing_draft(self, db_session, test_user, now) -> None:
        draft = post_service.create_post(db_session, test_user, PostCreate(title="A"), now=now)

        post = post_service.create_post(
            db_session,
            test_user,
            PostCreate(title="Final", content="<p>done</p>", status="published"),
            now=now,
        )

        assert post.id == draft.id
        assert post.status == POST_STATUS_PUBLISHED
        assert post.published_at == now
        assert post_service.get_draft_post(db_session, test_user) is None

    def test_publish_without_draft_inserts_published_post(self, db_session, test_user, now) -> None:
        post = post_service.create_post(
            db_session,
            test_user,
            PostCreate(title="Straight out", status="published"),
            now=now,
        )

        assert post.status == POST_STATUS_PUBLISHED
        assert post.published_at == now
        assert _count_drafts(db_session, test_user.id) == 0

    def test_publish_requires_title(self, db_session, test_user, now) -> None:
        with pytest.raises(ValidationError):
            post_service.create_post(
                db_session, test_user, PostCreate(title="   ", status="published"), now=now
            )

        assert post_service.get_user_posts(db_session, test_user) == []


class TestPublish:
    def test_publish_sets_published_at_once(self, db_session, test_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Hello"), now=now
        )

        published = post_service.publish(db_session, draft.id, test_user, now=now)
        assert published.status == POST_STATUS_PUBLISHED
        assert published.published_at == now

        again = post_service.publish(
            db_session, draft.id, test_user, now=now + timedelta(days=1)
        )
        assert again.published_at == now
        assert again.updated_at == now + timedelta(days=1)

    def test_publish_applies_final_patch(self, db_session, test_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Working title"), now=now
        )

        published = post_service.publish(
            db_session,
            draft.id,
            test_user,
            PostUpdate(title="Final title", category="Tech"),
            now=now,
        )

        assert published.title == "Final title"
        assert published.category == "Tech"

    def test_publish_frees_draft_slot(self, db_session, test_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="First"), now=now
        )
        post_service.publish(db_session, draft.id, test_user, now=now)

        new_draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Second"), now=now
        )

        assert new_draft.id != draft.id

    def test_publish_missing_post(self, db_session, test_user, now) -> None:
        with pytest.raises(NotFoundError):
            post_service.publish(db_session, 9999, test_user, now=now)

    def test_publish_by_non_author(self, db_session, test_user, other_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Mine"), now=now
        )

        with pytest.raises(UnauthorizedError):
            post_service.publish(db_session, draft.id, other_user, now=now)
        assert draft.status == POST_STATUS_DRAFT

    def test_publish_without_title_leaves_draft_untouched(self, db_session, test_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(content="<p>text</p>"), now=now
        )

        with pytest.raises(ValidationError):
            post_service.publish(db_session, draft.id, test_user, now=now)
        assert draft.status == POST_STATUS_DRAFT
        assert draft.published_at is None


class TestUpdatePost:
    def test_partial_patch_keeps_other_fields(self, db_session, test_user, make_post, now) -> None:
        post = make_post(test_user, title="Original", content="<p>body</p>", tags=["a"])

        updated = post_service.update_post(
            db_session, post.id, test_user, PostUpdate(title="Renamed"), now=now
        )

        assert updated.title == "Renamed"
        assert updated.content == "<p>body</p>"
        assert updated.tags == ["a"]

    def test_update_to_published(self, db_session, test_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Draft"), now=now
        )

        updated = post_service.update_post(
            db_session, draft.id, test_user, PostUpdate(status="published"), now=now
        )

        assert updated.status == POST_STATUS_PUBLISHED
        assert updated.published_at == now

    def test_unpublish_refused_while_other_draft_exists(
        self, db_session, test_user, make_post, now
    ) -> None:
        published = make_post(test_user, title="Live")
        post_service.create_or_update_draft(db_session, test_user, PostFields(title="WIP"), now=now)

        with pytest.raises(ValidationError):
            post_service.update_post(
                db_session, published.id, test_user, PostUpdate(status="draft"), now=now
            )
        assert published.status == POST_STATUS_PUBLISHED

    def test_unpublish_allowed_when_slot_free(self, db_session, test_user, make_post, now) -> None:
        published = make_post(test_user, title="Live")

        updated = post_service.update_post(
            db_session, published.id, test_user, PostUpdate(status="draft"), now=now
        )

        assert updated.status == POST_STATUS_DRAFT
        assert post_service.get_draft_post(db_session, test_user).id == published.id

    def test_update_by_non_author(self, db_session, test_user, other_user, make_post, now) -> None:
        post = make_post(test_user)

        with pytest.raises(UnauthorizedError):
            post_service.update_post(db_session, post.id, other_user, PostUpdate(title="x"), now=now)


class TestDeletePost:
    def test_delete_cascades_engagement(
        self, db_session, test_user, other_user, make_post, now
    ) -> None:
        post = make_post(test_user)
        engagement.toggle_like(db_session, post.id, other_user, now=now)
        comment_service.add_comment(db_session, post.id, other_user, "Nice", now=now)
        engagement.record_view(db_session, post.id, now=now)

        post_service.delete_post(db_session, post.id, test_user)

        assert db_session.get(Post, post.id) is None
        for model in (Like, Comment, DailyStat):
            remaining = db_session.execute(
                select(func.count()).select_from(model).where(model.post_id == post.id)
            ).scalar_one()
            assert remaining == 0

    def test_delete_by_non_author(self, db_session, test_user, other_user, make_post) -> None:
        post = make_post(test_user)

        with pytest.raises(UnauthorizedError):
            post_service.delete_post(db_session, post.id, other_user)
        assert db_session.get(Post, post.id) is not None

    def test_delete_missing_post(self, db_session, test_user) -> None:
        with pytest.raises(NotFoundError):
            post_service.delete_post(db_session, 4242, test_user)


class TestReads:
    def test_get_post_by_id_returns_own_draft(self, db_session, test_user, now) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Hidden"), now=now
        )

        assert post_service.get_post_by_id(db_session, draft.id, test_user).id == draft.id

    def test_get_post_by_id_hides_other_authors_draft(
        self, db_session, test_user, other_user, now
    ) -> None:
        draft = post_service.create_or_update_draft(
            db_session, test_user, PostFields(title="Hidden"), now=now
        )

        with pytest.raises(NotFoundError):
            post_service.get_post_by_id(db_session, draft.id, other_user)

    def test_get_post_by_id_published_visible_to_others(
        self, db_session, test_user, other_user, make_post
    ) -> None:
        post = make_post(test_user)

        assert post_service.get_post_by_id(db_session, post.id, other_user).id == post.id

    def test_get_post_by_id_missing(self, db_session, test_user) -> None:
        with pytest.raises(NotFoundError):
            post_service.get_post_by_id(db_session, 123, test_user)

    def test_get_user_posts_newest_first_with_author(
        self, db_session, test_user, make_post, now
    ) -> None:
        older = make_post(test_user, title="Older", created_at=now - timedelta(days=2))
        newer = make_post(test_user, title="Newer", created_at=now - timedelta(days=1))

        posts = post_service.get_user_posts(db_session, test_user)

        assert [p.id for p in posts] == [newer.id, older.id]
        assert posts[0].author.username == "test_user"

    def test_get_user_posts_filters_by_status(self, db_session, test_user, make_post) -> None:
        make_post(test_user, title="Live")
        draft = make_post(test_user, title="WIP", status=POST_STATUS_DRAFT)

        drafts = post_service.get_user_posts(db_session, test_user, POST_STATUS_DRAFT)

        assert [p.id for p in drafts] == [draft.id]
