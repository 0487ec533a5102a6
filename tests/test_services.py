"""
Tests for the admin write services.
"""
import json
from datetime import timedelta

import pytest
from django.utils import timezone

from blog_cms import services
from blog_cms.exceptions import NotFound, ValidationError
from blog_cms.models import Author, Category, Post, PostAuthor, Tag


@pytest.fixture
def payload(author):
    return {
        "title": "Hello, World! 2024",
        "excerpt": "A greeting.",
        "content": "word " * 250,
        "authorIds": [author.id],
        "tags": ["python"],
        "categoryId": "tech",
        "status": "published",
    }


class TestCreatePost:
    def test_create_post(self, db, payload, author):
        post = services.create_post(payload)

        assert post.slug == "hello-world-2024"
        assert post.status == Post.STATUS_PUBLISHED
        assert post.published_at is not None
        assert post.reading_time == 2
        assert post.tags == ["python"]
        assert post.category_id == "tech"
        assert post.author == "Ada Lovelace"
        assert post.primary_author_id == author.id
        assert post.meta_title == payload["title"]
        assert post.meta_description == payload["excerpt"]

    def test_draft_has_no_published_at(self, db, payload):
        payload["status"] = "draft"
        post = services.create_post(payload)
        assert post.published_at is None

    def test_defaults(self, db, payload):
        del payload["status"], payload["categoryId"], payload["tags"]
        post = services.create_post(payload)
        assert post.status == Post.STATUS_PUBLISHED
        assert post.category_id == "general"
        assert post.tags == []

    def test_author_order(self, db, payload, author, second_author):
        payload["authorIds"] = [second_author.id, author.id]
        post = services.create_post(payload)

        links = PostAuthor.objects.filter(post=post).order_by("order")
        assert [(link.author_id, link.order) for link in links] == [
            (second_author.id, 0),
            (author.id, 1),
        ]
        assert post.author == "Grace Hopper"

    @pytest.mark.parametrize("field", ["title", "excerpt", "content"])
    def test_required_text_fields(self, db, payload, field):
        payload[field] = "  "
        with pytest.raises(ValidationError, match="required"):
            services.create_post(payload)
        assert not Post.objects.exists()

    @pytest.mark.parametrize("author_ids", [None, [], "abc"])
    def test_requires_authors(self, db, payload, author_ids):
        payload["authorIds"] = author_ids
        with pytest.raises(ValidationError, match="author"):
            services.create_post(payload)

    def test_unknown_author(self, db, payload):
        payload["authorIds"] = ["nope"]
        with pytest.raises(ValidationError, match="nope"):
            services.create_post(payload)
        assert not Post.objects.exists()

    def test_invalid_status(self, db, payload):
        payload["status"] = "live"
        with pytest.raises(ValidationError, match="status"):
            services.create_post(payload)

    def test_tags_as_json_string(self, db, payload):
        payload["tags"] = json.dumps(["a", "b"])
        assert services.create_post(payload).tags == ["a", "b"]

    @pytest.mark.parametrize("field", ["status", "categoryId", "featuredImage"])
    def test_non_string_values_rejected(self, db, payload, field):
        payload[field] = ["published"]
        with pytest.raises(ValidationError, match=field):
            services.create_post(payload)
        assert not Post.objects.exists()

    def test_flags(self, db, payload):
        payload.update(featured=True, sticky=False, allowComments=False)
        post = services.create_post(payload)
        assert (post.featured, post.sticky, post.allow_comments) == (True, False, False)

    @pytest.mark.parametrize("value", ["false", 0, None])
    def test_flags_must_be_booleans(self, db, payload, value):
        payload["featured"] = value
        with pytest.raises(ValidationError, match="featured"):
            services.create_post(payload)
        assert not Post.objects.exists()

    def test_duplicate_title_gets_unique_slug(self, db, payload):
        first = services.create_post(payload)
        second = services.create_post(payload)
        assert first.slug == "hello-world-2024"
        assert second.slug != first.slug
        assert second.slug.startswith("hello-world-2024-")

    def test_recomputes_counts(self, db, payload, author):
        category = Category.objects.create(id="tech", name="Technology")
        tag = Tag.objects.create(id="python", name="Python")

        services.create_post(payload)

        author.refresh_from_db()
        category.refresh_from_db()
        tag.refresh_from_db()
        assert (author.post_count, category.post_count, tag.post_count) == (1, 1, 1)


class TestUpdatePost:
    def test_unknown_post(self, db, payload):
        with pytest.raises(NotFound):
            services.update_post("missing", payload)

    def test_slug_kept_when_title_unchanged(self, db, payload):
        post = services.create_post(payload)
        payload["content"] = "Shorter now."
        updated = services.update_post(post.id, payload)
        assert updated.slug == "hello-world-2024"
        assert updated.reading_time == 1

    def test_slug_regenerated_when_title_changes(self, db, payload):
        post = services.create_post(payload)
        payload["title"] = "A Brand New Title"
        assert services.update_post(post.id, payload).slug == "a-brand-new-title"

    def test_draft_to_published_sets_published_at(self, db, payload):
        payload["status"] = "draft"
        post = services.create_post(payload)
        assert post.published_at is None

        payload["status"] = "published"
        updated = services.update_post(post.id, payload)
        assert updated.published_at is not None

    def test_published_at_unchanged_on_republish(self, db, payload):
        post = services.create_post(payload)
        original = timezone.now() - timedelta(days=30)
        Post.objects.filter(pk=post.pk).update(published_at=original)

        payload["excerpt"] = "Edited excerpt."
        services.update_post(post.id, payload)

        post.refresh_from_db()
        assert post.published_at == original
        assert post.excerpt == "Edited excerpt."

    def test_replaces_authors(self, db, payload, author, second_author):
        post = services.create_post(payload)
        payload["authorIds"] = [second_author.id]
        services.update_post(post.id, payload)

        assert post.ordered_authors == [second_author]
        author.refresh_from_db()
        second_author.refresh_from_db()
        assert author.post_count == 0
        assert second_author.post_count == 1

    def test_validation_failure_changes_nothing(self, db, payload):
        post = services.create_post(payload)
        payload["title"] = ""
        with pytest.raises(ValidationError):
            services.update_post(post.id, payload)
        post.refresh_from_db()
        assert post.title == "Hello, World! 2024"

    def test_category_counts_follow_the_post(self, db, payload):
        old = Category.objects.create(id="tech", name="Technology")
        new = Category.objects.create(id="design", name="Design")
        post = services.create_post(payload)

        payload["categoryId"] = "design"
        services.update_post(post.id, payload)

        old.refresh_from_db()
        new.refresh_from_db()
        assert (old.post_count, new.post_count) == (0, 1)

    def test_failed_write_rolls_back(self, db, payload, author, second_author, monkeypatch):
        post = services.create_post(payload)

        def fail(*args, **kwargs):
            raise RuntimeError("count failed")

        monkeypatch.setattr(services, "refresh_post_counts", fail)
        payload.update(title="Renamed", authorIds=[second_author.id])
        with pytest.raises(RuntimeError):
            services.update_post(post.id, payload)

        post.refresh_from_db()
        assert (post.title, post.slug, post.author) == ("Hello, World! 2024", "hello-world-2024", "Ada Lovelace")
        assert post.ordered_authors == [author]


class TestDeletePost:
    def test_delete_post(self, db, payload, author):
        post = services.create_post(payload)
        services.delete_post(post.id)

        assert not Post.objects.filter(pk=post.pk).exists()
        assert not PostAuthor.objects.exists()
        author.refresh_from_db()
        assert author.post_count == 0

    def test_unknown_post(self, db):
        with pytest.raises(NotFound):
            services.delete_post("missing")


class TestCreateAuthor:
    def test_create_author(self, db):
        author = services.create_author({
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "title": "Analyst",
            "twitter": "",
        })
        assert author.slug == "ada-lovelace"
        assert author.title == "Analyst"
        assert author.twitter is None
        assert author.post_count == 0

    def test_same_name_gets_distinct_slug(self, db):
        first = services.create_author({"name": "Ada Lovelace", "email": "ada@example.com"})
        second = services.create_author({"name": "Ada Lovelace", "email": "ada2@example.com"})

        assert first.slug == "ada-lovelace"
        assert second.slug.startswith("ada-lovelace-")
        assert len(second.slug) == len("ada-lovelace-") + 5

    def test_duplicate_email_rejected(self, db):
        services.create_author({"name": "Ada Lovelace", "email": "ada@example.com"})
        with pytest.raises(ValidationError, match="email"):
            services.create_author({"name": "Someone Else", "email": "ada@example.com"})
        assert Author.objects.count() == 1

    @pytest.mark.parametrize("data", [{"name": "Ada"}, {"email": "ada@example.com"}, {}])
    def test_name_and_email_required(self, db, data):
        with pytest.raises(ValidationError, match="required"):
            services.create_author(data)
        assert not Author.objects.exists()
