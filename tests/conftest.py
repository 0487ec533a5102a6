"""
Shared fixtures for django-blog-cms tests.
"""
from datetime import timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from blog_cms.models import Author, Category, Post, Tag


@pytest.fixture(autouse=True)
def clear_cache():
    """Cached pages must not leak between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def author(db):
    """Create a test author."""
    return Author.objects.create(
        name="Ada Lovelace",
        slug="ada-lovelace",
        email="ada@example.com",
    )


@pytest.fixture
def second_author(db):
    return Author.objects.create(
        name="Grace Hopper",
        slug="grace-hopper",
        email="grace@example.com",
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(id="tech", name="Technology", slug="technology")


@pytest.fixture
def tag(db):
    return Tag.objects.create(id="python", name="Python", slug="python")


@pytest.fixture
def make_post(db):
    """
    Factory for posts.

    ``age_days`` pushes ``published_at`` into the past so ordering is
    deterministic.
    """
    def _make_post(title="Test Post", status=Post.STATUS_PUBLISHED, age_days=0, authors=(), **kwargs):
        kwargs.setdefault("excerpt", "An excerpt.")
        kwargs.setdefault("content", "This is a test post body.")
        if status == Post.STATUS_PUBLISHED:
            kwargs.setdefault("published_at", timezone.now() - timedelta(days=age_days))
        post = Post.objects.create(title=title, status=status, **kwargs)
        if authors:
            post.set_authors(list(authors))
        return post

    return _make_post


@pytest.fixture
def post(make_post, author, category):
    """A published post in the tech category."""
    return make_post(
        title="Test Post",
        category_id=category.id,
        tags=["python"],
        authors=[author],
    )
