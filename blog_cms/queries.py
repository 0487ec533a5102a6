"""
Read-side queries for django-blog-cms.

Every public-facing query only returns published posts. Listings are
ordered newest first by ``published_at``; search results use the same
order and are not ranked.
"""
import logging

from django.db.models import F, Q

from .conf import blog_settings
from .models import Author, Category, Post, PostAuthor, Tag

logger = logging.getLogger(__name__)


def published_posts():
    """Base queryset for everything the public site shows."""
    return Post.objects.published().newest_first()


def get_all_published_posts():
    return list(published_posts())


def get_post_by_slug(slug):
    """Return the published post with this slug, or None."""
    return Post.objects.published().filter(slug=slug).first()


def get_post_by_id(post_id):
    """Return a post of any status, or None. For admin use."""
    return Post.objects.filter(pk=post_id).first()


def get_all_post_slugs():
    """Slugs of published posts, used to pre-render detail pages."""
    return list(Post.objects.published().values_list("slug", flat=True))


def search_posts(query):
    """
    Published posts whose title or body contains ``query``.

    Matching is a case-insensitive substring scan; a hit in the body
    alone is enough.
    """
    query = (query or "").strip()
    if not query:
        return []
    return list(
        published_posts().filter(Q(title__icontains=query) | Q(content__icontains=query))
    )


def get_posts_by_category(category_id):
    return list(published_posts().filter(category_id=category_id))


def get_posts_by_tag(tag_id):
    """
    Published posts whose tag list contains ``tag_id``.

    Tag lists live on each post, so every published post is checked.
    """
    return [post for post in published_posts() if tag_id in (post.tags or [])]


def get_featured_posts(limit=None):
    limit = limit or blog_settings.FEATURED_POSTS_LIMIT
    return list(published_posts().filter(featured=True)[:limit])


def get_related_posts(post_id, limit=None):
    """Other published posts in the same category as ``post_id``."""
    limit = limit or blog_settings.RELATED_POSTS_LIMIT
    post = get_post_by_id(post_id)
    if post is None:
        return []
    return list(
        published_posts()
        .filter(category_id=post.category_id)
        .exclude(pk=post.pk)[:limit]
    )


def get_popular_posts(limit=None):
    limit = limit or blog_settings.POPULAR_POSTS_LIMIT
    return list(Post.objects.published().order_by("-views", "-published_at")[:limit])


def get_recent_posts(limit=None):
    limit = limit or blog_settings.RECENT_POSTS_LIMIT
    return list(published_posts()[:limit])


def increment_post_views(post_id):
    """
    Add one view to a post.

    Best effort: a failed increment is logged and never breaks the page.
    """
    try:
        Post.objects.filter(pk=post_id).update(views=F("views") + 1)
    except Exception:
        logger.warning("Could not increment views for post %s", post_id, exc_info=True)


# Authors

def get_authors_for_post(post_id):
    """Authors of a post, primary author first."""
    links = PostAuthor.objects.filter(post_id=post_id).select_related("author").order_by("order")
    return [link.author for link in links]


def get_posts_by_author(author_id):
    """Published posts the author is associated with, newest first."""
    return list(published_posts().filter(post_authors__author_id=author_id))


def get_all_authors():
    return list(Author.objects.order_by("name"))


def get_author_by_slug(slug):
    return Author.objects.filter(slug=slug).first()


def get_all_author_slugs():
    return list(Author.objects.values_list("slug", flat=True))


# Taxonomy

def get_all_categories():
    return list(Category.objects.order_by("order", "name"))


def get_category_by_slug(slug):
    return Category.objects.filter(slug=slug).first()


def get_all_tags():
    return list(Tag.objects.order_by("-post_count", "name"))


def get_tag_by_slug(slug):
    return Tag.objects.filter(slug=slug).first()
