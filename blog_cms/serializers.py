"""
Turn model instances into the plain dicts consumed by templates and JSON views.

Keys are camelCase to match what the admin UI and the search box expect.
"""
from django.utils import timezone

from .utils import format_reading_time


def iso_date(value):
    """ISO 8601 string for a datetime, or None."""
    if not value:
        return None
    return value.isoformat()


def serialize_author(author):
    return {
        "id": author.id,
        "slug": author.slug,
        "name": author.name,
        "email": author.email,
        "bio": author.bio,
        "avatar": author.avatar,
        "title": author.title,
        "twitter": author.twitter,
        "linkedin": author.linkedin,
        "github": author.github,
        "website": author.website,
        "postCount": author.post_count,
        "createdAt": iso_date(author.created_at),
        "updatedAt": iso_date(author.updated_at),
    }


def serialize_post(post, authors=None):
    """
    Full view model for a published post.

    A post without ``published_at`` reports the current time, so templates
    always have a date to show.
    """
    data = {
        "id": post.id,
        "slug": post.slug,
        "title": post.title,
        "excerpt": post.excerpt,
        "content": post.content,
        "author": post.author,
        "publishedAt": iso_date(post.published_at) or timezone.now().isoformat(),
        "updatedAt": iso_date(post.updated_at),
        "featuredImage": post.featured_image or None,
        "tags": list(post.tags or []),
        "categories": [post.category_id],
        "readingTime": format_reading_time(post.content),
    }
    if authors is not None:
        data["authors"] = [serialize_author(author) for author in authors]
    return data


def serialize_post_metadata(post):
    """Listing view model: everything but the body."""
    data = serialize_post(post)
    del data["content"]
    return data


def serialize_search_result(post):
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "featuredImage": post.featured_image,
        "author": post.author,
        "publishedAt": iso_date(post.published_at),
    }


def serialize_admin_post(post, author_ids=None):
    """Every column of a post, for the admin editor."""
    data = {
        "id": post.id,
        "slug": post.slug,
        "title": post.title,
        "excerpt": post.excerpt,
        "content": post.content,
        "author": post.author,
        "authorId": post.primary_author_id,
        "metaTitle": post.meta_title,
        "metaDescription": post.meta_description,
        "metaKeywords": post.meta_keywords,
        "featuredImage": post.featured_image,
        "featuredImageAlt": post.featured_image_alt,
        "categoryId": post.category_id,
        "tags": post.tags,
        "status": post.status,
        "publishedAt": iso_date(post.published_at),
        "scheduledFor": iso_date(post.scheduled_for),
        "createdAt": iso_date(post.created_at),
        "updatedAt": iso_date(post.updated_at),
        "views": post.views,
        "likes": post.likes,
        "commentsCount": post.comments_count,
        "readingTime": post.reading_time,
        "featured": post.featured,
        "sticky": post.sticky,
        "allowComments": post.allow_comments,
    }
    if author_ids is not None:
        data["authorIds"] = list(author_ids)
    return data


def serialize_category(category):
    return {
        "id": category.id,
        "slug": category.slug,
        "name": category.name,
        "description": category.description,
        "icon": category.icon,
        "color": category.color,
        "order": category.order,
        "postCount": category.post_count,
    }


def serialize_tag(tag):
    return {
        "id": tag.id,
        "slug": tag.slug,
        "name": tag.name,
        "postCount": tag.post_count,
    }
