"""
Write operations behind the admin API.

Each operation validates its input, performs all of its steps inside one
transaction and recomputes the cached ``post_count`` of every author,
category and tag whose membership may have changed.
"""
import json
import logging

from django.db import transaction

from .conf import blog_settings
from .exceptions import NotFound, ValidationError
from .models import Author, Category, Post, Tag
from .utils import generate_slug, unique_slug

logger = logging.getLogger(__name__)

POST_STATUSES = {choice for choice, _ in Post.STATUS_CHOICES}


def _text(data, key):
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


def _parse_tags(value):
    """Accept a list of tag ids or the same list already JSON-encoded."""
    if value in (None, ""):
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValidationError("Tags must be a list")
    if not isinstance(value, list):
        raise ValidationError("Tags must be a list")
    return [str(tag) for tag in value]


def _load_authors(author_ids):
    """Fetch authors in the order given, rejecting unknown ids."""
    if not author_ids or not isinstance(author_ids, list):
        raise ValidationError("At least one author is required")

    ordered_ids = list(dict.fromkeys(str(author_id) for author_id in author_ids))
    found = Author.objects.in_bulk(ordered_ids)
    missing = [author_id for author_id in ordered_ids if author_id not in found]
    if missing:
        raise ValidationError(f"Unknown author id(s): {', '.join(missing)}")
    return [found[author_id] for author_id in ordered_ids]


def _optional_text(data, key, default=None):
    value = data.get(key)
    if value in (None, ""):
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def _validate_post(data):
    title = _text(data, "title")
    excerpt = _text(data, "excerpt")
    content = _text(data, "content")
    if not title.strip() or not excerpt.strip() or not content.strip():
        raise ValidationError("Title, excerpt, and content are required")

    authors = _load_authors(data.get("authorIds"))

    status = _optional_text(data, "status", blog_settings.DEFAULT_POST_STATUS)
    if status not in POST_STATUSES:
        raise ValidationError(f"Invalid status: {status}")

    return {
        "title": title,
        "excerpt": excerpt,
        "content": content,
        "authors": authors,
        "status": status,
        "tags": _parse_tags(data.get("tags")),
        "category_id": _optional_text(data, "categoryId", blog_settings.DEFAULT_CATEGORY_ID),
        "featured_image": _optional_text(data, "featuredImage"),
    }


def _post_slug_taken(post):
    return lambda slug: Post.objects.filter(slug=slug).exclude(pk=post.pk).exists()


def _apply_flags(post, data):
    for key, field in (("featured", "featured"), ("sticky", "sticky"), ("allowComments", "allow_comments")):
        if key not in data:
            continue
        if not isinstance(data[key], bool):
            raise ValidationError(f"{key} must be true or false")
        setattr(post, field, data[key])


def refresh_post_counts(authors=(), category_ids=(), tag_ids=()):
    """Recount membership for the given authors, categories and tags."""
    for author in authors:
        author.refresh_post_count()
    for category in Category.objects.filter(pk__in=set(category_ids)):
        category.refresh_post_count()
    for tag in Tag.objects.filter(pk__in=set(tag_ids)):
        tag.refresh_post_count()


def create_post(data):
    """Create a post from an admin payload and return it."""
    fields = _validate_post(data)
    authors = fields.pop("authors")

    post = Post(
        meta_title=fields["title"],
        meta_description=fields["excerpt"],
        meta_keywords=fields["tags"],
        featured_image_alt=fields["title"],
        **fields,
    )
    post.slug = unique_slug(generate_slug(post.title), _post_slug_taken(post))
    _apply_flags(post, data)

    with transaction.atomic():
        post.save()
        post.set_authors(authors)
        refresh_post_counts(authors, [post.category_id], post.tags)

    logger.info("Created post %s (%s) with status %s", post.pk, post.slug, post.status)
    return post


def update_post(post_id, data):
    """
    Update a post in place.

    The slug only changes when the title does, and the author list is
    replaced wholesale.
    """
    post = Post.objects.filter(pk=post_id).first()
    if post is None:
        raise NotFound("Post not found")

    fields = _validate_post(data)
    authors = fields.pop("authors")

    previous_authors = list(post.authors.all())
    previous_category = post.category_id
    previous_tags = list(post.tags or [])

    if fields["title"] != post.title:
        post.slug = unique_slug(generate_slug(fields["title"]), _post_slug_taken(post))

    for field, value in fields.items():
        setattr(post, field, value)
    post.featured_image_alt = data.get("featuredImageAlt") or None
    _apply_flags(post, data)

    with transaction.atomic():
        post.save()
        post.set_authors(authors)
        refresh_post_counts(
            {author.pk: author for author in previous_authors + authors}.values(),
            [previous_category, post.category_id],
            previous_tags + post.tags,
        )

    logger.info("Updated post %s (%s)", post.pk, post.slug)
    return post


def delete_post(post_id):
    """Delete a post and its author links. Authors themselves are kept."""
    post = Post.objects.filter(pk=post_id).first()
    if post is None:
        raise NotFound("Post not found")

    authors = list(post.authors.all())
    category_id = post.category_id
    tags = list(post.tags or [])

    with transaction.atomic():
        post.post_authors.all().delete()
        post.delete()
        refresh_post_counts(authors, [category_id], tags)

    logger.info("Deleted post %s", post_id)


def create_author(data):
    """
    Create an author.

    A name shared with an existing author gets a random slug suffix; a
    registered email is rejected.
    """
    name = _text(data, "name").strip()
    email = _text(data, "email").strip()
    if not name or not email:
        raise ValidationError("Name and email are required")

    if Author.objects.filter(email__iexact=email).exists():
        raise ValidationError("An author with this email already exists")

    author = Author(
        name=name,
        email=email,
        title=data.get("title") or None,
        bio=data.get("bio") or None,
        avatar=data.get("avatar") or None,
        twitter=data.get("twitter") or None,
        linkedin=data.get("linkedin") or None,
        github=data.get("github") or None,
        website=data.get("website") or None,
    )
    author.slug = unique_slug(
        generate_slug(name),
        lambda slug: Author.objects.filter(slug=slug).exists(),
    )
    author.save()

    logger.info("Created author %s (%s)", author.pk, author.slug)
    return author
