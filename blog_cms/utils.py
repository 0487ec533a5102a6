"""
Text helpers shared by the query layer, the write services and templates.
"""
import math
import re

from django.utils.crypto import get_random_string

from .conf import blog_settings

ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_-"
SLUG_SUFFIX_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_HTML_TAG = re.compile(r"<[a-z][\s\S]*>", re.IGNORECASE)


def generate_id(length=None):
    """Return a random URL-safe identifier."""
    return get_random_string(length or blog_settings.ID_LENGTH, ID_ALPHABET)


def generate_slug(text):
    """
    Build a URL slug from a title or name.

    Lower-cases the text, collapses every run of characters outside
    a-z/0-9 into a single hyphen and trims leading/trailing hyphens:

        >>> generate_slug("Hello, World! 2024")
        'hello-world-2024'
    """
    slug = _NON_ALNUM.sub("-", (text or "").lower()).strip("-")
    return slug[:blog_settings.SLUG_MAX_LENGTH].rstrip("-")


def slug_suffix():
    """Short random token appended to a slug that is already taken."""
    return get_random_string(blog_settings.SLUG_SUFFIX_LENGTH, SLUG_SUFFIX_ALPHABET)


def unique_slug(base, exists):
    """
    Return ``base`` or, if ``exists(base)`` is true, ``base`` plus a random suffix.

    ``exists`` is a callable taking a candidate slug. Text with no usable
    characters gets a random slug.
    """
    base = base or slug_suffix()
    slug = base
    while exists(slug):
        slug = f"{base}-{slug_suffix()}"
    return slug


def count_words(text):
    # Blank text still counts as one word, so nothing reads in zero minutes.
    return len((text or "").split()) or 1


def calculate_reading_time(text):
    """Estimated reading time in whole minutes, rounded up."""
    return math.ceil(count_words(text) / blog_settings.WORDS_PER_MINUTE)


def format_reading_time(text):
    """Reading time as a display string, e.g. ``"3 min read"``."""
    return f"{calculate_reading_time(text)} min read"


def is_html_content(text):
    """True when content came from the rich text editor rather than Markdown."""
    return bool(_HTML_TAG.search(text or ""))
