"""
Configuration settings for django-blog-cms.

Override these in your Django settings.py:

    BLOG_CMS = {
        'REVALIDATE_SECONDS': 3600,
        'WORDS_PER_MINUTE': 200,
        'DEFAULT_CATEGORY_ID': 'general',
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Page caching: rendered public pages are reused for this many seconds
    "REVALIDATE_SECONDS": 3600,

    # Reading time
    "WORDS_PER_MINUTE": 200,

    # Listing limits
    "FEATURED_POSTS_LIMIT": 3,
    "RELATED_POSTS_LIMIT": 3,
    "POPULAR_POSTS_LIMIT": 5,
    "RECENT_POSTS_LIMIT": 5,
    "POSTS_PER_PAGE": 12,

    # Post defaults
    "DEFAULT_CATEGORY_ID": "general",
    "DEFAULT_POST_STATUS": "published",
    "DEFAULT_AUTHOR_NAME": "Admin",

    # Identifiers and slugs
    "ID_LENGTH": 10,
    "SLUG_SUFFIX_LENGTH": 5,
    "SLUG_MAX_LENGTH": 200,

    # Storage
    "SQLITE_WAL": True,

    # SEO
    "SITE_URL": "http://localhost:8000",
}


class BlogCMSSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_cms.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_cms setting: {name}")

        user_settings = getattr(settings, "BLOG_CMS", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = BlogCMSSettings()
