"""
Models for django-blog-cms.

All models are importable from blog_cms.models:

    from blog_cms.models import Post, Category, Tag, Author, PostAuthor
"""
from .authors import Author
from .posts import Category, Tag, Post, PostAuthor

__all__ = [
    # Authors
    "Author",
    # Posts
    "Category",
    "Tag",
    "Post",
    "PostAuthor",
]
