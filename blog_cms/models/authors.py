"""
Author model for django-blog-cms.
"""
from django.db import models
from django.urls import reverse

from ..utils import generate_id


class Author(models.Model):
    """
    Writer profile.

    Authors exist independently of posts and are attached to them through
    PostAuthor. ``post_count`` is a cached count of published posts.
    """

    id = models.CharField(primary_key=True, max_length=32, default=generate_id, editable=False)
    slug = models.SlugField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    bio = models.TextField(blank=True, null=True)
    avatar = models.TextField(
        blank=True,
        null=True,
        help_text="Image URL or pre-encoded data URI",
    )
    title = models.CharField(max_length=255, blank=True, null=True)

    # Social
    twitter = models.CharField(max_length=255, blank=True, null=True)
    linkedin = models.CharField(max_length=255, blank=True, null=True)
    github = models.CharField(max_length=255, blank=True, null=True)
    website = models.URLField(max_length=500, blank=True, null=True)

    post_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return reverse("blog_cms:author_detail", kwargs={"slug": self.slug})

    def refresh_post_count(self):
        """Recount published posts and store the result."""
        from .posts import Post

        self.post_count = Post.objects.published().filter(post_authors__author=self).count()
        Author.objects.filter(pk=self.pk).update(post_count=self.post_count)
        return self.post_count
