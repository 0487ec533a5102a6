"""
Post, Category, and Tag models for django-blog-cms.
"""
from django.db import models
from django.urls import reverse
from django.utils import timezone

from ..conf import blog_settings
from ..utils import calculate_reading_time, generate_id, generate_slug, unique_slug


class Category(models.Model):
    """
    Single category a post belongs to.

    Posts reference categories by ``category_id`` only, so a post may
    name a category that has not been created.
    """

    id = models.CharField(primary_key=True, max_length=64, default=generate_id)
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    icon = models.CharField(max_length=50, blank=True, null=True)
    color = models.CharField(max_length=20, blank=True, null=True)
    order = models.IntegerField(default=0, help_text="Display order")
    post_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order", "name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.name)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("blog_cms:category_detail", kwargs={"slug": self.slug})

    def refresh_post_count(self):
        """Recount published posts in this category and store the result."""
        self.post_count = Post.objects.published().filter(category_id=self.pk).count()
        Category.objects.filter(pk=self.pk).update(post_count=self.post_count)
        return self.post_count


class Tag(models.Model):
    """
    Display catalog entry for a tag.

    Posts keep their own tag lists; this table only names and counts them.
    """

    id = models.CharField(primary_key=True, max_length=64, default=generate_id)
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    post_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-post_count", "name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.name)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("blog_cms:tag_detail", kwargs={"slug": self.slug})

    def refresh_post_count(self):
        """Recount published posts listing this tag and store the result."""
        tag_lists = Post.objects.published().values_list("tags", flat=True)
        self.post_count = sum(1 for tags in tag_lists if self.pk in (tags or []))
        Tag.objects.filter(pk=self.pk).update(post_count=self.post_count)
        return self.post_count


class PostQuerySet(models.QuerySet):
    def published(self):
        return self.filter(status=Post.STATUS_PUBLISHED)

    def newest_first(self):
        return self.order_by(models.F("published_at").desc(nulls_last=True), "-created_at")


class Post(models.Model):
    """
    Blog post / article.

    ``content`` holds either Markdown or HTML from the rich text editor.
    ``tags`` is the authoritative, ordered list of tag ids for the post.
    ``author`` and ``primary_author_id`` mirror the first associated author
    for single-author display.
    """

    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_SCHEDULED = "scheduled"
    STATUS_ARCHIVED = "archived"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
        (STATUS_SCHEDULED, "Scheduled"),
        (STATUS_ARCHIVED, "Archived"),
    ]

    id = models.CharField(primary_key=True, max_length=32, default=generate_id, editable=False)
    slug = models.SlugField(max_length=255, unique=True)

    # Content
    title = models.CharField(max_length=255)
    excerpt = models.TextField()
    content = models.TextField()

    # Legacy single-author display
    author = models.CharField(max_length=255, default="Admin")
    primary_author_id = models.CharField(
        max_length=32,
        blank=True,
        null=True,
        db_column="author_id",
    )
    authors = models.ManyToManyField(
        "blog_cms.Author",
        through="PostAuthor",
        related_name="posts",
        blank=True,
    )

    # SEO
    meta_title = models.CharField(max_length=255, blank=True, null=True)
    meta_description = models.TextField(blank=True, null=True)
    meta_keywords = models.JSONField(default=list, blank=True)

    # Media
    featured_image = models.TextField(
        blank=True,
        null=True,
        help_text="Image URL or pre-encoded data URI",
    )
    featured_image_alt = models.CharField(max_length=255, blank=True, null=True)

    # Categorization
    category_id = models.CharField(max_length=64, default="general", db_index=True)
    tags = models.JSONField(default=list, blank=True)

    # Status
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        db_index=True,
    )

    # Dates
    published_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Set once, the first time the post is published",
    )
    scheduled_for = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    # Engagement (advisory counters)
    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)
    comments_count = models.PositiveIntegerField(default=0)

    # Advanced
    reading_time = models.PositiveIntegerField(null=True, blank=True, help_text="Minutes")
    featured = models.BooleanField(default=False, db_index=True)
    sticky = models.BooleanField(default=False)
    allow_comments = models.BooleanField(default=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at"]
        indexes = [
            models.Index(fields=["slug", "status"]),
            models.Index(fields=["status", "-published_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(
                generate_slug(self.title),
                lambda slug: Post.objects.filter(slug=slug).exclude(pk=self.pk).exists(),
            )

        self.reading_time = calculate_reading_time(self.content)

        # published_at is only ever set once
        if self.status == self.STATUS_PUBLISHED and not self.published_at:
            self.published_at = timezone.now()

        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("blog_cms:post_detail", kwargs={"slug": self.slug})

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED

    @property
    def ordered_authors(self):
        """Associated authors, primary author first."""
        return [link.author for link in self.post_authors.select_related("author").order_by("order")]

    def set_authors(self, authors):
        """Replace the author associations, keeping the given order."""
        self.post_authors.all().delete()
        PostAuthor.objects.bulk_create(
            PostAuthor(post=self, author=author, order=index)
            for index, author in enumerate(authors)
        )
        primary = authors[0] if authors else None
        self.author = primary.name if primary else blog_settings.DEFAULT_AUTHOR_NAME
        self.primary_author_id = primary.pk if primary else None
        Post.objects.filter(pk=self.pk).update(
            author=self.author,
            primary_author_id=self.primary_author_id,
        )

    def publish(self):
        """Publish the post immediately."""
        self.status = self.STATUS_PUBLISHED
        self.save()

    def increment_views(self):
        """Add one view with an UPDATE expression."""
        Post.objects.filter(pk=self.pk).update(views=models.F("views") + 1)


class PostAuthor(models.Model):
    """
    Ordered post-to-author association.

    ``order`` 0 is the primary author.
    """

    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="post_authors")
    author = models.ForeignKey(
        "blog_cms.Author",
        on_delete=models.PROTECT,
        related_name="post_authors",
    )
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["order"]
        constraints = [
            models.UniqueConstraint(fields=["post", "author"], name="unique_post_author"),
        ]

    def __str__(self):
        return f"{self.author} on {self.post} (#{self.order})"
