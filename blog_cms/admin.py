"""
Django admin configuration for blog_cms.
"""
from django.contrib import admin

from . import services
from .models import Author, Category, Post, PostAuthor, Tag


class PostAuthorInline(admin.TabularInline):
    """Inline for ordering a post's authors."""

    model = PostAuthor
    extra = 1
    raw_id_fields = ["author"]
    fields = ["author", "order"]


@admin.register(Author)
class AuthorAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "email", "title", "post_count", "created_at"]
    search_fields = ["name", "slug", "email"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["post_count", "created_at", "updated_at"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "id", "slug", "post_count", "order"]
    search_fields = ["name", "slug", "description"]
    prepopulated_fields = {"slug": ("name",)}
    list_editable = ["order"]
    readonly_fields = ["post_count"]


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "id", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["post_count", "created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "status",
        "featured",
        "category_id",
        "views",
        "published_at",
    ]
    list_filter = ["status", "featured", "sticky", "category_id", "published_at"]
    search_fields = ["title", "content", "author"]
    date_hierarchy = "created_at"
    inlines = [PostAuthorInline]
    readonly_fields = [
        "author",
        "primary_author_id",
        "reading_time",
        "views",
        "likes",
        "comments_count",
        "created_at",
        "updated_at",
        "published_at",
    ]
    prepopulated_fields = {"slug": ("title",)}

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "excerpt", "content", "author", "primary_author_id")
        }),
        ("Taxonomy", {
            "fields": ("category_id", "tags")
        }),
        ("Status", {
            "fields": ("status", "featured", "sticky", "allow_comments")
        }),
        ("Media", {
            "fields": ("featured_image", "featured_image_alt"),
            "classes": ("collapse",),
        }),
        ("SEO", {
            "fields": ("meta_title", "meta_description", "meta_keywords"),
            "classes": ("collapse",),
        }),
        ("Scheduling", {
            "fields": ("scheduled_for", "published_at"),
            "classes": ("collapse",),
        }),
        ("Metadata", {
            "fields": ("reading_time", "views", "likes", "comments_count", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "feature_posts", "unfeature_posts"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    def _memberships(self, posts):
        """Authors, categories and tags the given posts are counted under."""
        authors = {}
        category_ids = set()
        tag_ids = set()
        for post in posts:
            authors.update((author.pk, author) for author in post.authors.all())
            category_ids.add(post.category_id)
            tag_ids.update(post.tags or [])
        return authors, category_ids, tag_ids

    def _refresh_counts(self, *memberships):
        authors = {}
        category_ids = set()
        tag_ids = set()
        for post_authors, post_categories, post_tags in memberships:
            authors.update(post_authors)
            category_ids |= post_categories
            tag_ids |= post_tags
        services.refresh_post_counts(authors.values(), category_ids, tag_ids)

    def save_model(self, request, obj, form, change):
        previous = Post.objects.filter(pk=obj.pk) if change else Post.objects.none()
        obj._previous_memberships = self._memberships(previous)
        super().save_model(request, obj, form, change)

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        post = form.instance
        authors = post.ordered_authors
        if authors:
            post.set_authors(authors)
        self._refresh_counts(
            getattr(post, "_previous_memberships", ({}, set(), set())),
            self._memberships([post]),
        )

    def delete_model(self, request, obj):
        memberships = self._memberships([obj])
        super().delete_model(request, obj)
        self._refresh_counts(memberships)

    def delete_queryset(self, request, queryset):
        memberships = self._memberships(queryset)
        super().delete_queryset(request, queryset)
        self._refresh_counts(memberships)

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        for post in queryset:
            post.publish()
            services.refresh_post_counts(post.ordered_authors, [post.category_id], post.tags)
        self.message_user(request, f"{queryset.count()} posts published.")

    @admin.action(description="Feature selected posts")
    def feature_posts(self, request, queryset):
        queryset.update(featured=True)
        self.message_user(request, f"{queryset.count()} posts featured.")

    @admin.action(description="Unfeature selected posts")
    def unfeature_posts(self, request, queryset):
        queryset.update(featured=False)
        self.message_user(request, f"{queryset.count()} posts unfeatured.")
