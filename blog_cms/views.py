"""
Views for django-blog-cms.

Public pages render view models from ``blog_cms.queries``; they are cached
per URL in ``urls.py``. The admin API speaks JSON and is never cached.
"""
import json
import logging

from django.http import Http404, HttpResponse, JsonResponse
from django.urls import reverse
from django.views import View
from django.views.generic import ListView, TemplateView

from . import queries, services
from .conf import blog_settings
from .exceptions import BlogCMSError, ValidationError
from .models import Post
from .serializers import (
    serialize_admin_post,
    serialize_author,
    serialize_category,
    serialize_post,
    serialize_post_metadata,
    serialize_search_result,
    serialize_tag,
)

logger = logging.getLogger(__name__)


def error_response(message, status):
    return JsonResponse({"success": False, "error": message}, status=status)


# Public pages


class PostListView(ListView):
    """List published posts with pagination."""

    template_name = "blog_cms/post_list.html"
    context_object_name = "posts"
    paginate_by = blog_settings.POSTS_PER_PAGE

    def get_queryset(self):
        return [serialize_post_metadata(post) for post in self.get_posts()]

    def get_posts(self):
        return queries.get_all_published_posts()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["categories"] = [serialize_category(c) for c in queries.get_all_categories()]
        context["featured_posts"] = [serialize_post_metadata(p) for p in queries.get_featured_posts()]
        return context


class CategoryPostListView(PostListView):
    """List posts in a specific category."""

    template_name = "blog_cms/category_detail.html"

    def get_posts(self):
        self.category = queries.get_category_by_slug(self.kwargs["slug"])
        if self.category is None:
            raise Http404("Category not found")
        return queries.get_posts_by_category(self.category.id)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["category"] = serialize_category(self.category)
        return context


class TagPostListView(PostListView):
    """List posts carrying a specific tag."""

    template_name = "blog_cms/tag_detail.html"

    def get_posts(self):
        self.tag = queries.get_tag_by_slug(self.kwargs["slug"])
        if self.tag is None:
            raise Http404("Tag not found")
        return queries.get_posts_by_tag(self.tag.id)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["tag"] = serialize_tag(self.tag)
        return context


class AuthorDetailView(PostListView):
    """Author profile with their published posts."""

    template_name = "blog_cms/author_detail.html"

    def get_posts(self):
        self.author = queries.get_author_by_slug(self.kwargs["slug"])
        if self.author is None:
            raise Http404("Author not found")
        return queries.get_posts_by_author(self.author.id)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["author"] = serialize_author(self.author)
        return context


class PostDetailView(TemplateView):
    """Display a single published post."""

    template_name = "blog_cms/post_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        post = queries.get_post_by_slug(self.kwargs["slug"])
        if post is None:
            raise Http404("Post not found")

        queries.increment_post_views(post.id)

        context["post"] = serialize_post(post, authors=queries.get_authors_for_post(post.id))
        context["related_posts"] = [
            serialize_post_metadata(related) for related in queries.get_related_posts(post.id)
        ]
        return context


class CategoryListView(TemplateView):
    template_name = "blog_cms/category_list.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["categories"] = [serialize_category(c) for c in queries.get_all_categories()]
        context["tags"] = [serialize_tag(t) for t in queries.get_all_tags()]
        return context


class AuthorListView(TemplateView):
    template_name = "blog_cms/author_list.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["authors"] = [serialize_author(a) for a in queries.get_all_authors()]
        return context


class SearchView(View):
    """Substring search over published posts, as JSON."""

    def get(self, request):
        query = request.GET.get("q", "").strip()
        if not query:
            return JsonResponse({"results": []})

        try:
            results = queries.search_posts(query)
        except Exception:
            logger.exception("Search for %r failed", query)
            return error_response("Failed to search posts", 500)

        return JsonResponse({"results": [serialize_search_result(post) for post in results]})


def robots_txt(request):
    sitemap_url = blog_settings.SITE_URL.rstrip("/") + reverse("blog_cms:sitemap")
    lines = [
        "User-agent: *",
        "Allow: /",
        "",
        "# Sitemap location",
        f"Sitemap: {sitemap_url}",
        "",
    ]
    return HttpResponse("\n".join(lines), content_type="text/plain")


# Admin API


class AdminAPIView(View):
    """
    Base for admin JSON endpoints.

    Requires a staff user. Known errors become ``{"success": false, "error": ...}``
    with their own status; anything else is logged and reported as a 500
    with a generic message from ``failure_messages``.
    """

    failure_messages = {}

    def dispatch(self, request, *args, **kwargs):
        if not (request.user.is_authenticated and request.user.is_staff):
            return error_response("Authentication required", 401)

        try:
            return super().dispatch(request, *args, **kwargs)
        except BlogCMSError as exc:
            return error_response(exc.message, exc.status_code)
        except Exception:
            logger.exception("Admin API %s %s failed", request.method, request.path)
            message = self.failure_messages.get(request.method, "Request failed")
            return error_response(message, 500)

    def get_json_body(self):
        try:
            data = json.loads(self.request.body or b"{}")
        except ValueError:
            raise ValidationError("Request body must be valid JSON")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data


class AdminAuthorsView(AdminAPIView):
    """GET lists authors, POST creates one."""

    failure_messages = {
        "GET": "Failed to fetch authors",
        "POST": "Failed to create author",
    }

    def get(self, request):
        authors = [serialize_author(author) for author in queries.get_all_authors()]
        return JsonResponse({"success": True, "authors": authors})

    def post(self, request):
        author = services.create_author(self.get_json_body())
        return JsonResponse(
            {"success": True, "author": serialize_author(author)},
            status=201,
        )


class AdminPostsView(AdminAPIView):
    """GET lists every post regardless of status, POST creates one."""

    failure_messages = {
        "GET": "Failed to fetch posts",
        "POST": "Failed to create blog post",
    }

    def get(self, request):
        posts = Post.objects.order_by("-created_at")
        return JsonResponse({"success": True, "posts": [serialize_admin_post(p) for p in posts]})

    def post(self, request):
        post = services.create_post(self.get_json_body())
        return JsonResponse(
            {
                "success": True,
                "message": "Blog post created successfully",
                "id": post.id,
                "slug": post.slug,
            },
            status=201,
        )


class AdminPostDetailView(AdminAPIView):
    """Fetch, update or delete one post by id."""

    failure_messages = {
        "GET": "Failed to fetch post",
        "PUT": "Failed to update post",
        "DELETE": "Failed to delete post",
    }

    def get(self, request, post_id):
        post = queries.get_post_by_id(post_id)
        if post is None:
            return error_response("Post not found", 404)

        author_ids = [author.id for author in queries.get_authors_for_post(post.id)]
        return JsonResponse({"success": True, "post": serialize_admin_post(post, author_ids)})

    def put(self, request, post_id):
        post = services.update_post(post_id, self.get_json_body())
        return JsonResponse({
            "success": True,
            "message": "Post updated successfully",
            "post": {"id": post.id, "slug": post.slug},
        })

    def delete(self, request, post_id):
        services.delete_post(post_id)
        return JsonResponse({"success": True, "message": "Post deleted successfully"})
