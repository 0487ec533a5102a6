"""
URL configuration for django-blog-cms.

Include in your project urls.py:

    path('', include('blog_cms.urls')),

Public pages are cached for ``BLOG_CMS['REVALIDATE_SECONDS']``. Edits made
through the admin API show up once the cached copy expires.
"""
from django.contrib.sitemaps.views import sitemap
from django.urls import path
from django.views.decorators.cache import cache_page

from . import views
from .conf import blog_settings
from .sitemaps import sitemaps

app_name = "blog_cms"

revalidate = cache_page(blog_settings.REVALIDATE_SECONDS)

urlpatterns = [
    # Posts
    path("", revalidate(views.PostListView.as_view()), name="home"),
    path("blog/", revalidate(views.PostListView.as_view()), name="post_list"),
    path("blog/<slug:slug>/", revalidate(views.PostDetailView.as_view()), name="post_detail"),

    # Taxonomy
    path("categories/", revalidate(views.CategoryListView.as_view()), name="category_list"),
    path("category/<slug:slug>/", revalidate(views.CategoryPostListView.as_view()), name="category_detail"),
    path("tag/<slug:slug>/", revalidate(views.TagPostListView.as_view()), name="tag_detail"),

    # Authors
    path("authors/", revalidate(views.AuthorListView.as_view()), name="author_list"),
    path("authors/<slug:slug>/", revalidate(views.AuthorDetailView.as_view()), name="author_detail"),

    # Search
    path("search", views.SearchView.as_view(), name="search"),

    # Crawlers
    path("robots.txt", views.robots_txt, name="robots_txt"),
    path("sitemap.xml", sitemap, {"sitemaps": sitemaps}, name="sitemap"),

    # Admin API
    path("admin/authors", views.AdminAuthorsView.as_view(), name="admin_authors"),
    path("admin/posts", views.AdminPostsView.as_view(), name="admin_posts"),
    path("admin/posts/<str:post_id>", views.AdminPostDetailView.as_view(), name="admin_post_detail"),
]
