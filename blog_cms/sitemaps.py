"""Sitemaps for django-blog-cms."""
from django.contrib.sitemaps import Sitemap

from . import queries


class PostSitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.8

    def items(self):
        return queries.get_all_published_posts()

    def lastmod(self, post):
        return post.updated_at


class CategorySitemap(Sitemap):
    changefreq = "daily"
    priority = 0.6

    def items(self):
        return queries.get_all_categories()


class AuthorSitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.5

    def items(self):
        return queries.get_all_authors()

    def lastmod(self, author):
        return author.updated_at


sitemaps = {
    "posts": PostSitemap,
    "categories": CategorySitemap,
    "authors": AuthorSitemap,
}
