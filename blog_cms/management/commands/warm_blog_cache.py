"""
Render every public page once so a fresh deploy starts with a warm cache.

    python manage.py warm_blog_cache
    python manage.py warm_blog_cache --host blog.example.com --secure
"""
import logging
from urllib.parse import urlsplit

from django.core.management.base import BaseCommand
from django.test import Client
from django.urls import reverse

from ... import queries
from ...conf import blog_settings

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Pre-render cached blog pages for all published posts, categories and authors."

    def add_arguments(self, parser):
        site = urlsplit(blog_settings.SITE_URL)
        parser.add_argument(
            "--host",
            default=site.netloc or "localhost",
            help="Host name the pages are served under (part of the cache key).",
        )
        parser.add_argument(
            "--secure",
            action="store_true",
            default=site.scheme == "https",
            help="Render as HTTPS requests.",
        )

    def get_urls(self):
        urls = [
            reverse("blog_cms:home"),
            reverse("blog_cms:post_list"),
            reverse("blog_cms:category_list"),
            reverse("blog_cms:author_list"),
        ]
        urls += [reverse("blog_cms:post_detail", args=[slug]) for slug in queries.get_all_post_slugs()]
        urls += [category.get_absolute_url() for category in queries.get_all_categories()]
        urls += [reverse("blog_cms:author_detail", args=[slug]) for slug in queries.get_all_author_slugs()]
        return urls

    def handle(self, *args, **options):
        client = Client(raise_request_exception=False, HTTP_HOST=options["host"])
        failures = 0

        for url in self.get_urls():
            response = client.get(url, secure=options["secure"])
            if response.status_code == 200:
                self.stdout.write(f"  warmed {url}")
            else:
                failures += 1
                logger.warning("Warming %s returned HTTP %s", url, response.status_code)
                self.stderr.write(f"  {url} -> {response.status_code}")

        if failures:
            self.stdout.write(self.style.WARNING(f"Cache warmed with {failures} failure(s)."))
        else:
            self.stdout.write(self.style.SUCCESS("Cache warmed."))
