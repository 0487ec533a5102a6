"""
Populate an empty database with starter categories and tags.

    python manage.py seed_blog
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from ...models import Category, Tag
from ...utils import generate_slug

CATEGORIES = [
    ("general", "General", "📰", "#6b7280", "Everything else"),
    ("technology", "Technology", "💻", "#3b82f6", "Tech news and tutorials"),
    ("web-development", "Web Development", "🌐", "#10b981", "Web dev tips and tricks"),
    ("design", "Design", "🎨", "#8b5cf6", "Design principles and UI/UX"),
    ("business", "Business", "💼", "#f59e0b", "Business and entrepreneurship"),
    ("lifestyle", "Lifestyle", "✨", "#ec4899", "Life, travel, and more"),
]

TAGS = [
    "Python", "Django", "JavaScript", "CSS", "SEO", "Performance",
    "Tutorial", "Guide", "Tips", "Best Practices", "Tools",
]


class Command(BaseCommand):
    help = "Create the default categories and tags. Existing rows are left alone."

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0

        for order, (category_id, name, icon, color, description) in enumerate(CATEGORIES):
            _, was_created = Category.objects.get_or_create(
                id=category_id,
                defaults={
                    "name": name,
                    "slug": generate_slug(name),
                    "icon": icon,
                    "color": color,
                    "description": description,
                    "order": order,
                },
            )
            created += was_created

        for name in TAGS:
            slug = generate_slug(name)
            _, was_created = Tag.objects.get_or_create(
                slug=slug,
                defaults={"id": slug, "name": name},
            )
            created += was_created

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} new categories/tags."))
