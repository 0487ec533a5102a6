"""
Tests for the Django admin write path.
"""
import pytest
from django.contrib.admin.sites import site
from django.contrib.admin.utils import quote
from django.test import RequestFactory
from django.urls import reverse

from blog_cms import services
from blog_cms.models import Category, Post, PostAuthor, Tag


class SavedForm:
    """Stands in for a bound admin form whose data has already been applied."""

    def __init__(self, instance):
        self.instance = instance

    def save_m2m(self):
        pass


@pytest.fixture
def counted_post(author, category, tag):
    return services.create_post({
        "title": "Counted Post",
        "excerpt": "An excerpt.",
        "content": "Some content.",
        "authorIds": [author.id],
        "categoryId": category.id,
        "tags": [tag.id],
    })


def counts(*objects):
    for obj in objects:
        obj.refresh_from_db()
    return tuple(obj.post_count for obj in objects)


class TestPostAdminCounts:
    def test_delete_recounts(self, admin_client, counted_post, author, category, tag):
        assert counts(author, category, tag) == (1, 1, 1)

        url = reverse("admin:blog_cms_post_delete", args=[quote(counted_post.pk)])
        response = admin_client.post(url, {"post": "yes"})

        assert response.status_code == 302
        assert not Post.objects.filter(pk=counted_post.pk).exists()
        assert counts(author, category, tag) == (0, 0, 0)

    def test_bulk_delete_recounts(self, admin_client, counted_post, author, category, tag):
        response = admin_client.post(reverse("admin:blog_cms_post_changelist"), {
            "action": "delete_selected",
            "_selected_action": [counted_post.pk],
            "post": "yes",
        })

        assert response.status_code == 302
        assert not Post.objects.exists()
        assert counts(author, category, tag) == (0, 0, 0)

    def test_change_recounts_old_and_new_memberships(
        self, admin_user, counted_post, author, second_author, category
    ):
        design = Category.objects.create(id="design", name="Design", slug="design")
        model_admin = site._registry[Post]
        request = RequestFactory().post("/")
        request.user = admin_user

        post = Post.objects.get(pk=counted_post.pk)
        post.category_id = design.id
        model_admin.save_model(request, post, SavedForm(post), change=True)
        PostAuthor.objects.filter(post=post).update(author=second_author)
        model_admin.save_related(request, SavedForm(post), [], change=True)

        assert counts(author, second_author) == (0, 1)
        assert counts(category, design) == (0, 1)
        assert Tag.objects.get(pk="python").post_count == 1
