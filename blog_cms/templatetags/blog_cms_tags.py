"""Template filters for rendering post content."""
import markdown
from django import template
from django.utils.safestring import mark_safe

from ..utils import is_html_content

register = template.Library()

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "toc"]


@register.filter
def render_content(content):
    """Render rich-text HTML as-is and anything else as Markdown."""
    if not content:
        return ""
    if is_html_content(content):
        return mark_safe(content)
    return mark_safe(markdown.markdown(content, extensions=MARKDOWN_EXTENSIONS))
