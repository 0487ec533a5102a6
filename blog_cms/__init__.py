"""
django-blog-cms - A server-rendered blog and CMS for Django.

Features:
- Published-only query layer with view-model normalization
- Multi-author posts with ordered author associations
- Categories and free-form JSON tag lists
- Substring search over title and body
- Time-boxed page caching with cache warming for known slugs
- Admin JSON API for posts and authors
- SQLite in WAL mode as a zero-ops embedded store
"""

__version__ = "0.1.0"
