"""
Exceptions raised by the blog_cms write services.

Views translate them into ``{"success": false, "error": ...}`` responses
with the matching HTTP status.
"""


class BlogCMSError(Exception):
    """Base class for errors that are safe to show to the API caller."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlogCMSError):
    """Missing or invalid input, or a duplicate unique key."""

    status_code = 400
    default_message = "Invalid request"


class NotFound(BlogCMSError):
    status_code = 404
    default_message = "Not found"
