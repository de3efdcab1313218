"""
Error Taxonomy
==============

Every failure a caller can see maps to one of these. The HTTP layer turns
them into ``{"ok": false, "error": message}`` with ``status_code``.
"""


class NewsdeskError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(NewsdeskError):
    """Bad or missing required input, including unparseable bodies."""
    status_code = 400
    default_message = 'Bad request'


class Unauthenticated(NewsdeskError):
    """Missing, malformed, tampered or expired bearer token."""
    status_code = 401
    default_message = 'Unauthorized'


class InvalidCredentials(Unauthenticated):
    default_message = 'Invalid credentials'


class NotFound(NewsdeskError):
    status_code = 404
    default_message = 'Not found'


class UploadFailure(NewsdeskError):
    status_code = 500
    default_message = 'Upload failed'
