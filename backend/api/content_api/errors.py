from __future__ import annotations


class ContentError(Exception):
    """Base for every failure surfaced to API callers."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class BadRequest(ContentError):
    status_code = 400


class Unauthorized(ContentError):
    status_code = 401


class Forbidden(ContentError):
    status_code = 403


class NotFound(ContentError):
    status_code = 404


class Conflict(ContentError):
    status_code = 409
