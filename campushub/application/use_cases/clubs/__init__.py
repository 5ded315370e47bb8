"""Use cases for club requests."""

from .clubs import list_clubs, request_club, review_club

__all__ = ["list_clubs", "request_club", "review_club"]
