"""Use cases for event comments."""

from .comments import add_comment, build_comment_threads, like_comment, list_event_comments

__all__ = ["add_comment", "build_comment_threads", "like_comment", "list_event_comments"]
