"""Validation helpers for the registration form."""

from __future__ import annotations


def _require_length(value: str | None, minimum: int, message: str) -> str:
    normalized = (value or "").strip()
    if len(normalized) < minimum:
        raise ValueError(message)
    return normalized


def ensure_full_name(value: str | None) -> str:
    return _require_length(value, 3, "Full name is required.")


def ensure_roll_number(value: str | None) -> str:
    return _require_length(value, 3, "Roll number is required.")


def ensure_branch(value: str | None) -> str:
    return _require_length(value, 2, "Branch is required.")


def ensure_section(value: str | None) -> str:
    return _require_length(value, 1, "Section is required.")


__all__ = ["ensure_full_name", "ensure_roll_number", "ensure_branch", "ensure_section"]
