"""Comparison helpers for Gladly customer attributes."""

from __future__ import annotations


def normalize_email(email: str) -> str:
    """Return the comparison form of ``email``; blank input is returned unchanged."""

    return email.strip().lower() or email
