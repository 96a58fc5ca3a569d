from __future__ import annotations

"""Naming helpers for placeholder identities created by the dashboard."""

import itertools
import secrets
import time

DEMO_USER_NAME = "Demo User"
DEMO_EMAIL_DOMAIN = "bank.dev"

_COUNTER = itertools.count()


def make_demo_email(*, now_ms: int | None = None) -> str:
    """Compose `demo{epoch_ms}{seq}{rnd6}@bank.dev`.

    The per-process sequence keeps addresses distinct within one millisecond;
    the random suffix keeps separate processes apart.
    """

    stamp = int(time.time() * 1000) if now_ms is None else int(now_ms)
    sequence = next(_COUNTER)
    random_token = secrets.token_hex(3)
    return f"demo{stamp}{sequence:x}{random_token}@{DEMO_EMAIL_DOMAIN}"


__all__ = ["DEMO_EMAIL_DOMAIN", "DEMO_USER_NAME", "make_demo_email"]
