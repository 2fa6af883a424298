from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4


class IdKind(str, Enum):
    ROUND = "round"
    FORENSIC = "forensic"


def now_utc() -> datetime:
    return datetime.now(UTC)


def make_id(kind: IdKind) -> str:
    """``<kind>_<hex>`` id, e.g. ``round_3f2a9c04b1de``."""
    return f"{IdKind(kind).value}_{uuid4().hex[:12]}"
