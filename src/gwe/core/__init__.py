from .errors import EngineIntegrityError, build_forensic_artifact, persist_forensic_artifact
from .ids import IdKind, make_id, now_utc
from .logging_config import configure_logging
from .money import ZERO, Ledger, to_display, to_money, zero_net

__all__ = [
    "EngineIntegrityError",
    "IdKind",
    "Ledger",
    "ZERO",
    "build_forensic_artifact",
    "configure_logging",
    "make_id",
    "now_utc",
    "persist_forensic_artifact",
    "to_display",
    "to_money",
    "zero_net",
]
