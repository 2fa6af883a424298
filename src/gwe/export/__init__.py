from .service import BreakdownExporter
from .snapshot import (
    HoleTracking,
    SettlementRecord,
    build_record,
    load_record,
    record_from_dict,
    record_to_dict,
    resettle,
    save_record,
    verify_record,
)

__all__ = [
    "BreakdownExporter",
    "HoleTracking",
    "SettlementRecord",
    "build_record",
    "load_record",
    "record_from_dict",
    "record_to_dict",
    "resettle",
    "save_record",
    "verify_record",
]
