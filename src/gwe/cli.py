from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from gwe.core import EngineIntegrityError, configure_logging, to_display
from gwe.engine.aggregator import SettlementEngine
from gwe.engine.presses import detect_presses
from gwe.export import BreakdownExporter, load_record, resettle

logger = logging.getLogger(__name__)


def _row(label: str, amount) -> str:
    return f"  {label:<20} {to_display(amount):>10}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Re-settle a stored golf wagering round")
    parser.add_argument("snapshot", type=Path, help="settlement snapshot JSON file")
    parser.add_argument("--export", type=Path, default=None, help="write breakdown CSV/Parquet tables to this directory")
    parser.add_argument("--detect-presses", action="store_true", help="list auto-presses that should be recorded")
    parser.add_argument("--strict", action="store_true", help="fail on integrity errors instead of zeroing the mode")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, WARNING, ERROR)")
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, detailed=str(args.log_level).upper() == "DEBUG")
    except ValueError as exc:
        parser.error(str(exc))

    try:
        record = load_record(args.snapshot)
    except (OSError, ValueError) as exc:
        print(f"cannot load snapshot: {exc}", file=sys.stderr)
        return 2

    try:
        result = resettle(record, SettlementEngine(strict=args.strict))
    except EngineIntegrityError as exc:
        print(f"integrity failure [{exc.artifact.error_code}]: {exc}", file=sys.stderr)
        return 3

    names = {p.player_id: p.name for p in record.players}
    print(f"Round {record.record_id}")
    print("Combined:")
    for pid, amount in result.net.items():
        print(_row(names.get(pid, pid), amount))
    for mode in result.modes:
        print(f"{mode.label} [{mode.mode_key}]:")
        for pid, amount in mode.net.items():
            print(_row(names.get(pid, pid), amount))
    if record.combined and record.combined != result.net:
        logger.warning("stored combined result differs from re-settlement for %s", record.record_id)
        print("note: stored result differs from re-settlement")

    if args.detect_presses:
        presses = detect_presses(record.setup, record.matrix(), record.aux)
        print(f"Presses to record: {len(presses)}")
        for press in presses:
            print(f"  {press.press_id} bet {to_display(press.bet_amount)}")

    if args.export is not None:
        settled = replace(record, combined=dict(result.net), breakdown=result.breakdown())
        for path in BreakdownExporter().export([settled], args.export):
            print(f"wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
