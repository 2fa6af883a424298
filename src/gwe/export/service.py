from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import duckdb

from gwe.core.money import to_display
from gwe.export.snapshot import SettlementRecord

SCHEMA = """
CREATE TABLE IF NOT EXISTS rounds (
    record_id VARCHAR PRIMARY KEY,
    saved_at VARCHAR,
    player_count INTEGER,
    mode_count INTEGER
);

CREATE TABLE IF NOT EXISTS mode_results (
    record_id VARCHAR,
    mode_key VARCHAR,
    tag VARCHAR,
    player_id VARCHAR,
    player_name VARCHAR,
    net_amount DECIMAL(18, 2),
    net_exact VARCHAR,
    PRIMARY KEY(record_id, mode_key, player_id)
);

CREATE TABLE IF NOT EXISTS combined_results (
    record_id VARCHAR,
    player_id VARCHAR,
    player_name VARCHAR,
    net_amount DECIMAL(18, 2),
    net_exact VARCHAR,
    PRIMARY KEY(record_id, player_id)
);
"""

TABLES = ("rounds", "mode_results", "combined_results")


class BreakdownExporter:
    """Loads settlement records into duckdb and writes each table as CSV and Parquet."""

    def __init__(self, analytics_db: Path | None = None) -> None:
        self.analytics_db = analytics_db

    def connect(self) -> Any:
        if self.analytics_db is None:
            return duckdb.connect()
        self.analytics_db.parent.mkdir(parents=True, exist_ok=True)
        return duckdb.connect(str(self.analytics_db))

    def export(self, records: Sequence[SettlementRecord], output_dir: Path) -> list[Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        outputs: list[Path] = []
        with self.connect() as conn:
            conn.execute(SCHEMA)
            self._load(conn, records)
            for table in TABLES:
                outputs.extend(self._export_table(conn, table, output_dir / table))
        return outputs

    def _load(self, conn: Any, records: Sequence[SettlementRecord]) -> None:
        for record in records:
            names = {p.player_id: p.name for p in record.players}
            mode_tags = {m.mode_key: str(getattr(m.tag, "value", m.tag)) for m in record.modes}
            conn.execute("DELETE FROM rounds WHERE record_id = ?", [record.record_id])
            conn.execute("DELETE FROM mode_results WHERE record_id = ?", [record.record_id])
            conn.execute("DELETE FROM combined_results WHERE record_id = ?", [record.record_id])
            conn.execute(
                "INSERT INTO rounds VALUES (?, ?, ?, ?)",
                [record.record_id, record.saved_at.isoformat(), len(record.players), len(record.breakdown)],
            )
            mode_rows = [
                [
                    record.record_id,
                    key,
                    mode_tags.get(key, key.split("#")[0]),
                    pid,
                    names.get(pid, pid),
                    to_display(amount),
                    str(amount),
                ]
                for key, net in record.breakdown.items()
                for pid, amount in net.items()
            ]
            if mode_rows:
                conn.executemany("INSERT INTO mode_results VALUES (?, ?, ?, ?, ?, ?, ?)", mode_rows)
            combined_rows = [
                [record.record_id, pid, names.get(pid, pid), to_display(amount), str(amount)]
                for pid, amount in record.combined.items()
            ]
            if combined_rows:
                conn.executemany("INSERT INTO combined_results VALUES (?, ?, ?, ?, ?)", combined_rows)

    def _export_table(self, conn: Any, table: str, stem: Path) -> list[Path]:
        csv_path = stem.with_suffix(".csv")
        parquet_path = stem.with_suffix(".parquet")
        conn.execute(f"COPY (SELECT * FROM {table} ORDER BY ALL) TO '{csv_path.as_posix()}' (HEADER, DELIMITER ',')")
        conn.execute(f"COPY (SELECT * FROM {table} ORDER BY ALL) TO '{parquet_path.as_posix()}' (FORMAT PARQUET)")
        return [csv_path, parquet_path]
