from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from gwe.contracts import HOLES, Player

logger = logging.getLogger(__name__)

DEFAULT_PAR = 4
STROKE_INDEX = (1, 10, 2, 11, 3, 12, 4, 13, 5, 14, 6, 15, 7, 16, 8, 17, 9, 18)
FRONT = range(0, 9)
BACK = range(9, 18)
ROUND = range(0, HOLES)


def _clean_stroke(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int) and value > 0:
        return value
    return None


class ScoreMatrix:
    """Read-only view over per-player strokes and the hole pars.

    Rows are padded or cut to 18 holes. Anything that is not a positive
    integer counts as "not yet played".
    """

    __slots__ = ("_rows", "_pars")

    def __init__(self, scores: Mapping[str, Sequence[object]], pars: Sequence[int] | None = None) -> None:
        rows: dict[str, tuple[int | None, ...]] = {}
        for pid, row in scores.items():
            values = list(row)[:HOLES]
            values.extend([None] * (HOLES - len(values)))
            cleaned = tuple(_clean_stroke(v) for v in values)
            dropped = sum(1 for raw, clean in zip(values, cleaned) if raw is not None and clean is None)
            if dropped:
                logger.warning("ignored %d unusable stroke entries for player %s", dropped, pid)
            rows[str(pid)] = cleaned
        self._rows = rows
        par_values = list(pars or [])[:HOLES]
        par_values.extend([DEFAULT_PAR] * (HOLES - len(par_values)))
        self._pars = tuple(int(p) for p in par_values)

    @property
    def pars(self) -> tuple[int, ...]:
        return self._pars

    @property
    def player_ids(self) -> list[str]:
        return list(self._rows)

    def row(self, player_id: str) -> tuple[int | None, ...]:
        return self._rows.get(player_id, (None,) * HOLES)

    def strokes(self, player_id: str, hole: int) -> int | None:
        if not 0 <= hole < HOLES:
            return None
        return self.row(player_id)[hole]

    def par(self, hole: int) -> int:
        return self._pars[hole]

    def holes_played(self, player_id: str) -> int:
        return sum(1 for s in self.row(player_id) if s is not None)

    def is_complete(self, player_id: str, holes: Iterable[int] = ROUND) -> bool:
        return all(self.strokes(player_id, h) is not None for h in holes)

    def hole_scores(self, hole: int, player_ids: Iterable[str]) -> dict[str, int] | None:
        """Scores for one hole, or None when any of the players has no score yet."""
        out: dict[str, int] = {}
        for pid in player_ids:
            s = self.strokes(pid, hole)
            if s is None:
                return None
            out[pid] = s
        return out

    def total(self, player_id: str, holes: Iterable[int] = ROUND) -> int | None:
        total = 0
        for h in holes:
            s = self.strokes(player_id, h)
            if s is None:
                return None
            total += s
        return total

    def to_par(self, player_id: str, hole: int) -> int | None:
        s = self.strokes(player_id, hole)
        return None if s is None else s - self.par(hole)

    def last_complete_hole(self, player_ids: Iterable[str], holes: range = ROUND) -> int | None:
        """Last hole of the unbroken completed run from the start of ``holes``."""
        ids = list(player_ids)
        last = None
        for h in holes:
            if self.hole_scores(h, ids) is None:
                break
            last = h
        return last

    def with_handicaps(self, players: Sequence[Player]) -> ScoreMatrix:
        """Net-score view: each player gets strokes against the lowest handicap in the group."""
        if not players:
            return self
        rows: dict[str, list[int | None]] = {pid: list(row) for pid, row in self._rows.items()}
        for pid, given in handicap_strokes(players).items():
            row = rows.get(pid)
            if row is None:
                continue
            for h, s in enumerate(row):
                if s is not None and given[h]:
                    row[h] = s - 1
        net = ScoreMatrix.__new__(ScoreMatrix)
        net._rows = {pid: tuple(row) for pid, row in rows.items()}
        net._pars = self._pars
        return net


def handicap_strokes(players: Sequence[Player]) -> dict[str, list[bool]]:
    if not players:
        return {}
    low = min(p.handicap for p in players)
    return {p.player_id: [p.handicap - low >= idx for idx in STROKE_INDEX] for p in players}
