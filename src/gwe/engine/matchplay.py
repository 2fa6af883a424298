"""Shared hole-by-hole match core.

Head-to-head, Nassau, Best Ball and Sixes all reduce to "sides" (tuples of
player ids) compared over a hole range. A side's hole score is its best
ball. Hammer calls weight a hole in the tally; presses are just more
ranges settled by the same functions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Mapping, Sequence

from gwe.contracts import HOLES, AuxState, PressMatch
from gwe.core.money import Ledger
from gwe.engine.scoring import ScoreMatrix

logger = logging.getLogger(__name__)

MAX_HAMMER = 16

Side = tuple[str, ...]


def hammer_multiplier(value: object) -> int:
    """Clamp a called hammer value to a power of two between 1 and 16."""
    try:
        n = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 1
    except OverflowError:
        return MAX_HAMMER if value > 0 else 1  # type: ignore[operator]
    if n < 1:
        return 1
    n = min(n, MAX_HAMMER)
    return 1 << (n.bit_length() - 1)


def hole_weights(aux: AuxState, enabled: bool) -> list[int]:
    if not enabled:
        return [1] * HOLES
    return [hammer_multiplier(aux.hammer.get(h, 1)) for h in range(HOLES)]


def press_range(press: PressMatch) -> range:
    return range(max(press.start_hole, 0), min(press.end_hole, HOLES - 1) + 1)


@dataclass(slots=True)
class MatchTally:
    sides: list[Side]
    wins: list[int]
    played: list[int] = field(default_factory=list)
    remaining_weight: int = 0

    @property
    def complete(self) -> bool:
        return self.remaining_weight == 0

    def _ranked(self) -> list[int]:
        return sorted(range(len(self.sides)), key=lambda i: -self.wins[i])

    @property
    def leader(self) -> int | None:
        ranked = self._ranked()
        if not ranked:
            return None
        if len(ranked) > 1 and self.wins[ranked[0]] == self.wins[ranked[1]]:
            return None
        return ranked[0]

    @property
    def margin(self) -> int:
        ranked = self._ranked()
        if len(ranked) < 2:
            return 0
        return self.wins[ranked[0]] - self.wins[ranked[1]]

    @property
    def clinched(self) -> bool:
        return self.leader is not None and self.margin > self.remaining_weight

    @property
    def decided(self) -> bool:
        return self.clinched or (self.complete and bool(self.played))

    def deficit(self, index: int) -> int:
        return max(self.wins) - self.wins[index] if self.wins else 0


def side_score(scores: Mapping[str, int], side: Side) -> int:
    return min(scores[pid] for pid in side)


def tally_match(
    matrix: ScoreMatrix,
    sides: Sequence[Side],
    holes: range,
    weights: Sequence[int] | None = None,
) -> MatchTally:
    """Weighted outright hole wins per side; unplayed holes count toward the remaining weight."""
    sides = [tuple(s) for s in sides]
    everyone = [pid for side in sides for pid in side]
    tally = MatchTally(sides=list(sides), wins=[0] * len(sides))
    for h in holes:
        weight = weights[h] if weights is not None else 1
        scores = matrix.hole_scores(h, everyone)
        if scores is None:
            tally.remaining_weight += weight
            continue
        tally.played.append(h)
        side_scores = [side_score(scores, side) for side in sides]
        low = min(side_scores)
        if side_scores.count(low) == 1:
            tally.wins[side_scores.index(low)] += weight
    return tally


def settle_match(
    ledger: Ledger,
    matrix: ScoreMatrix,
    sides: Sequence[Side],
    holes: range,
    bet: Fraction,
    weights: Sequence[int] | None = None,
    note: str = "",
    split: bool = True,
) -> MatchTally:
    """Flat-bet match: paid once clinched or the range is complete, ties push.

    With ``split`` each loser spreads ``bet`` over the winners; otherwise each
    loser pays every winner the full bet.
    """
    tally = tally_match(matrix, sides, holes, weights)
    if not tally.decided:
        return tally
    winner = tally.leader
    if winner is None:
        logger.debug("%s halved over holes %d-%d", note or "match", holes.start, holes.stop - 1)
        return tally
    losers = [pid for i, side in enumerate(tally.sides) if i != winner for pid in side]
    if split:
        ledger.team_payout(losers, tally.sides[winner], bet, note)
    else:
        for loser in losers:
            ledger.pay_each(loser, tally.sides[winner], bet, note)
    return tally


def settle_stroke(
    ledger: Ledger,
    matrix: ScoreMatrix,
    sides: Sequence[Side],
    holes: range,
    bet: Fraction,
    per_stroke: bool = False,
    note: str = "",
) -> list[int] | None:
    """Stroke comparison over a complete range.

    Flat mode pays ``bet`` from every other side to the unique low side;
    ``per_stroke`` pays ``bet`` per stroke of difference.
    """
    sides = [tuple(s) for s in sides]
    everyone = [pid for side in sides for pid in side]
    totals = [0] * len(sides)
    for h in holes:
        scores = matrix.hole_scores(h, everyone)
        if scores is None:
            return None
        for i, side in enumerate(sides):
            totals[i] += side_score(scores, side)
    if not totals:
        return totals
    low = min(totals)
    if totals.count(low) != 1:
        return totals
    winner = totals.index(low)
    for i, side in enumerate(sides):
        if i == winner:
            continue
        amount = bet * (totals[i] - low) if per_stroke else bet
        ledger.team_payout(side, sides[winner], amount, note)
    return totals
