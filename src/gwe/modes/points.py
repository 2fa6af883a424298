"""Point-distribution modes: Vegas, Scotch, Nines and Bingo Bango Bongo."""

from __future__ import annotations

import logging
from fractions import Fraction
from itertools import combinations
from typing import Sequence

from gwe.contracts import HOLES, ModeResult
from gwe.engine.context import ModeContext
from gwe.engine.matchplay import hammer_multiplier

logger = logging.getLogger(__name__)

NINES_POINTS = (5, 3, 1)
NINES_ALL_TIE = 3
SCOTCH_LOW_BALL = 2
SCOTCH_LOW_TOTAL = 3


def vegas_number(scores: Sequence[int], par: int, force_high: bool = False) -> int:
    """Concatenate a team's two scores into its Vegas number.

    Low digit leads when anyone made par or better, unless ``force_high``.
    A double-digit score is placed whole, high score first.
    """
    ordered = sorted(scores)[:2]
    if len(ordered) == 1:
        ordered = ordered * 2
    lo, hi = ordered
    if hi >= 10:
        return int(f"{hi}{lo}")
    if not force_high and lo <= par:
        return lo * 10 + hi
    return hi * 10 + lo


def vegas_hole_points(a: Sequence[int], b: Sequence[int], par: int, flip_bird: bool = False) -> int:
    """Points team A gains on the hole; negative means team B gains them."""
    num_a = vegas_number(a, par)
    num_b = vegas_number(b, par)
    if flip_bird:
        a_bird = min(a) < par
        b_bird = min(b) < par
        if a_bird and not b_bird:
            num_b = vegas_number(b, par, force_high=True)
        elif b_bird and not a_bird:
            num_a = vegas_number(a, par, force_high=True)
    return num_b - num_a


def evaluate_vegas(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    roster = ctx.roster()
    if roster is None:
        return ctx.result(ledger)
    bet = ctx.money("bet_per_point", 1)
    flip = getattr(ctx.config, "flip_bird", False)
    hammer = getattr(ctx.config, "hammer", False)
    everyone = [*roster.team_a, *roster.team_b]
    points = 0
    for h in range(HOLES):
        scores = ctx.matrix.hole_scores(h, everyone)
        if scores is None:
            continue
        hole = vegas_hole_points(
            [scores[pid] for pid in roster.team_a],
            [scores[pid] for pid in roster.team_b],
            ctx.matrix.par(h),
            flip,
        )
        if hammer:
            hole *= hammer_multiplier(ctx.aux.hammer.get(h, 1))
        points += hole
    if points > 0:
        ledger.team_payout(roster.team_b, roster.team_a, points * bet, "vegas")
    elif points < 0:
        ledger.team_payout(roster.team_a, roster.team_b, -points * bet, "vegas")
    return ctx.result(ledger)


def evaluate_scotch(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    roster = ctx.roster()
    if roster is None:
        return ctx.result(ledger)
    if len(roster.team_a) < 2 or len(roster.team_b) < 2:
        logger.warning("%s needs teams of at least two; contributing zero", ctx.mode_key)
        return ctx.result(ledger)
    bet = ctx.money("bet_per_point", 1)
    everyone = [*roster.team_a, *roster.team_b]
    points = 0
    for h in range(HOLES):
        scores = ctx.matrix.hole_scores(h, everyone)
        if scores is None:
            continue
        a = [scores[pid] for pid in roster.team_a]
        b = [scores[pid] for pid in roster.team_b]
        if min(a) != min(b):
            points += SCOTCH_LOW_BALL if min(a) < min(b) else -SCOTCH_LOW_BALL
        if sum(a) != sum(b):
            points += SCOTCH_LOW_TOTAL if sum(a) < sum(b) else -SCOTCH_LOW_TOTAL
    if points > 0:
        ledger.team_payout(roster.team_b, roster.team_a, points * bet, "scotch")
    elif points < 0:
        ledger.team_payout(roster.team_a, roster.team_b, -points * bet, "scotch")
    return ctx.result(ledger)


def nines_hole_points(scores: dict[str, int]) -> dict[str, Fraction]:
    """5/3/1 by rank, tied players pool the places they share; an all-tie hole is 3 each."""
    if len(set(scores.values())) == 1:
        return {pid: Fraction(NINES_ALL_TIE) for pid in scores}
    buckets = list(NINES_POINTS) + [0] * max(0, len(scores) - len(NINES_POINTS))
    out: dict[str, Fraction] = {}
    place = 0
    for value in sorted(set(scores.values())):
        group = [pid for pid, s in scores.items() if s == value]
        share = Fraction(sum(buckets[place:place + len(group)]), len(group))
        for pid in group:
            out[pid] = share
        place += len(group)
    return out


def evaluate_nines(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    ids = ctx.player_ids
    if len(ids) < 2:
        return ctx.result(ledger)
    bet = ctx.money("bet_per_point", 1)
    totals = {pid: Fraction(0) for pid in ids}
    for h in range(HOLES):
        scores = ctx.matrix.hole_scores(h, ids)
        if scores is None:
            continue
        for pid, pts in nines_hole_points(scores).items():
            totals[pid] += pts
    for a, b in combinations(ids, 2):
        ledger.transfer(b, a, (totals[a] - totals[b]) * bet, "nines")
    return ctx.result(ledger)


def evaluate_bingo_bango_bongo(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_per_point", 1)
    points = {pid: 0 for pid in ctx.player_ids}
    for hole, awards in sorted(ctx.aux.bingo_bango_bongo.items()):
        if not 0 <= hole < HOLES:
            continue
        for pid in awards.awards():
            if pid in points:
                points[pid] += 1
            else:
                logger.warning("%s award on hole %d for unknown player %s", ctx.mode_key, hole, pid)
    if not points or not any(points.values()):
        return ctx.result(ledger)
    best = max(points.values())
    top = [pid for pid, pts in points.items() if pts == best]
    for pid, pts in points.items():
        if pid in top:
            continue
        share = Fraction((best - pts) * bet, len(top))
        ledger.pay_each(pid, top, share, "bingo bango bongo")
    return ctx.result(ledger)
