"""Stroke-differential modes: Keep Score, Tax Man, Stableford and Quota."""

from __future__ import annotations

import logging
from itertools import combinations

from gwe.contracts import HOLES, ModeResult
from gwe.engine.context import ModeContext
from gwe.engine.scoring import ScoreMatrix

logger = logging.getLogger(__name__)

QUOTA_BASE = 36


def stableford_points(strokes: int, par: int) -> int:
    diff = strokes - par
    if diff <= -3:
        return 5
    return max(0, 2 - diff)


def _points(matrix: ScoreMatrix, player_id: str, holes) -> int:
    return sum(stableford_points(matrix.strokes(player_id, h), matrix.par(h)) for h in holes)


def evaluate_keep_score(ctx: ModeContext) -> ModeResult:
    return ctx.result(ctx.ledger())


def evaluate_tax_man(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    tax = ctx.money("tax_amount", 10)
    finished = [p for p in ctx.players if ctx.matrix.is_complete(p.player_id)]
    winners = [p.player_id for p in finished if ctx.matrix.total(p.player_id) < p.tax_man]
    losers = [p.player_id for p in finished if p.player_id not in winners]
    for loser in losers:
        ledger.pay_each(loser, winners, tax, "tax")
    return ctx.result(ledger)


def evaluate_stableford(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_amount", 1)
    ids = ctx.player_ids
    holes = [h for h in range(HOLES) if ctx.matrix.hole_scores(h, ids) is not None]
    if not holes or len(ids) < 2:
        return ctx.result(ledger)
    points = {pid: _points(ctx.matrix, pid, holes) for pid in ids}
    best = max(points.values())
    top = [pid for pid in ids if points[pid] == best]
    for loser in ids:
        if loser in top:
            continue
        for winner in top:
            ledger.transfer(loser, winner, (best - points[loser]) * bet, "stableford")
    return ctx.result(ledger)


def quota_target(ctx: ModeContext, player_id: str, handicap: int) -> int:
    quotas = getattr(ctx.config, "quotas", None) or {}
    if player_id in quotas:
        return int(quotas[player_id])
    return QUOTA_BASE - handicap


def evaluate_quota(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_per_point", 1)
    deviation: dict[str, int] = {}
    for p in ctx.players:
        if not ctx.matrix.is_complete(p.player_id):
            continue
        deviation[p.player_id] = _points(ctx.matrix, p.player_id, range(HOLES)) - quota_target(ctx, p.player_id, p.handicap)
    for a, b in combinations(deviation, 2):
        # negative amounts flip direction inside the ledger
        ledger.transfer(b, a, (deviation[a] - deviation[b]) * bet, "quota")
    return ctx.result(ledger)
