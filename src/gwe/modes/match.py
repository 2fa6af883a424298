"""Match-play families: Head-to-Head, Nassau, Best Ball and Sixes.

Every recorded press of the mode's own tag is settled as an extra,
independent match over its own hole range and bet, using the same method
(match or stroke) as the base bet.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from itertools import combinations
from typing import Sequence

from gwe.contracts import ModeResult, PressMatch, PressSegment
from gwe.core.money import Ledger, to_money
from gwe.engine.context import ModeContext
from gwe.engine.matchplay import Side, hole_weights, press_range, settle_match, settle_stroke
from gwe.engine.scoring import BACK, FRONT, ROUND, ScoreMatrix

logger = logging.getLogger(__name__)

SEGMENTS = {
    PressSegment.FRONT: FRONT,
    PressSegment.BACK: BACK,
    PressSegment.OVERALL: ROUND,
}

SIXES_PAIRINGS = (
    (range(0, 6), (0, 1), (2, 3)),
    (range(6, 12), (0, 2), (1, 3)),
    (range(12, 18), (0, 3), (1, 2)),
)


def _matrix(ctx: ModeContext) -> ScoreMatrix:
    if getattr(ctx.config, "use_handicaps", False):
        return ctx.matrix.with_handicaps(ctx.players)
    return ctx.matrix


def _settle(
    ctx: ModeContext,
    ledger: Ledger,
    matrix: ScoreMatrix,
    sides: Sequence[Side],
    holes: range,
    bet: Fraction,
    note: str,
    per_stroke: bool,
    weights: list[int],
) -> None:
    if getattr(ctx.config, "match_play", False):
        settle_match(ledger, matrix, sides, holes, bet, weights, note)
    else:
        settle_stroke(ledger, matrix, sides, holes, bet, per_stroke=per_stroke, note=note)


def _press_pair(ctx: ModeContext, press: PressMatch) -> Side | None:
    if press.pair is None:
        return None
    a, b = press.pair
    if a == b or not ctx.known(a) or not ctx.known(b):
        logger.warning("%s press %s names an unusable pair; skipped", ctx.mode_key, press.press_id)
        return None
    return (a, b)


def evaluate_head_to_head(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_amount", 5)
    matrix = _matrix(ctx)
    weights = hole_weights(ctx.aux, getattr(ctx.config, "hammer", False))
    for a, b in combinations(ctx.player_ids, 2):
        _settle(ctx, ledger, matrix, [(a,), (b,)], ROUND, bet, f"{a} v {b}", True, weights)
    for press in ctx.aux.presses_for(ctx.tag):
        pair = _press_pair(ctx, press)
        if pair is None:
            continue
        logger.debug("%s folding press %s", ctx.mode_key, press.press_id)
        _settle(ctx, ledger, matrix, [(pair[0],), (pair[1],)], press_range(press), to_money(press.bet_amount), f"press {press.press_id}", True, weights)
    return ctx.result(ledger)


def nassau_bets(ctx: ModeContext) -> dict[PressSegment, Fraction]:
    base = ctx.money("bet_amount", 5)
    return {
        PressSegment.FRONT: to_money(getattr(ctx.config, "bet_front", None), base),
        PressSegment.BACK: to_money(getattr(ctx.config, "bet_back", None), base),
        PressSegment.OVERALL: to_money(getattr(ctx.config, "bet_overall", None), base),
    }


def evaluate_nassau(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    if len(ctx.players) < 2:
        return ctx.result(ledger)
    matrix = _matrix(ctx)
    weights = hole_weights(ctx.aux, getattr(ctx.config, "hammer", False))
    sides = [(pid,) for pid in ctx.player_ids]
    for segment, bet in nassau_bets(ctx).items():
        _settle(ctx, ledger, matrix, sides, SEGMENTS[segment], bet, f"nassau {segment.value}", False, weights)
    for press in ctx.aux.presses_for(ctx.tag):
        pair = _press_pair(ctx, press)
        press_sides = [(pair[0],), (pair[1],)] if pair else sides
        logger.debug("%s folding press %s", ctx.mode_key, press.press_id)
        _settle(ctx, ledger, matrix, press_sides, press_range(press), to_money(press.bet_amount), f"press {press.press_id}", False, weights)
    return ctx.result(ledger)


def evaluate_best_ball(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    roster = ctx.roster()
    if roster is None:
        return ctx.result(ledger)
    bet = ctx.money("bet_amount", 5)
    weights = hole_weights(ctx.aux, getattr(ctx.config, "hammer", False))
    sides = [roster.team_a, roster.team_b]
    _settle(ctx, ledger, ctx.matrix, sides, ROUND, bet, "best ball", True, weights)
    for press in ctx.aux.presses_for(ctx.tag):
        logger.debug("%s folding press %s", ctx.mode_key, press.press_id)
        _settle(ctx, ledger, ctx.matrix, sides, press_range(press), to_money(press.bet_amount), f"press {press.press_id}", True, weights)
    return ctx.result(ledger)


def evaluate_sixes(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    ids = ctx.player_ids
    if len(ids) != 4:
        logger.debug("%s needs exactly four players, got %d", ctx.mode_key, len(ids))
        return ctx.result(ledger)
    bet = ctx.money("bet_per_segment", 5)
    for n, (holes, first, second) in enumerate(SIXES_PAIRINGS, start=1):
        sides = [tuple(ids[i] for i in first), tuple(ids[i] for i in second)]
        settle_match(ledger, ctx.matrix, sides, holes, bet, note=f"sixes segment {n}", split=False)
    return ctx.result(ledger)
