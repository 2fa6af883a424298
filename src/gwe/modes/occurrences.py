"""Occurrence and holding side bets keyed off recorded events or score shapes."""

from __future__ import annotations

import logging

from gwe.contracts import HOLES, DotsHole, ModeResult, TroubleType
from gwe.engine.context import ModeContext

logger = logging.getLogger(__name__)


def _holes(mapping) -> list:
    return [(h, v) for h, v in sorted(mapping.items()) if 0 <= h < HOLES]


def snake_holder(ctx: ModeContext) -> str | None:
    holder = None
    for _, putters in _holes(ctx.aux.snake):
        known = [pid for pid in putters if ctx.known(pid)]
        if known:
            holder = known[-1]
    return holder


def evaluate_snake(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    holder = snake_holder(ctx)
    if holder is not None:
        ledger.pay_each(holder, ctx.player_ids, ctx.money("snake_amount", 5), "snake")
    return ctx.result(ledger)


def rabbit_holder(ctx: ModeContext) -> str | None:
    holder = None
    ids = ctx.player_ids
    for h in range(HOLES):
        scores = ctx.matrix.hole_scores(h, ids)
        if scores is None:
            continue
        low = min(scores.values())
        winners = [pid for pid, s in scores.items() if s == low]
        if len(winners) == 1:
            holder = winners[0]
    return holder


def evaluate_rabbit(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    if len(ctx.players) < 2:
        return ctx.result(ledger)
    holder = rabbit_holder(ctx)
    if holder is not None:
        ledger.collect_from_each(holder, ctx.player_ids, ctx.money("rabbit_amount", 5), "rabbit")
    return ctx.result(ledger)


def dots_for_hole(ctx: ModeContext, player_id: str, hole: int, flags: DotsHole | None) -> int:
    cfg = ctx.config
    to_par = ctx.matrix.to_par(player_id, hole)
    if to_par is None:
        return 0
    dots = 0
    if to_par <= -2:
        dots += 2 if getattr(cfg, "eagle", True) else 0
    elif to_par == -1:
        dots += 1 if getattr(cfg, "birdie", True) else 0
    if flags is not None:
        if getattr(cfg, "sandy", True) and player_id in flags.sandy:
            dots += 1
        if getattr(cfg, "greenie", True) and flags.greenie == player_id and ctx.matrix.par(hole) == 3 and to_par <= 0:
            dots += 1
    return dots


def evaluate_dots(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_per_dot", 1)
    for h in range(HOLES):
        flags = ctx.aux.dots.get(h)
        for pid in ctx.player_ids:
            dots = dots_for_hole(ctx, pid, h, flags)
            if dots:
                ledger.collect_from_each(pid, ctx.player_ids, bet * dots, f"dots hole {h + 1}")
    return ctx.result(ledger)


def evaluate_ctp(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_amount", 5)
    for h, winner in _holes(ctx.aux.ctp):
        if ctx.matrix.par(h) != 3:
            logger.debug("%s ignoring closest-to-pin on par %d hole %d", ctx.mode_key, ctx.matrix.par(h), h)
            continue
        if not ctx.known(winner):
            logger.warning("%s hole %d names unknown winner %s", ctx.mode_key, h, winner)
            continue
        ledger.collect_from_each(winner, ctx.player_ids, bet, f"ctp hole {h + 1}")
    return ctx.result(ledger)


def evaluate_aces_deuces(ctx: ModeContext) -> ModeResult:
    """Low score on a hole collects from every other player, high score pays every other player."""
    ledger = ctx.ledger()
    ids = ctx.player_ids
    bet = ctx.money("bet_per_hole", 2)
    for h in range(HOLES):
        scores = ctx.matrix.hole_scores(h, ids)
        if scores is None:
            continue
        low = min(scores.values())
        high = max(scores.values())
        if low == high:
            continue
        aces = [pid for pid, s in scores.items() if s == low]
        deuces = [pid for pid, s in scores.items() if s == high]
        for ace in aces:
            ledger.collect_from_each(ace, [pid for pid in ids if pid not in aces], bet, f"ace hole {h + 1}")
        for deuce in deuces:
            ledger.pay_each(deuce, [pid for pid in ids if pid not in deuces], bet, f"deuce hole {h + 1}")
    return ctx.result(ledger)


def evaluate_trouble(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_amount", 1)
    enabled = frozenset(TroubleType(t) for t in (getattr(ctx.config, "trouble_types", None) or TroubleType))
    for h, by_player in _holes(ctx.aux.trouble):
        for pid, kinds in by_player.items():
            if not ctx.known(pid):
                logger.warning("%s hole %d trouble for unknown player %s", ctx.mode_key, h, pid)
                continue
            for raw in kinds:
                try:
                    kind = TroubleType(raw)
                except ValueError:
                    logger.warning("%s hole %d unknown trouble type %r", ctx.mode_key, h, raw)
                    continue
                if kind in enabled:
                    ledger.pay_each(pid, ctx.player_ids, bet, f"trouble {kind.value} hole {h + 1}")
    return ctx.result(ledger)


def evaluate_arnies(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    bet = ctx.money("bet_amount", 5)
    for h, flagged in _holes(ctx.aux.arnies):
        if ctx.matrix.par(h) == 3:
            continue
        for pid in sorted(flagged):
            to_par = ctx.matrix.to_par(pid, h) if ctx.known(pid) else None
            if to_par is None or to_par > 0:
                continue
            ledger.collect_from_each(pid, ctx.player_ids, bet, f"arnie hole {h + 1}")
    return ctx.result(ledger)
