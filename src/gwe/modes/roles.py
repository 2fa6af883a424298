"""Role-rotation modes: Wolf and Banker."""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, Sequence

from gwe.contracts import HOLES, AuxState, ModeResult, ModeTag, Player, WolfConfig, WolfTieBreak
from gwe.core.money import to_money
from gwe.engine.context import ModeContext
from gwe.engine.matchplay import hammer_multiplier
from gwe.engine.scoring import ScoreMatrix

logger = logging.getLogger(__name__)

ROTATION_HOLES = 16


def _wolf_sides(wolf_id: str, partner_id: str | None, ids: Sequence[str]) -> tuple[list[str], list[str]]:
    team = [wolf_id] if partner_id is None else [wolf_id, partner_id]
    return team, [pid for pid in ids if pid not in team]


def _side_result(wolf_side: list[str], other_side: list[str], scores: dict[str, int]) -> int:
    """Negative when the wolf side wins, positive when it loses, zero for a push."""
    if len(wolf_side) == len(other_side):
        ours = sum(scores[pid] for pid in wolf_side)
        theirs = sum(scores[pid] for pid in other_side)
    else:
        ours = min(scores[pid] for pid in wolf_side)
        theirs = min(scores[pid] for pid in other_side)
    return ours - theirs


def evaluate_wolf(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    ids = ctx.player_ids
    bet = ctx.money("bet_per_hole", 1)
    hammer = getattr(ctx.config, "hammer", False)
    for h, pick in sorted(ctx.aux.wolf.items()):
        if not 0 <= h < HOLES:
            continue
        if not ctx.known(pick.wolf_id):
            logger.warning("%s hole %d names unknown wolf %s", ctx.mode_key, h, pick.wolf_id)
            continue
        if pick.partner_id is not None and (pick.partner_id == pick.wolf_id or not ctx.known(pick.partner_id)):
            logger.warning("%s hole %d has an unusable partner %s", ctx.mode_key, h, pick.partner_id)
            continue
        scores = ctx.matrix.hole_scores(h, ids)
        if scores is None:
            continue
        wolf_side, other_side = _wolf_sides(pick.wolf_id, pick.partner_id, ids)
        if not other_side:
            continue
        diff = _side_result(wolf_side, other_side, scores)
        if diff == 0:
            continue
        declaration = pick.effective_declaration
        stake = bet * declaration.multiplier
        if hammer:
            stake *= hammer_multiplier(ctx.aux.hammer.get(h, 1))
        winners, losers = (wolf_side, other_side) if diff < 0 else (other_side, wolf_side)
        for loser in losers:
            ledger.pay_each(loser, winners, stake, f"wolf hole {h + 1} {declaration.value}")
    return ctx.result(ledger)


def _tie_key(player: Player, tee_index: int, tie_break: WolfTieBreak) -> tuple[int, ...]:
    if tie_break is WolfTieBreak.REVERSE_TEE_ORDER:
        return (-tee_index,)
    if tie_break is WolfTieBreak.HIGHER_HANDICAP:
        return (-player.handicap, tee_index)
    return (tee_index,)


def wolf_rotation(
    players: Sequence[Player],
    matrix: ScoreMatrix,
    aux: AuxState,
    config: WolfConfig | None = None,
) -> list[str]:
    """Wolf for each hole: tee-order rotation, then the two trailing players pick.

    Hole 17 goes to the player in last place on Wolf money through hole 16,
    hole 18 to the player second from last. Ties follow ``late_tie_break``.
    """
    if not players:
        return []
    config = config or WolfConfig()
    ids = [p.player_id for p in players]
    order = [ids[h % len(ids)] for h in range(ROTATION_HOLES)]
    early = AuxState(wolf={h: w for h, w in aux.wolf.items() if h < ROTATION_HOLES}, hammer=aux.hammer)
    ctx = ModeContext(ModeTag.WOLF, ModeTag.WOLF.value, tuple(players), matrix, early, config)
    standings = evaluate_wolf(ctx).net
    tie_break = config.late_tie_break
    ranked = sorted(
        enumerate(players),
        key=lambda item: (standings[item[1].player_id], *_tie_key(item[1], item[0], tie_break)),
    )
    trailing = [p.player_id for _, p in ranked]
    order.append(trailing[0])
    order.append(trailing[1] if len(trailing) > 1 else trailing[0])
    return order


def evaluate_banker(ctx: ModeContext) -> ModeResult:
    ledger = ctx.ledger()
    default_bet = ctx.money("bet_amount", 5)
    hammer = getattr(ctx.config, "hammer", False)
    for h, pick in sorted(ctx.aux.banker.items()):
        if not 0 <= h < HOLES or pick.banker_id is None:
            continue
        if not ctx.known(pick.banker_id):
            logger.warning("%s hole %d names unknown banker %s", ctx.mode_key, h, pick.banker_id)
            continue
        banker_score = ctx.matrix.strokes(pick.banker_id, h)
        if banker_score is None:
            continue
        stake = _banker_stake(pick.bet_override, default_bet)
        if hammer:
            stake *= hammer_multiplier(ctx.aux.hammer.get(h, 1))
        for pid in ctx.player_ids:
            if pid == pick.banker_id:
                continue
            score = ctx.matrix.strokes(pid, h)
            if score is None or score == banker_score:
                continue
            if score < banker_score:
                ledger.transfer(pick.banker_id, pid, stake, f"banker hole {h + 1}")
            else:
                ledger.transfer(pid, pick.banker_id, stake, f"banker hole {h + 1}")
    return ctx.result(ledger)


def _banker_stake(override: Any, default_bet: Fraction) -> Fraction:
    if override is None:
        return default_bet
    stake = to_money(override, default_bet)
    return stake if stake >= 0 else default_bet
