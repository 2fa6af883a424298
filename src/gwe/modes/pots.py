from __future__ import annotations

import logging

from gwe.contracts import HOLES, ModeResult
from gwe.engine.context import ModeContext

logger = logging.getLogger(__name__)


def evaluate_skins(ctx: ModeContext) -> ModeResult:
    """Unique low score takes the hole's skin plus any carried ones; ties carry.

    Holes without a full set of scores are skipped and do not break the
    carry. Skins still carried after the last scored hole are void.
    """
    ledger = ctx.ledger()
    ids = ctx.player_ids
    if len(ids) < 2:
        return ctx.result(ledger)
    bet = ctx.money("bet_per_skin", 5)
    carry = 0
    for h in range(HOLES):
        scores = ctx.matrix.hole_scores(h, ids)
        if scores is None:
            continue
        low = min(scores.values())
        winners = [pid for pid, s in scores.items() if s == low]
        if len(winners) > 1:
            carry += 1
            logger.debug("%s hole %d tied, carrying %d", ctx.mode_key, h, carry)
            continue
        skins = 1 + carry
        carry = 0
        ledger.collect_from_each(winners[0], ids, bet * skins, f"skins hole {h + 1}")
    if carry:
        logger.debug("%s %d carried skins void at round end", ctx.mode_key, carry)
    return ctx.result(ledger)
