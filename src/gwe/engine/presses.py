"""Auto-press detection.

The evaluators only consume presses; deciding that one should exist is a
separate pure step the caller runs after each change, appending whatever it
returns to ``AuxState.presses``.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from itertools import combinations
from typing import Sequence

from gwe.contracts import AuxState, GameSetup, ModeTag, PressMatch, PressSegment
from gwe.core.money import to_money
from gwe.engine.context import ModeContext
from gwe.engine.matchplay import Side, tally_match
from gwe.engine.registry import MATCH_PLAY_TAGS, assign_mode_keys, known_modes, resolve_config
from gwe.engine.scoring import BACK, FRONT, ROUND, ScoreMatrix

logger = logging.getLogger(__name__)

PRESS_SEGMENTS = ((PressSegment.FRONT, FRONT), (PressSegment.BACK, BACK))
DEFAULT_PRESS_TRIGGER = 2


def _already_pressed(existing: Sequence[PressMatch], tag: ModeTag, segment: PressSegment, pair, hole: int) -> bool:
    return any(p.mode == tag and p.segment == segment and p.pair == pair and p.covers(hole) for p in existing)


def _check(
    matrix: ScoreMatrix,
    sides: Sequence[Side],
    holes: range,
    trigger: int,
) -> int | None:
    """Next hole to press from, or None when nobody trails by ``trigger`` holes with holes left.

    Every hole counts once; hammer calls do not move a press.
    """
    everyone = [pid for side in sides for pid in side]
    current = matrix.last_complete_hole(everyone, holes)
    if current is None or current + 1 > holes.stop - 1:
        return None
    tally = tally_match(matrix, sides, range(holes.start, current + 1))
    worst = max(tally.deficit(i) for i in range(len(sides)))
    return current + 1 if worst >= trigger else None


def detect_presses(setup: GameSetup, scores: ScoreMatrix, aux: AuxState | None = None) -> list[PressMatch]:
    aux = aux or AuxState()
    found: list[PressMatch] = []
    modes = known_modes(setup.modes)
    for mode, key in zip(modes, assign_mode_keys(modes)):
        tag = ModeTag(mode.tag)
        if tag not in MATCH_PLAY_TAGS:
            continue
        config = resolve_config(tag, mode.config)
        if not (config.auto_press and config.match_play):
            continue
        ctx = ModeContext(tag, key, tuple(setup.players), scores, aux, config)
        found.extend(_detect_for_mode(ctx, [*aux.presses, *found]))
    for press in found:
        logger.debug("press proposed %s at %s", press.press_id, press.bet_amount)
    return found


def _press_trigger(ctx: ModeContext) -> int:
    raw = ctx.config.press_trigger
    try:
        return max(1, int(raw))
    except (TypeError, ValueError, OverflowError):
        logger.warning("%s press_trigger %r unusable; using %d", ctx.mode_key, raw, DEFAULT_PRESS_TRIGGER)
        return DEFAULT_PRESS_TRIGGER


def _detect_for_mode(ctx: ModeContext, existing: list[PressMatch]) -> list[PressMatch]:
    config = ctx.config
    trigger = _press_trigger(ctx)
    matrix = ctx.matrix.with_handicaps(ctx.players) if getattr(config, "use_handicaps", False) else ctx.matrix
    candidates: list[tuple[PressSegment, range, list[Side], tuple[str, str] | None, Fraction]] = []
    if ctx.tag is ModeTag.HEAD_TO_HEAD:
        bet = ctx.money("bet_amount", 5)
        for a, b in combinations(ctx.player_ids, 2):
            candidates.append((PressSegment.MATCH, ROUND, [(a,), (b,)], (a, b), bet))
    elif ctx.tag is ModeTag.NASSAU:
        if len(ctx.players) < 2:
            return []
        base = ctx.money("bet_amount", 5)
        bets = {
            PressSegment.FRONT: to_money(config.bet_front, base),
            PressSegment.BACK: to_money(config.bet_back, base),
        }
        sides = [(pid,) for pid in ctx.player_ids]
        for segment, holes in PRESS_SEGMENTS:
            candidates.append((segment, holes, sides, None, bets[segment]))
    else:
        roster = ctx.roster()
        if roster is None:
            return []
        bet = ctx.money("bet_amount", 5)
        for segment, holes in PRESS_SEGMENTS:
            candidates.append((segment, holes, [roster.team_a, roster.team_b], None, bet))

    out: list[PressMatch] = []
    for segment, holes, sides, pair, bet in candidates:
        start = _check(matrix, sides, holes, trigger)
        if start is None or _already_pressed(existing, ctx.tag, segment, pair, start):
            continue
        out.append(PressMatch(ctx.tag, segment, start, holes.stop - 1, bet, pair))
    return out
