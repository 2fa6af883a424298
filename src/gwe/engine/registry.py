from __future__ import annotations

import logging
from dataclasses import is_dataclass
from typing import Any, Callable, Mapping

from gwe.contracts import CONFIG_TYPES, ActiveMode, ModeResult, ModeTag, config_from_mapping
from gwe.engine.context import ModeContext
from gwe.modes import (
    evaluate_aces_deuces,
    evaluate_arnies,
    evaluate_banker,
    evaluate_best_ball,
    evaluate_bingo_bango_bongo,
    evaluate_ctp,
    evaluate_dots,
    evaluate_head_to_head,
    evaluate_keep_score,
    evaluate_nassau,
    evaluate_nines,
    evaluate_quota,
    evaluate_rabbit,
    evaluate_scotch,
    evaluate_sixes,
    evaluate_skins,
    evaluate_snake,
    evaluate_stableford,
    evaluate_tax_man,
    evaluate_trouble,
    evaluate_vegas,
    evaluate_wolf,
)

logger = logging.getLogger(__name__)

Evaluator = Callable[[ModeContext], ModeResult]

EVALUATORS: dict[ModeTag, Evaluator] = {
    ModeTag.KEEP_SCORE: evaluate_keep_score,
    ModeTag.HEAD_TO_HEAD: evaluate_head_to_head,
    ModeTag.TAXMAN: evaluate_tax_man,
    ModeTag.NASSAU: evaluate_nassau,
    ModeTag.SKINS: evaluate_skins,
    ModeTag.WOLF: evaluate_wolf,
    ModeTag.BINGO_BANGO_BONGO: evaluate_bingo_bango_bongo,
    ModeTag.SNAKE: evaluate_snake,
    ModeTag.VEGAS: evaluate_vegas,
    ModeTag.BEST_BALL: evaluate_best_ball,
    ModeTag.STABLEFORD: evaluate_stableford,
    ModeTag.RABBIT: evaluate_rabbit,
    ModeTag.DOTS: evaluate_dots,
    ModeTag.SIXES: evaluate_sixes,
    ModeTag.NINES: evaluate_nines,
    ModeTag.SCOTCH: evaluate_scotch,
    ModeTag.CTP: evaluate_ctp,
    ModeTag.ACES_DEUCES: evaluate_aces_deuces,
    ModeTag.QUOTA: evaluate_quota,
    ModeTag.TROUBLE: evaluate_trouble,
    ModeTag.ARNIES: evaluate_arnies,
    ModeTag.BANKER: evaluate_banker,
}

MATCH_PLAY_TAGS = frozenset({ModeTag.HEAD_TO_HEAD, ModeTag.NASSAU, ModeTag.BEST_BALL})


def resolve_config(tag: ModeTag, config: Any) -> Any:
    """Typed config for ``tag``; mappings are converted, mismatched configs fall back to defaults."""
    expected = CONFIG_TYPES[tag]
    if config is None:
        return expected()
    if isinstance(config, expected):
        return config
    if isinstance(config, Mapping):
        return config_from_mapping(tag, config)
    if is_dataclass(config) and not isinstance(config, type):
        logger.warning("config %s attached to %s; using defaults", type(config).__name__, tag.value)
        return expected()
    logger.warning("unrecognised config %r for %s; using defaults", config, tag.value)
    return expected()


def assign_mode_keys(modes: list[ActiveMode]) -> list[str]:
    """Stable keys: explicit ``mode_key`` wins, repeated tags become ``tag#2``, ``tag#3``..."""
    keys: list[str] = []
    seen: dict[ModeTag, int] = {}
    taken: set[str] = set()
    for mode in modes:
        tag = ModeTag(mode.tag)
        seen[tag] = seen.get(tag, 0) + 1
        key = mode.mode_key or (tag.value if seen[tag] == 1 else f"{tag.value}#{seen[tag]}")
        n = seen[tag]
        while key in taken:
            n += 1
            key = f"{tag.value}#{n}"
        taken.add(key)
        keys.append(key)
    return keys


def known_modes(modes: list[ActiveMode]) -> list[ActiveMode]:
    """Active modes with a recognised tag; the rest are dropped with a warning."""
    out: list[ActiveMode] = []
    for mode in modes:
        try:
            ModeTag(mode.tag)
        except ValueError:
            logger.warning("unknown mode tag %r skipped", mode.tag)
            continue
        out.append(mode)
    return out
