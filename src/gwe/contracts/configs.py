from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Mapping

from gwe.contracts.types import ModeTag, TroubleType, WolfTieBreak

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class KeepScoreConfig:
    tag: ClassVar[ModeTag] = ModeTag.KEEP_SCORE


@dataclass(frozen=True, slots=True)
class TaxManConfig:
    tag: ClassVar[ModeTag] = ModeTag.TAXMAN
    tax_amount: Any = 10


@dataclass(frozen=True, slots=True)
class HeadToHeadConfig:
    tag: ClassVar[ModeTag] = ModeTag.HEAD_TO_HEAD
    bet_amount: Any = 5
    match_play: bool = True
    use_handicaps: bool = False
    auto_press: bool = False
    press_trigger: int = 2
    hammer: bool = False


@dataclass(frozen=True, slots=True)
class NassauConfig:
    tag: ClassVar[ModeTag] = ModeTag.NASSAU
    bet_amount: Any = 5
    bet_front: Any = None
    bet_back: Any = None
    bet_overall: Any = None
    match_play: bool = False
    use_handicaps: bool = False
    auto_press: bool = False
    press_trigger: int = 2
    hammer: bool = False


@dataclass(frozen=True, slots=True)
class SkinsConfig:
    tag: ClassVar[ModeTag] = ModeTag.SKINS
    bet_per_skin: Any = 5


@dataclass(frozen=True, slots=True)
class WolfConfig:
    tag: ClassVar[ModeTag] = ModeTag.WOLF
    bet_per_hole: Any = 1
    hammer: bool = False
    late_tie_break: WolfTieBreak = WolfTieBreak.TEE_ORDER


@dataclass(frozen=True, slots=True)
class BingoBangoBongoConfig:
    tag: ClassVar[ModeTag] = ModeTag.BINGO_BANGO_BONGO
    bet_per_point: Any = 1


@dataclass(frozen=True, slots=True)
class SnakeConfig:
    tag: ClassVar[ModeTag] = ModeTag.SNAKE
    snake_amount: Any = 5


@dataclass(frozen=True, slots=True)
class VegasConfig:
    tag: ClassVar[ModeTag] = ModeTag.VEGAS
    bet_per_point: Any = 1
    flip_bird: bool = False
    hammer: bool = False
    team_a: tuple[str, ...] = ()
    team_b: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BestBallConfig:
    tag: ClassVar[ModeTag] = ModeTag.BEST_BALL
    bet_amount: Any = 5
    match_play: bool = False
    auto_press: bool = False
    press_trigger: int = 2
    hammer: bool = False
    team_a: tuple[str, ...] = ()
    team_b: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class StablefordConfig:
    tag: ClassVar[ModeTag] = ModeTag.STABLEFORD
    bet_amount: Any = 1


@dataclass(frozen=True, slots=True)
class RabbitConfig:
    tag: ClassVar[ModeTag] = ModeTag.RABBIT
    rabbit_amount: Any = 5


@dataclass(frozen=True, slots=True)
class DotsConfig:
    tag: ClassVar[ModeTag] = ModeTag.DOTS
    bet_per_dot: Any = 1
    eagle: bool = True
    birdie: bool = True
    sandy: bool = True
    greenie: bool = True


@dataclass(frozen=True, slots=True)
class SixesConfig:
    tag: ClassVar[ModeTag] = ModeTag.SIXES
    bet_per_segment: Any = 5


@dataclass(frozen=True, slots=True)
class NinesConfig:
    tag: ClassVar[ModeTag] = ModeTag.NINES
    bet_per_point: Any = 1


@dataclass(frozen=True, slots=True)
class ScotchConfig:
    tag: ClassVar[ModeTag] = ModeTag.SCOTCH
    bet_per_point: Any = 1
    team_a: tuple[str, ...] = ()
    team_b: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CtpConfig:
    tag: ClassVar[ModeTag] = ModeTag.CTP
    bet_amount: Any = 5


@dataclass(frozen=True, slots=True)
class AcesDeucesConfig:
    tag: ClassVar[ModeTag] = ModeTag.ACES_DEUCES
    bet_per_hole: Any = 2


@dataclass(frozen=True, slots=True)
class QuotaConfig:
    tag: ClassVar[ModeTag] = ModeTag.QUOTA
    bet_per_point: Any = 1
    quotas: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TroubleConfig:
    tag: ClassVar[ModeTag] = ModeTag.TROUBLE
    bet_amount: Any = 1
    trouble_types: frozenset[TroubleType] = frozenset(TroubleType)


@dataclass(frozen=True, slots=True)
class ArniesConfig:
    tag: ClassVar[ModeTag] = ModeTag.ARNIES
    bet_amount: Any = 5


@dataclass(frozen=True, slots=True)
class BankerConfig:
    tag: ClassVar[ModeTag] = ModeTag.BANKER
    bet_amount: Any = 5
    hammer: bool = False


CONFIG_TYPES: dict[ModeTag, type] = {
    cls.tag: cls
    for cls in (
        KeepScoreConfig,
        HeadToHeadConfig,
        TaxManConfig,
        NassauConfig,
        SkinsConfig,
        WolfConfig,
        BingoBangoBongoConfig,
        SnakeConfig,
        VegasConfig,
        BestBallConfig,
        StablefordConfig,
        RabbitConfig,
        DotsConfig,
        SixesConfig,
        NinesConfig,
        ScotchConfig,
        CtpConfig,
        AcesDeucesConfig,
        QuotaConfig,
        TroubleConfig,
        ArniesConfig,
        BankerConfig,
    )
}


def _coerce(name: str, value: Any) -> Any:
    if name in {"team_a", "team_b"}:
        return tuple(str(v) for v in value or ())
    if name == "trouble_types":
        return frozenset(TroubleType(v) for v in value)
    if name == "late_tie_break":
        return WolfTieBreak(value)
    if name == "quotas":
        return {str(k): int(v) for k, v in dict(value).items()}
    if name == "press_trigger":
        return int(value)
    return value


def _coerce_fields(tag: ModeTag, data: Mapping[str, Any] | None) -> tuple[dict[str, Any], dict[str, str]]:
    known = {f.name for f in fields(CONFIG_TYPES[tag])}
    kwargs: dict[str, Any] = {}
    errors: dict[str, str] = {}
    for name, value in dict(data or {}).items():
        if name not in known:
            continue
        try:
            kwargs[name] = _coerce(name, value)
        except (TypeError, ValueError, OverflowError) as exc:
            errors[name] = f"{value!r} is not usable for {name}: {exc}"
    return kwargs, errors


def invalid_config_fields(tag: ModeTag, data: Mapping[str, Any] | None) -> dict[str, str]:
    """Known fields whose values cannot be coerced, mapped to a reason."""
    return _coerce_fields(tag, data)[1]


def config_from_mapping(tag: ModeTag, data: Mapping[str, Any] | None) -> Any:
    """Build the tag's config from a plain mapping.

    Keys it does not know are dropped; values it cannot coerce fall back to
    the field default.
    """
    kwargs, errors = _coerce_fields(tag, data)
    for name, reason in sorted(errors.items()):
        logger.warning("%s config: %s; using default", tag.value, reason)
    return CONFIG_TYPES[tag](**kwargs)


def config_to_mapping(config: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(config):
        value = getattr(config, f.name)
        if isinstance(value, frozenset):
            value = sorted(v.value for v in value)
        elif isinstance(value, tuple):
            value = list(value)
        elif isinstance(value, WolfTieBreak):
            value = value.value
        elif isinstance(value, Mapping):
            value = dict(value)
        elif value is not None and not isinstance(value, (bool, int, str)):
            value = str(value)
        out[f.name] = value
    return out
