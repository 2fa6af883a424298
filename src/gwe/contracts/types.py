from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from fractions import Fraction
from typing import Any, Mapping, Sequence

HOLES = 18


class ModeTag(str, Enum):
    KEEP_SCORE = "keep-score"
    HEAD_TO_HEAD = "head-to-head"
    TAXMAN = "taxman"
    NASSAU = "nassau"
    SKINS = "skins"
    WOLF = "wolf"
    BINGO_BANGO_BONGO = "bingo-bango-bongo"
    SNAKE = "snake"
    VEGAS = "vegas"
    BEST_BALL = "best-ball"
    STABLEFORD = "stableford"
    RABBIT = "rabbit"
    DOTS = "dots"
    SIXES = "sixes"
    NINES = "nines"
    SCOTCH = "scotch"
    CTP = "ctp"
    ACES_DEUCES = "aces-deuces"
    QUOTA = "quota"
    TROUBLE = "trouble"
    ARNIES = "arnies"
    BANKER = "banker"


class TroubleType(str, Enum):
    OB = "ob"
    WATER = "water"
    THREE_PUTT = "three-putt"
    SAND = "sand"
    LOST_BALL = "lost-ball"


class WolfDeclaration(str, Enum):
    PARTNER = "partner"
    SOLO = "solo"
    LONE = "lone"
    BLIND = "blind"

    @property
    def multiplier(self) -> int:
        return _WOLF_MULTIPLIERS[self]


_WOLF_MULTIPLIERS = {
    WolfDeclaration.PARTNER: 1,
    WolfDeclaration.SOLO: 2,
    WolfDeclaration.LONE: 3,
    WolfDeclaration.BLIND: 4,
}


class WolfTieBreak(str, Enum):
    TEE_ORDER = "tee-order"
    REVERSE_TEE_ORDER = "reverse-tee-order"
    HIGHER_HANDICAP = "higher-handicap"


class PressSegment(str, Enum):
    FRONT = "front"
    BACK = "back"
    OVERALL = "overall"
    MATCH = "match"


@dataclass(frozen=True, slots=True)
class Player:
    player_id: str
    name: str
    handicap: int = 0
    tax_man: int = 90
    payment_handles: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TeamRoster:
    team_a: tuple[str, ...]
    team_b: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class WolfHole:
    wolf_id: str
    partner_id: str | None = None
    declaration: WolfDeclaration | None = None

    @property
    def effective_declaration(self) -> WolfDeclaration:
        if self.partner_id is not None:
            return WolfDeclaration.PARTNER
        if self.declaration is None or self.declaration is WolfDeclaration.PARTNER:
            return WolfDeclaration.SOLO
        return self.declaration


@dataclass(frozen=True, slots=True)
class BingoBangoBongoHole:
    bingo: str | None = None
    bango: str | None = None
    bongo: str | None = None

    def awards(self) -> list[str]:
        return [pid for pid in (self.bingo, self.bango, self.bongo) if pid is not None]


@dataclass(frozen=True, slots=True)
class BankerHole:
    banker_id: str | None
    bet_override: Any = None


@dataclass(frozen=True, slots=True)
class DotsHole:
    sandy: frozenset[str] = frozenset()
    greenie: str | None = None


@dataclass(frozen=True, slots=True)
class PressMatch:
    mode: ModeTag
    segment: PressSegment
    start_hole: int
    end_hole: int
    bet_amount: Any
    pair: tuple[str, str] | None = None

    @property
    def press_id(self) -> str:
        pair = "-".join(self.pair) if self.pair else "all"
        return f"{self.mode.value}:{self.segment.value}:{pair}:{self.start_hole}-{self.end_hole}"

    def covers(self, hole: int) -> bool:
        return self.start_hole <= hole <= self.end_hole


@dataclass(frozen=True, slots=True)
class AuxState:
    wolf: Mapping[int, WolfHole] = field(default_factory=dict)
    bingo_bango_bongo: Mapping[int, BingoBangoBongoHole] = field(default_factory=dict)
    snake: Mapping[int, Sequence[str]] = field(default_factory=dict)
    ctp: Mapping[int, str] = field(default_factory=dict)
    trouble: Mapping[int, Mapping[str, Sequence[TroubleType]]] = field(default_factory=dict)
    arnies: Mapping[int, frozenset[str]] = field(default_factory=dict)
    banker: Mapping[int, BankerHole] = field(default_factory=dict)
    dots: Mapping[int, DotsHole] = field(default_factory=dict)
    teams: Mapping[ModeTag, TeamRoster] = field(default_factory=dict)
    presses: tuple[PressMatch, ...] = ()
    hammer: Mapping[int, int] = field(default_factory=dict)

    def presses_for(self, mode: ModeTag) -> list[PressMatch]:
        return [p for p in self.presses if p.mode == mode]


@dataclass(slots=True)
class ActiveMode:
    tag: ModeTag
    config: Any = None
    mode_key: str | None = None


@dataclass(slots=True)
class GameSetup:
    players: list[Player]
    modes: list[ActiveMode]

    @property
    def player_ids(self) -> list[str]:
        return [p.player_id for p in self.players]


@dataclass(frozen=True, slots=True)
class Transfer:
    payer: str
    payee: str
    amount: Fraction
    note: str = ""


@dataclass(slots=True)
class ModeResult:
    mode_key: str
    tag: ModeTag
    label: str
    net: dict[str, Fraction]
    transfers: list[Transfer] = field(default_factory=list)

    @property
    def balance(self) -> Fraction:
        return sum(self.net.values(), Fraction(0))


@dataclass(slots=True)
class CombinedResult:
    net: dict[str, Fraction]
    modes: list[ModeResult]

    def breakdown(self) -> dict[str, dict[str, Fraction]]:
        return {m.mode_key: dict(m.net) for m in self.modes}

    def mode(self, mode_key: str) -> ModeResult:
        for m in self.modes:
            if m.mode_key == mode_key:
                return m
        raise KeyError(mode_key)


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


@dataclass(slots=True)
class ForensicArtifact:
    artifact_id: str
    timestamp: datetime
    engine_scope: str
    error_code: str
    message: str
    state_snapshot: Mapping[str, Any]
    context: Mapping[str, Any]
    identifiers: Mapping[str, str]
    causal_fragment: Sequence[str]
