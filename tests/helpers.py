from __future__ import annotations

import random
from fractions import Fraction
from typing import Any, Mapping, Sequence

from gwe.contracts import (
    HOLES,
    ActiveMode,
    AuxState,
    BankerHole,
    BingoBangoBongoHole,
    DotsHole,
    GameSetup,
    ModeResult,
    ModeTag,
    Player,
    TroubleType,
    WolfHole,
)
from gwe.engine.aggregator import SettlementEngine
from gwe.engine.scoring import ScoreMatrix

FLAT_PARS = [4] * HOLES
COURSE_PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 4, 5]
FOURSOME = ("A", "B", "C", "D")


def make_players(*ids: str, handicaps: Mapping[str, int] | None = None) -> list[Player]:
    handicaps = handicaps or {}
    return [Player(player_id=pid, name=f"Player {pid}", handicap=handicaps.get(pid, 0)) for pid in ids]


def row(*strokes: int | None) -> list[int | None]:
    values = list(strokes)
    return values + [None] * (HOLES - len(values))


def flat(score: int, holes: int = HOLES) -> list[int | None]:
    return row(*([score] * holes))


def matrix(rows: Mapping[str, Sequence[int | None]], pars: Sequence[int] | None = None) -> ScoreMatrix:
    return ScoreMatrix(rows, pars or FLAT_PARS)


def run_mode(
    tag: ModeTag,
    players: list[Player],
    rows: Mapping[str, Sequence[int | None]],
    config: Any = None,
    aux: AuxState | None = None,
    pars: Sequence[int] | None = None,
) -> ModeResult:
    setup = GameSetup(players=players, modes=[ActiveMode(tag, config)])
    return SettlementEngine(strict=True).combine(setup, matrix(rows, pars), aux).modes[0]


def random_rows(ids: Sequence[str], seed: int, holes: int = HOLES) -> dict[str, list[int | None]]:
    rng = random.Random(seed)
    return {pid: row(*(rng.randint(2, 8) for _ in range(holes))) for pid in ids}


def busy_aux() -> AuxState:
    """Aux state touching every event-driven mode for a foursome A-D."""
    return AuxState(
        wolf={
            0: WolfHole("A", "B"),
            1: WolfHole("B"),
            2: WolfHole("C", declaration=None),
            3: WolfHole("D", declaration=None),
        },
        bingo_bango_bongo={0: BingoBangoBongoHole("A", "B", "C"), 1: BingoBangoBongoHole("D", "D", "A")},
        snake={2: ("B",), 5: ("C", "A")},
        ctp={2: "D", 6: "A"},
        trouble={1: {"A": (TroubleType.WATER, TroubleType.OB)}, 4: {"C": (TroubleType.SAND,)}},
        arnies={0: frozenset({"B"}), 3: frozenset({"A", "C"})},
        banker={0: BankerHole("A"), 1: BankerHole("B", bet_override=Fraction(10))},
        dots={2: DotsHole(sandy=frozenset({"A"}), greenie="D")},
        hammer={0: 2, 4: 4},
    )


def all_modes(team_a: tuple[str, ...] = ("A", "B"), team_b: tuple[str, ...] = ("C", "D")) -> list[ActiveMode]:
    team_config = {"team_a": list(team_a), "team_b": list(team_b)}
    out = []
    for tag in ModeTag:
        config: dict[str, Any] = {}
        if tag in {ModeTag.VEGAS, ModeTag.BEST_BALL, ModeTag.SCOTCH}:
            config.update(team_config)
        if tag in {ModeTag.NASSAU, ModeTag.HEAD_TO_HEAD, ModeTag.BEST_BALL}:
            config.update({"match_play": True, "auto_press": True, "hammer": True})
        if tag in {ModeTag.VEGAS, ModeTag.WOLF, ModeTag.BANKER}:
            config["hammer"] = True
        out.append(ActiveMode(tag, config))
    return out
