"""Settlement snapshots: the opaque record handed to persistence.

A record stores the round's inputs next to the result they produced so the
same ``CombinedResult`` can be re-derived later.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from fractions import Fraction
from pathlib import Path
from typing import Any, Mapping, Sequence

from gwe.contracts import (
    HOLES,
    ActiveMode,
    AuxState,
    BankerHole,
    BingoBangoBongoHole,
    CombinedResult,
    DotsHole,
    GameSetup,
    ModeTag,
    Player,
    PressMatch,
    PressSegment,
    TeamRoster,
    TroubleType,
    WolfDeclaration,
    WolfHole,
    config_to_mapping,
)
from gwe.core.ids import IdKind, make_id, now_utc
from gwe.engine.aggregator import SettlementEngine
from gwe.engine.registry import assign_mode_keys, known_modes, resolve_config
from gwe.engine.scoring import ScoreMatrix

SNAPSHOT_VERSION = 1


@dataclass(frozen=True, slots=True)
class HoleTracking:
    fairway: bool | None = None
    green: bool | None = None
    putts: int | None = None


@dataclass(slots=True)
class SettlementRecord:
    record_id: str
    saved_at: datetime
    players: list[Player]
    pars: list[int]
    modes: list[ActiveMode]
    scores: dict[str, list[int | None]]
    aux: AuxState
    combined: dict[str, Fraction]
    breakdown: dict[str, dict[str, Fraction]]
    tracking: dict[str, list[HoleTracking]] = field(default_factory=dict)

    @property
    def setup(self) -> GameSetup:
        return GameSetup(players=list(self.players), modes=list(self.modes))

    def matrix(self) -> ScoreMatrix:
        return ScoreMatrix(self.scores, self.pars)


def build_record(
    setup: GameSetup,
    scores: Mapping[str, Sequence[int | None]],
    pars: Sequence[int],
    aux: AuxState | None = None,
    tracking: Mapping[str, Sequence[HoleTracking]] | None = None,
    engine: SettlementEngine | None = None,
) -> SettlementRecord:
    aux = aux or AuxState()
    modes = known_modes(setup.modes)
    keyed = [
        ActiveMode(tag=ModeTag(m.tag), config=resolve_config(ModeTag(m.tag), m.config), mode_key=key)
        for m, key in zip(modes, assign_mode_keys(modes))
    ]
    rows = {pid: list(row) for pid, row in scores.items()}
    record = SettlementRecord(
        record_id=make_id(IdKind.ROUND),
        saved_at=now_utc(),
        players=list(setup.players),
        pars=list(pars),
        modes=keyed,
        scores=rows,
        aux=aux,
        combined={},
        breakdown={},
        tracking={pid: list(holes) for pid, holes in (tracking or {}).items()},
    )
    result = (engine or SettlementEngine()).combine(record.setup, record.matrix(), aux)
    record.combined = dict(result.net)
    record.breakdown = result.breakdown()
    return record


def resettle(record: SettlementRecord, engine: SettlementEngine | None = None) -> CombinedResult:
    return (engine or SettlementEngine()).combine(record.setup, record.matrix(), record.aux)


def verify_record(record: SettlementRecord, engine: SettlementEngine | None = None) -> bool:
    result = resettle(record, engine)
    return result.net == record.combined and result.breakdown() == record.breakdown


def _money(value: Fraction) -> str:
    return str(Fraction(value))


def _holes(mapping: Mapping[int, Any], encode) -> dict[str, Any]:
    return {str(h): encode(v) for h, v in sorted(mapping.items())}


def aux_to_dict(aux: AuxState) -> dict[str, Any]:
    return {
        "wolf": _holes(aux.wolf, lambda w: {
            "wolf_id": w.wolf_id,
            "partner_id": w.partner_id,
            "declaration": w.declaration.value if w.declaration else None,
        }),
        "bingo_bango_bongo": _holes(aux.bingo_bango_bongo, lambda b: {"bingo": b.bingo, "bango": b.bango, "bongo": b.bongo}),
        "snake": _holes(aux.snake, list),
        "ctp": _holes(aux.ctp, str),
        "trouble": _holes(aux.trouble, lambda t: {pid: [TroubleType(k).value for k in kinds] for pid, kinds in t.items()}),
        "arnies": _holes(aux.arnies, sorted),
        "banker": _holes(aux.banker, lambda b: {
            "banker_id": b.banker_id,
            "bet_override": None if b.bet_override is None else str(b.bet_override),
        }),
        "dots": _holes(aux.dots, lambda d: {"sandy": sorted(d.sandy), "greenie": d.greenie}),
        "teams": {ModeTag(tag).value: {"team_a": list(r.team_a), "team_b": list(r.team_b)} for tag, r in aux.teams.items()},
        "presses": [
            {
                "mode": p.mode.value,
                "segment": p.segment.value,
                "start_hole": p.start_hole,
                "end_hole": p.end_hole,
                "bet_amount": str(p.bet_amount),
                "pair": list(p.pair) if p.pair else None,
            }
            for p in aux.presses
        ],
        "hammer": _holes(aux.hammer, int),
    }


def _hole_map(data: Mapping[str, Any], decode) -> dict[int, Any]:
    out: dict[int, Any] = {}
    for key, value in data.items():
        hole = int(key)
        if not 0 <= hole < HOLES:
            raise ValueError(f"hole index out of range: {key}")
        out[hole] = decode(value)
    return out


def aux_from_dict(data: Mapping[str, Any]) -> AuxState:
    def wolf(v: Mapping[str, Any]) -> WolfHole:
        decl = v.get("declaration")
        return WolfHole(v["wolf_id"], v.get("partner_id"), WolfDeclaration(decl) if decl else None)

    def banker(v: Mapping[str, Any]) -> BankerHole:
        return BankerHole(v.get("banker_id"), v.get("bet_override"))

    presses = tuple(
        PressMatch(
            mode=ModeTag(p["mode"]),
            segment=PressSegment(p["segment"]),
            start_hole=int(p["start_hole"]),
            end_hole=int(p["end_hole"]),
            bet_amount=Fraction(str(p["bet_amount"])),
            pair=tuple(p["pair"]) if p.get("pair") else None,
        )
        for p in data.get("presses", ())
    )
    return AuxState(
        wolf=_hole_map(data.get("wolf", {}), wolf),
        bingo_bango_bongo=_hole_map(
            data.get("bingo_bango_bongo", {}), lambda v: BingoBangoBongoHole(v.get("bingo"), v.get("bango"), v.get("bongo"))
        ),
        snake=_hole_map(data.get("snake", {}), tuple),
        ctp=_hole_map(data.get("ctp", {}), str),
        trouble=_hole_map(
            data.get("trouble", {}), lambda v: {pid: tuple(TroubleType(k) for k in kinds) for pid, kinds in v.items()}
        ),
        arnies=_hole_map(data.get("arnies", {}), frozenset),
        banker=_hole_map(data.get("banker", {}), banker),
        dots=_hole_map(data.get("dots", {}), lambda v: DotsHole(frozenset(v.get("sandy", ())), v.get("greenie"))),
        teams={
            ModeTag(tag): TeamRoster(tuple(r.get("team_a", ())), tuple(r.get("team_b", ())))
            for tag, r in data.get("teams", {}).items()
        },
        presses=presses,
        hammer=_hole_map(data.get("hammer", {}), int),
    )


def record_to_dict(record: SettlementRecord) -> dict[str, Any]:
    return {
        "version": SNAPSHOT_VERSION,
        "record_id": record.record_id,
        "saved_at": record.saved_at.isoformat(),
        "players": [
            {
                "player_id": p.player_id,
                "name": p.name,
                "handicap": p.handicap,
                "tax_man": p.tax_man,
                "payment_handles": dict(p.payment_handles),
            }
            for p in record.players
        ],
        "pars": list(record.pars),
        "modes": [
            {"tag": ModeTag(m.tag).value, "mode_key": m.mode_key, "config": config_to_mapping(m.config)}
            for m in record.modes
        ],
        "scores": {pid: list(row) for pid, row in record.scores.items()},
        "aux": aux_to_dict(record.aux),
        "combined": {pid: _money(v) for pid, v in record.combined.items()},
        "breakdown": {key: {pid: _money(v) for pid, v in net.items()} for key, net in record.breakdown.items()},
        "tracking": {
            pid: [{"fairway": t.fairway, "green": t.green, "putts": t.putts} for t in holes]
            for pid, holes in record.tracking.items()
        },
    }


def record_from_dict(data: Mapping[str, Any]) -> SettlementRecord:
    """Parse a stored snapshot; any structural problem surfaces as ValueError."""
    if not isinstance(data, Mapping):
        raise ValueError("snapshot must be a mapping")
    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")
    try:
        players = [
            Player(
                player_id=str(p["player_id"]),
                name=str(p.get("name", p["player_id"])),
                handicap=int(p.get("handicap", 0)),
                tax_man=int(p.get("tax_man", 90)),
                payment_handles=dict(p.get("payment_handles", {})),
            )
            for p in data["players"]
        ]
        modes = []
        for m in data.get("modes", []):
            tag = ModeTag(m["tag"])
            modes.append(ActiveMode(tag=tag, config=resolve_config(tag, m.get("config") or {}), mode_key=m.get("mode_key")))
        saved_at = data.get("saved_at")
        return SettlementRecord(
            record_id=str(data.get("record_id") or make_id(IdKind.ROUND)),
            saved_at=datetime.fromisoformat(saved_at) if saved_at else now_utc(),
            players=players,
            pars=[int(p) for p in data["pars"]],
            modes=modes,
            scores={str(pid): [None if s is None else int(s) for s in row] for pid, row in data["scores"].items()},
            aux=aux_from_dict(data.get("aux") or {}),
            combined={pid: Fraction(str(v)) for pid, v in data.get("combined", {}).items()},
            breakdown={
                key: {pid: Fraction(str(v)) for pid, v in net.items()} for key, net in data.get("breakdown", {}).items()
            },
            tracking={
                pid: [HoleTracking(t.get("fairway"), t.get("green"), t.get("putts")) for t in holes]
                for pid, holes in data.get("tracking", {}).items()
            },
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed snapshot: {exc!r}") from exc


def save_record(record: SettlementRecord, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record_to_dict(record), indent=2), encoding="utf-8")
    return path


def load_record(path: Path) -> SettlementRecord:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"snapshot {path} is not valid JSON: {exc}") from exc
    return record_from_dict(data)
