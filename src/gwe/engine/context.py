from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any

from gwe.contracts import AuxState, ModeResult, ModeTag, Player, TeamRoster
from gwe.core.money import Ledger, to_money
from gwe.engine.scoring import ScoreMatrix

logger = logging.getLogger(__name__)

MODE_LABELS = {
    ModeTag.KEEP_SCORE: "Keep Score",
    ModeTag.HEAD_TO_HEAD: "Head-to-Head",
    ModeTag.TAXMAN: "Tax Man",
    ModeTag.NASSAU: "Nassau",
    ModeTag.SKINS: "Skins",
    ModeTag.WOLF: "Wolf",
    ModeTag.BINGO_BANGO_BONGO: "Bingo Bango Bongo",
    ModeTag.SNAKE: "Snake",
    ModeTag.VEGAS: "Vegas",
    ModeTag.BEST_BALL: "Best Ball",
    ModeTag.STABLEFORD: "Stableford",
    ModeTag.RABBIT: "Rabbit",
    ModeTag.DOTS: "Dots",
    ModeTag.SIXES: "Sixes",
    ModeTag.NINES: "Nines",
    ModeTag.SCOTCH: "Scotch",
    ModeTag.CTP: "Closest to Pin",
    ModeTag.ACES_DEUCES: "Aces & Deuces",
    ModeTag.QUOTA: "Quota",
    ModeTag.TROUBLE: "Trouble",
    ModeTag.ARNIES: "Arnies",
    ModeTag.BANKER: "Banker",
}


@dataclass(frozen=True, slots=True)
class ModeContext:
    """Everything one evaluator call may read."""

    tag: ModeTag
    mode_key: str
    players: tuple[Player, ...]
    matrix: ScoreMatrix
    aux: AuxState
    config: Any

    @property
    def player_ids(self) -> list[str]:
        return [p.player_id for p in self.players]

    @property
    def label(self) -> str:
        return MODE_LABELS[self.tag]

    def money(self, field_name: str, default: Any = 0) -> Fraction:
        return to_money(getattr(self.config, field_name, default), default)

    def ledger(self) -> Ledger:
        return Ledger(self.player_ids)

    def result(self, ledger: Ledger) -> ModeResult:
        return ledger.result(self.mode_key, self.tag, self.label)

    def known(self, player_id: str | None) -> bool:
        return player_id is not None and player_id in self.player_ids

    def roster(self) -> TeamRoster | None:
        """Two disjoint, non-empty teams of known players, or None."""
        roster = self.aux.teams.get(self.tag)
        if roster is None:
            roster = TeamRoster(tuple(getattr(self.config, "team_a", ())), tuple(getattr(self.config, "team_b", ())))
        ids = set(self.player_ids)
        unknown = [pid for pid in (*roster.team_a, *roster.team_b) if pid not in ids]
        if unknown:
            logger.warning("%s roster names unknown players %s; ignoring them", self.mode_key, unknown)
        team_a = tuple(dict.fromkeys(pid for pid in roster.team_a if pid in ids))
        team_b = tuple(dict.fromkeys(pid for pid in roster.team_b if pid in ids))
        if not team_a or not team_b:
            logger.warning("%s has an empty team; contributing zero", self.mode_key)
            return None
        if set(team_a) & set(team_b):
            logger.warning("%s teams overlap on %s; contributing zero", self.mode_key, sorted(set(team_a) & set(team_b)))
            return None
        return TeamRoster(team_a, team_b)
