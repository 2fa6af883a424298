from __future__ import annotations

from collections import Counter
from dataclasses import fields, is_dataclass
from typing import Any, Mapping, Sequence

from gwe.contracts import (
    CONFIG_TYPES,
    HOLES,
    AuxState,
    GameSetup,
    ModeTag,
    TeamRoster,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    invalid_config_fields,
)
from gwe.core.money import to_money

VALID_PARS = frozenset({3, 4, 5})
TEAM_TAGS = frozenset({ModeTag.VEGAS, ModeTag.BEST_BALL, ModeTag.SCOTCH})
MONEY_FIELDS = frozenset(
    {
        "tax_amount",
        "bet_amount",
        "bet_front",
        "bet_back",
        "bet_overall",
        "bet_per_skin",
        "bet_per_hole",
        "bet_per_point",
        "bet_per_dot",
        "bet_per_segment",
        "snake_amount",
        "rabbit_amount",
    }
)
PLAYER_COUNTS: dict[ModeTag, tuple[int, int]] = {
    ModeTag.HEAD_TO_HEAD: (2, 99),
    ModeTag.NASSAU: (2, 99),
    ModeTag.SKINS: (2, 99),
    ModeTag.WOLF: (3, 5),
    ModeTag.VEGAS: (2, 4),
    ModeTag.BEST_BALL: (2, 99),
    ModeTag.SIXES: (4, 4),
    ModeTag.NINES: (3, 4),
    ModeTag.SCOTCH: (4, 99),
    ModeTag.BANKER: (2, 99),
}


def _issue(code: str, severity: str, field_path: str, entity_id: str, message: str) -> ValidationIssue:
    return ValidationIssue(code=code, severity=severity, field_path=field_path, entity_id=entity_id, message=message)


class SetupValidator:
    """Caller-side checks run before a round starts.

    The engine itself degrades bad input to zero; this is where a UI finds
    out why.
    """

    def validate(
        self,
        setup: GameSetup,
        *,
        scores: Mapping[str, Sequence[Any]] | None = None,
        pars: Sequence[Any] | None = None,
        aux: AuxState | None = None,
    ) -> ValidationResult:
        issues: list[ValidationIssue] = []
        issues.extend(self._validate_players(setup))
        issues.extend(self._validate_modes(setup, aux or AuxState()))
        if scores is not None:
            issues.extend(self._validate_scores(setup, scores))
        if pars is not None:
            issues.extend(self._validate_pars(pars))
        return self._finalize(issues)

    def _finalize(self, issues: list[ValidationIssue]) -> ValidationResult:
        ordered = sorted(issues, key=lambda x: (x.severity, x.code, x.entity_id, x.field_path))
        blocking = [i for i in ordered if i.severity == "blocking"]
        if blocking:
            raise ValidationError(blocking)
        return ValidationResult(ok=True, issues=ordered)

    def _validate_players(self, setup: GameSetup) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        counts = Counter(p.player_id for p in setup.players)
        for pid, n in sorted(counts.items()):
            if n > 1:
                issues.append(_issue("DUPLICATE_PLAYER_ID", "blocking", "players", pid, f"player id appears {n} times"))
        return issues

    def _validate_modes(self, setup: GameSetup, aux: AuxState) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, mode in enumerate(setup.modes):
            path = f"modes[{index}]"
            try:
                tag = ModeTag(mode.tag)
            except ValueError:
                issues.append(_issue("UNKNOWN_MODE_TAG", "blocking", f"{path}.tag", str(mode.tag), "mode tag is not recognised"))
                continue
            config = mode.config
            expected = CONFIG_TYPES[tag]
            if is_dataclass(config) and not isinstance(config, expected):
                issues.append(
                    _issue(
                        "CONFIG_TAG_MISMATCH",
                        "blocking",
                        f"{path}.config",
                        tag.value,
                        f"{type(config).__name__} is not the config for {tag.value}",
                    )
                )
                continue
            invalid = self._validate_values(tag, config, path)
            if invalid:
                issues.extend(invalid)
                continue
            issues.extend(self._validate_amounts(tag, config, path))
            low, high = PLAYER_COUNTS.get(tag, (1, 99))
            if not low <= len(setup.players) <= high:
                issues.append(
                    _issue(
                        "UNSUITED_PLAYER_COUNT",
                        "warning",
                        "players",
                        tag.value,
                        f"{tag.value} expects {low}-{high} players, round has {len(setup.players)}",
                    )
                )
            if tag in TEAM_TAGS:
                issues.extend(self._validate_roster(setup, tag, config, aux, path))
        return issues

    def _validate_values(self, tag: ModeTag, config: Any, path: str) -> list[ValidationIssue]:
        if config is None:
            return []
        if isinstance(config, Mapping):
            values = dict(config)
        elif is_dataclass(config):
            values = {f.name: getattr(config, f.name) for f in fields(config)}
        else:
            return []
        return [
            _issue("INVALID_CONFIG_VALUE", "blocking", f"{path}.config.{name}", tag.value, reason)
            for name, reason in sorted(invalid_config_fields(tag, values).items())
        ]

    def _validate_amounts(self, tag: ModeTag, config: Any, path: str) -> list[ValidationIssue]:
        if config is None:
            return []
        if isinstance(config, Mapping):
            values = {k: v for k, v in config.items() if k in MONEY_FIELDS}
        elif is_dataclass(config):
            values = {f.name: getattr(config, f.name) for f in fields(config) if f.name in MONEY_FIELDS}
        else:
            return []
        issues: list[ValidationIssue] = []
        for name, value in sorted(values.items()):
            if value is not None and to_money(value) < 0:
                issues.append(_issue("NEGATIVE_BET", "blocking", f"{path}.config.{name}", tag.value, f"{name} must not be negative"))
        return issues

    def _validate_roster(self, setup: GameSetup, tag: ModeTag, config: Any, aux: AuxState, path: str) -> list[ValidationIssue]:
        roster = aux.teams.get(tag)
        if roster is None:
            if isinstance(config, Mapping):
                roster = TeamRoster(tuple(config.get("team_a", ())), tuple(config.get("team_b", ())))
            else:
                roster = TeamRoster(tuple(getattr(config, "team_a", ())), tuple(getattr(config, "team_b", ())))
        ids = set(setup.player_ids)
        issues: list[ValidationIssue] = []
        for side, members in (("team_a", roster.team_a), ("team_b", roster.team_b)):
            if not members:
                issues.append(_issue("EMPTY_TEAM", "blocking", f"{path}.config.{side}", tag.value, f"{side} has no players"))
            for pid in members:
                if pid not in ids:
                    issues.append(_issue("UNKNOWN_TEAM_MEMBER", "blocking", f"{path}.config.{side}", pid, "team member is not in the round"))
        for pid in sorted(set(roster.team_a) & set(roster.team_b)):
            issues.append(_issue("TEAM_OVERLAP", "blocking", f"{path}.config", pid, "player is on both teams"))
        for pid in sorted(ids - set(roster.team_a) - set(roster.team_b)):
            issues.append(_issue("INCOMPLETE_ROSTER", "warning", f"{path}.config", pid, f"player is on no {tag.value} team"))
        return issues

    def _validate_scores(self, setup: GameSetup, scores: Mapping[str, Sequence[Any]]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        ids = set(setup.player_ids)
        for pid, row in sorted(scores.items()):
            if pid not in ids:
                issues.append(_issue("UNKNOWN_SCORE_PLAYER", "warning", f"scores.{pid}", pid, "scores for a player not in the round"))
            if len(row) != HOLES:
                issues.append(_issue("WRONG_HOLE_COUNT", "blocking", f"scores.{pid}", pid, f"expected {HOLES} holes, got {len(row)}"))
            for hole, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    issues.append(
                        _issue("IMPOSSIBLE_STROKES", "blocking", f"scores.{pid}[{hole}]", pid, f"{value!r} is not a stroke count")
                    )
        return issues

    def _validate_pars(self, pars: Sequence[Any]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if len(pars) != HOLES:
            issues.append(_issue("WRONG_HOLE_COUNT", "blocking", "pars", "pars", f"expected {HOLES} pars, got {len(pars)}"))
        for hole, par in enumerate(pars):
            if par not in VALID_PARS or isinstance(par, bool):
                issues.append(_issue("INVALID_PAR", "blocking", f"pars[{hole}]", str(hole), f"par {par!r} is not 3, 4 or 5"))
        return issues
