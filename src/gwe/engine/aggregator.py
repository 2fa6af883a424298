"""Settlement aggregator.

Runs every active mode's evaluator once against the same score matrix and
aux state, checks each result is zero-sum, and folds them into one net map.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from pathlib import Path
from typing import Mapping, Sequence

from gwe.contracts import CONFIG_TYPES, ActiveMode, AuxState, CombinedResult, GameSetup, ModeResult, ModeTag, Player
from gwe.core.errors import EngineIntegrityError, build_forensic_artifact, persist_forensic_artifact
from gwe.core.money import ZERO, zero_net
from gwe.engine.context import MODE_LABELS, ModeContext
from gwe.engine.registry import EVALUATORS, Evaluator, assign_mode_keys, known_modes, resolve_config
from gwe.engine.scoring import ScoreMatrix

logger = logging.getLogger(__name__)


class SettlementEngine:
    def __init__(
        self,
        registry: Mapping[ModeTag, Evaluator] | None = None,
        strict: bool = False,
        artifact_dir: Path | None = None,
    ) -> None:
        self._registry = dict(registry or EVALUATORS)
        self.strict = strict
        self.artifact_dir = artifact_dir

    def combine(self, setup: GameSetup, scores: ScoreMatrix, aux: AuxState | None = None) -> CombinedResult:
        aux = aux or AuxState()
        players = tuple(setup.players)
        ids = [p.player_id for p in players]
        modes = known_modes(setup.modes)
        keys = assign_mode_keys(modes)
        results: list[ModeResult] = []
        for mode, key in zip(modes, keys):
            results.append(self._evaluate(mode, key, players, scores, aux))
        net = zero_net(ids)
        for result in results:
            for pid in ids:
                net[pid] += result.net.get(pid, ZERO)
        return CombinedResult(net=net, modes=results)

    def _evaluate(
        self,
        mode: ActiveMode,
        key: str,
        players: tuple[Player, ...],
        scores: ScoreMatrix,
        aux: AuxState,
    ) -> ModeResult:
        tag = ModeTag(mode.tag)
        try:
            config = resolve_config(tag, mode.config)
        except Exception as exc:
            ctx = ModeContext(tag, key, players, scores, aux, CONFIG_TYPES[tag]())
            return self._integrity_failure(ctx, "CONFIG_FAILED", f"{key} config could not be resolved: {exc!r}", None, exc)
        ctx = ModeContext(tag=tag, mode_key=key, players=players, matrix=scores, aux=aux, config=config)
        evaluator = self._registry.get(tag)
        if evaluator is None:
            return self._integrity_failure(ctx, "MISSING_EVALUATOR", f"no evaluator registered for {tag.value}", None)
        try:
            result = evaluator(ctx)
        except Exception as exc:
            return self._integrity_failure(ctx, "EVALUATOR_FAILED", f"{key} evaluator raised {exc!r}", None, exc)
        ids = set(ctx.player_ids)
        stray = sorted(pid for pid, amount in result.net.items() if pid not in ids and amount != 0)
        if stray:
            return self._integrity_failure(ctx, "UNKNOWN_PLAYER_AMOUNT", f"{key} paid players outside the round: {stray}", result)
        balance = sum((result.net.get(pid, ZERO) for pid in ctx.player_ids), Fraction(0))
        if balance != 0:
            return self._integrity_failure(ctx, "ZERO_SUM_VIOLATION", f"{key} nets to {balance}, expected 0", result)
        result.mode_key = key
        result.net = {pid: Fraction(result.net.get(pid, ZERO)) for pid in ctx.player_ids}
        return result

    def _integrity_failure(
        self,
        ctx: ModeContext,
        code: str,
        message: str,
        result: ModeResult | None,
        cause: BaseException | None = None,
    ) -> ModeResult:
        artifact = build_forensic_artifact(
            code,
            message,
            mode_key=ctx.mode_key,
            tag=ctx.tag.value,
            players=ctx.player_ids,
            net=result.net if result else None,
            strict=self.strict,
        )
        if self.artifact_dir is not None:
            persist_forensic_artifact(artifact, self.artifact_dir)
        if self.strict:
            raise EngineIntegrityError(artifact) from cause
        logger.error("%s; contributing zero (artifact %s)", message, artifact.artifact_id, exc_info=cause)
        return ModeResult(mode_key=ctx.mode_key, tag=ctx.tag, label=MODE_LABELS[ctx.tag], net=zero_net(ctx.player_ids))


def combine(
    players: Sequence[Player],
    active_modes: Sequence[ActiveMode],
    scores: ScoreMatrix,
    aux: AuxState | None = None,
    *,
    strict: bool = False,
) -> CombinedResult:
    return SettlementEngine(strict=strict).combine(GameSetup(list(players), list(active_modes)), scores, aux)
