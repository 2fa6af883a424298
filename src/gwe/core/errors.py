from __future__ import annotations

import json
from dataclasses import asdict
from fractions import Fraction
from pathlib import Path
from typing import Mapping, Sequence

from gwe.contracts import ForensicArtifact
from gwe.core.ids import IdKind, make_id, now_utc


class EngineIntegrityError(RuntimeError):
    """Raised in strict mode when a mode result breaks settlement invariants."""

    def __init__(self, artifact: ForensicArtifact) -> None:
        super().__init__(artifact.message)
        self.artifact = artifact

    @property
    def mode_key(self) -> str | None:
        return self.artifact.identifiers.get("mode_key")


def build_forensic_artifact(
    error_code: str,
    message: str,
    *,
    mode_key: str,
    tag: str,
    players: Sequence[str],
    net: Mapping[str, Fraction] | None = None,
    strict: bool = False,
) -> ForensicArtifact:
    """Record of one rejected mode result: the offending net map and where it came from."""
    return ForensicArtifact(
        artifact_id=make_id(IdKind.FORENSIC),
        timestamp=now_utc(),
        engine_scope="settlement",
        error_code=error_code,
        message=message,
        state_snapshot={"mode_key": mode_key, "net": {pid: str(v) for pid, v in (net or {}).items()}},
        context={"tag": tag, "players": list(players), "strict": strict},
        identifiers={"mode_key": mode_key},
        causal_fragment=[error_code, message],
    )


def persist_forensic_artifact(artifact: ForensicArtifact, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{artifact.artifact_id}.json"
    path.write_text(json.dumps(asdict(artifact), default=str, indent=2), encoding="utf-8")
    return path
