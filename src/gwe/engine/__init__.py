from .context import MODE_LABELS, ModeContext
from .matchplay import MatchTally, hammer_multiplier, settle_match, settle_stroke, tally_match
from .scoring import STROKE_INDEX, ScoreMatrix, handicap_strokes

__all__ = [
    "MODE_LABELS",
    "MatchTally",
    "ModeContext",
    "STROKE_INDEX",
    "ScoreMatrix",
    "handicap_strokes",
    "hammer_multiplier",
    "settle_match",
    "settle_stroke",
    "tally_match",
]
