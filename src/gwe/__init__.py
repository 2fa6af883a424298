from gwe.engine.aggregator import SettlementEngine, combine
from gwe.engine.presses import detect_presses
from gwe.engine.scoring import ScoreMatrix
from gwe.engine.validation import SetupValidator

__all__ = ["ScoreMatrix", "SettlementEngine", "SetupValidator", "combine", "detect_presses"]
