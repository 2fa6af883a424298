from .match import evaluate_best_ball, evaluate_head_to_head, evaluate_nassau, evaluate_sixes
from .occurrences import (
    evaluate_aces_deuces,
    evaluate_arnies,
    evaluate_ctp,
    evaluate_dots,
    evaluate_rabbit,
    evaluate_snake,
    evaluate_trouble,
)
from .points import evaluate_bingo_bango_bongo, evaluate_nines, evaluate_scotch, evaluate_vegas
from .pots import evaluate_skins
from .roles import evaluate_banker, evaluate_wolf, wolf_rotation
from .stroke import evaluate_keep_score, evaluate_quota, evaluate_stableford, evaluate_tax_man

__all__ = [
    "evaluate_aces_deuces",
    "evaluate_arnies",
    "evaluate_banker",
    "evaluate_best_ball",
    "evaluate_bingo_bango_bongo",
    "evaluate_ctp",
    "evaluate_dots",
    "evaluate_head_to_head",
    "evaluate_keep_score",
    "evaluate_nassau",
    "evaluate_nines",
    "evaluate_quota",
    "evaluate_rabbit",
    "evaluate_scotch",
    "evaluate_sixes",
    "evaluate_skins",
    "evaluate_snake",
    "evaluate_stableford",
    "evaluate_tax_man",
    "evaluate_trouble",
    "evaluate_vegas",
    "evaluate_wolf",
    "wolf_rotation",
]
