from __future__ import annotations

from gwe.contracts import ModeTag, Player
from gwe.modes.stroke import stableford_points
from tests.helpers import flat, make_players, row, run_mode


def test_tax_man_finished_players_under_their_number_collect():
    players = [
        Player("A", "Alice", tax_man=80),
        Player("B", "Bob", tax_man=70),
        Player("C", "Cal", tax_man=100),
        Player("D", "Dee", tax_man=60),
    ]
    rows = {"A": flat(4), "B": flat(4), "C": flat(5), "D": flat(3, 17)}
    result = run_mode(ModeTag.TAXMAN, players, rows, {"tax_amount": 10})
    assert result.net == {"A": 10, "B": -20, "C": 10, "D": 0}


def test_stableford_point_table():
    assert stableford_points(1, 4) == 5
    assert stableford_points(2, 4) == 4
    assert stableford_points(3, 4) == 3
    assert stableford_points(4, 4) == 2
    assert stableford_points(5, 4) == 1
    assert stableford_points(6, 4) == 0
    assert stableford_points(9, 4) == 0
    assert stableford_points(1, 5) == 5


def test_stableford_leader_collects_point_difference():
    players = make_players("A", "B", "C")
    rows = {"A": row(3, 4, 4), "B": row(4, 5, 4), "C": row(4, 4, None)}
    result = run_mode(ModeTag.STABLEFORD, players, rows, {"bet_amount": 1})
    assert result.net == {"A": 3, "B": -2, "C": -1}


def test_quota_settles_pairwise_on_deviation():
    players = make_players("A", "B", "C", "D", handicaps={"B": 10})
    rows = {"A": flat(4), "B": flat(5), "C": flat(5), "D": flat(4, 10)}
    result = run_mode(ModeTag.QUOTA, players, rows, {"bet_per_point": 1, "quotas": {"C": 20}})
    assert result.net == {"A": 10, "B": -14, "C": 4, "D": 0}


def test_keep_score_never_moves_money():
    players = make_players("A", "B")
    result = run_mode(ModeTag.KEEP_SCORE, players, {"A": flat(3), "B": flat(7)})
    assert set(result.net.values()) == {0}
