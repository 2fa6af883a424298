from __future__ import annotations

from fractions import Fraction

from gwe.contracts import AuxState, BingoBangoBongoHole, ModeTag, TeamRoster
from gwe.modes.points import nines_hole_points, vegas_hole_points, vegas_number
from tests.helpers import flat, make_players, row, run_mode

TEAMS = {"team_a": ["A", "B"], "team_b": ["C", "D"]}


def test_vegas_number_digit_order():
    assert vegas_number([4, 5], 4) == 45
    assert vegas_number([5, 5], 4) == 55
    assert vegas_number([6, 5], 4) == 65
    assert vegas_number([6, 3], 4) == 36
    assert vegas_number([10, 4], 4) == 104
    assert vegas_number([5], 4) == 55
    assert vegas_number([3, 5], 4, force_high=True) == 53


def test_vegas_flip_only_when_one_team_birdies():
    assert vegas_hole_points([3, 5], [4, 5], 4) == 10
    assert vegas_hole_points([3, 5], [4, 5], 4, flip_bird=True) == 19
    assert vegas_hole_points([3, 5], [3, 6], 4, flip_bird=True) == 1


def test_vegas_scenario_team_a_wins_ten_points():
    players = make_players("A", "B", "C", "D")
    rows = {"A": row(4), "B": row(5), "C": row(5), "D": row(5)}
    result = run_mode(ModeTag.VEGAS, players, rows, {**TEAMS, "bet_per_point": 1})
    assert result.net == {"A": 10, "B": 10, "C": -10, "D": -10}


def test_vegas_hammer_multiplies_hole_points():
    players = make_players("A", "B", "C", "D")
    rows = {"A": row(4), "B": row(5), "C": row(5), "D": row(5)}
    aux = AuxState(hammer={0: 2})
    result = run_mode(ModeTag.VEGAS, players, rows, {**TEAMS, "hammer": True}, aux)
    assert result.net == {"A": 20, "B": 20, "C": -20, "D": -20}


def test_vegas_aux_roster_overrides_config():
    players = make_players("A", "B", "C", "D")
    rows = {"A": row(4), "B": row(5), "C": row(5), "D": row(5)}
    aux = AuxState(teams={ModeTag.VEGAS: TeamRoster(("C", "D"), ("A", "B"))})
    result = run_mode(ModeTag.VEGAS, players, rows, TEAMS, aux)
    assert result.net == {"A": 10, "B": 10, "C": -10, "D": -10}


def test_vegas_without_roster_is_zero():
    players = make_players("A", "B", "C", "D")
    result = run_mode(ModeTag.VEGAS, players, {"A": flat(4), "B": flat(5), "C": flat(5), "D": flat(6)})
    assert set(result.net.values()) == {0}


def test_nines_tie_splits():
    assert nines_hole_points({"A": 4, "B": 5, "C": 6}) == {"A": 5, "B": 3, "C": 1}
    assert nines_hole_points({"A": 4, "B": 4, "C": 6}) == {"A": 4, "B": 4, "C": 1}
    assert nines_hole_points({"A": 4, "B": 5, "C": 5}) == {"A": 5, "B": 2, "C": 2}
    assert nines_hole_points({"A": 4, "B": 4, "C": 4}) == {"A": 3, "B": 3, "C": 3}
    assert nines_hole_points({"A": 5, "B": 5, "C": 5, "D": 5}) == {"A": 3, "B": 3, "C": 3, "D": 3}


def test_nines_settles_pairwise_on_point_difference():
    players = make_players("A", "B", "C")
    result = run_mode(ModeTag.NINES, players, {"A": row(4), "B": row(5), "C": row(6)})
    assert result.net == {"A": 6, "B": 0, "C": -6}


def test_nines_skips_holes_missing_a_score():
    players = make_players("A", "B", "C")
    result = run_mode(ModeTag.NINES, players, {"A": row(4), "B": row(5), "C": row()})
    assert set(result.net.values()) == {0}


def test_scotch_low_ball_and_low_total():
    players = make_players("A", "B", "C", "D")
    rows = {"A": row(4, 3), "B": row(5, 5), "C": row(4, 4), "D": row(4, 4)}
    result = run_mode(ModeTag.SCOTCH, players, rows, TEAMS)
    # hole 1: total to C/D (+3 for them); hole 2: low ball to A/B (+2), totals tied
    assert result.net == {"A": -1, "B": -1, "C": 1, "D": 1}


def test_scotch_needs_two_per_team():
    players = make_players("A", "B", "C")
    result = run_mode(ModeTag.SCOTCH, players, {"A": row(4), "B": row(5), "C": row(6)}, {"team_a": ["A"], "team_b": ["B", "C"]})
    assert set(result.net.values()) == {0}


def test_bingo_bango_bongo_top_scorers_share():
    players = make_players("A", "B", "C", "D")
    aux = AuxState(
        bingo_bango_bongo={
            0: BingoBangoBongoHole("A", "B", "C"),
            1: BingoBangoBongoHole("D", "D", "A"),
            2: BingoBangoBongoHole("Z"),
        }
    )
    result = run_mode(ModeTag.BINGO_BANGO_BONGO, players, {}, {"bet_per_point": 1}, aux)
    assert result.net == {"A": 1, "B": -1, "C": -1, "D": 1}
    assert sum(result.net.values()) == Fraction(0)
