from __future__ import annotations

from fractions import Fraction

from gwe.contracts import ActiveMode, AuxState, GameSetup, ModeTag, NassauConfig, PressMatch, PressSegment
from gwe.engine.presses import detect_presses
from tests.helpers import flat, make_players, matrix, row, run_mode

PRESS_NASSAU = {"bet_amount": 5, "match_play": True, "auto_press": True}


def test_nassau_auto_press_scenario_records_front_press():
    players = make_players("A", "B")
    setup = GameSetup(players, [ActiveMode(ModeTag.NASSAU, PRESS_NASSAU)])
    scores = matrix({"A": row(4, 4, 4, 3), "B": row(5, 5, 5, 4)})

    presses = detect_presses(setup, scores, AuxState())

    assert presses == [PressMatch(ModeTag.NASSAU, PressSegment.FRONT, 4, 8, Fraction(5))]
    assert detect_presses(setup, scores, AuxState(presses=tuple(presses))) == []


def test_no_press_without_auto_press_or_holes_left():
    players = make_players("A", "B")
    scores = matrix({"A": row(*[4] * 9), "B": row(*[5] * 9)})
    plain = GameSetup(players, [ActiveMode(ModeTag.NASSAU, {"match_play": True})])
    assert detect_presses(plain, scores) == []
    # front is finished, back has not started
    pressing = GameSetup(players, [ActiveMode(ModeTag.NASSAU, PRESS_NASSAU)])
    assert detect_presses(pressing, scores) == []


def test_press_settles_independently_of_base_front_match():
    players = make_players("A", "B")
    rows = {"A": row(4, 4, 4, 3, 5, 5, 5, 5, 5), "B": row(5, 5, 5, 4, 4, 4, 4, 4, 4)}
    press = PressMatch(ModeTag.NASSAU, PressSegment.FRONT, 4, 8, Fraction(5))

    base = run_mode(ModeTag.NASSAU, players, rows, PRESS_NASSAU)
    pressed = run_mode(ModeTag.NASSAU, players, rows, PRESS_NASSAU, AuxState(presses=(press,)))

    # B takes the front 5-4; overall is still open
    assert base.net == {"A": -5, "B": 5}
    assert pressed.net == {"A": -10, "B": 10}


def test_match_settles_once_clinched():
    players = make_players("A", "B")
    result = run_mode(ModeTag.NASSAU, players, {"A": row(4, 4, 4, 4, 4), "B": row(5, 5, 5, 5, 5)}, PRESS_NASSAU)
    assert result.net == {"A": 5, "B": -5}
    open_match = run_mode(ModeTag.NASSAU, players, {"A": row(4, 4, 4, 4), "B": row(5, 5, 5, 5)}, PRESS_NASSAU)
    assert open_match.net == {"A": 0, "B": 0}


def test_hammer_on_an_unplayed_hole_keeps_the_match_open():
    players = make_players("A", "B")
    rows = {"A": row(3, 3, 3, 4, 4, 4, 4), "B": row(4, 4, 4, 4, 4, 4, 4)}
    config = {"bet_amount": 5, "match_play": True, "hammer": True}
    # 3 up with two to play takes the front
    assert run_mode(ModeTag.NASSAU, players, rows, config).net == {"A": 5, "B": -5}
    hammered = run_mode(ModeTag.NASSAU, players, rows, config, AuxState(hammer={8: 2}))
    assert hammered.net == {"A": 0, "B": 0}


def test_back_nine_press_settles_independently_of_base_back_match():
    players = make_players("A", "B")
    rows = {
        "A": row(*[4] * 9, 3, 3, 3, 5, 5, 5, 4, 4, 3),
        "B": row(*[4] * 9, 4, 4, 4, 4, 4, 4, 4, 4, 4),
    }
    press = PressMatch(ModeTag.NASSAU, PressSegment.BACK, 12, 16, Fraction(5))

    base = run_mode(ModeTag.NASSAU, players, rows, PRESS_NASSAU)
    pressed = run_mode(ModeTag.NASSAU, players, rows, PRESS_NASSAU, AuxState(presses=(press,)))

    # A takes the back 4-3 and the overall; B sweeps the pressed holes 3-0
    assert base.net == {"A": 10, "B": -10}
    assert pressed.net == {"A": 5, "B": -5}


def test_nassau_stroke_play_uses_segment_bets():
    players = make_players("A", "B")
    config = {"bet_front": 2, "bet_back": 3, "bet_overall": 10}
    result = run_mode(ModeTag.NASSAU, players, {"A": flat(4), "B": flat(5)}, config)
    assert result.net == {"A": 15, "B": -15}


def test_nassau_stroke_play_group_winner_collects_from_everyone():
    players = make_players("A", "B", "C")
    result = run_mode(ModeTag.NASSAU, players, {"A": flat(4), "B": flat(5), "C": flat(5)}, {"bet_amount": 5})
    assert result.net == {"A": 30, "B": -15, "C": -15}


def test_nassau_stroke_play_waits_for_every_player():
    players = make_players("A", "B")
    result = run_mode(ModeTag.NASSAU, players, {"A": flat(4), "B": flat(5, 17)}, {"bet_amount": 5})
    # front complete for both, back and overall are not
    assert result.net == {"A": 5, "B": -5}


def test_nassau_handicaps_give_strokes():
    players = make_players("A", "B", handicaps={"A": 0, "B": 18})
    result = run_mode(ModeTag.NASSAU, players, {"A": flat(5), "B": flat(5)}, {"bet_amount": 1, "use_handicaps": True})
    assert result.net == {"A": -3, "B": 3}


def test_head_to_head_stroke_play_pays_per_stroke():
    players = make_players("A", "B")
    result = run_mode(ModeTag.HEAD_TO_HEAD, players, {"A": flat(4), "B": flat(5)}, {"bet_amount": 1, "match_play": False})
    assert result.net == {"A": 18, "B": -18}


def test_head_to_head_match_play_every_pair():
    players = make_players("A", "B", "C")
    rows = {"A": flat(4), "B": flat(5), "C": flat(5)}
    result = run_mode(ModeTag.HEAD_TO_HEAD, players, rows, {"bet_amount": 2})
    assert result.net == {"A": 4, "B": -2, "C": -2}


def test_hammer_weights_match_holes():
    players = make_players("A", "B")
    rows = {"A": row(3, 5, 5, 5, *[4] * 14), "B": row(4, 4, 4, 4, *[4] * 14)}
    aux = AuxState(hammer={0: 4})
    plain = run_mode(ModeTag.HEAD_TO_HEAD, players, rows, {"bet_amount": 5}, aux)
    hammered = run_mode(ModeTag.HEAD_TO_HEAD, players, rows, {"bet_amount": 5, "hammer": True}, aux)
    assert plain.net == {"A": -5, "B": 5}
    assert hammered.net == {"A": 5, "B": -5}


def test_infinite_hammer_call_is_capped():
    players = make_players("A", "B")
    rows = {"A": row(3, 5, 5, 5, *[4] * 14), "B": row(4, 4, 4, 4, *[4] * 14)}
    aux = AuxState(hammer={0: float("inf")})
    result = run_mode(ModeTag.HEAD_TO_HEAD, players, rows, {"bet_amount": 5, "hammer": True}, aux)
    assert result.net == {"A": 5, "B": -5}


def test_head_to_head_press_carries_its_pair():
    players = make_players("A", "B", "C")
    rows = {"A": flat(4), "B": flat(5), "C": flat(4)}
    press = PressMatch(ModeTag.HEAD_TO_HEAD, PressSegment.MATCH, 9, 17, Fraction(3), ("A", "B"))
    stray = PressMatch(ModeTag.HEAD_TO_HEAD, PressSegment.MATCH, 9, 17, Fraction(3), ("A", "Z"))
    result = run_mode(ModeTag.HEAD_TO_HEAD, players, rows, {"bet_amount": 1}, AuxState(presses=(press, stray)))
    assert result.net == {"A": 4, "B": -5, "C": 1}


def test_head_to_head_auto_press_per_pair():
    players = make_players("A", "B", "C")
    setup = GameSetup(players, [ActiveMode(ModeTag.HEAD_TO_HEAD, {"auto_press": True, "bet_amount": 2})])
    scores = matrix({"A": row(4, 4), "B": row(5, 5), "C": row(4, 4)})
    presses = detect_presses(setup, scores)
    assert {p.pair for p in presses} == {("A", "B"), ("B", "C")}
    assert all(p.segment is PressSegment.MATCH and p.start_hole == 2 and p.end_hole == 17 for p in presses)
    assert all(p.bet_amount == 2 for p in presses)


def test_auto_press_counts_holes_not_hammer_weight():
    players = make_players("A", "B")
    config = {"bet_amount": 5, "match_play": True, "auto_press": True, "hammer": True}
    setup = GameSetup(players, [ActiveMode(ModeTag.HEAD_TO_HEAD, config)])
    scores = matrix({"A": row(3, 4), "B": row(4, 4)})
    assert detect_presses(setup, scores, AuxState(hammer={0: 2})) == []


def test_unusable_press_trigger_falls_back_to_two():
    players = make_players("A", "B")
    scores = matrix({"A": row(4, 4, 4, 3), "B": row(5, 5, 5, 4)})
    expected = [PressMatch(ModeTag.NASSAU, PressSegment.FRONT, 4, 8, Fraction(5))]
    mapped = GameSetup(players, [ActiveMode(ModeTag.NASSAU, {**PRESS_NASSAU, "press_trigger": "two"})])
    typed = GameSetup(
        players,
        [ActiveMode(ModeTag.NASSAU, NassauConfig(bet_amount=5, match_play=True, auto_press=True, press_trigger="two"))],
    )
    assert detect_presses(mapped, scores) == expected
    assert detect_presses(typed, scores) == expected


def test_best_ball_stroke_play_splits_between_teammates():
    players = make_players("A", "B", "C", "D")
    rows = {"A": flat(4), "B": flat(6), "C": flat(5), "D": flat(5)}
    config = {"bet_amount": 1, "team_a": ["A", "B"], "team_b": ["C", "D"]}
    result = run_mode(ModeTag.BEST_BALL, players, rows, config)
    assert result.net == {"A": 18, "B": 18, "C": -18, "D": -18}


def test_best_ball_bad_roster_contributes_zero():
    players = make_players("A", "B", "C", "D")
    rows = {"A": flat(4), "B": flat(6), "C": flat(5), "D": flat(5)}
    overlapping = {"team_a": ["A", "B"], "team_b": ["B", "C"]}
    empty = {"team_a": ["A", "B"], "team_b": ["Z"]}
    assert set(run_mode(ModeTag.BEST_BALL, players, rows, overlapping).net.values()) == {0}
    assert set(run_mode(ModeTag.BEST_BALL, players, rows, empty).net.values()) == {0}


def test_best_ball_match_play_folds_presses():
    players = make_players("A", "B", "C", "D")
    rows = {"A": flat(4), "B": flat(6), "C": flat(5), "D": flat(5)}
    config = {"bet_amount": 4, "match_play": True, "team_a": ["A", "B"], "team_b": ["C", "D"]}
    press = PressMatch(ModeTag.BEST_BALL, PressSegment.BACK, 9, 17, Fraction(2))

    base = run_mode(ModeTag.BEST_BALL, players, rows, config)
    pressed = run_mode(ModeTag.BEST_BALL, players, rows, config, AuxState(presses=(press,)))

    assert base.net == {"A": 4, "B": 4, "C": -4, "D": -4}
    assert pressed.net == {"A": 6, "B": 6, "C": -6, "D": -6}


def test_best_ball_auto_press_uses_team_roster():
    players = make_players("A", "B", "C", "D")
    config = {"bet_amount": 3, "match_play": True, "auto_press": True, "team_a": ["A", "B"], "team_b": ["C", "D"]}
    setup = GameSetup(players, [ActiveMode(ModeTag.BEST_BALL, config)])
    scores = matrix({"A": row(4, 4), "B": row(5, 5), "C": row(3, 3), "D": row(5, 5)})
    assert detect_presses(setup, scores) == [PressMatch(ModeTag.BEST_BALL, PressSegment.FRONT, 2, 8, Fraction(3))]


def test_sixes_rotates_partners_each_segment():
    players = make_players("A", "B", "C", "D")
    rows = {"A": flat(4), "B": flat(5), "C": flat(5), "D": flat(5)}
    result = run_mode(ModeTag.SIXES, players, rows, {"bet_per_segment": 5})
    assert result.net == {"A": 30, "B": -10, "C": -10, "D": -10}


def test_sixes_needs_four_players():
    players = make_players("A", "B", "C")
    result = run_mode(ModeTag.SIXES, players, {"A": flat(4), "B": flat(5), "C": flat(5)})
    assert set(result.net.values()) == {0}
