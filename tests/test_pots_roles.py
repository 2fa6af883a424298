from __future__ import annotations

from fractions import Fraction

from gwe.contracts import AuxState, BankerHole, ModeTag, WolfConfig, WolfDeclaration, WolfHole, WolfTieBreak
from gwe.modes.roles import wolf_rotation
from tests.helpers import FOURSOME, flat, make_players, matrix, row, run_mode


def test_skins_carry_and_void_leftover():
    players = make_players("A", "B", "C")
    rows = {"A": row(4, 3, 4, 4), "B": row(4, 4, 4, 4), "C": row(5, 4, None, 4)}
    result = run_mode(ModeTag.SKINS, players, rows, {"bet_per_skin": 1})
    assert result.net == {"A": 4, "B": -2, "C": -2}


def test_skins_tie_on_every_hole_pays_nothing():
    players = make_players("A", "B")
    result = run_mode(ModeTag.SKINS, players, {"A": flat(4), "B": flat(4)})
    assert set(result.net.values()) == {0}


def test_wolf_solo_scenario_collects_double_from_each():
    players = make_players(*FOURSOME)
    rows = {"A": row(4), "B": row(5), "C": row(5), "D": row(5)}
    aux = AuxState(wolf={0: WolfHole("A", declaration=WolfDeclaration.SOLO)})
    result = run_mode(ModeTag.WOLF, players, rows, {"bet_per_hole": 1}, aux)
    assert result.net == {"A": 6, "B": -2, "C": -2, "D": -2}


def test_wolf_without_partner_or_declaration_is_solo():
    players = make_players(*FOURSOME)
    rows = {"A": row(4), "B": row(5), "C": row(5), "D": row(5)}
    result = run_mode(ModeTag.WOLF, players, rows, {"bet_per_hole": 1}, AuxState(wolf={0: WolfHole("A")}))
    assert result.net["A"] == 6


def test_wolf_partnered_sides_compare_totals():
    players = make_players(*FOURSOME)
    rows = {"A": row(4), "B": row(5), "C": row(5), "D": row(5)}
    result = run_mode(ModeTag.WOLF, players, rows, {"bet_per_hole": 1}, AuxState(wolf={0: WolfHole("A", "B")}))
    assert result.net == {"A": 2, "B": 2, "C": -2, "D": -2}


def test_lone_wolf_loss_pays_triple():
    players = make_players(*FOURSOME)
    rows = {"A": row(5), "B": row(4), "C": row(5), "D": row(6)}
    aux = AuxState(wolf={0: WolfHole("A", declaration=WolfDeclaration.LONE)})
    result = run_mode(ModeTag.WOLF, players, rows, {"bet_per_hole": 1}, aux)
    assert result.net == {"A": -9, "B": 3, "C": 3, "D": 3}


def test_wolf_hammer_and_blind_multiply():
    players = make_players(*FOURSOME)
    rows = {"A": row(3), "B": row(4), "C": row(4), "D": row(4)}
    aux = AuxState(wolf={0: WolfHole("A", declaration=WolfDeclaration.BLIND)}, hammer={0: 2})
    result = run_mode(ModeTag.WOLF, players, rows, {"bet_per_hole": 1, "hammer": True}, aux)
    assert result.net["A"] == 24


def test_wolf_unequal_sides_compare_low_ball():
    players = make_players("A", "B", "C")
    rows = {"A": row(5), "B": row(6), "C": row(4)}
    result = run_mode(ModeTag.WOLF, players, rows, {"bet_per_hole": 1}, AuxState(wolf={0: WolfHole("A", "B")}))
    assert result.net == {"A": -1, "B": -1, "C": 2}


def test_wolf_rotation_tee_order_then_trailing_players():
    players = make_players(*FOURSOME)
    order = wolf_rotation(players, matrix({}), AuxState())
    assert order[:8] == ["A", "B", "C", "D", "A", "B", "C", "D"]
    assert order[16:] == ["A", "B"]

    rows = {"A": row(4), "B": row(4), "C": row(6), "D": row(4)}
    aux = AuxState(wolf={0: WolfHole("C", declaration=WolfDeclaration.SOLO)})
    order = wolf_rotation(players, matrix(rows), aux)
    assert order[16:] == ["C", "A"]


def test_wolf_rotation_tie_breaks_are_configurable():
    players = make_players(*FOURSOME, handicaps={"C": 20})
    reverse = wolf_rotation(players, matrix({}), AuxState(), WolfConfig(late_tie_break=WolfTieBreak.REVERSE_TEE_ORDER))
    assert reverse[16:] == ["D", "C"]
    handicap = wolf_rotation(players, matrix({}), AuxState(), WolfConfig(late_tie_break=WolfTieBreak.HIGHER_HANDICAP))
    assert handicap[16:] == ["C", "A"]


def test_banker_plays_each_player_with_override():
    players = make_players(*FOURSOME)
    rows = {"A": row(4, 4), "B": row(5, 4), "C": row(3, 5), "D": row(4, 3)}
    aux = AuxState(banker={0: BankerHole("A"), 1: BankerHole("B", bet_override=Fraction(10))})
    result = run_mode(ModeTag.BANKER, players, rows, {"bet_amount": 5}, aux)
    assert result.net == {"A": 0, "B": -5, "C": -5, "D": 10}


def test_banker_unknown_banker_is_ignored():
    players = make_players("A", "B")
    aux = AuxState(banker={0: BankerHole("Z")})
    result = run_mode(ModeTag.BANKER, players, {"A": row(4), "B": row(5)}, None, aux)
    assert set(result.net.values()) == {0}
