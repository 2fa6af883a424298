"""Exact money arithmetic.

Every amount inside the engine is a ``Fraction``. Rounding happens only in
``to_display``, so nothing drifts when many modes are summed.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import Any, Iterable

from gwe.contracts import ModeResult, ModeTag, Transfer

logger = logging.getLogger(__name__)

ZERO = Fraction(0)


def to_money(value: Any, default: Any = 0) -> Fraction:
    """Coerce a config amount into a Fraction.

    Floats go through their shortest decimal text so ``0.1`` means one tenth.
    Unusable values fall back to ``default``.
    """
    if value is None:
        value = default
    if isinstance(value, bool):
        return Fraction(int(value))
    if isinstance(value, Fraction):
        return value
    if isinstance(value, float):
        return Fraction(repr(value))
    try:
        return Fraction(str(value).strip()) if isinstance(value, str) else Fraction(value)
    except (TypeError, ValueError, ZeroDivisionError):
        logger.warning("unusable money amount %r, using %r", value, default)
        return Fraction(default)


def to_display(amount: Fraction | int, places: int = 2) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    value = Fraction(amount)
    return (Decimal(value.numerator) / Decimal(value.denominator)).quantize(quantum, rounding=ROUND_HALF_UP)


def zero_net(player_ids: Iterable[str]) -> dict[str, Fraction]:
    return {pid: ZERO for pid in player_ids}


class Ledger:
    """Collects pairwise transfers for one mode; zero-sum by construction."""

    def __init__(self, player_ids: Iterable[str]) -> None:
        self._net = zero_net(player_ids)
        self._transfers: list[Transfer] = []

    def transfer(self, payer: str, payee: str, amount: Fraction | int, note: str = "") -> None:
        if payer == payee or payer not in self._net or payee not in self._net:
            return
        amount = Fraction(amount)
        if amount == 0:
            return
        if amount < 0:
            payer, payee, amount = payee, payer, -amount
        self._net[payer] -= amount
        self._net[payee] += amount
        self._transfers.append(Transfer(payer=payer, payee=payee, amount=amount, note=note))

    def pay_each(self, payer: str, payees: Iterable[str], amount: Fraction | int, note: str = "") -> None:
        for payee in payees:
            self.transfer(payer, payee, amount, note)

    def collect_from_each(self, payee: str, payers: Iterable[str], amount: Fraction | int, note: str = "") -> None:
        for payer in payers:
            self.transfer(payer, payee, amount, note)

    def team_payout(self, losers: Iterable[str], winners: Iterable[str], amount: Fraction | int, note: str = "") -> None:
        """Each loser pays ``amount`` split evenly across the winners."""
        winners = list(winners)
        if not winners:
            return
        share = Fraction(amount) / len(winners)
        for loser in losers:
            self.pay_each(loser, winners, share, note)

    @property
    def net(self) -> dict[str, Fraction]:
        return dict(self._net)

    def result(self, mode_key: str, tag: ModeTag, label: str) -> ModeResult:
        return ModeResult(mode_key=mode_key, tag=tag, label=label, net=dict(self._net), transfers=list(self._transfers))
