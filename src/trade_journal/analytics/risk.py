"""Position sizing and risk calculations.

This module is the only place that turns a balance and a risk rate into
money amounts. The 1R/2R/3R panel, the lot calculator, and the stored
risk setting all go through these functions so the figures shown in
different places always agree.

The calculator functions are total over numeric input: out-of-domain
balances or multiples produce zero (or ``None`` for ``allowed_loss``)
rather than raising. Validation of user-entered text happens earlier,
in ``parse_risk_percent``.
"""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

from trade_journal.core.models import HUNDRED, ZERO, RiskAmount, RiskRate, TargetAmount

DEFAULT_MULTIPLES: tuple[int, ...] = (1, 2, 3)


class RiskSettingError(ValueError):
    """Raise when a user-entered risk percentage is empty, non-numeric, or out of range."""


def one_r(balance: Decimal, rate: RiskRate) -> RiskAmount:
    """Return the allowed loss for one trade (1R).

    A zero or negative balance means no exposure, so the result is zero
    rather than a negative risk.
    """
    return RiskAmount(value=max(ZERO, balance) * rate.fraction)


def n_r(balance: Decimal, rate: RiskRate, multiple: Decimal | int) -> TargetAmount:
    """Return ``multiple`` times 1R (2R, 3R, ...). Negative multiples clamp to zero."""
    one = one_r(balance, rate).value
    return TargetAmount(value=one * max(ZERO, Decimal(multiple)))


def profit(balance_before: Decimal, balance_after: Decimal) -> Decimal:
    """Return the balance change between two snapshots."""
    return balance_after - balance_before


def allowed_loss(balance: Decimal, risk_percent: Decimal) -> Decimal | None:
    """Return ``balance * risk_percent / 100``, or ``None`` for non-positive input."""
    if balance <= ZERO or risk_percent <= ZERO:
        return None
    return balance * risk_percent / HUNDRED


def risk_targets(
    balance: Decimal,
    rate: RiskRate,
    multiples: Iterable[int] = DEFAULT_MULTIPLES,
) -> dict[int, TargetAmount]:
    """Return the target amount for each R multiple, keyed by the multiple."""
    return {m: n_r(balance, rate, m) for m in multiples}


def lot_size(capital: Decimal, rate: RiskRate, stop_loss_pips: Decimal) -> Decimal:
    """Return the position size that loses exactly 1R at the stop-loss distance.

    Divide the allowed loss by the stop-loss distance in pips. Return zero
    when the stop-loss distance is not positive.
    """
    if stop_loss_pips <= ZERO:
        return ZERO
    return one_r(capital, rate).value / stop_loss_pips


def parse_risk_percent(text: str) -> RiskRate:
    """Validate user-entered risk percentage text and return a ``RiskRate``.

    Args:
        text: Raw input such as ``"5"`` or ``"2.5"``.

    Returns:
        The validated rate.

    Raises:
        RiskSettingError: If the text is empty, not a number, or outside
            ``0 < percent <= 100``.

    """
    stripped = text.strip()
    if not stripped:
        raise RiskSettingError("Risk percent is required.")
    try:
        value = Decimal(stripped)
    except InvalidOperation as exc:
        msg = f"Risk percent must be a number, got {text!r}."
        raise RiskSettingError(msg) from exc
    if not value.is_finite() or not (ZERO < value <= HUNDRED):
        msg = f"Risk percent must be greater than 0 and at most 100, got {stripped}."
        raise RiskSettingError(msg)
    return RiskRate(percent=value)
