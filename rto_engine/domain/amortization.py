"""Rent-to-own payment schedule: splits each month into rent and equity credit"""

import math
from typing import List, Optional

from rto_engine.domain.exceptions import InvalidTermsError
from rto_engine.domain.models import LoanTerms, PaymentPeriod, ScheduleSummary
from rto_engine.utils.money import to_cents


def validate_terms(terms: LoanTerms) -> None:
    """Raise InvalidTermsError unless terms describe a schedulable contract"""
    if not isinstance(terms.term_months, int) or terms.term_months <= 0:
        raise InvalidTermsError(f"term_months must be a positive integer, got {terms.term_months!r}")
    if terms.property_price_cents <= 0:
        raise InvalidTermsError(f"property price must be positive, got {terms.property_price_cents}")
    if not 0.0 <= terms.down_payment_ratio <= 1.0:
        raise InvalidTermsError(f"down_payment_ratio must be within [0, 1], got {terms.down_payment_ratio}")
    if not math.isfinite(terms.annual_rate_percent) or terms.annual_rate_percent < 0:
        raise InvalidTermsError(f"annual_rate_percent must be non-negative, got {terms.annual_rate_percent}")


def periodic_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 12 / 100


def periodic_payment(financed: float, annual_rate_percent: float, term_months: int) -> float:
    """Fixed monthly payment that retires ``financed`` over ``term_months`` (unrounded)"""
    r = periodic_rate(annual_rate_percent)
    if r == 0:
        return financed / term_months
    return financed * r / (1 - (1 + r) ** (-term_months))


def financed_from_payment(payment: float, annual_rate_percent: float, term_months: int) -> float:
    """Inverse of periodic_payment: the amount a given monthly payment can retire"""
    r = periodic_rate(annual_rate_percent)
    if r == 0:
        return payment * term_months
    return payment * (1 - (1 + r) ** (-term_months)) / r


def compute_schedule(terms: LoanTerms) -> List[PaymentPeriod]:
    """
    Build the month-by-month rent-to-own schedule.

    Each payment is split with the declining-balance method:
    - equity = payment - periodic_rate * balance carried in
    - rent   = payment - equity

    Balances accumulate unrounded; each period's equity is rounded to cents
    from its own unrounded value. The final period absorbs the rounding
    remainder so the buyer owns the financed amount exactly. When that
    remainder pushes final equity past the payment (straight-line terms that
    do not divide evenly), the final payment grows by the difference instead
    of rent going negative.

    Example:
        price 10,000,000.00, 10% down, 120 months, 0% ->
        financed 9,000,000.00, every payment 75,000.00 all equity
    """
    validate_terms(terms)

    financed = terms.financed_cents
    rate = periodic_rate(terms.annual_rate_percent)
    payment = periodic_payment(financed, terms.annual_rate_percent, terms.term_months)
    payment_cents = to_cents(payment)

    periods = []
    balance = float(financed)
    cumulative_cents = 0

    for index in range(1, terms.term_months + 1):
        equity = payment - rate * balance
        balance = max(balance - equity, 0.0)
        total_cents = payment_cents

        if index == terms.term_months:
            # Last period absorbs remainder
            equity_cents = financed - cumulative_cents
            total_cents = max(payment_cents, equity_cents)
        else:
            equity_cents = min(to_cents(equity), financed - cumulative_cents)

        cumulative_cents += equity_cents

        periods.append(
            PaymentPeriod(
                index=index,
                total_payment_cents=total_cents,
                rent_cents=total_cents - equity_cents,
                equity_cents=equity_cents,
                cumulative_equity_cents=cumulative_cents,
                remaining_balance_cents=financed - cumulative_cents,
            )
        )

    return periods


def summarize_schedule(terms: LoanTerms, schedule: Optional[List[PaymentPeriod]] = None) -> ScheduleSummary:
    """Headline totals for a contract; computes the schedule when not supplied"""
    if schedule is None:
        schedule = compute_schedule(terms)

    total_payments = sum(p.total_payment_cents for p in schedule)
    total_rent = sum(p.rent_cents for p in schedule)

    return ScheduleSummary(
        property_price_cents=terms.property_price_cents,
        down_payment_cents=terms.down_payment_cents,
        financed_cents=terms.financed_cents,
        monthly_payment_cents=schedule[0].total_payment_cents,
        total_payments_cents=total_payments,
        total_rent_cents=total_rent,
        total_cost_cents=terms.down_payment_cents + total_payments,
        term_months=terms.term_months,
    )
