"""Affordability evaluation - debt-to-income verdicts and maximum price"""

import math

from rto_engine.domain.amortization import financed_from_payment
from rto_engine.domain.exceptions import InvalidIncomeError, InvalidTermsError
from rto_engine.domain.models import AffordabilityProfile, AffordabilityResult, Verdict
from rto_engine.domain.policy import AffordabilityPolicy
from rto_engine.utils.money import floor_cents, to_cents


def _require_income(monthly_income_cents: int) -> None:
    if monthly_income_cents <= 0:
        raise InvalidIncomeError(f"monthly income must be positive, got {monthly_income_cents}")


def determine_verdict(ratio: float, policy: AffordabilityPolicy) -> Verdict:
    """
    Map a debt-to-income ratio to a verdict.

    Default bands (upper bounds inclusive):
    - <= 0.36: qualifies
    - <= 0.45: conditional
    - above:   does not qualify
    """
    if ratio <= policy.qualify_max_ratio:
        return Verdict.QUALIFIES
    elif ratio <= policy.conditional_max_ratio:
        return Verdict.CONDITIONAL
    else:
        return Verdict.DOES_NOT_QUALIFY


def evaluate(profile: AffordabilityProfile, policy: AffordabilityPolicy) -> AffordabilityResult:
    """
    Debt-to-income ratio including the proposed payment, and its verdict.

    Example:
        income 150,000, debts 10,000, payment 45,000 -> 0.3667, conditional
    """
    _require_income(profile.monthly_income_cents)

    obligations = profile.monthly_debt_cents + profile.proposed_payment_cents
    ratio = obligations / profile.monthly_income_cents
    headroom = profile.monthly_income_cents * policy.qualify_max_ratio - obligations

    return AffordabilityResult(
        ratio=ratio,
        verdict=determine_verdict(ratio, policy),
        headroom_cents=to_cents(headroom),
    )


def max_affordable_price(
    monthly_income_cents: int,
    monthly_debt_cents: int,
    down_payment_ratio: float,
    term_months: int,
    annual_rate_percent: float,
    policy: AffordabilityPolicy,
) -> int:
    """
    Highest property price whose payment lands exactly on the qualifying ratio.

    Solves the payment formula backward for the financed amount, then grosses
    it up by the down payment. Floored to whole cents so the result never
    overshoots the threshold. Returns 0 when existing debt already uses up the
    qualifying ratio.
    """
    _require_income(monthly_income_cents)
    if not isinstance(term_months, int) or term_months <= 0:
        raise InvalidTermsError(f"term_months must be a positive integer, got {term_months!r}")
    if not 0.0 <= down_payment_ratio < 1.0:
        raise InvalidTermsError(f"down_payment_ratio must be within [0, 1), got {down_payment_ratio}")
    if not math.isfinite(annual_rate_percent) or annual_rate_percent < 0:
        raise InvalidTermsError(f"annual_rate_percent must be non-negative, got {annual_rate_percent}")

    payment_budget = monthly_income_cents * policy.qualify_max_ratio - monthly_debt_cents
    if payment_budget <= 0:
        return 0

    financed = financed_from_payment(payment_budget, annual_rate_percent, term_months)
    return floor_cents(financed / (1 - down_payment_ratio))
