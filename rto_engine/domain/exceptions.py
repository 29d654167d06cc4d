"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTermsError(DomainException):
    """Loan terms are malformed (price, term, down payment or rate)"""

    pass


class InvalidIncomeError(DomainException):
    """Monthly income is zero or negative"""

    pass


class InsufficientDataError(DomainException):
    """Not enough price history to summarize a market segment"""

    pass


class InvalidPriceSeriesError(DomainException):
    """Price series has duplicate timestamps or non-positive prices"""

    pass


class InvalidRiskInputError(DomainException):
    """Credit quality or volatility is outside its declared range"""

    pass
