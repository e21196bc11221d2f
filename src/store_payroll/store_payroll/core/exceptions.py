class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInterval(ValidationError):
    """Raised when a clock-out precedes its clock-in."""


class InvalidTransition(DomainError):
    """Raised when a work status move is not in the transition table."""


class MissingPair(DomainError):
    """Raised when a day has a clock-in or clock-out without its counterpart.

    The hours calculator turns this into a zero-contribution anomaly instead of
    failing the whole computation.
    """


class WageRuleError(DomainError):
    """Base for wage rule configuration problems."""


class NoActiveWageRule(WageRuleError):
    """Raised when no wage rule is marked active."""


class AmbiguousWageRule(WageRuleError):
    """Raised when more than one wage rule is marked active."""
