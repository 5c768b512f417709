"""Exception hierarchy for the breakeven engines."""


class BreakevenError(Exception):
    """Base exception for all engine errors."""


class InvalidInputError(BreakevenError, ValueError):
    """Raised when a structural precondition on the inputs is violated."""


class DomainError(BreakevenError, ArithmeticError):
    """Raised when inputs would produce a non-finite payment or balance."""
