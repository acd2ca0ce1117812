"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidProfileError(DomainException):
    """Transaction profile values are out of range or inconsistent"""

    pass


class InvalidRateTableError(DomainException):
    """Rate table override names an unknown group/field or holds a bad value"""

    pass


class InvalidSweepError(DomainException):
    """Curve sweep parameters cannot produce a turnover series"""

    pass
