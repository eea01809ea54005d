"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MalformedPeriodError(DomainException, ValueError):
    """Period or day key string could not be parsed"""

    pass


class InvalidPurchaseError(DomainException, ValueError):
    """Purchase parameters cannot produce a valid installment schedule"""

    pass


class InvalidEntryError(DomainException, ValueError):
    """Income, expense or card fields are out of range"""

    pass


class EntityNotFoundError(DomainException):
    """Referenced income, expense, card, purchase or installment does not exist"""

    pass


class AdviceUnavailableError(DomainException):
    """Advice generation is not configured (missing API credential)"""

    pass


class AdviceServiceError(DomainException):
    """Advice endpoint returned an error or is unreachable"""

    pass
