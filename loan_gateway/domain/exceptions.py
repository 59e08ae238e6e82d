"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Customer, bureau report or KYC record does not exist"""

    pass


class InvalidInputError(DomainException):
    """Missing or out-of-range input (non-positive amount, tenure, income)"""

    pass


class ComputationDegenerateError(DomainException):
    """A calculation would produce a non-finite value"""

    pass


class VerificationTimeoutError(DomainException):
    """Simulated KYC verification did not finish within its budget"""

    pass


class VerificationCancelledError(DomainException):
    """Caller went away before the KYC verification finished"""

    pass
