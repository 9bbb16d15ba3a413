"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFrequencyError(DomainException):
    """Recurrence frequency is not one of the supported values"""

    def __init__(self, frequency: str):
        self.frequency = frequency
        super().__init__(f"Invalid frequency: {frequency}")


class InvalidRecordDataError(DomainException):
    """Record data is malformed or invalid"""

    pass


class FinanceAPIError(DomainException):
    """Finance API returned an error or is unavailable"""

    pass
