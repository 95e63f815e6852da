"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PredictionAPIError(DomainException):
    """Prediction endpoint returned an error or is unavailable"""

    pass


class InvalidImportDataError(DomainException):
    """Imported transaction data is malformed"""

    pass


class InvalidRuleError(DomainException):
    """Rule definition failed validation"""

    pass


class InvalidReportError(DomainException):
    """Fraud report is missing required details"""

    pass


class InvalidEndpointError(DomainException):
    """Prediction endpoint URL is not usable"""

    pass
