"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CategorizationAPIError(DomainException):
    """Categorization API returned an error, timed out, or sent a malformed body"""

    pass


class InvalidClassificationInputError(DomainException):
    """Item name or cost handed to the classifier is malformed"""

    pass
