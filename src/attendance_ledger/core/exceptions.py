class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "ValidationError"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    code = "AuthorizationError"


class Unauthorized(AuthorizationError):
    """Caller lacks the role capability, or the subject fails a role precondition."""

    code = "Unauthorized"


class AlreadyRegistered(ValidationError):
    """Target identity already holds a role."""

    code = "AlreadyRegistered"


class InvalidDate(ValidationError):
    code = "InvalidDate"


class InvalidTime(ValidationError):
    code = "InvalidTime"


class AttendanceAlreadyRecorded(ValidationError):
    """Same recorder already wrote this exact key."""

    code = "AttendanceAlreadyRecorded"


class DuplicateAttendance(ValidationError):
    """A different recorder already owns this (subject, date, time) slot."""

    code = "DuplicateAttendance"


class InvalidPayment(ValidationError):
    code = "InvalidPayment"


class InsufficientFunds(ValidationError):
    code = "InsufficientFunds"


class OperationNotSupported(DomainError):
    """Operation does not exist under the configured ledger variant."""

    code = "OperationNotSupported"


class RegistryNotInitialized(DomainError):
    code = "RegistryNotInitialized"


class ConfigurationError(DomainError):
    code = "ConfigurationError"
