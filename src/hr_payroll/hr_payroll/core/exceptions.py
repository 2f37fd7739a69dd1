class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass carries a stable ``code`` for callers and audit logs, and the
    HTTP status the API layer answers with.
    """

    code = "DOMAIN_ERROR"
    status_code = 400
    retryable = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class InvalidPeriod(ValidationError):
    """Pay period dates are malformed or out of order."""

    code = "INVALID_PERIOD"


class ComponentConfigError(ValidationError):
    """Salary component catalog data cannot be applied."""

    code = "COMPONENT_CONFIG_ERROR"
    status_code = 422


class NoActiveEmployees(DomainError):
    code = "NO_ACTIVE_EMPLOYEES"
    status_code = 422


class AuthenticationError(DomainError):
    """Raised when the caller identity is missing."""

    code = "UNAUTHENTICATED"
    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    status_code = 403


class SelfApprovalForbidden(AuthorizationError):
    """Maker-checker violation: the preparer tried to approve their own run."""

    code = "SELF_APPROVAL_FORBIDDEN"


class InvalidStateTransition(DomainError):
    code = "INVALID_STATE_TRANSITION"
    status_code = 409


class ImmutableRunError(DomainError):
    """Mutation attempted on a paid payroll run."""

    code = "IMMUTABLE_RUN"
    status_code = 409


class ConcurrentModification(DomainError):
    """Lost a race on a shared payroll run; the caller may retry."""

    code = "CONCURRENT_MODIFICATION"
    status_code = 409
    retryable = True


class NotFound(DomainError):
    code = "NOT_FOUND"
    status_code = 404


class StorageUnavailable(DomainError):
    """The backing store did not answer in time."""

    code = "STORAGE_UNAVAILABLE"
    status_code = 503
    retryable = True
