from typing import Any, Mapping, Optional


class FamilyMealError(Exception):
    """Base class for errors raised by the planning services.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context for the caller
        code: machine-readable error code, defaults to the class' ``default_code``
        http_status: suggested HTTP status code for handlers
    """

    http_status = 400
    default_code = "SERVICE_ERROR"
    default_message = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(FamilyMealError):
    """Raised when input is invalid or a precondition for a planning call is not met."""

    default_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class UnknownMomentError(ServiceValidationError):
    """Raised when a full-week request names moments missing from the catalog."""

    default_code = "UNKNOWN_MOMENT"

    def __init__(self, names):
        names = sorted(names)
        super().__init__(f"Unknown moments: {', '.join(names)}", details={"unknown_moments": names})


class NoRecipesAvailableError(ServiceValidationError):
    """Raised when the catalog offers no recipe at all to plan with."""

    default_code = "NO_RECIPES_AVAILABLE"
    default_message = "No recipes available"


class NotFoundError(FamilyMealError):
    """Raised when a stored meal, recipe or moment does not exist."""

    http_status = 404
    default_code = "NOT_FOUND"
    default_message = "Not found"
