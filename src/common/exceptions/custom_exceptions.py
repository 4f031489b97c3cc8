"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class APIError(ApplicationError):
    """Exception raised for errors during inventory service calls."""

    def __init__(
        self,
        message: str = "API call failed",
        original_exception: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.status_code = status_code
        self.message = f"API Error: {message}"
        if status_code:
            self.message += f" (Status Code: {status_code})"


class InvalidConfigurationError(ApplicationError):
    """Raised when a product's unit configuration cannot be used, e.g. pieces per box below 1."""

    def __init__(
        self, message: str = "Invalid unit configuration", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message, original_exception)
        self.message = f"Invalid Configuration: {message}"


class QuantityValidationError(ApplicationError):
    """Raised when a quantity cannot be used for the requested stock operation."""

    def __init__(
        self, message: str = "Quantity is not valid", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message, original_exception)
        self.message = f"Quantity Error: {message}"
