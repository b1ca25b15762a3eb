
class BookingServiceError(RuntimeError):
    """Base for failures talking to the availability/booking backend."""
    pass


class NetworkFailure(BookingServiceError):
    """Raised when the backend cannot be reached (timeouts, connection errors, unusable payloads)."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message)


class AuthRequired(BookingServiceError):
    """Raised when no credential is present or the backend answers 401."""

    def __init__(self, message: str = "Session expired. Please login again.") -> None:
        super().__init__(message)


class ServerRejection(BookingServiceError):
    """Raised when the backend refuses a request; the message is shown to the user verbatim."""

    def __init__(self, message: str, status: int = 409, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.errors = list(errors or [])


class ValidationFailure(ValueError):
    """Raised before any request is attempted when a booking form is incomplete."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = list(problems)
