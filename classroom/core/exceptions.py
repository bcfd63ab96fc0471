from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class ConflictError(ServiceError):
    """Duplicate unique value (e.g. email). Surfaced as 400 like other bad input."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UnauthorizedError(ServiceError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(ServiceError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InvalidTransitionError(ServiceError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot change class status from {current} to {requested}",
            status.HTTP_409_CONFLICT,
        )
        self.current = current
        self.requested = requested


class InternalError(ServiceError):
    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
