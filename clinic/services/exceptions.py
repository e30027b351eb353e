from fastapi import status


class SchedulingError(Exception):
    """Base for outcomes the caller must handle; carries the HTTP status to surface."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(SchedulingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFound(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND


class SlotConflict(SchedulingError):
    status_code = status.HTTP_409_CONFLICT


class InvalidSlot(SchedulingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidTransition(SchedulingError):
    status_code = status.HTTP_409_CONFLICT


class NotAssigned(SchedulingError):
    status_code = status.HTTP_403_FORBIDDEN


class EmailAlreadyRegistered(SchedulingError):
    status_code = status.HTTP_409_CONFLICT
