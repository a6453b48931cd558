# app/core/exceptions.py
"""Error taxonomy for slot computation and booking"""


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling core"""

    kind = "scheduling_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """The request is invalid regardless of concurrent state (fix input, then retry)"""

    kind = "validation_error"


class ConflictError(SchedulingError):
    """The slot was taken between the availability read and the commit"""

    kind = "conflict"


class AppointmentNotFoundError(SchedulingError):
    kind = "not_found"


class StorageError(SchedulingError):
    """Infrastructure failure; the only category a caller may retry with backoff"""

    kind = "storage_error"
