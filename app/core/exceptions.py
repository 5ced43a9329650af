from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ServiceError):
    def __init__(self, message: str = "Data tidak lengkap") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotFoundError(ServiceError):
    def __init__(self, message: str = "Data tidak ditemukan") -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ConflictError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)


class PersistenceError(ServiceError):
    def __init__(self, message: str = "Terjadi kesalahan pada database") -> None:
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


# ----- Attendance workflow -----
class InvalidShift(ValidationError):
    def __init__(self, shift: object) -> None:
        super().__init__(f"Shift tidak valid: {shift}")
        self.shift = shift


class AlreadyRecordedToday(ConflictError):
    def __init__(self, message: str = "Anda sudah presensi hari ini") -> None:
        super().__init__(message)


class NotCheckedIn(ValidationError):
    def __init__(self, message: str = "Anda belum check-in hari ini") -> None:
        super().__init__(message)


class AlreadyCheckedOut(ConflictError):
    def __init__(self, message: str = "Anda sudah check-out hari ini") -> None:
        super().__init__(message)
