from app.core.models.intern import Intern
from app.core.models.attendance import Attendance

__all__ = [
    "Attendance",
    "Intern",
]
