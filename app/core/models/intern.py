from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from app.core.enums import InternStatus
from app.db.session import Base


class Intern(Base):
    """Intern roster entry. Soft delete only (status = Nonaktif)."""

    __tablename__ = "interns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    school = Column(String(150), nullable=False)
    status = Column(String(20), nullable=False, default=InternStatus.AKTIF.value)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    @property
    def is_active(self) -> bool:
        return self.status == InternStatus.AKTIF.value
