from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Time, UniqueConstraint

from app.db.session import Base


class Attendance(Base):
    """Attendance: one row per intern per day, enforced by uq_attendance_intern_tanggal."""

    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("intern_id", "tanggal", name="uq_attendance_intern_tanggal"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    intern_id = Column(Integer, ForeignKey("interns.id", ondelete="RESTRICT"), nullable=False, index=True)
    tanggal = Column(Date, nullable=False)
    shift = Column(String(20), nullable=True)  # shift1, shift2, piket, izin; NULL for sweeper rows
    jam_masuk = Column(Time, nullable=True)
    jam_keluar = Column(Time, nullable=True)
    telat_menit = Column(Integer, nullable=False, default=0)
    pulang_awal_menit = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False)  # hadir, izin, alpa
    keterangan = Column(String(20), nullable=True)  # alpa / libur on sweeper rows
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

