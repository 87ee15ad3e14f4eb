from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from monthly_reports.database import Base
from monthly_reports.models.user import utc_now


class MonthlyReport(Base):
    __tablename__ = "monthly_reports"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    month = Column(String, nullable=False)  # "January" … "December"
    year = Column(String, nullable=False)   # "2025"

    qa = Column(JSON, nullable=False, default=dict)  # {"q1": "...", ..., "q28": "..."}

    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    user = relationship("User", back_populates="reports", lazy="raise")
    days = relationship(
        "ReportDay",
        back_populates="report",
        order_by="ReportDay.id",  # insertion order, not calendar order
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "month", "year", name="uq_report_user_month_year"),
    )


class ReportDay(Base):
    __tablename__ = "report_days"

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(Integer, ForeignKey("monthly_reports.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Integer, nullable=False)  # 1-31

    # Copies of the parent's month/year. NULL on rows written before they existed.
    month = Column(String, nullable=True)
    year = Column(String, nullable=True)

    # yes / no
    namaz = Column(String, nullable=False, default="no")
    hifz = Column(String, nullable=False, default="no")
    nazra = Column(String, nullable=False, default="no")
    tafseer = Column(String, nullable=False, default="no")
    hadees = Column(String, nullable=False, default="no")
    literature = Column(String, nullable=False, default="no")
    darsi_kutab = Column(String, nullable=False, default="no")

    # counts, never negative
    karkunaan_mulakaat = Column(Integer, nullable=False, default=0)
    amoomi_afraad_mulakaat = Column(Integer, nullable=False, default=0)
    khatoot_tadaad = Column(Integer, nullable=False, default=0)

    ghr_ka_kaam = Column(String, nullable=False, default="no")

    report = relationship("MonthlyReport", back_populates="days")
