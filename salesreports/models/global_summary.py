from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, JSON, UniqueConstraint
from salesreports.database import Base, SerializerMixin, generate_id


class GlobalSummary(SerializerMixin, Base):
    """Saved consolidated narrative for a month or quarter."""

    __tablename__ = "global_summaries"
    __table_args__ = (
        UniqueConstraint("period_type", "period_value", name="uq_global_summary_period"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    period_type = Column(String(20), nullable=False)  # month, quarter
    period_value = Column(String(10), nullable=False)  # 2025-03, 2025-Q1
    summary_text = Column(Text, nullable=False)
    report_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    edited_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    PERIOD_TYPES = ["month", "quarter"]

    def __repr__(self):
        return f"<GlobalSummary {self.period_type} {self.period_value}>"
