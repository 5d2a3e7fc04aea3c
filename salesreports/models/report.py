from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from salesreports.database import Base, SerializerMixin, generate_id


class Report(SerializerMixin, Base):
    __tablename__ = "reports"
    __table_args__ = (
        UniqueConstraint("director_id", "month", name="uq_report_director_month"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    director_id = Column(
        String(36), ForeignKey("directors.id"), nullable=False, index=True
    )
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    status = Column(String(20), nullable=False, default="draft", index=True)
    executive_summary = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    director = relationship("Director", back_populates="reports")

    STATUSES = ["draft", "submitted"]

    @property
    def is_submitted(self):
        return self.status == "submitted"

    def to_dict(self):
        data = super().to_dict()
        data["directors"] = self.director.summary() if self.director else None
        return data

    def __repr__(self):
        return f"<Report {self.director_id} {self.month}>"
