from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey
from salesreports.database import Base, SerializerMixin, generate_id


class ReportEditHistory(SerializerMixin, Base):
    """Append-only audit entry for an administrator edit.

    `changes` maps a dotted field path to ``{"old": ..., "new": ...}``.
    Rows are only ever inserted.
    """

    __tablename__ = "report_edit_history"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = Column(
        String(36),
        ForeignKey("reports.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    edited_by = Column(String(255), nullable=False)
    edited_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    changes = Column(JSON, nullable=False)
    edit_reason = Column(Text, nullable=True)

    def __repr__(self):
        return f"<ReportEditHistory {self.report_id} {len(self.changes or {})} changes>"
