"""
Report Section Models

Child tables owned by a report, all keyed by `report_id`.

Collections (Win, RepFirm, Competitor, GoodJob) are replaced wholesale on
every save that supplies them; `sort_order` keeps the submitted order.
Singletons (RegionalPerformance, KeyInitiatives, MarketingEvents,
MarketTrends, FollowUp) hold at most one row per report.
Photos are append-only and only removed by an explicit delete.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, ForeignKey
from salesreports.database import Base, SerializerMixin, generate_id


def _report_fk(unique=False):
    return Column(
        String(36),
        ForeignKey("reports.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        unique=unique,
    )


def _money():
    # Floats, not Decimals: stored values are compared against JSON numbers,
    # which are rounded to the same two places before they are written
    return Column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)


class Win(SerializerMixin, Base):
    __tablename__ = "wins"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk()
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Win {self.title[:30]}>"


class RepFirm(SerializerMixin, Base):
    """A sales entity line (rep firm or customer) on a report."""

    __tablename__ = "rep_firms"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk()
    name = Column(String(255), nullable=False)
    monthly_sales = _money()
    ytd_sales = _money()
    percent_to_goal = Column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)
    yoy_growth = Column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)
    entity_type = Column(String(50), nullable=False, default="rep_firm")
    sort_order = Column(Integer, nullable=False, default=0)

    ENTITY_TYPES = ["rep_firm", "customer"]

    def __repr__(self):
        return f"<RepFirm {self.name}>"


class Competitor(SerializerMixin, Base):
    __tablename__ = "competitors"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk()
    name = Column(String(255), nullable=False)
    what_were_seeing = Column(Text, nullable=True)
    our_response = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Competitor {self.name}>"


class GoodJob(SerializerMixin, Base):
    __tablename__ = "good_jobs"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk()
    person_name = Column(String(255), nullable=False)
    reason = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<GoodJob {self.person_name}>"


class Photo(SerializerMixin, Base):
    __tablename__ = "photos"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk()
    filename = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Photo {self.filename}>"


class RegionalPerformance(SerializerMixin, Base):
    __tablename__ = "regional_performance"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk(unique=True)
    monthly_sales = _money()
    monthly_goal = _money()
    ytd_sales = _money()
    ytd_goal = _money()
    open_orders = _money()
    pipeline = _money()


class KeyInitiatives(SerializerMixin, Base):
    __tablename__ = "key_initiatives"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk(unique=True)
    key_projects = Column(Text, nullable=True)
    distribution_updates = Column(Text, nullable=True)
    challenges_blockers = Column(Text, nullable=True)


class MarketingEvents(SerializerMixin, Base):
    __tablename__ = "marketing_events"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk(unique=True)
    events_attended = Column(Text, nullable=True)
    marketing_campaigns = Column(Text, nullable=True)


class MarketTrends(SerializerMixin, Base):
    __tablename__ = "market_trends"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk(unique=True)
    observations = Column(Text, nullable=True)
    industry_info = Column(Text, nullable=True)


class FollowUp(SerializerMixin, Base):
    __tablename__ = "follow_ups"

    id = Column(String(36), primary_key=True, default=generate_id)
    report_id = _report_fk(unique=True)
    content = Column(Text, nullable=True)
