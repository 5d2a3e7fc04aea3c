"""
Request Schemas

Pydantic models for JSON request bodies. The wire format is camelCase
(`directorId`, `monthlySales`); attributes are snake_case. Snake_case keys
are accepted too.

Whether a client sent a key at all is read from `model_fields_set`. The
persistence layer relies on that to tell "omitted" (leave stored value
alone) from "sent as empty" (overwrite).
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from salesreports.services.formatting import parse_currency_input


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _coerce_number(value):
    """
    Blank or formatted numbers from the form become floats; None becomes 0.

    Figures are rounded to cents here, the scale of the stored columns, so
    a saved value always reads back equal to what was sent.
    """
    if value is None:
        return 0
    if isinstance(value, str):
        value = parse_currency_input(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return round(value, 2)
    return value


# -----------------------------
# Report sections
# -----------------------------

class WinIn(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None


class RepFirmIn(CamelModel):
    name: Optional[str] = None
    monthly_sales: float = 0
    ytd_sales: float = 0
    percent_to_goal: float = 0
    yoy_growth: float = 0
    entity_type: str = "rep_firm"

    @field_validator(
        "monthly_sales", "ytd_sales", "percent_to_goal", "yoy_growth", mode="before"
    )
    @classmethod
    def _numbers(cls, value):
        return _coerce_number(value)

    @field_validator("entity_type", mode="before")
    @classmethod
    def _entity_type(cls, value):
        return value or "rep_firm"


class CompetitorIn(CamelModel):
    name: Optional[str] = None
    what_were_seeing: Optional[str] = None
    our_response: Optional[str] = None


class GoodJobIn(CamelModel):
    person_name: Optional[str] = None
    reason: Optional[str] = None


class RegionalPerformanceIn(CamelModel):
    monthly_sales: float = 0
    monthly_goal: float = 0
    ytd_sales: float = 0
    ytd_goal: float = 0
    open_orders: float = 0
    pipeline: float = 0

    @field_validator("*", mode="before")
    @classmethod
    def _numbers(cls, value):
        return _coerce_number(value)


class KeyInitiativesIn(CamelModel):
    key_projects: Optional[str] = None
    distribution_updates: Optional[str] = None
    challenges_blockers: Optional[str] = None


class MarketingEventsIn(CamelModel):
    events_attended: Optional[str] = None
    marketing_campaigns: Optional[str] = None


class ReportSections(CamelModel):
    """Every section of a report; each one may be omitted."""

    executive_summary: Optional[str] = None
    wins: Optional[List[WinIn]] = None
    rep_firms: Optional[List[RepFirmIn]] = None
    competitors: Optional[List[CompetitorIn]] = None
    good_jobs: Optional[List[GoodJobIn]] = None
    regional_performance: Optional[RegionalPerformanceIn] = None
    key_initiatives: Optional[KeyInitiativesIn] = None
    marketing_events: Optional[MarketingEventsIn] = None
    market_trends: Optional[str] = None
    industry_info: Optional[str] = None
    follow_ups: Optional[str] = None

    def supplied(self, field: str) -> bool:
        """True when the client sent this key, even with an empty value."""
        return field in self.model_fields_set


class ReportPayload(ReportSections):
    director_id: Optional[str] = None
    month: Optional[str] = None
    status: Optional[Literal["draft", "submitted"]] = None


class ReportEditPayload(ReportSections):
    edit_reason: Optional[str] = None


class ReportLookup(CamelModel):
    director_id: Optional[str] = None
    month: Optional[str] = None


class PreviousReportRequest(CamelModel):
    director_id: Optional[str] = None
    current_month: Optional[str] = None


# -----------------------------
# Master data
# -----------------------------

class RegionIn(CamelModel):
    name: Optional[str] = None


class DirectorIn(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    region_id: Optional[str] = None


class DirectorSetupIn(CamelModel):
    """Everything a director reports on; each list replaces what is stored."""

    primary_region_id: Optional[str] = None
    additional_region_ids: List[str] = []
    rep_firm_ids: List[str] = []
    customer_ids: List[str] = []
    channel_types: List[str] = []
    uses_direct_customers: bool = False


class RepFirmMasterIn(CamelModel):
    name: Optional[str] = None
    region_id: Optional[str] = None
    entity_type: Optional[str] = None
    active: Optional[bool] = None


class CustomerIn(CamelModel):
    name: Optional[str] = None
    active: Optional[bool] = None


class PhotoDeleteRequest(CamelModel):
    photo_id: Optional[str] = None


# -----------------------------
# Summaries
# -----------------------------

class SummaryRequest(ReportSections):
    """Unsaved form contents sent for an AI executive summary."""

    director_name: Optional[str] = None
    region: Optional[str] = None
    month: Optional[str] = None


class GlobalSummaryRequest(CamelModel):
    report_ids: List[str] = []
    period_type: Literal["month", "quarter"] = "month"
    period_value: Optional[str] = None


class GlobalSummaryIn(CamelModel):
    period_type: Optional[str] = None
    period_value: Optional[str] = None
    summary_text: Optional[str] = None
    report_ids: List[str] = []
