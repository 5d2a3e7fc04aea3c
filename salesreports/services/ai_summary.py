"""
AI-written executive summaries.
Uses Anthropic Claude to summarize one director's report or a whole period.
"""
import copy
import json
import logging
import os
from typing import Dict, List, Optional

import anthropic

from salesreports.errors import SummaryUnavailableError, ValidationFailure
from salesreports.schemas import SummaryRequest
from salesreports.services.formatting import format_period_label, format_whole_dollars

logger = logging.getLogger(__name__)

ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-5")

# Report header is three lines; anything shorter than this has no content
MIN_PROMPT_LINES = 5

STRUCTURED_KEYS = {
    "overview": "",
    "performanceSummary": "",
    "topWins": [],
    "competitorInsights": [],
    "marketTrends": "",
    "initiatives": "",
    "recommendations": [],
}


def _number(value) -> str:
    value = value or 0
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_report_for_prompt(data: SummaryRequest) -> str:
    """Render unsaved form contents as sectioned plain text."""
    lines = [
        f"Report by: {data.director_name or ''}",
        f"Region: {data.region or ''}",
        f"Month: {data.month or ''}",
    ]

    wins = [w for w in data.wins or [] if w.title]
    if wins:
        lines.append("\n## Wins & Highlights")
        lines.extend(f"- {w.title}: {w.description or ''}" for w in wins)

    if data.follow_ups:
        lines.append("\n## Working On & Follow Ups")
        lines.append(data.follow_ups)

    perf = data.regional_performance
    if perf and (perf.monthly_sales or perf.ytd_sales or perf.pipeline):
        lines.append("\n## Sales Performance")
        for label, value in (
            ("Monthly Sales", perf.monthly_sales),
            ("Monthly Goal", perf.monthly_goal),
            ("YTD Sales", perf.ytd_sales),
            ("YTD Goal", perf.ytd_goal),
            ("Open Orders", perf.open_orders),
            ("Pipeline", perf.pipeline),
        ):
            if value:
                lines.append(f"- {label}: ${_number(value)}")

    firms = [r for r in data.rep_firms or [] if r.name]
    if firms:
        lines.append("\n## Rep Firm Performance")
        for firm in firms:
            lines.append(
                f"- {firm.name}: Monthly ${_number(firm.monthly_sales)}, "
                f"YTD ${_number(firm.ytd_sales)}, {firm.percent_to_goal:g}% to goal, "
                f"{firm.yoy_growth:g}% YoY growth"
            )

    competitors = [c for c in data.competitors or [] if c.name]
    if competitors:
        lines.append("\n## Competitive Intelligence")
        for comp in competitors:
            response = f" (Our response: {comp.our_response})" if comp.our_response else ""
            lines.append(f"- {comp.name}: {comp.what_were_seeing or ''}{response}")

    if data.market_trends:
        lines.append("\n## Market Trends")
        lines.append(data.market_trends)

    if data.industry_info:
        lines.append("\n## Industry Info")
        lines.append(data.industry_info)

    ki = data.key_initiatives
    if ki and (ki.key_projects or ki.distribution_updates or ki.challenges_blockers):
        lines.append("\n## Key Initiatives")
        if ki.key_projects:
            lines.append(f"Key Projects: {ki.key_projects}")
        if ki.distribution_updates:
            lines.append(f"Distribution Updates: {ki.distribution_updates}")
        if ki.challenges_blockers:
            lines.append(f"Challenges/Blockers: {ki.challenges_blockers}")

    me = data.marketing_events
    if me and (me.events_attended or me.marketing_campaigns):
        lines.append("\n## Marketing & Events")
        if me.events_attended:
            lines.append(f"Events Attended: {me.events_attended}")
        if me.marketing_campaigns:
            lines.append(f"Marketing Campaigns: {me.marketing_campaigns}")

    good_jobs = [g for g in data.good_jobs or [] if g.person_name]
    if good_jobs:
        lines.append("\n## Peer Recognition")
        lines.extend(f"- {g.person_name}: {g.reason or ''}" for g in good_jobs)

    return "\n".join(lines)


def aggregate_performance(reports: List[Dict]) -> Dict[str, float]:
    """Sum the regional performance figures of full report dicts."""
    totals = {
        "monthly_sales": 0,
        "monthly_goal": 0,
        "ytd_sales": 0,
        "ytd_goal": 0,
        "pipeline": 0,
        "open_orders": 0,
    }
    for report in reports:
        perf = report.get("regionalPerformance")
        if perf:
            for key in totals:
                totals[key] += perf.get(key) or 0
    return totals


def format_reports_for_prompt(reports: List[Dict], period_type: str, period_value: str) -> str:
    """Render several full reports plus aggregate metrics for a period."""
    lines = [
        f"# Field Team Reports - {format_period_label(period_type, period_value)}",
        f"\nTotal Reports: {len(reports)}\n",
    ]

    totals = aggregate_performance(reports)
    lines.append("## Aggregate Sales Metrics")
    lines.append(f"- Total Monthly Sales: {format_whole_dollars(totals['monthly_sales'])}")
    lines.append(f"- Total Monthly Goal: {format_whole_dollars(totals['monthly_goal'])}")
    lines.append(f"- Total YTD Sales: {format_whole_dollars(totals['ytd_sales'])}")
    lines.append(f"- Total YTD Goal: {format_whole_dollars(totals['ytd_goal'])}")
    lines.append(f"- Total Pipeline: {format_whole_dollars(totals['pipeline'])}")
    lines.append(f"- Total Open Orders: {format_whole_dollars(totals['open_orders'])}")

    for report in reports:
        director = report.get("directors") or {}
        lines.append(f"\n---\n## {director.get('name', 'Unknown')} ({director.get('region') or 'Unknown'})")

        if report.get("executive_summary"):
            lines.append("\n### Executive Summary")
            lines.append(report["executive_summary"])

        wins = [w for w in report.get("wins", []) if w.get("title")]
        if wins:
            lines.append("\n### Wins & Highlights")
            lines.extend(f"- **{w['title']}**: {w.get('description') or ''}" for w in wins)

        rp = report.get("regionalPerformance")
        if rp:
            lines.append("\n### Regional Performance")
            lines.append(
                f"- Monthly: {format_whole_dollars(rp.get('monthly_sales'))} / "
                f"{format_whole_dollars(rp.get('monthly_goal'))} goal"
            )
            lines.append(
                f"- YTD: {format_whole_dollars(rp.get('ytd_sales'))} / "
                f"{format_whole_dollars(rp.get('ytd_goal'))} goal"
            )
            if rp.get("pipeline"):
                lines.append(f"- Pipeline: {format_whole_dollars(rp['pipeline'])}")
            if rp.get("open_orders"):
                lines.append(f"- Open Orders: {format_whole_dollars(rp['open_orders'])}")

        firms = [r for r in report.get("repFirms", []) if r.get("name")]
        if firms:
            lines.append("\n### Rep Firm Performance")
            for firm in firms:
                lines.append(
                    f"- {firm['name']}: Monthly {format_whole_dollars(firm.get('monthly_sales'))}, "
                    f"{firm.get('percent_to_goal') or 0:g}% to goal, {firm.get('yoy_growth') or 0:g}% YoY"
                )

        competitors = [c for c in report.get("competitors", []) if c.get("name")]
        if competitors:
            lines.append("\n### Competitive Intelligence")
            for comp in competitors:
                lines.append(f"- **{comp['name']}**: {comp.get('what_were_seeing') or ''}")
                if comp.get("our_response"):
                    lines.append(f"  - Our response: {comp['our_response']}")

        if report.get("marketTrends"):
            lines.append("\n### Market Trends")
            lines.append(report["marketTrends"])

        ki = report.get("keyInitiatives")
        if ki and (ki.get("key_projects") or ki.get("distribution_updates") or ki.get("challenges_blockers")):
            lines.append("\n### Key Initiatives")
            if ki.get("key_projects"):
                lines.append(f"- Projects: {ki['key_projects']}")
            if ki.get("distribution_updates"):
                lines.append(f"- Distribution: {ki['distribution_updates']}")
            if ki.get("challenges_blockers"):
                lines.append(f"- Challenges: {ki['challenges_blockers']}")

        if report.get("followUps"):
            lines.append("\n### Working On / Follow-ups")
            lines.append(report["followUps"])

    return "\n".join(lines)


def parse_structured_summary(raw: str) -> Dict:
    """
    Parse the model's JSON answer, tolerating markdown code fences.

    Unparseable output is kept as `performanceSummary` so nothing is lost.
    """
    text = raw.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]

    try:
        parsed = json.loads(text.strip())
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response as JSON: {e}")
        parsed = None

    if not isinstance(parsed, dict):
        fallback = copy.deepcopy(STRUCTURED_KEYS)
        fallback["performanceSummary"] = raw
        return fallback
    return parsed


class ReportSummarizer:
    """Writes executive summaries with Claude."""

    def __init__(self, client: Optional[anthropic.Anthropic] = None):
        if client is None:
            api_key = os.getenv("ANTHROPIC_API_KEY")
            if not api_key:
                logger.error("ANTHROPIC_API_KEY is not configured")
                raise SummaryUnavailableError(
                    "AI service is not configured. Please contact your administrator."
                )
            client = anthropic.Anthropic(api_key=api_key)
        self.client = client

    def _complete(self, prompt: str, max_tokens: int) -> str:
        """Send one user message and return the first text block."""
        try:
            response = self.client.messages.create(
                model=ANTHROPIC_MODEL,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AuthenticationError as e:
            logger.error(f"AI authentication failed: {e}")
            raise SummaryUnavailableError(
                "AI service authentication failed. Please contact your administrator."
            ) from e
        except anthropic.RateLimitError as e:
            logger.error(f"AI rate limited: {e}")
            raise SummaryUnavailableError(
                "AI service is temporarily busy. Please wait a moment and try again.",
                status_code=429,
            ) from e
        except anthropic.APIError as e:
            logger.error(f"Error generating summary: {e}")
            raise SummaryUnavailableError(
                "Failed to generate summary. Please try again.", status_code=500
            ) from e

        for block in response.content:
            if block.type == "text":
                return block.text
        return ""

    def summarize_report(self, data: SummaryRequest) -> str:
        """
        3-5 sentence executive summary of one report.

        Raises:
            ValidationFailure: the form has too little content to summarize
            SummaryUnavailableError: the provider refused or failed
        """
        formatted = format_report_for_prompt(data)
        if len(formatted.split("\n")) < MIN_PROMPT_LINES:
            raise ValidationFailure(
                "Please add more content to your report before generating a summary."
            )

        prompt = f"""You are helping a regional sales director write the executive summary for their monthly field report.

Based on the report content below, write a concise 3-5 sentence executive summary that:
1. Highlights the most important wins and achievements
2. Summarizes key sales performance (if data provided)
3. Notes significant competitive intelligence or market trends
4. Mentions priority follow-ups or initiatives

Write in a professional, confident tone. Be specific about numbers and company names. Do not use bullet points.

Here is the report content:

{formatted}"""

        return self._complete(prompt, max_tokens=1024)

    def summarize_reports(self, reports: List[Dict], period_type: str, period_value: str) -> Dict:
        """Structured leadership summary across several full reports."""
        formatted = format_reports_for_prompt(reports, period_type, period_value)

        prompt = f"""You are helping sales leadership build a consolidated summary from {len(reports)} regional field reports.

Respond ONLY with a JSON object (no markdown code fences) with these keys:
- "overview": 2-3 sentence executive highlight
- "performanceSummary": paragraph on overall sales performance
- "topWins": list of {{"title", "value", "region", "description"}} (3-5 items)
- "competitorInsights": list of {{"competitor", "threat" (high|medium|low), "observation", "response"}} (2-4 items)
- "marketTrends": paragraph on market observations
- "initiatives": paragraph on key projects and blockers
- "recommendations": list of {{"priority", "title", "description"}} (2-3 items)

Here are the field reports:

{formatted}"""

        raw = self._complete(prompt, max_tokens=4096)
        return parse_structured_summary(raw or "{}")
