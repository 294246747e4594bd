"""
Free-text question answering over the loaded records.

Questions are lower-cased and matched against an ordered rule table; the
first rule whose predicate accepts the question produces the answer. No
rule ever raises: unknown questions fall through to a capability list.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.records import RawRecord
from aadhaar_dashboard.services.aggregation import (
    StateAggregate,
    VerticalTotals,
    age_breakdown,
    aggregate_by_state,
    rank_states,
)
from aadhaar_dashboard.store import RecordSet
from aadhaar_dashboard.utils.date_utils import is_placeholder_date
from aadhaar_dashboard.utils.formatting import format_number, format_percentage, round_half_up

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data uploaded yet. Please upload CSV files to get started."

HELP_MESSAGE = (
    "I can help with:\n\n"
    "• Totals - \"total enrollments\"\n"
    "• Rankings - \"top 5 states\"\n"
    "• State info - \"tell me about Maharashtra\"\n"
    "• Age data - \"age breakdown\"\n"
    "• Summary - \"show summary\"\n"
    "• Compare - \"compare Gujarat and Rajasthan\""
)

COMPARE_PROMPT = "Mention two state names to compare.\nExample: Compare Maharashtra and Gujarat"

NOT_ENOUGH_DATES = "Not enough date data for trends. Upload data with multiple dates."

_NUMBER = re.compile(r"\d+")


def _distinct(values) -> List[str]:
    """First-seen order, empty strings dropped."""
    return [v for v in dict.fromkeys(values) if v]


class QueryContext:
    """Views of one record snapshot shared by the rules."""

    def __init__(self, records: RecordSet):
        self.records = records
        self.state_data: List[StateAggregate] = aggregate_by_state(records)
        self.totals = VerticalTotals(
            enrollments=sum(s.enrollments for s in self.state_data),
            demographics=sum(s.demographics for s in self.state_data),
            biometrics=sum(s.biometrics for s in self.state_data),
        )

        all_records = list(records.all_records())
        self.states = _distinct(r.state for r in all_records)
        self.districts = _distinct(r.district for r in all_records)
        self.pincodes = _distinct(r.pincode for r in all_records)
        self.dates = sorted(d for d in set(r.date for r in all_records) if not is_placeholder_date(d))

    def _sum_where(self, predicate: Callable[[RawRecord], bool]) -> VerticalTotals:
        totals = VerticalTotals()
        for vertical, vertical_records in self.records.items():
            totals.add(vertical, sum(r.total for r in vertical_records if predicate(r)))
        return totals

    def state_totals(self, state: str) -> VerticalTotals:
        target = state.lower()
        return self._sum_where(lambda r: r.state.lower() == target)

    def state_districts(self, state: str) -> List[str]:
        target = state.lower()
        return list(dict.fromkeys(
            r.district for r in self.records.all_records() if r.state.lower() == target
        ))

    def district_totals(self, district: str) -> VerticalTotals:
        target = district.lower()
        return self._sum_where(lambda r: r.district.lower() == target)

    def district_parent_state(self, district: str) -> Optional[str]:
        target = district.lower()
        for record in self.records.all_records():
            if record.district.lower() == target and record.state:
                return record.state
        return None

    def date_totals(self, date: str) -> VerticalTotals:
        return self._sum_where(lambda r: r.date == date)

    def find_date(self, q: str) -> Optional[str]:
        return next((d for d in self.dates if d.lower() in q), None)

    def find_district(self, q: str) -> Optional[str]:
        return next((d for d in self.districts if d.lower() in q), None)

    def find_state(self, q: str) -> Optional[str]:
        return next((s for s in self.states if s.lower() in q), None)


def _breakdown_block(totals: VerticalTotals) -> str:
    return (
        f"• Enrollments: {format_number(totals.enrollments)}\n"
        f"• Demographics: {format_number(totals.demographics)}\n"
        f"• Biometrics: {format_number(totals.biometrics)}\n"
        f"• Total: {format_number(totals.total)}"
    )


def _requested_count(q: str) -> int:
    match = _NUMBER.search(q)
    return int(match.group()) if match else settings.QUERY_DEFAULT_TOP_N


def _ranking_lines(states: List[StateAggregate]) -> str:
    return "\n".join(f"{i}. {s.name}: {format_number(s.total)}" for i, s in enumerate(states, 1))


def _has_any(q: str, *words: str) -> bool:
    return any(word in q for word in words)


# Handlers

def answer_help(q: str, ctx: QueryContext) -> str:
    return HELP_MESSAGE


def answer_summary(q: str, ctx: QueryContext) -> str:
    ages = age_breakdown(ctx.records)["enrollment"]
    date_line = f"• {ctx.dates[0]} to {ctx.dates[-1]}" if ctx.dates else ""
    return (
        "Data Summary\n\n"
        "Coverage:\n"
        f"• {len(ctx.states)} States\n"
        f"• {len(ctx.districts)} Districts\n"
        f"• {len(ctx.pincodes)} Pincodes\n"
        f"{date_line}\n\n"
        "Totals:\n"
        f"• Enrollments: {format_number(ctx.totals.enrollments)}\n"
        f"• Demographics: {format_number(ctx.totals.demographics)}\n"
        f"• Biometrics: {format_number(ctx.totals.biometrics)}\n"
        f"• Grand Total: {format_number(ctx.totals.total)}\n\n"
        "Age Groups (Enrollment):\n"
        f"• 0-5 yrs: {format_number(ages['0-5'])}\n"
        f"• 5-17 yrs: {format_number(ages['5-17'])}\n"
        f"• 18+ yrs: {format_number(ages['18+'])}"
    )


def answer_totals(q: str, ctx: QueryContext) -> str:
    coverage = f"Across {len(ctx.states)} states and {len(ctx.districts)} districts"
    if "enrollment" in q:
        return f"Total Enrollments: {format_number(ctx.totals.enrollments)}\n{coverage}"
    if "demographic" in q:
        return f"Total Demographics: {format_number(ctx.totals.demographics)}\n{coverage}"
    if "biometric" in q:
        return f"Total Biometrics: {format_number(ctx.totals.biometrics)}\n{coverage}"
    if "state" in q:
        more = f" +{len(ctx.states) - 8} more" if len(ctx.states) > 8 else ""
        return f"{len(ctx.states)} States in data:\n{', '.join(ctx.states[:8])}{more}"
    if "district" in q:
        return f"{len(ctx.districts)} Districts across {len(ctx.states)} states"
    return (
        "Total Records:\n"
        f"• Enrollments: {format_number(ctx.totals.enrollments)}\n"
        f"• Demographics: {format_number(ctx.totals.demographics)}\n"
        f"• Biometrics: {format_number(ctx.totals.biometrics)}\n"
        f"• Grand Total: {format_number(ctx.totals.total)}"
    )


def answer_age_breakdown(q: str, ctx: QueryContext) -> str:
    ages = age_breakdown(ctx.records)
    enrollment = ages["enrollment"]
    demographic = ages["demographic"]
    biometric = ages["biometric"]
    total = ctx.totals.enrollments
    return (
        "Age Breakdown\n\n"
        "Enrollments:\n"
        f"• Children (0-5): {format_number(enrollment['0-5'])} ({format_percentage(enrollment['0-5'], total)}%)\n"
        f"• Youth (5-17): {format_number(enrollment['5-17'])} ({format_percentage(enrollment['5-17'], total)}%)\n"
        f"• Adults (18+): {format_number(enrollment['18+'])} ({format_percentage(enrollment['18+'], total)}%)\n\n"
        "Demographics:\n"
        f"• Youth (5-17): {format_number(demographic['5-17'])}\n"
        f"• Adults (17+): {format_number(demographic['17+'])}\n\n"
        "Biometrics:\n"
        f"• Youth (5-17): {format_number(biometric['5-17'])}\n"
        f"• Adults (17+): {format_number(biometric['17+'])}"
    )


def answer_top(q: str, ctx: QueryContext) -> str:
    states = rank_states(ctx.state_data)[:_requested_count(q)]
    return f"Top {len(states)} States:\n\n{_ranking_lines(states)}"


def answer_bottom(q: str, ctx: QueryContext) -> str:
    states = rank_states(ctx.state_data, descending=False)[:_requested_count(q)]
    return f"Bottom {len(states)} States:\n\n{_ranking_lines(states)}"


def answer_compare(q: str, ctx: QueryContext) -> str:
    found = [s for s in ctx.states if s.lower() in q]
    if len(found) < 2:
        return COMPARE_PROMPT
    blocks = [f"{state}:\n{_breakdown_block(ctx.state_totals(state))}" for state in found[:2]]
    return "Comparison:\n\n" + "\n\n".join(blocks)


def answer_average(q: str, ctx: QueryContext) -> str:
    count = len(ctx.state_data)
    if count:
        enrollments = round_half_up(ctx.totals.enrollments / count)
        demographics = round_half_up(ctx.totals.demographics / count)
        biometrics = round_half_up(ctx.totals.biometrics / count)
    else:
        enrollments = demographics = biometrics = 0
    return (
        "Averages per State:\n\n"
        f"• Enrollments: {format_number(enrollments)}\n"
        f"• Demographics: {format_number(demographics)}\n"
        f"• Biometrics: {format_number(biometrics)}\n"
        f"• Total: {format_number(enrollments + demographics + biometrics)}"
    )


def answer_trend(q: str, ctx: QueryContext) -> str:
    if len(ctx.dates) < 2:
        return NOT_ENOUGH_DATES
    first, last = ctx.dates[0], ctx.dates[-1]
    return (
        "Trend Analysis\n\n"
        f"Date Range: {first} to {last}\n"
        f"Total Days: {len(ctx.dates)}\n\n"
        f"First ({first}): {format_number(ctx.date_totals(first).total)}\n"
        f"Latest ({last}): {format_number(ctx.date_totals(last).total)}"
    )


def answer_list_states(q: str, ctx: QueryContext) -> str:
    return f"All {len(ctx.states)} States:\n\n{', '.join(ctx.states)}"


def answer_list_districts(q: str, ctx: QueryContext) -> str:
    sample = ", ".join(ctx.districts[:15])
    more = f"\n\n...and {len(ctx.districts) - 15} more" if len(ctx.districts) > 15 else ""
    return f"Districts ({len(ctx.districts)} total):\n\n{sample}{more}"


def answer_date(q: str, ctx: QueryContext) -> str:
    date = ctx.find_date(q)
    return f"Data for {date}:\n\n{_breakdown_block(ctx.date_totals(date))}"


def answer_district(q: str, ctx: QueryContext) -> str:
    district = ctx.find_district(q)
    parent = ctx.district_parent_state(district)
    heading = f"{district} ({parent})" if parent else district
    return f"{heading}\n\n{_breakdown_block(ctx.district_totals(district))}"


def answer_state(q: str, ctx: QueryContext) -> str:
    state = ctx.find_state(q)
    ranked = rank_states(ctx.state_data)
    rank = next((i for i, s in enumerate(ranked, 1) if s.name.lower() == state.lower()), 0)
    totals = ctx.state_totals(state)
    districts = ctx.state_districts(state)

    district_line = ""
    if districts:
        district_line = ", ".join(districts[:4])
        if len(districts) > 4:
            district_line += f" +{len(districts) - 4} more"

    return (
        f"{state} (Rank #{rank})\n\n"
        "Statistics:\n"
        f"{_breakdown_block(totals)}\n\n"
        f"Districts: {len(districts)}\n"
        f"{district_line}"
    )


def answer_distribution(q: str, ctx: QueryContext) -> str:
    totals = ctx.totals
    return (
        "Distribution:\n\n"
        f"• Enrollments: {format_percentage(totals.enrollments, totals.total)}% ({format_number(totals.enrollments)})\n"
        f"• Demographics: {format_percentage(totals.demographics, totals.total)}% ({format_number(totals.demographics)})\n"
        f"• Biometrics: {format_percentage(totals.biometrics, totals.total)}% ({format_number(totals.biometrics)})"
    )


def answer_record_counts(q: str, ctx: QueryContext) -> str:
    counts = ctx.records.counts()
    return (
        "Data Records:\n\n"
        f"• Enrollment: {format_number(counts['enrollment'])}\n"
        f"• Demographic: {format_number(counts['demographic'])}\n"
        f"• Biometric: {format_number(counts['biometric'])}\n"
        f"• Total: {format_number(ctx.records.total_records)}"
    )


def answer_fallback(q: str, ctx: QueryContext) -> str:
    return (
        f"I have data for {len(ctx.states)} states and {len(ctx.districts)} districts.\n\n"
        "Try asking:\n"
        "• \"Show summary\"\n"
        "• \"Top 5 states\"\n"
        "• \"Tell me about [state name]\"\n"
        "• \"Age breakdown\"\n"
        "• Type \"help\" for more options"
    )


@dataclass(frozen=True)
class QueryRule:
    """A named predicate/handler pair in the resolver's priority list."""
    name: str
    predicate: Callable[[str, QueryContext], bool]
    handler: Callable[[str, QueryContext], str]


# Highest priority first
RULES: List[QueryRule] = [
    QueryRule("help", lambda q, ctx: "help" in q or q == "?", answer_help),
    QueryRule(
        "summary",
        lambda q, ctx: _has_any(q, "summary", "overview", "all data") or q == "show all",
        answer_summary,
    ),
    QueryRule("totals", lambda q, ctx: _has_any(q, "total", "how many", "count"), answer_totals),
    # 'age' also matches words such as 'percentage' and 'average'
    QueryRule("age_breakdown", lambda q, ctx: _has_any(q, "age", "breakdown", "children", "adult"), answer_age_breakdown),
    QueryRule(
        "top",
        lambda q, ctx: _has_any(q, "top", "best", "highest") and not _has_any(q, "bottom", "lowest"),
        answer_top,
    ),
    QueryRule("bottom", lambda q, ctx: _has_any(q, "bottom", "lowest", "least", "worst"), answer_bottom),
    QueryRule("compare", lambda q, ctx: "compare" in q, answer_compare),
    QueryRule("average", lambda q, ctx: _has_any(q, "average", "avg", "mean"), answer_average),
    QueryRule("trend", lambda q, ctx: _has_any(q, "trend", "growth", "time", "date range"), answer_trend),
    QueryRule("list_states", lambda q, ctx: "list" in q and "state" in q, answer_list_states),
    QueryRule("list_districts", lambda q, ctx: "list" in q and "district" in q, answer_list_districts),
    QueryRule("date", lambda q, ctx: ctx.find_date(q) is not None, answer_date),
    QueryRule("district", lambda q, ctx: ctx.find_district(q) is not None, answer_district),
    QueryRule("state", lambda q, ctx: ctx.find_state(q) is not None, answer_state),
    QueryRule(
        "distribution",
        lambda q, ctx: _has_any(q, "percentage", "percent", "share", "distribution"),
        answer_distribution,
    ),
    QueryRule("record_counts", lambda q, ctx: _has_any(q, "record", "row", "data point"), answer_record_counts),
]


class QueryResolver:
    """Answers questions against one record snapshot."""

    def __init__(self, records: RecordSet, rules: Optional[List[QueryRule]] = None):
        self.records = records
        self.rules = RULES if rules is None else rules
        self._context: Optional[QueryContext] = None

    @property
    def context(self) -> QueryContext:
        if self._context is None:
            self._context = QueryContext(self.records)
        return self._context

    def match(self, question: str) -> Optional[QueryRule]:
        """First rule accepting the question, or None for the fallback."""
        q = question.lower().strip()
        for rule in self.rules:
            if rule.predicate(q, self.context):
                return rule
        return None

    def answer(self, question: str) -> str:
        """
        Answer a free-text question.

        Args:
            question: User question in any case

        Returns:
            Plain-text answer with thousands-separated numbers
        """
        if not self.records.has_data:
            return NO_DATA_MESSAGE

        q = question.lower().strip()
        rule = self.match(q)
        if rule is None:
            logger.debug(f"No rule matched question: {q!r}")
            return answer_fallback(q, self.context)

        logger.debug(f"Question {q!r} matched rule '{rule.name}'")
        return rule.handler(q, self.context)


def answer_question(records: RecordSet, question: str) -> str:
    """Answer one question against a snapshot."""
    return QueryResolver(records).answer(question)
