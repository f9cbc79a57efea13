"""Turn raw table cells into typed records.

Malformed cells never raise here: they degrade to an absent or default
value so one bad cell cannot fail a whole report.
"""
import math
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from functools import lru_cache
from typing import Any, Callable, List, Optional, Sequence, TypeVar
from zoneinfo import ZoneInfo

from support_intel.core.config import settings
from support_intel.schemas.records import (
    DailyBriefRecord,
    FaqRecord,
    KnowledgeArticleRecord,
    MetricSample,
    QualitySignalEvent,
    RiskScoreRecord,
    SentimentRecord,
    TicketRecord,
    TrendRecord,
)

T = TypeVar("T")

DEFAULT_BRIEF_TIME = "08:00 AM"


@lru_cache(maxsize=None)
def _zone(name: str) -> tzinfo:
    return ZoneInfo(name)


def report_timezone(name: Optional[str] = None) -> tzinfo:
    return _zone(name or settings.REPORT_TIMEZONE)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def to_bool(value: Any) -> bool:
    return value is True or str(value).lower() == "true"


def to_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def blank_as_zero(value: Any) -> Optional[float]:
    """Like to_number, but an empty cell counts as 0. Malformed cells are still None."""
    return 0.0 if is_blank(value) else to_number(value)


def to_int(value: Any, default: int = 0) -> int:
    number = to_number(value)
    if number is None or math.isinf(number):
        return default
    return int(number)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def split_list(value: Any) -> List[str]:
    if is_blank(value):
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def safe_datetime(value: Any) -> Optional[date]:
    """
    Parse a cell into an aware datetime or a calendar date, or None when it is not a date.
    Naive datetimes are taken as UTC. Values without a time part stay plain
    calendar dates so they keep their day in any report timezone.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def as_datetime(value: Optional[date], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    # A calendar date means local midnight in the report timezone.
    if value is None or isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day, tzinfo=tz or report_timezone())


def local_date(value: Optional[date], tz: Optional[tzinfo] = None) -> Optional[date]:
    if value is None:
        return None
    if not isinstance(value, datetime):
        return value
    return value.astimezone(tz or report_timezone()).date()


def format_date(value: Optional[date], tz: Optional[tzinfo] = None) -> str:
    day = local_date(value, tz)
    return day.isoformat() if day else ""


def format_time(value: Optional[date], tz: Optional[tzinfo] = None) -> str:
    if value is None:
        return DEFAULT_BRIEF_TIME
    zone = tz or report_timezone()
    return as_datetime(value, zone).astimezone(zone).strftime("%I:%M %p")


def round_half_up(value: float, ndigits: int = 0):
    """Round ties away from zero, matching how the dashboard has always rounded."""
    try:
        quantum = Decimal(1).scaleb(-ndigits)
        rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0 if ndigits == 0 else 0.0
    return int(rounded) if ndigits == 0 else float(rounded)


def format_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else ""


def parse_rows(rows: Sequence[Sequence[Any]], parser: Callable[[Sequence[Any]], T]) -> List[T]:
    # Rows with an empty key column are the only rows dropped at this layer.
    return [parser(row) for row in rows if row and not is_blank(row[0])]


# Row parsers, one per source table. Column positions follow the sheet layout.

def parse_ticket(row: Sequence[Any]) -> TicketRecord:
    return TicketRecord(
        id=to_text(cell(row, 0)),
        summary=to_text(cell(row, 1)),
        panel=to_text(cell(row, 2)),
        resolved=to_bool(cell(row, 3)),
        knowledge_found=to_bool(cell(row, 4)),
        opened_at=safe_datetime(cell(row, 5)),
    )


def parse_sentiment(row: Sequence[Any]) -> SentimentRecord:
    return SentimentRecord(
        ticket_id=to_text(cell(row, 0)),
        score=blank_as_zero(cell(row, 1)),
        keywords=split_list(cell(row, 2)),
        revenue_risk=to_bool(cell(row, 3)),
        sla_risk=to_bool(cell(row, 4)),
        reputation_risk=to_bool(cell(row, 5)),
        ai_reasoning=to_text(cell(row, 6)),
    )


def parse_risk_score(row: Sequence[Any]) -> RiskScoreRecord:
    return RiskScoreRecord(
        panel_name=to_text(cell(row, 0)),
        score=to_number(cell(row, 1)) or 0,
        score_24h_ago=to_number(cell(row, 2)) or 0,
    )


def parse_metric_sample(row: Sequence[Any]) -> MetricSample:
    return MetricSample(
        metric_date=local_date(safe_datetime(cell(row, 0))),
        total_tickets=to_int(cell(row, 1)),
        resolved_count=to_int(cell(row, 2)),
        critical_count=to_int(cell(row, 3)),
        avg_sentiment=to_number(cell(row, 4)) or 0,
    )


def parse_quality_signal(row: Sequence[Any]) -> QualitySignalEvent:
    return QualitySignalEvent(
        id=to_text(cell(row, 0)),
        signal_type=to_text(cell(row, 1)),
        redundant_reply_count=to_int(cell(row, 2)),
        description=to_text(cell(row, 3)),
        sentiment_before=blank_as_zero(cell(row, 4)),
        sentiment_after=blank_as_zero(cell(row, 5)),
        flagged_at=safe_datetime(cell(row, 6)),
    )


def parse_trend(row: Sequence[Any]) -> TrendRecord:
    return TrendRecord(
        id=to_text(cell(row, 0)),
        title=to_text(cell(row, 1)),
        state=to_text(cell(row, 2)),
        ticket_count=to_int(cell(row, 3)),
        ticket_ids=split_list(cell(row, 4)),
        root_cause=to_text(cell(row, 5)),
        confidence=to_number(cell(row, 6)) or 0,
        needs_escalation=to_bool(cell(row, 7)),
        growth_percentage=to_number(cell(row, 8)) or 0,
        first_seen=safe_datetime(cell(row, 9)),
        last_seen=safe_datetime(cell(row, 10)),
    )


def parse_daily_brief(row: Sequence[Any]) -> DailyBriefRecord:
    return DailyBriefRecord(
        summary=to_text(cell(row, 0)),
        win=to_text(cell(row, 1)),
        risk=to_text(cell(row, 2)),
        action=to_text(cell(row, 3)),
        generated_at=safe_datetime(cell(row, 4)),
    )


def parse_knowledge_article(row: Sequence[Any]) -> KnowledgeArticleRecord:
    return KnowledgeArticleRecord(
        kb_id=to_text(cell(row, 0)),
        title=to_text(cell(row, 1)),
        problem_statement=to_text(cell(row, 2)),
        resolution_steps=to_text(cell(row, 3)),
        keywords=split_list(cell(row, 4)),
        frequency=to_number(cell(row, 6)) or 0,
        panels_affected=split_list(cell(row, 7)),
        priority_score=to_number(cell(row, 8)) or 0,
        priority_level=to_text(cell(row, 9)),
    )


def parse_faq(row: Sequence[Any]) -> FaqRecord:
    return FaqRecord(
        id=to_text(cell(row, 0)),
        question=to_text(cell(row, 1)),
        answer=to_text(cell(row, 2)),
        panel=to_text(cell(row, 3)),
        keywords=split_list(cell(row, 4)),
    )
