import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence
from support_intel.schemas.records import SentimentRecord, TicketRecord
from support_intel.schemas.responses import CriticalTicket, TicketSentiment
from support_intel.services.normalizer import as_datetime, format_date

logger = logging.getLogger(__name__)

CRITICAL_TICKET_LIMIT = 10
CRITICAL_SCORE_MAX = 3
UNMATCHED_SCORE = 10

# Impact tag vocabulary, in output order, keyed by the sentiment flag that gates it.
IMPACT_TAGS = (
    ("revenue_risk", "Revenue Risk"),
    ("sla_risk", "SLA Risk"),
    ("reputation_risk", "Reputation Risk"),
)

# (exclusive lower bound in hours, color), checked top down
AGING_COLORS = (
    (48, "red"),
    (24, "amber"),
)
DEFAULT_AGING_COLOR = "slate"

# (inclusive upper bound on score, label), checked top down
SENTIMENT_LABELS = (
    (3, "Highly Frustrated"),
    (5, "Frustrated"),
)
DEFAULT_SENTIMENT_LABEL = "Neutral"
UNKNOWN_SENTIMENT_LABEL = "Unknown"


def build_sentiment_lookup(records: Sequence[SentimentRecord]) -> Dict[str, SentimentRecord]:
    """
    Index sentiment analyses by ticket id. A later row for the same ticket
    replaces an earlier one; the replaced ids are logged.
    """
    lookup: Dict[str, SentimentRecord] = {}
    duplicates = []
    for record in records:
        if record.ticket_id in lookup:
            duplicates.append(record.ticket_id)
        lookup[record.ticket_id] = record

    if duplicates:
        logger.warning(
            "Duplicate sentiment rows for %d ticket(s), keeping the last row: %s",
            len(duplicates), ", ".join(sorted(set(duplicates))),
        )
    return lookup


def effective_score(sentiment: Optional[SentimentRecord]) -> float:
    # A blank score cell was already read as 0 and counts as critical; only a
    # malformed score (None) is treated like a missing analysis.
    if sentiment is None or sentiment.score is None:
        return UNMATCHED_SCORE
    return sentiment.score


def aging_hours(opened_at: Optional[date], now: datetime) -> int:
    if opened_at is None:
        return 0
    elapsed = (now - as_datetime(opened_at)).total_seconds()
    return max(int(elapsed // 3600), 0)


def aging_bucket(hours: int) -> str:
    if hours >= 24:
        return f"{hours // 24}d"
    return f"{hours}h"


def aging_color(hours: int) -> str:
    for threshold, color in AGING_COLORS:
        if hours > threshold:
            return color
    return DEFAULT_AGING_COLOR


def sentiment_label(sentiment: Optional[SentimentRecord]) -> str:
    if sentiment is None or sentiment.score is None:
        return UNKNOWN_SENTIMENT_LABEL
    for upper_bound, label in SENTIMENT_LABELS:
        if sentiment.score <= upper_bound:
            return label
    return DEFAULT_SENTIMENT_LABEL


def impact_tags(sentiment: Optional[SentimentRecord]) -> List[str]:
    if sentiment is None:
        return []
    return [tag for flag, tag in IMPACT_TAGS if getattr(sentiment, flag)]


def is_critical(ticket: TicketRecord, sentiment: Optional[SentimentRecord]) -> bool:
    if ticket.resolved:
        return False
    return effective_score(sentiment) <= CRITICAL_SCORE_MAX


def to_critical_ticket(ticket: TicketRecord, sentiment: Optional[SentimentRecord], now: datetime) -> CriticalTicket:
    hours = aging_hours(ticket.opened_at, now)
    return CriticalTicket(
        ticket_id=ticket.id,
        summary=ticket.summary,
        panel=ticket.panel,
        resolved=False,
        ikc_found=ticket.knowledge_found,
        date=format_date(ticket.opened_at),
        aging_hours=hours,
        aging=aging_bucket(hours),
        aging_color=aging_color(hours),
        sentiment=TicketSentiment(
            score=sentiment.score if sentiment and sentiment.score is not None else 0,
            label=sentiment_label(sentiment),
            keywords=list(sentiment.keywords) if sentiment else [],
        ),
        ai_reasoning=sentiment.ai_reasoning if sentiment else "",
        impact=impact_tags(sentiment),
    )


def select_critical_tickets(
    tickets: Sequence[TicketRecord],
    sentiments: Sequence[SentimentRecord],
    now: datetime,
    limit: int = CRITICAL_TICKET_LIMIT,
) -> List[CriticalTicket]:
    """
    Join tickets to their sentiment analysis and keep the unresolved ones
    scoring 3 or lower. Output keeps source row order and stops at `limit`.
    """
    lookup = build_sentiment_lookup(sentiments)
    selected: List[CriticalTicket] = []
    for ticket in tickets:
        if len(selected) >= limit:
            break
        sentiment = lookup.get(ticket.id)
        if is_critical(ticket, sentiment):
            selected.append(to_critical_ticket(ticket, sentiment, now))
    return selected
