from datetime import date, datetime
from typing import List, Optional, Sequence
from support_intel.schemas.records import DailyBriefRecord, QualitySignalEvent, SentimentRecord
from support_intel.schemas.responses import Coaching, ProcessFlag, QualitySignals
from support_intel.services.normalizer import format_date, format_number, local_date, round_half_up

PROCESS_FLAG_LIMIT = 10
SENTIMENT_DROP_THRESHOLD = 3
CHURN_RISK_SIGNAL = "Churn Risk"
NEUTRAL_MEAN_SCORE = 5
COACHING_PLACEHOLDER = "Analysis pending"


def quality_score(sentiments: Sequence[SentimentRecord]) -> int:
    """Mean of the positive sentiment scores scaled to 0-100; 50 when there are none."""
    scores = [s.score for s in sentiments if s.score is not None and s.score > 0]
    mean = sum(scores) / len(scores) if scores else NEUTRAL_MEAN_SCORE
    return round_half_up(mean / 10 * 100)


def latest_reporting_date(events: Sequence[QualitySignalEvent], now: datetime) -> date:
    """
    The newest flagged date in the event set. Signals land in the sheet once a
    day, so this is the reporting day rather than the wall-clock day.
    """
    days = [local_date(event.flagged_at) for event in events if event.flagged_at is not None]
    return max(days) if days else local_date(now)


def redundant_replies(events: Sequence[QualitySignalEvent], reporting_date: date) -> int:
    return sum(
        event.redundant_reply_count
        for event in events
        if event.flagged_at is not None and local_date(event.flagged_at) == reporting_date
    )


def sentiment_drop(event: QualitySignalEvent) -> Optional[float]:
    if event.sentiment_before is None or event.sentiment_after is None:
        return None
    return event.sentiment_before - event.sentiment_after


def is_process_flagged(event: QualitySignalEvent) -> bool:
    if event.signal_type == CHURN_RISK_SIGNAL:
        return True
    drop = sentiment_drop(event)
    return drop is not None and drop >= SENTIMENT_DROP_THRESHOLD


def _score_text(value: Optional[float]) -> str:
    return format_number(value) if value is not None else ""


def to_process_flag(event: QualitySignalEvent) -> ProcessFlag:
    return ProcessFlag(
        id=event.id,
        signal_type=event.signal_type,
        redundant_count=event.redundant_reply_count,
        description=event.description,
        sentiment_before=event.sentiment_before,
        sentiment_after=event.sentiment_after,
        flagged_date=format_date(event.flagged_at),
        advice=(
            f"Sentiment went from {_score_text(event.sentiment_before)} to "
            f"{_score_text(event.sentiment_after)} after support reply. Investigate reply quality."
        ),
    )


def process_flags(events: Sequence[QualitySignalEvent], limit: int = PROCESS_FLAG_LIMIT) -> List[ProcessFlag]:
    return [to_process_flag(event) for event in events if is_process_flagged(event)][:limit]


def detect_quality_signals(
    sentiments: Sequence[SentimentRecord],
    events: Sequence[QualitySignalEvent],
    now: datetime,
) -> QualitySignals:
    reporting_date = latest_reporting_date(events, now)
    return QualitySignals(
        score=quality_score(sentiments),
        redundant_replies=redundant_replies(events, reporting_date),
        process_flagged=process_flags(events),
    )


def coaching_notes(brief: Optional[DailyBriefRecord]) -> Coaching:
    brief = brief or DailyBriefRecord()
    return Coaching(
        win=brief.win or COACHING_PLACEHOLDER,
        risk=brief.risk or COACHING_PLACEHOLDER,
        action=brief.action or COACHING_PLACEHOLDER,
    )
