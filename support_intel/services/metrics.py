"""Metric cards for the dashboard header.

Each card compares the newest daily sample with the one before it and
carries the whole rolling window as a sparkline series.
"""
from datetime import date, datetime
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence
from support_intel.schemas.records import MetricSample
from support_intel.schemas.responses import MetricCard
from support_intel.services.normalizer import format_number, local_date, round_half_up

METRIC_WINDOW_DAYS = 7


class MetricRule(NamedTuple):
    label: str
    color: str
    # Status when today's value rose; None means the card is judged against `floor` instead.
    rising_status: Optional[str]
    floor: Optional[float]


TOTAL_TICKETS = "total_tickets"
RESOLVED_PCT = "resolved_pct"
CRITICAL_LOAD = "critical_load"
AVG_SENTIMENT = "avg_sentiment"

METRIC_RULES: Dict[str, MetricRule] = {
    TOTAL_TICKETS: MetricRule("Total Tickets", "#135bec", rising_status="warning", floor=None),
    RESOLVED_PCT: MetricRule("Resolved %", "#10b981", rising_status=None, floor=80),
    CRITICAL_LOAD: MetricRule("Critical Load", "#ef4444", rising_status="error", floor=None),
    AVG_SENTIMENT: MetricRule("Avg Sentiment", "#f59e0b", rising_status=None, floor=5),
}


def default_metric_cards() -> List[MetricCard]:
    """Cards shown before any daily metrics have been recorded."""
    defaults = (
        (TOTAL_TICKETS, 0, "0", "0"),
        (RESOLVED_PCT, "0%", "0%", "0"),
        (CRITICAL_LOAD, 0, "0", "0"),
        (AVG_SENTIMENT, "5.0", "0", "5"),
    )
    return [
        MetricCard(
            label=METRIC_RULES[key].label,
            value=value,
            trend=trend,
            trend_direction="stable",
            status="neutral",
            sparkline_data=sparkline,
            sparkline_color=METRIC_RULES[key].color,
        )
        for key, value, trend, sparkline in defaults
    ]


def rolling_window(samples: Sequence[MetricSample], now: datetime, size: int = METRIC_WINDOW_DAYS) -> List[MetricSample]:
    today = local_date(now)
    current = [s for s in samples if s.metric_date is None or s.metric_date <= today]
    # sorted() is stable, so same-day and undated rows keep their source order
    current = sorted(current, key=lambda s: s.metric_date or date.min)
    return current[-size:]


def resolved_percentage(sample: MetricSample) -> int:
    if sample.total_tickets <= 0:
        return 0
    return round_half_up(sample.resolved_count / sample.total_tickets * 100)


def rounded_sentiment(sample: MetricSample) -> float:
    return round_half_up(sample.avg_sentiment, 1)


def format_delta(delta: float) -> str:
    text = format_number(delta)
    return "+" + text if delta > 0 else text


def trend_direction(today: float, yesterday: float) -> str:
    if today > yesterday:
        return "up"
    if today < yesterday:
        return "down"
    return "stable"


def metric_status(rule: MetricRule, today: float, yesterday: float) -> str:
    if rule.floor is not None:
        return "success" if today >= rule.floor else "warning"
    return rule.rising_status if today > yesterday else "success"


def sparkline(window: Sequence[MetricSample], value_of: Callable[[MetricSample], object]) -> str:
    return ",".join(str(value_of(sample)) for sample in window)


def _count_card(key: str, window: Sequence[MetricSample], value_of: Callable[[MetricSample], int]) -> MetricCard:
    rule = METRIC_RULES[key]
    today, yesterday = value_of(window[-1]), value_of(window[-2] if len(window) > 1 else window[-1])
    return MetricCard(
        label=rule.label,
        value=today,
        trend=format_delta(today - yesterday),
        trend_direction=trend_direction(today, yesterday),
        status=metric_status(rule, today, yesterday),
        sparkline_data=sparkline(window, value_of),
        sparkline_color=rule.color,
    )


def _resolved_card(window: Sequence[MetricSample]) -> MetricCard:
    rule = METRIC_RULES[RESOLVED_PCT]
    today = resolved_percentage(window[-1])
    yesterday = resolved_percentage(window[-2] if len(window) > 1 else window[-1])
    delta = today - yesterday
    return MetricCard(
        label=rule.label,
        value=f"{today}%",
        trend=f"{'+' if delta > 0 else ''}{delta:.1f}%",
        trend_direction=trend_direction(today, yesterday),
        status=metric_status(rule, today, yesterday),
        sparkline_data=sparkline(window, resolved_percentage),
        sparkline_color=rule.color,
    )


def _sentiment_card(window: Sequence[MetricSample]) -> MetricCard:
    rule = METRIC_RULES[AVG_SENTIMENT]
    today_sample = window[-1]
    yesterday_sample = window[-2] if len(window) > 1 else today_sample
    today, yesterday = rounded_sentiment(today_sample), rounded_sentiment(yesterday_sample)
    return MetricCard(
        label=rule.label,
        value=f"{today:.1f}",
        trend=format_delta(round_half_up(today - yesterday, 1)),
        trend_direction=trend_direction(today_sample.avg_sentiment, yesterday_sample.avg_sentiment),
        status=metric_status(rule, today_sample.avg_sentiment, yesterday_sample.avg_sentiment),
        sparkline_data=sparkline(window, lambda s: f"{rounded_sentiment(s):.1f}"),
        sparkline_color=rule.color,
    )


def build_metric_cards(samples: Sequence[MetricSample], now: datetime) -> List[MetricCard]:
    window = rolling_window(samples, now)
    if not window:
        return default_metric_cards()

    return [
        _count_card(TOTAL_TICKETS, window, lambda s: s.total_tickets),
        _resolved_card(window),
        _count_card(CRITICAL_LOAD, window, lambda s: s.critical_count),
        _sentiment_card(window),
    ]
