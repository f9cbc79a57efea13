from typing import List, Optional, Sequence
from support_intel.schemas.records import DailyBriefRecord, FaqRecord, KnowledgeArticleRecord, TrendRecord
from support_intel.schemas.responses import BriefLine, Faq, KnowledgeArticle, Trend
from support_intel.services.normalizer import format_date, format_time, round_half_up


def format_trend(record: TrendRecord) -> Trend:
    # Confidence is stored as a 0-1 fraction.
    return Trend(
        trend_id=record.id,
        title=record.title,
        state=record.state,
        ticket_count=record.ticket_count,
        ticket_ids=list(record.ticket_ids),
        root_cause=record.root_cause,
        confidence=round_half_up(record.confidence * 100),
        needs_escalation=record.needs_escalation,
        growth_percentage=record.growth_percentage,
        first_seen=format_date(record.first_seen),
        last_seen=format_date(record.last_seen),
    )


def format_trends(records: Sequence[TrendRecord]) -> List[Trend]:
    return [format_trend(record) for record in records]


def format_article(record: KnowledgeArticleRecord) -> KnowledgeArticle:
    return KnowledgeArticle(
        kb_id=record.kb_id,
        title=record.title,
        problem_statement=record.problem_statement,
        resolution_steps=record.resolution_steps,
        keywords=list(record.keywords),
        panels_affected=list(record.panels_affected),
        priority_score=record.priority_score,
        priority_level=record.priority_level,
        frequency=record.frequency,
    )


def format_faq(record: FaqRecord) -> Faq:
    return Faq(
        question=record.question,
        answer=record.answer,
        panel=record.panel,
        keywords=list(record.keywords),
    )


def brief_lines(brief: Optional[DailyBriefRecord]) -> List[BriefLine]:
    """One entry per non-blank line of the brief summary."""
    if brief is None or not brief.summary:
        return []
    return [BriefLine(text=line.strip()) for line in brief.summary.split("\n") if line.strip()]


def brief_generated_at(brief: Optional[DailyBriefRecord]) -> str:
    return format_time(brief.generated_at if brief else None)
