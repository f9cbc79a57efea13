import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar
from pydantic import BaseModel
from support_intel.core.tables import TableName, TableReader
from support_intel.schemas.records import DailyBriefRecord
from support_intel.schemas.responses import (
    DashboardResponse,
    ErrorResponse,
    KnowledgeBaseResponse,
    MetricsResponse,
    QualityResponse,
    TrendsResponse,
)
from support_intel.services import normalizer
from support_intel.services.critical import select_critical_tickets
from support_intel.services.library import brief_generated_at, brief_lines, format_article, format_faq, format_trends
from support_intel.services.metrics import build_metric_cards
from support_intel.services.quality import coaching_notes, detect_quality_signals
from support_intel.services.risk import score_panels

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Columns read from each table, matching the sheet layouts.
TABLE_COLUMNS = {
    TableName.DAILY_BRIEF: 5,
    TableName.RISK_SCORES: 4,
    TableName.TICKETS: 6,
    TableName.SENTIMENT: 7,
    TableName.DAILY_METRICS: 5,
    TableName.TRENDS: 11,
    TableName.QUALITY_SIGNALS: 7,
    TableName.KNOWLEDGE_BASE: 10,
    TableName.FAQS: 5,
}


class ReportAssembler:
    """
    Builds the payload for one request from a single table snapshot.
    `handle` never raises: every failure comes back as an error payload.
    """

    def __init__(self, reader: TableReader, now: Optional[datetime] = None):
        self.reader = reader
        self.now = now or datetime.now(timezone.utc)

    def _read(self, table_name: str, parser: Callable[[Sequence[Any]], T]) -> List[T]:
        rows = self.reader.read_rows(table_name, 1, TABLE_COLUMNS[table_name])
        return normalizer.parse_rows(rows, parser)

    def _daily_brief(self) -> Optional[DailyBriefRecord]:
        # Only the first brief row is current.
        rows = self.reader.read_rows(TableName.DAILY_BRIEF, 1, TABLE_COLUMNS[TableName.DAILY_BRIEF])
        return normalizer.parse_daily_brief(rows[0]) if rows else None

    def dashboard(self) -> DashboardResponse:
        brief = self._daily_brief()
        risk_records = self._read(TableName.RISK_SCORES, normalizer.parse_risk_score)
        tickets = self._read(TableName.TICKETS, normalizer.parse_ticket)
        sentiments = self._read(TableName.SENTIMENT, normalizer.parse_sentiment)

        return DashboardResponse(
            daily_brief=brief_lines(brief),
            risk_scores=score_panels(risk_records),
            critical_tickets=select_critical_tickets(tickets, sentiments, self.now),
            metrics=self.metric_cards(),
            generated_at=brief_generated_at(brief),
        )

    def metric_cards(self):
        samples = self._read(TableName.DAILY_METRICS, normalizer.parse_metric_sample)
        return build_metric_cards(samples, self.now)

    def metrics(self) -> MetricsResponse:
        return MetricsResponse(metrics=self.metric_cards())

    def trends(self) -> TrendsResponse:
        return TrendsResponse(trends=format_trends(self._read(TableName.TRENDS, normalizer.parse_trend)))

    def quality(self) -> QualityResponse:
        brief = self._daily_brief()
        sentiments = self._read(TableName.SENTIMENT, normalizer.parse_sentiment)
        events = self._read(TableName.QUALITY_SIGNALS, normalizer.parse_quality_signal)

        return QualityResponse(
            quality_signals=detect_quality_signals(sentiments, events, self.now),
            coaching=coaching_notes(brief),
        )

    def knowledge_base(self) -> KnowledgeBaseResponse:
        articles = self._read(TableName.KNOWLEDGE_BASE, normalizer.parse_knowledge_article)
        faqs = self._read(TableName.FAQS, normalizer.parse_faq)
        return KnowledgeBaseResponse(
            articles=[format_article(article) for article in articles],
            faqs=[format_faq(faq) for faq in faqs],
        )

    ACTIONS: Dict[str, Callable[["ReportAssembler"], BaseModel]] = {
        "getDashboard": dashboard,
        "getTrends": trends,
        "getQualityData": quality,
        "getMetrics": metrics,
        "getKB": knowledge_base,
    }

    def handle(self, action: Optional[str]) -> Dict[str, Any]:
        handler = self.ACTIONS.get(action)
        if handler is None:
            logger.info("Rejected unknown action %r", action)
            return ErrorResponse(error=f"Invalid action: {action}").model_dump()

        try:
            payload = handler(self)
            return payload.model_dump(by_alias=True, mode="json")
        except Exception as exc:
            logger.exception("API Error while handling %s", action)
            return ErrorResponse(error=str(exc) or exc.__class__.__name__).model_dump()


def build_response(action: Optional[str], reader: TableReader, now: Optional[datetime] = None) -> Dict[str, Any]:
    return ReportAssembler(reader, now=now).handle(action)
