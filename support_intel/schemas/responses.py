from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Union

# Wire shapes consumed verbatim by the dashboard UI. Field names mix
# snake_case and camelCase because the UI contract does; camelCase keys are
# declared as aliases and payloads are dumped with by_alias=True.

class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BriefLine(WireModel):
    text: str


class RiskScore(WireModel):
    name: str = Field(..., description="Panel name.")
    score: float
    score_24h_ago: float = Field(..., alias="score24hAgo")
    level: str = Field(..., description="High Risk, Elevated or Nominal.")
    description: str
    color: str
    has_jumped: bool = Field(..., alias="hasJumped")


class TicketSentiment(WireModel):
    score: float = Field(..., description="Matched sentiment score, 0 when no analysis exists.")
    label: str
    keywords: List[str] = []


class CriticalTicket(WireModel):
    ticket_id: str
    summary: str
    panel: str
    resolved: bool = False
    ikc_found: bool
    date: str = Field(..., description="Opened date as YYYY-MM-DD, empty when unknown.")
    aging_hours: int = Field(..., exclude=True)
    aging: str = Field(..., description="Aging bucket such as 5h or 2d.")
    aging_color: str = Field(..., alias="agingColor")
    sentiment: TicketSentiment
    ai_reasoning: str
    impact: List[str] = []


class MetricCard(WireModel):
    label: str
    value: Union[int, str]
    trend: str
    trend_direction: str = Field(..., alias="trendDirection")
    status: str
    sparkline_data: str = Field(..., alias="sparklineData")
    sparkline_color: str = Field(..., alias="sparklineColor")


class Trend(WireModel):
    trend_id: str
    title: str
    state: str
    ticket_count: int
    ticket_ids: List[str] = []
    root_cause: str
    confidence: int = Field(..., description="Percentage 0-100.")
    needs_escalation: bool
    growth_percentage: float
    first_seen: str
    last_seen: str


class ProcessFlag(WireModel):
    id: str
    signal_type: str
    redundant_count: int
    description: str
    sentiment_before: Optional[float] = None
    sentiment_after: Optional[float] = None
    flagged_date: str
    advice: str


class QualitySignals(WireModel):
    score: int
    redundant_replies: int
    process_flagged: List[ProcessFlag] = []


class Coaching(WireModel):
    win: str
    risk: str
    action: str


class KnowledgeArticle(WireModel):
    kb_id: str
    title: str
    problem_statement: str
    resolution_steps: str
    keywords: List[str] = []
    panels_affected: List[str] = []
    priority_score: float
    priority_level: str
    frequency: float


class Faq(WireModel):
    question: str
    answer: str
    panel: str
    keywords: List[str] = []


class DashboardResponse(WireModel):
    daily_brief: List[BriefLine] = Field(..., alias="dailyBrief")
    risk_scores: List[RiskScore] = Field(..., alias="riskScores")
    critical_tickets: List[CriticalTicket] = Field(..., alias="criticalTickets")
    metrics: List[MetricCard]
    generated_at: str = Field(..., alias="generatedAt")


class TrendsResponse(WireModel):
    trends: List[Trend]


class QualityResponse(WireModel):
    quality_signals: QualitySignals = Field(..., alias="qualitySignals")
    coaching: Coaching


class MetricsResponse(WireModel):
    metrics: List[MetricCard]


class KnowledgeBaseResponse(WireModel):
    articles: List[KnowledgeArticle]
    faqs: List[Faq]


class ErrorResponse(WireModel):
    error: str
