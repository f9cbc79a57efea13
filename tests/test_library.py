from datetime import datetime, timezone
from support_intel.schemas.records import DailyBriefRecord, KnowledgeArticleRecord, TrendRecord
from support_intel.services.library import brief_generated_at, brief_lines, format_article, format_trend

def test_trend_confidence_scaled_to_percent():
    trend = format_trend(TrendRecord(id="TR1", title="OIDC", state="ESCALATING", confidence=0.876))
    assert trend.confidence == 88
    assert trend.first_seen == ""

def test_trend_passes_unknown_state_through():
    trend = format_trend(TrendRecord(id="TR2", state="PLATEAU", ticket_ids=["T1", "T2"]))
    assert trend.state == "PLATEAU"
    assert trend.ticket_ids == ["T1", "T2"]

def test_trend_dates_formatted():
    trend = format_trend(TrendRecord(
        id="TR3",
        first_seen=datetime(2026, 2, 10, tzinfo=timezone.utc),
        last_seen=datetime(2026, 2, 16, 22, 0, tzinfo=timezone.utc),
    ))
    assert trend.first_seen == "2026-02-10"
    assert trend.last_seen == "2026-02-17"

def test_brief_lines_skip_blank_lines():
    lines = brief_lines(DailyBriefRecord(summary="First\n\n  Second  \n"))
    assert [line.text for line in lines] == ["First", "Second"]
    assert brief_lines(None) == []

def test_brief_generated_at():
    assert brief_generated_at(None) == "08:00 AM"
    brief = DailyBriefRecord(generated_at=datetime(2026, 2, 16, 9, 45, tzinfo=timezone.utc))
    assert brief_generated_at(brief) == "03:15 PM"

def test_article_shape():
    article = format_article(KnowledgeArticleRecord(kb_id="KB1", keywords=["sso"], panels_affected=["Access"], frequency=4))
    assert article.model_dump() == {
        "kb_id": "KB1",
        "title": "",
        "problem_statement": "",
        "resolution_steps": "",
        "keywords": ["sso"],
        "panels_affected": ["Access"],
        "priority_score": 0,
        "priority_level": "",
        "frequency": 4,
    }
