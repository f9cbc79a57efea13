from typing import List, NamedTuple, Sequence
from support_intel.schemas.records import RiskScoreRecord
from support_intel.schemas.responses import RiskScore

JUMP_THRESHOLD = 20
JUMP_DESCRIPTION = "Risk jumped >20pts in last 24h."

class RiskTier(NamedTuple):
    floor: float  # exclusive
    level: str
    description: str
    color: str

# Checked top down; the last tier catches everything at or below 40.
RISK_TIERS = (
    RiskTier(70, "High Risk", "High volume of critical tickets.", "border-l-red-500"),
    RiskTier(40, "Elevated", "Moderate issues detected.", "border-l-amber-500"),
    RiskTier(float("-inf"), "Nominal", "Status within expected parameters.", "border-l-emerald-500"),
)


def has_jumped(score: float, score_24h_ago: float) -> bool:
    return (score - score_24h_ago) > JUMP_THRESHOLD


def risk_tier(score: float) -> RiskTier:
    for tier in RISK_TIERS:
        if score > tier.floor:
            return tier
    return RISK_TIERS[-1]


def risk_level(score: float) -> str:
    return risk_tier(score).level


def score_panel(record: RiskScoreRecord) -> RiskScore:
    tier = risk_tier(record.score)
    jumped = has_jumped(record.score, record.score_24h_ago)
    return RiskScore(
        name=record.panel_name,
        score=record.score,
        score_24h_ago=record.score_24h_ago,
        level=tier.level,
        description=JUMP_DESCRIPTION if jumped else tier.description,
        color=tier.color,
        has_jumped=jumped,
    )


def score_panels(records: Sequence[RiskScoreRecord]) -> List[RiskScore]:
    return [score_panel(record) for record in records]
