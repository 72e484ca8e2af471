from __future__ import annotations

from typing import Iterable

from detector.models import RiskLabel
from detector.risk_engine.types import EvidenceFlag

HIGH_RISK_THRESHOLD = 6
MEDIUM_RISK_THRESHOLD = 3


def label_from_score(score: float) -> str:
    if score >= HIGH_RISK_THRESHOLD:
        return RiskLabel.HIGH
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLabel.MEDIUM
    return RiskLabel.LOW


def aggregate(flags: Iterable[EvidenceFlag]) -> tuple[float, str]:
    score = sum(flag.weight for flag in flags)
    return score, label_from_score(score)
