from src.models.report import (
    AnalysisReport,
    AnalysisRequest,
    Chain,
    MarketSignals,
    RiskAssessment,
    RiskSignal,
    VolumeSeries,
)

__all__ = [
    "AnalysisReport",
    "AnalysisRequest",
    "Chain",
    "MarketSignals",
    "RiskAssessment",
    "RiskSignal",
    "VolumeSeries",
]
