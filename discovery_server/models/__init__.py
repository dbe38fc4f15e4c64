"""Pydantic request/response models for the API."""

from .common import ItemCard, StyleCard
from .sessions import (
    AnalysisInfo,
    PairResponse,
    RecommendationResponse,
    SessionResponse,
    SubmitChoiceRequest,
)

__all__ = [
    "AnalysisInfo",
    "ItemCard",
    "PairResponse",
    "RecommendationResponse",
    "SessionResponse",
    "StyleCard",
    "SubmitChoiceRequest",
]
