"""Session-related Pydantic models."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from .common import ItemCard, StyleCard


class SubmitChoiceRequest(BaseModel):
    selected_item_id: str
    rejected_item_id: str
    rationale: str
    # Per-request credential for LLM analysis; falls back to server config.
    api_key: Optional[str] = None


class PairResponse(BaseModel):
    session_id: str
    round: int
    items: List[ItemCard]


class AnalysisInfo(BaseModel):
    source: str
    keywords: List[str] = []
    emotions: List[str] = []
    style_indicators: List[str] = []


class SessionResponse(BaseModel):
    session_id: str
    phase: str
    current_round: int
    completed_rounds: int
    style_scores: Dict[str, float] = {}
    recommended_style: Optional[StyleCard] = None
    second_best_style: Optional[str] = None
    estimated_remaining_rounds: Optional[int] = None
    progress: str
    created_at: str
    analysis: Optional[AnalysisInfo] = None


class RecommendationResponse(BaseModel):
    session_id: str
    style: StyleCard
    items: List[ItemCard]
    requested: int
    returned: int
