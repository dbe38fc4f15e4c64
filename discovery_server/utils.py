"""Pure helpers: card and response formatting."""

from typing import Optional

from discovery.models.analysis import AnalysisResult
from discovery.models.catalog import CandidateItem, Catalog, StyleCatalogEntry
from discovery.state_machine import SessionStateMachine

from .models import AnalysisInfo, ItemCard, SessionResponse, StyleCard

# Recommendation page size (used by routes/sessions)
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def to_item_card(item: CandidateItem) -> ItemCard:
    return ItemCard(
        id=item.id,
        primary_style=item.primary_style,
        secondary_styles=list(item.secondary_styles),
        url=item.url,
        alt=item.alt,
    )


def to_style_card(style: StyleCatalogEntry) -> StyleCard:
    return StyleCard(
        id=style.id,
        display_name=style.display_name or style.id,
        description=style.description,
        keywords=list(style.keywords),
        related_styles=list(style.related_styles),
        item_count=style.item_count,
    )


def style_card_for(catalog: Catalog, style_id: Optional[str]) -> Optional[StyleCard]:
    if not style_id:
        return None
    style = catalog.get_style(style_id)
    return to_style_card(style) if style else StyleCard(id=style_id, display_name=style_id)


def to_session_response(
    machine: SessionStateMachine,
    catalog: Catalog,
    analysis: Optional[AnalysisResult] = None,
) -> SessionResponse:
    """Session view for the presentation layer."""
    session = machine.session
    return SessionResponse(
        session_id=session.id,
        phase=session.phase.value,
        current_round=session.current_round,
        completed_rounds=session.completed_rounds,
        style_scores=dict(session.style_scores),
        recommended_style=style_card_for(catalog, session.recommended_style),
        second_best_style=session.second_best_style,
        estimated_remaining_rounds=machine.estimated_remaining_rounds(),
        progress=machine.progress(),
        created_at=session.created_at.isoformat(),
        analysis=AnalysisInfo(**analysis.model_dump()) if analysis else None,
    )
