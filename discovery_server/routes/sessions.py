"""Session and recommendation endpoints."""

import logging
from typing import Callable, Tuple, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query

from discovery.choices import build_choice
from discovery.errors import (
    InvalidTransition,
    NoAlternativeAvailable,
    StaleSession,
    UnknownItem,
    ValidationError,
)
from discovery.models.session import Phase, Session
from discovery.state_machine import SessionStateMachine, SessionStore, ensure_fresh
from discovery.validators import sanitize_input, validate_rationale

from ..models import (
    PairResponse,
    RecommendationResponse,
    SessionResponse,
    SubmitChoiceRequest,
)
from ..state import AppState, get_state
from ..utils import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    style_card_for,
    to_item_card,
    to_session_response,
)

logger = logging.getLogger(__name__)

router = APIRouter()

T = TypeVar("T")


def _load_machine(state: AppState, session_id: str) -> Tuple[SessionStateMachine, SessionStore]:
    """Machine for an existing, unexpired session, plus its store. 404 otherwise."""
    try:
        store = state.sessions.store_for(session_id)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    session = store.load()
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    try:
        ensure_fresh(session, state.discovery_config)
    except StaleSession as e:
        logger.info("Session %s expired (age %s), discarding", e.session_id, e.age)
        store.clear()
        raise HTTPException(status_code=404, detail=f"Session expired: {session_id}")
    return state.machine(session), store


def _apply(transition: Callable[[], T]) -> T:
    """Run a transition, mapping phase errors to 409."""
    try:
        return transition()
    except NoAlternativeAvailable:
        raise HTTPException(status_code=409, detail="no alternative available")
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/create", response_model=SessionResponse)
def create_session(state: AppState = Depends(get_state)):
    """Start a fresh discovery session."""
    machine = state.machine()
    state.sessions.store_for(machine.session.id).save(machine.session)
    return to_session_response(machine, state.catalog)


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, state: AppState = Depends(get_state)):
    machine, _ = _load_machine(state, session_id)
    return to_session_response(machine, state.catalog)


@router.get("/{session_id}/pair", response_model=PairResponse)
def next_pair(session_id: str, state: AppState = Depends(get_state)):
    """Two items for the current discovery round."""
    machine, _ = _load_machine(state, session_id)
    first, second = _apply(machine.next_pair)
    return PairResponse(
        session_id=machine.session.id,
        round=machine.session.current_round,
        items=[to_item_card(first), to_item_card(second)],
    )


@router.post("/{session_id}/choices", response_model=SessionResponse)
async def submit_choice(
    session_id: str,
    request: SubmitChoiceRequest,
    state: AppState = Depends(get_state),
):
    """Record one round: validate, analyze the rationale, rescore, and judge convergence."""
    machine, store = _load_machine(state, session_id)
    if machine.phase is not Phase.DISCOVERY:
        raise HTTPException(
            status_code=409,
            detail=str(InvalidTransition(machine.phase.value, "submit a choice")),
        )
    try:
        rationale = validate_rationale(sanitize_input(request.rationale), state.discovery_config)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)

    analysis = await state.analysis_provider.analyze(
        rationale,
        api_key=request.api_key,
        timeout=state.discovery_config.analysis_timeout_seconds,
    )
    try:
        choice = build_choice(
            machine.session.current_round,
            request.selected_item_id,
            request.rejected_item_id,
            rationale,
            state.catalog.items,
            analysis=analysis,
            config=state.discovery_config,
        )
    except (ValidationError, UnknownItem) as e:
        raise HTTPException(status_code=422, detail=str(e))

    _apply(lambda: machine.submit_choice(choice))
    store.save(machine.session)
    return to_session_response(machine, state.catalog, analysis=analysis)


@router.post("/{session_id}/confirm", response_model=SessionResponse)
def confirm_recommendation(session_id: str, state: AppState = Depends(get_state)):
    machine, store = _load_machine(state, session_id)
    _apply(machine.confirm_recommendation)
    store.save(machine.session)
    return to_session_response(machine, state.catalog)


@router.post("/{session_id}/reject", response_model=SessionResponse)
def reject_recommendation(session_id: str, state: AppState = Depends(get_state)):
    """Switch to the second-best style; 409 "no alternative available" when there is none."""
    machine, store = _load_machine(state, session_id)
    _apply(machine.reject_recommendation)
    store.save(machine.session)
    return to_session_response(machine, state.catalog)


def _restart_with(
    state: AppState,
    session_id: str,
    restart: Callable[[SessionStateMachine], Session],
) -> SessionResponse:
    machine, _ = _load_machine(state, session_id)
    _apply(lambda: restart(machine))
    state.sessions.discard(session_id)
    state.sessions.store_for(machine.session.id).save(machine.session)
    return to_session_response(machine, state.catalog)


@router.post("/{session_id}/restart", response_model=SessionResponse)
def restart_session(session_id: str, state: AppState = Depends(get_state)):
    """Discard the session and start a fresh one with a new id."""
    return _restart_with(state, session_id, lambda m: m.restart())


@router.post("/{session_id}/alternatives/restart", response_model=SessionResponse)
def restart_from_alternatives(session_id: str, state: AppState = Depends(get_state)):
    return _restart_with(state, session_id, lambda m: m.restart_from_alternatives())


@router.get("/{session_id}/recommendations", response_model=RecommendationResponse)
def get_recommendations(
    session_id: str,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    state: AppState = Depends(get_state),
):
    """Display set for the recommended style, excluding items already picked."""
    machine, _ = _load_machine(state, session_id)
    rec_set = _apply(lambda: machine.recommendation_set(limit))
    return RecommendationResponse(
        session_id=machine.session.id,
        style=style_card_for(state.catalog, rec_set.style_id),
        items=[to_item_card(item) for item in rec_set.items],
        requested=limit,
        returned=len(rec_set.items),
    )
