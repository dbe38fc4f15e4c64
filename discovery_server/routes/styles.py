"""Style catalog endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..models import StyleCard
from ..state import AppState, get_state
from ..utils import to_style_card

router = APIRouter()


@router.get("", response_model=List[StyleCard])
def list_styles(state: AppState = Depends(get_state)):
    return [to_style_card(s) for s in state.catalog.styles]


@router.get("/{style_id}", response_model=StyleCard)
def get_style(style_id: str, state: AppState = Depends(get_state)):
    style = state.catalog.get_style(style_id)
    if style is None:
        raise HTTPException(status_code=404, detail=f"Style not found: {style_id}")
    return to_style_card(style)
