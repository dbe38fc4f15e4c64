"""Root and health endpoints."""

from fastapi import APIRouter, Depends

from discovery.analysis import get_available_providers

from ..state import AppState, get_state

router = APIRouter()


@router.get("/")
def root(state: AppState = Depends(get_state)):
    return {
        "name": "Style Discovery API",
        "version": "1.0.0",
        "catalog": {
            "styles": len(state.catalog.styles),
            "items": len(state.catalog.items),
        },
        "endpoints": {
            "sessions": [
                "/api/sessions/create",
                "/api/sessions/{id}",
                "/api/sessions/{id}/pair",
                "/api/sessions/{id}/choices",
                "/api/sessions/{id}/confirm",
                "/api/sessions/{id}/reject",
                "/api/sessions/{id}/restart",
                "/api/sessions/{id}/alternatives/restart",
                "/api/sessions/{id}/recommendations",
            ],
            "styles": ["/api/styles", "/api/styles/{id}"],
        },
    }


@router.get("/api/health")
def health(state: AppState = Depends(get_state)):
    provider = state.analysis_provider.provider
    llm_ok = bool(state.analysis_provider.api_key) or provider in get_available_providers()
    return {
        "status": "healthy",
        "sessions": "file" if state.config.sessions_dir else "memory",
        "analysis": {
            "provider": provider,
            "available": llm_ok,
            "message": "configured" if llm_ok else "no API key, using keyword extraction",
        },
    }
