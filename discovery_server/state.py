"""Application state: catalog, discovery config, session stores, and analysis provider."""

import logging
import random
from typing import Optional

from discovery.analysis import TextAnalysisProvider
from discovery.models.catalog import Catalog
from discovery.models.config import DiscoveryConfig
from discovery.models.session import Session
from discovery.state_machine import SessionStateMachine

from .config import ServerConfig, get_config
from .services import CatalogLoader, SessionRepository

logger = logging.getLogger(__name__)


class AppState:
    """Global application state. The catalog is loaded once and only read afterwards."""

    def __init__(
        self,
        config: ServerConfig,
        catalog: Optional[Catalog] = None,
        discovery_config: Optional[DiscoveryConfig] = None,
        analysis_provider: Optional[TextAnalysisProvider] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.catalog_loader = CatalogLoader(config.catalog_dir)
        self.catalog = catalog if catalog is not None else self.catalog_loader.load()
        self.discovery_config = discovery_config or config.load_discovery_config()
        self.sessions = SessionRepository(config.sessions_dir)
        self.analysis_provider = analysis_provider or TextAnalysisProvider(
            provider=config.analysis_provider,
            api_key=config.analysis_api_key,
            timeout=self.discovery_config.analysis_timeout_seconds,
        )
        self.rng = rng or random.Random()
        logger.info(
            "[startup] Catalog: %d styles, %d items; sessions: %s",
            len(self.catalog.styles),
            len(self.catalog.items),
            config.sessions_dir or "in-memory",
        )

    def machine(self, session: Optional[Session] = None) -> SessionStateMachine:
        """State machine over the shared item pool, adopting session when given."""
        return SessionStateMachine(
            self.catalog.items,
            config=self.discovery_config,
            rng=self.rng,
            session=session,
        )


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state
