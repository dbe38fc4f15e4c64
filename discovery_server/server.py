#!/usr/bin/env python3
"""
Style Discovery server: entrypoint for uvicorn discovery_server.server:app.
"""

from .app import app

if __name__ == "__main__":
    import uvicorn

    from .config import get_config

    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)
