"""
server.py — runnable entrypoint for the Subsonic Producciones contact API.

The app itself is built in `subsonic_api.main`; this module only configures
logging and starts Uvicorn.
"""

import logging

import uvicorn

from subsonic_api.config import CONFIG
from subsonic_api.main import app  # noqa: F401  (re-exported for `uvicorn server:app`)

if __name__ == "__main__":
    # Uvicorn configures its own loggers; application loggers need a root handler
    logging.basicConfig(
        level=getattr(logging, CONFIG.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run("server:app", host="0.0.0.0", port=8000, reload=True)
