from __future__ import annotations

import os

import uvicorn

if __name__ == "__main__":
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))
    reload = os.environ.get("RELOAD", "0").lower() in {"1", "true", "yes", "y", "on"}
    log_level = os.environ.get("MAP_COLORING_LOG_LEVEL", "info").lower()
    uvicorn.run("backend.app:app", host=host, port=port, reload=reload, log_level=log_level)
