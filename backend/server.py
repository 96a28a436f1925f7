from __future__ import annotations

import os

import uvicorn

from portfolio_api.main import app

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(
        "server:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )
