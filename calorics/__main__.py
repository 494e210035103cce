"""
Entry point for running the API server: python -m calorics
"""
import logging

import uvicorn

from calorics.core.config import settings

if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("calorics.main:app", host=settings.host, port=settings.port)
