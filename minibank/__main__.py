#!/usr/bin/env python3
"""
Run the MiniBank API with uvicorn:

    python -m minibank
"""

import logging

import uvicorn

from minibank import config

logger = logging.getLogger("minibank")


def main():
    logger.info(f"Starting MiniBank on http://{config.HOST}:{config.PORT}/graphql")
    uvicorn.run(
        "minibank.main:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
