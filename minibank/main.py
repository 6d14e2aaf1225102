#!/usr/bin/env python
"""
minibank/main.py

Sets up the FastAPI application for MiniBank, a small banking demo where a
client registers, logs in, opens accounts and records deposits/withdrawals.

Key Roles:
 - Configures logging from LOG_LEVEL
 - Adds CORS middleware for the browser client
 - Creates tables at startup
 - Mounts the GraphQL gateway at /graphql
 - Exposes /health for probes
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from minibank import config

# ---------------------------------------------------------
# Logging
# ---------------------------------------------------------
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from minibank.database import create_tables
from minibank.routers import gateway

# ---------------------------------------------------------
# Initialize the FastAPI application
# ---------------------------------------------------------
app = FastAPI(
    title="MiniBank API",
    description=(
        "GraphQL API for registering users, opening accounts and "
        "recording deposits and withdrawals. Bearer-token auth."
    ),
    version="1.0",
)

# ---------------------------------------------------------
# CORS Middleware
# ---------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# Database: Create Tables at Startup
# ---------------------------------------------------------
@app.on_event("startup")
def startup_event():
    """
    Ensures tables exist when the server starts.
    This won't delete or overwrite existing data; it's idempotent.
    """
    create_tables()
    if config.SECRET_KEY == "minibank-insecure-dev-key":
        logger.warning("Running with the development SECRET_KEY; set SECRET_KEY in production.")
    logger.info(f"Overdraft policy: {config.OVERDRAFT_POLICY}")

# ---------------------------------------------------------
# Routers
# ---------------------------------------------------------
app.include_router(gateway.router, prefix="/graphql", tags=["graphql"])

# ---------------------------------------------------------
# Health
# ---------------------------------------------------------
@app.get("/health")
def health_check():
    """
    Basic liveness check; does not touch the database.
    """
    return {"status": "ok", "service": "minibank"}
