"""
FastAPI application entry point for the topictree API.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topictree import __version__
from topictree.api.routes import health, topics
from topictree.core.config import get_cors_origins

logger = logging.getLogger(__name__)

app = FastAPI(title="topictree API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(topics.router, prefix="/api", tags=["topics"])
app.include_router(health.router, prefix="/api", tags=["health"])
