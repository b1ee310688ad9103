"""Aggregate FastAPI routers for inclusion in the application."""
from . import health, slack

all_routers = [
    health.router,
    slack.router,
]
