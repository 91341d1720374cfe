"""
CLI entry point using Typer.

Provides commands for the training log:
- recent: Recent sets and next-session plan for an exercise
- log-lift: Log a lift session
- history: Logged sets for an exercise
- log-run / log-bike / log-swim: Log an endurance session
- splits / show-plan: Inspect the workout plan
"""

from .app import app
from .commands import endurance, lifts, plan  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()
