"""
UI package for the Kabaddi Score Master.

This package contains the Flask web server that exposes the scoreboard API.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
