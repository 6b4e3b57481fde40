#!/usr/bin/env python3
"""
Main entry point for the Kabaddi Score Master web application.

This script launches the Flask-based web server.
"""
import logging

from scoremaster.ui.web_app import run_web_app
from scoremaster.utils.constants import DEFAULT_HOST, DEFAULT_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_web_app(host=DEFAULT_HOST, port=DEFAULT_PORT)
