"""
sankeysync App entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        uv run python -m app.main --data data/Housing.csv --width 1200

    - Streamlit direct:
        streamlit run src/app/main.py -- --data data/Housing.csv --width 1200
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from app.ui import streamlit_app
from sankeysync.io.config import SankeySettings

logger = logging.getLogger(__name__)


def _parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="sankeysync Streamlit App", add_help=add_help)
    parser.add_argument("--data", default=None, help="Housing CSV path (overrides config)")
    parser.add_argument("--config", default=None, help="Explicit TOML config path")
    parser.add_argument("--width", type=int, default=None, help="Sankey canvas width (px)")
    parser.add_argument("--height", type=int, default=None, help="Sankey canvas height (px)")
    return parser


def resolve_settings(ns: argparse.Namespace) -> SankeySettings:
    """Settings from config files and environment, with CLI flags on top."""
    s = SankeySettings.load(ns.config)
    if ns.data:
        s = replace(s, data_path=str(ns.data))
    if ns.width is not None:
        s = replace(s, width=int(ns.width))
    if ns.height is not None:
        s = replace(s, height=int(ns.height))
    return s.validate()


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the sankeysync UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader and argument parsing, passing through any supported
    options after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.

    Examples:
        uv run python -m app.main --data data/Housing.csv
        streamlit run src/app/main.py -- --data data/Housing.csv
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _parser().parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(settings=resolve_settings(ns))
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.data:
        passthrough += ["--data", str(ns.data)]
    if ns.config:
        passthrough += ["--config", str(ns.config)]
    if ns.width is not None:
        passthrough += ["--width", str(int(ns.width))]
    if ns.height is not None:
        passthrough += ["--height", str(int(ns.height))]
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        import subprocess

        logger.warning("execv failed; running streamlit as a subprocess")
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Support the same flags after '--' when using `streamlit run`
    try:
        ns, _ = _parser(add_help=False).parse_known_args(sys.argv[1:])
        streamlit_app(settings=resolve_settings(ns))
    except SystemExit:
        # Fallback to no-arg render
        streamlit_app()
