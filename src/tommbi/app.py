from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

from nicegui import app, ui

from tommbi.data.generator import generate_dataset
from tommbi.logging_conf import configure_logging
from tommbi.settings import Settings, load_settings
from tommbi.ui.pages import register_pages

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TOMM industrial BI dashboard")
    parser.add_argument("--host", type=str, default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--log-level", type=str, default=None)
    parser.add_argument("--language", type=str, choices=["en", "fa"], default=None, help="Default UI language")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the sample data generator")
    parser.add_argument("--days", type=int, default=None, help="Days of sample history to generate")
    return parser


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command line flags override environment settings."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
        "language": args.language,
        "seed": args.seed,
        "history_days": args.days,
    }
    return dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    args = build_arg_parser().parse_args(argv)
    settings = apply_args(load_settings(), args)
    configure_logging(settings)

    dataset = generate_dataset(days=settings.history_days, seed=settings.seed)
    register_pages(dataset, settings)
    if not settings.chat_api_key:
        logger.warning("GEMINI_API_KEY is not set; the assistant will answer with the fallback message")

    assets_dir = Path(__file__).resolve().parents[2] / "assets"
    if assets_dir.exists():
        app.add_static_files("/assets", str(assets_dir))

    if sys.platform == "win32":
        @app.on_startup
        async def _silence_windows_connection_reset() -> None:
            loop = asyncio.get_running_loop()

            def _handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
                exc = context.get("exception")
                if isinstance(exc, ConnectionResetError) and getattr(exc, "winerror", None) == 10054:
                    return
                loop.default_exception_handler(context)

            loop.set_exception_handler(_handler)

    logger.info("Starting %s on %s:%s", settings.title, settings.host, settings.port)
    ui.run(
        host=settings.host,
        port=settings.port,
        title=settings.title,
        storage_secret=settings.storage_secret,
        dark=True,
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
