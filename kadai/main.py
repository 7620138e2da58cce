"""Entry point for the idli kadai Textual client."""

from __future__ import annotations

from kadai.config import get_settings
from kadai.kadai_app import KadaiApp
from kadai.logging_setup import setup_logging


def main() -> None:
    """Run the Textual application."""
    settings = get_settings()
    logger = setup_logging(settings)
    logger.info("app_start api=%s", settings.api_base_url)
    KadaiApp(settings).run()


if __name__ == "__main__":
    main()
