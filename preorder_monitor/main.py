from __future__ import annotations

import logging
import signal
import sys

from . import config
from .monitor import PageMonitor


def setup_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _install_signal_handlers(monitor: PageMonitor) -> None:
    logger = logging.getLogger(__name__)

    def _handle(signum, frame) -> None:
        logger.info("Shutting down monitor...")
        monitor.stop()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main() -> None:
    """Validate configuration and run the polling loop until signalled."""
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config.validate()
    except RuntimeError as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("Pre-order monitor service starting...")
    monitor = PageMonitor(
        config.MONITORED_PAGES,
        config.DISCORD_WEBHOOK_URL,
        interval_seconds=config.CHECK_INTERVAL_SECONDS,
        initial_page_delay=config.INITIAL_PAGE_DELAY_SECONDS,
        page_delay=config.PAGE_DELAY_SECONDS,
        keywords=config.FALLBACK_KEYWORDS,
    )
    _install_signal_handlers(monitor)

    try:
        monitor.run_forever()
    except Exception:
        logger.exception("Fatal error in monitor")
        sys.exit(1)
    finally:
        monitor.close()


if __name__ == "__main__":
    main()
