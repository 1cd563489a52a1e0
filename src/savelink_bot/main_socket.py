"""
Socket Mode entry point for the save-link bot.
Connects to Slack via WebSocket - no public URL needed.

Usage:
    python -m savelink_bot.main_socket
"""
import signal
import sys
import threading

from .app import shutdown, start
from .config import get_settings
from .errors import BotFailure
from .log import setup_logging, get_logger

logger = get_logger("socket_listener")

def main() -> int:
    # Configuration comes first: nothing else is initialized if it is incomplete
    try:
        settings = get_settings()
    except BotFailure as e:
        setup_logging()
        logger.error(f"Configuration error: {e.message}")
        return 1

    setup_logging(settings)

    stop = threading.Event()

    def handle_signal(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, stopping...")
        stop.set()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        handle = start(settings)
    except Exception:
        logger.exception("Failed to start bot")
        return 1

    try:
        stop.wait()
    finally:
        shutdown(handle)
    return 0

if __name__ == "__main__":
    sys.exit(main())
