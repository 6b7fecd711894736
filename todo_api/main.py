"""Command that runs the todo API until it is signalled to stop."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from collections.abc import Sequence
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from todo_api.server import new_server

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 5.0
_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class _RequestHandler(WSGIRequestHandler):
    timeout = 10

    def log_message(self, format: str, *args: object) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def _serve(httpd: WSGIServer, shutdown_timeout: float = SHUTDOWN_TIMEOUT) -> None:
    """Serve until SIGINT or SIGTERM, then shut down gracefully.

    After the first signal the previous handlers are restored, so a second
    Ctrl+C forces the process down.
    """
    done = threading.Event()
    previous = {sig: signal.getsignal(sig) for sig in _STOP_SIGNALS}

    def restore_handlers() -> None:
        for sig, handler in previous.items():
            signal.signal(sig, signal.SIG_DFL if handler is None else handler)

    def shut_down() -> None:
        stopper = threading.Thread(target=httpd.shutdown, daemon=True)
        stopper.start()
        stopper.join(shutdown_timeout)
        if stopper.is_alive():
            logger.error(
                "Server forced to shutdown with error: %s", "context deadline exceeded"
            )
        logger.info("Server exiting")
        done.set()

    def on_signal(signum: int, frame: object) -> None:
        logger.info("shutting down gracefully, press Ctrl+C again to force")
        restore_handlers()
        threading.Thread(target=shut_down, daemon=True).start()

    for sig in _STOP_SIGNALS:
        signal.signal(sig, on_signal)
    try:
        threading.Thread(target=httpd.serve_forever, daemon=True).start()
        while not done.wait(0.5):
            pass
    finally:
        restore_handlers()
        httpd.server_close()
    logger.info("Graceful shutdown complete.")


def main(argv: Sequence[str] | None = None) -> None:
    """Start the todo API on the port given by ``PORT``."""
    parser = argparse.ArgumentParser(
        prog="todo-api",
        description="Serve the todo HTTP API; configured through the environment.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    server = new_server()
    httpd = make_server("", server.port, server.create_app(), handler_class=_RequestHandler)
    _serve(httpd)


if __name__ == "__main__":
    main()