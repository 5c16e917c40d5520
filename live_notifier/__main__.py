from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
import traceback
import warnings
import webbrowser
from logging.handlers import TimedRotatingFileHandler

import truststore


def main() -> None:
    truststore.inject_into_ssl()

    from live_notifier.config import FILE_FORMATTER, LOG_PATH, LOGGING_LEVELS
    from live_notifier.config.settings import Settings
    from live_notifier.core.client import LiveNotifier
    from live_notifier.version import __version__
    from live_notifier.web.managers import apply_debug_mode

    logger = logging.getLogger("LiveNotifier")
    logger.setLevel(logging.INFO)
    # Always add console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(FILE_FORMATTER)
    logger.addHandler(console_handler)
    logger.info("Logger initialized")

    warnings.simplefilter("default", ResourceWarning)

    if sys.version_info < (3, 10):
        raise RuntimeError("Python 3.10 or higher is required")

    class ParsedArgs(argparse.Namespace):
        _verbose: int
        _debug: bool
        host: str
        port: int
        no_browser: bool

        @property
        def logging_level(self) -> int:
            if self._debug:
                return logging.DEBUG
            return LOGGING_LEVELS[min(self._verbose, 4)]

    # handle input parameters
    logger.debug("Parsing command line arguments")
    parser = argparse.ArgumentParser(
        description="Polls Twitch and tells you when the channels you follow go live.",
    )
    parser.add_argument("--version", action="version", version=f"v{__version__}")
    parser.add_argument("-v", dest="_verbose", action="count", default=0)
    parser.add_argument("--debug", dest="_debug", action="store_true")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--no-browser", dest="no_browser", action="store_true")
    args = parser.parse_args(namespace=ParsedArgs())
    # load settings
    logger.debug("Loading settings")
    try:
        settings = Settings(args)
    except Exception:
        logger.exception("Error while loading settings")
        print(f"Settings error: {traceback.format_exc()}", file=sys.stderr)
        sys.exit(4)

    if settings.debug_mode:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(min(settings.logging_level, logging.INFO))
    apply_debug_mode(settings.debug_mode or settings.logging_level <= logging.DEBUG)

    # client run
    async def run() -> None:
        # Always log to file, rotated at midnight
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(LOG_PATH, when="midnight", backupCount=5)
        file_handler.setFormatter(FILE_FORMATTER)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {LOG_PATH}")

        logger.info("=== Live Notifier Starting ===")
        logger.info(f"Version: {__version__}")
        logger.info(f"Python version: {sys.version}")
        logger.info(f"Platform: {sys.platform}")

        exit_status = 0
        client = LiveNotifier(settings)

        # Initialize web GUI
        from live_notifier.web import app as webapp
        from live_notifier.web.gui_manager import WebGUIManager

        gui = WebGUIManager(client)
        webapp.set_managers(gui, client)
        gui.start()
        logger.info(f"Starting web server on http://{settings.host}:{settings.port}")
        web_server_task = asyncio.create_task(
            webapp.run_server(host=settings.host, port=settings.port)
        )
        if not settings.no_browser:
            host = "localhost" if settings.host in ("0.0.0.0", "::") else settings.host
            webbrowser.open(f"http://{host}:{settings.port}")

        loop = asyncio.get_running_loop()
        if sys.platform == "linux":
            logger.debug("Setting up signal handlers for SIGINT and SIGTERM")
            loop.add_signal_handler(signal.SIGINT, lambda *_: client.close())
            loop.add_signal_handler(signal.SIGTERM, lambda *_: client.close())

        logger.info("Starting main client run loop")
        try:
            await client.run()
            logger.info("Client run completed normally")
        except Exception:
            logger.exception("Fatal error encountered during client run")
            exit_status = 1
            gui.print("Fatal error encountered:\n")
            gui.print(traceback.format_exc())
        finally:
            logger.info("=== Starting shutdown sequence ===")
            if sys.platform == "linux":
                loop.remove_signal_handler(signal.SIGINT)
                loop.remove_signal_handler(signal.SIGTERM)
            gui.status.update("Exiting...")
            if not web_server_task.done():
                logger.info("Shutting down web server")
                # Trigger graceful shutdown and wait for it to finish
                await webapp.shutdown_server()
                try:
                    await asyncio.wait_for(web_server_task, timeout=5.0)
                    logger.info("Web server task completed gracefully")
                except asyncio.TimeoutError:
                    logger.warning("Web server didn't exit in time, forcing cancellation")
                    web_server_task.cancel()
                    try:
                        await web_server_task
                    except asyncio.CancelledError:
                        logger.info("Web server task force-cancelled")
                except Exception as e:
                    logger.error(f"Error while shutting down web server: {e}")
            gui.stop()
            logger.info("Shutting down the notifier")
            await client.shutdown()
        if exit_status != 0:
            logger.warning("Application terminated with error")
        # save the application state
        client.context.save_settings(force=True)
        logger.info(f"=== Exiting with status code: {exit_status} ===")
        sys.exit(exit_status)

    asyncio.run(run())


if __name__ == "__main__":
    main()
