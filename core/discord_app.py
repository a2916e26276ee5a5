"""
Discord runtime entrypoint.

This module launches the bot as an independent process. It owns:

- event loop creation
- configuration loading
- orderly startup and shutdown
- the fatal-error exit path (unrecoverable startup failures only)
"""

import asyncio
import signal
import sys

from runtime.version import as_string
from shared.config.settings import load_config
from shared.logging.logger import get_logger
from services.discord.runtime.supervisor import DiscordSupervisor

log = get_logger("core.discord_app")


# ----------------------------------------------------------------------
# MAIN ASYNC ENTRYPOINT
# ----------------------------------------------------------------------

async def main(stop_event: asyncio.Event) -> int:
    log.info(f"Starting {as_string()}...")

    config = load_config()
    supervisor = DiscordSupervisor(config)

    # --------------------------------------------------
    # START DISCORD RUNTIME
    # --------------------------------------------------
    try:
        await supervisor.start()
    except Exception as e:
        log.critical(f"Fatal error: {e}")
        return 1

    # --------------------------------------------------
    # BLOCK UNTIL SHUTDOWN SIGNAL OR CLIENT EXIT
    # --------------------------------------------------
    stop_task = asyncio.create_task(stop_event.wait())
    client_task = supervisor.client_task

    done, _ = await asyncio.wait(
        {stop_task, client_task},
        return_when=asyncio.FIRST_COMPLETED,
    )

    exit_code = 0
    if client_task in done and not client_task.cancelled() and client_task.exception():
        log.critical(f"Fatal error: {client_task.exception()}")
        exit_code = 1
    else:
        log.info("Discord shutdown initiated")

    stop_task.cancel()

    # --------------------------------------------------
    # ORDERLY SHUTDOWN
    # --------------------------------------------------
    try:
        await supervisor.shutdown()
    except Exception as e:
        log.warning(f"Discord supervisor shutdown error ignored: {e}")

    log.info("Discord runtime stopped")
    return exit_code


# ----------------------------------------------------------------------
# SIGNAL HANDLING (WINDOWS-SAFE)
# ----------------------------------------------------------------------

def _install_signal_handlers(
    loop: asyncio.AbstractEventLoop,
    stop_event: asyncio.Event,
):
    """
    Windows-safe Ctrl+C handler.
    Uses signal.signal + asyncio.Event to unwind cleanly.
    """

    def _handler(signum, frame):
        loop.call_soon_threadsafe(stop_event.set)

    try:
        signal.signal(signal.SIGINT, _handler)
        signal.signal(signal.SIGTERM, _handler)
    except ValueError as e:
        log.debug(f"Signal handlers not installed: {e}")


# ----------------------------------------------------------------------
# ENTRYPOINT
# ----------------------------------------------------------------------

def run() -> int:
    stop_event = asyncio.Event()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    _install_signal_handlers(loop, stop_event)

    exit_code = 0
    try:
        exit_code = loop.run_until_complete(main(stop_event))

    except KeyboardInterrupt:
        log.info("KeyboardInterrupt received - shutdown initiated")

    finally:
        # --------------------------------------------------
        # CANCEL REMAINING TASKS (CLEANLY)
        # --------------------------------------------------
        pending = [t for t in asyncio.all_tasks(loop) if not t.done()]
        for task in pending:
            task.cancel()

        if pending:
            loop.run_until_complete(
                asyncio.gather(*pending, return_exceptions=True)
            )

        loop.run_until_complete(loop.shutdown_asyncgens())

        asyncio.set_event_loop(None)
        loop.close()

    return exit_code


def cli():
    sys.exit(run())


if __name__ == "__main__":
    cli()
