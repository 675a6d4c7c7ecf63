import logging
import signal
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Settings

logger = logging.getLogger("health.server")


class HealthServer(uvicorn.Server):
    """uvicorn server that announces its URLs and logs signal-driven shutdown.

    SIGTERM and SIGINT go through the same path: uvicorn stops accepting
    connections, lets in-flight responses finish and only then returns
    from `serve()`. There is no graceful-shutdown deadline.
    """

    def __init__(self, config: uvicorn.Config, settings: Settings):
        super().__init__(config)
        self.settings = settings

    def listening_port(self) -> int:
        for server in self.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return self.settings.port

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if not self.started:
            return
        base_url = f"http://localhost:{self.listening_port()}"
        logger.info(f"Server running on {base_url}")
        logger.info(f"Health check: {base_url}/health")

    def handle_exit(self, sig: int, frame) -> None:
        if not self.should_exit:
            logger.info(f"{signal.Signals(sig).name} received, shutting down gracefully")
        super().handle_exit(sig, frame)

    async def shutdown(self, sockets=None) -> None:
        await super().shutdown(sockets=sockets)
        # uvicorn re-raises captured signals once serve() returns, which would
        # end the process with 128+signum; the drain is done, so exit 0 instead
        captured = getattr(self, "_captured_signals", None)
        if captured:
            captured.clear()
        logger.info("Process terminated")


def build_server(app: FastAPI, settings: Settings) -> HealthServer:
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        timeout_graceful_shutdown=None,
    )
    return HealthServer(config, settings)


def serve(app: FastAPI, settings: Optional[Settings] = None) -> None:
    """Bind and serve until SIGTERM/SIGINT. Bind errors end the process; no retry here."""
    settings = settings or app.state.settings
    build_server(app, settings).run()
