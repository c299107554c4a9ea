"""
Server command - serve the Todoboard API with uvicorn.
"""
import os
import logging
import uvicorn
from todoboard.__main__ import Command

logger = logging.getLogger(__name__)


class ServerCommand(Command):
    """Serve the to-do and identity API. Every start wipes and reseeds the database."""

    @classmethod
    def add_arguments(cls, parser):
        """Add server-specific arguments."""
        parser.add_argument(
            "--host",
            default="0.0.0.0",
            help="Host to bind to (default: 0.0.0.0)"
        )
        parser.add_argument(
            "--port",
            type=int,
            default=int(os.getenv("TODOBOARD_PORT", "8000")),
            help="Port to bind to (default: 8000 or TODOBOARD_PORT env var)"
        )
        parser.add_argument(
            "--log-level",
            default=os.getenv("LOG_LEVEL", "INFO").lower(),
            choices=["debug", "info", "warning", "error", "critical"],
            help="Log level (default: INFO or LOG_LEVEL env var)"
        )

    def init(self):
        """
        Build the app with ``create_app()``.

        Its lifespan drops and recreates the schema and seeds the sample data
        when uvicorn starts it, before the first request is accepted.
        """
        super().init()

        # Import here to avoid circular dependencies
        from todoboard.app import create_app

        self.app = create_app()
        logger.info(f"Server initialized on {self.args.host}:{self.args.port}")

    def run(self) -> int:
        config = uvicorn.Config(
            self.app,
            host=self.args.host,
            port=self.args.port,
            log_level=self.args.log_level,
            access_log=True,
            timeout_keep_alive=30,
            timeout_graceful_shutdown=30,
        )
        server = uvicorn.Server(config)

        try:
            logger.info(f"Starting server on {self.args.host}:{self.args.port}")
            server.run()
            return 0
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt, shutting down...")
            return 130
        except Exception as e:
            logger.exception(f"Server error: {e}")
            return 1

    def cleanup(self):
        super().cleanup()
        # The engine is disposed by the application lifespan
        logger.info("Server stopped")
