"""
Initialize command - Reset and seed the database without starting the server.
"""
import logging

from sqlalchemy import inspect

from todoboard.__main__ import Command
from todoboard.config import get_settings
from todoboard.data import initialise_database
from todoboard.database import Base, create_db_engine, create_session_factory

logger = logging.getLogger(__name__)


class InitializeCommand(Command):
    """Command to reset and seed the database without starting the server."""

    @classmethod
    def get_name(cls) -> str:
        """Override to return 'init' instead of 'initialize'."""
        return "init"

    @classmethod
    def get_description(cls) -> str:
        return "Recreate the schema and seed demo data, or validate it (does not start server)"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument(
            "--database-url",
            type=str,
            default=None,
            help="SQLAlchemy database URL (overrides TODOBOARD_DATABASE_URL and config defaults)"
        )
        parser.add_argument(
            "--validate-only",
            action="store_true",
            help="Only validate the existing schema, don't reset or seed"
        )

    def init(self):
        super().init()
        self.database_url = self.args.database_url or get_settings().database_url
        self.engine = create_db_engine(self.database_url)
        logger.info(f"Database URL: {self.engine.url.render_as_string(hide_password=True)}")

    def run(self) -> int:
        if self.args.validate_only:
            logger.info("Validating existing database schema...")
            return self._validate_schema()

        try:
            initialise_database(self.engine, create_session_factory(self.engine))
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            return 1

        validation_result = self._validate_schema()
        if validation_result != 0:
            return validation_result

        logger.info("✅ Database initialization complete")
        return 0

    def _validate_schema(self) -> int:
        """Check that every mapped table exists with all of its columns."""
        inspector = inspect(self.engine)
        tables = set(inspector.get_table_names())
        logger.info(f"Found {len(tables)} tables: {', '.join(sorted(tables))}")

        for table in Base.metadata.sorted_tables:
            if table.name not in tables:
                logger.error(f"{table.name} table not found")
                return 1
            columns = {column["name"] for column in inspector.get_columns(table.name)}
            missing_columns = {column.name for column in table.columns} - columns
            if missing_columns:
                logger.error(f"Missing required columns in {table.name} table: {missing_columns}")
                return 1

        logger.info("✅ Schema validation passed")
        return 0

    def cleanup(self):
        super().cleanup()
        engine = getattr(self, "engine", None)
        if engine is not None:
            engine.dispose()
