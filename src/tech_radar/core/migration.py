"""Database migration utilities."""

from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine
import structlog

logger = structlog.get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class MigrationManager:
    """Manages database migrations using Alembic."""

    def __init__(
        self,
        alembic_cfg_path: Optional[Path] = None,
        database_url: Optional[str] = None
    ) -> None:
        """Initialize migration manager.

        Args:
            alembic_cfg_path: Path to alembic.ini (defaults to the project root)
            database_url: Database to migrate (defaults to application settings)
        """
        self.alembic_cfg_path = Path(alembic_cfg_path or PROJECT_ROOT / "alembic.ini")
        self.database_url = database_url
        self.config: Optional[Config] = None

    def _get_alembic_config(self) -> Config:
        """Get Alembic configuration.

        Raises:
            FileNotFoundError: If alembic.ini is not found
        """
        if self.config is None:
            if not self.alembic_cfg_path.exists():
                raise FileNotFoundError(f"Alembic config file not found: {self.alembic_cfg_path}")

            self.config = Config(str(self.alembic_cfg_path))

            # Resolve script_location against the ini file, not the working directory
            script_location = self.config.get_main_option("script_location")
            if script_location:
                full_script_path = self.alembic_cfg_path.parent / script_location
                self.config.set_main_option("script_location", str(full_script_path))
            if self.database_url:
                self.config.set_main_option("sqlalchemy.url", self.database_url)

        return self.config

    def run_migrations(self, revision: str = "head") -> None:
        """Upgrade the database to ``revision``."""
        try:
            command.upgrade(self._get_alembic_config(), revision)
            logger.info("Database migrations completed successfully", revision=revision)
        except Exception as e:
            logger.error("Failed to run database migrations", error=str(e))
            raise

    def downgrade(self, revision: str = "-1") -> None:
        """Downgrade database to specified revision."""
        try:
            command.downgrade(self._get_alembic_config(), revision)
            logger.info("Database downgraded", revision=revision)
        except Exception as e:
            logger.error("Failed to downgrade database", revision=revision, error=str(e))
            raise

    def get_current_revision(self) -> Optional[str]:
        """Revision currently stamped in the database, or None if unversioned."""
        url = self.database_url or self._get_alembic_config().get_main_option("sqlalchemy.url")
        if not url:
            from .config import settings
            url = settings.database_url

        engine = create_engine(url)
        try:
            with engine.connect() as connection:
                return MigrationContext.configure(connection).get_current_revision()
        finally:
            engine.dispose()


def run_migrations(database_url: Optional[str] = None) -> None:
    """Run all pending database migrations."""
    MigrationManager(database_url=database_url).run_migrations()
