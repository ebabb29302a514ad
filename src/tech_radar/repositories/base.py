"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar, Type, Optional, Dict, Any

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import structlog

from tech_radar.core.base import Base
from tech_radar.core.error_handling import DatabaseError

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository class with common CRUD operations."""

    def __init__(self, model: Type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def create(self, db: Session, **kwargs) -> ModelType:
        """Create a new record.

        Args:
            db: Database session
            **kwargs: Model field values

        Returns:
            Created model instance

        Raises:
            DatabaseError: If creation fails due to constraint violations
        """
        try:
            instance = self.model(**kwargs)
            db.add(instance)
            db.commit()
            db.refresh(instance)

            logger.debug(
                "Record created",
                model=self.model.__name__,
                id=str(instance.id)
            )
            return instance

        except IntegrityError as e:
            db.rollback()
            logger.error(
                "Record creation failed",
                model=self.model.__name__,
                error=str(e.orig)
            )
            raise DatabaseError(
                f"Failed to create {self.model.__name__}: {e.orig}",
                original_error=e
            )

    def get_by_id(self, db: Session, id: str) -> Optional[ModelType]:
        """Get record by ID.

        Args:
            db: Database session
            id: Record identifier

        Returns:
            Model instance if found, None otherwise
        """
        return db.query(self.model).filter(self.model.id == id).first()

    def count(self, db: Session, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records with optional equality filters.

        Args:
            db: Database session
            filters: Optional filters to apply

        Returns:
            Number of records matching criteria
        """
        query = db.query(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)

        return query.count()
