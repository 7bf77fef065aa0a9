# employee_console/db/repositories/category_repository.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import delete, table, column, Uuid, func
from sqlalchemy.orm import Session

from employee_console.db.schema_fallback import run_with_column_fallback

# Link column of micro_category_meta, newest layout last
MICRO_META_LINK_COLUMNS = ("micro_categories", "micro_category_id")


class CategoryRepository:
    """Repository for CRUD operations on one level of the category hierarchy"""

    def __init__(self, db_session: Session, model, parent_column: Optional[str] = None):
        self.db_session = db_session
        self.model = model
        self.parent_column = parent_column

    def _filtered(self, parent_id: Optional[UUID] = None, active_only: bool = False):
        query = self.db_session.query(self.model)
        if parent_id is not None and self.parent_column:
            query = query.filter(getattr(self.model, self.parent_column) == parent_id)
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        return query.order_by(self.model.name)

    def list(self, parent_id: Optional[UUID] = None) -> List[Any]:
        """List rows ordered by name, optionally for one parent"""
        return self._filtered(parent_id).all()

    def list_active(self, parent_id: Optional[UUID] = None) -> List[Any]:
        """List active rows ordered by name, optionally for one parent"""
        return self._filtered(parent_id, active_only=True).all()

    def get_by_id(self, category_id: UUID):
        """Get category by ID"""
        return self.db_session.query(self.model).filter(self.model.id == category_id).first()

    def get_by_slug(self, slug: str):
        """Get category by slug"""
        return self.db_session.query(self.model).filter(self.model.slug == slug).first()

    def exists(self, category_id: UUID) -> bool:
        """Existence probe selecting only the id column"""
        row = self.db_session.query(self.model.id).filter(self.model.id == category_id).first()
        return row is not None

    def create(self, values: Dict[str, Any]):
        """Insert one row and return it"""
        db_category = self.model(**values)

        self.db_session.add(db_category)
        self.db_session.commit()
        self.db_session.refresh(db_category)

        return db_category

    def update(self, category_id: UUID, values: Dict[str, Any]) -> int:
        """Update in place, returning the number of rows matched"""
        updated = (
            self.db_session.query(self.model)
            .filter(self.model.id == category_id)
            .update(values, synchronize_session=False)
        )
        self.db_session.commit()
        return updated

    def delete(self, category_id: UUID) -> int:
        """Delete by ID, returning the number of rows removed"""
        deleted = (
            self.db_session.query(self.model)
            .filter(self.model.id == category_id)
            .delete(synchronize_session=False)
        )
        self.db_session.commit()
        return deleted

    def count_referencing(self, child_model, child_column: str, category_id: UUID) -> int:
        """Count rows of child_model whose child_column points at category_id"""
        return (
            self.db_session.query(func.count(child_model.id))
            .filter(getattr(child_model, child_column) == category_id)
            .scalar()
        ) or 0

    def delete_micro_meta(self, micro_category_id: UUID) -> int:
        """
        Delete the optional meta row of a micro category.

        Safe when no meta row exists. The link column is tried in
        MICRO_META_LINK_COLUMNS order.
        """
        def attempt(link_column: str) -> int:
            meta = table("micro_category_meta", column(link_column, Uuid(as_uuid=True)))
            result = self.db_session.execute(
                delete(meta).where(meta.c[link_column] == micro_category_id)
            )
            return result.rowcount

        return run_with_column_fallback(self.db_session, MICRO_META_LINK_COLUMNS, attempt)
