# employee_console/services/category_service.py
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from employee_console.core.exceptions import (
    CategoryHasChildrenError,
    CategoryNotFoundError,
    ConflictError,
    ConsistencyError,
    InvalidInputError,
)
from employee_console.core.logging import get_logger
from employee_console.db.models.category import HeadCategory, SubCategory, MicroCategory
from employee_console.db.repositories.category_repository import CategoryRepository
from employee_console.schemas.category import (
    CategoryForm,
    CategoryLevel,
    HeadCategoryInDB,
    SubCategoryInDB,
    MicroCategoryInDB,
)

logger = get_logger(__name__)

CategoryId = Union[UUID, str, None]


def _coerce_id(value: CategoryId) -> Optional[UUID]:
    """Parse an id from a path or form value, None when blank or malformed"""
    if isinstance(value, UUID):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return UUID(text)
    except ValueError:
        return None


def _parent_filter(parent_id: CategoryId) -> Optional[UUID]:
    """Parse a list filter; a present but malformed id is rejected rather than ignored"""
    if parent_id is None or not str(parent_id).strip():
        return None
    parsed = _coerce_id(parent_id)
    if parsed is None:
        raise InvalidInputError("Invalid parent id")
    return parsed


class CategoryLevelService:
    """
    CRUD for one level of the category hierarchy.

    The store reports success for updates and deletes that touch no rows, so
    every mutation is bracketed: the target is probed before the write and
    the affected row count is checked after it.

    ``image_uploader`` is any object with
    ``upload_public_url(level, slug, image) -> str``.
    """

    level: CategoryLevel
    noun: str
    model: Any
    schema: Any
    has_description = True

    parent_model: Any = None
    parent_column: Optional[str] = None
    parent_noun: Optional[str] = None

    child_model: Any = None
    child_column: Optional[str] = None
    child_noun_plural: Optional[str] = None
    # Wording used in the delete refusal, defaults to noun
    delete_noun: Optional[str] = None

    def __init__(self, db_session: Session, image_uploader=None):
        self.db = db_session
        self.category_repo = CategoryRepository(db_session, self.model, self.parent_column)
        self.parent_repo = CategoryRepository(db_session, self.parent_model) if self.parent_model else None
        self.image_uploader = image_uploader

    @property
    def not_found_message(self) -> str:
        return f"{self.noun.capitalize()} not found. Please refresh and try again."

    def list_categories(self, parent_id: CategoryId = None) -> List[Any]:
        """List all categories of this level ordered by name"""
        categories = self.category_repo.list(_parent_filter(parent_id))
        return [self.schema.model_validate(category) for category in categories]

    def list_active_categories(self, parent_id: CategoryId = None) -> List[Any]:
        """List active categories of this level ordered by name"""
        categories = self.category_repo.list_active(_parent_filter(parent_id))
        return [self.schema.model_validate(category) for category in categories]

    def get_category(self, category_id: CategoryId) -> Optional[Any]:
        parsed_id = _coerce_id(category_id)
        if not parsed_id:
            return None
        category = self.category_repo.get_by_id(parsed_id)
        if not category:
            return None
        return self.schema.model_validate(category)

    def ensure_exists(self, category_id: CategoryId) -> UUID:
        """
        Probe for the category before mutating it.

        Raises:
            CategoryNotFoundError: Blank, malformed or unknown id
        """
        parsed_id = _coerce_id(category_id)
        if not parsed_id or not self.category_repo.exists(parsed_id):
            raise CategoryNotFoundError(self.not_found_message)
        return parsed_id

    def get_child_count(self, category_id: CategoryId) -> int:
        """Count categories at the next level that reference this one"""
        parsed_id = _coerce_id(category_id)
        if self.child_model is None or parsed_id is None:
            return 0
        return self.category_repo.count_referencing(self.child_model, self.child_column, parsed_id)

    def create_category(self, form: CategoryForm, parent_id: CategoryId = None) -> Any:
        """
        Create a category from a validated form.

        Raises:
            CategoryNotFoundError: Parent missing (sub and micro levels)
            ConflictError: Slug already used on this level
        """
        values = self._values(form)

        if self.parent_column:
            parsed_parent = _coerce_id(parent_id) or form.parent_id
            if not parsed_parent or not self.parent_repo.exists(parsed_parent):
                raise CategoryNotFoundError(
                    f"{self.parent_noun.capitalize()} not found. Please refresh and try again."
                )
            values[self.parent_column] = parsed_parent

        self._ensure_slug_available(form.slug)
        values["image_url"] = self._resolve_image(form)

        category = self.category_repo.create(values)
        logger.info(f"Created {self.noun} '{category.slug}' ({category.id})")
        return self.schema.model_validate(category)

    def update_category(self, category_id: CategoryId, form: CategoryForm) -> UUID:
        """
        Update a category in place and return its id.

        Raises:
            CategoryNotFoundError: Target does not exist (nothing is written)
            ConflictError: Slug used by another category on this level
            ConsistencyError: The update matched no rows
        """
        parsed_id = self.ensure_exists(category_id)
        self._ensure_slug_available(form.slug, exclude_id=parsed_id)

        values = self._values(form)
        values["image_url"] = self._resolve_image(form)

        updated = self.category_repo.update(parsed_id, values)
        if not updated:
            logger.warning(f"Update of {self.noun} {parsed_id} matched no rows")
            raise ConsistencyError(
                f"Update failed. No {self.noun} was updated. (Possible permission issue or wrong id)"
            )

        logger.info(f"Updated {self.noun} {parsed_id}")
        return parsed_id

    def delete_category(self, category_id: CategoryId) -> None:
        """
        Delete a category that has no children.

        Raises:
            CategoryHasChildrenError: Children still reference it
            ConsistencyError: The delete removed no rows
        """
        parsed_id = _coerce_id(category_id)
        if parsed_id is None:
            raise CategoryNotFoundError(self.not_found_message)

        child_count = self.get_child_count(parsed_id)
        if child_count > 0:
            logger.warning(f"Refused to delete {self.noun} {parsed_id}: {child_count} children")
            raise CategoryHasChildrenError(
                f"Cannot delete. This {self.delete_noun or self.noun} has {child_count} {self.child_noun_plural}.",
                child_count=child_count,
            )

        self._before_delete(parsed_id)

        deleted = self.category_repo.delete(parsed_id)
        if not deleted:
            logger.warning(f"Delete of {self.noun} {parsed_id} removed no rows")
            raise ConsistencyError(
                f"Delete failed. No {self.noun} was deleted. (Possible permission issue or wrong id)"
            )

        logger.info(f"Deleted {self.noun} {parsed_id}")

    def _before_delete(self, category_id: UUID) -> None:
        """Hook for removing dependent rows that do not block deletion"""

    def _values(self, form: CategoryForm) -> Dict[str, Any]:
        values = {
            "name": form.name.strip(),
            "slug": form.slug.strip(),
            "is_active": form.is_active is not False,
        }
        if self.has_description:
            values["description"] = (form.description or "").strip() or None
        return values

    def _ensure_slug_available(self, slug: str, exclude_id: Optional[UUID] = None) -> None:
        existing = self.category_repo.get_by_slug(slug)
        if existing and existing.id != exclude_id:
            raise ConflictError(f"A {self.noun} with slug '{slug}' already exists")

    def _resolve_image(self, form: CategoryForm) -> Optional[str]:
        """
        Pick the image URL to store.

        remove_image wins, then an uploaded file, then the pasted URL (already
        validated as http(s) by the form).
        """
        if form.remove_image:
            return None
        if form.image_file:
            if self.image_uploader is None:
                raise InvalidInputError("Image uploads are not available")
            return self.image_uploader.upload_public_url(self.level.value, form.slug, form.image_file)
        return form.image_url or None


class HeadCategoryService(CategoryLevelService):
    level = CategoryLevel.HEAD
    noun = "head category"
    model = HeadCategory
    schema = HeadCategoryInDB

    child_model = SubCategory
    child_column = "head_category_id"
    child_noun_plural = "sub-categories"


class SubCategoryService(CategoryLevelService):
    level = CategoryLevel.SUB
    noun = "sub category"
    model = SubCategory
    schema = SubCategoryInDB

    parent_model = HeadCategory
    parent_column = "head_category_id"
    parent_noun = "head category"

    child_model = MicroCategory
    child_column = "sub_category_id"
    child_noun_plural = "micro-categories"
    delete_noun = "sub-category"


class MicroCategoryService(CategoryLevelService):
    level = CategoryLevel.MICRO
    noun = "micro category"
    model = MicroCategory
    schema = MicroCategoryInDB
    has_description = False

    parent_model = SubCategory
    parent_column = "sub_category_id"
    parent_noun = "sub category"

    def _before_delete(self, category_id: UUID) -> None:
        # A meta row would block the delete through its foreign key
        removed = self.category_repo.delete_micro_meta(category_id)
        if removed:
            logger.info(f"Removed meta for micro category {category_id}")


CATEGORY_SERVICES = {
    CategoryLevel.HEAD: HeadCategoryService,
    CategoryLevel.SUB: SubCategoryService,
    CategoryLevel.MICRO: MicroCategoryService,
}


def get_category_service(level: CategoryLevel, db_session: Session, image_uploader=None) -> CategoryLevelService:
    """Build the service for one hierarchy level"""
    return CATEGORY_SERVICES[CategoryLevel(level)](db_session, image_uploader=image_uploader)
