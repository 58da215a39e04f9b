"""
TaxonomyService - categories and colleges.

Both are flat name lists that users grow ad hoc: when a form needs a
category or college that does not exist yet, it is created inline. Callers
that create an entry as the first step of a larger operation get a
``created`` flag back so they can discard it if a later step fails.
"""

import logging
from typing import List, Tuple

from infrastructure.repositories import (
    CategoryRepository,
    CollegeRepository,
    DuplicateRecord,
    NamedEntityRepository,
    NamedRecord,
    RepositoryError,
)
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


class TaxonomyService(BaseService):
    def __init__(self, categories: CategoryRepository, colleges: CollegeRepository):
        super().__init__()
        self.categories = categories
        self.colleges = colleges

    def list_categories(self) -> ServiceResult[List[NamedRecord]]:
        return self.wrap_exception(self.categories.list_all, error_code=ErrorCodes.DATABASE_ERROR)

    def list_colleges(self) -> ServiceResult[List[NamedRecord]]:
        return self.wrap_exception(self.colleges.list_all, error_code=ErrorCodes.DATABASE_ERROR)

    @BaseService.log_performance
    def ensure_category(self, name: str) -> ServiceResult[Tuple[NamedRecord, bool]]:
        """Return the category called ``name``, creating it if needed."""
        return self._ensure(self.categories, name, "category")

    @BaseService.log_performance
    def ensure_college(self, name: str) -> ServiceResult[Tuple[NamedRecord, bool]]:
        """Return the college called ``name``, creating it if needed."""
        return self._ensure(self.colleges, name, "college")

    def discard_category(self, category_id: str) -> ServiceResult[bool]:
        """Undo an inline-created category unless a listing already uses it."""
        return self._discard(self.categories, category_id, "category")

    def discard_college(self, college_id: str) -> ServiceResult[bool]:
        return self._discard(self.colleges, college_id, "college")

    def get_category(self, category_id: str) -> ServiceResult[NamedRecord]:
        try:
            return service_ok(self.categories.get(category_id))
        except RepositoryError:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, f"Category {category_id} does not exist")

    def get_college(self, college_id: str) -> ServiceResult[NamedRecord]:
        try:
            return service_ok(self.colleges.get(college_id))
        except RepositoryError:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"College {college_id} does not exist")

    def _ensure(self, repository: NamedEntityRepository, name: str, kind: str) -> ServiceResult:
        name = (name or "").strip()
        if not name:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"A {kind} name is required")
        if len(name) > MAX_NAME_LENGTH:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"{kind.capitalize()} name is too long")

        try:
            existing = repository.find_by_name(name)
            if existing:
                return service_ok((existing, False))

            try:
                created = repository.insert(name)
            except DuplicateRecord:
                # Someone else created it between the lookup and the insert
                existing = repository.find_by_name(name)
                if existing is None:
                    return service_err(
                        ErrorCodes.DUPLICATE_ENTRY, f"{kind.capitalize()} '{name}' is being created elsewhere"
                    )
                return service_ok((existing, False))

            self.logger.info(f"Created {kind} '{name}' ({created.id})")
            return service_ok((created, True))

        except RepositoryError as e:
            self.logger.error(f"Failed to create {kind} '{name}': {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, f"Failed to add {kind}")

    def _discard(self, repository: NamedEntityRepository, entry_id: str, kind: str) -> ServiceResult[bool]:
        try:
            deleted = repository.delete_if_unused(entry_id)
            if deleted:
                self.logger.warning(f"Rolled back {kind} {entry_id}")
            else:
                self.logger.info(f"Kept {kind} {entry_id}: already in use")
            return service_ok(deleted)
        except RepositoryError as e:
            self.logger.error(f"Failed to roll back {kind} {entry_id}: {e}")
            return service_err(ErrorCodes.DATABASE_ERROR, str(e))
