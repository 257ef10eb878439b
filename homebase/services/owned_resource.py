"""
Homebase Backend: Owned Resource Service
========================================

What:  The database statements shared by every table whose rows belong to a
       single user.
How:   Subclasses name their model, primary key and resource label; this
       class issues the statements and translates empty results into 403/404.

Ownership rules:
    Reads:      WHERE pk = :id AND "userId" = :uid → nothing found is 404,
                whether the row is missing or belongs to someone else.
    Mutations:  UPDATE / DELETE ... WHERE pk = :id AND "userId" = :uid RETURNING
                in one statement, so ownership cannot change between a check
                and the write. When nothing comes back, a read-only probe on
                the primary key decides between 403 (exists, not yours) and
                404 (gone).
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from homebase.exceptions import DatabaseError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class OwnedResourceService(ABC, Generic[ModelT]):
    """
    Base class for per-user CRUD services.

    Subclasses set:
        model:     ORM class with a `user_id` attribute
        resource:  label used in messages and logs ("property", "movie")
    and implement `primary_key()`.
    """

    model: Type[ModelT]
    resource: str = "resource"

    @abstractmethod
    def primary_key(self) -> InstrumentedAttribute:
        """The mapped primary-key column, used in every WHERE clause."""

    def _owned(self, statement, resource_id: int, user_id: int):
        return statement.where(
            self.primary_key() == resource_id,
            self.model.user_id == user_id,
        )

    def _database_error(self, action: str, error: Exception, **context: Any) -> DatabaseError:
        logger.error(
            "Database error trying to %s %s (%s): %s",
            action,
            self.resource,
            ", ".join(f"{k}={v}" for k, v in context.items()),
            str(error),
            exc_info=True,
        )
        context["error_type"] = type(error).__name__
        return DatabaseError(
            message=f"Could not {action} the {self.resource}. Please try again.",
            context=context,
        )

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_owned(self, db: AsyncSession, user_id: int) -> List[ModelT]:
        """All of the caller's rows, primary key ascending."""
        try:
            result = await db.execute(
                select(self.model)
                .where(self.model.user_id == user_id)
                .order_by(self.primary_key().asc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("list", e, user_id=user_id)

    async def get_owned(self, db: AsyncSession, user_id: int, resource_id: int) -> ModelT:
        """
        One of the caller's rows.

        Raises:
            NotFoundError: no such row, or it belongs to another user
        """
        try:
            result = await db.execute(self._owned(select(self.model), resource_id, user_id))
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("retrieve", e, resource_id=resource_id, user_id=user_id)

        if row is None:
            logger.warning("%s %s not found for user %s", self.resource.capitalize(), resource_id, user_id)
            raise NotFoundError(resource=self.resource, resource_id=resource_id)
        return row

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, db: AsyncSession, row: ModelT) -> ModelT:
        """Inserts a new row; the generated primary key is populated on return."""
        try:
            db.add(row)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error("create", e, user_id=getattr(row, "user_id", None))
        logger.info("Created %s %s for user %s", self.resource, self._identity(row), row.user_id)
        return row

    async def update_owned(
        self,
        db: AsyncSession,
        user_id: int,
        resource_id: int,
        values: Dict[str, Any],
    ) -> ModelT:
        """
        Replaces `values` on one of the caller's rows.

        Raises:
            ForbiddenError: the row exists but belongs to another user
            NotFoundError:  the row does not exist
        """
        statement = (
            self._owned(update(self.model), resource_id, user_id)
            .values({getattr(self.model, name): value for name, value in values.items()})
            .returning(self.model)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(statement)
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("update", e, resource_id=resource_id, user_id=user_id)

        if row is None:
            await self._raise_missing(db, user_id, resource_id, action="update")
        logger.info("Updated %s %s for user %s", self.resource, resource_id, user_id)
        return row

    async def delete_owned(self, db: AsyncSession, user_id: int, resource_id: int) -> None:
        """
        Deletes one of the caller's rows.

        Raises:
            ForbiddenError: the row exists but belongs to another user
            NotFoundError:  the row does not exist (including already deleted)
        """
        statement = (
            self._owned(delete(self.model), resource_id, user_id)
            .returning(self.primary_key())
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(statement)
            deleted_id = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("delete", e, resource_id=resource_id, user_id=user_id)

        if deleted_id is None:
            await self._raise_missing(db, user_id, resource_id, action="delete")
        logger.info("Deleted %s %s for user %s", self.resource, resource_id, user_id)

    async def _raise_missing(self, db: AsyncSession, user_id: int, resource_id: int, action: str) -> None:
        """Explains why an owner-filtered mutation matched nothing. Always raises."""
        try:
            result = await db.execute(select(self.primary_key()).where(self.primary_key() == resource_id))
            exists = result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise self._database_error(action, e, resource_id=resource_id, user_id=user_id)

        if exists:
            logger.warning(
                "User %s tried to %s %s %s owned by another user",
                user_id, action, self.resource, resource_id,
            )
            raise ForbiddenError(resource=self.resource, action=action)

        logger.warning("%s %s not found (%s by user %s)", self.resource.capitalize(), resource_id, action, user_id)
        raise NotFoundError(resource=self.resource, resource_id=resource_id)

    def _identity(self, row: ModelT) -> Any:
        return getattr(row, self.primary_key().key)
