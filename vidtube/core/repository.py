"""Generic async repository shared by every resource module.

Resource repositories subclass ``Repository`` and set ``model`` (plus
``sortable`` for list endpoints). Ownership-checked loads go through
``get_owned`` so update/delete paths all apply the same ``authorize`` rule.
"""

import uuid
from typing import Any, Generic, Sequence, TypeVar
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from vidtube.core.base import Base
from vidtube.core.errors import Failure
from vidtube.core.paging import PageParams
from vidtube.core.security import Principal, authorize

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    model: type[ModelT]
    label: str = "Record"
    # attribute name -> column; list() rejects anything else
    sortable: dict[str, str] = {"createdAt": "created_at"}
    default_sort: str = "created_at"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **data) -> ModelT:
        obj = self.model(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get(self, obj_id: uuid.UUID) -> ModelT | None:
        return await self.session.get(self.model, obj_id)

    async def get_or_fail(self, obj_id: uuid.UUID) -> tuple[ModelT | None, Failure | None]:
        obj = await self.get(obj_id)
        if obj is None:
            return None, Failure.not_found(f"{self.label} not found")
        return obj, None

    async def get_owned(self, obj_id: uuid.UUID, principal: Principal) -> tuple[ModelT | None, Failure | None]:
        obj, err = await self.get_or_fail(obj_id)
        if err:
            return None, err
        if not authorize(obj, principal):
            return None, Failure.forbidden(f"You are not allowed to modify this {self.label.lower()}")
        return obj, None

    def resolve_sort(self, sort_by: str | None) -> tuple[str | None, Failure | None]:
        if not sort_by:
            return self.default_sort, None
        column = self.sortable.get(sort_by) or (sort_by if sort_by in self.sortable.values() else None)
        if column is None:
            allowed = ", ".join(sorted(self.sortable))
            return None, Failure.validation(f"Cannot sort by '{sort_by}'", f"sortBy must be one of: {allowed}")
        return column, None

    async def list(
        self,
        *filters: Any,
        page: PageParams | None = None,
        sort_column: str | None = None,
        descending: bool = True,
    ) -> Sequence[ModelT]:
        column = getattr(self.model, sort_column or self.default_sort)
        q = select(self.model).where(*filters).order_by(column.desc() if descending else column.asc())
        if page is not None:
            q = q.offset(page.offset).limit(page.limit)
        res = await self.session.execute(q)
        return res.scalars().all()

    async def count(self, *filters: Any) -> int:
        q = select(func.count()).select_from(self.model).where(*filters)
        res = await self.session.execute(q)
        return int(res.scalar_one())

    async def update(self, obj: ModelT, **data) -> ModelT:
        for k, v in data.items():
            if v is not None:
                setattr(obj, k, v)
        await self.session.flush()
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self.session.delete(obj)
        await self.session.flush()

    async def delete_where(self, *filters: Any) -> int:
        res = await self.session.execute(delete(self.model).where(*filters))
        return res.rowcount or 0


class ToggleRepository(Repository[ModelT]):
    """Presence-only rows (likes, subscriptions) keyed by a unique column set."""

    async def find_one(self, **key) -> ModelT | None:
        q = select(self.model).where(*[getattr(self.model, k) == v for k, v in key.items()])
        res = await self.session.execute(q)
        return res.scalars().first()

    async def toggle(self, **key) -> tuple[bool, ModelT | None]:
        """Remove the row for ``key`` if present, otherwise insert it.

        Returns ``(added, row)``. The unique constraint on the key columns
        turns a racing duplicate insert into an IntegrityError, which is
        reported as "added" with the row the other request created.
        """
        removed = await self.delete_where(*[getattr(self.model, k) == v for k, v in key.items()])
        if removed:
            return False, None
        try:
            obj = await self.create(**key)
        except IntegrityError:
            await self.session.rollback()
            obj = await self.find_one(**key)
        return True, obj
