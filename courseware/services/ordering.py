"""
courseware/services/ordering.py
Dense sibling ordering

Chapters inside a course and lessons inside a chapter both keep a 1-based
`order` that must always read 1..N. OrderedSiblings implements insert, move
and remove for any child model given the name of its parent key column.

Rules:
- insert at P > 1 requires a sibling at P - 1 (no gaps)
- moving later to P requires a sibling at P (cannot move past the end)
- every shift is one UPDATE ... SET order = order +/- 1 statement

Nothing here commits. Callers own the transaction and are expected to lock
the parent row before calling in.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.errors import BadRequestError, ErrorCode

logger = logging.getLogger(__name__)


class OrderedSiblings:
    """Renumbering engine for one (child model, parent column) pair."""

    def __init__(self, model, parent_attr: str, kind: Optional[str] = None):
        self.model = model
        self.parent_attr = parent_attr
        self.kind = kind or model.__name__.lower()

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_attr)

    def _missing_position(self, position: int) -> BadRequestError:
        return BadRequestError(
            f"Cannot create or move {self.kind} because {self.kind} "
            f"(order {position}) does not exist",
            code=ErrorCode.INVALID_ORDER
        )

    async def _sibling_exists(self, db: AsyncSession, parent_id: int, position: int) -> bool:
        result = await db.execute(
            select(self.model.id).where(
                self.parent_column == parent_id,
                self.model.order == position
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def _shift(self, db: AsyncSession, parent_id: int, delta: int, *conditions) -> None:
        await db.execute(
            update(self.model)
            .where(self.parent_column == parent_id, *conditions)
            .values(order=self.model.order + delta)
        )

    async def list(self, db: AsyncSession, parent_id: int) -> List[Any]:
        result = await db.execute(
            select(self.model)
            .where(self.parent_column == parent_id)
            .order_by(self.model.order.asc())
        )
        return list(result.scalars().all())

    async def insert(self, db: AsyncSession, parent_id: int, position: int, fields: Dict[str, Any]):
        """
        Insert a new child at `position`, pushing the siblings at and after
        it one slot later.
        """
        if position > 1 and not await self._sibling_exists(db, parent_id, position - 1):
            logger.warning(f"Rejected {self.kind} insert at order {position} under parent {parent_id}")
            raise self._missing_position(position - 1)

        await self._shift(db, parent_id, 1, self.model.order >= position)

        entity = self.model(**fields, order=position, **{self.parent_attr: parent_id})
        db.add(entity)
        await db.flush()
        return entity

    async def move(self, db: AsyncSession, entity, position: Optional[int] = None, name: Optional[str] = None):
        """
        Move `entity` to `position` and/or rename it.

        Moving earlier pushes [position, current) one slot later; moving
        later pulls (current, position] one slot earlier.
        """
        parent_id = getattr(entity, self.parent_attr)
        current = entity.order
        values: Dict[str, Any] = {}

        if position is not None and position != current:
            if position < current:
                await self._shift(
                    db, parent_id, 1,
                    self.model.order >= position,
                    self.model.order < current,
                    self.model.id != entity.id
                )
            else:
                if not await self._sibling_exists(db, parent_id, position):
                    logger.warning(f"Rejected {self.kind} {entity.id} move to order {position}")
                    raise self._missing_position(position)
                await self._shift(
                    db, parent_id, -1,
                    self.model.order > current,
                    self.model.order <= position,
                    self.model.id != entity.id
                )
            values["order"] = position

        if name is not None:
            values["name"] = name

        for key, value in values.items():
            setattr(entity, key, value)
        await db.flush()
        return entity

    async def remove(self, db: AsyncSession, entity) -> None:
        """Delete `entity` and close the gap it leaves."""
        parent_id = getattr(entity, self.parent_attr)
        position = entity.order

        await db.delete(entity)
        await db.flush()
        await self._shift(db, parent_id, -1, self.model.order > position)
