"""Listing persistence and the search query builder.

Searches are built from three closed pieces: ``ListingFilters`` (the filter
predicate set), ``ListingSort`` (an allow-listed column and a direction) and
``Pagination``. Each turns raw query-string values into SQLAlchemy
expressions; nothing from the client is ever placed into SQL text.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.exceptions import ForbiddenError, NotFoundError, StoreError, ValidationError
from marketplace.models.listing import Listing

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

# SQLite INTEGER is a signed 64-bit value
MAX_SQL_INTEGER = 2**63 - 1

_LEADING_INT = re.compile(r"\s*[+-]?\d+")

SORTABLE_COLUMNS = {
    "price": Listing.price,
    "id": Listing.id,
    "title": Listing.title,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_price(value: Any, field: str) -> float | None:
    """Parse an optional price. Blank values are treated as absent."""
    if _is_blank(value):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be a number") from e
    if not math.isfinite(price):
        raise ValidationError(f"{field} must be a number")
    return price


def _parse_positive_int(value: Any, default: int) -> int:
    """Parse the leading integer of ``value``, so ``"2.5"`` and ``"3abc"`` give 2 and 3.

    Anything without a leading integer, or whose integer is not positive,
    falls back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(str(value))
        if match is None:
            return default
        number = int(match.group())
    return number if number > 0 else default


@dataclass(frozen=True)
class ListingFilters:
    """Filter predicate set. Absent fields impose no constraint."""

    location: str | None = None
    min_price: float | None = None
    max_price: float | None = None

    @classmethod
    def from_query(
        cls,
        location: str | None = None,
        min_price: Any = None,
        max_price: Any = None,
    ) -> "ListingFilters":
        return cls(
            location=None if _is_blank(location) else location,
            min_price=_parse_price(min_price, "min_price"),
            max_price=_parse_price(max_price, "max_price"),
        )

    def predicates(self) -> list[ColumnElement[bool]]:
        """Return the WHERE clauses, combined with AND by the caller."""
        clauses = []
        if self.location is not None:
            clauses.append(Listing.location == self.location)
        if self.min_price is not None:
            clauses.append(Listing.price >= self.min_price)
        if self.max_price is not None:
            clauses.append(Listing.price <= self.max_price)
        return clauses


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ListingSort:
    """Sort column and direction. No column means insertion order."""

    column: str | None = None
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, sort_by: str | None = None, order: str | None = None) -> "ListingSort":
        column = sort_by if sort_by in SORTABLE_COLUMNS else None
        try:
            direction = SortDirection((order or "").strip().lower())
        except ValueError:
            direction = SortDirection.ASC
        return cls(column=column, direction=direction)

    def order_by(self) -> list[ColumnElement[Any]]:
        if self.column is None:
            return [Listing.id.asc()]

        column = SORTABLE_COLUMNS[self.column]
        primary = column.desc() if self.direction == SortDirection.DESC else column.asc()
        if self.column == "id":
            return [primary]
        # id breaks ties so equal prices/titles keep a stable page order
        return [primary, Listing.id.asc()]


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def parse(cls, page: Any = None, limit: Any = None) -> "Pagination":
        # No practical upper bound on page_size; a huge limit returns every
        # matching row. Both values are capped so LIMIT and OFFSET fit in an
        # SQL integer.
        page_size = min(_parse_positive_int(limit, DEFAULT_PAGE_SIZE), MAX_SQL_INTEGER)
        page = min(_parse_positive_int(page, DEFAULT_PAGE), MAX_SQL_INTEGER // page_size + 1)
        return cls(page=page, page_size=page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.page_size)


@dataclass
class ListingPage:
    """One page of search results plus totals for the whole filtered set."""

    items: list[Listing]
    total_results: int
    total_pages: int
    current_page: int
    limit: int


class ListingRepository:
    """CRUD and search for listings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, statement, action: str):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action}: {e}")
            raise StoreError() from e

    async def count(self, filters: ListingFilters) -> int:
        """Count all rows matching the filters."""
        statement = select(func.count()).select_from(Listing).where(*filters.predicates())
        result = await self._execute(statement, "count listings")
        return result.scalar_one()

    async def find(
        self,
        filters: ListingFilters,
        sort: ListingSort | None = None,
        pagination: Pagination | None = None,
    ) -> list[Listing]:
        """Return matching listings in order. Without pagination every row is returned."""
        sort = sort or ListingSort()
        statement = select(Listing).where(*filters.predicates()).order_by(*sort.order_by())
        if pagination is not None:
            statement = statement.limit(pagination.page_size).offset(pagination.offset)
        result = await self._execute(statement, "list listings")
        return list(result.scalars().all())

    async def search(
        self,
        filters: ListingFilters,
        sort: ListingSort,
        pagination: Pagination,
    ) -> ListingPage:
        """Return one page of results with totals from a count over the same filters."""
        total = await self.count(filters)
        items = await self.find(filters, sort, pagination)
        return ListingPage(
            items=items,
            total_results=total,
            total_pages=pagination.total_pages(total),
            current_page=pagination.page,
            limit=pagination.page_size,
        )

    async def get_by_id(self, listing_id: int) -> Listing | None:
        if not -MAX_SQL_INTEGER - 1 <= listing_id <= MAX_SQL_INTEGER:
            # cannot be stored, so no such row exists
            return None
        try:
            return await self.db.get(Listing, listing_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load listing {listing_id}: {e}")
            raise StoreError() from e

    async def create(
        self,
        title: str | None,
        description: str | None,
        location: str | None,
        price: Any,
        owner_id: int,
        image_url: str | None = None,
    ) -> int:
        """Insert a listing owned by ``owner_id`` and return its id."""
        required = {"title": title, "location": location, "price": price}
        missing = [field for field, value in required.items() if _is_blank(value)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        price_value = _parse_price(price, "price")
        if price_value < 0:
            raise ValidationError("price must not be negative")

        listing = Listing(
            title=title,
            description=description or None,
            location=location,
            price=price_value,
            owner_id=owner_id,
            image=image_url,
        )
        self.db.add(listing)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # owner_id is the only constrained column left unchecked above
            await self.db.rollback()
            raise ValidationError("Listing owner does not exist") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create listing: {e}")
            raise StoreError() from e

        logger.info(f"User {owner_id} created listing {listing.id}")
        return listing.id

    async def delete_by_id(self, listing_id: int, requesting_user_id: int) -> None:
        """Delete a listing on behalf of its owner."""
        listing = await self.get_by_id(listing_id)
        if listing is None:
            raise NotFoundError("Listing not found")
        if listing.owner_id != requesting_user_id:
            raise ForbiddenError("Only the owner can delete this listing")

        statement = delete(Listing).where(
            Listing.id == listing_id,
            Listing.owner_id == requesting_user_id,
        )
        result = await self._execute(statement, f"delete listing {listing_id}")
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to commit delete of listing {listing_id}: {e}")
            raise StoreError() from e

        if result.rowcount == 0:
            # removed by someone else between the ownership read and the delete
            raise NotFoundError("Listing not found")
        logger.info(f"User {requesting_user_id} deleted listing {listing_id}")
