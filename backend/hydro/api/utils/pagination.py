"""
Pagination and filter helpers
"""
from typing import TypeVar, Any, Optional, Tuple, List
from sqlalchemy.orm import Query
from sqlalchemy import or_

T = TypeVar('T')


def paginate_query(
    query: Query,
    page: int = 1,
    page_size: int = 20,
    order_by: Any = None
) -> Tuple[List[T], int]:
    """
    Paginate a query and return the items plus the total count.

    Args:
        query: SQLAlchemy query
        page: page number (1-indexed)
        page_size: page size
        order_by: column or tuple of columns

    Usage:
        items, total = paginate_query(query, page, page_size, Discharge.number)
        items, total = paginate_query(query, page, page_size, (Discharge.year.desc(), Discharge.number))
    """
    total = query.count()

    if order_by is not None:
        if isinstance(order_by, tuple):
            query = query.order_by(*order_by)
        else:
            query = query.order_by(order_by)

    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return items, total


def apply_search_filter(
    query: Query,
    search_term: Optional[str],
    *fields
) -> Query:
    """
    Case insensitive LIKE search over several columns.

    Usage:
        query = apply_search_filter(query, search, DischargeUser.company_name, DischargeUser.code)
    """
    if not search_term or not fields:
        return query

    conditions = [field.ilike(f"%{search_term}%") for field in fields]
    return query.filter(or_(*conditions))
