"""Search, sort and paging for the list routes"""

from typing import Optional

from sqlalchemy import or_

from ..schemas import FilterOptions


def apply_list_options(stmt, opts: FilterOptions, search_columns: list, sort_columns: dict, default_order: list):
    """
    Narrow a select by the list query string.

    Unknown sort keys fall back to the default order rather than erroring, so
    a stale bookmark still renders a page.
    """
    if opts.search:
        like = f"%{opts.search.strip()}%"
        stmt = stmt.where(or_(*[column.ilike(like) for column in search_columns]))

    sort_column: Optional[object] = sort_columns.get(opts.key) if opts.key else None
    if sort_column is not None:
        ordered = sort_column.desc() if opts.dir == "desc" else sort_column.asc()
        stmt = stmt.order_by(ordered, *default_order)
    else:
        stmt = stmt.order_by(*default_order)

    return stmt.limit(opts.limit).offset(opts.offset)
