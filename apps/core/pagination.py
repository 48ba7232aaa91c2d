"""
Pagination helpers for list endpoints.
"""

import math


def calculate_pagination(page, limit, total):
    """
    Calculate page metadata.

    Args:
        page: Current page (1-based)
        limit: Items per page
        total: Total number of matching items

    Returns:
        dict with currentPage, itemsPerPage, totalItems, totalPages,
        hasNextPage, hasPrevPage, nextPage and prevPage.
        totalPages is 0 when there are no items; nextPage/prevPage
        are None when there is no such page.
    """
    total_pages = math.ceil(total / limit) if total else 0
    has_next_page = page < total_pages
    has_prev_page = page > 1

    return {
        'currentPage': page,
        'itemsPerPage': limit,
        'totalItems': total,
        'totalPages': total_pages,
        'hasNextPage': has_next_page,
        'hasPrevPage': has_prev_page,
        'nextPage': page + 1 if has_next_page else None,
        'prevPage': page - 1 if has_prev_page else None,
    }


def paginate(list_query):
    """
    Run a ListQuery against the database.

    Issues one COUNT and one sliced SELECT. Pages past the end return
    no items rather than an error.

    Returns:
        dict with items, totalCount, page, limit and pageCount
    """
    queryset = list_query.queryset
    total = queryset.count()
    skip = list_query.skip
    items = list(queryset.order_by(*list_query.ordering)[skip:skip + list_query.limit])
    meta = calculate_pagination(list_query.page, list_query.limit, total)

    return {
        'items': items,
        'totalCount': total,
        'page': list_query.page,
        'limit': list_query.limit,
        'pageCount': meta['totalPages'],
    }
