"""
Pagination Module - page/limit parsing and the pagination block
"""

import math
import sys


def parse_positive_int(value, default):
    """Parse a query value as an int >= 1, falling back to default"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def parse_page_params(args, default_limit=10, max_limit=100):
    """Return (page, limit) from request args"""
    limit = min(parse_positive_int(args.get('limit'), default_limit), max_limit)
    # Offset must fit a 64-bit database integer
    page = min(parse_positive_int(args.get('page'), 1), sys.maxsize // max_limit)
    return page, limit


def get_offset(page, limit):
    return (page - 1) * limit


def build_pagination(page, limit, total_items):
    total_pages = math.ceil(total_items / limit) if limit else 0
    return {
        'currentPage': page,
        'totalPages': total_pages,
        'totalItems': total_items,
        'itemsPerPage': limit,
        'hasNextPage': page < total_pages,
        'hasPrevPage': page > 1
    }


__all__ = ['parse_positive_int', 'parse_page_params', 'get_offset', 'build_pagination']
