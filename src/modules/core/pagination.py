"""Pagination shared by every list endpoint."""

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination with an explicit ``pagination`` block.

    ``?page=`` selects the page and ``?limit=`` overrides the page size
    (capped at ``max_page_size``).
    """

    page_size = 30
    page_size_query_param = "limit"
    max_page_size = 200

    def get_paginated_response(self, data) -> Response:
        page = self.page
        return Response(
            {
                "count": page.paginator.count,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "pagination": {
                    "current_page": page.number,
                    "total_pages": page.paginator.num_pages,
                    "total_count": page.paginator.count,
                    "limit": page.paginator.per_page,
                    "has_next_page": page.has_next(),
                    "has_prev_page": page.has_previous(),
                },
                "results": data,
            }
        )
