from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """
    ?page=<n>&limit=<m> pagination wrapped in the API envelope.
    """
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        total = paginator.count
        limit = self.get_page_size(self.request)

        return Response({
            "success": True,
            "data": data,
            "pagination": {
                "page": self.page.number,
                "limit": limit,
                "total": total,
                "totalPages": (total + limit - 1) // limit,
            },
        })
