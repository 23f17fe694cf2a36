from rest_framework import status
from rest_framework.response import Response


class EnvelopeMixin:
    """
    ViewSet actions answering in the {"success", "message", "data"} envelope.
    PUT behaves like PATCH: only the fields sent are changed.
    """
    item_label = "Item"

    def envelope(self, data, message=None, status_code=status.HTTP_200_OK):
        payload = {"success": True}
        if message:
            payload["message"] = message
        payload["data"] = data
        return Response(payload, status=status_code)

    def retrieve(self, request, *args, **kwargs):
        return self.envelope(self.get_serializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)

        return self.envelope(
            serializer.data,
            f"{self.item_label} created successfully",
            status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        kwargs.pop("partial", None)
        serializer = self.get_serializer(
            self.get_object(), data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        return self.envelope(
            serializer.data, f"{self.item_label} updated successfully"
        )

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        data = self.get_serializer(instance).data
        self.perform_destroy(instance)

        return self.envelope(data, f"{self.item_label} deleted successfully")
