"""HTTP handler for /api/trips/{tripId}/documents and /api/trips/{tripId}/documents/{documentId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.stay import CreateDocumentRequest
from tripsync.services import documents


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    document_id = request.path_params.get("documentId")

    if document_id is None:
        if request.method == "GET":
            return 200, {"documents": documents.list_documents(ctx, trip_id)}
        if request.method == "POST":
            data = parse_body(request, CreateDocumentRequest)
            return 201, {"document": documents.create_document(ctx, trip_id, data)}
        return method_not_allowed(request)

    if request.method == "DELETE":
        documents.delete_document(ctx, trip_id, document_id)
        return 200, {"success": True}
    return method_not_allowed(request)
