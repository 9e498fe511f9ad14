"""HTTP handler for /api/trips/{tripId}/comments and /api/trips/{tripId}/comments/{commentId}."""

from tripsync.context import RequestContext
from tripsync.errors import ErrorCode, ValidationError
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.itinerary import CreateCommentRequest
from tripsync.services import comments


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")

    if request.method == "GET":
        item_id = request.query.get("itinerary_item_id")
        return 200, {"comments": comments.list_comments(ctx, trip_id, item_id)}
    if request.method == "POST":
        return 201, {"comment": comments.create_comment(ctx, trip_id, parse_body(request, CreateCommentRequest))}
    if request.method == "DELETE":
        comment_id = request.path_params.get("commentId") or request.query.get("comment_id")
        if not comment_id:
            raise ValidationError("Comment ID is required", code=ErrorCode.INVALID_REQUEST)
        comments.delete_comment(ctx, trip_id, comment_id)
        return 200, {"success": True}
    return method_not_allowed(request)
