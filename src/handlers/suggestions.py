"""HTTP handler for /api/trips/{tripId}/suggestions and /api/trips/{tripId}/suggestions/{suggestionId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.suggestion import CreateSuggestionRequest, EditSuggestionRequest, UpdateSuggestionStatusRequest
from tripsync.services import suggestions


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    suggestion_id = request.path_params.get("suggestionId")

    if suggestion_id is None:
        if request.method == "GET":
            return 200, {"suggestions": suggestions.list_suggestions(ctx, trip_id)}
        if request.method == "POST":
            data = parse_body(request, CreateSuggestionRequest)
            return 201, {"suggestion": suggestions.create_suggestion(ctx, trip_id, data)}
        return method_not_allowed(request)

    if request.method == "PATCH":
        # A body that is exactly {"status": ...} is a review; anything else is an edit by the author
        if set(request.json()) == {"status"}:
            review = parse_body(request, UpdateSuggestionStatusRequest)
            return 200, {"suggestion": suggestions.review_suggestion(ctx, trip_id, suggestion_id, review)}
        edit = parse_body(request, EditSuggestionRequest)
        return 200, {"suggestion": suggestions.edit_suggestion(ctx, trip_id, suggestion_id, edit)}
    if request.method == "DELETE":
        suggestions.delete_suggestion(ctx, trip_id, suggestion_id)
        return 200, {"success": True}
    return method_not_allowed(request)
