"""HTTP handler for /api/trips/{tripId}/itinerary and /api/trips/{tripId}/itinerary/{itemId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.itinerary import CreateItineraryItemRequest, UpdateItineraryItemRequest
from tripsync.services import itinerary


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    item_id = request.path_params.get("itemId")

    if item_id is None:
        if request.method == "GET":
            return 200, {"items": itinerary.list_items(ctx, trip_id)}
        if request.method == "POST":
            return 201, {"item": itinerary.create_item(ctx, trip_id, parse_body(request, CreateItineraryItemRequest))}
        return method_not_allowed(request)

    if request.method == "PATCH":
        data = parse_body(request, UpdateItineraryItemRequest)
        return 200, {"item": itinerary.update_item(ctx, trip_id, item_id, data)}
    if request.method == "DELETE":
        itinerary.delete_item(ctx, trip_id, item_id)
        return 200, {"success": True}
    return method_not_allowed(request)
