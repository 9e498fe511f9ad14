"""HTTP handler for /api/trips/{tripId}/availability and /api/trips/{tripId}/availability/{availabilityId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.availability import CreateAvailabilityRequest
from tripsync.services import availability


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    availability_id = request.path_params.get("availabilityId")

    if availability_id is None:
        if request.method == "GET":
            return 200, {"availability": availability.list_availability(ctx, trip_id)}
        if request.method == "POST":
            data = parse_body(request, CreateAvailabilityRequest)
            return 201, {"availability": availability.add_availability(ctx, trip_id, data)}
        return method_not_allowed(request)

    if request.method == "DELETE":
        availability.delete_availability(ctx, trip_id, availability_id)
        return 200, {"success": True}
    return method_not_allowed(request)
