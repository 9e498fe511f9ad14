"""HTTP handler for /api/trips and /api/trips/{tripId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.trip import CreateTripRequest, UpdateTripRequest
from tripsync.services import trips


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.path_params.get("tripId")

    if trip_id is None:
        if request.method == "GET":
            return 200, {"trips": trips.list_trips(ctx)}
        if request.method == "POST":
            return 201, {"trip": trips.create_trip(ctx, parse_body(request, CreateTripRequest))}
        return method_not_allowed(request)

    if request.method == "GET":
        return 200, {"trip": trips.get_trip(ctx, trip_id)}
    if request.method == "PATCH":
        return 200, {"trip": trips.update_trip(ctx, trip_id, parse_body(request, UpdateTripRequest))}
    if request.method == "DELETE":
        trips.delete_trip(ctx, trip_id)
        return 200, {"success": True}
    return method_not_allowed(request)
