"""HTTP handler for /api/trips/{tripId}/accommodation."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.stay import AccommodationRequest
from tripsync.services import accommodation


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")

    if request.method == "GET":
        return 200, {"accommodation": accommodation.get_accommodation(ctx, trip_id)}
    if request.method in ("POST", "PUT"):
        data = parse_body(request, AccommodationRequest)
        return 200, {"accommodation": accommodation.save_accommodation(ctx, trip_id, data)}
    return method_not_allowed(request)
