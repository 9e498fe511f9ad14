"""HTTP handler for POST /api/trips/{tripId}/join."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.trip import JoinTripRequest
from tripsync.services import trips


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    if request.method != "POST":
        return method_not_allowed(request)
    created = trips.join_trip(ctx, request.param("tripId"), parse_body(request, JoinTripRequest))
    if created:
        return 201, {"message": "Successfully joined trip"}
    return 200, {"message": "RSVP updated successfully"}
