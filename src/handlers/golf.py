"""HTTP handler for /api/trips/{tripId}/golf/tee-times and /api/trips/{tripId}/golf/scores."""

from tripsync.context import RequestContext
from tripsync.errors import NotFoundError
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.golf import CreateTeeTimeRequest, RecordScoreRequest
from tripsync.services import golf


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    path = request.path.rstrip("/")

    if path.endswith("/golf/tee-times"):
        if request.method == "GET":
            return 200, {"tee_times": golf.list_tee_times(ctx, trip_id)}
        if request.method == "POST":
            return 201, {"tee_time": golf.create_tee_time(ctx, trip_id, parse_body(request, CreateTeeTimeRequest))}
        return method_not_allowed(request)

    if path.endswith("/golf/scores"):
        if request.method == "GET":
            return 200, {"scores": golf.list_scores(ctx, trip_id)}
        if request.method == "POST":
            return 201, {"score": golf.record_score(ctx, trip_id, parse_body(request, RecordScoreRequest))}
        return method_not_allowed(request)

    raise NotFoundError("Route not found")
