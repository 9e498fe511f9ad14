"""HTTP handler for PATCH /api/trips/{tripId}/proposal."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.trip import ProposalToggleRequest
from tripsync.services import trips


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    if request.method != "PATCH":
        return method_not_allowed(request)
    data = parse_body(request, ProposalToggleRequest)
    return 200, {"trip": trips.set_proposal_enabled(ctx, request.param("tripId"), data)}
