"""HTTP handler for GET /api/proposal/{inviteCode}. Public."""

from tripsync.http import ApiRequest, Response, method_not_allowed, public_handler
from tripsync.services import invites


@public_handler
def handler(request: ApiRequest) -> Response:
    if request.method != "GET":
        return method_not_allowed(request)
    return 200, invites.get_proposal(request.path_params.get("inviteCode", ""))
