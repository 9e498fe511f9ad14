"""HTTP handler for GET /api/invite/{inviteCode}. Public."""

from tripsync.http import ApiRequest, Response, method_not_allowed, public_handler
from tripsync.services import invites


@public_handler
def handler(request: ApiRequest) -> Response:
    if request.method != "GET":
        return method_not_allowed(request)
    return 200, {"trip": invites.get_invite_trip(request.path_params.get("inviteCode", ""))}
