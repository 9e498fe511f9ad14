"""HTTP handler for /api/trips/{tripId}/members, its items and the budget-cap route."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.member import AddMemberRequest, BudgetCapRequest, UpdateMemberRequest
from tripsync.services import members


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")

    if request.path.rstrip("/").endswith("/members/budget-cap"):
        if request.method != "PATCH":
            return method_not_allowed(request)
        return 200, {"member": members.set_budget_cap(ctx, trip_id, parse_body(request, BudgetCapRequest))}

    member_id = request.path_params.get("memberId")
    if member_id is None:
        if request.method == "GET":
            roster, invites = members.list_members(ctx, trip_id)
            return 200, {"members": roster, "pending_invites": invites}
        if request.method == "POST":
            kind, record = members.add_member(ctx, trip_id, parse_body(request, AddMemberRequest))
            return 201, {kind: record, "type": kind}
        return method_not_allowed(request)

    if request.method == "PATCH":
        return 200, {"member": members.update_member(ctx, trip_id, member_id, parse_body(request, UpdateMemberRequest))}
    if request.method == "DELETE":
        members.remove_member(ctx, trip_id, member_id)
        return 200, {"success": True}
    return method_not_allowed(request)
