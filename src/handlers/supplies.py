"""HTTP handler for /api/trips/{tripId}/supplies and /api/trips/{tripId}/supplies/{supplyId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.supply import CreateSupplyRequest, UpdateSupplyRequest
from tripsync.services import supplies


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    supply_id = request.path_params.get("supplyId")

    if supply_id is None:
        if request.method == "GET":
            return 200, {"supplies": supplies.list_supplies(ctx, trip_id)}
        if request.method == "POST":
            return 201, {"supply": supplies.create_supply(ctx, trip_id, parse_body(request, CreateSupplyRequest))}
        return method_not_allowed(request)

    if request.method == "PATCH":
        data = parse_body(request, UpdateSupplyRequest)
        return 200, {"supply": supplies.update_supply(ctx, trip_id, supply_id, data)}
    if request.method == "DELETE":
        supplies.delete_supply(ctx, trip_id, supply_id)
        return 200, {"success": True}
    return method_not_allowed(request)
