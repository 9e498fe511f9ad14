"""HTTP handler for /api/trips/{tripId}/budget and /api/trips/{tripId}/budget/{categoryId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.budget import CreateBudgetCategoryRequest, UpdateBudgetCategoryRequest
from tripsync.services import budget


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    category_id = request.path_params.get("categoryId")

    if category_id is None:
        if request.method == "GET":
            return 200, {"categories": budget.list_categories(ctx, trip_id)}
        if request.method == "POST":
            data = parse_body(request, CreateBudgetCategoryRequest)
            return 201, {"category": budget.create_category(ctx, trip_id, data)}
        return method_not_allowed(request)

    if request.method == "PATCH":
        data = parse_body(request, UpdateBudgetCategoryRequest)
        return 200, {"category": budget.update_category(ctx, trip_id, category_id, data)}
    if request.method == "DELETE":
        budget.delete_category(ctx, trip_id, category_id)
        return 200, {"success": True}
    return method_not_allowed(request)
