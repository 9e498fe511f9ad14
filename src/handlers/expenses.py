"""HTTP handler for /api/trips/{tripId}/expenses, its items and balances."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.expense import CreateExpenseRequest
from tripsync.services import expenses


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")

    if request.path.rstrip("/").endswith("/expenses/balances"):
        if request.method != "GET":
            return method_not_allowed(request)
        return 200, expenses.get_balances(ctx, trip_id)

    expense_id = request.path_params.get("expenseId")
    if expense_id is None:
        if request.method == "GET":
            return 200, {"expenses": expenses.list_expenses(ctx, trip_id)}
        if request.method == "POST":
            return 201, {"expense": expenses.create_expense(ctx, trip_id, parse_body(request, CreateExpenseRequest))}
        return method_not_allowed(request)

    if request.method == "DELETE":
        expenses.delete_expense(ctx, trip_id, expense_id)
        return 200, {"success": True}
    return method_not_allowed(request)
