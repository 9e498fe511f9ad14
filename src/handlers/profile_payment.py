"""HTTP handler for /api/profile/payment."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.profile import PaymentProfile
from tripsync.services import profile


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    if request.method == "GET":
        return 200, {"profile": profile.get_payment_profile(ctx)}
    if request.method == "POST":
        return 200, {"profile": profile.update_payment_profile(ctx, parse_body(request, PaymentProfile))}
    return method_not_allowed(request)
