"""HTTP handler for /api/trips/{tripId}/announcements and /api/trips/{tripId}/announcements/{announcementId}."""

from tripsync.context import RequestContext
from tripsync.http import ApiRequest, Response, api_handler, method_not_allowed, parse_body
from tripsync.models.announcement import CreateAnnouncementRequest, PinAnnouncementRequest
from tripsync.services import announcements


@api_handler
def handler(ctx: RequestContext, request: ApiRequest) -> Response:
    trip_id = request.param("tripId")
    announcement_id = request.path_params.get("announcementId")

    if announcement_id is None:
        if request.method == "GET":
            return 200, {"announcements": announcements.list_announcements(ctx, trip_id)}
        if request.method == "POST":
            data = parse_body(request, CreateAnnouncementRequest)
            return 201, {"announcement": announcements.create_announcement(ctx, trip_id, data)}
        return method_not_allowed(request)

    if request.method == "PATCH":
        data = parse_body(request, PinAnnouncementRequest)
        return 200, {"announcement": announcements.set_pinned(ctx, trip_id, announcement_id, data)}
    if request.method == "DELETE":
        announcements.delete_announcement(ctx, trip_id, announcement_id)
        return 200, {"success": True}
    return method_not_allowed(request)
