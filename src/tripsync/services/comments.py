"""Comments on itinerary items."""

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.itinerary import Comment, ItineraryItem
from tripsync.errors import NotFoundError
from tripsync.models.itinerary import CommentRecord, CreateCommentRequest
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_owner


def list_comments(ctx: RequestContext, trip_id: str, itinerary_item_id: str | None = None) -> list[CommentRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to view this trip")
        query = select(Comment).where(Comment.trip_id == trip_id)
        if itinerary_item_id:
            query = query.where(Comment.itinerary_item_id == itinerary_item_id)
        rows = session.scalars(query.order_by(Comment.created_at)).all()
        return [CommentRecord.from_row(row) for row in rows]


def create_comment(ctx: RequestContext, trip_id: str, data: CreateCommentRequest) -> CommentRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Not authorized to comment on this trip")
        item = session.scalar(
            select(ItineraryItem).where(ItineraryItem.id == data.itinerary_item_id, ItineraryItem.trip_id == trip_id)
        )
        if item is None:
            raise NotFoundError("Itinerary item not found")

        comment = Comment(trip_id=trip_id, itinerary_item_id=item.id, user_id=user.user_id, text=data.text)
        session.add(comment)
        session.flush()
        record = CommentRecord.from_row(comment)
        event = change("comments", ChangeKind.INSERT, comment)

    ctx.publish(event)
    return record


def delete_comment(ctx: RequestContext, trip_id: str, comment_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user)
        comment = session.scalar(select(Comment).where(Comment.id == comment_id, Comment.trip_id == trip_id))
        if comment is None:
            raise NotFoundError("Comment not found")
        require_owner(comment.user_id, user, "You can only delete your own comments")
        event = change("comments", ChangeKind.DELETE, comment)
        session.delete(comment)

    ctx.publish(event)
