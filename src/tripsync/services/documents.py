"""Shared trip documents: links to bookings, tickets and confirmations."""

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.stay import TripDocument
from tripsync.errors import NotFoundError
from tripsync.models.stay import CreateDocumentRequest, DocumentRecord
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member, require_owner


def list_documents(ctx: RequestContext, trip_id: str) -> list[DocumentRecord]:
    """Newest first."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        rows = session.scalars(
            select(TripDocument).where(TripDocument.trip_id == trip_id).order_by(TripDocument.created_at.desc())
        ).all()
        return [DocumentRecord.from_row(row) for row in rows]


def create_document(ctx: RequestContext, trip_id: str, data: CreateDocumentRequest) -> DocumentRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        document = TripDocument(trip_id=trip_id, created_by=user.user_id, **data.model_dump())
        session.add(document)
        session.flush()
        record = DocumentRecord.from_row(document)
        event = change("trip_documents", ChangeKind.INSERT, document)

    ctx.publish(event)
    return record


def delete_document(ctx: RequestContext, trip_id: str, document_id: str) -> None:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        document = session.scalar(
            select(TripDocument).where(TripDocument.id == document_id, TripDocument.trip_id == trip_id)
        )
        if document is None:
            raise NotFoundError("Document not found")
        require_owner(document.created_by, user, "Can only delete your own documents")
        event = change("trip_documents", ChangeKind.DELETE, document)
        session.delete(document)

    ctx.publish(event)
