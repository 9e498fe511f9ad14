"""Golf tee times and scores."""

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.golf import GolfScore, GolfTeeTime
from tripsync.errors import NotFoundError
from tripsync.models.golf import CreateTeeTimeRequest, RecordScoreRequest, ScoreRecord, TeeTimeRecord
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity, require_member


def list_tee_times(ctx: RequestContext, trip_id: str) -> list[TeeTimeRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        rows = session.scalars(
            select(GolfTeeTime).where(GolfTeeTime.trip_id == trip_id).order_by(GolfTeeTime.tee_time)
        ).all()
        return [TeeTimeRecord.from_row(row) for row in rows]


def create_tee_time(ctx: RequestContext, trip_id: str, data: CreateTeeTimeRequest) -> TeeTimeRecord:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        tee_time = GolfTeeTime(trip_id=trip_id, created_by=user.user_id, **data.model_dump())
        session.add(tee_time)
        session.flush()
        record = TeeTimeRecord.from_row(tee_time)
        event = change("golf_tee_times", ChangeKind.INSERT, tee_time)

    ctx.publish(event)
    return record


def list_scores(ctx: RequestContext, trip_id: str) -> list[ScoreRecord]:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        rows = session.scalars(
            select(GolfScore)
            .join(GolfTeeTime, GolfScore.tee_time_id == GolfTeeTime.id)
            .where(GolfTeeTime.trip_id == trip_id)
            .order_by(GolfTeeTime.tee_time, GolfScore.created_at)
        ).all()
        return [ScoreRecord.from_row(row) for row in rows]


def record_score(ctx: RequestContext, trip_id: str, data: RecordScoreRequest) -> ScoreRecord:
    """Record the caller's score for a tee time, replacing any earlier one."""
    user = require_identity(ctx)
    with ctx.store.session() as session:
        require_member(session, trip_id, user, "Forbidden")
        tee_time = session.scalar(
            select(GolfTeeTime).where(GolfTeeTime.id == data.tee_time_id, GolfTeeTime.trip_id == trip_id)
        )
        if tee_time is None:
            raise NotFoundError("Tee time not found")

        score = session.scalar(
            select(GolfScore).where(GolfScore.tee_time_id == tee_time.id, GolfScore.user_id == user.user_id)
        )
        kind = ChangeKind.UPDATE
        if score is None:
            score = GolfScore(tee_time_id=tee_time.id, user_id=user.user_id, score=data.score)
            session.add(score)
            kind = ChangeKind.INSERT
        score.score = data.score
        score.handicap = data.handicap
        session.flush()
        record = ScoreRecord.from_row(score)
        event = change("golf_scores", kind, score, trip_id=trip_id)

    ctx.publish(event)
    return record
