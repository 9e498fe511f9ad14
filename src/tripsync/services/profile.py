"""The caller's own payment handles."""

from sqlalchemy import select

from tripsync.context import RequestContext
from tripsync.db.schemas.profile import Profile
from tripsync.errors import NotFoundError
from tripsync.models.profile import PaymentProfile
from tripsync.realtime.feed import ChangeKind
from tripsync.services.changes import change
from tripsync.services.guard import require_identity


def get_payment_profile(ctx: RequestContext) -> PaymentProfile:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        profile = session.scalar(select(Profile).where(Profile.id == user.user_id))
        if profile is None:
            return PaymentProfile()
        return PaymentProfile.from_row(profile)


def update_payment_profile(ctx: RequestContext, data: PaymentProfile) -> PaymentProfile:
    user = require_identity(ctx)
    with ctx.store.session() as session:
        profile = session.scalar(select(Profile).where(Profile.id == user.user_id))
        if profile is None:
            raise NotFoundError("Profile not found")
        profile.venmo_handle = data.venmo_handle
        profile.zelle_email = data.zelle_email
        profile.cashapp_handle = data.cashapp_handle
        session.flush()
        result = PaymentProfile.from_row(profile)
        event = change("profiles", ChangeKind.UPDATE, profile)

    ctx.publish(event)
    return result
