import logging
from functools import wraps
from flask import g, redirect
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import SQLAlchemyError
from portal.extension import db
from portal.models import User, UserProfile, Verification
from portal.utils.session_state import JourneyState, resolve_state, redirect_for

logger = logging.getLogger(__name__)


def load_session_user():
    """
    Return the User behind the request's session token, or None.
    A missing, expired, revoked or malformed token all count as no session.
    """
    try:
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
    except (JWTExtendedException, PyJWTError) as e:
        logger.info("Rejected session token: %s", e)
        return None

    if identity is None:
        return None
    try:
        return db.session.get(User, int(identity))
    except (TypeError, ValueError):
        return None


def find_verification(user_id):
    return Verification.query.filter_by(user_id=user_id, verified=True).first()


def verified_required(fn):
    """
    Gatekeeper for protected resources.
    Unauthenticated visitors go to sign-in, unverified ones to the verification form.
    Attaches g.current_user, g.verification and (best-effort) g.profile.
    """
    @wraps(fn)
    def decorator(*args, **kwargs):
        user = load_session_user()

        verification = None
        if user:
            try:
                verification = find_verification(user.id)
            except SQLAlchemyError as e:
                # a failed lookup is treated exactly like "not verified"
                logger.warning("Verification lookup failed for user %s: %s", user.id, e)
                db.session.rollback()

        state = resolve_state(authenticated=user is not None, verified=verification is not None)
        target = redirect_for(state)
        if target:
            return redirect(target)

        g.current_user = user
        g.verification = verification
        try:
            g.profile = db.session.get(UserProfile, user.id)
        except SQLAlchemyError as e:
            logger.warning("Profile lookup failed for user %s: %s", user.id, e)
            db.session.rollback()
            g.profile = None

        return fn(*args, **kwargs)
    return decorator


def session_required(fn):
    """Authenticated but not necessarily verified; used by the verification form."""
    @wraps(fn)
    def decorator(*args, **kwargs):
        user = load_session_user()
        if user is None:
            return redirect(redirect_for(JourneyState.UNAUTHENTICATED))
        g.current_user = user
        return fn(*args, **kwargs)
    return decorator
