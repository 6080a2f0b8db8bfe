import logging
from datetime import datetime, timedelta
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from portal.extension import db
from portal.models import Debtor, Verification, UserProfile
from portal.utils.errors import (
    IdentityNotMatched,
    EmailMismatch,
    VerificationThrottled,
    VerificationWriteError,
)

logger = logging.getLogger(__name__)

VERIFICATION_METHOD = "identity_verification"


def _attempt_window(user, now):
    """Return the number of failures that still count against the user."""
    window = timedelta(minutes=current_app.config["VERIFY_LOCKOUT_MINUTES"])
    if user.last_failed_verification_at and now - user.last_failed_verification_at < window:
        return user.failed_verification_attempts or 0
    return 0


def check_throttle(user, now=None):
    max_attempts = current_app.config["VERIFY_MAX_ATTEMPTS"]
    if not max_attempts:
        return
    now = now or datetime.utcnow()
    if _attempt_window(user, now) >= max_attempts:
        logger.warning(f"Verification throttled for user {user.id}")
        raise VerificationThrottled()


def _record_failure(user, now):
    user.failed_verification_attempts = _attempt_window(user, now) + 1
    user.last_failed_verification_at = now
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Could not record failed verification for user {user.id}: {e}")


def find_debtor(birthday, loan_number=None, phone=None):
    """Look up a debtor by (loan number, birthday) or (phone, birthday)."""
    query = Debtor.query.filter_by(birthday=birthday)
    if loan_number:
        query = query.filter_by(loan_number=str(loan_number).strip())
    elif phone:
        query = query.filter_by(phone=phone.strip())
    else:
        return None
    matches = query.limit(2).all()
    # an ambiguous natural key is not a match
    if len(matches) != 1:
        return None
    return matches[0]


def verify_identity(user, birthday, loan_number=None, phone=None, email=None):
    """
    Link the authenticated user to a debtor record.

    Raises IdentityNotMatched, EmailMismatch, VerificationThrottled or
    VerificationWriteError. On success the Verification and UserProfile rows are
    upserted in a single commit and the Verification is returned.
    """
    now = datetime.utcnow()
    check_throttle(user, now)

    debtor = find_debtor(birthday, loan_number=loan_number, phone=phone)
    if debtor is None:
        _record_failure(user, now)
        raise IdentityNotMatched()

    if email and (debtor.email or "") != email.strip():
        _record_failure(user, now)
        raise EmailMismatch()

    try:
        verification = Verification.query.filter_by(user_id=user.id).first()
        if verification is None:
            verification = Verification(user_id=user.id)
            db.session.add(verification)
        verification.debtor_id = debtor.id
        verification.verified = True
        verification.verification_date = now
        verification.verification_method = VERIFICATION_METHOD
        verification.updated_at = now

        profile = db.session.get(UserProfile, user.id)
        if profile is None:
            profile = UserProfile(id=user.id)
            db.session.add(profile)
        profile.email = user.email
        profile.full_name = debtor.full_name
        profile.updated_at = now

        user.failed_verification_attempts = 0
        user.last_failed_verification_at = None

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Verification write failed for user {user.id}: {e}")
        raise VerificationWriteError() from e

    logger.info(f"User {user.id} verified against debtor {debtor.id}")
    return verification
