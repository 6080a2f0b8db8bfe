import logging
from datetime import datetime
from flask import jsonify, make_response
from flask_jwt_extended import create_access_token, set_access_cookies
from portal.extension import db
from portal.models import UserProfile
from portal.schemas.user_schema import UserSchema
from portal.utils.session_state import VERIFY_PATH, DASHBOARD_PATH

logger = logging.getLogger(__name__)
user_schema = UserSchema()


def issue_session(user, status=200, message=None):
    """
    Sign the user in: stamp the sign-in time, mint a token and hand it back
    both in the body and as a cookie.
    """
    now = datetime.utcnow()
    user.last_sign_in_at = now

    profile = db.session.get(UserProfile, user.id)
    if profile is None:
        profile = UserProfile(id=user.id, email=user.email)
        db.session.add(profile)
    profile.last_sign_in = now
    db.session.commit()

    access_token = create_access_token(identity=str(user.id))
    logger.info(f"Session issued for user {user.id} via {user.auth_provider}")

    payload = {
        "access_token": access_token,
        "user": user_schema.dump(user),
        # verified users skip straight to the dashboard
        "redirect": DASHBOARD_PATH if user.is_verified else VERIFY_PATH,
    }
    if message:
        payload["message"] = message

    response = make_response(jsonify(payload), status)
    set_access_cookies(response, access_token)
    return response
