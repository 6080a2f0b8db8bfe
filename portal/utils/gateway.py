import logging
from flask import request, redirect, current_app
from portal.utils.decorators import load_session_user
from portal.utils.session_state import SIGN_IN_PATH, DASHBOARD_PATH

logger = logging.getLogger(__name__)


def _matches(path, prefixes):
    return any(path == p or path.startswith(p.rstrip("/") + "/") for p in prefixes)


def check_route_access():
    """
    Route-level access control, run before every request.
    Protected prefixes need a session; auth pages bounce visitors who already have one.
    """
    if request.method == "OPTIONS":
        return None

    path = request.path
    config = current_app.config
    protected = _matches(path, config["PROTECTED_PREFIXES"])
    auth_page = _matches(path, config["AUTH_PREFIXES"]) and not _matches(path, config["AUTH_PASSTHROUGH"])

    if not protected and not auth_page:
        return None

    has_session = load_session_user() is not None

    if auth_page and has_session:
        return redirect(DASHBOARD_PATH)

    if protected and not has_session:
        logger.debug(f"No session for {path}, redirecting to sign-in")
        return redirect(SIGN_IN_PATH)

    return None


def init_gateway(app):
    app.before_request(check_route_access)
