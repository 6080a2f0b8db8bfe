"""
Debtor journey through the portal as an explicit state machine.

Every decision about redirect vs. render goes through the pure functions here,
so they can be exercised without a request or a database.
"""
from enum import Enum


class JourneyState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    SIGNING_IN = "signing_in"
    AUTHENTICATED_UNVERIFIED = "authenticated_unverified"
    VERIFYING = "verifying"
    AUTHENTICATED_VERIFIED = "authenticated_verified"
    VIEWING = "viewing"
    PAYING_IN_PROGRESS = "paying_in_progress"
    PAID = "paid"
    PAYMENT_FAILED = "payment_failed"


class JourneyEvent(str, Enum):
    START_SIGN_IN = "start_sign_in"
    SIGN_IN_SUCCEEDED = "sign_in_succeeded"
    SIGN_IN_FAILED = "sign_in_failed"
    SUBMIT_VERIFICATION = "submit_verification"
    VERIFICATION_SUCCEEDED = "verification_succeeded"
    VERIFICATION_FAILED = "verification_failed"
    VIEW = "view"
    START_PAYMENT = "start_payment"
    PAYMENT_CAPTURED = "payment_captured"
    PAYMENT_ERRORED = "payment_errored"
    SIGN_OUT = "sign_out"


TERMINAL_STATES = frozenset({JourneyState.VIEWING, JourneyState.PAID, JourneyState.PAYMENT_FAILED})

SIGN_IN_PATH = "/auth/sign-in"
VERIFY_PATH = "/verify"
DASHBOARD_PATH = "/dashboard"

_TRANSITIONS = {
    (JourneyState.UNAUTHENTICATED, JourneyEvent.START_SIGN_IN): JourneyState.SIGNING_IN,
    (JourneyState.SIGNING_IN, JourneyEvent.SIGN_IN_SUCCEEDED): JourneyState.AUTHENTICATED_UNVERIFIED,
    (JourneyState.SIGNING_IN, JourneyEvent.SIGN_IN_FAILED): JourneyState.UNAUTHENTICATED,
    (JourneyState.AUTHENTICATED_UNVERIFIED, JourneyEvent.SUBMIT_VERIFICATION): JourneyState.VERIFYING,
    (JourneyState.VERIFYING, JourneyEvent.VERIFICATION_SUCCEEDED): JourneyState.AUTHENTICATED_VERIFIED,
    (JourneyState.VERIFYING, JourneyEvent.VERIFICATION_FAILED): JourneyState.AUTHENTICATED_UNVERIFIED,
    (JourneyState.AUTHENTICATED_VERIFIED, JourneyEvent.VIEW): JourneyState.VIEWING,
    (JourneyState.AUTHENTICATED_VERIFIED, JourneyEvent.START_PAYMENT): JourneyState.PAYING_IN_PROGRESS,
    (JourneyState.PAYING_IN_PROGRESS, JourneyEvent.PAYMENT_CAPTURED): JourneyState.PAID,
    (JourneyState.PAYING_IN_PROGRESS, JourneyEvent.PAYMENT_ERRORED): JourneyState.PAYMENT_FAILED,
}


class InvalidTransition(ValueError):
    def __init__(self, state, event):
        super().__init__(f"Cannot apply {event.value} in state {state.value}")
        self.state = state
        self.event = event


def resolve_state(authenticated, verified):
    """Map what the stores say about a session to where it sits in the journey."""
    if not authenticated:
        return JourneyState.UNAUTHENTICATED
    if not verified:
        return JourneyState.AUTHENTICATED_UNVERIFIED
    return JourneyState.AUTHENTICATED_VERIFIED


def transition(state, event):
    if event == JourneyEvent.SIGN_OUT:
        return JourneyState.UNAUTHENTICATED
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransition(state, event) from None


def redirect_for(state):
    """Where a protected view must send this state, or None to render."""
    if state in (JourneyState.UNAUTHENTICATED, JourneyState.SIGNING_IN):
        return SIGN_IN_PATH
    if state in (JourneyState.AUTHENTICATED_UNVERIFIED, JourneyState.VERIFYING):
        return VERIFY_PATH
    return None


def can_render_protected(state):
    return redirect_for(state) is None
