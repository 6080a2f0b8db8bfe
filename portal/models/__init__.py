from portal.extension import db
from portal.models.user import User, TokenBlocklist
from portal.models.user_profile import UserProfile
from portal.models.debtor import Debtor
from portal.models.debt import Debt
from portal.models.payment import Payment
from portal.models.verification import Verification

__all__ = [
    "db",
    "User",
    "TokenBlocklist",
    "UserProfile",
    "Debtor",
    "Debt",
    "Payment",
    "Verification",
]
