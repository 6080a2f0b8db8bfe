from flask import Blueprint

dashboard_bp = Blueprint('dashboard_bp', __name__)


from .debtor_dashboard import *
from .payment_history import *
