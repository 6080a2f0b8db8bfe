from flask import Blueprint

confirmation_bp = Blueprint('confirmation_bp', __name__)


from .confirmation import *
