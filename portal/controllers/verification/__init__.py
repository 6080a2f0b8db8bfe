from flask import Blueprint

verification_bp = Blueprint('verification_bp', __name__)


from .verify_identity import *
