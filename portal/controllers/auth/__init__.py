from flask import Blueprint

auth_bp = Blueprint('auth_bp', __name__)


from .sign_up import *
from .login import *
from .logout import *
from .google import *
from .session import *
