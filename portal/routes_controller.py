from portal.controllers.auth import auth_bp
from portal.controllers.verification import verification_bp
from portal.controllers.dashboard import dashboard_bp
from portal.controllers.payment import payment_bp
from portal.controllers.confirmation import confirmation_bp

def register_routes(app):
    app.register_blueprint(auth_bp)
    app.register_blueprint(verification_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(payment_bp)
    app.register_blueprint(confirmation_bp)
