from flask import request, g
from flask_restful import Resource, Api
from marshmallow import ValidationError
from portal.schemas.verification_schema import VerificationSchema, VerifyIdentitySchema
from portal.service.verification_service import verify_identity
from portal.utils.decorators import session_required, find_verification
from portal.utils.errors import PortalError
from portal.utils.session_state import DASHBOARD_PATH
from . import verification_bp

api = Api(verification_bp)

verification_schema = VerificationSchema()
verify_identity_schema = VerifyIdentitySchema()


class VerifyIdentity(Resource):

    @session_required
    def get(self):
        verification = find_verification(g.current_user.id)
        if verification:
            return {
                "verified": True,
                "verification": verification_schema.dump(verification),
                "redirect": DASHBOARD_PATH,
            }, 200
        return {"verified": False}, 200

    @session_required
    def post(self):
        try:
            data = verify_identity_schema.load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return {"errors": err.messages}, 400

        try:
            verification = verify_identity(
                g.current_user,
                birthday=data["birthday"],
                loan_number=data.get("loan_number"),
                phone=data.get("phone"),
                email=data.get("email"),
            )
        except PortalError as e:
            return e.to_response()

        return {
            "message": "Identity verified",
            "verification": verification_schema.dump(verification),
            "redirect": DASHBOARD_PATH,
        }, 200


api.add_resource(VerifyIdentity, "/verify")
