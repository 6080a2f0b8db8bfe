from datetime import date
from flask import request
from flask_restful import Resource, Api
from portal.utils.helper import format_currency
from . import confirmation_bp

api = Api(confirmation_bp)

MISSING = "N/A"


def confirmation_details(amount, transaction_id, today=None):
    """Purely presentational; values come straight from the query string."""
    if amount:
        try:
            amount = format_currency(amount)
        except (TypeError, ValueError):
            pass
    return {
        "amount": amount or MISSING,
        "transaction_id": transaction_id or MISSING,
        "date": (today or date.today()).isoformat(),
    }


class Confirmation(Resource):
    def get(self):
        return confirmation_details(
            request.args.get("amount"),
            request.args.get("transaction"),
        ), 200


api.add_resource(Confirmation, "/confirmation")
