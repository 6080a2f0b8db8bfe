from decimal import Decimal, InvalidOperation
from flask import request


def parse_json(required_fields=None):
    data = request.get_json(force=True, silent=True) or {}

    if required_fields:
        missing = [f for f in required_fields if f not in data or not data[f]]
        if missing:
            return None, {"message": f"Missing required fields: {', '.join(missing)}"}, 400

    return data, None, None


def format_currency(value, currency="USD"):
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not an amount: {value}")
    if not amount.is_finite():
        raise ValueError(f"Not an amount: {value}")
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{amount:,.2f}"
