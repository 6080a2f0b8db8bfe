from flask import g, make_response
from flask_restful import Resource, Api
from portal.models import Debt, Payment
from portal.utils.decorators import verified_required
from portal.utils.helper import format_currency
from portal.utils.pdf_utils import generate_receipt_pdf
from . import payment_bp

api = Api(payment_bp)


class PaymentReceipt(Resource):
    @verified_required
    def get(self, payment_id):
        """
        Export a PDF receipt for one of the debtor's payments.
        """
        payment = Payment.query.join(Debt).filter(
            Payment.id == payment_id,
            Debt.debtor_id == g.verification.debtor_id,
        ).first()
        if not payment:
            return {"message": "Payment not found"}, 404

        debt = payment.debt
        details = {
            "receipt_number": f"RCPT-{payment.id:06d}",
            "debtor_name": debt.debtor.full_name,
            "loan_label": debt.label,
            "amount": format_currency(payment.amount),
            "payment_date": payment.payment_date.strftime("%Y-%m-%d %H:%M") if payment.payment_date else None,
            "payment_method": payment.payment_method,
            "transaction_id": payment.transaction_id,
            "status": payment.status,
            "balance": format_currency(debt.balance),
        }

        pdf_buffer = generate_receipt_pdf(details)

        response = make_response(pdf_buffer.getvalue())
        response.headers['Content-Type'] = 'application/pdf'
        response.headers['Content-Disposition'] = f'attachment; filename=receipt_{payment.id}.pdf'
        return response


api.add_resource(PaymentReceipt, "/payment/<int:payment_id>/receipt")
