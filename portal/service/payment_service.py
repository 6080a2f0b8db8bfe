import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from portal.extension import db
from portal.models import Debt, Payment
from portal.models.debt import to_money
from portal.utils.errors import InvalidPaymentAmount, NotFoundError, PaymentRecordError

logger = logging.getLogger(__name__)

PAYMENT_METHOD = "PayPal"
PAYMENT_STATUS_COMPLETED = "completed"
PAYMENT_NOTE = "Payment made through portal"

AMOUNT_PATTERN = re.compile(r"^\d*\.?\d{0,2}$")


@dataclass(frozen=True)
class CaptureResult:
    """What the payment button reports after a successful capture."""
    transaction_id: str
    raw_payload: dict = field(default_factory=dict)


def parse_amount(value):
    """Parse a user-entered amount: positive, at most two decimals."""
    text = str(value).strip() if value is not None else ""
    if not text or not AMOUNT_PATTERN.match(text):
        raise InvalidPaymentAmount("Enter an amount with at most two decimal places")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidPaymentAmount() from None
    if amount <= 0:
        raise InvalidPaymentAmount("Payment amount must be greater than zero")
    return amount.quantize(Decimal("0.01"))


def get_debtor_debt(debtor_id, debt_id, lock=False):
    query = Debt.query.filter_by(id=debt_id, debtor_id=debtor_id)
    if lock:
        query = query.with_for_update()
    debt = query.first()
    if debt is None:
        raise NotFoundError("Debt account not found")
    return debt


def default_selection(debts):
    """The first account, paying its amount due."""
    if not debts:
        return None
    first = debts[0]
    return {"debt_id": first.id, "amount": f"{to_money(first.amount_due):.2f}"}


def build_order(debt, amount, currency="USD"):
    """
    Order payload for the payment button's createOrder callback.
    The amount is capped by the outstanding balance.
    """
    amount = parse_amount(amount)
    if amount > to_money(debt.balance):
        raise InvalidPaymentAmount("Payment amount cannot exceed the outstanding balance")

    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "reference_id": str(debt.id),
                "amount": {"value": f"{amount:.2f}", "currency_code": currency},
                "description": f"Payment for Loan #{debt.loan_number}",
            }
        ],
    }


def find_recorded_capture(debtor_id, debt_id, transaction_id):
    """
    Payment already recorded for a transaction id on this debtor's debt.
    A transaction id recorded against any other debt is reported as not found.
    """
    existing = Payment.query.filter_by(transaction_id=transaction_id).first()
    if existing is None:
        return None
    if existing.debt_id != debt_id or existing.debt.debtor_id != debtor_id:
        logger.warning(f"Capture {transaction_id} belongs to another account, refusing replay on debt {debt_id}")
        raise NotFoundError("Payment not found")
    return existing


def record_payment(debtor_id, debt_id, amount, capture, processor=None):
    """
    Record a captured payment and decrement the debt balance in one transaction.

    Returns (payment, created). A transaction id that was already recorded
    returns the existing payment with created=False and leaves the balance alone.
    """
    amount = parse_amount(amount)

    existing = find_recorded_capture(debtor_id, debt_id, capture.transaction_id)
    if existing:
        logger.info(f"Capture {capture.transaction_id} already recorded as payment {existing.id}")
        return existing, False

    # confirm with the processor before opening the write
    get_debtor_debt(debtor_id, debt_id)
    if processor is not None:
        processor.confirm_capture(capture, amount)

    try:
        debt = get_debtor_debt(debtor_id, debt_id, lock=True)
        if amount > to_money(debt.balance):
            # funds are already captured, record them anyway
            logger.warning(f"Payment of {amount} exceeds balance {debt.balance} on debt {debt.id}")

        payment = Payment(
            debt_id=debt.id,
            amount=amount,
            payment_date=datetime.utcnow(),
            payment_method=PAYMENT_METHOD,
            transaction_id=capture.transaction_id,
            status=PAYMENT_STATUS_COMPLETED,
            notes=PAYMENT_NOTE,
        )
        db.session.add(payment)
        debt.apply_payment(amount)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        existing = find_recorded_capture(debtor_id, debt_id, capture.transaction_id)
        if existing:
            return existing, False
        logger.error(f"Integrity error recording capture {capture.transaction_id}")
        raise PaymentRecordError()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to record capture {capture.transaction_id}: {e}")
        raise PaymentRecordError() from e

    logger.info(f"Recorded payment {payment.id} of {amount} on debt {debt.id}")
    return payment, True
