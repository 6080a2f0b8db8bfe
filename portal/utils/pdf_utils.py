from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from io import BytesIO
from datetime import datetime


def generate_receipt_pdf(details):
    """
    Generate a one-page receipt for a portal payment.

    Args:
        details (dict): receipt fields, see PaymentReceipt.get

    Returns:
        BytesIO: PDF buffer
    """
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    margin = 50
    line_height = 18

    y = height - margin
    c.setFont("Helvetica-Bold", 16)
    c.drawString(margin, y, f"Payment Receipt: {details.get('receipt_number', 'N/A')}")
    y -= 30

    c.setFont("Helvetica", 12)
    rows = [
        ("Name", details.get("debtor_name")),
        ("Account", details.get("loan_label")),
        ("Amount", details.get("amount")),
        ("Payment Date", details.get("payment_date")),
        ("Method", details.get("payment_method")),
        ("Transaction ID", details.get("transaction_id")),
        ("Status", details.get("status")),
        ("Remaining Balance", details.get("balance")),
    ]
    for label, value in rows:
        c.drawString(margin, y, f"{label}: {value if value is not None else 'N/A'}")
        y -= line_height

    y -= 10
    generated_at = details.get("generated_at", datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"))
    c.drawString(margin, y, f"Generated At: {generated_at}")

    c.showPage()
    c.save()
    buffer.seek(0)
    return buffer
