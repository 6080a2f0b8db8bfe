# seed.py
from datetime import date, datetime, timedelta
from decimal import Decimal
from portal.models import db, User, Debtor, Debt, Payment


def seed():

        print("🌱 Seeding debtor portal database...")

        # ========== USERS ==========
        demo_user = User.query.filter_by(email="debtor@example.com").first()
        if not demo_user:
            demo_user = User(
                email="debtor@example.com",
                auth_provider="password",
                created_at=datetime.utcnow()
            )
            demo_user.set_password("debtor123")
            db.session.add(demo_user)
            db.session.commit()
        print("✅ Users seeded")

        # ========== DEBTORS ==========
        debtors = [
            {
                "first_name": "Jane",
                "last_name": "Doe",
                "email": "debtor@example.com",
                "phone": "555-123-4567",
                "birthday": date(1990, 1, 1),
                "address": "123 Main St",
                "city": "Springfield",
                "state": "IL",
                "zip": "62701",
                "loan_number": "100001",
                "account_number": "900001",
            },
            {
                "first_name": "John",
                "last_name": "Roe",
                "email": "john.roe@example.com",
                "phone": "555-987-6543",
                "birthday": date(1985, 6, 15),
                "address": "42 Elm St",
                "city": "Shelbyville",
                "state": "IL",
                "zip": "62565",
                "loan_number": "100002",
                "account_number": "900002",
            },
        ]
        for fields in debtors:
            if not Debtor.query.filter_by(loan_number=fields["loan_number"]).first():
                db.session.add(Debtor(**fields))
        db.session.commit()
        print("✅ Debtors seeded")

        # ========== DEBTS & PAYMENTS ==========
        for debtor in Debtor.query.all():
            if Debt.query.filter_by(debtor_id=debtor.id).count():
                continue

            loan_amount = Decimal("2500.00")
            debt = Debt(
                debtor_id=debtor.id,
                loan_number=debtor.loan_number,
                account_number=debtor.account_number,
                loan_type="Installment",
                loan_amount=loan_amount,
                loan_frequency="Monthly",
                loan_schedule="12 payments",
                balance=Decimal("1850.00"),
                amount_due=Decimal("225.00"),
                payment_amount=Decimal("225.00"),
                payoff_amount=Decimal("1900.00"),
                late_fees=Decimal("25.00"),
                apr=Decimal("24.990"),
                high_credit=loan_amount,
                date_loan_made=date.today() - timedelta(days=180),
                date_first_payment=date.today() - timedelta(days=150),
                date_contract_due=date.today() + timedelta(days=185),
                security="Unsecured",
            )
            db.session.add(debt)
            db.session.flush()

            payment = Payment(
                debt_id=debt.id,
                amount=Decimal("225.00"),
                payment_date=datetime.utcnow() - timedelta(days=30),
                payment_method="PayPal",
                transaction_id=f"SEED-{debt.id:05d}",
                status="completed",
                notes="Seeded payment",
            )
            db.session.add(payment)
            debt.last_payment_amount = payment.amount
        db.session.commit()
        print("✅ Debts and payments seeded")

        print("🌱 Debtor portal seeding complete!")
        print("Test account:")
        print("  👤 debtor@example.com / debtor123 (verify with loan 100001, birthday 1990-01-01)")
