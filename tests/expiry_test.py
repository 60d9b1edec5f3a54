"""
Tests for contract expiry and payment due classification.
"""
from datetime import date
from decimal import Decimal

from domain.entities import Contract, MonthlyPayment, NotificationKind
from domain.services import classify_contract_expiry, classify_payment_due

TODAY = date(2024, 6, 10)


def _contract(end_date, client_name="Maria Souza"):
    return Contract(
        id="c-42",
        number="CT-042",
        start_date=date(2024, 1, 1),
        end_date=end_date,
        total_value=Decimal("6000.00"),
        status="active",
        client_name=client_name,
    )


class TestContractExpiry:
    def test_expired_two_days_ago_is_urgent(self):
        event = classify_contract_expiry(_contract(date(2024, 6, 8)), TODAY)

        assert event.days_until == -2
        assert event.urgent is True
        assert "Contract CT-042 expired 2 days ago" in event.body

    def test_expires_today(self):
        event = classify_contract_expiry(_contract(TODAY), TODAY)

        assert event.urgent is True
        assert "expires today" in event.body

    def test_within_urgent_threshold(self):
        event = classify_contract_expiry(_contract(date(2024, 6, 13)), TODAY)

        assert event.days_until == 3
        assert event.urgent is True
        assert "expires in 3 days" in event.body

    def test_outside_urgent_threshold(self):
        event = classify_contract_expiry(_contract(date(2024, 6, 15)), TODAY)

        assert event.days_until == 5
        assert event.urgent is False

    def test_singular_day(self):
        event = classify_contract_expiry(_contract(date(2024, 6, 11)), TODAY)

        assert "expires in 1 day" in event.body
        assert "1 days" not in event.body

    def test_event_carries_tag_url_and_client(self):
        event = classify_contract_expiry(_contract(date(2024, 6, 15)), TODAY)

        assert event.kind == NotificationKind.CONTRACT_EXPIRY.value
        assert event.tag == "contract-c-42"
        assert event.url == "/contracts/c-42"
        assert "Client: Maria Souza" in event.body

    def test_no_client_line_without_client(self):
        event = classify_contract_expiry(_contract(date(2024, 6, 15), client_name=None), TODAY)

        assert "Client" not in event.body


class TestPaymentDue:
    def _payment(self, due_date):
        payment = MonthlyPayment.create("c-42", "2024-06", Decimal("1000"), due_date)
        payment.id = "p-1"
        return payment

    def test_due_in_two_days_is_urgent(self):
        event = classify_payment_due(self._payment(date(2024, 6, 12)), _contract(date(2024, 12, 31)), TODAY)

        assert event.urgent is True
        assert event.title == "URGENT: Payment due in 2 days"
        assert event.tag == "payment-p-1"
        assert event.url == "/contracts/c-42"

    def test_due_in_four_days_is_reminder(self):
        event = classify_payment_due(self._payment(date(2024, 6, 14)), _contract(date(2024, 12, 31)), TODAY)

        assert event.urgent is False
        assert event.title == "Reminder: Payment due in 4 days"
        assert "Period: 2024-06" in event.body
        assert "Amount: 1000.00" in event.body

    def test_due_today(self):
        event = classify_payment_due(self._payment(TODAY), _contract(date(2024, 12, 31)), TODAY)

        assert event.title == "URGENT: Payment due today"
        assert event.kind == NotificationKind.PAYMENT_DUE.value
