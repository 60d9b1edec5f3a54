# entities test

from datetime import date
from decimal import Decimal

from domain.entities import (
    Contract,
    ContractStatus,
    MonthlyPayment,
    NotificationPermission,
    NotificationSettings,
    PaymentStatus,
    Profile,
    Role,
)


def _contract(**overrides):
    fields = dict(
        id="c-1",
        number="CT-001",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 6, 30),
        total_value=Decimal("6000.00"),
        status=ContractStatus.ACTIVE.value,
    )
    fields.update(overrides)
    return Contract(**fields)


def test_monthly_payment_entity_create():
    payment = MonthlyPayment.create(
        contract_id="c-1",
        reference_period="2024-03",
        amount=Decimal("1500.00"),
        due_date=date(2024, 3, 15),
    )
    assert payment.id is not None
    assert payment.contract_id == "c-1"
    assert payment.reference_period == "2024-03"
    assert payment.amount == Decimal("1500.00")
    assert payment.status == PaymentStatus.PENDING.value
    assert payment.paid_date is None
    assert payment.created_at is not None


def test_monthly_payment_overdue_is_derived_from_due_date():
    payment = MonthlyPayment.create("c-1", "2024-03", Decimal("10.00"), date(2024, 3, 15))

    assert payment.effective_status(date(2024, 3, 15)) == "pending"
    assert payment.effective_status(date(2024, 3, 16)) == "overdue"
    # Stored status never changes on read
    assert payment.status == "pending"


def test_paid_payment_is_never_overdue():
    payment = MonthlyPayment.create("c-1", "2024-03", Decimal("10.00"), date(2024, 3, 15))
    payment.status = PaymentStatus.PAID.value
    payment.paid_date = date(2024, 3, 20)

    assert payment.is_paid is True
    assert payment.effective_status(date(2024, 5, 1)) == "paid"


def test_contract_days_until_expiry():
    contract = _contract(end_date=date(2024, 6, 30))

    assert contract.days_until_expiry(date(2024, 6, 25)) == 5
    assert contract.days_until_expiry(date(2024, 6, 30)) == 0
    assert contract.days_until_expiry(date(2024, 7, 2)) == -2
    assert contract.is_active is True


def test_profile_roles():
    assert Profile("u1", "Ana", "ana@example.com", Role.ADMIN).can_manage_payments is True
    assert Profile("u2", "Bo", "bo@example.com", Role.OPERATOR).can_manage_payments is True
    assert Profile("u3", "Cy", "cy@example.com", Role.CLIENT).can_manage_payments is False


def test_notification_settings_defaults():
    settings = NotificationSettings()
    assert settings.enabled is False
    assert settings.permission == NotificationPermission.DEFAULT.value
    assert settings.push_allowed is False
    assert NotificationSettings(enabled=True, permission="granted").push_allowed is True
