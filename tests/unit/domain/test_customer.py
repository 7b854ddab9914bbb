"""Unit tests for Customer billing status transitions"""

import pytest
from decimal import Decimal

from src.domain.customer import Customer, BillingStatus
from src.domain.errors import ValidationError


def make_customer(billing_status=BillingStatus.LUNAS):
    return Customer(
        id=1,
        customer_number="LTS0001",
        name="Budi Santoso",
        package="Home 20 Mbps",
        package_price=Decimal("300000"),
        billing_status=billing_status,
    )


class TestBillingTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            (BillingStatus.LUNAS, BillingStatus.BELUM_LUNAS),
            (BillingStatus.BELUM_LUNAS, BillingStatus.SUSPEND),
            (BillingStatus.BELUM_LUNAS, BillingStatus.LUNAS),
            (BillingStatus.SUSPEND, BillingStatus.LUNAS),
        ],
    )
    def test_allowed_transitions(self, current, target):
        customer = make_customer(current)

        customer.transition_billing_status(target)

        assert customer.billing_status == target

    @pytest.mark.parametrize(
        "current, target",
        [
            (BillingStatus.LUNAS, BillingStatus.SUSPEND),
            (BillingStatus.SUSPEND, BillingStatus.BELUM_LUNAS),
        ],
    )
    def test_forbidden_transitions_raise(self, current, target):
        """
        Given: A customer in a state that cannot reach the target
        When: The transition is requested
        Then: ValidationError is raised and the status is unchanged
        """
        customer = make_customer(current)

        with pytest.raises(ValidationError):
            customer.transition_billing_status(target)

        assert customer.billing_status == current

    def test_same_status_is_noop(self):
        customer = make_customer(BillingStatus.SUSPEND)

        customer.transition_billing_status(BillingStatus.SUSPEND)

        assert customer.billing_status == BillingStatus.SUSPEND
