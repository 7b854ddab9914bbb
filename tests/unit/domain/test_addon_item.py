"""Unit tests for AddonItem domain entity"""

from decimal import Decimal

from src.domain.addon_item import AddonItem, AddonItemType, AddonLifecycle


def make_addon(item_type=AddonItemType.MONTHLY, **kwargs):
    values = dict(
        id=1,
        customer_id=1,
        item_name="Static IP",
        item_type=item_type,
        price=Decimal("50000"),
        quantity=2,
    )
    values.update(kwargs)
    return AddonItem(**values)


class TestAddonItem:
    def test_total_is_price_times_quantity(self):
        assert make_addon().total == Decimal("100000")

    def test_monthly_item_stays_billable_after_billing(self):
        addon = make_addon()

        addon.mark_billed()

        assert addon.is_billable()
        assert addon.is_paid is False

    def test_one_time_item_billed_once(self):
        """
        Given: An unpaid one-time item
        When: It is marked billed
        Then: It is no longer billable
        """
        addon = make_addon(AddonItemType.ONE_TIME)
        assert addon.is_billable()

        addon.mark_billed()

        assert addon.is_paid is True
        assert not addon.is_billable()

    def test_deactivated_item_is_not_billable(self):
        addon = make_addon()

        addon.deactivate()

        assert addon.lifecycle == AddonLifecycle.DEACTIVATED
        assert not addon.is_active
        assert not addon.is_billable()
