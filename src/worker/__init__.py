"""Background workers for billing service"""
from .monthly_billing import MonthlyBillingWorker
from .overdue_suspension import OverdueSuspensionWorker
from .slot_reconciler import SlotReconcilerWorker

__all__ = ["MonthlyBillingWorker", "OverdueSuspensionWorker", "SlotReconcilerWorker"]
