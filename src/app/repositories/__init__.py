from .customer_repository import CustomerRepository
from .distribution_point_repository import DistributionPointRepository
from .addon_item_repository import AddonItemRepository
from .transaction_repository import TransactionRepository
from .router_repository import RouterRepository
from .suspension_action_repository import SuspensionActionRepository

__all__ = [
    "CustomerRepository",
    "DistributionPointRepository",
    "AddonItemRepository",
    "TransactionRepository",
    "RouterRepository",
    "SuspensionActionRepository",
]
