from .customer_repository import SqlAlchemyCustomerRepository
from .distribution_point_repository import SqlAlchemyDistributionPointRepository
from .addon_item_repository import SqlAlchemyAddonItemRepository
from .transaction_repository import SqlAlchemyTransactionRepository
from .router_repository import SqlAlchemyRouterRepository
from .suspension_action_repository import SqlAlchemySuspensionActionRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyDistributionPointRepository",
    "SqlAlchemyAddonItemRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyRouterRepository",
    "SqlAlchemySuspensionActionRepository",
]
