"""Router Control Service Interface

Defines the contract for disabling a subscriber's network credential on the
router that serves them.
"""

from abc import ABC, abstractmethod
from src.domain.router import Router


class RouterControlService(ABC):
    """
    Abstract router-control service

    Implementations must be idempotent: disabling an already disabled
    credential succeeds, so a failed suspension can be retried safely.
    """

    @abstractmethod
    async def disable_subscriber_credential(self, router: Router, secret_name: str) -> bool:
        """
        Disable a PPP secret and drop its active session

        Args:
            router: Router holding the secret
            secret_name: PPP secret name

        Returns:
            True if the credential is disabled, False otherwise
        """
        pass
