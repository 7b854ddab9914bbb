"""Router Control Service Implementations

Disables subscriber PPP secrets on MikroTik routers through the RouterOS API.
"""

import asyncio
import logging
from librouteros import connect
from librouteros.exceptions import LibRouterosError
from librouteros.query import Key
from src.app.services.router_control import RouterControlService
from src.domain.router import Router

logger = logging.getLogger(__name__)


class LoggingRouterControlService(RouterControlService):
    """
    Router control service that only logs

    Used when ROUTER_CONTROL_ENABLED is off (development, tests).
    """

    async def disable_subscriber_credential(self, router: Router, secret_name: str) -> bool:
        logger.warning(
            f"[ROUTER CONTROL DISABLED] Would disable PPP secret '{secret_name}' "
            f"on router {router.name} ({router.ip_address})"
        )
        return True


class MikrotikRouterControlService(RouterControlService):
    """
    RouterOS API implementation

    librouteros is blocking, so each call runs in a worker thread. Disabling is
    idempotent: an already disabled secret is simply updated again.
    """

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    async def disable_subscriber_credential(self, router: Router, secret_name: str) -> bool:
        try:
            return await asyncio.to_thread(self._disable, router, secret_name)
        except (LibRouterosError, OSError) as e:
            logger.error(
                f"Failed to disable PPP secret '{secret_name}' on router {router.name}: {e}"
            )
            return False

    def _disable(self, router: Router, secret_name: str) -> bool:
        api = connect(
            username=router.username,
            password=router.password,
            host=router.ip_address,
            port=router.api_port,
            timeout=self.timeout,
        )
        try:
            name = Key("name")
            secrets = list(api.path("/ppp/secret").select().where(name == secret_name))
            if not secrets:
                logger.error(f"PPP secret '{secret_name}' not found on router {router.name}")
                return False

            api.path("/ppp/secret").update(**{".id": secrets[0][".id"], "disabled": True})

            # Drop the live session so the disable takes effect immediately
            for row in api.path("/ppp/active").select().where(name == secret_name):
                api.path("/ppp/active").remove(row[".id"])

            logger.info(f"Disabled PPP secret '{secret_name}' on router {router.name}")
            return True
        finally:
            api.close()


def create_router_control_service(enabled: bool, timeout: float = 10.0) -> RouterControlService:
    """
    Factory function to create the router control service

    Args:
        enabled: If True, talk to real routers; otherwise only log
        timeout: RouterOS API socket timeout in seconds

    Returns:
        Configured RouterControlService
    """
    if enabled:
        return MikrotikRouterControlService(timeout=timeout)
    return LoggingRouterControlService()
