"""Router Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.router import Router


class RouterRepository(ABC):
    @abstractmethod
    async def get_by_id(self, router_id: int) -> Optional[Router]:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Router]:
        pass

    @abstractmethod
    async def get_all(self) -> List[Router]:
        pass

    @abstractmethod
    async def create(self, router: Router) -> Router:
        pass
