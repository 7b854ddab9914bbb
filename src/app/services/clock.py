"""Clock Interface

Supplies the current time in the operator's civil timezone. Passed
explicitly to time-dependent use cases instead of a process-wide default.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """
        Current time

        Returns:
            Timezone-aware datetime in the configured civil timezone
        """
        pass
