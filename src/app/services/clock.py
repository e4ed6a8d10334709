"""Clock Interface

Supplies "today" for overdue status and this-month summaries so tests can
pin the date.
"""

from abc import ABC, abstractmethod
from datetime import date


class Clock(ABC):
    @abstractmethod
    def today(self) -> date:
        pass
