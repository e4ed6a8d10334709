from datetime import date
from src.app.services.clock import Clock


class SystemClock(Clock):
    """Local calendar date of the running process"""

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """Always returns the same date"""

    def __init__(self, fixed: date):
        self.fixed = fixed

    def today(self) -> date:
        return self.fixed
