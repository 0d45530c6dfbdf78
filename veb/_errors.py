class VEBError(Exception):
    """Base class for every error raised by a van-emde-boas tree"""


class InvalidUniverse(VEBError, ValueError):
    def __init__(self, universe):
        super().__init__(f"universe must be > 1, got {universe}")
        self.universe = universe


class UniverseTooLarge(VEBError, OverflowError):
    def __init__(self, universe, limit):
        super().__init__(f"universe {universe} exceeds the index limit {limit}")
        self.universe = universe
        self.limit = limit


class OutOfRange(VEBError, IndexError):
    def __init__(self, x, universe):
        super().__init__(f"Key: {x} outside of [0, {universe})")
        self.x = x
        self.universe = universe
