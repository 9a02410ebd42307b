"""Error conditions raised by the core. None of them are fatal to the app."""


# The wall clock (epoch seconds) could not be read.
class ClockUnavailable(RuntimeError):
    pass


# Seconds handed to the calendar functions were NaN, infinite or not a number at all.
class InvalidTimeValue(ValueError):
    pass


# Appending to the sleep log failed. Subclasses OSError so plain I/O handlers still catch it.
class PersistenceFailure(OSError):
    pass
