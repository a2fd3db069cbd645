"""
Error types for the lab pipeline.

Every failure here is a broken calling contract (bad T, empty cloud,
timestep outside the schedule, ...). Nothing is retried or recovered.
"""


class InvalidArgument(ValueError):
    """Raised when a lab function receives an argument outside its domain."""
