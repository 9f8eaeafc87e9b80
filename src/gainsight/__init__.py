"""gainsight: workout, bodyweight and calorie insights."""

__version__ = "0.1.0"
