"""Security-awareness quiz service: quiz administration and attempt grading."""

__version__ = "0.1.0"
