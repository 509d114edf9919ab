# behaviors/exceptions.py
"""Errors raised by model behaviors."""


class InvalidConfigError(ValueError):
     """A behavior was attached with missing or inconsistent options."""


class InvalidArgumentError(TypeError):
     """A value of the wrong type was assigned through a behavior property."""
