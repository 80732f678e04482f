"""Exceptions raised while building the API clients"""
from typing import Optional


class ConfigurationError(ValueError):
    """An environment variable is set but cannot be used"""

    def __init__(self, variable: str, value: Optional[str], reason: str):
        self.variable = variable
        self.value = value
        self.reason = reason
        super().__init__(f"{variable}={value!r}: {reason}")


class BackoffError(ValueError):
    """Invalid input or parameters for the reconnect backoff policy"""
