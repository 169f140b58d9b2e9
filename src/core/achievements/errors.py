"""
Achievement Errors Module.

Exception hierarchy shared by the engine, the stores and the API layer.
"""


class AchievementError(Exception):
    """Base class for achievement engine errors."""


class StoreError(AchievementError):
    """A store operation failed."""


class TransientStoreError(StoreError):
    """Network, lock or timeout failure; the call may succeed if retried."""


class ConflictError(StoreError):
    """An award for this (user_id, rule_id) pair already exists."""

    def __init__(self, user_id: str, rule_id: str):
        super().__init__(f"Achievement {rule_id!r} already awarded to {user_id!r}")
        self.user_id = user_id
        self.rule_id = rule_id


class ValidationError(AchievementError):
    """A mood entry carries values outside their allowed domain."""
