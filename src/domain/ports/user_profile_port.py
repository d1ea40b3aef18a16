"""
Port (interface) for user profile lookups.
Infrastructure adapters (e.g. InMemoryUserProfileProvider) must implement this interface.
"""

from abc import ABC, abstractmethod


class IUserProfileProvider(ABC):
    @abstractmethod
    def get_age(self, user_id: str) -> int: ...

    @abstractmethod
    def get_annual_household_income(self, user_id: str) -> int: ...
