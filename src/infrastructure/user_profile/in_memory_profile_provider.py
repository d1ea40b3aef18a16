"""
Infrastructure adapter: in-process user profiles -> IUserProfileProvider.

Profiles are seeded from an optional JSON file shaped like
    {"<userId>": {"age": 42, "annualHouseholdIncome": 150000}}
Unknown users, and fields a profile omits, fall back to the defaults.
"""

import json
import logging
from dataclasses import dataclass

from src.domain.ports.user_profile_port import IUserProfileProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserProfile:
    age: int = 35
    annual_household_income: int = 100_000


class InMemoryUserProfileProvider(IUserProfileProvider):
    def __init__(
        self,
        profiles: dict[str, UserProfile] | None = None,
        default: UserProfile = UserProfile(),
    ) -> None:
        self._profiles = dict(profiles or {})
        self._default = default

    @classmethod
    def from_json_file(cls, path: str) -> "InMemoryUserProfileProvider":
        """Load profiles from *path*.

        Raises:
            OSError:    if the file cannot be read.
            ValueError: if the file is not a JSON object of profile objects.
        """
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a JSON object keyed by user id")

        default = UserProfile()
        profiles = {}
        for user_id, fields in raw.items():
            if not isinstance(fields, dict):
                raise ValueError(f"{path}: profile for {user_id!r} must be an object")
            profiles[str(user_id)] = UserProfile(
                age=int(fields.get("age", default.age)),
                annual_household_income=int(
                    fields.get("annualHouseholdIncome", default.annual_household_income)
                ),
            )
        logger.info("Loaded %d user profiles from %s", len(profiles), path)
        return cls(profiles)

    def get_age(self, user_id: str) -> int:
        return self._profiles.get(user_id, self._default).age

    def get_annual_household_income(self, user_id: str) -> int:
        return self._profiles.get(user_id, self._default).annual_household_income
