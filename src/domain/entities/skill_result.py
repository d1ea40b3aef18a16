"""
Domain entity for the outcome of one skill-chain execution.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SkillResult:
    text: str
    success: bool
    failed_skill: str | None = None
    error: str | None = None
