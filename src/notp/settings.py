"""Process-wide settings read from the environment."""

import os
from dataclasses import dataclass
from functools import lru_cache


ENV_VAR = "NOTP_ENV"
TEST_ENV = "test"


@dataclass(frozen=True)
class Settings:
    """
    Runtime flags for notp.

    Attributes:
        test_mode: Whether time overrides are accepted. Enabled only when
            ``NOTP_ENV=test`` is set before first use.
    """

    test_mode: bool = False


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """
    Read settings from the environment.

    The result is cached for the life of the process.

    Returns:
        The process settings.
    """
    env = os.environ.get(ENV_VAR, "").strip().lower()
    return Settings(test_mode=env == TEST_ENV)
