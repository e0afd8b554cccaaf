"""Environment-driven settings for the layout engine entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .layout_rules import DEFAULT_RULE_TABLE, RuleTable

RULES_FILE_ENV = "SLIDE_LAYOUT_RULES_FILE"
LOG_LEVEL_ENV = "SLIDE_LAYOUT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    rules_file: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(env_file: Optional[Path] = None) -> EngineSettings:
    """Read settings from the environment, loading ``.env`` first.

    Variables already present in the environment take precedence over the
    values in the dotenv file.
    """

    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()
    rules_file = os.getenv(RULES_FILE_ENV, "").strip()
    log_level = os.getenv(LOG_LEVEL_ENV, "").strip() or DEFAULT_LOG_LEVEL
    return EngineSettings(
        rules_file=Path(rules_file) if rules_file else None,
        log_level=log_level.upper(),
    )


def build_rule_table(settings: EngineSettings) -> RuleTable:
    if settings.rules_file is None:
        return DEFAULT_RULE_TABLE
    return RuleTable.from_tuning_file(settings.rules_file)
