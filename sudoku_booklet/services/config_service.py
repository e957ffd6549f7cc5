"""
Configuration Service - Manages user defaults persistence.

This service handles loading and saving user defaults to/from config.json,
with proper validation and defaults.
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ..config import (
    DEFAULT_COUNT,
    DEFAULT_DIFFICULTY,
    DEFAULT_GENERATOR,
    DEFAULT_PUZZLE_FOOTER,
    DEFAULT_SOLUTION_FOOTER,
    MAX_COUNT,
    MIN_COUNT,
)
from ..models import Difficulty


@dataclass
class UserDefaults:
    """Settings remembered between runs."""
    count: int = DEFAULT_COUNT
    difficulty: str = DEFAULT_DIFFICULTY
    include_solutions: bool = True
    output_folder: str = ""
    title: str = ""
    puzzle_footer: str = DEFAULT_PUZZLE_FOOTER
    solution_footer: str = DEFAULT_SOLUTION_FOOTER
    generator: str = DEFAULT_GENERATOR

    def __post_init__(self):
        """Validate defaults."""
        if not MIN_COUNT <= self.count <= MAX_COUNT:
            raise ValueError(f"count must be between {MIN_COUNT} and {MAX_COUNT}, got {self.count}")
        if self.difficulty not in [d.value for d in Difficulty]:
            raise ValueError(
                f"difficulty must be one of {', '.join(d.value for d in Difficulty)}, got '{self.difficulty}'"
            )


class ConfigService:
    """
    Manages user defaults persistence.

    Handles loading configuration from config.json, saving changes,
    and providing sensible defaults when config doesn't exist.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Optional custom config file path.
                        If None, uses config.json in project root.
        """
        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config.json"

        self.config_path = config_path

    def load(self) -> UserDefaults:
        """
        Load configuration from file.

        Returns:
            UserDefaults with loaded settings, or defaults if file doesn't exist

        Note:
            If config file is invalid, a warning is printed and defaults are returned.
        """
        if not self.config_path.exists():
            return UserDefaults()

        try:
            with open(self.config_path, encoding='utf-8') as f:
                data = json.load(f)

            defaults = UserDefaults()
            return UserDefaults(
                count=int(data.get('count', defaults.count)),
                difficulty=data.get('difficulty', defaults.difficulty),
                include_solutions=bool(data.get('include_solutions', defaults.include_solutions)),
                output_folder=data.get('output_folder', defaults.output_folder),
                title=data.get('title', defaults.title),
                puzzle_footer=data.get('puzzle_footer', defaults.puzzle_footer),
                solution_footer=data.get('solution_footer', defaults.solution_footer),
                generator=data.get('generator', defaults.generator)
            )

        except (json.JSONDecodeError, IOError, ValueError, TypeError, AttributeError) as e:
            print(f"Warning: Failed to load config from {self.config_path}: {e}")
            print("Using default configuration")
            return UserDefaults()

    def save(self, defaults: UserDefaults):
        """
        Save configuration to file.

        Note:
            Failures print a warning; saving config is best-effort.
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(defaults), f, indent=2, ensure_ascii=False)

        except (IOError, OSError) as e:
            print(f"Warning: Failed to save config to {self.config_path}: {e}")

    def reset_to_defaults(self) -> bool:
        """
        Delete config file to reset to defaults.

        Returns:
            True if config was deleted, False if it didn't exist or couldn't be deleted
        """
        try:
            if self.config_path.exists():
                self.config_path.unlink()
                return True
            return False

        except (IOError, OSError) as e:
            print(f"Warning: Failed to delete config file {self.config_path}: {e}")
            return False

    def get_config_path(self) -> Path:
        """
        Get the path to the configuration file.

        Returns:
            Path to config file (may not exist yet)
        """
        return self.config_path
