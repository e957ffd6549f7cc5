"""
Service layer for the Sudoku booklet maker.

Services coordinate high-level operations and manage resources like
output files and saved settings, providing a clean interface for the CLI.
"""

from .booklet_service import BookletService
from .config_service import ConfigService, UserDefaults

__all__ = ['BookletService', 'ConfigService', 'UserDefaults']
