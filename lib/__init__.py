# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - logger.py: Process-wide console logger (five leveled methods)
# - database.py: Lazily connected Supabase client handle
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import Database, DatabaseError
from lib.logger import Logger, configure_logging, format_message, logger

__all__ = [
    # Database
    "Database",
    "DatabaseError",
    # Logging
    "Logger",
    "configure_logging",
    "format_message",
    "logger",
]
