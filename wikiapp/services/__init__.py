"""
Services package for the wiki application.

This package contains all business logic and service layer implementations.
"""
from .session_service import SessionService, session_service
from .settings_service import SettingsManager
from .security_service import SecurityManager, SecurityError
from .page_service import PageManager
from .search_service import SearchManager
from .export_service import ExportService
from .screwturn_importer import ScrewTurnImporter
from .startup_service import StartupService

__all__ = [
    'SessionService',
    'session_service',
    'SettingsManager',
    'SecurityManager',
    'SecurityError',
    'PageManager',
    'SearchManager',
    'ExportService',
    'ScrewTurnImporter',
    'StartupService'
]
