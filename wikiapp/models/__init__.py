"""
Models package for the wiki application.

This package contains all data models and database access layer implementations.
"""
from .database import database, metadata, DATABASE_URL
from .user_model import user_table
from .page_model import page_table, page_content_table, search_index_table
from .settings_model import site_configuration_table
from .session_model import SessionData
from .summaries import SettingsSummary, UserSummary, PageSummary

__all__ = [
    'database',
    'metadata',
    'DATABASE_URL',
    'user_table',
    'page_table',
    'page_content_table',
    'search_index_table',
    'site_configuration_table',
    'SessionData',
    'SettingsSummary',
    'UserSummary',
    'PageSummary'
]
