"""
Common module for the wiki application.

This module serves as a central hub for all shared components, dependencies, and utilities
to eliminate circular import issues throughout the application.

All modules should import from this common module instead of importing from each other directly.
"""

# ==========================================
# Core imports - 核心导入
# ==========================================

# Models
from wikiapp.models import (
    database, metadata, DATABASE_URL,
    user_table, page_table, page_content_table, search_index_table,
    site_configuration_table,
    SessionData, SettingsSummary, UserSummary, PageSummary
)

# ==========================================
# Common module imports - 通用模块导入
# ==========================================

# Service management
from wikiapp.common.services import (
    get_session_service, get_startup_service,
    get_settings_manager, get_security_manager, get_page_manager,
    get_search_manager, get_export_service, get_screwturn_importer
)

# Authentication decorators
from wikiapp.utils.auth_decorators import require_admin

# Utility functions
from wikiapp.utils import (
    as_valid_filename, parse_tags, join_tags, space_delimit_tags,
    zip_files_flat, zip_directory,
    create_text_download_response, create_zip_download_response, redirect_to,
    hash_password, verify_password, generate_random_password, generate_session_id,
    GENERAL_ERROR_KEY, bind_form, add_model_error
)

# ==========================================
# Exported symbols
# ==========================================

__all__ = [
    # Database
    'database', 'metadata', 'DATABASE_URL',
    'user_table', 'page_table', 'page_content_table', 'search_index_table',
    'site_configuration_table',
    # Models
    'SessionData', 'SettingsSummary', 'UserSummary', 'PageSummary',
    # Service getters
    'get_session_service', 'get_startup_service',
    'get_settings_manager', 'get_security_manager', 'get_page_manager',
    'get_search_manager', 'get_export_service', 'get_screwturn_importer',
    # Authentication decorators
    'require_admin',
    # Utility functions
    'as_valid_filename', 'parse_tags', 'join_tags', 'space_delimit_tags',
    'zip_files_flat', 'zip_directory',
    'create_text_download_response', 'create_zip_download_response', 'redirect_to',
    'hash_password', 'verify_password', 'generate_random_password', 'generate_session_id',
    'GENERAL_ERROR_KEY', 'bind_form', 'add_model_error'
]
