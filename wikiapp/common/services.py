"""
Service instance management module for the wiki application.

This module provides delayed loading of service instances to avoid circular imports.
All service instances are accessed through getter functions.
"""

# ==========================================
# Service instances - 服务实例
# ==========================================

# 延迟初始化的服务实例
_session_service = None
_startup_service = None
_settings_manager = None
_security_manager = None
_page_manager = None
_search_manager = None
_export_service = None

def get_session_service():
    """获取会话服务实例（延迟加载）"""
    global _session_service
    if _session_service is None:
        from wikiapp.services.session_service import session_service
        _session_service = session_service
    return _session_service

def get_startup_service():
    """获取启动服务实例（延迟加载）"""
    global _startup_service
    if _startup_service is None:
        from wikiapp.services.startup_service import StartupService
        _startup_service = StartupService()
    return _startup_service

def get_settings_manager():
    """获取设置管理器实例（延迟加载）"""
    global _settings_manager
    if _settings_manager is None:
        from wikiapp.services.settings_service import SettingsManager
        _settings_manager = SettingsManager()
    return _settings_manager

def get_security_manager():
    """获取用户安全管理器实例（延迟加载）"""
    global _security_manager
    if _security_manager is None:
        from wikiapp.services.security_service import SecurityManager
        _security_manager = SecurityManager()
    return _security_manager

def get_page_manager():
    """获取页面管理器实例（延迟加载）"""
    global _page_manager
    if _page_manager is None:
        from wikiapp.services.page_service import PageManager
        _page_manager = PageManager()
    return _page_manager

def get_search_manager():
    """获取搜索管理器实例（延迟加载）"""
    global _search_manager
    if _search_manager is None:
        from wikiapp.services.search_service import SearchManager
        _search_manager = SearchManager()
    return _search_manager

def get_export_service():
    """获取导出服务实例（延迟加载）"""
    global _export_service
    if _export_service is None:
        from wikiapp.services.export_service import ExportService
        _export_service = ExportService()
    return _export_service

def get_screwturn_importer():
    """每次导入创建新的导入器"""
    from wikiapp.services.screwturn_importer import ScrewTurnImporter
    return ScrewTurnImporter()
