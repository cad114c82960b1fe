"""
Settings service for the wiki application.

Web settings (connection, attachments folder, roles, caching, auth mode) are
kept in a JSON file beside the application data; site configuration (name,
url, markup, theme, signup, recaptcha) lives in the site_configuration table.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from wikiapp.config import BASE_DIR, WEB_SETTINGS_FILE, ATTACHMENTS_FOLDER
from wikiapp.models.summaries import WEB_SETTING_FIELDS
from wikiapp.common import (
    database, site_configuration_table,
    page_table, page_content_table, search_index_table,
    SettingsSummary
)

logger = logging.getLogger(__name__)

INSTALLED_KEY = "installed"


class SettingsManager:
    """站点设置管理类"""

    def __init__(self, settings_file: Optional[Path] = None):
        self.settings_file = settings_file or WEB_SETTINGS_FILE
        self._web_settings: Optional[Dict[str, Any]] = None

    def _defaults(self) -> Dict[str, Any]:
        defaults = SettingsSummary().model_dump()
        defaults["attachments_folder"] = ATTACHMENTS_FOLDER
        return defaults

    def web_settings(self) -> Dict[str, Any]:
        """读取web配置文件（带缓存）"""
        if self._web_settings is None:
            defaults = self._defaults()
            settings = {name: defaults[name] for name in WEB_SETTING_FIELDS}
            if self.settings_file.exists():
                with open(self.settings_file, 'r', encoding='utf-8') as f:
                    settings.update(json.load(f))
            self._web_settings = settings
        return self._web_settings

    def save_web_config_settings(self, summary: SettingsSummary) -> None:
        """保存web配置到文件"""
        settings = summary.web_settings()
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2, ensure_ascii=False)
        self._web_settings = settings
        logger.info(f"web配置已保存: {self.settings_file}")

    async def _site_configuration(self) -> Dict[str, Any]:
        rows = await database.fetch_all(site_configuration_table.select())
        return {row["key"]: json.loads(row["value"]) for row in rows}

    async def _set_site_value(self, key: str, value: Any) -> None:
        query = site_configuration_table.select().where(site_configuration_table.c.key == key)
        existing = await database.fetch_one(query)
        encoded = json.dumps(value, ensure_ascii=False)
        if existing:
            query = site_configuration_table.update().where(
                site_configuration_table.c.key == key
            ).values(value=encoded)
        else:
            query = site_configuration_table.insert().values(key=key, value=encoded)
        await database.execute(query)

    async def save_site_configuration(self, summary: SettingsSummary, is_installing: bool) -> None:
        """保存站点配置到数据库"""
        for key, value in summary.site_settings().items():
            await self._set_site_value(key, value)

        if is_installing:
            await self._set_site_value(INSTALLED_KEY, True)

        logger.info(f"站点配置已保存 (installing={is_installing})")

    async def get_current_settings(self) -> SettingsSummary:
        """合并默认值、web配置和站点配置"""
        settings = self._defaults()
        settings.update(self.web_settings())

        site_configuration = await self._site_configuration()
        for key, value in site_configuration.items():
            if key in settings:
                settings[key] = value

        return SettingsSummary.model_validate(settings)

    async def clear_page_tables(self) -> None:
        """删除所有页面、页面版本和搜索索引"""
        await database.execute(page_content_table.delete())
        await database.execute(page_table.delete())
        await database.execute(search_index_table.delete())
        logger.info("所有页面数据已清除")

    def attachments_path(self) -> Path:
        """附件目录的绝对路径"""
        folder = Path(self.web_settings().get("attachments_folder") or ATTACHMENTS_FOLDER)
        if not folder.is_absolute():
            folder = BASE_DIR / folder
        return folder
