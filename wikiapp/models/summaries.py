"""
Summary (transfer) models passed between the web layer and the managers.

SettingsSummary, UserSummary and PageSummary carry form input and page data
without any persistence logic of their own.
"""
import datetime
from typing import Optional, List

from pydantic import BaseModel, field_validator, model_validator

from wikiapp.config import MINIMUM_PASSWORD_LENGTH

MARKUP_TYPES = ("Creole", "Markdown", "MediaWiki")

# 保存到 web 配置文件的字段，其余字段保存到 site_configuration 表
WEB_SETTING_FIELDS = (
    "connection_string", "database_type", "attachments_folder",
    "admin_role_name", "editor_role_name", "use_external_auth",
    "cache_enabled", "cache_text", "installed",
)
SITE_SETTING_FIELDS = (
    "site_name", "site_url", "allowed_extensions", "markup_type", "theme",
    "allow_user_signup", "recaptcha_enabled", "recaptcha_public_key",
    "recaptcha_private_key",
)


class SettingsSummary(BaseModel):
    """站点设置"""
    connection_string: str = ""
    database_type: str = ""
    attachments_folder: str = "Attachments"
    admin_role_name: str = "Admin"
    editor_role_name: str = "Editor"
    use_external_auth: bool = False
    cache_enabled: bool = False
    cache_text: bool = False
    installed: bool = False

    site_name: str = "Wiki"
    site_url: str = "http://localhost"
    allowed_extensions: str = "jpg,png,gif,zip,xml,pdf"
    markup_type: str = "Creole"
    theme: str = "Mediawiki"
    allow_user_signup: bool = False
    recaptcha_enabled: bool = False
    recaptcha_public_key: str = ""
    recaptcha_private_key: str = ""

    @field_validator("site_name", "site_url", "allowed_extensions", "theme", "attachments_folder")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("markup_type")
    @classmethod
    def known_markup(cls, value: str) -> str:
        if value not in MARKUP_TYPES:
            raise ValueError(f"Markup type must be one of {', '.join(MARKUP_TYPES)}")
        return value

    @model_validator(mode="after")
    def recaptcha_keys(self) -> "SettingsSummary":
        if self.recaptcha_enabled and not (self.recaptcha_public_key and self.recaptcha_private_key):
            raise ValueError("Both recaptcha keys are required when recaptcha is enabled")
        return self

    @classmethod
    async def get_current_settings(cls) -> "SettingsSummary":
        """读取当前保存的设置"""
        from wikiapp.common.services import get_settings_manager
        return await get_settings_manager().get_current_settings()

    def web_settings(self) -> dict:
        return {name: getattr(self, name) for name in WEB_SETTING_FIELDS}

    def site_settings(self) -> dict:
        return {name: getattr(self, name) for name in SITE_SETTING_FIELDS}


class UserSummary(BaseModel):
    """用户表单数据，existing_username 为空表示新用户"""
    existing_username: str = ""
    new_username: str = ""
    password: str = ""
    password_confirmation: str = ""

    @field_validator("existing_username", "new_username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def check_user(self) -> "UserSummary":
        if not self.new_username:
            raise ValueError("The username is required")
        if self.is_new and not self.password:
            raise ValueError("A password is required for new users")
        if self.password:
            if len(self.password) < MINIMUM_PASSWORD_LENGTH:
                raise ValueError(f"The password must be at least {MINIMUM_PASSWORD_LENGTH} characters")
            if self.password != self.password_confirmation:
                raise ValueError("The passwords do not match")
        return self

    @property
    def is_new(self) -> bool:
        return not self.existing_username

    @property
    def username_has_changed(self) -> bool:
        return not self.is_new and self.existing_username != self.new_username


class PageSummary(BaseModel):
    """页面及其最新内容"""
    id: int
    title: str
    content: str = ""
    tags: List[str] = []
    created_by: Optional[str] = None
    created_on: Optional[datetime.datetime] = None
    modified_by: Optional[str] = None
    modified_on: Optional[datetime.datetime] = None
    is_locked: bool = False
    version_number: int = 1
