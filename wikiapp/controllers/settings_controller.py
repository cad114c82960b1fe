"""
Settings controller for the wiki application.

This module contains route handlers for the settings pages: site settings,
user management, exports, the ScrewTurn importer and the search index tools.
All routes require administrator rights.
"""
import logging
from fastapi import APIRouter, HTTPException, Request, Form

from wikiapp.common import (
    SettingsSummary, UserSummary,
    get_session_service, get_settings_manager, get_security_manager,
    get_page_manager, get_search_manager, get_export_service, get_screwturn_importer,
    require_admin, bind_form, add_model_error, redirect_to,
    create_text_download_response, create_zip_download_response,
    GENERAL_ERROR_KEY
)
from wikiapp.models.summaries import WEB_SETTING_FIELDS
from wikiapp.services.security_service import SecurityError

logger = logging.getLogger(__name__)

# 创建路由器
settings_router = APIRouter(prefix="/Settings", tags=["settings"])

USERS_URL = "/Settings/Users"
TOOLS_URL = "/Settings/Tools"

XML_EXPORT_FILENAME = "roadkill-export.xml"

# 站点设置
@settings_router.get("")
@require_admin
async def index(request: Request):
    """显示当前设置"""
    summary = await SettingsSummary.get_current_settings()
    return {"view": "Index", "model": summary.model_dump(), "errors": {}}

@settings_router.post("")
@require_admin
async def save_settings(request: Request):
    """保存设置到web配置文件和数据库"""
    form_data = dict(await request.form())

    # 表单中没有的web配置项保留当前值
    current = await SettingsSummary.get_current_settings()
    data = {name: getattr(current, name) for name in WEB_SETTING_FIELDS if name not in form_data}
    data.update(form_data)

    summary, errors = bind_form(SettingsSummary, data)

    if summary is not None:
        settings_manager = get_settings_manager()
        settings_manager.save_web_config_settings(summary)
        await settings_manager.save_site_configuration(summary, False)
        return {"view": "Index", "model": summary.model_dump(), "errors": errors}

    return {"view": "Index", "model": form_data, "errors": errors}

# 用户管理
@settings_router.get("/Users")
@require_admin
async def users(request: Request):
    """管理员和编辑列表；使用外部认证时为只读视图"""
    session = get_session_service().get_session(request)
    security_manager = get_security_manager()

    admins = await security_manager.list_admins()
    editors = await security_manager.list_editors()

    return {
        "view": "UsersReadOnly" if security_manager.is_readonly else "Users",
        "model": [admins, editors],
        "errors": session.pop_model_errors(),
        "action": session.pop_temp_data("action")
    }

@settings_router.post("/AddAdmin")
@require_admin
async def add_admin(request: Request):
    """添加管理员"""
    session_service = get_session_service()
    summary, errors = bind_form(UserSummary, dict(await request.form()))

    if summary is not None:
        await get_security_manager().add_user(summary.new_username, summary.password, True, False)
    else:
        # 让页面重新显示对话框
        session_service.set_temp_data(request, "action", "addadmin")

    session_service.export_model_errors(request, errors)
    return redirect_to(USERS_URL)

@settings_router.post("/AddEditor")
@require_admin
async def add_editor(request: Request):
    """添加编辑"""
    session_service = get_session_service()
    summary, errors = bind_form(UserSummary, dict(await request.form()))

    if summary is not None:
        try:
            await get_security_manager().add_user(summary.new_username, summary.password, False, True)
        except SecurityError as e:
            add_model_error(errors, GENERAL_ERROR_KEY, str(e))
    else:
        # 让页面重新显示对话框
        session_service.set_temp_data(request, "action", "addeditor")

    session_service.export_model_errors(request, errors)
    return redirect_to(USERS_URL)

@settings_router.post("/EditUser")
@require_admin
async def edit_user(request: Request):
    """修改用户名，密码不为空时同时修改密码"""
    session_service = get_session_service()
    summary, errors = bind_form(UserSummary, dict(await request.form()))

    if summary is not None and summary.is_new:
        add_model_error(errors, "existing_username", "The existing username is required")
        summary = None

    if summary is not None:
        security_manager = get_security_manager()
        if summary.username_has_changed:
            await security_manager.change_email(summary.existing_username, summary.new_username)
            summary.existing_username = summary.new_username

        if summary.password:
            await security_manager.change_password(summary.existing_username, summary.password)
    else:
        # 让页面重新显示对话框
        session_service.set_temp_data(request, "action", "edituser")

    session_service.export_model_errors(request, errors)
    return redirect_to(USERS_URL)

@settings_router.get("/DeleteUser/{id}")
@require_admin
async def delete_user(id: str, request: Request):
    """删除用户"""
    await get_security_manager().delete_user(id)
    return redirect_to(USERS_URL)

# 工具
@settings_router.get("/Tools")
@require_admin
async def tools(request: Request):
    """工具页面"""
    session = get_session_service().get_session(request)
    return {"view": "Tools", "message": session.pop_temp_data("Message")}

@settings_router.get("/ExportAsXml")
@require_admin
async def export_as_xml(request: Request):
    """导出所有页面（含历史版本）为一个XML文件"""
    try:
        xml = await get_page_manager().export_to_xml()
        return create_text_download_response(xml, XML_EXPORT_FILENAME, "text/xml")
    except OSError as e:
        logger.error(f"Unable to export as XML: {e}", exc_info=True)
        raise HTTPException(
            status_code=404,
            detail="There was a problem with exporting as XML. Enable tracing to see the error source"
        )

@settings_router.get("/ExportAsWikiFiles")
@require_admin
async def export_as_wiki_files(request: Request):
    """导出所有页面为 .wiki 文件的压缩包"""
    pages = await get_page_manager().all_pages()

    try:
        zip_path = get_export_service().export_wiki_files(pages)
        return create_zip_download_response(zip_path)
    except OSError as e:
        logger.error(f"Unable to export files: {e}", exc_info=True)
        raise HTTPException(
            status_code=404,
            detail="There was a problem with the export. Enable tracing to see the error source"
        )

@settings_router.get("/ExportAttachments")
@require_admin
async def export_attachments(request: Request):
    """导出附件目录（含子目录）的压缩包"""
    try:
        attachments_dir = get_settings_manager().attachments_path()
        zip_path = get_export_service().export_attachments(attachments_dir)
        return create_zip_download_response(zip_path)
    except OSError as e:
        logger.error(f"Unable to export files: {e}", exc_info=True)
        raise HTTPException(
            status_code=404,
            detail="There was a problem with the attachments export. Enable tracing to see the error source"
        )

@settings_router.post("/ImportFromScrewTurn")
@require_admin
async def import_from_screwturn(request: Request, screwturnConnectionString: str = Form(...)):
    """从 ScrewTurn 数据库导入页面和文件"""
    importer = get_screwturn_importer()
    await importer.import_from_sql(screwturnConnectionString)
    get_session_service().set_temp_data(request, "Message", "Import successful")
    return redirect_to(TOOLS_URL)

@settings_router.get("/UpdateSearchIndex")
@require_admin
async def update_search_index(request: Request):
    """删除并重建搜索索引"""
    get_session_service().set_temp_data(request, "Message", "Update complete")
    await get_search_manager().create_index()
    return redirect_to(TOOLS_URL)

@settings_router.get("/ClearPages")
@require_admin
async def clear_pages(request: Request):
    """清空所有页面"""
    get_session_service().set_temp_data(request, "Message", "Database cleared")
    await get_settings_manager().clear_page_tables()
    return redirect_to(TOOLS_URL)
