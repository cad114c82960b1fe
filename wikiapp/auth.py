"""
Authentication routes for the wiki application.

Form login against the user table and logout. A server side session is
only stored once a login succeeds.
"""
from fastapi import FastAPI, Request, Form
from fastapi.responses import RedirectResponse, HTMLResponse
import logging
from html import escape

from wikiapp.common import get_session_service, get_security_manager
from wikiapp.services.session_service import SESSION_MAX_AGE

# 设置日志记录
logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"

def render_login_page(error: str = "") -> str:
    """渲染登录页面"""
    error_html = f'<p class="error">{escape(error)}</p>' if error else ""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>Wiki - Login</title>
        <meta charset="UTF-8">
        <style>
            body {{
                font-family: Arial, sans-serif;
                display: flex;
                justify-content: center;
                align-items: center;
                height: 100vh;
                margin: 0;
                background-color: #f5f5f5;
            }}
            .login-container {{
                background: white;
                padding: 2rem;
                border-radius: 8px;
                box-shadow: 0 2px 10px rgba(0,0,0,0.1);
            }}
            .error {{ color: #c00; }}
        </style>
    </head>
    <body>
        <div class="login-container">
            <h2>Login</h2>
            {error_html}
            <form method="post" action="/login">
                <p><input type="text" name="email" placeholder="Email"></p>
                <p><input type="password" name="password" placeholder="Password"></p>
                <p><button type="submit">Login</button></p>
            </form>
        </div>
    </body>
    </html>
    """

# ==========================================
# FastAPI 路由设置
# ==========================================

def setup_auth_routes(app: FastAPI):
    """设置认证相关路由"""

    @app.get("/login", response_class=HTMLResponse)
    def login_page_get():
        """登录页面"""
        return render_login_page()

    @app.post("/login")
    async def login_post(email: str = Form(""), password: str = Form("")):
        """处理登录表单提交"""
        user = await get_security_manager().authenticate(email, password)
        if not user:
            logger.warning(f"登录失败: {email}")
            return HTMLResponse(render_login_page("Invalid email or password"), status_code=401)

        session_service = get_session_service()
        session_service.cleanup_expired_sessions()
        session_id = session_service.create_session(user["username"], user["is_admin"], user["is_editor"])

        response = RedirectResponse(url="/Settings", status_code=303)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=session_id,
            httponly=True,
            samesite="lax",
            max_age=SESSION_MAX_AGE
        )
        logger.info(f"用户 {user['username']} 登录成功")
        return response

    @app.get("/logout")
    def logout(request: Request):
        """退出登录：清除会话信息"""
        session_id = request.cookies.get(SESSION_COOKIE)
        if session_id:
            get_session_service().destroy_session(session_id)

        response = RedirectResponse(url="/login", status_code=303)
        response.delete_cookie(SESSION_COOKIE)
        return response

