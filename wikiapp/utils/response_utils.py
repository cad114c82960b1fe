"""
Response utilities for the wiki application.
"""
import io
from pathlib import Path
from fastapi import HTTPException
from fastapi.responses import FileResponse, RedirectResponse, StreamingResponse

def create_text_download_response(content: str, filename: str, media_type: str = "text/xml") -> StreamingResponse:
    """把文本内容作为附件下载"""
    stream = io.BytesIO(content.encode("utf-8"))
    return StreamingResponse(
        stream,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

def create_zip_download_response(zip_path: Path) -> FileResponse:
    """把压缩包作为附件下载"""
    if not zip_path.exists():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path=zip_path, filename=zip_path.name, media_type="application/zip")

def redirect_to(url: str) -> RedirectResponse:
    """POST/GET 之后重定向（303，浏览器改用GET）"""
    return RedirectResponse(url=url, status_code=303)
