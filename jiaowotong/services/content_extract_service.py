"""上传文件内容提取：读取临时文件为文本并截断，读取完成后立即删除临时文件。"""
import asyncio
import logging
import tempfile
from pathlib import Path

from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader
from pptx import Presentation

from jiaowotong.core.config import settings
from jiaowotong.schemas.study import UploadedFile

logger = logging.getLogger(__name__)

# 视为纯文本、需要尝试多种编码解码的扩展名
_TEXT_EXTENSIONS = frozenset(
    {".txt", ".md", ".csv", ".json", ".xml", ".html", ".htm", ".log", ".ini", ".cfg", ".conf"}
)
# 常见编码顺序：UTF-8 -> GBK/GB18030（中文 Windows）-> Big5（繁体）-> Latin-1（兜底）
_ENCODINGS = ("utf-8", "gbk", "gb18030", "big5", "cp936", "latin-1")


def _decode_text(data: bytes) -> str:
    for enc in _ENCODINGS:
        try:
            return data.decode(enc)
        except (UnicodeDecodeError, LookupError):
            continue
    return data.decode("utf-8", errors="replace")


def _load_pptx_text(file_path: Path) -> str:
    prs = Presentation(str(file_path))
    texts = []
    for slide in prs.slides:
        for shape in slide.shapes:
            if hasattr(shape, "text"):
                texts.append(shape.text)
    return "\n".join(texts)


def _is_text(suffix: str, mime_type: str) -> bool:
    return suffix in _TEXT_EXTENSIONS or (mime_type or "").startswith("text/")


def _read_text(file_path: Path, name: str, mime_type: str) -> str:
    suffix = Path(name or file_path.name).suffix.lower()
    if suffix == ".pdf":
        docs = PyPDFLoader(str(file_path)).load()
        return "\n".join(d.page_content for d in docs)
    if suffix == ".docx":
        docs = Docx2txtLoader(str(file_path)).load()
        return "\n".join(d.page_content for d in docs)
    if suffix == ".pptx":
        return _load_pptx_text(file_path)
    data = file_path.read_bytes()
    if _is_text(suffix, mime_type):
        return _decode_text(data)
    return data.decode("utf-8", errors="replace")


def _remove_quietly(file_path: Path) -> None:
    try:
        file_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("清理临时文件失败 %s: %s", file_path, e)


def extract_upload(
    file_path: str | Path,
    name: str,
    mime_type: str = "",
    max_chars: int | None = None,
) -> UploadedFile:
    """
    读取上传文件内容，截取前 max_chars 个字符（默认 settings.max_content_chars）。

    读取失败不抛异常：content 写成「无法读取文件内容: <原因>」，保证后续提示词构造对每个文件一致。
    无论成功与否，读取后都会删除 file_path，删除失败只记日志。
    """
    path = Path(file_path)
    limit = settings.max_content_chars if max_chars is None else max_chars
    try:
        content = _read_text(path, name, mime_type)[:limit]
    except Exception as e:
        logger.error("读取文件 %s 错误: %s", name, e)
        content = f"无法读取文件内容: {e}"
    finally:
        _remove_quietly(path)
    return UploadedFile(name=name, mime_type=mime_type or "", content=content)


async def extract_upload_async(
    file_path: str | Path,
    name: str,
    mime_type: str = "",
    max_chars: int | None = None,
) -> UploadedFile:
    return await asyncio.to_thread(extract_upload, file_path, name, mime_type, max_chars)


def save_upload_to_temp(data: bytes, suffix: str = "") -> str:
    """把上传内容写入临时文件，返回路径；由 extract_upload 负责删除。"""
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        tmp.write(data)
        return tmp.name


async def save_upload_to_temp_async(data: bytes, suffix: str = "") -> str:
    return await asyncio.to_thread(save_upload_to_temp, data, suffix)
