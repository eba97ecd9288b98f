"""从模型的自由文本输出中尽力提取 JSON。模型输出不可靠，这里永远不抛异常。"""
import json
import logging
import re
from typing import Any

from jiaowotong.core.errors import ParseError

logger = logging.getLogger(__name__)

# ```json ... ``` 代码块，取第一个
_FENCED_JSON_RE = re.compile(r"```json[ \t]*\r?\n([\s\S]*?)\r?\n?```", re.IGNORECASE)
# 第一个 { 到最后一个 }
_BRACES_RE = re.compile(r"\{[\s\S]*\}")


def _parse(candidate: str) -> Any:
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(str(e)) from e


def _candidates(raw: str) -> list[str]:
    out = []
    m = _FENCED_JSON_RE.search(raw)
    if m:
        out.append(m.group(1))
    m = _BRACES_RE.search(raw)
    if m:
        out.append(m.group(0))
    return out


def extract_structured(raw: str) -> Any:
    """
    依次尝试 ```json 代码块、裸 {...}，解析成功即返回；
    都失败时返回 {"raw_response": raw}。
    """
    raw = raw or ""
    for candidate in _candidates(raw):
        try:
            return _parse(candidate)
        except ParseError as e:
            logger.info("[response_parser] JSON 解析失败，尝试下一种方式: %s", e)
    return {"raw_response": raw}
