"""API 依赖项：大模型客户端。测试中通过 app.dependency_overrides 替换为假客户端。"""
from jiaowotong.services.llm_service import LLMClient, get_llm_client


def get_chat_client() -> LLMClient:
    return get_llm_client()
