"""大模型服务：通过 OpenAI 兼容协议调用 DeepSeek chat completions。

单次调用、不自动重试；失败时抛 ConfigurationError / UpstreamError，由调用方决定是否走备用方案。
"""
import logging
from dataclasses import dataclass
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from jiaowotong.core.config import Settings, settings
from jiaowotong.core.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

# 出题时使用更低的 temperature，让输出更稳定
TEST_PAPER_TEMPERATURE = 0.5
DEFAULT_TEMPERATURE = 0.7


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = ""
    base_url: str = "https://api.deepseek.com"
    model: str = "deepseek-chat"
    max_tokens: int = 4000
    timeout: float = 60.0

    @classmethod
    def from_settings(cls, s: Settings = settings) -> "LLMConfig":
        return cls(
            api_key=s.deepseek_api_key,
            base_url=s.deepseek_base_url,
            model=s.llm_model,
            max_tokens=s.llm_max_tokens,
            timeout=s.llm_timeout,
        )


def _normalize_usage(raw: Any) -> dict[str, int] | None:
    """将 usage 转为统一格式：inputTokens, outputTokens, totalTokens。"""
    if raw is None:
        return None
    inp = getattr(raw, "input_tokens", None) or getattr(raw, "prompt_tokens", None)
    out = getattr(raw, "output_tokens", None) or getattr(raw, "completion_tokens", None)
    total = getattr(raw, "total_tokens", None)
    if inp is None and out is None and total is None:
        return None
    if total is None:
        total = (inp or 0) + (out or 0)
    return {
        "inputTokens": int(inp) if inp is not None else 0,
        "outputTokens": int(out) if out is not None else 0,
        "totalTokens": int(total),
    }


class LLMClient:
    """DeepSeek 客户端。http_client 可注入，便于测试时替换传输层。"""

    def __init__(self, config: LLMConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if not self.config.api_key:
            raise ConfigurationError("DeepSeek API密钥未配置")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    async def call(self, messages: list[dict[str, str]], temperature: float = DEFAULT_TEMPERATURE) -> str:
        client = self._get_client()
        try:
            completion = await client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                temperature=temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error("DeepSeek API调用错误: status=%s body=%s", e.status_code, e.body)
            raise UpstreamError(f"DeepSeek API返回错误状态 {e.status_code}", status_code=e.status_code, body=e.body) from e
        except openai.APIError as e:
            # 网络错误、超时等，没有 HTTP 状态
            logger.error("DeepSeek API调用错误: %s", e)
            raise UpstreamError(f"DeepSeek API调用失败: {e}") from e

        usage = _normalize_usage(getattr(completion, "usage", None))
        if usage:
            logger.info("[llm] model=%s usage=%s", self.config.model, usage)
        if not completion.choices:
            raise UpstreamError("DeepSeek API响应缺少 choices")
        return completion.choices[0].message.content or ""


_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """进程内共享的客户端，配置来自环境变量。"""
    global _client
    if _client is None:
        _client = LLMClient(LLMConfig.from_settings())
    return _client
