import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    environment: str = os.getenv("ENVIRONMENT", "development")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "7860"))
    # 上传单个文件大小上限（字节），默认 50MB
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))
    # 读取上传文件时保留的最大字符数（按 Unicode 字符计）
    max_content_chars: int = int(os.getenv("MAX_CONTENT_CHARS", "5000"))
    # DeepSeek（OpenAI 兼容协议）。密钥为空时服务照常启动，调用时才失败并走备用方案
    deepseek_api_key: str = os.getenv("DEEPSEEK_KEY", "")
    deepseek_base_url: str = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com")
    llm_model: str = os.getenv("LLM_MODEL", "deepseek-chat")
    llm_max_tokens: int = int(os.getenv("LLM_MAX_TOKENS", "4000"))
    # 单次调用超时（秒）
    llm_timeout: float = float(os.getenv("LLM_TIMEOUT", "60"))


settings = Settings()
