"""
配置管理 - 进程启动时解析一次，显式传入各服务
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from painting_agent.core.exceptions import ConfigError


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API 配置
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = True

    # OpenRouter 配置（创意生成，函数调用）
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "openai/gpt-3.5-turbo"
    idea_request_timeout: float = 15

    # OpenAI 配置（图片生成）
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    image_request_timeout: float = 120
    image_download_timeout: float = 30

    # 本地存储：临时文件与最终图片共用同一目录
    uploads_dir: str = "uploads"
    uploads_url_prefix: str = "uploads"

    # 数据库配置
    database_url: str = "sqlite:///./painting_agent.db"

    # 日志配置
    log_level: str = "INFO"

    def require_openai_key(self) -> str:
        """返回 OpenAI API Key，缺失时抛出 ConfigError"""
        if not self.openai_api_key:
            raise ConfigError("OpenAI API key is missing. Please check your .env file.")
        return self.openai_api_key

    def require_openrouter_key(self) -> str:
        """返回 OpenRouter API Key，缺失时抛出 ConfigError"""
        if not self.openrouter_api_key:
            raise ConfigError("OpenRouter API key is missing. Please check your .env file.")
        return self.openrouter_api_key


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
