"""项目配置设置."""

from dotenv import load_dotenv
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

# 先加载.env.example（最低优先级），再加载.env（覆盖前者），最后环境变量最高
load_dotenv(dotenv_path=Path(__file__).parent.parent.parent / '.env.example', override=False)
load_dotenv(dotenv_path=Path(__file__).parent.parent.parent / '.env', override=True)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class ContextConfig(BaseModel):
    """上下文窗口配置."""

    max_prefix_length: int = Field(default_factory=lambda: int(os.environ.get("MAX_PREFIX_LENGTH", "2000")))  # 前缀最大字符数
    max_suffix_length: int = Field(default_factory=lambda: int(os.environ.get("MAX_SUFFIX_LENGTH", "500")))  # 后缀最大字符数
    semantic_window_size: int = Field(default_factory=lambda: int(os.environ.get("SEMANTIC_WINDOW_SIZE", "5")))  # 相似代码块的行数
    enable_extended_triggers: bool = Field(default_factory=lambda: _env_flag("ENABLE_EXTENDED_TRIGGERS"))  # 扩展多行触发
    syntactic_triggers: bool = Field(default_factory=lambda: _env_flag("SYNTACTIC_TRIGGERS"))  # 语法触发（透传给分类器）


class LogConfig(BaseModel):
    """日志配置."""

    level: str = Field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))  # 日志级别
    # 精简日志格式
    format: str = Field(default_factory=lambda: os.environ.get("LOG_FORMAT", "<level>{level: <8}</level>| - <level>{message}</level>"))
    log_file: Optional[str] = Field(default_factory=lambda: os.environ.get("LOG_FILE") or None)  # 日志文件名，为空时不写文件
    rotation: str = Field(default_factory=lambda: os.environ.get("LOG_ROTATION", "10 MB"))  # 日志轮转大小
    retention: str = Field(default_factory=lambda: os.environ.get("LOG_RETENTION", "1 week"))  # 日志保留时间


class Settings(BaseModel):
    """项目全局设置."""

    context: ContextConfig = Field(default_factory=ContextConfig)  # 上下文窗口相关配置
    log: LogConfig = Field(default_factory=LogConfig)  # 日志相关配置

    # 项目路径配置
    project_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)  # 项目根目录
    output_dir: Path = Field(default_factory=lambda: Path(os.environ.get("OUTPUT_DIR", str(Path(__file__).parent.parent.parent / "output"))))  # 输出目录（日志、报告）


# 单例模式，避免多次实例化
_settings = None
def get_settings():
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

settings = get_settings()
