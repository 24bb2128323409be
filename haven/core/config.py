"""集中配置管理

提供统一的配置入口，支持从 YAML 文件加载 + 命令行覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import yaml

from haven.core.exceptions import ConfigError
from haven.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "configs/haven.yml"


@dataclass
class Config:
    """全局配置"""

    # 本地 Maven 仓库，为空时每次运行创建临时目录
    local_repo: str = ""
    mvn_command: str = "mvn"

    # 网络
    request_timeout: int = 60  # 秒

    # 额外仓库声明，优先级低于 pom.xml 中的 <repositories>
    repositories: dict[str, str] = field(default_factory=dict)

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise ConfigError(f"配置文件无效 {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}

        repos = matched.get("repositories") or {}
        if not isinstance(repos, dict):
            raise ConfigError(f"{path}: repositories 必须是 id -> url 映射")
        matched["repositories"] = {str(k): str(v) for k, v in repos.items()}

        timeout = matched.get("request_timeout", cls.request_timeout)
        if not isinstance(timeout, int) or timeout <= 0:
            raise ConfigError(f"{path}: request_timeout 必须是正整数，实际: {timeout!r}")

        cfg = cls(**matched)
        cfg.extra = extra
        return cfg


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
