"""仓库注册表

职责:
- 从项目 pom.xml 的 <repositories> 段构建 id -> url 映射
- 合并配置文件中的额外仓库（pom.xml 中的声明优先）
- 按 ID 查找仓库，未知 ID 直接报错
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from haven.core.exceptions import ConfigError, RepositoryNotFoundError
from haven.core.maven.models import Repository
from haven.core.maven.pom import parse_pom, parse_repositories
from haven.utils.net import validate_url_scheme

logger = logging.getLogger(__name__)


class RepositoryRegistry:
    """仓库注册表 - 构建后只读"""

    def __init__(self, repos: Mapping[str, str]) -> None:
        for repo_id, url in repos.items():
            validate_url_scheme(url, context=f"repository {repo_id}")
        self._repos: dict[str, str] = dict(repos)

    @classmethod
    def from_pom(
        cls,
        pom_path: str | Path,
        extra: Mapping[str, str] | None = None,
    ) -> RepositoryRegistry:
        """从项目描述文件加载仓库声明"""
        path = Path(pom_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ConfigError(f"无法读取项目描述文件 {path}: {e}") from e

        declared = parse_repositories(parse_pom(data, source=str(path)))
        repos = {**(extra or {}), **declared}
        logger.info("已加载 %d 个仓库: %s", len(repos), ", ".join(sorted(repos)))
        return cls(repos)

    def lookup(self, repo_id: str) -> Repository:
        """按 ID 查找仓库，不存在抛 RepositoryNotFoundError"""
        url = self._repos.get(repo_id)
        if url is None:
            raise RepositoryNotFoundError(repo_id, list(self._repos))
        return Repository(repo_id=repo_id, url=url)

    def __len__(self) -> int:
        return len(self._repos)

    def list_repositories(self) -> list[Repository]:
        """按 ID 排序列出全部仓库"""
        return [Repository(k, self._repos[k]) for k in sorted(self._repos)]
