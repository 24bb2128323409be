"""锁定服务 — CLI 共享的完整流程

仓库注册表 → 依赖树（读取文件或调用 mvn 生成）→ 逐行解析 →
制品解析 + 哈希 → 汇总去重。

严格串行、快速失败：任一行解析失败即向上抛出，不产生部分结果。
"""

from __future__ import annotations

import logging
import tempfile
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from haven.core.config import Config, get_config
from haven.core.exceptions import ConfigError, ParseError
from haven.core.maven import (
    ArtifactResolver,
    ArtifactStore,
    ManifestAggregator,
    RepositoryRegistry,
    iter_tree_entries,
)
from haven.utils.shell import run_cmd

logger = logging.getLogger(__name__)

DEFAULT_M2_REPO = Path.home() / ".m2" / "repository"


@dataclass
class PinRequest:
    """锁定请求 DTO"""

    pom: str = "pom.xml"
    tree_file: str = ""
    local_repo: str = ""
    repositories: dict[str, str] = field(default_factory=dict)


def generate_tree(pom: Path, local_repo: Path, output: Path, mvn: str = "mvn") -> None:
    """调用 mvn dependency:tree 生成依赖树报告，同时填充本地仓库"""
    run_cmd(
        [
            mvn, "-f", str(pom), "dependency:tree", "-Dverbose",
            f"-DoutputFile={output}", f"-Dmaven.repo.local={local_repo}",
        ],
        cwd=str(pom.parent),
        label="mvn dependency:tree",
    )


class PinService:
    """依赖锁定服务"""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    def run(self, req: PinRequest) -> ManifestAggregator:
        """执行完整流程，返回汇总结果（未渲染）"""
        pom = Path(req.pom).resolve()
        registry = RepositoryRegistry.from_pom(
            pom, extra={**self.config.repositories, **req.repositories},
        )

        with ExitStack() as stack:
            local_repo = self._local_repo(req, stack)
            tree_file = Path(req.tree_file) if req.tree_file else None
            if tree_file is None:
                tmp_dir = Path(stack.enter_context(tempfile.TemporaryDirectory(prefix="haven-")))
                tree_file = tmp_dir / "tree.txt"
                generate_tree(pom, local_repo, tree_file, mvn=self.config.mvn_command)

            store = ArtifactStore(local_repo, timeout=self.config.request_timeout)
            resolver = ArtifactResolver(registry, store)
            aggregator = ManifestAggregator()

            try:
                f = stack.enter_context(open(tree_file, encoding="utf-8"))
            except OSError as e:
                raise ConfigError(f"无法读取依赖树报告 {tree_file}: {e}") from e
            try:
                for entry in iter_tree_entries(f):
                    aggregator.add(resolver.resolve(entry.coordinate, entry.kind))
            except UnicodeDecodeError as e:
                raise ParseError(f"依赖树报告不是合法的 UTF-8 文本 {tree_file}: {e}") from e

        logger.info("解析完成: %d 条记录", len(aggregator))
        return aggregator

    def _local_repo(self, req: PinRequest, stack: ExitStack) -> Path:
        configured = req.local_repo or self.config.local_repo
        if configured:
            return Path(configured)
        if req.tree_file:
            # 已有依赖树报告时沿用 Maven 默认本地仓库
            return DEFAULT_M2_REPO
        tmp = stack.enter_context(tempfile.TemporaryDirectory(prefix="haven-m2-"))
        logger.info("使用临时本地仓库: %s", tmp)
        return Path(tmp)
