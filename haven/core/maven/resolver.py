"""制品解析器

对一个坐标:
  1. 读取本地仓库目录下的 _remote.repositories，确定来源仓库 ID
  2. 在仓库注册表中查找该 ID
  3. 获取 .pom（允许不存在），计算哈希
  4. POM 声明了 <parent> 时递归解析 parent（按 pom 类型）
  5. 按制品类型获取 .jar / .aar 并计算哈希

返回 [当前记录] + 全部祖先记录，去重留给汇总阶段。
"""

from __future__ import annotations

import logging
from pathlib import Path

from haven.core.exceptions import (
    ArtifactNotFoundError,
    HavenError,
    MarkerReadError,
    ParentCycleError,
)
from haven.core.maven.models import (
    MARKER_FILE,
    POM_EXT,
    ArtifactKind,
    Coordinate,
    Repository,
    ResolvedArtifact,
)
from haven.core.maven.pom import parse_parent, parse_pom
from haven.core.maven.registry import RepositoryRegistry
from haven.core.maven.store import ArtifactStore, sha256_hex

logger = logging.getLogger(__name__)


def read_marker(path: Path) -> str:
    """读取 _remote.repositories，返回第一条记录的仓库 ID

    文件格式 (Maven Resolver 生成):
        #NOTE: This is a Maven Resolver internal implementation file, ...
        lib-1.2.3.jar>central=
        lib-1.2.3.pom>central=
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MarkerReadError(f"无法读取仓库标记文件 {path}: {e}") from e

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or ">" not in line:
            continue
        repo_id = line.split(">", 1)[1].split("=", 1)[0].strip()
        if repo_id:
            return repo_id
    raise MarkerReadError(f"仓库标记文件中没有有效的仓库 ID: {path}")


class ArtifactResolver:
    """制品解析器 - 哈希计算 + parent 链递归"""

    def __init__(self, registry: RepositoryRegistry, store: ArtifactStore) -> None:
        self.registry = registry
        self.store = store

    def repository_for(self, coord: Coordinate) -> Repository:
        marker = self.store.local_repo / coord.cache_path() / MARKER_FILE
        return self.registry.lookup(read_marker(marker))

    def resolve(
        self,
        coord: Coordinate,
        kind: ArtifactKind,
        _chain: tuple[Coordinate, ...] = (),
    ) -> list[ResolvedArtifact]:
        """解析坐标及其 parent 链

        Raises:
            MarkerReadError / RepositoryNotFoundError / FetchError /
            PomParseError / ParentCycleError: 任一失败都直接向上抛出
        """
        if coord in _chain:
            cycle = " -> ".join(str(c) for c in (*_chain, coord))
            raise ParentCycleError(f"parent 链循环: {cycle}")

        try:
            return self._resolve(coord, kind, (*_chain, coord))
        except HavenError:
            # 只在顶层调用处记录一次
            if not _chain:
                logger.error("Failed for %s %s", kind.value, coord)
            raise

    def _resolve(
        self,
        coord: Coordinate,
        kind: ArtifactKind,
        chain: tuple[Coordinate, ...],
    ) -> list[ResolvedArtifact]:
        repo = self.repository_for(coord)

        try:
            pom = self.store.fetch(coord, POM_EXT, repo)
        except ArtifactNotFoundError:
            logger.warning("POM 不存在，跳过 parent 解析: %s", coord)
            pom = None

        parents: list[ResolvedArtifact] = []
        if pom is not None:
            parent = parse_parent(parse_pom(pom, source=str(coord)))
            if parent is not None:
                logger.debug("%s 的 parent: %s", coord, parent)
                parents = self.resolve(parent, ArtifactKind.POM, chain)

        ext = kind.binary_ext
        binary_sha = sha256_hex(self.store.fetch(coord, ext, repo)) if ext else None

        record = ResolvedArtifact(
            coordinate=coord,
            repo_id=repo.repo_id,
            classifier=coord.classifier,
            jar_sha256=binary_sha if kind is ArtifactKind.JAR else None,
            pom_sha256=sha256_hex(pom) if pom is not None else None,
            aar_sha256=binary_sha if kind is ArtifactKind.AAR else None,
        )
        return [record, *parents]
