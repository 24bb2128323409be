"""Maven 制品解析模块

- models.py:   坐标与解析记录
- pom.py:      POM 读取 (仓库声明 / parent)
- registry.py: 仓库注册表
- tree.py:     依赖树行解析
- store.py:    本地优先 + 远程回退的制品读取
- resolver.py: 哈希计算与 parent 链递归
- manifest.py: 去重汇总与 Nix 清单输出
"""

from haven.core.maven.manifest import ManifestAggregator, render_nix
from haven.core.maven.models import ArtifactKind, Coordinate, Repository, ResolvedArtifact
from haven.core.maven.registry import RepositoryRegistry
from haven.core.maven.resolver import ArtifactResolver
from haven.core.maven.store import ArtifactStore
from haven.core.maven.tree import TreeEntry, iter_tree_entries, parse_tree_line

__all__ = [
    "ArtifactKind",
    "ArtifactResolver",
    "ArtifactStore",
    "Coordinate",
    "ManifestAggregator",
    "Repository",
    "RepositoryRegistry",
    "ResolvedArtifact",
    "TreeEntry",
    "iter_tree_entries",
    "parse_tree_line",
    "render_nix",
]
