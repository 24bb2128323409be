"""Maven 制品数据模型

数据类:
- Coordinate: 包坐标 (groupId / artifactId / version / classifier)
- ArtifactKind: 依赖树声明的制品类型 (jar / aar / pom)
- Repository: 仓库 ID 与基础地址
- ResolvedArtifact: 已解析、已计算哈希的制品记录
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

POM_EXT = ".pom"
MARKER_FILE = "_remote.repositories"


class ArtifactKind(str, Enum):
    """依赖树条目声明的制品类型"""

    JAR = "jar"
    AAR = "aar"
    POM = "pom"

    @property
    def binary_ext(self) -> str | None:
        """主二进制文件扩展名，pom 类型没有二进制"""
        if self is ArtifactKind.POM:
            return None
        return f".{self.value}"


@dataclass(frozen=True)
class Coordinate:
    """包坐标，四个字段完全相同才视为同一个包"""

    group: str
    artifact: str
    version: str
    classifier: str | None = None

    def cache_path(self) -> PurePosixPath:
        """本地仓库中的相对目录: group/with/dots/artifact/version

        classifier 只影响文件名，不影响目录。
        """
        return PurePosixPath(*self.group.split("."), self.artifact, self.version)

    def file_name(self, ext: str) -> str:
        """制品文件名: artifact-version[-classifier]ext

        POM 文件从不带 classifier 后缀。
        """
        suffix = ""
        if self.classifier and ext != POM_EXT:
            suffix = f"-{self.classifier}"
        return f"{self.artifact}-{self.version}{suffix}{ext}"

    def __str__(self) -> str:
        parts = [self.group, self.artifact, self.version]
        if self.classifier:
            parts.append(self.classifier)
        return ":".join(parts)


@dataclass(frozen=True)
class Repository:
    """远程仓库"""

    repo_id: str
    url: str


def _opt_key(value: str | None) -> tuple[bool, str]:
    # 缺失值排在存在值之前
    return (value is not None, value or "")


@dataclass(frozen=True)
class ResolvedArtifact:
    """单个已解析制品

    jar_sha256 / aar_sha256 至多一个有值；pom_sha256 在 POM 可获取时有值。
    哈希为 SHA-256 十六进制字符串，缺失用 None 表示。
    """

    coordinate: Coordinate
    repo_id: str
    classifier: str | None = None
    jar_sha256: str | None = None
    pom_sha256: str | None = None
    aar_sha256: str | None = None

    def sort_key(self) -> tuple:
        """按全部字段的字典序排序，保证输出稳定"""
        c = self.coordinate
        return (
            c.group, c.artifact, c.version, _opt_key(c.classifier),
            self.repo_id,
            _opt_key(self.classifier),
            _opt_key(self.jar_sha256),
            _opt_key(self.pom_sha256),
            _opt_key(self.aar_sha256),
        )
