"""POM 文件读取

只关心两类信息:
- 项目描述文件中的 <repositories> 声明 (id -> url)
- 制品 POM 中的 <parent> 坐标

标签按本地名匹配，带 xmlns="http://maven.apache.org/POM/4.0.0"
命名空间的 POM 和不带命名空间的 POM 都能处理。
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator

from haven.core.exceptions import PomParseError
from haven.core.maven.models import Coordinate

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_pom(data: bytes, source: str = "") -> ET.Element:
    """解析 POM 内容，返回根元素"""
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise PomParseError(f"POM 解析失败 {source}: {e}") from e


def children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """按本地标签名遍历直接子元素"""
    for child in element:
        if isinstance(child.tag, str) and _local_name(child.tag) == name:
            yield child


def child_text(element: ET.Element, name: str) -> str | None:
    """第一个同名子元素的文本（去除首尾空白），不存在返回 None"""
    for child in children(element, name):
        return (child.text or "").strip()
    return None


def parse_repositories(root: ET.Element) -> dict[str, str]:
    """提取 <repositories><repository><id/><url/> 声明"""
    repos: dict[str, str] = {}
    for repo_list in children(root, "repositories"):
        for repo in children(repo_list, "repository"):
            repo_id = child_text(repo, "id")
            url = child_text(repo, "url")
            if not repo_id or not url:
                logger.warning("忽略不完整的仓库声明: id=%r url=%r", repo_id, url)
                continue
            repos[repo_id] = url
    return repos


def parse_parent(root: ET.Element) -> Coordinate | None:
    """提取 <parent> 坐标；未声明或字段不全时返回 None"""
    for parent in children(root, "parent"):
        group = child_text(parent, "groupId")
        artifact = child_text(parent, "artifactId")
        version = child_text(parent, "version")
        if not (group and artifact and version):
            logger.warning(
                "parent 声明不完整，已忽略: %s:%s:%s", group, artifact, version,
            )
            return None
        return Coordinate(
            group=group,
            artifact=artifact,
            version=version,
            classifier=child_text(parent, "classifier") or None,
        )
    return None
