"""依赖树报告解析

`mvn dependency:tree -DoutputFile=...` 输出每行一个依赖:

    com.example:app:jar:1.0.0                       <- 首行为项目自身，丢弃
    +- com.example:lib:jar:1.2.3:compile
    |  \\- org.foo:bar:jar:sources:2.0:runtime
    +- (org.foo:baz:jar:1.1:compile - omitted for duplicate)

行首的树形装饰字符（非字母数字）直接跳过，剩余部分按 ':' 拆分为
group / artifact / type / classifier-或-version / version-或-scope。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from haven.core.exceptions import ParseError
from haven.core.maven.models import ArtifactKind, Coordinate

logger = logging.getLogger(__name__)

MAVEN_SCOPES = frozenset(
    ("compile", "provided", "runtime", "test", "system", "import"),
)


@dataclass(frozen=True)
class TreeEntry:
    """依赖树中的一个条目"""

    coordinate: Coordinate
    kind: ArtifactKind


def _strip_decoration(line: str) -> str:
    for i, ch in enumerate(line):
        if ch.isalnum():
            return line[i:]
    return ""


def _is_scope(segment: str) -> bool:
    words = segment.split()
    return bool(words) and words[0].rstrip(")") in MAVEN_SCOPES


def parse_tree_line(line: str) -> TreeEntry:
    """将一行依赖树文本解析为坐标 + 制品类型

    第五段不再含 ':' 时，若它是 scope 则第四段为版本且无 classifier；
    否则第四段是 classifier，第五段（到下一个 ':' 为止）是版本。

    Raises:
        ParseError: 行格式不符合 group:artifact:type:... 或类型不受支持
    """
    body = _strip_decoration(line.rstrip("\r\n"))
    parts = body.split(":")
    if len(parts) < 4:
        raise ParseError(f"依赖树行字段不足: {line.strip()!r}", line=line)

    group, artifact, type_, fourth = (p.strip() for p in parts[:4])
    rest = parts[4:]

    if not rest or (len(rest) == 1 and _is_scope(rest[0])):
        classifier, version = None, fourth
    else:
        classifier, version = fourth, rest[0].strip()

    if not (group and artifact and version):
        raise ParseError(f"依赖树行缺少必要字段: {line.strip()!r}", line=line)

    try:
        kind = ArtifactKind(type_)
    except ValueError:
        raise ParseError(
            f"不支持的制品类型 '{type_}': {line.strip()!r}", line=line,
        ) from None

    return TreeEntry(
        coordinate=Coordinate(
            group=group,
            artifact=artifact,
            version=version,
            classifier=classifier or None,
        ),
        kind=kind,
    )


def iter_tree_entries(lines: Iterable[str]) -> Iterator[TreeEntry]:
    """逐行解析依赖树，首行（项目自身）丢弃，空行跳过"""
    it = iter(lines)
    header = next(it, None)
    if header is None:
        return
    logger.debug("跳过依赖树首行: %s", header.rstrip())
    for line in it:
        if not line.strip():
            continue
        logger.debug("%s", line.rstrip())
        yield parse_tree_line(line)
