"""结果汇总与清单输出

所有解析记录放入集合去重（按全部字段结构相等），输出时按固定的
字段字典序排序，保证多次运行结果一致。清单为 Nix 列表字面量:

    [
      { artifactId = "lib";
        groupId = "com.example";
        version = "1.2.3";
        repo = "central";
        jarSha256 = "...";
        pomSha256 = "...";
        aarSha256 = null;
      }

    ]
"""

from __future__ import annotations

from collections.abc import Iterable

from haven.core.maven.models import ResolvedArtifact


class ManifestAggregator:
    """解析记录汇总器"""

    def __init__(self) -> None:
        self._records: set[ResolvedArtifact] = set()

    def add(self, records: Iterable[ResolvedArtifact]) -> None:
        self._records.update(records)

    def __len__(self) -> int:
        return len(self._records)

    def records(self) -> list[ResolvedArtifact]:
        return sorted(self._records, key=ResolvedArtifact.sort_key)

    def render(self) -> str:
        return render_nix(self.records())


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("${", "\\${")
    return f'"{escaped}"'


def _hash(value: str | None) -> str:
    return "null" if value is None else _quote(value)


def record_to_nix(record: ResolvedArtifact) -> str:
    """单条记录的 Nix attrset 文本，以换行结尾"""
    c = record.coordinate
    lines = [
        f"  {{ artifactId = {_quote(c.artifact)};",
        f"    groupId = {_quote(c.group)};",
        f"    version = {_quote(c.version)};",
        f"    repo = {_quote(record.repo_id)};",
        f"    jarSha256 = {_hash(record.jar_sha256)};",
        f"    pomSha256 = {_hash(record.pom_sha256)};",
        f"    aarSha256 = {_hash(record.aar_sha256)};",
    ]
    if c.classifier is not None:
        lines.append(f"    classifier = {_quote(c.classifier)};")
    lines.append("  }")
    return "".join(f"{line}\n" for line in lines)


def render_nix(records: Iterable[ResolvedArtifact]) -> str:
    """完整清单文本，每条记录后跟一个空行"""
    out = ["[\n"]
    for record in records:
        out.append(record_to_nix(record))
        out.append("\n")
    out.append("]\n")
    return "".join(out)
