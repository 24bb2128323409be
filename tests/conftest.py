"""共享 fixture — 本地 Maven 仓库构造 + 假远程仓库

  local_repo.add(coord, pom=..., jar=...)   在 tmp_path 下按 Maven 布局写文件
                                            并生成 _remote.repositories 标记
  remote.files[url] = b"..."                假 HTTP 仓库，未登记的 URL 返回 404
  remote.requested                          记录全部请求过的 URL
  use_executor(stub)                        替换子进程执行器，用例结束后恢复
"""

from __future__ import annotations

import io
import logging
import urllib.error
from pathlib import Path

import pytest

from haven.core.maven.models import MARKER_FILE, Coordinate
from haven.utils.shell import set_executor

REPO_URL = "https://repo.example/maven2"


class LocalRepo:
    def __init__(self, root: Path) -> None:
        self.root = root

    def dir_for(self, coord: Coordinate) -> Path:
        return self.root / coord.cache_path()

    def add(
        self,
        coord: Coordinate,
        *,
        pom: bytes | None = None,
        jar: bytes | None = None,
        aar: bytes | None = None,
        repo_id: str | None = "central",
    ) -> Path:
        d = self.dir_for(coord)
        d.mkdir(parents=True, exist_ok=True)
        entries = []
        for ext, data in ((".pom", pom), (".jar", jar), (".aar", aar)):
            if data is None:
                continue
            name = coord.file_name(ext)
            (d / name).write_bytes(data)
            entries.append(name)
        if repo_id is not None:
            lines = [
                "#NOTE: This is a Maven Resolver internal implementation file, "
                "its format can be changed without prior notice.",
                "#Mon Jan 01 00:00:00 UTC 2024",
            ]
            names = entries or [coord.file_name(".pom")]
            lines += [f"{n}>{repo_id}=" for n in names]
            (d / MARKER_FILE).write_text("\n".join(lines) + "\n", encoding="utf-8")
        return d


class _Response:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _Response:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class FakeRemote:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.errors: dict[str, int] = {}
        self.requested: list[str] = []
        self.offline = False

    def urlopen(self, req, timeout=None):  # noqa: ANN001
        url = req.full_url if hasattr(req, "full_url") else req
        self.requested.append(url)
        if self.offline:
            raise urllib.error.URLError("connection refused")
        if url in self.errors:
            code = self.errors[url]
            raise urllib.error.HTTPError(url, code, "error", None, io.BytesIO())
        if url not in self.files:
            raise urllib.error.HTTPError(url, 404, "Not Found", None, io.BytesIO())
        return _Response(self.files[url])


@pytest.fixture()
def local_repo(tmp_path: Path) -> LocalRepo:
    root = tmp_path / "m2"
    root.mkdir()
    return LocalRepo(root)


@pytest.fixture()
def remote(monkeypatch: pytest.MonkeyPatch) -> FakeRemote:
    fake = FakeRemote()
    monkeypatch.setattr("urllib.request.urlopen", fake.urlopen)
    return fake


def _build_pom(parent: Coordinate | None = None, namespaced: bool = True) -> bytes:
    """构造最小 POM 内容"""
    ns = ' xmlns="http://maven.apache.org/POM/4.0.0"' if namespaced else ""
    parent_xml = ""
    if parent is not None:
        classifier = (
            f"<classifier>{parent.classifier}</classifier>" if parent.classifier else ""
        )
        parent_xml = (
            "<parent>"
            f"<groupId>{parent.group}</groupId>"
            f"<artifactId>{parent.artifact}</artifactId>"
            f"<version>{parent.version}</version>"
            f"{classifier}"
            "</parent>"
        )
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>\n<project{ns}>'
        "<modelVersion>4.0.0</modelVersion>"
        f"{parent_xml}"
        "</project>"
    ).encode()


def _write_project_pom(tmp_path: Path, repos: dict[str, str]) -> Path:
    """写入带 <repositories> 声明的项目 pom.xml"""
    items = "".join(
        f"<repository><id>{k}</id><url>{v}</url></repository>"
        for k, v in repos.items()
    )
    path = tmp_path / "pom.xml"
    path.write_text(
        '<project xmlns="http://maven.apache.org/POM/4.0.0">'
        "<groupId>com.example</groupId><artifactId>app</artifactId>"
        "<version>1.0.0</version>"
        f"<repositories>{items}</repositories>"
        "</project>",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def pom_xml():
    return _build_pom


@pytest.fixture()
def project_pom(tmp_path: Path):
    def _make(repos: dict[str, str] | None = None) -> Path:
        return _write_project_pom(tmp_path, {"central": REPO_URL} if repos is None else repos)
    return _make


@pytest.fixture()
def make_local_repo():
    """按任意根目录构造 LocalRepo（用于 mvn 生成的临时仓库）"""
    return LocalRepo


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI 入口会重配根日志器，用例结束后清理，避免写入已关闭的流"""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture()
def use_executor():
    """装入假执行器（mvn 等），用例结束后恢复原执行器"""
    previous = []

    def _install(executor):
        previous.append(set_executor(executor))
        return executor

    yield _install
    if previous:
        set_executor(previous[0])
