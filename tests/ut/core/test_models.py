"""坐标模型测试 — 本地路径与文件名"""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from haven.core.maven.models import ArtifactKind, Coordinate, ResolvedArtifact


class TestCachePath:
    def test_group_dots_become_directories(self) -> None:
        c = Coordinate("org.apache.commons", "commons-lang3", "3.12.0")
        assert c.cache_path() == PurePosixPath("org/apache/commons/commons-lang3/3.12.0")

    @pytest.mark.parametrize("classifier", [None, "sources", "natives-linux"])
    def test_classifier_does_not_affect_directory(self, classifier: str | None) -> None:
        base = Coordinate("org.foo", "bar", "1.0")
        assert Coordinate("org.foo", "bar", "1.0", classifier).cache_path() == base.cache_path()


class TestFileName:
    def test_plain(self) -> None:
        assert Coordinate("org.foo", "bar", "1.0").file_name(".jar") == "bar-1.0.jar"

    def test_classifier_suffix_on_binary(self) -> None:
        c = Coordinate("org.foo", "bar", "1.0", "sources")
        assert c.file_name(".jar") == "bar-1.0-sources.jar"
        assert c.file_name(".aar") == "bar-1.0-sources.aar"

    def test_pom_never_has_classifier(self) -> None:
        c = Coordinate("org.foo", "bar", "1.0", "sources")
        assert c.file_name(".pom") == "bar-1.0.pom"


class TestArtifactKind:
    def test_binary_ext(self) -> None:
        assert ArtifactKind.JAR.binary_ext == ".jar"
        assert ArtifactKind.AAR.binary_ext == ".aar"
        assert ArtifactKind.POM.binary_ext is None


class TestResolvedArtifact:
    def test_structural_equality(self) -> None:
        c = Coordinate("org.foo", "bar", "1.0")
        a = ResolvedArtifact(c, "central", pom_sha256="ab")
        b = ResolvedArtifact(Coordinate("org.foo", "bar", "1.0"), "central", pom_sha256="ab")
        assert a == b
        assert len({a, b}) == 1

    def test_absent_hash_differs_from_empty(self) -> None:
        c = Coordinate("org.foo", "bar", "1.0")
        assert ResolvedArtifact(c, "central") != ResolvedArtifact(c, "central", pom_sha256="")

    def test_sort_key_absent_before_present(self) -> None:
        c = Coordinate("org.foo", "bar", "1.0")
        absent = ResolvedArtifact(c, "central")
        present = ResolvedArtifact(c, "central", jar_sha256="00")
        assert sorted([present, absent], key=ResolvedArtifact.sort_key) == [absent, present]
