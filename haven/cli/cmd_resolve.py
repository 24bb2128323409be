"""CLI — 依赖解析与清单生成命令"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from haven.core.config import DEFAULT_CONFIG_FILE, init_config
from haven.core.exceptions import HavenError
from haven.utils.yaml_io import atomic_write

logger = logging.getLogger(__name__)


def register(group: click.Group) -> None:
    group.add_command(resolve)
    group.add_command(tree_line)
    group.add_command(list_repos)


def _fail(exc: HavenError) -> NoReturn:
    """统一出口：记录错误并以非零状态终止整个运行"""
    logger.error("Failed [%s]: %s", exc.code, exc)
    sys.exit(1)


@click.command()
@click.argument("pom", type=click.Path(dir_okay=False), default="pom.xml")
@click.option("--tree-file", default="", help="已有的 dependency:tree 输出（不指定则调用 mvn 生成）")
@click.option("--local-repo", default="", help="本地 Maven 仓库目录")
@click.option("--output", "-o", default="", help="清单输出文件（默认 stdout）")
@click.option("--config", "-c", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
@click.option("--repo", multiple=True, help="额外仓库，格式: id=url（可多次指定）")
def resolve(
    pom: str, tree_file: str, local_repo: str, output: str,
    config: str, repo: tuple[str, ...],
) -> None:
    """解析依赖并输出 Nix 清单"""
    from haven.cli import _parse_kv_pairs
    from haven.services.pin_service import PinRequest, PinService

    try:
        cfg = init_config(config)
        aggregator = PinService(cfg).run(PinRequest(
            pom=pom, tree_file=tree_file, local_repo=local_repo,
            repositories=_parse_kv_pairs(repo),
        ))
    except HavenError as e:
        _fail(e)

    manifest = aggregator.render()
    if output:
        atomic_write(Path(output), manifest)
        logger.info("清单已写入: %s", output)
    else:
        click.echo(manifest, nl=False)


@click.command(name="tree-line")
@click.argument("line")
def tree_line(line: str) -> None:
    """解析单行依赖树文本（调试用）"""
    from haven.core.maven import parse_tree_line

    try:
        entry = parse_tree_line(line)
    except HavenError as e:
        _fail(e)
    c = entry.coordinate
    click.echo(f"groupId:    {c.group}")
    click.echo(f"artifactId: {c.artifact}")
    click.echo(f"version:    {c.version}")
    click.echo(f"classifier: {c.classifier or '-'}")
    click.echo(f"type:       {entry.kind.value}")


@click.command(name="repos")
@click.argument("pom", type=click.Path(dir_okay=False), default="pom.xml")
def list_repos(pom: str) -> None:
    """列出项目描述文件中声明的仓库"""
    from haven.core.maven import RepositoryRegistry

    try:
        registry = RepositoryRegistry.from_pom(pom)
    except HavenError as e:
        _fail(e)
    if not len(registry):
        click.echo("没有声明任何仓库。")
        return
    for r in registry.list_repositories():
        click.echo(f"  {r.repo_id:20s} {r.url}")
