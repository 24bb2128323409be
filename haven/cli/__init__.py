"""haven 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from haven import __version__
from haven.utils.logger import setup_logging


def _parse_kv_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    """解析 key=value 参数对"""
    result: dict[str, str] = {}
    for p in pairs:
        if "=" not in p:
            raise click.BadParameter(f"格式应为 key=value: {p}")
        k, v = p.split("=", 1)
        result[k.strip()] = v.strip()
    return result


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """haven - 为 Maven 依赖生成带 SHA-256 的 Nix 清单"""
    setup_logging(
        level=os.getenv("HAVEN_LOG_LEVEL", "INFO"),
        json_output=os.getenv("HAVEN_LOG_JSON", "") == "1",
    )


# 注册子命令
from haven.cli.cmd_resolve import register as _reg_resolve  # noqa: E402

_reg_resolve(main)
