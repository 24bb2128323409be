"""统一异常体系

所有业务异常继承 HavenError。解析、拉取、仓库查找任一环节失败都会
沿调用链向上抛出，由 CLI 入口统一记录并以非零状态退出，不做重试，
也不输出部分结果。
"""

from __future__ import annotations


class HavenError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(HavenError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(HavenError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class ParseError(HavenError):
    """依赖树行无法按冒号分隔格式拆解"""

    code = "PARSE_ERROR"

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


class PomParseError(ParseError):
    """POM 文件不是合法的 XML"""

    code = "POM_PARSE_ERROR"


class RepositoryNotFoundError(HavenError):
    """仓库 ID 未在项目描述文件中声明"""

    code = "REPOSITORY_NOT_FOUND"

    def __init__(self, repo_id: str, known: list[str] | None = None) -> None:
        super().__init__(
            f"仓库 '{repo_id}' 未声明。可用: {sorted(known or [])}"
        )
        self.repo_id = repo_id


class FetchError(HavenError):
    """制品文件无法从本地缓存或远程仓库获取"""

    code = "FETCH_ERROR"

    def __init__(self, message: str, url: str = "", status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ArtifactNotFoundError(FetchError):
    """远程仓库明确返回不存在 (HTTP 404)"""

    code = "ARTIFACT_NOT_FOUND"


class MarkerReadError(HavenError):
    """_remote.repositories 标记文件缺失或无法解析"""

    code = "MARKER_READ_ERROR"


class ParentCycleError(HavenError):
    """parent 链出现循环引用"""

    code = "PARENT_CYCLE"


class ExecutionError(HavenError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"
