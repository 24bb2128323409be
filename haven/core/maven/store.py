"""制品读取器

策略: 本地优先
  1. 本地仓库 local_repo/<cache_path>/<file_name> 存在 → 直接读取，不访问网络
  2. 不存在则从仓库地址 <url>/<cache_path>/<file_name> HTTP GET，要求 200

只读：远程下载的内容不会写回本地仓库。
"""

from __future__ import annotations

import hashlib
import http.client
import logging
import urllib.error
import urllib.request
from pathlib import Path

from haven.core.exceptions import ArtifactNotFoundError, FetchError
from haven.core.maven.models import Coordinate, Repository
from haven.utils.net import join_url, validate_url_scheme

logger = logging.getLogger(__name__)


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class ArtifactStore:
    """制品读取器 - 本地缓存 + 远程回退"""

    def __init__(self, local_repo: str | Path, timeout: int = 60) -> None:
        self.local_repo = Path(local_repo)
        self.timeout = timeout

    def local_path(self, coord: Coordinate, ext: str) -> Path:
        return self.local_repo / coord.cache_path() / coord.file_name(ext)

    def remote_url(self, coord: Coordinate, ext: str, repo: Repository) -> str:
        return join_url(repo.url, coord.cache_path().as_posix(), coord.file_name(ext))

    def fetch(self, coord: Coordinate, ext: str, repo: Repository) -> bytes:
        """获取制品文件内容

        Raises:
            ArtifactNotFoundError: 本地不存在且远程返回 404
            FetchError: 其他非 200 状态、网络错误或超时
        """
        path = self.local_path(coord, ext)
        if path.is_file():
            logger.debug("本地命中: %s", path)
            try:
                return path.read_bytes()
            except OSError as e:
                raise FetchError(f"读取本地文件失败: {path} - {e}") from e

        return self._download(self.remote_url(coord, ext, repo), repo)

    def _download(self, url: str, repo: Repository) -> bytes:
        validate_url_scheme(url, context=f"repository {repo.repo_id}")
        logger.info("Getting URL: %s", url)
        req = urllib.request.Request(url, method="GET")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # nosec B310
                status = resp.status
                body = resp.read()
        except urllib.error.HTTPError as e:
            logger.error("Failed to get URL: %s (HTTP %d)", url, e.code)
            err = ArtifactNotFoundError if e.code == 404 else FetchError
            raise err(f"下载失败: {url} - HTTP {e.code}", url=url, status=e.code) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            logger.error("Failed to get URL: %s (%s)", url, e)
            raise FetchError(f"下载失败: {url} - {e}", url=url) from e

        if status != 200:
            logger.error("Failed to get URL: %s (HTTP %d)", url, status)
            raise FetchError(f"下载失败: {url} - HTTP {status}", url=url, status=status)
        return body
