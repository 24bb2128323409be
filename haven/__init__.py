"""haven - Maven 依赖解析与 SHA-256 锁定"""

__version__ = "0.1.0"
