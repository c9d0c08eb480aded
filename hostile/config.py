"""
配置管理模块，支持环境变量
"""

import os
import platform
from dataclasses import dataclass


def default_hosts_path() -> str:
    """返回当前平台的系统 hosts 文件路径"""
    if platform.system() == "Windows":
        return "C:/Windows/System32/drivers/etc/hosts"
    return "/etc/hosts"


# 换行符配置值到实际换行符的映射
EOL_STYLES = {
    "native": os.linesep,
    "lf": "\n",
    "crlf": "\r\n",
}


@dataclass
class Config:
    """应用配置类，从环境变量加载配置"""

    hosts_file_path: str = default_hosts_path()
    log_level: str = "WARNING"
    eol_style: str = "native"

    @classmethod
    def from_env(cls) -> "Config":
        """
        从环境变量加载配置

        环境变量说明:
            HOSTS_FILE: hosts 文件路径 (默认: 平台默认路径)
            LOG_LEVEL: 日志级别 (默认: WARNING)
            HOSTS_EOL: 写入时使用的换行符 native/lf/crlf (默认: native)
        """
        return cls(
            hosts_file_path=os.getenv("HOSTS_FILE", default_hosts_path()),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
            eol_style=os.getenv("HOSTS_EOL", "native").lower()
        )

    @property
    def eol(self) -> str:
        """写入 hosts 文件时使用的换行符"""
        return EOL_STYLES[self.eol_style]

    def validate(self) -> None:
        """验证配置是否有效"""
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"无效的 LOG_LEVEL: {self.log_level}. "
                f"必须是以下之一: {', '.join(sorted(valid_log_levels))}"
            )
        if self.eol_style not in EOL_STYLES:
            raise ValueError(
                f"无效的 HOSTS_EOL: {self.eol_style}. "
                f"必须是以下之一: {', '.join(EOL_STYLES)}"
            )
        if not self.hosts_file_path:
            raise ValueError("HOSTS_FILE 不能为空")
