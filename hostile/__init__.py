"""
Hostile - 结构化编辑系统 hosts 文件
"""

__version__ = "1.0.0"
__author__ = "Hostile Project"

from hostile.app import Hostile, HostileError
from hostile.config import Config
from hostile.document import Document
from hostile.hosts_manager import HostsFileManager
from hostile.models import Entry, OpaqueLine

__all__ = [
    "Hostile",
    "HostileError",
    "Config",
    "Document",
    "HostsFileManager",
    "Entry",
    "OpaqueLine",
]
