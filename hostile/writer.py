"""
序列化 Document 并写回 hosts 文件，写入前创建带时间戳的备份
"""

import asyncio
import logging
import os
import shutil
import stat
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from hostile.completion import Completion, CompletionCallback
from hostile.document import Document
from hostile.reader import ENCODING, ENCODING_ERRORS

CHUNK_SIZE = 64 * 1024
TEMP_PREFIX = ".hosts.tmp."


def iter_rendered(doc: Document, eol: str = os.linesep, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """
    分块生成序列化文本

    各行之间用 eol 分隔，最后一行之后不加换行符。
    """
    buffer = []
    size = 0
    for index, line in enumerate(doc):
        piece = line.to_hosts_line() if index == 0 else eol + line.to_hosts_line()
        buffer.append(piece)
        size += len(piece)
        if size >= chunk_size:
            yield "".join(buffer)
            buffer = []
            size = 0
    if buffer:
        yield "".join(buffer)


def render(doc: Document, eol: str = os.linesep) -> str:
    """把 Document 序列化为文本"""
    return "".join(iter_rendered(doc, eol))


def timestamp(now: Optional[datetime] = None) -> str:
    """
    备份文件使用的本地时间戳，精确到秒

    格式: 年_月_日_时_分_秒，分和秒补零，例如 2024_3_7_9_05_01
    """
    now = now or datetime.now()
    return f"{now.year}_{now.month}_{now.day}_{now.hour}_{now.minute:02d}_{now.second:02d}"


def backup_path(path: Union[str, Path], now: Optional[datetime] = None) -> Path:
    return Path(f"{path}.{timestamp(now)}")


def make_backup(
    path: Union[str, Path],
    now: Optional[datetime] = None,
    logger: logging.Logger = logging.getLogger("hostile"),
) -> Path:
    """
    把当前文件内容复制到 <path>.<时间戳>

    同一秒内的多次备份会互相覆盖。

    返回:
        备份文件路径
    """
    target = backup_path(path, now)
    shutil.copyfile(path, target)
    logger.info(f"已备份 {path} 到 {target}")
    return target


def _log_write_error(logger: logging.Logger, path: Path, error: Exception) -> None:
    if isinstance(error, PermissionError):
        logger.error(
            f"写入 hosts 文件权限被拒绝: {path}. "
            "请使用管理员权限重新运行。"
        )
    else:
        logger.error(f"更新 hosts 文件失败: {error}")


def _discard(temp_path: str) -> None:
    if os.path.exists(temp_path):
        os.unlink(temp_path)


def _write_replacement(path: Path, mode: int, chunks: Iterable[str]) -> None:
    # 写入同目录的临时文件，再原子性替换
    temp_fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=TEMP_PREFIX, text=True)
    try:
        with os.fdopen(temp_fd, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
            for chunk in chunks:
                f.write(chunk)
        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
    except Exception:
        _discard(temp_path)
        raise


def persist(
    path: Union[str, Path],
    doc: Document,
    eol: str = os.linesep,
    logger: logging.Logger = logging.getLogger("hostile"),
) -> bool:
    """
    备份并覆盖写入 hosts 文件，保留原文件的权限位

    参数:
        path: hosts 文件路径
        doc: 要写入的文档
        eol: 行分隔符
        logger: 日志记录器实例

    返回:
        成功时返回 True

    异常:
        PermissionError: 没有写入权限时
        OSError: 其它文件系统错误
    """
    path = Path(path)
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
        make_backup(path, logger=logger)
        _write_replacement(path, mode, iter_rendered(doc, eol))
    except OSError as e:
        _log_write_error(logger, path, e)
        raise

    logger.info(f"已写入 {path}: {len(doc)} 行")
    return True


async def persist_async(
    path: Union[str, Path],
    doc: Document,
    eol: str = os.linesep,
    callback: Optional[CompletionCallback] = None,
    logger: logging.Logger = logging.getLogger("hostile"),
) -> bool:
    """
    persist() 的异步版本，分块流式写入临时文件

    结果与 persist() 完全一致。完成通知（返回值和可选的
    callback(error, result)）只投递一次。
    """
    path = Path(path)
    done = Completion(callback, logger)
    temp_path = None

    try:
        mode = stat.S_IMODE((await asyncio.to_thread(os.stat, path)).st_mode)
        await asyncio.to_thread(make_backup, path, None, logger)
        temp_fd, temp_path = await asyncio.to_thread(
            tempfile.mkstemp, dir=path.parent, prefix=TEMP_PREFIX, text=True
        )
        with os.fdopen(temp_fd, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
            for chunk in iter_rendered(doc, eol):
                await asyncio.to_thread(f.write, chunk)
        await asyncio.to_thread(os.chmod, temp_path, mode)
        await asyncio.to_thread(os.replace, temp_path, path)
    except Exception as e:
        if temp_path is not None:
            _discard(temp_path)
        _log_write_error(logger, path, e)
        done.reject(e)
    else:
        logger.info(f"已写入 {path}: {len(doc)} 行")
        done.resolve(True)

    return await done
