#!/usr/bin/env python3
"""
Hostile - 主入口点

以命令行方式编辑系统 hosts 文件。
"""

import argparse
import signal
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from hostile import Config, Hostile, HostileError

err_console = Console(stderr=True, highlight=False)


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog="hostile",
        description="Simple, programmatic /etc/hosts manipulation",
    )
    parser.add_argument(
        "--file",
        dest="hosts_file",
        help="hosts file to edit (default: $HOSTS_FILE or the platform hosts file)",
    )
    commands = parser.add_subparsers(dest="command", metavar="command")

    list_cmd = commands.add_parser("list", help="List all current domain records in hosts file")
    list_cmd.add_argument("scope", nargs="?", choices=["all"], help="include comments and blank lines")

    set_cmd = commands.add_parser("set", help="Set a domain in the hosts file")
    set_cmd.add_argument("ip", nargs="?")
    set_cmd.add_argument("host", nargs="?")
    set_cmd.add_argument("comment", nargs="?")

    remove_cmd = commands.add_parser("remove", help="Remove a domain from the hosts file")
    remove_cmd.add_argument("host", nargs="?")

    load_cmd = commands.add_parser("load", help="Load a set of host entries from a file")
    load_cmd.add_argument("file")

    unload_cmd = commands.add_parser("unload", help="Remove a set of host entries from a file")
    unload_cmd.add_argument("file")

    return parser


def run_command(app: Hostile, args: argparse.Namespace) -> None:
    """执行解析出的子命令"""
    if args.command == "list":
        app.list(show_all=args.scope == "all")
    elif args.command == "set":
        app.set(args.ip, args.host, args.comment)
    elif args.command == "remove":
        app.remove(args.host)
    elif args.command == "load":
        app.load(args.file)
    elif args.command == "unload":
        app.unload(args.file)


def main(argv: Optional[List[str]] = None) -> int:
    """主入口点，带信号处理"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    # 从环境变量加载配置，命令行参数优先
    config = Config.from_env()
    if args.hosts_file:
        config.hosts_file_path = args.hosts_file

    try:
        app = Hostile(config)
    except ValueError as e:
        err_console.print(f"[red]配置无效: {escape(str(e))}[/red]")
        return 1

    def signal_handler(signum: int, frame) -> None:
        """处理中断信号"""
        app.logger.info(f"收到信号 {signal.Signals(signum).name}，正在退出...")
        sys.exit(130)

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        run_command(app, args)
    except HostileError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        return 1
    except PermissionError as e:
        err_console.print(f"[red]Error: {escape(str(e.strerror))}. Are you running as root?[/red]")
        return 1
    except OSError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
