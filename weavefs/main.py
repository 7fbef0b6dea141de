#!/usr/bin/env python3
"""
WeaveFS - Weave OS Terminal

Main entry point: boots the virtual file system and opens a shell on it.

Usage:
    weavefs                      interactive terminal
    weavefs -c "ls -l"           run one command line and exit
    weavefs --headless           boot, print tree statistics and exit
    weavefs --config PATH        use another configuration file

Author: YSNRFD
Version: 1.0.0
"""

import sys
import os
from typing import Optional, List

from weavefs.core.bootloader import Bootloader, BootResult


DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.json')


def _boot(config_path: str) -> tuple[Bootloader, BootResult]:
    bootloader = Bootloader(config_path)
    result = bootloader.boot()

    if not result.success:
        print(f"\nBoot failed at stage {result.stage.name}", file=sys.stderr)
        print(f"Error: {result.message}", file=sys.stderr)

    return bootloader, result


def run_command(line: str, config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """Boot, run one command line and print its output."""
    bootloader, result = _boot(config_path)
    if not result.success:
        return 1

    try:
        shell = bootloader.create_shell()
        output = shell.execute(line)
        if output:
            print(output, end='' if output.endswith('\n') else '\n')
        return shell.last_status
    finally:
        bootloader.shutdown()


def run_headless(config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """
    Boot without a terminal.

    Reports what was restored and the tree statistics, then shuts down.
    """
    bootloader, result = _boot(config_path)
    if not result.success:
        return 1

    vfs = bootloader.get_filesystem()
    stats = vfs.get_stats()

    print(f"Boot completed in {result.elapsed_time * 1000:.2f}ms")
    print(f"Restored saved tree: {'yes' if result.restored else 'no'}")
    print(f"Folders: {stats['folder_count']}")
    print(f"Files: {stats['file_count']}")
    print(f"Total size: {stats['total_size']} bytes")

    bootloader.shutdown()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for WeaveFS.

    Boot sequence:
    1. Load configuration
    2. Initialize logging
    3. Open storage and restore the tree
    4. Start the sync service
    5. Start shell
    6. Shutdown
    """
    args = list(sys.argv[1:] if argv is None else argv)
    config_path = DEFAULT_CONFIG_PATH

    if '--config' in args:
        index = args.index('--config')
        if index + 1 >= len(args):
            print("weavefs: --config requires a path", file=sys.stderr)
            return 2
        config_path = args[index + 1]
        del args[index:index + 2]

    if args and args[0] == '--headless':
        return run_headless(config_path)

    if args and args[0] == '-c':
        if len(args) < 2:
            print("weavefs: -c requires a command line", file=sys.stderr)
            return 2
        return run_command(args[1], config_path)

    if args:
        print(f"weavefs: unknown argument: {args[0]}", file=sys.stderr)
        return 2

    bootloader, result = _boot(config_path)
    if not result.success:
        return 1

    shell = bootloader.create_shell()

    try:
        shell.run(welcome=bootloader.config.system.welcome_message)
    except KeyboardInterrupt:
        print("\n\nInterrupted")
    finally:
        bootloader.shutdown()

    return 0


if __name__ == '__main__':
    sys.exit(main())
