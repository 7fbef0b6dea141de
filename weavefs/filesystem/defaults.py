"""
Default Structure

The folders and starter files a fresh installation begins with. Seeding
runs once at startup when the storage backend has no saved tree.

Author: YSNRFD
Version: 1.0.0
"""

from typing import List, Tuple

from .vfs import VirtualFileSystem
from weavefs.exceptions import NodeExistsError


DEFAULT_FOLDERS: List[str] = [
    '/Desktop',
    '/Documents',
    '/Documents/Projects',
    '/Documents/Projects/src',
    '/Documents/Notes',
    '/Downloads',
    '/Pictures',
    '/Pictures/Screenshots',
    '/Music',
    '/Videos',
]

DEFAULT_FILES: List[Tuple[str, str]] = [
    (
        '/Desktop/Welcome.txt',
        "Welcome to Weave OS!\n"
        "\n"
        "Everything you see lives in a virtual file system.\n"
        "\n"
        "- Open the Terminal for command-line access\n"
        "- Browse and organize files with the File Manager\n"
        "- Edit text files with the Text Editor\n"
        "\n"
        "Type 'help' in the terminal to get started.\n"
    ),
    (
        '/Desktop/Quick Guide.md',
        "# Weave OS Quick Guide\n"
        "\n"
        "## Terminal basics\n"
        "\n"
        "- `ls -l` lists files with sizes and dates\n"
        "- `cd Documents` changes directory\n"
        "- `cat file.txt` prints a file\n"
        "- `echo text > file.txt` writes a file\n"
        "- `find *.md` searches by name\n"
        "- `tree` draws the folder hierarchy\n"
    ),
    (
        '/Documents/resume.md',
        "# Jordan Lee\n"
        "\n"
        "**Software Engineer**\n"
        "\n"
        "## Experience\n"
        "\n"
        "- Senior Developer, TechCorp (2020 - present)\n"
        "- Developer, StartupXYZ (2018 - 2020)\n"
        "\n"
        "## Skills\n"
        "\n"
        "TypeScript, Python, SQL, Docker\n"
    ),
    (
        '/Documents/config.json',
        '{\n'
        '  "theme": "dark",\n'
        '  "fontSize": 14,\n'
        '  "autoSave": true,\n'
        '  "terminal": {\n'
        '    "fontSize": 12,\n'
        '    "cursorStyle": "block"\n'
        '  }\n'
        '}\n'
    ),
    (
        '/Documents/Notes/todo.txt',
        "TODO\n"
        "====\n"
        "\n"
        "[ ] Organize downloads\n"
        "[ ] Back up projects\n"
        "[x] Try the terminal\n"
    ),
    (
        '/Documents/Projects/README.md',
        "# My Projects\n"
        "\n"
        "Development projects live in this folder.\n"
        "\n"
        "## Weave OS\n"
        "\n"
        "A desktop environment with a virtual file system, terminal and editor.\n"
    ),
    (
        '/Documents/Projects/src/index.ts',
        "import { createDesktop } from './desktop';\n"
        "\n"
        "const desktop = createDesktop();\n"
        "desktop.mount(document.body);\n"
        "\n"
        "export default desktop;\n"
    ),
    (
        '/Documents/Projects/src/styles.css',
        "/* Weave OS styles */\n"
        "\n"
        "body {\n"
        "  margin: 0;\n"
        "  font-family: sans-serif;\n"
        "}\n"
        "\n"
        ".window {\n"
        "  border-radius: 8px;\n"
        "}\n"
    ),
]


def seed_default_structure(
    vfs: VirtualFileSystem,
    folders: List[str] = DEFAULT_FOLDERS,
    files: List[Tuple[str, str]] = DEFAULT_FILES
) -> int:
    """
    Create the default folders and starter files.

    Entries that already exist are left alone.

    Returns:
        Number of nodes created
    """
    created = 0

    for path in folders:
        try:
            vfs.create_folder(path)
            created += 1
        except NodeExistsError:
            pass

    for path, content in files:
        try:
            vfs.create_file(path, content)
            created += 1
        except NodeExistsError:
            pass

    return created
