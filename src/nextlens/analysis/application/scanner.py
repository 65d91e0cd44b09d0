"""
Source scanner.

Walks a project root and builds the typed DirectoryEntry/FileEntry tree.
Unreadable subdirectories and files are skipped with a warning; only an
unusable root aborts the scan.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from nextlens.analysis.domain.structure import (
    CODE_EXTENSIONS,
    EXCLUDED_DIRECTORIES,
    INCLUDED_EXTENSIONS,
    MARKUP_EXTENSIONS,
    DirectoryEntry,
    DirectoryRoleFlags,
    FileEntry,
    FileRoleFlags,
)
from nextlens.shared.domain.exceptions import ProjectRootError
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def directory_role_flags(name: str) -> DirectoryRoleFlags:
    """Role flags from the directory name alone."""
    return DirectoryRoleFlags(
        is_pages=name == "pages",
        is_app=name == "app",
        is_components=name in ("components", "ui"),
        is_public=name == "public",
        is_styles=name == "styles",
    )


def file_role_flags(relative_path: str, extension: str) -> FileRoleFlags:
    """
    Role flags from path segments relative to the scan root and filename casing.

    Segments are taken relative to the root so a project that itself lives
    under e.g. `/srv/app/` is not mistaken for an app-router tree.
    """
    parts = relative_path.split("/")
    segments = parts[:-1]
    filename = parts[-1]
    stem = filename[: len(filename) - len(extension)] if extension else filename

    is_code = extension in CODE_EXTENSIONS
    is_page = is_code and (
        "pages" in segments or ("app" in segments and "components" not in segments)
    )
    is_composable_unit = extension in MARKUP_EXTENSIONS and (
        (bool(stem) and stem[0].isupper())
        or stem == "index"
        or "components" in segments
        or "ui" in segments
    )
    is_layout = is_code and stem == "layout"

    return FileRoleFlags(
        is_page=is_page,
        is_composable_unit=is_composable_unit,
        is_layout=is_layout,
    )


def _sort_key(entry: Union[DirectoryEntry, FileEntry]) -> tuple[int, str]:
    # Directories before files, then ordinal by name
    return (0 if isinstance(entry, DirectoryEntry) else 1, entry.name)


class ProjectScanner:
    """
    Builds a DirectoryEntry tree for a project root.

    Examples:
        >>> scanner = ProjectScanner("/path/to/project")
        >>> tree = scanner.scan()
        >>> tree.file_count
        42
    """

    def __init__(self, root_path: Union[str, Path], exclude_dirs: Optional[Iterable[str]] = None) -> None:
        self.root_path = Path(root_path).resolve()
        self.exclude_dirs = frozenset(EXCLUDED_DIRECTORIES | set(exclude_dirs or ()))

    def scan(self) -> DirectoryEntry:
        """
        Scan the project.

        Returns:
            DirectoryEntry for the root with all kept descendants

        Raises:
            ProjectRootError: Root is missing, not a directory, or unreadable
        """
        root = self.root_path
        if not root.exists():
            raise ProjectRootError(f"Project root does not exist: {root}", context={"path": str(root)})
        if not root.is_dir():
            raise ProjectRootError(f"Project root is not a directory: {root}", context={"path": str(root)})

        try:
            entries = list(root.iterdir())
        except OSError as e:
            raise ProjectRootError(
                f"Project root is not readable: {root}",
                context={"path": str(root), "error": str(e)},
            ) from e

        logger.debug("project_scan_started", root=str(root))
        tree = self._build_directory(root, "", entries)
        logger.info("project_scan_completed", root=str(root), file_count=tree.file_count)
        return tree

    def _build_directory(self, directory: Path, relative_path: str, entries: List[Path]) -> DirectoryEntry:
        children: List[Union[DirectoryEntry, FileEntry]] = []

        for item in entries:
            item_relative = f"{relative_path}/{item.name}" if relative_path else item.name

            if item.is_dir():
                if item.name in self.exclude_dirs or item.is_symlink():
                    continue
                try:
                    sub_entries = list(item.iterdir())
                except OSError as e:
                    logger.warning("directory_unreadable_skipped", path=str(item), error=str(e))
                    continue
                children.append(self._build_directory(item, item_relative, sub_entries))

            elif item.is_file():
                file_entry = self._build_file(item, item_relative)
                if file_entry is not None:
                    children.append(file_entry)

        children.sort(key=_sort_key)
        file_count = sum(
            child.file_count if isinstance(child, DirectoryEntry) else 1 for child in children
        )

        return DirectoryEntry(
            name=directory.name,
            path=str(directory),
            relative_path=relative_path,
            children=children,
            file_count=file_count,
            role_flags=directory_role_flags(directory.name),
        )

    def _build_file(self, item: Path, relative_path: str) -> Optional[FileEntry]:
        extension = item.suffix.lower()
        if extension not in INCLUDED_EXTENSIONS:
            return None

        try:
            size_bytes = item.stat().st_size
        except OSError as e:
            logger.warning("file_unreadable_skipped", path=str(item), error=str(e))
            return None

        return FileEntry(
            name=item.name,
            path=str(item),
            relative_path=relative_path,
            extension=extension,
            size_bytes=size_bytes,
            role_flags=file_role_flags(relative_path, extension),
        )


def scan_project(root_path: Union[str, Path], exclude_dirs: Optional[Iterable[str]] = None) -> DirectoryEntry:
    """Convenience wrapper around ProjectScanner.scan()."""
    return ProjectScanner(root_path, exclude_dirs).scan()


def iter_files(tree: DirectoryEntry) -> Iterator[FileEntry]:
    """Yield every FileEntry in tree order (directories first, then files, depth-first)."""
    stack: List[Union[DirectoryEntry, FileEntry]] = [tree]
    while stack:
        entry = stack.pop()
        if isinstance(entry, FileEntry):
            yield entry
        else:
            stack.extend(reversed(entry.children))


def iter_directories(tree: DirectoryEntry) -> Iterator[DirectoryEntry]:
    """Yield every DirectoryEntry, the root first, in tree order."""
    stack = [tree]
    while stack:
        directory = stack.pop()
        yield directory
        stack.extend(reversed(directory.directories))
