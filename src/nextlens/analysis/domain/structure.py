"""
Structure domain models.

Typed directory/file tree produced by the scanner. FileEntries are frozen
once created; DirectoryEntries are assembled bottom-up and then left alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from nextlens.shared.domain.base_model import BaseDomainModel

CODE_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"})
MARKUP_EXTENSIONS = frozenset({".tsx", ".jsx"})
STYLE_EXTENSIONS = frozenset({".css", ".scss"})

# Allow-list of extensions the scanner keeps
INCLUDED_EXTENSIONS = CODE_EXTENSIONS | STYLE_EXTENSIONS | frozenset({".json", ".md", ".mdx"})

# Build output, dependency caches and version-control metadata
EXCLUDED_DIRECTORIES = frozenset(
    {"node_modules", ".git", "dist", "build", ".next", "out", ".turbo", ".vercel", "coverage"}
)


@dataclass(frozen=True)
class FileRoleFlags(BaseDomainModel):
    """Role guesses for a file, from path segments and filename casing."""

    is_page: bool = False
    is_composable_unit: bool = False
    is_layout: bool = False


@dataclass(frozen=True)
class DirectoryRoleFlags(BaseDomainModel):
    """Role guesses for a directory, from its name only."""

    is_pages: bool = False
    is_app: bool = False
    is_components: bool = False
    is_public: bool = False
    is_styles: bool = False


@dataclass(frozen=True)
class FileEntry(BaseDomainModel):
    """A scanned file."""

    name: str
    path: str  # Absolute path
    relative_path: str  # POSIX path relative to the scan root
    extension: str  # Lowercased, with leading dot
    size_bytes: int
    role_flags: FileRoleFlags = field(default_factory=FileRoleFlags)
    type: str = field(default="file", init=False)

    @property
    def stem(self) -> str:
        return self.name[: len(self.name) - len(self.extension)] if self.extension else self.name

    @property
    def segments(self) -> List[str]:
        """Directory segments of the relative path (filename excluded)."""
        return self.relative_path.split("/")[:-1]

    @property
    def is_code(self) -> bool:
        return self.extension in CODE_EXTENSIONS


@dataclass
class DirectoryEntry(BaseDomainModel):
    """
    A scanned directory.

    Children are ordered directories-before-files, then by name.
    `file_count` is transitive.
    """

    name: str
    path: str
    relative_path: str
    children: List[Union[DirectoryEntry, FileEntry]] = field(default_factory=list)
    file_count: int = 0
    role_flags: DirectoryRoleFlags = field(default_factory=DirectoryRoleFlags)
    type: str = field(default="directory", init=False)

    @property
    def directories(self) -> List[DirectoryEntry]:
        return [child for child in self.children if isinstance(child, DirectoryEntry)]

    @property
    def files(self) -> List[FileEntry]:
        return [child for child in self.children if isinstance(child, FileEntry)]


@dataclass
class FileTypeCounts(BaseDomainModel):
    """File counts per category."""

    components: int = 0
    pages: int = 0
    apis: int = 0
    layouts: int = 0
    styles: int = 0
    utils: int = 0
    total: int = 0


@dataclass
class StructureReport(BaseDomainModel):
    """Structure stage output: `{name, structure, stats}`."""

    name: str
    structure: DirectoryEntry
    stats: FileTypeCounts = field(default_factory=FileTypeCounts)
