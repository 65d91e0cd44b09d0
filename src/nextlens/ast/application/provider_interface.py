"""
Syntax provider interface.

Every parse adapter implements ISyntaxProvider. Parsing is synchronous and
CPU-bound; the pipeline runs it in worker threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet

from nextlens.ast.domain.models import SyntaxTree


class ISyntaxProvider(ABC):
    """
    Interface for parse adapters.

    Implementations must be pure functions of (source_code, file_path) and
    must not cache parse results.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> FrozenSet[str]:
        """File extensions (with leading dot) this provider can parse."""
        pass

    def supports_file(self, file_path: str) -> bool:
        """Check if the file's extension is supported."""
        lowered = file_path.lower()
        return any(lowered.endswith(extension) for extension in self.supported_extensions)

    @abstractmethod
    def parse(self, source_code: str, file_path: str) -> SyntaxTree:
        """
        Parse source code to a normalized syntax tree.

        Syntax errors do not raise: the returned tree carries diagnostics.

        Args:
            source_code: File content
            file_path: Path used for grammar selection and error messages

        Returns:
            SyntaxTree for the file

        Raises:
            SourceParseError: Unsupported extension or parser failure
        """
        pass
