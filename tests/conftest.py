"""Shared test fixtures for the nextlens test suite."""

import os
import textwrap
from pathlib import Path
from typing import Dict

import pytest

from nextlens.analysis.application.scanner import file_role_flags
from nextlens.analysis.application.source_loader import ParsedSource, parse_source
from nextlens.analysis.domain.structure import FileEntry
from nextlens.ast.providers.typescript_provider import TypeScriptSyntaxProvider

FAKE_ROOT = "/project"


def make_file_entry(relative_path: str, size_bytes: int = 0, root: str = FAKE_ROOT) -> FileEntry:
    """FileEntry for a path that does not have to exist."""
    name = relative_path.rsplit("/", 1)[-1]
    extension = os.path.splitext(name)[1].lower()
    return FileEntry(
        name=name,
        path=f"{root}/{relative_path}",
        relative_path=relative_path,
        extension=extension,
        size_bytes=size_bytes,
        role_flags=file_role_flags(relative_path, extension),
    )


@pytest.fixture(scope="session")
def provider():
    """One provider for the whole session; parsers are per thread."""
    return TypeScriptSyntaxProvider()


@pytest.fixture
def parse(provider):
    """Parse dedented source code into a SyntaxTree."""

    def _parse(code: str, file_path: str = "Component.tsx"):
        return provider.parse(textwrap.dedent(code), file_path)

    return _parse


@pytest.fixture
def file_entry():
    """Factory for in-memory FileEntry objects."""
    return make_file_entry


@pytest.fixture
def parsed_source(provider):
    """Parse and extract dedented source code as if it lived at `relative_path`."""

    def _parsed(code: str, relative_path: str = "components/Widget.tsx") -> ParsedSource:
        return parse_source(provider, make_file_entry(relative_path), textwrap.dedent(code))

    return _parsed


@pytest.fixture
def project_factory(tmp_path):
    """
    Create a project directory from a mapping of relative path -> content.

    The root is named `project` so it never carries a router role flag.
    """

    def _make(files: Dict[str, str], name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_project(project_factory):
    """A small pages-router project with one component, one hook and a cycle."""
    return project_factory(
        {
            "pages/index.tsx": """
                import Header from "../components/Header";

                export default function Home() {
                  return <Header title="Home" />;
                }
            """,
            "pages/[id].tsx": """
                export default function Item({ id }) {
                  return <p>{id}</p>;
                }
            """,
            "components/Header.tsx": """
                import { useTitle } from "../hooks/useTitle";

                export interface HeaderProps {
                  title: string;
                }

                export default function Header({ title }: HeaderProps) {
                  const shown = useTitle(title);
                  return <h1>{shown}</h1>;
                }
            """,
            "hooks/useTitle.ts": """
                import { format } from "../lib/format";

                export function useTitle(title: string): string {
                  return format(title);
                }
            """,
            "lib/format.ts": """
                import { useTitle } from "../hooks/useTitle";

                export function format(value: string): string {
                  return value.trim();
                }
            """,
            "styles/globals.css": "body { margin: 0; }\n",
            "node_modules/react/index.js": "module.exports = {};\n",
        }
    )
