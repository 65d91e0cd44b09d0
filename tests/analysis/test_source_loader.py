"""Tests for concurrent source ingestion."""

import pytest

from nextlens.analysis.application.scanner import iter_files, scan_project
from nextlens.analysis.application.source_loader import SourceLoader
from nextlens.ast.application.provider_interface import ISyntaxProvider
from nextlens.shared.domain.exceptions import NoParsableSourcesError, SourceParseError


class FailingProvider(ISyntaxProvider):
    """Delegates to a real provider but fails for chosen file names."""

    def __init__(self, inner, failing_names, error=None):
        self.inner = inner
        self.failing_names = set(failing_names)
        self.error = error

    @property
    def supported_extensions(self):
        return self.inner.supported_extensions

    def parse(self, source_code, file_path):
        if file_path.rsplit("/", 1)[-1] in self.failing_names:
            if self.error is not None:
                raise self.error
            raise SourceParseError(file_path, "parser failure: boom")
        return self.inner.parse(source_code, file_path)


class TestSourceLoader:
    """Reading, parsing and extracting a file set."""

    @pytest.mark.asyncio
    async def test_loads_analyzable_files_in_order(self, provider, sample_project):
        files = list(iter_files(scan_project(sample_project)))

        loaded = await SourceLoader(provider, max_concurrency=2).load_async(files)

        expected = [file.path for file in files if file.is_code]
        assert [source.path for source in loaded.sources] == expected
        assert loaded.failures == []
        assert loaded.partial_files == []

    @pytest.mark.asyncio
    async def test_extracts_declarations(self, provider, sample_project):
        files = list(iter_files(scan_project(sample_project)))

        loaded = await SourceLoader(provider).load_async(files)

        header = next(source for source in loaded.sources if source.file.name == "Header.tsx")
        assert [unit.name for unit in header.units] == ["Header"]
        assert [d.name for d in header.type_declarations] == ["HeaderProps"]
        assert header.imports[0].source == "../hooks/useTitle"

    @pytest.mark.asyncio
    async def test_parse_failure_is_recorded_and_run_continues(self, provider, sample_project):
        files = list(iter_files(scan_project(sample_project)))
        loader = SourceLoader(FailingProvider(provider, {"Header.tsx"}))

        loaded = await loader.load_async(files)

        assert [failure.file_path.rsplit("/", 1)[-1] for failure in loaded.failures] == ["Header.tsx"]
        assert loaded.failures[0].error_type == "SourceParseError"
        assert len(loaded.sources) == 4

    @pytest.mark.asyncio
    async def test_unexpected_errors_stay_per_file(self, provider, sample_project):
        files = list(iter_files(scan_project(sample_project)))
        loader = SourceLoader(FailingProvider(provider, {"format.ts"}, error=RuntimeError("bug")))

        loaded = await loader.load_async(files)

        assert loaded.failures[0].error_type == "RuntimeError"
        assert len(loaded.sources) == 4

    @pytest.mark.asyncio
    async def test_all_files_failing_is_fatal(self, provider, project_factory):
        root = project_factory({"a.ts": "export const a = 1;\n", "b.ts": "export const b = 2;\n"})
        files = list(iter_files(scan_project(root)))

        with pytest.raises(NoParsableSourcesError):
            await SourceLoader(FailingProvider(provider, {"a.ts", "b.ts"})).load_async(files)

    @pytest.mark.asyncio
    async def test_no_analyzable_files_is_not_an_error(self, provider, project_factory):
        root = project_factory({"README.md": "# Hi\n"})
        files = list(iter_files(scan_project(root)))

        loaded = await SourceLoader(provider).load_async(files)

        assert loaded.sources == []
        assert loaded.failures == []

    @pytest.mark.asyncio
    async def test_partial_parse_is_kept(self, provider, project_factory):
        root = project_factory({"ok.ts": "export const ok = 1;\n", "broken.ts": "let value = (;\n"})
        files = list(iter_files(scan_project(root)))

        loaded = await SourceLoader(provider).load_async(files)

        assert len(loaded.sources) == 2
        assert [path.rsplit("/", 1)[-1] for path in loaded.partial_files] == ["broken.ts"]
