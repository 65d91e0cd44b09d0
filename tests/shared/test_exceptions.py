"""Tests for the exception hierarchy."""

import pytest

from nextlens.shared.domain.exceptions import (
    ConfigurationError,
    NextLensError,
    NoParsableSourcesError,
    ProjectConfigError,
    ProjectRootError,
    SourceParseError,
)


@pytest.mark.parametrize("error_class", [ProjectRootError, NoParsableSourcesError, ProjectConfigError])
def test_fatal_errors_are_configuration_errors(error_class):
    error = error_class("bad", context={"path": "/x"})

    assert isinstance(error, ConfigurationError)
    assert isinstance(error, NextLensError)
    assert error.context == {"path": "/x"}
    assert str(error) == "bad"


def test_source_parse_error_is_per_file():
    error = SourceParseError("/app/a.ts", "unsupported file extension")

    assert not isinstance(error, ConfigurationError)
    assert error.file_path == "/app/a.ts"
    assert str(error) == "/app/a.ts: unsupported file extension"
    assert error.context == {}
