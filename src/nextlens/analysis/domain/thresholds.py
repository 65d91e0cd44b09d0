"""
Heuristic thresholds.

Every number a detector or synthesizer compares against lives here as a
named constant, and HeuristicThresholds bundles them so a project config
file can override any of them without code changes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# SRP: component line span
SRP_CRITICAL_LINES = 200
SRP_WARNING_LINES = 100

# OCP: conditionals and inline literals per component
OCP_MAX_CONDITIONALS = 5
OCP_MAX_LITERALS = 3

# LSP: parameters on a method signature of a derived interface
LSP_MAX_METHOD_PARAMETERS = 2

# ISP: interface size and naming-bucket split
ISP_MAX_MEMBERS = 10
ISP_GROUPING_MIN_MEMBERS = 5
ISP_MIN_BUCKET_SIZE = 2

# DIP: coupling
DIP_MAX_COMPONENT_IMPORTS = 5
DIP_MAX_MARKUP_TAGS = 7

# Cycles longer than this are critical
CYCLE_CRITICAL_LENGTH = 3

# Refactor synthesizer
LARGE_FILE_BYTES = 10_000
MISPLACED_COMPONENT_LIMIT = 0
MISPLACED_UTILITY_LIMIT = 3

# Type analyzer
COMPLEX_UNION_MEMBERS = 3


class HeuristicThresholds(BaseModel):
    """Tunable thresholds for all heuristic analyzers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    srp_critical_lines: int = Field(default=SRP_CRITICAL_LINES, ge=0)
    srp_warning_lines: int = Field(default=SRP_WARNING_LINES, ge=0)
    ocp_max_conditionals: int = Field(default=OCP_MAX_CONDITIONALS, ge=0)
    ocp_max_literals: int = Field(default=OCP_MAX_LITERALS, ge=0)
    lsp_max_method_parameters: int = Field(default=LSP_MAX_METHOD_PARAMETERS, ge=0)
    isp_max_members: int = Field(default=ISP_MAX_MEMBERS, ge=0)
    isp_grouping_min_members: int = Field(default=ISP_GROUPING_MIN_MEMBERS, ge=0)
    isp_min_bucket_size: int = Field(default=ISP_MIN_BUCKET_SIZE, ge=1)
    dip_max_component_imports: int = Field(default=DIP_MAX_COMPONENT_IMPORTS, ge=0)
    dip_max_markup_tags: int = Field(default=DIP_MAX_MARKUP_TAGS, ge=0)
    cycle_critical_length: int = Field(default=CYCLE_CRITICAL_LENGTH, ge=1)
    large_file_bytes: int = Field(default=LARGE_FILE_BYTES, ge=0)
    misplaced_component_limit: int = Field(default=MISPLACED_COMPONENT_LIMIT, ge=0)
    misplaced_utility_limit: int = Field(default=MISPLACED_UTILITY_LIMIT, ge=0)
    complex_union_members: int = Field(default=COMPLEX_UNION_MEMBERS, ge=1)


DEFAULT_THRESHOLDS = HeuristicThresholds()
