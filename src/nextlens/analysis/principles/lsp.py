"""
Liskov Substitution detector.

A crude proxy for precondition strengthening: an interface that extends
another and declares a method signature with many parameters.
"""

from __future__ import annotations

from typing import List, Sequence

from nextlens.analysis.domain.principles import IssueSeverity, Principle, PrincipleIssue
from nextlens.analysis.domain.structure import FileEntry
from nextlens.analysis.domain.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from nextlens.ast.domain.declarations import TypeDeclaration
from nextlens.ast.domain.enums import TypeDeclarationKind


def analyze_lsp(
    file: FileEntry,
    types: Sequence[TypeDeclaration],
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> List[PrincipleIssue]:
    issues: List[PrincipleIssue] = []

    for declaration in types:
        if declaration.kind != TypeDeclarationKind.INTERFACE or not declaration.extends:
            continue

        if any(
            method.parameter_count > thresholds.lsp_max_method_parameters
            for method in declaration.method_signatures
        ):
            issues.append(
                PrincipleIssue(
                    id=f"lsp-interface-violation-{file.path}-{declaration.name}",
                    principle=Principle.LSP,
                    severity=IssueSeverity.WARNING,
                    file_path=file.path,
                    line=declaration.line,
                    description=(
                        f"Interface {declaration.name} extends "
                        f"{', '.join(declaration.extends)} but may not be substitutable for it"
                    ),
                    recommendation=(
                        "Keep derived interfaces to the base contract: do not strengthen "
                        "preconditions or weaken postconditions"
                    ),
                )
            )

    return issues
