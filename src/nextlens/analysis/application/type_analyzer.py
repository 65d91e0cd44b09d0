"""
Type inventory.

Catalogs declared types across all parsed sources, then counts references to
them per file, flags weak typing patterns and estimates annotation coverage.
Nothing is resolved or checked: references match by name only.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

from nextlens.analysis.application.source_loader import ParsedSource
from nextlens.analysis.domain.report import SourceFailure
from nextlens.analysis.domain.thresholds import COMPLEX_UNION_MEMBERS
from nextlens.analysis.domain.types import (
    TypeAnalysis,
    TypeInfo,
    TypeIssue,
    TypeIssueKind,
    TypeIssueSeverity,
    TypeProperty,
    TypeStats,
    TypeUsage,
    UsageLocation,
)
from nextlens.ast.domain.declarations import TypeDeclaration
from nextlens.ast.domain.enums import NodeKind, TypeDeclarationKind
from nextlens.ast.domain.models import SyntaxNode
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

FUNCTION_LIKE_KINDS = frozenset({NodeKind.FUNCTION, NodeKind.ARROW_FUNCTION, NodeKind.METHOD})

ANY_SUGGESTION = "Use a more specific type, or `unknown` if the type really is not known"
UNION_SUGGESTION = "Give this union a named type alias"
ASSERTION_SUGGESTION = "Prefer type guards or runtime checks over type assertions"
UNUSED_SUGGESTION = "Remove the type, or export it if other modules need it"
PARSE_ERROR_SUGGESTION = "Check the file for syntax errors"


def type_info(declaration: TypeDeclaration, file_path: str, relative_path: str) -> TypeInfo:
    properties = [
        TypeProperty(
            name=member.name,
            type=member.type_text or "any",
            optional=member.optional,
            readonly=member.readonly,
        )
        for member in declaration.members
        if member.kind == "property"
    ]
    return TypeInfo(
        id=f"{declaration.kind.value}-{declaration.name}-{relative_path}",
        name=declaration.name,
        kind=declaration.kind,
        file_path=file_path,
        properties=properties,
        extends=list(declaration.extends),
        implements=list(declaration.implements),
        exported=declaration.exported,
        location=declaration.location,
    )


def catalog_types(sources: Sequence[ParsedSource]) -> List[TypeInfo]:
    """
    Every declared type, in file then declaration order.

    A repeated declaration (interface merging, nested same-named types) keeps
    the plain id for its first occurrence; later ones get `-<line>` appended.
    """
    types: List[TypeInfo] = []
    seen: Set[str] = set()
    for source in sources:
        for declaration in source.type_declarations:
            info = type_info(declaration, source.path, source.file.relative_path)
            if info.id in seen:
                info.id = f"{info.id}-{declaration.line}"
            seen.add(info.id)
            types.append(info)
    return types


def is_type_reference(node: SyntaxNode) -> bool:
    """A type identifier that refers to a type rather than declaring one."""
    if node.kind != NodeKind.TYPE_IDENTIFIER:
        return False
    if node.field_name != "name" or node.parent is None:
        return True
    # `Foo<T>` names its type through the same field as a declaration does
    return node.parent.kind == NodeKind.GENERIC_TYPE


def find_type_usages(source: ParsedSource, types: Sequence[TypeInfo]) -> List[TypeUsage]:
    """
    One usage record per referenced declared type, in declaration order.

    A name declared several times in one file counts against its first
    declaration only.
    """
    by_name: Dict[str, List[TypeInfo]] = {}
    for info in types:
        candidates = by_name.setdefault(info.name, [])
        if all(other.file_path != info.file_path for other in candidates):
            candidates.append(info)

    usages: Dict[str, TypeUsage] = {}
    for node in source.tree.root.descendants():
        if not is_type_reference(node):
            continue
        for info in by_name.get(node.text, []):
            usage = usages.get(info.id)
            if usage is None:
                usage = usages[info.id] = TypeUsage(type_id=info.id, file_path=source.path)
            usage.count += 1
            usage.locations.append(
                UsageLocation(line=node.location.start_line, column=node.location.start_column)
            )

    order = {info.id: index for index, info in enumerate(types)}
    return sorted(usages.values(), key=lambda usage: order[usage.type_id])


def union_members(union: SyntaxNode) -> int:
    """Members of a union, flattening the grammar's nested binary unions."""
    count = 0
    stack = [union]
    while stack:
        node = stack.pop()
        for child in node.children:
            if child.kind == NodeKind.UNION_TYPE:
                stack.append(child)
            elif child.kind != NodeKind.COMMENT:
                count += 1
    return count


def is_const_assertion(node: SyntaxNode) -> bool:
    return node.has_token("const")


def _location_id(prefix: str, file_path: str, node: SyntaxNode) -> str:
    return f"{prefix}-{file_path}-{node.location.start_line}-{node.location.start_column}"


def find_type_issues(
    source: ParsedSource,
    complex_union_members: int = COMPLEX_UNION_MEMBERS,
) -> List[TypeIssue]:
    """`any` keywords, large unions and type assertions in one file."""
    issues: List[TypeIssue] = []
    path = source.path

    for node in source.tree.root.descendants():
        if node.kind == NodeKind.PREDEFINED_TYPE and node.text == "any":
            anchor = node.parent or node
            issues.append(
                TypeIssue(
                    id=_location_id("any", path, anchor),
                    kind=TypeIssueKind.ANY,
                    severity=TypeIssueSeverity.WARNING,
                    message="Usage of `any` type",
                    file_path=path,
                    location=anchor.location,
                    suggestion=ANY_SUGGESTION,
                )
            )

        elif node.kind == NodeKind.UNION_TYPE:
            # Nested unions belong to the outermost one
            if node.parent is not None and node.parent.kind == NodeKind.UNION_TYPE:
                continue
            members = union_members(node)
            if members > complex_union_members:
                issues.append(
                    TypeIssue(
                        id=_location_id("complex-union", path, node),
                        kind=TypeIssueKind.COMPLEX,
                        severity=TypeIssueSeverity.INFO,
                        message=f"Complex union type with {members} members",
                        file_path=path,
                        location=node.location,
                        suggestion=UNION_SUGGESTION,
                    )
                )

        elif node.kind == NodeKind.TYPE_ASSERTION and not is_const_assertion(node):
            issues.append(
                TypeIssue(
                    id=_location_id("type-assertion", path, node),
                    kind=TypeIssueKind.INCONSISTENT,
                    severity=TypeIssueSeverity.INFO,
                    message="Type assertion used",
                    file_path=path,
                    location=node.location,
                    suggestion=ASSERTION_SUGGESTION,
                )
            )

    return issues


def unused_type_issues(types: Sequence[TypeInfo], usages: Sequence[TypeUsage]) -> List[TypeIssue]:
    # Merged declarations share the usages of the first one
    by_id = {info.id: info for info in types}
    used = {
        (by_id[usage.type_id].name, by_id[usage.type_id].file_path)
        for usage in usages
        if usage.type_id in by_id
    }
    return [
        TypeIssue(
            id=f"unused-{info.id}",
            kind=TypeIssueKind.UNUSED,
            severity=TypeIssueSeverity.INFO,
            message=f"{info.kind.value.capitalize()} {info.name} is not exported and never referenced",
            file_path=info.file_path,
            location=info.location,
            suggestion=UNUSED_SUGGESTION,
        )
        for info in types
        if not info.exported and (info.name, info.file_path) not in used
    ]


def parse_failure_issue(failure: SourceFailure) -> TypeIssue:
    return TypeIssue(
        id=f"parse-error-{failure.file_path}",
        kind=TypeIssueKind.COMPLEX,
        severity=TypeIssueSeverity.ERROR,
        message=f"File could not be parsed for type analysis: {failure.message}",
        file_path=failure.file_path,
        suggestion=PARSE_ERROR_SUGGESTION,
    )


def annotation_coverage(source: ParsedSource) -> Tuple[int, int]:
    """(annotated, total) over variable declarators and function parameters."""
    total = 0
    annotated = 0

    for node in source.tree.root.descendants():
        if node.kind == NodeKind.VARIABLE_DECLARATOR:
            total += 1
            if node.child_by_field("type") is not None:
                annotated += 1

        elif node.kind in FUNCTION_LIKE_KINDS:
            parameters = node.child_by_field("parameters")
            if parameters is not None:
                for parameter in parameters.children_of_kind(NodeKind.PARAMETER):
                    total += 1
                    if parameter.child_by_field("type") is not None:
                        annotated += 1
            elif node.child_by_field("parameter") is not None:
                # x => ... has no room for an annotation
                total += 1

    return annotated, total


def analyze_types(
    sources: Sequence[ParsedSource],
    failures: Sequence[SourceFailure] = (),
    complex_union_members: int = COMPLEX_UNION_MEMBERS,
) -> TypeAnalysis:
    """
    Build the type inventory.

    All files are cataloged before usages are counted, so a reference to a
    type declared in a later file still counts.
    """
    types = catalog_types(sources)

    hierarchy: Dict[str, List[str]] = {}
    for info in types:
        if info.extends:
            hierarchy[info.name] = list(info.extends)

    usages: List[TypeUsage] = []
    issues: List[TypeIssue] = []
    annotated = 0
    total = 0
    for source in sources:
        usages.extend(find_type_usages(source, types))
        issues.extend(find_type_issues(source, complex_union_members))
        file_annotated, file_total = annotation_coverage(source)
        annotated += file_annotated
        total += file_total

    issues.extend(unused_type_issues(types, usages))
    issues.extend(parse_failure_issue(failure) for failure in failures)

    stats = TypeStats(
        total_types=len(types),
        interfaces=sum(1 for info in types if info.kind == TypeDeclarationKind.INTERFACE),
        type_aliases=sum(1 for info in types if info.kind == TypeDeclarationKind.TYPE),
        enums=sum(1 for info in types if info.kind == TypeDeclarationKind.ENUM),
        classes=sum(1 for info in types if info.kind == TypeDeclarationKind.CLASS),
        coverage=round(annotated / total * 100, 2) if total else 0.0,
        any_usage=sum(1 for issue in issues if issue.kind == TypeIssueKind.ANY),
        issue_count=len(issues),
    )

    logger.info(
        "type_analysis_completed",
        types=stats.total_types,
        issues=stats.issue_count,
        coverage=stats.coverage,
    )
    return TypeAnalysis(
        types=types,
        usages=usages,
        issues=issues,
        stats=stats,
        type_hierarchy=hierarchy,
    )
