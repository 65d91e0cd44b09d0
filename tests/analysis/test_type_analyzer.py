"""Tests for the type inventory."""

from nextlens.analysis.application.type_analyzer import (
    analyze_types,
    annotation_coverage,
    catalog_types,
    find_type_issues,
    find_type_usages,
)
from nextlens.analysis.domain.report import SourceFailure
from nextlens.analysis.domain.types import TypeIssueKind, TypeIssueSeverity
from nextlens.ast.domain.enums import TypeDeclarationKind


class TestCatalog:
    """Declared types across files."""

    def test_type_info(self, parsed_source):
        source = parsed_source(
            """
            export interface User extends Entity {
              readonly id: string;
              name?: string;
              greet(): void;
            }
            """,
            "types/user.ts",
        )

        (info,) = catalog_types([source])

        assert info.id == "interface-User-types/user.ts"
        assert info.kind == TypeDeclarationKind.INTERFACE
        assert info.exported
        assert info.extends == ["Entity"]
        assert [(p.name, p.type, p.optional, p.readonly) for p in info.properties] == [
            ("id", "string", False, True),
            ("name", "string", True, False),
        ]
        assert info.location.start_line == 2


class TestUsages:
    """Name-matched references."""

    def test_references_across_files(self, parsed_source):
        declaring = parsed_source("export interface User { id: string }\n", "types/user.ts")
        using = parsed_source(
            """
            import type { User } from "../types/user";

            export function Card({ user }: { user: User }): User[] {
              const copy: Array<User> = [user];
              return copy;
            }
            """,
            "components/Card.tsx",
        )
        types = catalog_types([declaring, using])

        assert find_type_usages(declaring, types) == []
        (usage,) = find_type_usages(using, types)
        assert usage.type_id == "interface-User-types/user.ts"
        assert usage.count == 3
        assert [location.line for location in usage.locations] == [4, 4, 5]

    def test_merged_declarations(self, parsed_source):
        source = parsed_source(
            """
            interface Props { a: string }
            interface Props { b: number }
            export function Card(p: Props) { return null; }
            """,
            "components/Card.tsx",
        )

        analysis = analyze_types([source])

        assert [info.id for info in analysis.types] == [
            "interface-Props-components/Card.tsx",
            "interface-Props-components/Card.tsx-3",
        ]
        assert [(usage.type_id, usage.count) for usage in analysis.usages] == [
            ("interface-Props-components/Card.tsx", 1)
        ]
        assert not any(issue.kind == TypeIssueKind.UNUSED for issue in analysis.issues)

    def test_declaration_name_is_not_a_reference(self, parsed_source):
        source = parsed_source("interface Lonely { a: string }\n", "types/lonely.ts")

        assert find_type_usages(source, catalog_types([source])) == []


class TestTypeIssues:
    """Weak typing patterns."""

    def test_any_union_and_assertions(self, parsed_source):
        source = parsed_source(
            """
            let loose: any = 1;
            type Status = "a" | "b" | "c" | "d";
            type Small = "x" | "y";
            const forced = loose as string;
            const frozen = ["a"] as const;
            """,
            "lib/status.ts",
        )

        issues = find_type_issues(source)

        assert [(issue.kind, issue.severity) for issue in issues] == [
            (TypeIssueKind.ANY, TypeIssueSeverity.WARNING),
            (TypeIssueKind.COMPLEX, TypeIssueSeverity.INFO),
            (TypeIssueKind.INCONSISTENT, TypeIssueSeverity.INFO),
        ]
        assert "4 members" in issues[1].message
        assert issues[0].location.start_line == 2

    def test_union_threshold(self, parsed_source):
        source = parsed_source('type Status = "a" | "b" | "c" | "d";\n', "lib/status.ts")

        assert find_type_issues(source, complex_union_members=4) == []


class TestCoverage:
    """Annotated declarators and parameters."""

    def test_coverage_counts(self, parsed_source):
        source = parsed_source(
            """
            const a: number = 1;
            const b = 2;
            function f(x: string, y) { return x; }
            const g = z => z;
            class K { m(p: number) { return p; } }
            """,
            "lib/coverage.ts",
        )

        # a, b, g declarators; x, y, z, p parameters
        assert annotation_coverage(source) == (3, 7)


class TestAnalyzeTypes:
    """The whole stage."""

    def test_stage(self, parsed_source):
        sources = [
            parsed_source(
                """
                export interface Base { id: string }
                export interface User extends Base { name: string }
                interface Unused { x: number }
                export type Id = string;
                enum Mode { On, Off }
                export class Store {}
                """,
                "types/index.ts",
            ),
            parsed_source(
                """
                import type { User } from "../types";
                export const current: User | null = null;
                """,
                "lib/current.ts",
            ),
        ]
        failures = [SourceFailure(file_path="/project/lib/broken.ts", message="boom", error_type="SourceParseError")]

        analysis = analyze_types(sources, failures)
        issue_ids = [issue.id for issue in analysis.issues]

        assert analysis.stats.total_types == 6
        assert analysis.stats.interfaces == 3
        assert analysis.stats.type_aliases == 1
        assert analysis.stats.enums == 1
        assert analysis.stats.classes == 1
        assert analysis.type_hierarchy == {"User": ["Base"]}
        assert "unused-interface-Unused-types/index.ts" in issue_ids
        assert "unused-enum-Mode-types/index.ts" in issue_ids
        assert "parse-error-/project/lib/broken.ts" in issue_ids
        assert analysis.stats.issue_count == len(analysis.issues)
        assert 0.0 <= analysis.stats.coverage <= 100.0

    def test_empty(self):
        analysis = analyze_types([])

        assert analysis.types == []
        assert analysis.stats.coverage == 0.0

    def test_to_json(self, parsed_source):
        source = parsed_source("export type Id = string;\n", "types/id.ts")

        data = analyze_types([source]).to_json()

        assert set(data) == {"types", "usages", "issues", "stats", "typeHierarchy"}
        assert data["types"][0]["filePath"] == "/project/types/id.ts"
        assert data["types"][0]["kind"] == "type"
        assert "anyUsage" in data["stats"]
