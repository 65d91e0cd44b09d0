"""Tests for the component graph builder."""

from nextlens.analysis.application.component_graph_builder import (
    build_component_graph,
    classify_component,
)
from nextlens.analysis.domain.components import GRID_SPACING, ComponentKind


class TestClassifyComponent:
    """Kind by role flags, then path convention."""

    def test_kinds(self, parsed_source):
        cases = {
            "pages/index.tsx": ComponentKind.PAGE,
            "app/layout.tsx": ComponentKind.PAGE,
            "src/layout.tsx": ComponentKind.LAYOUT,
            "hooks/Thing.tsx": ComponentKind.HOOK,
            "utils/Format.tsx": ComponentKind.UTILITY,
            "components/Button.tsx": ComponentKind.COMPONENT,
        }
        for relative_path, kind in cases.items():
            source = parsed_source("export function Thing() { return null; }\n", relative_path)
            assert classify_component(source.file, source.units[0]) == kind, relative_path

    def test_hook_name_wins_over_location(self, parsed_source):
        source = parsed_source("export function useToggle() { return true; }\n", "components/Toggle.tsx")

        assert classify_component(source.file, source.units[0]) == ComponentKind.HOOK


class TestBuildComponentGraph:
    """Nodes, name-matched edges and statistics."""

    def _sources(self, parsed_source):
        return [
            parsed_source(
                """
                import Card from "./Card";
                import { Avatar } from "./Avatar";
                import React from "react";

                export function List({ items, onSelect }) {
                  return <Card><Avatar /></Card>;
                }

                export function Card() {
                  return <div />;
                }
                """,
                "components/List.tsx",
            ),
            parsed_source(
                """
                export default function Card({ title }) {
                  return <section>{title}</section>;
                }
                """,
                "components/Card.tsx",
            ),
            parsed_source(
                """
                import Card from "./Card";

                export function Avatar({ src, alt, size }) {
                  return <Card><img src={src} alt={alt} /></Card>;
                }
                """,
                "components/Avatar.tsx",
            ),
        ]

    def test_node_ids(self, parsed_source):
        graph = build_component_graph(self._sources(parsed_source))

        assert [node.id for node in graph.components] == [
            "/project/components/List.tsx:List",
            "/project/components/List.tsx:Card",
            "/project/components/Card.tsx:Card",
            "/project/components/Avatar.tsx:Avatar",
        ]

    def test_edges_never_point_into_the_same_file(self, parsed_source):
        graph = build_component_graph(self._sources(parsed_source))

        by_id = {node.id: node for node in graph.components}
        assert graph.relationships
        for relationship in graph.relationships:
            assert relationship.source_component_id != relationship.target_component_id
            assert (
                by_id[relationship.source_component_id].file_path
                != by_id[relationship.target_component_id].file_path
            )

    def test_every_component_in_importing_file_gets_an_edge(self, parsed_source):
        graph = build_component_graph(self._sources(parsed_source))

        edges = {(r.source_component_id, r.target_component_id) for r in graph.relationships}
        list_file = "/project/components/List.tsx"
        assert (f"{list_file}:List", "/project/components/Card.tsx:Card") in edges
        assert (f"{list_file}:Card", "/project/components/Card.tsx:Card") in edges
        assert (f"{list_file}:List", "/project/components/Avatar.tsx:Avatar") in edges
        assert ("/project/components/Avatar.tsx:Avatar", "/project/components/Card.tsx:Card") in edges
        # Name matching also links Avatar to the same-named Card declared in List.tsx
        assert ("/project/components/Avatar.tsx:Avatar", f"{list_file}:Card") in edges
        assert len(graph.relationships) == 6

    def test_reference_counts(self, parsed_source):
        graph = build_component_graph(self._sources(parsed_source))

        by_id = {node.id: node for node in graph.components}
        card = by_id["/project/components/Card.tsx:Card"]
        assert card.inbound_reference_count == 3
        assert by_id["/project/components/List.tsx:List"].outbound_reference_count == 2

    def test_external_imports_are_ignored(self, parsed_source):
        source = parsed_source(
            """
            import { Button } from "@ui/kit";

            export function Toolbar() {
              return <Button />;
            }
            """
        )
        other = parsed_source("export function Button() { return null; }\n", "components/Button.tsx")

        graph = build_component_graph([source, other])

        assert graph.relationships == []

    def test_stats(self, parsed_source):
        graph = build_component_graph(self._sources(parsed_source))
        stats = graph.stats

        assert stats.total_components == 4
        assert stats.by_type["component"] == 4
        assert stats.by_type["page"] == 0
        assert stats.most_used[0].name == "Card"
        assert stats.most_used[0].usage_count == 3
        assert [entry.name for entry in stats.most_props] == ["Avatar", "List", "Card"]

    def test_grid_positions(self, parsed_source):
        graph = build_component_graph(self._sources(parsed_source))

        positions = [(node.position.x, node.position.y) for node in graph.components]
        assert positions == [(0, 0), (GRID_SPACING, 0), (0, GRID_SPACING), (GRID_SPACING, GRID_SPACING)]

    def test_empty(self):
        graph = build_component_graph([])

        assert graph.components == []
        assert graph.stats.total_components == 0
