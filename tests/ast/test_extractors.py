"""
Tests for the extraction utilities.

Imports, exports, composable units and type declarations are extracted from
real parses of small TypeScript/TSX snippets.
"""

from nextlens.ast.application.extractors import (
    extract_composable_units,
    extract_exports,
    extract_imports,
    extract_type_declarations,
    strip_type_arguments,
    unquote,
)
from nextlens.ast.domain.declarations import is_capitalized, is_hook_name
from nextlens.ast.domain.enums import (
    ExportKind,
    ImportBindingKind,
    TypeDeclarationKind,
    UnitDeclarationKind,
)


class TestNamingHelpers:
    """Small string helpers."""

    def test_unquote(self):
        assert unquote('"./Button"') == "./Button"
        assert unquote("'react'") == "react"
        assert unquote("plain") == "plain"

    def test_strip_type_arguments(self):
        assert strip_type_arguments("Repository<User, string>") == "Repository"
        assert strip_type_arguments("Base") == "Base"

    def test_hook_names(self):
        """Test the `use` prefix only counts before an uppercase letter or digit."""
        assert is_hook_name("useState")
        assert is_hook_name("use")
        assert is_hook_name("use2D")
        assert not is_hook_name("user")
        assert not is_hook_name("Usage")

    def test_capitalized(self):
        assert is_capitalized("Button")
        assert not is_capitalized("button")
        assert not is_capitalized("")


class TestExtractImports:
    """Import statements and their bindings."""

    def test_bindings(self, parse):
        """Test default, named, aliased and namespace bindings."""
        tree = parse(
            """
            import React, { useState as useLocal, Fragment } from "react";
            import * as utils from "./utils";
            import "./styles.css";
            import type { Props } from "./types";
            """
        )

        imports = extract_imports(tree)

        assert [declaration.source for declaration in imports] == [
            "react",
            "./utils",
            "./styles.css",
            "./types",
        ]
        react = imports[0]
        assert [(b.local_name, b.imported_name, b.kind) for b in react.bindings] == [
            ("React", "default", ImportBindingKind.DEFAULT),
            ("useLocal", "useState", ImportBindingKind.NAMED),
            ("Fragment", "Fragment", ImportBindingKind.NAMED),
        ]
        assert imports[1].bindings[0].kind == ImportBindingKind.NAMESPACE
        assert imports[1].local_names == ["utils"]
        assert imports[2].bindings == []
        assert imports[3].is_type_only
        assert not react.is_type_only

    def test_relative_detection(self, parse):
        tree = parse('import a from "./a";\nimport b from "lodash";\n')

        imports = extract_imports(tree)

        assert imports[0].is_relative
        assert not imports[1].is_relative

    def test_lines(self, parse):
        tree = parse('\n\nimport x from "./x";\n')

        assert extract_imports(tree)[0].line == 3


class TestExtractExports:
    """Export statements."""

    def test_export_kinds(self, parse):
        """Test default, declaration, clause and re-export-all forms."""
        tree = parse(
            """
            export default function Page() {
              return null;
            }
            export const first = 1, second = 2;
            const local = 3;
            export { local as renamed };
            export * from "./shared";
            export interface PageProps {
              title: string;
            }
            """
        )

        exports = extract_exports(tree)

        assert [(e.kind, e.names) for e in exports] == [
            (ExportKind.DEFAULT, ["default"]),
            (ExportKind.NAMED, ["first", "second"]),
            (ExportKind.NAMED, ["renamed"]),
            (ExportKind.ALL, []),
            (ExportKind.NAMED, ["PageProps"]),
        ]
        assert exports[3].source == "./shared"
        assert exports[0].source is None


class TestExtractComposableUnits:
    """Component and hook declarations by naming convention."""

    SOURCE = """
        import { memo, forwardRef } from "react";

        export default function Header({ title, onClose }) {
          return <h1 onClick={onClose}>{title}</h1>;
        }

        export const useCounter = () => {
          return 1;
        };

        const Card = memo(forwardRef((props, ref) => <div ref={ref} />));

        function helper() {
          return 1;
        }

        const config = { size: 2 };

        export class Legacy extends Base {
          render() {
            return null;
          }
        }
        """

    def test_unit_names_in_source_order(self, parse):
        units = extract_composable_units(parse(self.SOURCE))

        assert [unit.name for unit in units] == ["Header", "useCounter", "Card", "Legacy"]

    def test_declaration_kinds_and_exports(self, parse):
        units = {unit.name: unit for unit in extract_composable_units(parse(self.SOURCE))}

        assert units["Header"].declaration_kind == UnitDeclarationKind.FUNCTION
        assert units["useCounter"].declaration_kind == UnitDeclarationKind.VARIABLE
        assert units["Card"].declaration_kind == UnitDeclarationKind.VARIABLE
        assert units["Legacy"].declaration_kind == UnitDeclarationKind.CLASS
        assert units["Header"].exported
        assert units["useCounter"].exported
        assert not units["Card"].exported
        assert units["useCounter"].is_hook

    def test_destructured_parameters(self, parse):
        units = {unit.name: unit for unit in extract_composable_units(parse(self.SOURCE))}

        assert units["Header"].declared_parameters == ["title", "onClose"]
        assert units["Card"].declared_parameters == []

    def test_wrapped_function_is_the_walked_node(self, parse):
        """Test a memo/forwardRef-wrapped arrow resolves to the arrow itself."""
        units = {unit.name: unit for unit in extract_composable_units(parse(self.SOURCE))}

        assert units["Card"].node.grammar_type == "arrow_function"

    def test_line_span(self, parse):
        units = {unit.name: unit for unit in extract_composable_units(parse(self.SOURCE))}

        header = units["Header"]
        assert header.start_line == 4
        assert header.end_line == 6
        assert header.line_span == 2


class TestExtractTypeDeclarations:
    """Interfaces, aliases, enums and classes."""

    SOURCE = """
        export interface Base {
          id: string;
        }

        interface Props extends Base, Wrapper<string> {
          readonly name?: string;
          onClick(a: number, b: number, c: number): void;
          [key: string]: unknown;
        }

        type Alias = { value: number };

        type Id = string | number;

        enum Color {
          Red,
          Green = "green",
        }

        class Store implements Repository<User> {
          count: number = 0;
        }
        """

    def test_names_and_kinds(self, parse):
        declarations = extract_type_declarations(parse(self.SOURCE, "types/index.ts"))

        assert [(d.name, d.kind) for d in declarations] == [
            ("Base", TypeDeclarationKind.INTERFACE),
            ("Props", TypeDeclarationKind.INTERFACE),
            ("Alias", TypeDeclarationKind.TYPE),
            ("Id", TypeDeclarationKind.TYPE),
            ("Color", TypeDeclarationKind.ENUM),
            ("Store", TypeDeclarationKind.CLASS),
        ]

    def test_heritage(self, parse):
        declarations = {d.name: d for d in extract_type_declarations(parse(self.SOURCE, "types/index.ts"))}

        assert declarations["Props"].extends == ["Base", "Wrapper"]
        assert declarations["Store"].implements == ["Repository"]
        assert declarations["Base"].exported
        assert not declarations["Props"].exported

    def test_members(self, parse):
        declarations = {d.name: d for d in extract_type_declarations(parse(self.SOURCE, "types/index.ts"))}

        props = {member.name: member for member in declarations["Props"].members}
        assert props["name"].optional
        assert props["name"].readonly
        assert props["name"].type_text == "string"
        assert props["onClick"].kind == "method"
        assert props["onClick"].parameter_count == 3
        assert props["[key]"].kind == "index"
        assert [m.name for m in declarations["Props"].method_signatures] == ["onClick"]

        assert [m.name for m in declarations["Alias"].members] == ["value"]
        assert declarations["Id"].members == []
        assert [m.name for m in declarations["Color"].members] == ["Red", "Green"]
        assert [m.name for m in declarations["Store"].members] == ["count"]
