"""
TypeScript/TSX syntax provider using tree-sitter-typescript.

Parses .ts with the TypeScript grammar and .tsx/.jsx/.js/.mjs/.cjs with the
TSX grammar (the TSX grammar is a superset of JavaScript with markup), then
converts the tree-sitter tree into the normalized SyntaxNode tree.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, FrozenSet, List, Optional

import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser

from nextlens.ast.application.provider_interface import ISyntaxProvider
from nextlens.ast.domain.enums import Grammar, NodeKind
from nextlens.ast.domain.models import (
    ParseDiagnostic,
    SourceLocation,
    SyntaxNode,
    SyntaxTree,
)
from nextlens.shared.domain.exceptions import SourceParseError
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


GRAMMAR_BY_EXTENSION: Dict[str, Grammar] = {
    ".ts": Grammar.TYPESCRIPT,
    ".tsx": Grammar.TSX,
    ".jsx": Grammar.TSX,
    ".js": Grammar.TSX,
    ".mjs": Grammar.TSX,
    ".cjs": Grammar.TSX,
}

# Grammar node type -> normalized kind. Anything absent maps to OTHER.
NODE_KIND_BY_GRAMMAR_TYPE: Dict[str, NodeKind] = {
    "program": NodeKind.PROGRAM,
    # Modules
    "import_statement": NodeKind.IMPORT,
    "import_clause": NodeKind.IMPORT_CLAUSE,
    "import_specifier": NodeKind.IMPORT_SPECIFIER,
    "namespace_import": NodeKind.NAMESPACE_IMPORT,
    "export_statement": NodeKind.EXPORT,
    "export_clause": NodeKind.EXPORT_CLAUSE,
    "export_specifier": NodeKind.EXPORT_SPECIFIER,
    # Declarations
    "function_declaration": NodeKind.FUNCTION,
    "function_expression": NodeKind.FUNCTION,
    "function": NodeKind.FUNCTION,
    "generator_function_declaration": NodeKind.FUNCTION,
    "generator_function": NodeKind.FUNCTION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "method_definition": NodeKind.METHOD,
    "class_declaration": NodeKind.CLASS,
    "abstract_class_declaration": NodeKind.CLASS,
    "class": NodeKind.CLASS,
    "class_heritage": NodeKind.CLASS_HERITAGE,
    "lexical_declaration": NodeKind.VARIABLE_DECLARATION,
    "variable_declaration": NodeKind.VARIABLE_DECLARATION,
    "variable_declarator": NodeKind.VARIABLE_DECLARATOR,
    "public_field_definition": NodeKind.FIELD,
    # Type declarations
    "interface_declaration": NodeKind.INTERFACE,
    "type_alias_declaration": NodeKind.TYPE_ALIAS,
    "enum_declaration": NodeKind.ENUM,
    "object_type": NodeKind.OBJECT_TYPE,
    "interface_body": NodeKind.OBJECT_TYPE,
    "property_signature": NodeKind.PROPERTY_SIGNATURE,
    "method_signature": NodeKind.METHOD_SIGNATURE,
    "abstract_method_signature": NodeKind.METHOD_SIGNATURE,
    "call_signature": NodeKind.METHOD_SIGNATURE,
    "construct_signature": NodeKind.METHOD_SIGNATURE,
    "index_signature": NodeKind.INDEX_SIGNATURE,
    "extends_clause": NodeKind.EXTENDS_CLAUSE,
    "extends_type_clause": NodeKind.EXTENDS_CLAUSE,
    "implements_clause": NodeKind.IMPLEMENTS_CLAUSE,
    # Parameters and patterns
    "formal_parameters": NodeKind.PARAMETERS,
    "required_parameter": NodeKind.PARAMETER,
    "optional_parameter": NodeKind.PARAMETER,
    "object_pattern": NodeKind.OBJECT_PATTERN,
    # Statements
    "statement_block": NodeKind.BLOCK,
    "class_body": NodeKind.BLOCK,
    "enum_body": NodeKind.BLOCK,
    "switch_body": NodeKind.BLOCK,
    "if_statement": NodeKind.IF,
    "else_clause": NodeKind.ELSE,
    "switch_statement": NodeKind.SWITCH,
    "switch_case": NodeKind.SWITCH_CASE,
    "switch_default": NodeKind.SWITCH_CASE,
    "for_statement": NodeKind.LOOP,
    "for_in_statement": NodeKind.LOOP,
    "while_statement": NodeKind.LOOP,
    "do_statement": NodeKind.LOOP,
    "try_statement": NodeKind.TRY,
    "return_statement": NodeKind.RETURN,
    "expression_statement": NodeKind.EXPRESSION_STATEMENT,
    # Expressions
    "ternary_expression": NodeKind.TERNARY,
    "call_expression": NodeKind.CALL,
    "new_expression": NodeKind.NEW,
    "member_expression": NodeKind.MEMBER,
    "assignment_expression": NodeKind.ASSIGNMENT,
    "augmented_assignment_expression": NodeKind.ASSIGNMENT,
    "await_expression": NodeKind.AWAIT,
    "arguments": NodeKind.ARGUMENTS,
    "as_expression": NodeKind.TYPE_ASSERTION,
    "type_assertion": NodeKind.TYPE_ASSERTION,
    # Names
    "identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier_pattern": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.PROPERTY_IDENTIFIER,
    "private_property_identifier": NodeKind.PROPERTY_IDENTIFIER,
    "type_identifier": NodeKind.TYPE_IDENTIFIER,
    # Literals
    "string": NodeKind.STRING_LITERAL,
    "template_string": NodeKind.TEMPLATE_LITERAL,
    "number": NodeKind.NUMBER_LITERAL,
    "true": NodeKind.BOOLEAN_LITERAL,
    "false": NodeKind.BOOLEAN_LITERAL,
    "null": NodeKind.NULL_LITERAL,
    "undefined": NodeKind.NULL_LITERAL,
    "array": NodeKind.ARRAY_LITERAL,
    "object": NodeKind.OBJECT_LITERAL,
    # Markup
    "jsx_element": NodeKind.JSX_ELEMENT,
    "jsx_fragment": NodeKind.JSX_ELEMENT,
    "jsx_self_closing_element": NodeKind.JSX_SELF_CLOSING,
    "jsx_opening_element": NodeKind.JSX_OPENING,
    "jsx_closing_element": NodeKind.JSX_CLOSING,
    "jsx_attribute": NodeKind.JSX_ATTRIBUTE,
    "jsx_expression": NodeKind.JSX_EXPRESSION,
    "jsx_text": NodeKind.JSX_TEXT,
    # Type expressions
    "type_annotation": NodeKind.TYPE_ANNOTATION,
    "opting_type_annotation": NodeKind.TYPE_ANNOTATION,
    "omitting_type_annotation": NodeKind.TYPE_ANNOTATION,
    "asserts_annotation": NodeKind.TYPE_ANNOTATION,
    "type_predicate_annotation": NodeKind.TYPE_ANNOTATION,
    "predefined_type": NodeKind.PREDEFINED_TYPE,
    "union_type": NodeKind.UNION_TYPE,
    "generic_type": NodeKind.GENERIC_TYPE,
    "array_type": NodeKind.TYPE_EXPRESSION,
    "tuple_type": NodeKind.TYPE_EXPRESSION,
    "function_type": NodeKind.TYPE_EXPRESSION,
    "constructor_type": NodeKind.TYPE_EXPRESSION,
    "intersection_type": NodeKind.TYPE_EXPRESSION,
    "literal_type": NodeKind.TYPE_EXPRESSION,
    "parenthesized_type": NodeKind.TYPE_EXPRESSION,
    "lookup_type": NodeKind.TYPE_EXPRESSION,
    "conditional_type": NodeKind.TYPE_EXPRESSION,
    "index_type_query": NodeKind.TYPE_EXPRESSION,
    "type_query": NodeKind.TYPE_EXPRESSION,
    "readonly_type": NodeKind.TYPE_EXPRESSION,
    "template_literal_type": NodeKind.TYPE_EXPRESSION,
    "infer_type": NodeKind.TYPE_EXPRESSION,
    "type_arguments": NodeKind.TYPE_EXPRESSION,
    "type_parameters": NodeKind.TYPE_EXPRESSION,
    "type_parameter": NodeKind.TYPE_EXPRESSION,
    "constraint": NodeKind.TYPE_EXPRESSION,
    "default_type": NodeKind.TYPE_EXPRESSION,
    "nested_type_identifier": NodeKind.TYPE_EXPRESSION,
    "comment": NodeKind.COMMENT,
    "ERROR": NodeKind.ERROR,
}


class TypeScriptSyntaxProvider(ISyntaxProvider):
    """
    Parse adapter for TypeScript and JavaScript sources.

    tree-sitter Parser objects are not safe to share between threads, and
    parsing runs in worker threads, so each thread gets its own parser per
    grammar. Parse results are never cached.

    Example:
        ```python
        provider = TypeScriptSyntaxProvider()
        tree = provider.parse("export const Button = () => <button />", "Button.tsx")
        print(tree.root.kind, tree.is_partial)
        ```
    """

    def __init__(self) -> None:
        self._languages: Dict[Grammar, Language] = {
            Grammar.TYPESCRIPT: Language(tsts.language_typescript()),
            Grammar.TSX: Language(tsts.language_tsx()),
        }
        self._local = threading.local()

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return frozenset(GRAMMAR_BY_EXTENSION)

    def grammar_for(self, file_path: str) -> Grammar:
        """
        Select the grammar for a file by extension.

        Raises:
            SourceParseError: Extension is not a supported code extension
        """
        lowered = file_path.lower()
        for extension, grammar in GRAMMAR_BY_EXTENSION.items():
            if lowered.endswith(extension):
                return grammar
        raise SourceParseError(
            file_path,
            "unsupported file extension",
            context={"supported": sorted(GRAMMAR_BY_EXTENSION)},
        )

    def parse(self, source_code: str, file_path: str) -> SyntaxTree:
        """
        Parse source code to a normalized syntax tree.

        Args:
            source_code: File content
            file_path: Path used for grammar selection and error messages

        Returns:
            SyntaxTree; `is_partial` is True when the parser recovered from errors

        Raises:
            SourceParseError: Unsupported extension or parser failure
        """
        grammar = self.grammar_for(file_path)
        parser = self._parser_for(grammar)

        try:
            source = bytes(source_code, "utf8")
            ts_tree = parser.parse(source)
            root, diagnostics = self._convert(ts_tree.root_node, source)
        except Exception as e:
            logger.error(
                "syntax_tree_parse_failed",
                file_path=file_path,
                grammar=grammar.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise SourceParseError(
                file_path,
                f"parser failure: {e}",
                context={"grammar": grammar.value},
            ) from e

        if diagnostics:
            logger.warning(
                "syntax_tree_partial",
                file_path=file_path,
                grammar=grammar.value,
                error_count=len(diagnostics),
                first_error_line=diagnostics[0].location.start_line,
            )
        else:
            logger.debug("syntax_tree_parsed", file_path=file_path, grammar=grammar.value)

        return SyntaxTree(
            file_path=file_path,
            grammar=grammar,
            root=root,
            diagnostics=diagnostics,
        )

    def _parser_for(self, grammar: Grammar) -> Parser:
        parsers: Optional[Dict[Grammar, Parser]] = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers

        parser = parsers.get(grammar)
        if parser is None:
            parser = Parser(self._languages[grammar])
            parsers[grammar] = parser
        return parser

    def _convert(self, ts_root: Any, source: bytes) -> tuple[SyntaxNode, List[ParseDiagnostic]]:
        """
        Convert a tree-sitter tree to SyntaxNodes.

        Iterative with an explicit stack so deeply nested markup cannot hit
        the recursion limit. Named children become nodes; anonymous children
        become tokens on their parent.
        """
        diagnostics: List[ParseDiagnostic] = []
        root = self._make_node(ts_root, None, source)
        if ts_root.type == "ERROR":
            diagnostics.append(ParseDiagnostic(message="syntax error", location=root.location))

        stack = [(ts_root, root)]
        while stack:
            ts_node, node = stack.pop()
            for index, ts_child in enumerate(ts_node.children):
                if ts_child.is_missing:
                    diagnostics.append(
                        ParseDiagnostic(
                            message=f"missing {ts_child.type}",
                            location=self._location(ts_child),
                        )
                    )
                    continue

                if not ts_child.is_named:
                    node.tokens.append(ts_child.type)
                    continue

                child = self._make_node(ts_child, ts_node.field_name_for_child(index), source)
                child.parent = node
                node.children.append(child)

                if ts_child.type == "ERROR":
                    diagnostics.append(ParseDiagnostic(message="syntax error", location=child.location))

                stack.append((ts_child, child))

        diagnostics.sort(key=lambda d: (d.location.start_line, d.location.start_column))
        return root, diagnostics

    def _make_node(self, ts_node: Any, field_name: Optional[str], source: bytes) -> SyntaxNode:
        return SyntaxNode(
            kind=NODE_KIND_BY_GRAMMAR_TYPE.get(ts_node.type, NodeKind.OTHER),
            grammar_type=ts_node.type,
            location=self._location(ts_node),
            field_name=field_name,
            source=source,
            start_byte=ts_node.start_byte,
            end_byte=ts_node.end_byte,
        )

    @staticmethod
    def _location(ts_node: Any) -> SourceLocation:
        return SourceLocation(
            start_line=ts_node.start_point[0] + 1,
            start_column=ts_node.start_point[1],
            end_line=ts_node.end_point[0] + 1,
            end_column=ts_node.end_point[1],
        )
