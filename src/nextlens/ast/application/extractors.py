"""
Extraction utilities.

Four independent, pure functions over a SyntaxTree:
- extract_imports: import statements and the local names they bind
- extract_exports: export statements, named vs default vs re-export-all
- extract_composable_units: component/hook declarations by naming convention
- extract_type_declarations: interfaces, type aliases, enums and classes
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from nextlens.ast.domain.declarations import (
    ComposableUnit,
    ExportDeclaration,
    ImportBinding,
    ImportDeclaration,
    TypeDeclaration,
    TypeMember,
    is_capitalized,
    is_hook_name,
)
from nextlens.ast.domain.enums import (
    ExportKind,
    ImportBindingKind,
    NodeKind,
    TypeDeclarationKind,
    UnitDeclarationKind,
)
from nextlens.ast.domain.models import SyntaxNode, SyntaxTree

FUNCTION_KINDS = (NodeKind.FUNCTION, NodeKind.ARROW_FUNCTION)

TYPE_DECLARATION_KINDS = {
    NodeKind.INTERFACE: TypeDeclarationKind.INTERFACE,
    NodeKind.TYPE_ALIAS: TypeDeclarationKind.TYPE,
    NodeKind.ENUM: TypeDeclarationKind.ENUM,
    NodeKind.CLASS: TypeDeclarationKind.CLASS,
}


def unquote(text: str) -> str:
    """Strip matching quotes from a string literal's source text."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"', "`"):
        return text[1:-1]
    return text


def strip_type_arguments(text: str) -> str:
    """`Base<T>` -> `Base`."""
    return text.split("<", 1)[0].strip()


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


def extract_imports(tree: SyntaxTree) -> List[ImportDeclaration]:
    """
    Extract import statements in source order.

    Side-effect imports (`import "./styles.css"`) have no bindings.
    """
    imports: List[ImportDeclaration] = []

    for statement in tree.root.children_of_kind(NodeKind.IMPORT):
        source_node = statement.child_by_field("source")
        if source_node is None:
            # `import x = require(...)` has no module specifier field
            continue

        clause = statement.first_child_of_kind(NodeKind.IMPORT_CLAUSE)
        bindings = _import_bindings(clause) if clause is not None else []

        imports.append(
            ImportDeclaration(
                source=unquote(source_node.text),
                bindings=bindings,
                is_type_only=statement.has_token("type"),
                line=statement.start_line,
            )
        )

    return imports


def _import_bindings(clause: SyntaxNode) -> List[ImportBinding]:
    bindings: List[ImportBinding] = []

    for child in clause.children:
        if child.kind == NodeKind.IDENTIFIER:
            bindings.append(ImportBinding(child.text, "default", ImportBindingKind.DEFAULT))

        elif child.kind == NodeKind.NAMESPACE_IMPORT:
            name = child.first_child_of_kind(NodeKind.IDENTIFIER)
            if name is not None:
                bindings.append(ImportBinding(name.text, "*", ImportBindingKind.NAMESPACE))

        else:
            # named_imports: { A, B as C }
            for specifier in child.children_of_kind(NodeKind.IMPORT_SPECIFIER):
                name = specifier.child_by_field("name")
                if name is None:
                    continue
                alias = specifier.child_by_field("alias")
                imported = unquote(name.text)
                local = alias.text if alias is not None else imported
                bindings.append(ImportBinding(local, imported, ImportBindingKind.NAMED))

    return bindings


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------


def extract_exports(tree: SyntaxTree) -> List[ExportDeclaration]:
    """
    Extract export statements in source order.

    Declaration exports contribute their declared names; `export default`
    contributes `default`; `export * from` is kind ALL.
    """
    exports: List[ExportDeclaration] = []

    for statement in tree.root.children_of_kind(NodeKind.EXPORT):
        source_node = statement.child_by_field("source")
        source = unquote(source_node.text) if source_node is not None else None
        line = statement.start_line

        if statement.has_token("default") or statement.has_token("="):
            exports.append(ExportDeclaration(ExportKind.DEFAULT, ["default"], source, line))
            continue

        if statement.has_token("*"):
            names = []
            for child in statement.children:
                if child.grammar_type == "namespace_export":
                    alias = child.first_child_of_kind(NodeKind.IDENTIFIER, NodeKind.STRING_LITERAL)
                    if alias is not None:
                        names.append(unquote(alias.text))
            exports.append(ExportDeclaration(ExportKind.ALL, names, source, line))
            continue

        clause = statement.first_child_of_kind(NodeKind.EXPORT_CLAUSE)
        if clause is not None:
            names = []
            for specifier in clause.children_of_kind(NodeKind.EXPORT_SPECIFIER):
                alias = specifier.child_by_field("alias")
                name = alias if alias is not None else specifier.child_by_field("name")
                if name is not None:
                    names.append(unquote(name.text))
            exports.append(ExportDeclaration(ExportKind.NAMED, names, source, line))
            continue

        declaration = statement.child_by_field("declaration")
        if declaration is not None:
            exports.append(
                ExportDeclaration(ExportKind.NAMED, _declared_names(declaration), source, line)
            )

    return exports


def _declared_names(declaration: SyntaxNode) -> List[str]:
    if declaration.kind == NodeKind.VARIABLE_DECLARATION:
        names = []
        for declarator in declaration.children_of_kind(NodeKind.VARIABLE_DECLARATOR):
            name = declarator.child_by_field("name")
            if name is not None and name.kind == NodeKind.IDENTIFIER:
                names.append(name.text)
        return names

    name = declaration.child_by_field("name")
    if name is not None:
        return [name.text]

    # `declare module "x" {}` and similar wrappers
    inner = declaration.first_child_of_kind(
        NodeKind.FUNCTION, NodeKind.CLASS, NodeKind.VARIABLE_DECLARATION,
        NodeKind.INTERFACE, NodeKind.TYPE_ALIAS, NodeKind.ENUM,
    )
    return _declared_names(inner) if inner is not None else []


# ---------------------------------------------------------------------------
# Composable units
# ---------------------------------------------------------------------------


def is_composable_name(name: str) -> bool:
    """Capitalized identifier or hook-prefixed identifier."""
    return is_capitalized(name) or is_hook_name(name)


def extract_composable_units(tree: SyntaxTree) -> List[ComposableUnit]:
    """
    Extract top-level declarations that look like components or hooks.

    Naming heuristic only: any capitalized or `use`-prefixed function, class
    or function-valued variable qualifies, component or not.
    """
    units: List[ComposableUnit] = []

    for declaration, exported in _top_level_declarations(tree.root):
        if declaration.kind == NodeKind.FUNCTION:
            unit = _function_unit(declaration, exported)
            if unit is not None:
                units.append(unit)

        elif declaration.kind == NodeKind.CLASS:
            unit = _class_unit(declaration, exported)
            if unit is not None:
                units.append(unit)

        elif declaration.kind == NodeKind.VARIABLE_DECLARATION:
            for declarator in declaration.children_of_kind(NodeKind.VARIABLE_DECLARATOR):
                unit = _variable_unit(declarator, exported)
                if unit is not None:
                    units.append(unit)

    return units


def _top_level_declarations(root: SyntaxNode) -> Iterator[tuple[SyntaxNode, bool]]:
    for statement in root.children:
        if statement.kind == NodeKind.EXPORT:
            for field_name in ("declaration", "value"):
                inner = statement.child_by_field(field_name)
                if inner is not None:
                    yield inner, True
        else:
            yield statement, False


def _function_unit(node: SyntaxNode, exported: bool) -> Optional[ComposableUnit]:
    name = node.child_by_field("name")
    if name is None or not is_composable_name(name.text):
        return None

    return ComposableUnit(
        name=name.text,
        declaration_kind=UnitDeclarationKind.FUNCTION,
        declared_parameters=declared_parameters(node),
        start_line=node.start_line,
        end_line=node.end_line,
        exported=exported,
        node=node,
    )


def _class_unit(node: SyntaxNode, exported: bool) -> Optional[ComposableUnit]:
    name = node.child_by_field("name")
    if name is None or not is_composable_name(name.text):
        return None

    # Span of a class is the span of its body
    body = node.child_by_field("body") or node
    return ComposableUnit(
        name=name.text,
        declaration_kind=UnitDeclarationKind.CLASS,
        declared_parameters=[],
        start_line=body.start_line,
        end_line=body.end_line,
        exported=exported,
        node=node,
    )


def _variable_unit(declarator: SyntaxNode, exported: bool) -> Optional[ComposableUnit]:
    name = declarator.child_by_field("name")
    value = declarator.child_by_field("value")
    if name is None or value is None or name.kind != NodeKind.IDENTIFIER:
        return None
    if not is_composable_name(name.text):
        return None

    function = wrapped_function(value)
    if function is None:
        return None

    return ComposableUnit(
        name=name.text,
        declaration_kind=UnitDeclarationKind.VARIABLE,
        declared_parameters=declared_parameters(function),
        start_line=value.start_line,
        end_line=value.end_line,
        exported=exported,
        node=function,
    )


def wrapped_function(value: SyntaxNode) -> Optional[SyntaxNode]:
    """
    Find the function a variable's value defines.

    Accepts a function or arrow function directly, or a call wrapping one
    as an argument, at any nesting (`memo(forwardRef((props, ref) => ...))`).
    """
    current: Optional[SyntaxNode] = value
    while current is not None:
        if current.kind in FUNCTION_KINDS:
            return current
        if current.kind != NodeKind.CALL:
            return None

        arguments = current.child_by_field("arguments")
        if arguments is None:
            return None

        next_value = None
        for argument in arguments.children:
            if argument.kind in FUNCTION_KINDS or argument.kind == NodeKind.CALL:
                next_value = argument
                break
        current = next_value

    return None


def declared_parameters(function: SyntaxNode) -> List[str]:
    """Keys of a destructured first parameter: `({ title, onClose })` -> [title, onClose]."""
    parameters = function.child_by_field("parameters")
    if parameters is None:
        return []

    first = parameters.first_child_of_kind(NodeKind.PARAMETER)
    if first is None:
        return []

    pattern = first.child_by_field("pattern")
    if pattern is None or pattern.kind != NodeKind.OBJECT_PATTERN:
        return []

    keys: List[str] = []
    for prop in pattern.children:
        if prop.grammar_type == "shorthand_property_identifier_pattern":
            keys.append(prop.text)
        elif prop.grammar_type == "pair_pattern":
            key = prop.child_by_field("key")
            if key is not None:
                keys.append(unquote(key.text))
        elif prop.grammar_type == "object_assignment_pattern":
            left = prop.child_by_field("left")
            if left is not None:
                keys.append(left.text)
    return keys


# ---------------------------------------------------------------------------
# Type declarations
# ---------------------------------------------------------------------------


def extract_type_declarations(tree: SyntaxTree) -> List[TypeDeclaration]:
    """Extract interface, type alias, enum and named class declarations at any depth."""
    declarations: List[TypeDeclaration] = []

    for node in tree.root.descendants():
        kind = TYPE_DECLARATION_KINDS.get(node.kind)
        if kind is None:
            continue

        name = node.child_by_field("name")
        if name is None:
            continue

        declarations.append(
            TypeDeclaration(
                name=name.text,
                kind=kind,
                members=_members(node),
                extends=_extends(node),
                implements=_implements(node),
                exported=node.parent is not None and node.parent.kind == NodeKind.EXPORT,
                location=node.location,
                node=node,
            )
        )

    return declarations


def _members(node: SyntaxNode) -> List[TypeMember]:
    if node.kind == NodeKind.TYPE_ALIAS:
        body = node.child_by_field("value")
        if body is None or body.kind != NodeKind.OBJECT_TYPE:
            return []
    else:
        body = node.child_by_field("body")
        if body is None:
            return []

    if node.kind == NodeKind.ENUM:
        return [_enum_member(child) for child in body.children if child.kind != NodeKind.COMMENT]

    members: List[TypeMember] = []
    for child in body.children:
        member = _member(child)
        if member is not None:
            members.append(member)
    return members


def _member(node: SyntaxNode) -> Optional[TypeMember]:
    optional = node.has_token("?")
    readonly = node.has_token("readonly")

    if node.kind in (NodeKind.PROPERTY_SIGNATURE, NodeKind.FIELD):
        name = node.child_by_field("name")
        return TypeMember(
            name=unquote(name.text) if name is not None else "",
            kind="property",
            optional=optional,
            readonly=readonly,
            type_text=_annotation_text(node.child_by_field("type")),
        )

    if node.kind in (NodeKind.METHOD_SIGNATURE, NodeKind.METHOD):
        if node.grammar_type == "call_signature":
            name_text, kind = "()", "call"
        elif node.grammar_type == "construct_signature":
            name_text, kind = "new", "construct"
        else:
            name = node.child_by_field("name")
            name_text, kind = (unquote(name.text) if name is not None else ""), "method"
        return TypeMember(
            name=name_text,
            kind=kind,
            optional=optional,
            readonly=readonly,
            type_text=_annotation_text(node.child_by_field("return_type")),
            parameter_count=parameter_count(node),
        )

    if node.kind == NodeKind.INDEX_SIGNATURE:
        name = node.child_by_field("name")
        return TypeMember(
            name=f"[{name.text}]" if name is not None else "[]",
            kind="index",
            readonly=readonly,
            type_text=_annotation_text(node.child_by_field("type")),
        )

    return None


def _enum_member(node: SyntaxNode) -> TypeMember:
    name = node.child_by_field("name") if node.grammar_type == "enum_assignment" else node
    return TypeMember(name=unquote((name or node).text), kind="enum_member")


def _annotation_text(annotation: Optional[SyntaxNode]) -> Optional[str]:
    """`: string | null` -> `string | null`."""
    if annotation is None:
        return None
    text = annotation.text.strip()
    if text.startswith("?:"):
        text = text[2:]
    elif text.startswith(":"):
        text = text[1:]
    return text.strip()


def parameter_count(node: SyntaxNode) -> int:
    parameters = node.child_by_field("parameters")
    if parameters is None:
        return 0
    return len(parameters.children_of_kind(NodeKind.PARAMETER))


def _extends(node: SyntaxNode) -> List[str]:
    names: List[str] = []
    if node.kind == NodeKind.INTERFACE:
        for clause in node.children_of_kind(NodeKind.EXTENDS_CLAUSE):
            for base in clause.children:
                if base.kind != NodeKind.COMMENT:
                    names.append(strip_type_arguments(base.text))
    elif node.kind == NodeKind.CLASS:
        for heritage in node.children_of_kind(NodeKind.CLASS_HERITAGE):
            for clause in heritage.children_of_kind(NodeKind.EXTENDS_CLAUSE):
                for base in clause.children_by_field("value"):
                    names.append(strip_type_arguments(base.text))
    return names


def _implements(node: SyntaxNode) -> List[str]:
    names: List[str] = []
    for heritage in node.children_of_kind(NodeKind.CLASS_HERITAGE):
        for clause in heritage.children_of_kind(NodeKind.IMPLEMENTS_CLAUSE):
            for base in clause.children:
                if base.kind != NodeKind.COMMENT:
                    names.append(strip_type_arguments(base.text))
    return names
