"""
AST domain enums.

NodeKind is the discriminator of the normalized syntax tree. Grammar node
types are mapped onto it by the parse adapter; every traversal switches on it.
"""

from enum import Enum


class Grammar(str, Enum):
    """tree-sitter grammar used for a file."""

    TYPESCRIPT = "typescript"
    TSX = "tsx"


class NodeKind(str, Enum):
    """Normalized syntax node kinds."""

    PROGRAM = "program"

    # Modules
    IMPORT = "import"
    IMPORT_CLAUSE = "import_clause"
    IMPORT_SPECIFIER = "import_specifier"
    NAMESPACE_IMPORT = "namespace_import"
    EXPORT = "export"
    EXPORT_CLAUSE = "export_clause"
    EXPORT_SPECIFIER = "export_specifier"

    # Declarations
    FUNCTION = "function"
    ARROW_FUNCTION = "arrow_function"
    METHOD = "method"
    CLASS = "class"
    CLASS_HERITAGE = "class_heritage"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    FIELD = "field"

    # Type declarations
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    ENUM = "enum"
    OBJECT_TYPE = "object_type"
    PROPERTY_SIGNATURE = "property_signature"
    METHOD_SIGNATURE = "method_signature"
    INDEX_SIGNATURE = "index_signature"
    EXTENDS_CLAUSE = "extends_clause"
    IMPLEMENTS_CLAUSE = "implements_clause"

    # Parameters and patterns
    PARAMETERS = "parameters"
    PARAMETER = "parameter"
    OBJECT_PATTERN = "object_pattern"

    # Statements
    BLOCK = "block"
    IF = "if"
    ELSE = "else"
    SWITCH = "switch"
    SWITCH_CASE = "switch_case"
    LOOP = "loop"
    TRY = "try"
    RETURN = "return"
    EXPRESSION_STATEMENT = "expression_statement"

    # Expressions
    TERNARY = "ternary"
    CALL = "call"
    NEW = "new"
    MEMBER = "member"
    ASSIGNMENT = "assignment"
    AWAIT = "await"
    ARGUMENTS = "arguments"
    TYPE_ASSERTION = "type_assertion"

    # Names
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    TYPE_IDENTIFIER = "type_identifier"

    # Literals
    STRING_LITERAL = "string_literal"
    TEMPLATE_LITERAL = "template_literal"
    NUMBER_LITERAL = "number_literal"
    BOOLEAN_LITERAL = "boolean_literal"
    NULL_LITERAL = "null_literal"
    ARRAY_LITERAL = "array_literal"
    OBJECT_LITERAL = "object_literal"

    # Markup
    JSX_ELEMENT = "jsx_element"
    JSX_SELF_CLOSING = "jsx_self_closing"
    JSX_OPENING = "jsx_opening"
    JSX_CLOSING = "jsx_closing"
    JSX_ATTRIBUTE = "jsx_attribute"
    JSX_EXPRESSION = "jsx_expression"
    JSX_TEXT = "jsx_text"

    # Type expressions
    TYPE_ANNOTATION = "type_annotation"
    PREDEFINED_TYPE = "predefined_type"
    UNION_TYPE = "union_type"
    GENERIC_TYPE = "generic_type"
    TYPE_EXPRESSION = "type_expression"

    COMMENT = "comment"
    ERROR = "error"
    OTHER = "other"


class TypeDeclarationKind(str, Enum):
    """Kinds of declared types cataloged by the extractors."""

    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    CLASS = "class"


class ImportBindingKind(str, Enum):
    """How an import binds a local name."""

    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


class ExportKind(str, Enum):
    """Export statement flavor."""

    NAMED = "named"
    DEFAULT = "default"
    ALL = "all"


class UnitDeclarationKind(str, Enum):
    """Syntactic form of a composable unit."""

    FUNCTION = "function"
    CLASS = "class"
    VARIABLE = "variable"
