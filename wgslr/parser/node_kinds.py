"""Closed set of node kinds produced by the WGSL grammar."""

from __future__ import annotations
from enum import Enum


class NodeKind(str, Enum):
    # Module level
    TRANSLATION_UNIT = "translation_unit"
    ENABLE_DIRECTIVE = "enable_directive"
    REQUIRES_DIRECTIVE = "requires_directive"
    STRUCT_DECLARATION = "struct_declaration"
    FUNCTION_DECLARATION = "function_declaration"
    GLOBAL_VARIABLE_DECLARATION = "global_variable_declaration"
    GLOBAL_CONSTANT_DECLARATION = "global_constant_declaration"
    TYPE_ALIAS_DECLARATION = "type_alias_declaration"
    CONST_ASSERT_STATEMENT = "const_assert_statement"

    # Declaration parts
    ATTRIBUTE = "attribute"
    STRUCT_MEMBER = "struct_member"
    VARIABLE_IDENTIFIER_DECLARATION = "variable_identifier_declaration"
    PARAMETER_LIST = "parameter_list"
    PARAMETER = "parameter"
    FUNCTION_RETURN_TYPE = "function_return_type"
    COMPOUND_STATEMENT = "compound_statement"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_QUALIFIER = "variable_qualifier"
    ADDRESS_SPACE = "address_space"
    ACCESS_MODE = "access_mode"
    TYPE_DECLARATION = "type_declaration"

    # Expressions
    BINARY_EXPRESSION = "binary_expression"
    UNARY_EXPRESSION = "unary_expression"
    MEMBER_EXPRESSION = "member_expression"
    INDEX_EXPRESSION = "index_expression"
    PAREN_EXPRESSION = "paren_expression"
    CALL_EXPRESSION = "call_expression"
    ARGUMENT_LIST = "argument_list"

    # Leaves
    IDENTIFIER = "identifier"
    INT_LITERAL = "int_literal"
    FLOAT_LITERAL = "float_literal"
    BOOL_LITERAL = "bool_literal"
    STRING_LITERAL = "string_literal"

    # Punctuation, keywords and raw body text
    ANONYMOUS = "anonymous"


# Field name -> kind of the direct named child that carries it, per parent kind.
FIELDS: dict[NodeKind, dict[str, NodeKind]] = {
    NodeKind.STRUCT_DECLARATION: {
        "name": NodeKind.IDENTIFIER,
    },
    NodeKind.FUNCTION_DECLARATION: {
        "name": NodeKind.IDENTIFIER,
        "parameters": NodeKind.PARAMETER_LIST,
        "return_type": NodeKind.FUNCTION_RETURN_TYPE,
        "body": NodeKind.COMPOUND_STATEMENT,
    },
    NodeKind.FUNCTION_RETURN_TYPE: {
        "type": NodeKind.TYPE_DECLARATION,
    },
    NodeKind.VARIABLE_IDENTIFIER_DECLARATION: {
        "name": NodeKind.IDENTIFIER,
        "type": NodeKind.TYPE_DECLARATION,
    },
    NodeKind.VARIABLE_DECLARATION: {
        "qualifier": NodeKind.VARIABLE_QUALIFIER,
        "name": NodeKind.IDENTIFIER,
    },
    NodeKind.VARIABLE_QUALIFIER: {
        "address_space": NodeKind.ADDRESS_SPACE,
        "access_mode": NodeKind.ACCESS_MODE,
    },
    NodeKind.GLOBAL_CONSTANT_DECLARATION: {
        "name": NodeKind.IDENTIFIER,
    },
    NodeKind.TYPE_ALIAS_DECLARATION: {
        "name": NodeKind.IDENTIFIER,
        "type": NodeKind.TYPE_DECLARATION,
    },
    NodeKind.ATTRIBUTE: {
        "name": NodeKind.IDENTIFIER,
    },
}
