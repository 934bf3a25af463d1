"""Core data model: AST nodes, runtime values and scopes."""
