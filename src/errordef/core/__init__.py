"""Lexer, parser, IR and configuration for errordef."""
