"""Syntax tree parsing and accessor classification."""
