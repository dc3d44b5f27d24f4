"""Utilities for printing JavaScript trees back to source text."""

from .writer import Edit, EmitError, EmitOptions, NodeWriter, emit_document, emit_node

__all__ = ["Edit", "EmitError", "EmitOptions", "NodeWriter", "emit_document", "emit_node"]
