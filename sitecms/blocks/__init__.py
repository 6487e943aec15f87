"""
Blocs de page — exports publics du registre.
"""
from .registry import (
    BlockType, BlockSpec, FieldHint,
    list_specs, get_spec, new_block, hints_for, label_for,
)

__all__ = [
    "BlockType", "BlockSpec", "FieldHint",
    "list_specs", "get_spec", "new_block", "hints_for", "label_for",
]
