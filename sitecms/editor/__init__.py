"""Éditeur visuel — inférence, arbre de formulaire, opérations, mode brut."""
from .schema import EditType, ArrayKind, infer_field_type, classify_array

__all__ = ["EditType", "ArrayKind", "infer_field_type", "classify_array"]
