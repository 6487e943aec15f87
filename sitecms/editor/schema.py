"""
Inférence de schéma — type d'édition d'un champ à partir de sa clé et de sa valeur.

Aucune donnée de schéma n'est stockée : le formulaire est déduit de la forme
du document, éventuellement corrigée par les indications du registre de blocs.
"""
from enum import Enum
from typing import Any, Mapping, Optional


class EditType(str, Enum):
    OBJECT   = "object"
    ARRAY    = "array"
    BOOLEAN  = "boolean"
    NUMBER   = "number"
    TEXT     = "text"
    TEXTAREA = "textarea"
    IMAGE    = "image"
    SELECT   = "select"
    COLOR    = "color"


class ArrayKind(str, Enum):
    BLOCKS     = "blocks"
    IMAGES     = "images"
    PRIMITIVES = "primitives"
    RECORDS    = "records"


IMAGE_KEY_SUFFIXES = ("image", "img", "icon", "logo", "poster")
COLOR_KEY_HINTS = ("color", "colour", "background", "bg")
IMAGE_COLLECTION_HINTS = ("image", "logo", "gallery")
TEXTAREA_MIN_LENGTH = 100


def _hint_type(key: str, hints: Optional[Mapping[str, Any]]) -> Optional[EditType]:
    if not hints or key not in hints:
        return None
    hint = hints[key]
    t = getattr(hint, "type", None)
    if t is None and isinstance(hint, Mapping):
        t = hint.get("type")
    return EditType(t) if t is not None else None


def is_image_key(key: str) -> bool:
    return str(key).lower().endswith(IMAGE_KEY_SUFFIXES)


def is_color_key(key: str) -> bool:
    k = str(key).lower()
    return any(h in k for h in COLOR_KEY_HINTS)


def infer_field_type(key: str, value: Any, hints: Optional[Mapping[str, Any]] = None) -> EditType:
    """Type d'édition du champ `key`. Déterministe et total."""
    hinted = _hint_type(key, hints)
    if hinted is not None:
        return hinted
    if is_image_key(key):
        return EditType.IMAGE
    if value is None:
        return EditType.TEXT
    # bool avant int : True est un int en Python
    if isinstance(value, bool):
        return EditType.BOOLEAN
    if isinstance(value, (int, float)):
        return EditType.NUMBER
    if isinstance(value, str):
        if len(value) > TEXTAREA_MIN_LENGTH:
            return EditType.TEXTAREA
        if is_color_key(key):
            return EditType.COLOR
        return EditType.TEXT
    if isinstance(value, list):
        return EditType.ARRAY
    if isinstance(value, dict):
        return EditType.OBJECT
    return EditType.TEXT


def is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def is_image_collection(key: str, value: list) -> bool:
    k = str(key).lower()
    if any(h in k for h in IMAGE_COLLECTION_HINTS):
        return all(isinstance(v, str) for v in value)
    return bool(value) and isinstance(value[0], str) and value[0].startswith("/images/")


def classify_array(key: str, value: list) -> ArrayKind:
    """Sous-type d'un tableau : blocs, images, primitives ou enregistrements."""
    if key == "blocks":
        return ArrayKind.BLOCKS
    if is_image_collection(key, value):
        return ArrayKind.IMAGES
    if value and all(is_primitive(v) for v in value):
        return ArrayKind.PRIMITIVES
    return ArrayKind.RECORDS


def humanize(key: Any) -> str:
    """Libellé lisible : ctaText → Cta Text, product_ids → Product ids."""
    s = str(key)
    out = []
    for i, ch in enumerate(s):
        if ch.isupper() and i and (s[i - 1].islower() or s[i - 1].isdigit()):
            out.append(" ")
        out.append(" " if ch == "_" else ch)
    label = "".join(out).strip()
    return label[:1].upper() + label[1:]
