"""
Arbre de formulaire — rendu récursif d'un document JSON en champs éditables.

build_editor(document) choisit la vue de premier niveau :
  list  → document tableau (table d'enregistrements)
  tabs  → objet avec `items` (onglets Items / Page Info)
  form  → tout autre objet
"""
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from ..blocks import hints_for, label_for
from .ops import record_columns
from .schema import ArrayKind, EditType, classify_array, humanize, infer_field_type

Path = Tuple[Any, ...]


class FieldNode(BaseModel):
    key: Any
    path: List[Any]
    label: str
    edit_type: EditType
    value: Any = None
    options: List[str] = Field(default_factory=list)
    help: Optional[str] = None
    children: List["FieldNode"] = Field(default_factory=list)
    array_kind: Optional[ArrayKind] = None
    columns: List[str] = Field(default_factory=list)
    block_type: Optional[str] = None
    block_label: Optional[str] = None


FieldNode.model_rebuild()


class EditorTab(BaseModel):
    name: str
    fields: List[FieldNode] = Field(default_factory=list)


class EditorView(BaseModel):
    mode: str
    tabs: List[EditorTab] = Field(default_factory=list)


def _hint_attr(hints: Optional[Mapping[str, Any]], key: Any, attr: str, default=None):
    if not hints or key not in hints:
        return default
    return getattr(hints[key], attr, default)


def build_field(key: Any, value: Any, path: Path, hints: Optional[Mapping[str, Any]] = None) -> FieldNode:
    edit_type = infer_field_type(str(key), value, hints)
    node = FieldNode(
        key=key,
        path=list(path),
        label=humanize(key),
        edit_type=edit_type,
        value=value,
        options=list(_hint_attr(hints, key, "options", []) or []),
        help=_hint_attr(hints, key, "help"),
    )
    # un indice peut forcer un type scalaire sur une valeur composite : on n'y descend pas
    if edit_type is EditType.OBJECT and isinstance(value, dict):
        node.value = None
        node.children = build_form(value, path)
    elif edit_type is EditType.ARRAY and isinstance(value, list):
        node.array_kind = classify_array(str(key), value)
        _fill_array(node, value, path)
    return node


def _fill_array(node: FieldNode, value: list, path: Path):
    kind = node.array_kind
    if kind is ArrayKind.BLOCKS:
        node.value = None
        node.children = [build_block(i, b, path + (i,)) for i, b in enumerate(value)]
    elif kind is ArrayKind.RECORDS:
        node.value = None
        node.columns = record_columns(value)
        node.children = [
            build_field(i, row, path + (i,)) for i, row in enumerate(value)
        ]
    # IMAGES / PRIMITIVES : la valeur brute suffit (grille ou une valeur par ligne)


def build_block(index: int, block: Any, path: Path) -> FieldNode:
    """Élément de liste de blocs : `type` conservé en lecture seule, formulaire filtré par les indices."""
    if not isinstance(block, dict):
        return build_field(index, block, path)
    fields = {k: v for k, v in block.items() if k != "type"}
    return FieldNode(
        key=index,
        path=list(path),
        label=label_for(block),
        edit_type=EditType.OBJECT,
        block_type=block.get("type"),
        block_label=label_for(block),
        children=build_form(fields, path, hints_for(block)),
    )


def build_form(data: Mapping[str, Any], path: Path = (), hints: Optional[Mapping[str, Any]] = None) -> List[FieldNode]:
    return [build_field(k, v, path + (k,), hints) for k, v in data.items()]


def build_editor(document: Any) -> EditorView:
    if isinstance(document, list):
        return EditorView(mode="list", tabs=[EditorTab(name="Items", fields=[build_field("items", document, ())])])
    if isinstance(document, dict) and isinstance(document.get("items"), list):
        page_info = {k: v for k, v in document.items() if k != "items"}
        return EditorView(mode="tabs", tabs=[
            EditorTab(name="Items", fields=[build_field("items", document["items"], ("items",))]),
            EditorTab(name="Page Info", fields=build_form(page_info)),
        ])
    if isinstance(document, dict):
        return EditorView(mode="form", tabs=[EditorTab(name="Content", fields=build_form(document))])
    # scalaire à la racine : un seul champ
    return EditorView(mode="form", tabs=[EditorTab(name="Content", fields=[build_field("value", document, ())])])
