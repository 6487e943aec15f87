"""
Opérations d'édition — fonctions pures sur le document de travail.

Chaque opération renvoie une nouvelle valeur ; l'entrée n'est jamais modifiée.
Un chemin est une séquence de clés (objets) et d'indices (tableaux).
"""
import copy
import math
import time
from typing import Any, List, Sequence

from ..blocks import new_block

RECORD_COLUMNS_LIMIT = 4


class EditError(ValueError):
    """Opération d'édition impossible (chemin invalide, indice hors limites…)."""


# ── Chemins ──────────────────────────────────────────────────────────────────

def _step(container: Any, key: Any) -> Any:
    if isinstance(container, list):
        if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key < len(container):
            raise EditError(f"Indice invalide : {key!r}")
        return container[key]
    if isinstance(container, dict):
        if key not in container:
            raise EditError(f"Clé absente : {key!r}")
        return container[key]
    raise EditError(f"Impossible de descendre dans {type(container).__name__} avec {key!r}")


def get_in(doc: Any, path: Sequence[Any]) -> Any:
    node = doc
    for key in path:
        node = _step(node, key)
    return node


def set_in(doc: Any, path: Sequence[Any], value: Any) -> Any:
    """Copie de `doc` où la valeur au chemin `path` est remplacée (ou la clé ajoutée)."""
    if not path:
        return copy.deepcopy(value)
    head, rest = path[0], path[1:]
    if isinstance(doc, list):
        _step(doc, head)
        out = list(doc)
        out[head] = set_in(doc[head], rest, value)
        return out
    if isinstance(doc, dict):
        if rest and head not in doc:
            raise EditError(f"Clé absente : {head!r}")
        out = dict(doc)
        out[head] = set_in(doc.get(head), rest, value) if rest else copy.deepcopy(value)
        return out
    raise EditError(f"Chemin invalide à {head!r}")


def update_in(doc: Any, path: Sequence[Any], fn) -> Any:
    return set_in(doc, path, fn(get_in(doc, path)))


# ── Champs scalaires ─────────────────────────────────────────────────────────

def parse_number(raw: Any) -> float:
    """Saisie numérique → float. Une saisie invalide est refusée (ValueError)."""
    if isinstance(raw, bool):
        raise ValueError("Booléen refusé pour un champ numérique")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        try:
            value = float(str(raw).strip())
        except ValueError:
            raise ValueError(f"Nombre invalide : {raw!r}") from None
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"Nombre invalide : {raw!r}")
    return int(value) if value.is_integer() and not isinstance(raw, float) else value


def lines_to_list(text: str) -> List[str]:
    """Tableau de primitives édité en texte : une valeur par ligne."""
    if not text:
        return []
    return text.replace("\r\n", "\n").split("\n")


def list_to_lines(values: Sequence[Any]) -> str:
    return "\n".join("" if v is None else str(v) for v in values)


# ── Tableaux d'images ────────────────────────────────────────────────────────

def image_add_slot(images: Sequence[str]) -> List[str]:
    return list(images) + [""]


def image_set(images: Sequence[str], index: int, path: str) -> List[str]:
    out = list(images)
    _step(out, index)
    out[index] = path
    return out


def image_remove(images: Sequence[str], index: int) -> List[str]:
    _step(list(images), index)
    return [p for i, p in enumerate(images) if i != index]


# ── Liste de blocs ───────────────────────────────────────────────────────────

def block_add(blocks: Sequence[Any], block_type: str) -> List[Any]:
    return list(blocks) + [new_block(block_type)]


def block_remove(blocks: Sequence[Any], index: int) -> List[Any]:
    _step(list(blocks), index)
    return [b for i, b in enumerate(blocks) if i != index]


def block_move(blocks: Sequence[Any], index: int, direction: int) -> List[Any]:
    """Échange avec le voisin (direction -1 = haut, +1 = bas). Sans effet aux bords."""
    out = list(blocks)
    _step(out, index)
    other = index + (1 if direction > 0 else -1)
    if direction == 0 or not 0 <= other < len(out):
        return out
    out[index], out[other] = out[other], out[index]
    return out


# ── Enregistrements (table) ──────────────────────────────────────────────────

def record_columns(rows: Sequence[Any], limit: int = RECORD_COLUMNS_LIMIT) -> List[str]:
    """Union ordonnée des clés des lignes, limitée aux `limit` premières."""
    seen: List[str] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        for k in row:
            if k not in seen:
                seen.append(k)
    return seen[:limit]


def record_template(rows: Sequence[Any]) -> dict:
    columns = record_columns(rows)
    if columns:
        return {c: "" for c in columns}
    return {"id": f"item-{int(time.time() * 1000)}", "title": "New Item"}


def record_add(rows: Sequence[Any], row: Any = None) -> List[Any]:
    return list(rows) + [copy.deepcopy(row) if row is not None else record_template(rows)]


def record_update(rows: Sequence[Any], index: int, row: Any) -> List[Any]:
    out = list(rows)
    _step(out, index)
    out[index] = copy.deepcopy(row)
    return out


def record_delete(rows: Sequence[Any], index: int) -> List[Any]:
    _step(list(rows), index)
    return [r for i, r in enumerate(rows) if i != index]


# ── Dispatch (API) ───────────────────────────────────────────────────────────

def _as_list(value: Any, path: Sequence[Any]) -> list:
    if not isinstance(value, list):
        raise EditError(f"Pas un tableau : {list(path)}")
    return value


def apply_change(doc: Any, change) -> Any:
    """Applique une EditorChange (op, path, value, index, direction, block_type)."""
    op, path = change.op, tuple(change.path)
    if op == "set":
        return set_in(doc, path, change.value)
    if op == "set_number":
        return set_in(doc, path, parse_number(change.value))
    if op == "set_lines":
        return set_in(doc, path, lines_to_list(change.value or ""))

    target = _as_list(get_in(doc, path), path)
    if op == "image_add":
        return set_in(doc, path, image_add_slot(target))
    if op == "image_set":
        return set_in(doc, path, image_set(target, change.index, change.value or ""))
    if op == "image_remove":
        return set_in(doc, path, image_remove(target, change.index))
    if op == "block_add":
        return set_in(doc, path, block_add(target, change.block_type))
    if op == "block_remove":
        return set_in(doc, path, block_remove(target, change.index))
    if op == "block_move":
        return set_in(doc, path, block_move(target, change.index, change.direction))
    if op == "record_add":
        return set_in(doc, path, record_add(target, change.value))
    if op == "record_update":
        return set_in(doc, path, record_update(target, change.index, change.value))
    if op == "record_delete":
        return set_in(doc, path, record_delete(target, change.index))
    raise EditError(f"Opération inconnue : {op}")
