"""
Contrôles avant sauvegarde et comparaison avec la langue maître.
"""
from typing import Any, List, Optional


def _kind(value: Any) -> str:
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "scalar"


def validate_save(original: Any, current: Any) -> Optional[str]:
    """Avertissement si la sauvegarde détruit de la structure, sinon None.

    - type racine différent (objet ↔ tableau)
    - clés de premier niveau supprimées
    """
    if original is None:
        return None
    if _kind(original) != _kind(current):
        return f"Root type mismatch: {_kind(original)} → {_kind(current)}"
    if isinstance(original, dict):
        missing = [k for k in original if k not in current]
        if missing:
            return "Missing critical keys: " + ", ".join(missing)
    return None


def missing_paths(master: Any, document: Any, prefix: str = "") -> List[str]:
    """Chemins (a.b[0].c) présents dans le maître et absents du document."""
    out: List[str] = []
    if isinstance(master, dict):
        if not isinstance(document, dict):
            return [prefix or "$"]
        for k, v in master.items():
            p = f"{prefix}.{k}" if prefix else str(k)
            if k not in document:
                out.append(p)
            else:
                out.extend(missing_paths(v, document[k], p))
    elif isinstance(master, list):
        if not isinstance(document, list):
            return [prefix or "$"]
        for i, v in enumerate(master):
            p = f"{prefix}[{i}]"
            if i >= len(document):
                out.append(p)
            else:
                out.extend(missing_paths(v, document[i], p))
    return out
