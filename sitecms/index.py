"""
Reconstruction des index — products.json / solutions.json à partir des fiches.

Pour chaque fiche {collection}/{id}.json, l'entrée d'index est recalculée avec
la chaîne de repli : fiche → ancienne entrée de même id → valeur par défaut.
La liste `items` est entièrement remplacée ; les autres clés de l'index sont
conservées.

Usage :
  python -m sitecms.index --type=products|solutions|all [--lang en zh] [--data-dir public/data]
"""
import argparse
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from . import store

log = logging.getLogger(__name__)

DESCRIPTION_MAX = 100


class CollectionType(str, Enum):
    PRODUCTS  = "products"
    SOLUTIONS = "solutions"


# ── Projection ───────────────────────────────────────────────────────────────

def _first(*values, default=""):
    for v in values:
        if v:
            return v
    return default


def _hero_image(detail: Mapping[str, Any]) -> str:
    blocks = detail.get("blocks")
    if not isinstance(blocks, list):
        return ""
    for b in blocks:
        if isinstance(b, dict) and b.get("type") == "hero":
            return b.get("backgroundImage") or ""
    return ""


def product_entry(item_id: str, detail: Mapping[str, Any], prior: Mapping[str, Any]) -> dict:
    full = detail.get("fullDescription")
    images = detail.get("images")
    return {
        "id": item_id,
        "categoryId": _first(detail.get("categoryId"), prior.get("categoryId"), default="uncategorized"),
        "title": _first(detail.get("title"), prior.get("title"), default=item_id),
        "description": _first(
            detail.get("metaDesc"),
            full[:DESCRIPTION_MAX] if isinstance(full, str) else None,
            prior.get("description"),
        ),
        "image": images[0] if isinstance(images, list) and images else (prior.get("image") or ""),
        "icon": _first(detail.get("icon"), prior.get("icon"), default="Box"),
    }


def solution_entry(item_id: str, detail: Mapping[str, Any], prior: Mapping[str, Any]) -> dict:
    return {
        "id": item_id,
        "categoryId": _first(detail.get("categoryId"), prior.get("categoryId"), default="uncategorized"),
        "title": _first(detail.get("title"), prior.get("title"), default=item_id),
        "summary": _first(detail.get("metaDesc"), prior.get("summary")),
        "image": _first(_hero_image(detail), prior.get("image")),
        "icon": _first(detail.get("icon"), prior.get("icon"), default="Layers"),
        "color": _first(detail.get("color"), prior.get("color"), default="blue"),
    }


_PROJECTIONS = {
    CollectionType.PRODUCTS: product_entry,
    CollectionType.SOLUTIONS: solution_entry,
}


def rebuild_items(kind: CollectionType, details: Mapping[str, Any], existing_index: Any) -> List[dict]:
    """Entrées recalculées, dans l'ordre des noms de fichier. Un id en double garde la première fiche."""
    kind = CollectionType(kind)
    prior_items = existing_index.get("items") if isinstance(existing_index, dict) else None
    prior_by_id = {
        it["id"]: it for it in (prior_items or [])
        if isinstance(it, dict) and it.get("id")
    }
    project = _PROJECTIONS[kind]
    items: List[dict] = []
    seen = set()
    for filename in sorted(details):
        detail = details[filename]
        if not isinstance(detail, dict):
            log.warning("Fiche ignorée (pas un objet) : %s", filename)
            continue
        item_id = detail.get("id") or Path(filename).stem
        if item_id in seen:
            log.warning("Id en double ignoré : %s (%s)", item_id, filename)
            continue
        seen.add(item_id)
        items.append(project(item_id, detail, prior_by_id.get(item_id, {})))
    return items


def rebuild(kind: CollectionType, details: Mapping[str, Any], existing_index: Any) -> dict:
    out = dict(existing_index) if isinstance(existing_index, dict) else {}
    out["items"] = rebuild_items(kind, details, existing_index)
    return out


# ── Fichiers ─────────────────────────────────────────────────────────────────

def load_details(details_dir: Path) -> Dict[str, Any]:
    """Fiches JSON du répertoire ; une fiche illisible est journalisée et ignorée."""
    details: Dict[str, Any] = {}
    for path in sorted(details_dir.glob("*.json")):
        try:
            details[path.name] = store.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.error("Erreur de lecture %s : %s", path, e)
    return details


def rebuild_collection(lang_dir: Path, kind: CollectionType) -> Optional[int]:
    """Réécrit {lang_dir}/{kind}.json. Retourne le nombre d'entrées, None si rien n'a été écrit."""
    kind = CollectionType(kind)
    index_path = lang_dir / f"{kind.value}.json"
    details_dir = lang_dir / kind.value
    if not index_path.is_file():
        log.error("Fichier index introuvable : %s", index_path)
        return None
    try:
        existing = store.loads(index_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.error("Erreur de lecture %s : %s", index_path, e)
        return None
    if not details_dir.is_dir():
        log.error("Répertoire des fiches introuvable : %s", details_dir)
        return None

    details = load_details(details_dir)
    log.info("%s : %d fiche(s) trouvée(s)", kind.value, len(details))
    new_index = rebuild(kind, details, existing)
    index_path.write_text(store.dumps(new_index), encoding="utf-8")
    log.info("%s mis à jour avec %d entrée(s)", index_path, len(new_index["items"]))
    return len(new_index["items"])


def parse_types(value: str) -> List[CollectionType]:
    if value == "all":
        return list(CollectionType)
    try:
        return [CollectionType(value)]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Type invalide '{value}'. Types supportés : products, solutions, all"
        ) from None


# ── CLI ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Reconstruit products.json / solutions.json depuis les fiches.")
    parser.add_argument("--type", dest="types", type=parse_types, required=True,
                        help="products, solutions ou all")
    parser.add_argument("--lang", nargs="*", default=None,
                        help="Langues à traiter (défaut : toutes)")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Racine des contenus (défaut : CMS_DATA_DIR ou public/data)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    data_root = args.data_dir or store.data_dir()
    langs = args.lang
    if langs is None:
        langs = sorted(d.name for d in data_root.iterdir() if d.is_dir()) if data_root.is_dir() else []

    failures = 0
    for lang in langs:
        for kind in args.types:
            if rebuild_collection(data_root / lang, kind) is None:
                failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
