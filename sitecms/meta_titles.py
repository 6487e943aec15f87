"""
Nettoyage des metaTitle — retire un suffixe de marque des titres SEO.

Champs traités : `metaTitle` à la racine (fiches produit) et `page.metaTitle`
(pages statiques). settings.json n'est jamais modifié.

Usage :
  python -m sitecms.meta_titles --suffix " | ACME" [--data-dir public/data] [--dry-run]
"""
import argparse
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from . import store

log = logging.getLogger(__name__)

SKIPPED_FILES = ("settings.json",)


def default_suffix() -> str:
    return os.getenv("META_TITLE_SUFFIX", "")


@dataclass
class CleanReport:
    files_scanned: int = 0
    cleaned: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def strip_suffix(title: Any, suffix: str) -> Any:
    if isinstance(title, str) and suffix and title.endswith(suffix):
        return title[: -len(suffix)].strip()
    return title


def clean_document(doc: Any, suffix: str) -> bool:
    """Retire le suffixe en place. Retourne True si le document a changé."""
    if not isinstance(doc, dict):
        return False
    modified = False
    targets = [doc]
    if isinstance(doc.get("page"), dict):
        targets.append(doc["page"])
    for node in targets:
        title = node.get("metaTitle")
        cleaned = strip_suffix(title, suffix)
        if cleaned != title:
            node["metaTitle"] = cleaned
            modified = True
    return modified


def clean_tree(data_root: Path, suffix: str, dry_run: bool = False) -> CleanReport:
    """Parcourt tous les .json ; une erreur de lecture est journalisée et le parcours continue."""
    report = CleanReport()
    for path in sorted(data_root.rglob("*.json")):
        if path.name in SKIPPED_FILES or not path.is_file():
            continue
        report.files_scanned += 1
        rel = path.relative_to(data_root).as_posix()
        try:
            doc = store.loads(path.read_text(encoding="utf-8"))
            if not clean_document(doc, suffix):
                continue
            if not dry_run:
                path.write_text(store.dumps(doc), encoding="utf-8")
        except (OSError, ValueError) as e:
            log.error("Erreur sur %s : %s", rel, e)
            report.errors.append(f"{rel}: {e}")
            continue
        report.cleaned.append(rel)
        log.info("Nettoyé : %s", rel)
    return report


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Retire un suffixe de marque des metaTitle.")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Racine des contenus (défaut : CMS_DATA_DIR ou public/data)")
    parser.add_argument("--suffix", default=None, help="Suffixe à retirer (défaut : META_TITLE_SUFFIX)")
    parser.add_argument("--dry-run", action="store_true", help="Liste les fichiers sans écrire")
    args = parser.parse_args(argv)

    suffix = args.suffix if args.suffix is not None else default_suffix()
    if not suffix.strip():
        parser.error("suffixe requis (--suffix ou META_TITLE_SUFFIX)")

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    data_root = args.data_dir or store.data_dir()
    if not data_root.is_dir():
        log.error("Répertoire introuvable : %s", data_root)
        return 1
    report = clean_tree(data_root, suffix, dry_run=args.dry_run)
    log.info("%d fichier(s), %d nettoyé(s), %d erreur(s)",
             report.files_scanned, len(report.cleaned), len(report.errors))
    return 1 if report.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
