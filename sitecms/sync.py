"""
Synchronisation structurelle — complète chaque langue cible avec la structure
de la langue maître.

Règles (dans cet ordre) :
  1. cible absente            → copie marquée du maître (1 changement)
  2. types différents         → copie marquée du maître (1 changement)
  3. deux tableaux            → ajout des indices manquants, récursion sur les communs
  4. deux objets              → ajout des clés manquantes, récursion sur les communes
  5. deux primitives          → la cible est conservée (0 changement)

Les valeurs existantes de la cible ne sont jamais écrasées : une valeur
maître modifiée n'est donc pas remontée aux traducteurs.

Usage :
  python -m sitecms.sync [--data-dir public/data] [--master zh] [--lang en es] [--dry-run]
"""
import argparse
import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from . import store

log = logging.getLogger(__name__)

TRANSLATION_MARKER = "[TODO] "


# ── Marqueur de traduction ───────────────────────────────────────────────────

def needs_translation(s: str) -> bool:
    """URL, chemin absolu ou chaîne de moins de 2 caractères : copiés tels quels."""
    return not (s.startswith("http") or s.startswith("/") or len(s) < 2)


def mark_for_translation(value: Any) -> Any:
    if isinstance(value, str):
        return TRANSLATION_MARKER + value if needs_translation(value) else value
    if isinstance(value, list):
        return [mark_for_translation(v) for v in value]
    if isinstance(value, dict):
        return {k: mark_for_translation(v) for k, v in value.items()}
    return copy.deepcopy(value)


# ── Algorithme ───────────────────────────────────────────────────────────────

@dataclass
class SyncResult:
    merged: Any
    changes: int


def _type_tag(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "null" if value is None else type(value).__name__


def sync_value(master: Any, target: Any) -> SyncResult:
    """Fusion additive de `master` dans `target`. Les entrées ne sont pas modifiées."""
    if target is None:
        if master is None:
            return SyncResult(None, 0)
        return SyncResult(mark_for_translation(master), 1)

    if _type_tag(master) != _type_tag(target):
        return SyncResult(mark_for_translation(master), 1)

    if isinstance(master, list):
        merged = list(target)
        changes = 0
        for i, item in enumerate(master):
            if i >= len(target):
                merged.append(mark_for_translation(item))
                changes += 1
                continue
            sub = sync_value(item, target[i])
            if sub.changes:
                merged[i] = sub.merged
                changes += sub.changes
        return SyncResult(merged, changes)

    if isinstance(master, dict):
        merged = dict(target)
        changes = 0
        for key, item in master.items():
            if key not in target:
                merged[key] = mark_for_translation(item)
                changes += 1
                continue
            sub = sync_value(item, target[key])
            if sub.changes:
                merged[key] = sub.merged
                changes += sub.changes
        return SyncResult(merged, changes)

    return SyncResult(target, 0)


# ── Fichiers ─────────────────────────────────────────────────────────────────

@dataclass
class SyncReport:
    language: str
    files_scanned: int = 0
    files_updated: int = 0
    changes: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "language": self.language, "files_scanned": self.files_scanned,
            "files_updated": self.files_updated, "changes": self.changes,
            "errors": list(self.errors),
        }


def sync_file(master_path: Path, target_path: Path, dry_run: bool = False) -> int:
    """Synchronise un fichier cible. Retourne le nombre de changements.

    Un maître illisible lève l'erreur ; une cible corrompue est traitée comme vide.
    """
    master = store.loads(master_path.read_text(encoding="utf-8"))
    target: Any = {}
    if target_path.exists():
        try:
            target = store.loads(target_path.read_text(encoding="utf-8"))
        except ValueError as e:
            log.warning("Fichier cible corrompu, réécrit depuis le maître : %s (%s)", target_path, e)
    else:
        log.info("Nouveau fichier : %s", target_path)

    result = sync_value(master, target)
    if result.changes and not dry_run:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(store.dumps(result.merged), encoding="utf-8")
    return result.changes


def sync_language(data_root: Path, master: str, target: str, dry_run: bool = False) -> SyncReport:
    """Parcourt l'arborescence maître et synchronise chaque .json vers `target`."""
    report = SyncReport(language=target)
    source_dir = data_root / master
    target_dir = data_root / target
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Langue maître introuvable : {source_dir}")
    if not target_dir.exists() and not dry_run:
        log.info("Création du répertoire %s", target_dir)
        target_dir.mkdir(parents=True)

    for src in sorted(source_dir.rglob("*")):
        rel = src.relative_to(source_dir)
        if src.is_dir():
            if not dry_run:
                (target_dir / rel).mkdir(parents=True, exist_ok=True)
            continue
        if src.suffix != ".json":
            continue
        report.files_scanned += 1
        try:
            n = sync_file(src, target_dir / rel, dry_run=dry_run)
        except (OSError, ValueError) as e:
            log.error("Erreur sur %s : %s", src, e)
            report.errors.append(f"{rel.as_posix()}: {e}")
            continue
        if n:
            report.files_updated += 1
            report.changes += n
            log.info("%d champ(s) synchronisé(s) → %s/%s", n, target, rel.as_posix())
    return report


def sync_all(data_root: Path, master: str, targets: Optional[Sequence[str]] = None,
             dry_run: bool = False) -> List[SyncReport]:
    if targets is None:
        targets = sorted(
            d.name for d in data_root.iterdir()
            if d.is_dir() and d.name != master and not d.name.startswith(".")
        )
    log.info("Synchronisation depuis [%s] vers [%s]", master, ", ".join(targets))
    reports = []
    for lang in targets:
        if lang == master:
            continue
        reports.append(sync_language(data_root, master, lang, dry_run=dry_run))
    return reports


# ── CLI ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Complète la structure des langues cibles à partir de la langue maître.",
    )
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Racine des contenus (défaut : CMS_DATA_DIR ou public/data)")
    parser.add_argument("--master", default=None, help="Langue maître (défaut : CMS_MASTER_LANG ou zh)")
    parser.add_argument("--lang", nargs="*", default=None, help="Langues cibles (défaut : toutes)")
    parser.add_argument("--dry-run", action="store_true", help="Compte les changements sans écrire")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    data_root = args.data_dir or store.data_dir()
    master = args.master or store.master_lang()

    try:
        reports = sync_all(data_root, master, args.lang, dry_run=args.dry_run)
    except FileNotFoundError as e:
        log.error("%s", e)
        return 1

    for r in reports:
        log.info("[%s] %d fichier(s), %d mis à jour, %d changement(s), %d erreur(s)",
                 r.language, r.files_scanned, r.files_updated, r.changes, len(r.errors))
    return 1 if any(r.errors for r in reports) else 0


if __name__ == "__main__":
    raise SystemExit(main())
