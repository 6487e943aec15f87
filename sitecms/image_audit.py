"""
Contrôle du poids des images publiques (échec de build si une image dépasse la limite).

Usage :
  python -m sitecms.image_audit [--images-dir public/images] [--max-bytes 1048576]
"""
import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from . import store

log = logging.getLogger(__name__)

AUDIT_EXTENSIONS = store.IMAGE_EXTENSIONS + (".bmp", ".ico")
DEFAULT_MAX_BYTES = 1024 * 1024


@dataclass
class ImageFile:
    path: Path
    size: int


def max_bytes() -> int:
    return int(os.getenv("IMAGE_MAX_BYTES", str(DEFAULT_MAX_BYTES)))


def format_bytes(n: float) -> str:
    if n <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while n >= 1024 and i < len(units) - 1:
        n /= 1024
        i += 1
    return f"{round(n, 2):g} {units[i]}"


def scan_images(root: Path) -> List[ImageFile]:
    if not root.is_dir():
        log.warning("Répertoire introuvable : %s", root)
        return []
    return [
        ImageFile(p, p.stat().st_size)
        for p in sorted(root.rglob("*"))
        if p.is_file() and p.suffix.lower() in AUDIT_EXTENSIONS
    ]


def oversized(images: List[ImageFile], limit: int) -> List[ImageFile]:
    """Images au-delà de la limite, de la plus lourde à la plus légère."""
    return sorted((i for i in images if i.size > limit), key=lambda i: i.size, reverse=True)


def audit(root: Path, limit: int) -> List[ImageFile]:
    images = scan_images(root)
    if not images:
        log.info("Aucune image dans %s", root)
        return []
    total = sum(i.size for i in images)
    too_big = oversized(images, limit)
    log.info("%d image(s), total %s, moyenne %s, limite %s",
             len(images), format_bytes(total), format_bytes(total / len(images)), format_bytes(limit))
    for img in too_big:
        log.error("%s — %s (%.2fx la limite)", img.path, format_bytes(img.size), img.size / limit)
    if not too_big:
        for img in sorted(images, key=lambda i: i.size, reverse=True)[:5]:
            if img.size > limit * 0.7:
                log.warning("Proche de la limite : %s — %s", img.path, format_bytes(img.size))
    return too_big


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Signale les images publiques trop lourdes.")
    parser.add_argument("--images-dir", type=Path, default=None)
    parser.add_argument("--max-bytes", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    root = args.images_dir or store.images_dir()
    limit = args.max_bytes if args.max_bytes is not None else max_bytes()
    if limit <= 0:
        parser.error(f"la limite doit être positive : {limit}")
    return 1 if audit(root, limit) else 0


if __name__ == "__main__":
    raise SystemExit(main())
