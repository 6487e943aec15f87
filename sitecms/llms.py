"""
llms.txt — index texte du site à destination des LLM.

Sources, pour chaque langue :
  - pages statiques (home, contact, about, software)
  - entrées de products.json et solutions.json
URL du site et langue par défaut lues dans {data}/settings.json (seo.siteUrl,
defaultLanguage), surchargeables par SITE_URL.

Usage :
  python -m sitecms.llms [--data-dir public/data] [--output public/llms.txt]
"""
import argparse
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence

from . import store

log = logging.getLogger(__name__)

DEFAULT_SITE_URL = "https://example.com"

STATIC_PAGES = {
    "home.json": "",
    "contact.json": "contact",
    "about.json": "about-us",
    "software.json": "software",
}


@dataclass
class PageEntry:
    title: str
    description: str
    url: str
    lang: str


def _read_json(path: Path) -> Any:
    if not path.is_file():
        return None
    try:
        return store.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Lecture JSON impossible %s : %s", path, e)
        return None


def load_settings(data_root: Path) -> dict:
    settings = _read_json(data_root / "settings.json")
    return settings if isinstance(settings, dict) else {}


def collect_pages(data_root: Path, site_url: str) -> List[PageEntry]:
    site_url = site_url.rstrip("/")
    pages: List[PageEntry] = []
    if not data_root.is_dir():
        return pages
    for lang_dir in sorted(d for d in data_root.iterdir() if d.is_dir()):
        lang = lang_dir.name
        for filename, slug in STATIC_PAGES.items():
            data = _read_json(lang_dir / filename)
            if not isinstance(data, dict):
                continue
            pages.append(PageEntry(
                title=data.get("metaTitle") or data.get("title") or "Untitled Page",
                description=data.get("metaDesc") or data.get("subtitle") or "No description available",
                url=f"{site_url}/{lang}/{slug}" if slug else f"{site_url}/{lang}",
                lang=lang,
            ))
        for collection in ("products", "solutions"):
            index = _read_json(lang_dir / f"{collection}.json")
            items = index.get("items") if isinstance(index, dict) else None
            for item in items or []:
                if not isinstance(item, dict) or not item.get("id"):
                    continue
                pages.append(PageEntry(
                    title=item.get("metaTitle") or item.get("title") or item.get("name") or item["id"],
                    description=(item.get("metaDesc") or item.get("description")
                                 or item.get("summary") or item.get("shortDesc") or ""),
                    url=f"{site_url}/{lang}/{collection}/{item['id']}",
                    lang=lang,
                ))
    return pages


def sort_pages(pages: List[PageEntry], default_lang: str) -> List[PageEntry]:
    """Langue par défaut d'abord, puis ordre des URL."""
    return sorted(pages, key=lambda p: (p.lang != default_lang, p.url))


def build_llms_txt(pages: List[PageEntry], site_name: str = "Site", now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    header = (
        f"# {site_name} Site Index\n"
        "# Using this file, LLMs can discover the structure and content of the site.\n"
        f"# Generated at: {now.isoformat()}\n"
    )
    return header + "\n".join(f"- [{p.title}]({p.url}): {p.description}" for p in pages)


def generate(data_root: Path, output: Path) -> int:
    settings = load_settings(data_root)
    seo = settings.get("seo") if isinstance(settings.get("seo"), dict) else {}
    site_url = os.getenv("SITE_URL") or seo.get("siteUrl") or DEFAULT_SITE_URL
    default_lang = settings.get("defaultLanguage") or "en"
    site_name = settings.get("siteName") or "Site"

    log.info("Génération de llms.txt depuis %s (%s)", data_root, site_url)
    pages = sort_pages(collect_pages(data_root, site_url), default_lang)
    if not pages:
        log.warning("Aucune page trouvée dans %s", data_root)
        return 0
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(build_llms_txt(pages, site_name), encoding="utf-8")
    log.info("llms.txt généré : %d page(s) → %s", len(pages), output)
    return len(pages)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Génère public/llms.txt à partir des contenus JSON.")
    parser.add_argument("--data-dir", type=Path, default=None)
    parser.add_argument("--output", type=Path, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    data_root = args.data_dir or store.data_dir()
    output = args.output or store.public_dir() / "llms.txt"
    generate(data_root, output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
