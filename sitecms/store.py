"""
Content Store — fichiers JSON/Markdown par langue, langues, images.

Arborescence :
  {CMS_DATA_DIR}/{lang}/...        contenus (une racine par code langue)
  {CMS_IMAGES_DIR}/...             images publiques servies sous /images/

Toutes les opérations prennent des chemins relatifs à la racine des données ;
un chemin qui en sort lève PermissionError (→ 403 côté API).
"""
import base64
import binascii
import json
import logging
import os
import re
import shutil
from pathlib import Path
from typing import Any, List, Optional

log = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".svg", ".gif")
CONTENT_EXTENSIONS = (".json", ".md")

_LANG_RE = re.compile(r"^[a-z]{2,3}(-[A-Za-z0-9]{2,8})?$")
_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,")

PAGE_FOLDERS = {"product": "products", "solution": "solutions", "blank": ""}


# ── Configuration ────────────────────────────────────────────────────────────

def data_dir() -> Path:
    return Path(os.getenv("CMS_DATA_DIR", "public/data"))


def public_dir() -> Path:
    return Path(os.getenv("CMS_PUBLIC_DIR", "public"))


def images_dir() -> Path:
    return Path(os.getenv("CMS_IMAGES_DIR", str(public_dir() / "images")))


def master_lang() -> str:
    return os.getenv("CMS_MASTER_LANG", "zh")


# ── Chemins ──────────────────────────────────────────────────────────────────

def resolve(rel: str, root: Optional[Path] = None) -> Path:
    """Chemin absolu de `rel` sous la racine ; PermissionError si on en sort."""
    base = (root or data_dir()).resolve()
    target = (base / rel.lstrip("/")).resolve()
    if target != base and base not in target.parents:
        raise PermissionError(f"Accès refusé : {rel}")
    return target


def dumps(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)


def _reject_constant(name: str):
    raise ValueError(f"Constante JSON non standard : {name}")


def loads(text: str) -> Any:
    """json.loads strict : NaN, Infinity et -Infinity sont refusés."""
    return json.loads(text, parse_constant=_reject_constant)


# ── Fichiers ─────────────────────────────────────────────────────────────────

def read_text(rel: str) -> str:
    path = resolve(rel)
    if not path.is_file():
        raise FileNotFoundError(rel)
    return path.read_text(encoding="utf-8")


def read_json(rel: str) -> Any:
    return loads(read_text(rel))


def write(rel: str, content: Any) -> Path:
    """Écrit le fichier. Une chaîne est écrite telle quelle, le reste en JSON indenté."""
    path = resolve(rel)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = content if isinstance(content, str) else dumps(content)
    path.write_text(text, encoding="utf-8")
    log.info("Fichier écrit : %s", rel)
    return path


def delete(rel: str):
    path = resolve(rel)
    if not path.is_file():
        raise FileNotFoundError(rel)
    path.unlink()
    log.info("Fichier supprimé : %s", rel)


def exists(rel: str) -> bool:
    return resolve(rel).is_file()


def list_files(lang: Optional[str] = None, extensions=CONTENT_EXTENSIONS) -> List[str]:
    """Chemins relatifs (séparateur /) des fichiers de contenu, triés."""
    root = data_dir()
    base = resolve(lang) if lang else root.resolve()
    if not base.is_dir():
        return []
    root_abs = root.resolve()
    return sorted(
        p.relative_to(root_abs).as_posix()
        for p in base.rglob("*")
        if p.is_file() and p.suffix.lower() in extensions
    )


# ── Langues ──────────────────────────────────────────────────────────────────

def list_languages() -> List[dict]:
    root = data_dir()
    if not root.is_dir():
        return []
    master = master_lang()
    return [
        {"code": d.name, "isMaster": d.name == master}
        for d in sorted(root.iterdir())
        if d.is_dir() and not d.name.startswith(".")
    ]


def language_codes() -> List[str]:
    return [lang["code"] for lang in list_languages()]


def create_language(code: str) -> Path:
    """Clone l'arborescence maître vers une nouvelle langue (contenu non traduit)."""
    if not code or not _LANG_RE.match(code):
        raise ValueError(f"Code langue invalide : {code!r}")
    target = resolve(code)
    if target.exists():
        raise FileExistsError(f"La langue {code} existe déjà")
    source = resolve(master_lang())
    if not source.is_dir():
        raise FileNotFoundError(f"Langue maître {master_lang()} introuvable")
    shutil.copytree(source, target)
    log.info("Langue %s créée depuis %s", code, master_lang())
    return target


def delete_language(code: str):
    if not code:
        raise ValueError("Code langue requis")
    if code == master_lang():
        raise PermissionError("Impossible de supprimer la langue maître")
    target = resolve(code)
    if target == data_dir().resolve() or not target.is_dir():
        raise FileNotFoundError(f"Langue {code} introuvable")
    shutil.rmtree(target)
    log.info("Langue %s supprimée", code)


def master_path(rel: str) -> str:
    """Chemin équivalent dans la langue maître : en/products/a.json → zh/products/a.json."""
    parts = rel.lstrip("/").split("/", 1)
    if len(parts) < 2:
        raise ValueError(f"Chemin sans préfixe de langue : {rel}")
    return f"{master_lang()}/{parts[1]}"


def read_master(rel: str) -> str:
    return read_text(master_path(rel))


# ── Images ───────────────────────────────────────────────────────────────────

def list_images(query: Optional[str] = None) -> List[str]:
    """Chemins publics (/images/...) des images, filtrés par sous-chaîne si `query`."""
    root = images_dir()
    if not root.is_dir():
        return []
    root_abs = root.resolve()
    images = sorted(
        "/images/" + p.relative_to(root_abs).as_posix()
        for p in root_abs.rglob("*")
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )
    if query:
        q = query.lower()
        images = [i for i in images if q in i.lower()]
    return images


def save_image(filename: str, content: str) -> str:
    """Décode un contenu base64 (avec ou sans en-tête data:) et l'enregistre."""
    name = (filename or "").strip()
    if not name or "/" in name or "\\" in name or name.startswith("."):
        raise ValueError(f"Nom de fichier invalide : {filename!r}")
    if Path(name).suffix.lower() not in IMAGE_EXTENSIONS:
        raise ValueError(f"Extension non supportée : {name}")
    payload = _DATA_URL_RE.sub("", content or "")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Contenu base64 invalide : {e}") from e
    dest = resolve(name, root=images_dir())
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(raw)
    log.info("Image enregistrée : %s (%d octets)", name, len(raw))
    return f"/images/{name}"


# ── Création de pages ────────────────────────────────────────────────────────

def safe_name(name: str) -> str:
    return re.sub(r"[^a-z0-9-]", "-", (name or "").lower())


def page_template(kind: str, slug: str) -> dict:
    if kind == "product":
        return {
            "id": slug,
            "categoryId": "generic",
            "title": "New Product Title",
            "metaTitle": "New Product",
            "metaDesc": "Product description...",
            "fullDescription": "Detailed product description goes here...",
            "images": ["/images/placeholder.png"],
            "features": ["Feature 1", "Feature 2"],
            "parameters": [{"label": "Spec 1", "value": "Value 1"}],
            "downloads": [],
            "packaging": "Standard box",
            "gradient": "from-blue-600 to-cyan-500",
            "icon": "Box",
        }
    if kind == "solution":
        return {
            "id": slug,
            "categoryId": "solution",
            "title": "New Solution Title",
            "metaTitle": "New Solution",
            "metaDesc": "Solution description...",
            "image": "",
            "color": "blue",
            "blocks": [
                {
                    "type": "hero",
                    "title": "Solution Headline",
                    "subtitle": "Compelling subtitle goes here.",
                    "backgroundImage": "",
                    "ctaText": "Learn More",
                    "ctaLink": "/contact",
                },
                {
                    "type": "features",
                    "title": "Key Features",
                    "layout": "grid",
                    "items": [{"title": "Feature 1", "desc": "Description..."}],
                },
            ],
        }
    if kind == "blank":
        return {}
    raise ValueError(f"Type de page inconnu : {kind}")


def page_path(lang: str, kind: str, name: str, folder: Optional[str] = None) -> str:
    """Chemin relatif de la nouvelle page.

    product/solution : {lang}/{dossier}/{nom-normalisé}.json
    blank : `name` est un chemin libre, suffixé .json et préfixé par la langue si besoin.
    """
    if kind == "blank":
        rel = name if name.endswith(".json") else f"{name}.json"
        if folder:
            rel = f"{folder.strip('/')}/{rel}"
        return rel if rel.startswith(lang + "/") else f"{lang}/{rel}"
    sub = folder or PAGE_FOLDERS[kind]
    return f"{lang}/{sub}/{safe_name(name)}.json"


def create_page(lang: str, kind: str, name: str, folder: Optional[str] = None) -> str:
    if not name:
        raise ValueError("Nom de page requis")
    if kind not in PAGE_FOLDERS:
        raise ValueError(f"Type de page inconnu : {kind}")
    rel = page_path(lang, kind, name, folder)
    if exists(rel):
        raise FileExistsError(f"{rel} existe déjà")
    slug = Path(rel).stem
    write(rel, page_template(kind, slug))
    return rel
