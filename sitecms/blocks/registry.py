"""
Registre des blocs — catalogue fermé et ordonné des types de bloc de page.

Chaque type porte un libellé, un squelette par défaut (inséré en copie
profonde) et des indications de champ qui priment sur l'inférence.
"""
import copy
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..editor.schema import EditType


class BlockType(str, Enum):
    HERO         = "hero"
    PAIN_POINTS  = "pain_points"
    FEATURES     = "features"
    MEDIA        = "media"
    STATS        = "stats"
    PRODUCT_LIST = "product_list"
    LOGO_WALL    = "logo_wall"
    CTA          = "cta"
    RICH_TEXT    = "rich_text"


class FieldHint(BaseModel):
    type: EditType
    options: List[str] = Field(default_factory=list)
    help: Optional[str] = None


class BlockSpec(BaseModel):
    type: BlockType
    label: str
    skeleton: Dict[str, Any]
    hints: Dict[str, FieldHint] = Field(default_factory=dict)

    def new(self) -> Dict[str, Any]:
        return copy.deepcopy(self.skeleton)


def _select(*options: str, help: Optional[str] = None) -> FieldHint:
    return FieldHint(type=EditType.SELECT, options=list(options), help=help)


# Ordre = ordre d'affichage dans le menu "ajouter un bloc"
_SPECS: List[BlockSpec] = [
    BlockSpec(
        type=BlockType.HERO, label="Hero Banner",
        skeleton={"type": "hero", "title": "New Hero Title", "subtitle": "Subtitle goes here",
                  "backgroundImage": "", "ctaText": "Get Started", "ctaLink": "/contact"},
        hints={"ctaLink": FieldHint(type=EditType.TEXT, help="Lien interne (/contact) ou URL complète")},
    ),
    BlockSpec(
        type=BlockType.PAIN_POINTS, label="Pain Points",
        skeleton={"type": "pain_points", "title": "Challenges",
                  "items": [{"title": "Problem 1", "desc": "Description"}]},
    ),
    BlockSpec(
        type=BlockType.FEATURES, label="Features",
        skeleton={"type": "features", "title": "Key Features", "layout": "grid",
                  "items": [{"title": "Feature 1", "desc": "Description", "image": ""}]},
        hints={"layout": _select("grid", "alternating")},
    ),
    BlockSpec(
        type=BlockType.MEDIA, label="Media (Image/Video)",
        skeleton={"type": "media", "mediaType": "image", "url": "", "caption": "", "width": "container"},
        hints={
            "mediaType": _select("image", "video"),
            "url": FieldHint(type=EditType.IMAGE, help="Image, fichier vidéo ou lien YouTube"),
            "width": _select("full", "container"),
        },
    ),
    BlockSpec(
        type=BlockType.STATS, label="Statistics",
        skeleton={"type": "stats", "background": "default",
                  "items": [{"value": "100+", "label": "Clients"}]},
        hints={"background": _select("default", "blue")},
    ),
    BlockSpec(
        type=BlockType.PRODUCT_LIST, label="Product List",
        skeleton={"type": "product_list", "title": "Recommended Products", "productIds": []},
        hints={"productIds": FieldHint(type=EditType.ARRAY, help="Un identifiant produit par ligne")},
    ),
    BlockSpec(
        type=BlockType.LOGO_WALL, label="Logo Wall",
        skeleton={"type": "logo_wall", "title": "Trusted By", "logos": []},
        hints={"logos": FieldHint(type=EditType.ARRAY, help="Logos clients (images)")},
    ),
    BlockSpec(
        type=BlockType.CTA, label="Call to Action",
        skeleton={"type": "cta", "title": "Ready to start?", "buttonText": "Contact Us", "link": "/contact"},
    ),
    BlockSpec(
        type=BlockType.RICH_TEXT, label="Rich Text",
        skeleton={"type": "rich_text", "content": "", "align": "left"},
        hints={"content": FieldHint(type=EditType.TEXTAREA), "align": _select("left", "center")},
    ),
]

_REGISTRY: Dict[str, BlockSpec] = {s.type.value: s for s in _SPECS}


def list_specs() -> List[BlockSpec]:
    return list(_SPECS)


def get_spec(block_type: Any) -> Optional[BlockSpec]:
    """Spec du type, ou None pour un type inconnu (formulaire générique)."""
    key = block_type.value if isinstance(block_type, BlockType) else block_type
    return _REGISTRY.get(key) if isinstance(key, str) else None


def new_block(block_type: Any) -> Dict[str, Any]:
    spec = get_spec(block_type)
    if spec is None:
        raise ValueError(f"Type de bloc inconnu : {block_type}")
    return spec.new()


def hints_for(block: Any) -> Dict[str, FieldHint]:
    if not isinstance(block, dict):
        return {}
    spec = get_spec(block.get("type"))
    return dict(spec.hints) if spec else {}


def label_for(block: Any) -> str:
    t = block.get("type") if isinstance(block, dict) else None
    spec = get_spec(t)
    return spec.label if spec else f"Unknown Block ({t})"
