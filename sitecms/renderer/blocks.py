"""
Aperçu des blocs — HTML d'une liste `blocks` pour le mode prévisualisation.

Dispatch explicite BlockType → renderer ; un type inconnu produit un encart
"Unknown Block Type" au lieu d'une erreur.
"""
import re
from html import escape
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..blocks import BlockType

_YOUTUBE_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def youtube_id(url: Optional[str]) -> Optional[str]:
    """Identifiant YouTube (11 caractères) ou None → fichier vidéo direct."""
    if not url:
        return None
    m = _YOUTUBE_RE.match(url)
    if m and len(m.group(2)) == 11:
        return m.group(2)
    return None


def _e(value: Any) -> str:
    return escape("" if value is None else str(value))


def _items(b: Mapping[str, Any], key: str = "items") -> List[Any]:
    v = b.get(key)
    return v if isinstance(v, list) else []


# ── Renderers ───────────────────────────────────────────────────────────────

def render_hero(b: Mapping[str, Any]) -> str:
    bg = b.get("backgroundImage")
    bg_html = f'<img class="hero__bg" src="{_e(bg)}" alt="">' if bg else ""
    return f"""<div class="block hero">
  {bg_html}
  <div class="hero__content">
    <h1 class="hero__title">{_e(b.get("title"))}</h1>
    <p class="hero__subtitle">{_e(b.get("subtitle"))}</p>
    <a class="btn btn-primary" href="{_e(b.get("ctaLink") or "/contact")}">{_e(b.get("ctaText") or "Get Started")}</a>
  </div>
</div>"""


def render_pain_points(b: Mapping[str, Any]) -> str:
    items = "".join(
        f'<div class="pain__item"><dt>{_e(it.get("title"))}</dt><dd>{_e(it.get("desc"))}</dd></div>'
        for it in _items(b) if isinstance(it, dict)
    )
    return f"""<div class="block pain-points">
  <h2>{_e(b.get("title"))}</h2>
  <dl class="pain__grid">{items}</dl>
</div>"""


def render_media(b: Mapping[str, Any]) -> str:
    url = b.get("url")
    width = "container" if b.get("width") == "container" else "full"
    caption = b.get("caption")
    inner = ""
    if url:
        if b.get("mediaType") == "video":
            yt = youtube_id(url)
            if yt:
                inner = (f'<iframe class="media__video" src="https://www.youtube.com/embed/{yt}" '
                         f'title="{_e(caption or "Video Content")}" allowfullscreen></iframe>')
            else:
                inner = f'<video class="media__video" controls src="{_e(url)}"></video>'
        else:
            inner = f'<img class="media__image" src="{_e(url)}" alt="{_e(caption)}">'
    caption_html = f'<p class="media__caption">{_e(caption)}</p>' if caption else ""
    return f"""<div class="block media media--{width}">
  {inner}
  {caption_html}
</div>"""


def render_features(b: Mapping[str, Any]) -> str:
    layout = "alternating" if b.get("layout") == "alternating" else "grid"
    parts = []
    for i, it in enumerate(_items(b)):
        if not isinstance(it, dict):
            continue
        if layout == "alternating":
            img = (f'<img src="{_e(it.get("image"))}" alt="{_e(it.get("title"))}">'
                   if it.get("image") else '<div class="features__placeholder">No Image</div>')
            side = " features__row--reverse" if i % 2 == 1 else ""
            parts.append(f'<div class="features__row{side}">{img}'
                         f'<div><h3>{_e(it.get("title"))}</h3><p>{_e(it.get("desc"))}</p></div></div>')
        else:
            parts.append(f'<div class="features__card"><h3>{_e(it.get("title"))}</h3><p>{_e(it.get("desc"))}</p></div>')
    return f"""<div class="block features features--{layout}">
  <h2>{_e(b.get("title"))}</h2>
  {"".join(parts)}
</div>"""


def render_stats(b: Mapping[str, Any]) -> str:
    bg = "blue" if b.get("background") == "blue" else "default"
    items = "".join(
        f'<div class="stats__item"><div class="stats__value">{_e(it.get("value"))}</div>'
        f'<div class="stats__label">{_e(it.get("label"))}</div></div>'
        for it in _items(b) if isinstance(it, dict)
    )
    return f'<div class="block stats stats--{bg}">{items}</div>'


def render_product_list(b: Mapping[str, Any]) -> str:
    cards = "".join(
        f'<div class="product-card"><h4>{_e(pid)}</h4><a href="products/{_e(pid)}">View Specs →</a></div>'
        for pid in _items(b, "productIds")
    )
    return f"""<div class="block product-list">
  <h3>{_e(b.get("title"))}</h3>
  <div class="product-list__grid">{cards}</div>
</div>"""


def render_logo_wall(b: Mapping[str, Any]) -> str:
    logos = "".join(f'<img src="{_e(src)}" alt="Client Logo">' for src in _items(b, "logos") if src)
    return f"""<div class="block logo-wall">
  <p>{_e(b.get("title"))}</p>
  <div class="logo-wall__logos">{logos}</div>
</div>"""


def render_cta(b: Mapping[str, Any]) -> str:
    return f"""<div class="block cta">
  <h2>{_e(b.get("title"))}</h2>
  <a class="btn" href="{_e(b.get("link") or "/contact")}">{_e(b.get("buttonText"))}</a>
</div>"""


def render_rich_text(b: Mapping[str, Any]) -> str:
    align = "center" if b.get("align") == "center" else "left"
    return f'<div class="block rich-text rich-text--{align}"><p style="white-space:pre-line">{_e(b.get("content"))}</p></div>'


def render_unknown(b: Any) -> str:
    t = b.get("type") if isinstance(b, dict) else None
    return f'<div class="block block--unknown">Unknown Block Type: {_e(t)}</div>'


RENDERERS: Dict[BlockType, Callable[[Mapping[str, Any]], str]] = {
    BlockType.HERO:         render_hero,
    BlockType.PAIN_POINTS:  render_pain_points,
    BlockType.MEDIA:        render_media,
    BlockType.FEATURES:     render_features,
    BlockType.STATS:        render_stats,
    BlockType.PRODUCT_LIST: render_product_list,
    BlockType.LOGO_WALL:    render_logo_wall,
    BlockType.CTA:          render_cta,
    BlockType.RICH_TEXT:    render_rich_text,
}


# ── Point d'entrée ──────────────────────────────────────────────────────────

def render_block(block: Any) -> str:
    if not isinstance(block, dict):
        return render_unknown(block)
    try:
        kind = BlockType(block.get("type"))
    except ValueError:
        return render_unknown(block)
    return RENDERERS[kind](block)


def render_blocks(blocks: List[Any]) -> str:
    return "\n".join(render_block(b) for b in blocks)


_PREVIEW_CSS = """
body{font-family:'Segoe UI',sans-serif;margin:0;color:#0f172a;background:#fff}
.block{padding:48px 24px;border-bottom:1px dashed #e2e8f0}
.hero{position:relative;background:#0f172a;color:#fff;text-align:center;overflow:hidden}
.hero__bg{position:absolute;inset:0;width:100%;height:100%;object-fit:cover;opacity:.3}
.hero__content{position:relative}
.btn{display:inline-block;background:#2563eb;color:#fff;padding:10px 18px;border-radius:6px;text-decoration:none}
.pain__grid,.product-list__grid{display:grid;grid-template-columns:repeat(3,1fr);gap:24px}
.media--container{max-width:960px;margin:0 auto}
.media__image,.media__video{width:100%}
.features--grid{display:grid;grid-template-columns:repeat(3,1fr);gap:24px}
.features--grid h2{grid-column:1/-1}
.features__row{display:flex;gap:32px;align-items:center;margin:24px 0}
.features__row--reverse{flex-direction:row-reverse}
.features__row img{max-width:50%}
.stats{display:grid;grid-template-columns:repeat(4,1fr);text-align:center}
.stats--blue{background:#2563eb;color:#fff}
.stats__value{font-size:2rem;font-weight:700}
.logo-wall__logos img{height:40px;margin:0 16px;filter:grayscale(1)}
.cta{background:#0f172a;color:#fff;text-align:center}
.rich-text--center{text-align:center}
.block--unknown{background:#fef2f2;color:#ef4444;text-align:center}
"""


def render_preview_page(blocks: List[Any], title: str = "Preview") -> str:
    return f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>{_e(title)}</title>
<style>{_PREVIEW_CSS}</style></head>
<body>
{render_blocks(blocks)}
</body></html>"""
