"""Tests aperçu des blocs."""
import pytest

from sitecms.renderer import render_block, render_blocks, render_preview_page, youtube_id


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://youtu.be/dQw4w9WgXcQ",
    "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
])
def test_youtube_id(url):
    assert youtube_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", ["/videos/demo.mp4", "https://youtu.be/short", "", None])
def test_not_youtube(url):
    assert youtube_id(url) is None


def test_youtube_video_embedded():
    html = render_block({"type": "media", "mediaType": "video", "url": "https://youtu.be/dQw4w9WgXcQ"})
    assert 'src="https://www.youtube.com/embed/dQw4w9WgXcQ"' in html
    assert "<video" not in html


def test_direct_video_file():
    html = render_block({"type": "media", "mediaType": "video", "url": "/videos/demo.mp4", "width": "full"})
    assert '<video class="media__video" controls src="/videos/demo.mp4">' in html
    assert "media--full" in html


def test_media_image():
    html = render_block({"type": "media", "mediaType": "image", "url": "/images/a.png", "caption": "A"})
    assert '<img class="media__image" src="/images/a.png" alt="A">' in html
    assert '<p class="media__caption">A</p>' in html


def test_unknown_block():
    assert "Unknown Block Type: carousel" in render_block({"type": "carousel"})
    assert "Unknown Block Type" in render_block("not a block")


def test_hero_defaults():
    html = render_block({"type": "hero", "title": "Hi"})
    assert 'href="/contact"' in html
    assert "Get Started" in html


def test_features_alternating_placeholder():
    html = render_block({"type": "features", "layout": "alternating", "items": [{"title": "A"}, {"title": "B"}]})
    assert html.count("No Image") == 2
    assert "features__row--reverse" in html


def test_content_escaped():
    html = render_block({"type": "rich_text", "content": "<script>alert(1)</script>"})
    assert "<script>" not in html


def test_page_wraps_blocks_in_order():
    page = render_preview_page([{"type": "cta", "title": "One"}, {"type": "stats", "background": "blue"}])
    assert page.startswith("<!DOCTYPE html>")
    assert page.index("One") < page.index("block stats stats--blue")
    assert render_blocks([]) == ""
