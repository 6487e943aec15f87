"""Rendu HTML — aperçu des blocs et pages d'administration."""
from .blocks import render_block, render_blocks, render_preview_page, youtube_id

__all__ = ["render_block", "render_blocks", "render_preview_page", "youtube_id"]
