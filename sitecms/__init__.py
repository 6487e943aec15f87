"""sitecms — CMS fichiers JSON multi-langue (store, éditeur, sync, index)."""
__version__ = "1.0.0"
