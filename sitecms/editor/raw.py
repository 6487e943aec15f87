"""
Mode brut — édition directe de la sérialisation JSON du document.

Le texte est analysé à chaque modification. Tant qu'il est invalide, la
dernière valeur valide est conservée et l'erreur est exposée.
"""
import json
from typing import Any, Optional

from ..store import dumps, loads


class RawBuffer:
    def __init__(self, value: Any = None):
        self.value = value
        self.text = dumps(value)
        self.error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.error is None

    def update(self, text: str) -> bool:
        self.text = text
        try:
            self.value = loads(text)
        except json.JSONDecodeError as e:
            self.error = f"Invalid JSON syntax: {e.msg} (ligne {e.lineno}, colonne {e.colno})"
            return False
        except ValueError as e:
            # NaN / Infinity
            self.error = f"Invalid JSON syntax: {e}"
            return False
        self.error = None
        return True

    def reset(self, value: Any):
        """Resynchronise le texte après une modification faite depuis le formulaire."""
        self.value = value
        self.text = dumps(value)
        self.error = None

    def state(self) -> dict:
        return {"text": self.text, "value": self.value, "valid": self.valid, "error": self.error}
