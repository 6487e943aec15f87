"""Fixtures communes — store temporaire (zh maître + en), DB SQLite temporaire, clients HTTP."""
import json
import os
import sys
import tempfile

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Avant tout import de sitecms.database (ENGINE créé à l'import)
os.environ.setdefault("DB_PATH", os.path.join(tempfile.mkdtemp(prefix="sitecms-test-"), "test.db"))

import pytest
from fastapi.testclient import TestClient

ADMIN_TOKEN = "test-token"


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def data_root(tmp_path, monkeypatch):
    """public/data avec une langue maître zh et une cible en."""
    root = tmp_path / "public" / "data"
    images = tmp_path / "public" / "images"
    images.mkdir(parents=True)
    monkeypatch.setenv("CMS_DATA_DIR", str(root))
    monkeypatch.setenv("CMS_PUBLIC_DIR", str(tmp_path / "public"))
    monkeypatch.setenv("CMS_IMAGES_DIR", str(images))
    monkeypatch.setenv("CMS_MASTER_LANG", "zh")

    write_json(root / "zh" / "home.json", {
        "title": "首页", "subtitle": "欢迎",
        "blocks": [{"type": "hero", "title": "你好", "backgroundImage": "/images/hero.jpg"}],
    })
    write_json(root / "zh" / "products.json", {"title": "产品", "items": [{"id": "p1", "title": "旧"}]})
    write_json(root / "zh" / "products" / "p1.json", {"id": "p1", "title": "产品一", "images": ["/images/p1.png"]})
    write_json(root / "en" / "home.json", {"title": "Home", "blocks": [{"type": "hero", "title": "Hello"}]})
    (root / "en" / "legal.md").write_text("# Legal\n", encoding="utf-8")
    return root


@pytest.fixture
def client(data_root, monkeypatch):
    """Client authentifié par en-tête X-Admin-Token."""
    monkeypatch.setenv("ADMIN_TOKEN", ADMIN_TOKEN)
    from sitecms.api.main import app
    with TestClient(app, headers={"X-Admin-Token": ADMIN_TOKEN}) as c:
        yield c


@pytest.fixture
def anon(data_root, monkeypatch):
    """Client sans authentification."""
    monkeypatch.setenv("ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
    from sitecms.api.main import app
    with TestClient(app) as c:
        yield c
