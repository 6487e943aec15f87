"""Tests outils de build — llms.txt, poids des images, nettoyage des metaTitle."""
import json
from datetime import datetime, timezone

import pytest

from sitecms import image_audit, llms, meta_titles
from sitecms.image_audit import ImageFile, format_bytes, oversized, scan_images
from sitecms.llms import PageEntry, build_llms_txt, collect_pages, sort_pages
from sitecms.meta_titles import clean_document, clean_tree, strip_suffix

from conftest import write_json


# ── llms.txt ─────────────────────────────────────────────────────────────────

class TestLlms:
    def test_collect_static_and_index_pages(self, data_root):
        pages = collect_pages(data_root, "https://site.test/")
        urls = [p.url for p in pages]
        assert "https://site.test/en" in urls
        assert "https://site.test/zh" in urls
        assert "https://site.test/zh/products/p1" in urls
        home_zh = next(p for p in pages if p.url == "https://site.test/zh")
        assert home_zh.title == "首页"
        assert home_zh.description == "欢迎"

    def test_index_item_description(self, data_root):
        write_json(data_root / "en" / "solutions.json", {"items": [{"id": "s1", "title": "Retail", "summary": "Shops"}]})
        page = next(p for p in collect_pages(data_root, "https://x") if p.url.endswith("/solutions/s1"))
        assert (page.title, page.description) == ("Retail", "Shops")

    def test_default_language_first(self):
        pages = [PageEntry("b", "", "https://x/zh", "zh"), PageEntry("a", "", "https://x/en", "en")]
        assert [p.lang for p in sort_pages(pages, "zh")] == ["zh", "en"]

    def test_output_format(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        text = build_llms_txt([PageEntry("Home", "Welcome", "https://x/en", "en")], "ACME", now)
        lines = text.split("\n")
        assert lines[0] == "# ACME Site Index"
        assert lines[2] == "# Generated at: 2024-01-01T00:00:00+00:00"
        assert lines[-1] == "- [Home](https://x/en): Welcome"

    def test_generate_with_settings(self, data_root, tmp_path, monkeypatch):
        monkeypatch.delenv("SITE_URL", raising=False)
        write_json(data_root / "settings.json", {"seo": {"siteUrl": "https://acme.test"}, "defaultLanguage": "zh"})
        out = tmp_path / "llms.txt"
        assert llms.generate(data_root, out) == 3
        body = out.read_text(encoding="utf-8").split("\n")[3:]
        assert body[0].startswith("- [首页](https://acme.test/zh)")

    def test_site_url_env_wins(self, data_root, tmp_path, monkeypatch):
        monkeypatch.setenv("SITE_URL", "https://env.test")
        out = tmp_path / "llms.txt"
        assert llms.main(["--output", str(out)]) == 0
        assert "https://env.test/en" in out.read_text(encoding="utf-8")


# ── Poids des images ─────────────────────────────────────────────────────────

class TestImageAudit:
    @pytest.mark.parametrize("n,expected", [
        (0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (1048576, "1 MB"),
    ])
    def test_format_bytes(self, n, expected):
        assert format_bytes(n) == expected

    def test_oversized_sorted(self, tmp_path):
        imgs = [ImageFile(tmp_path / "a", 10), ImageFile(tmp_path / "b", 30), ImageFile(tmp_path / "c", 20)]
        assert [i.size for i in oversized(imgs, 15)] == [30, 20]

    def test_scan_filters_extensions(self, tmp_path):
        (tmp_path / "a.PNG").write_bytes(b"x" * 3)
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.ico").write_bytes(b"x")
        (tmp_path / "c.txt").write_bytes(b"x")
        assert sorted(i.path.name for i in scan_images(tmp_path)) == ["a.PNG", "b.ico"]

    def test_missing_dir(self, tmp_path):
        assert scan_images(tmp_path / "nope") == []

    def test_main_exit_code(self, tmp_path):
        (tmp_path / "big.jpg").write_bytes(b"x" * 200)
        assert image_audit.main(["--images-dir", str(tmp_path), "--max-bytes", "100"]) == 1
        assert image_audit.main(["--images-dir", str(tmp_path), "--max-bytes", "1000"]) == 0

    @pytest.mark.parametrize("limit", ["0", "-5"])
    def test_non_positive_limit_refused(self, tmp_path, limit):
        (tmp_path / "a.jpg").write_bytes(b"x")
        with pytest.raises(SystemExit) as exc:
            image_audit.main(["--images-dir", str(tmp_path), "--max-bytes", limit])
        assert exc.value.code == 2

    def test_zero_limit_from_env_refused(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IMAGE_MAX_BYTES", "0")
        with pytest.raises(SystemExit):
            image_audit.main(["--images-dir", str(tmp_path)])


# ── metaTitle ────────────────────────────────────────────────────────────────

SUFFIX = " | ACME"


class TestMetaTitles:
    def test_strip_suffix(self):
        assert strip_suffix("Fleet Tracker | ACME", SUFFIX) == "Fleet Tracker"
        assert strip_suffix("ACME | Fleet", SUFFIX) == "ACME | Fleet"
        assert strip_suffix(None, SUFFIX) is None

    def test_root_and_page_titles(self):
        doc = {"metaTitle": "P1 | ACME", "page": {"metaTitle": "Home  | ACME", "title": "x | ACME"}}
        assert clean_document(doc, SUFFIX) is True
        assert doc == {"metaTitle": "P1", "page": {"metaTitle": "Home", "title": "x | ACME"}}
        assert clean_document(doc, SUFFIX) is False

    def test_non_object_untouched(self):
        assert clean_document(["P1 | ACME"], SUFFIX) is False

    def test_tree(self, data_root):
        write_json(data_root / "en" / "products" / "p1.json", {"metaTitle": "P1 | ACME"})
        write_json(data_root / "settings.json", {"metaTitle": "Site | ACME"})
        (data_root / "en" / "broken.json").write_text("{oops", encoding="utf-8")
        report = clean_tree(data_root, SUFFIX)
        assert report.cleaned == ["en/products/p1.json"]
        assert len(report.errors) == 1 and report.errors[0].startswith("en/broken.json")
        assert json.loads((data_root / "en" / "products" / "p1.json").read_text(encoding="utf-8")) == {"metaTitle": "P1"}
        assert json.loads((data_root / "settings.json").read_text(encoding="utf-8")) == {"metaTitle": "Site | ACME"}

    def test_dry_run_does_not_write(self, data_root):
        write_json(data_root / "en" / "products" / "p1.json", {"metaTitle": "P1 | ACME"})
        report = clean_tree(data_root, SUFFIX, dry_run=True)
        assert report.cleaned == ["en/products/p1.json"]
        assert "| ACME" in (data_root / "en" / "products" / "p1.json").read_text(encoding="utf-8")

    def test_main(self, data_root, monkeypatch):
        write_json(data_root / "zh" / "about.json", {"page": {"metaTitle": "关于 | ACME"}})
        monkeypatch.setenv("META_TITLE_SUFFIX", SUFFIX)
        assert meta_titles.main([]) == 0
        assert json.loads((data_root / "zh" / "about.json").read_text(encoding="utf-8")) == {"page": {"metaTitle": "关于"}}

    def test_main_requires_suffix(self, data_root, monkeypatch):
        monkeypatch.delenv("META_TITLE_SUFFIX", raising=False)
        with pytest.raises(SystemExit):
            meta_titles.main([])
