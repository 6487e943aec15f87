"""Tests Content Store — chemins, fichiers, langues, images, pages."""
import base64

import pytest

from sitecms import store


class TestResolve:
    def test_inside_root(self, data_root):
        assert store.resolve("en/home.json") == (data_root / "en" / "home.json").resolve()

    @pytest.mark.parametrize("rel", ["../secret.json", "en/../../x", "en/../../../etc/passwd"])
    def test_escape_refused(self, data_root, rel):
        with pytest.raises(PermissionError):
            store.resolve(rel)

    def test_leading_slash_stays_under_root(self, data_root):
        assert store.resolve("/en/home.json") == (data_root / "en" / "home.json").resolve()


class TestFiles:
    def test_list_files_all_and_by_lang(self, data_root):
        assert store.list_files("en") == ["en/home.json", "en/legal.md"]
        assert "zh/products/p1.json" in store.list_files()

    def test_list_files_unknown_lang(self, data_root):
        assert store.list_files("fr") == []

    def test_write_then_read(self, data_root):
        store.write("en/about.json", {"title": "关于"})
        assert store.read_json("en/about.json") == {"title": "关于"}
        assert "关于" in (data_root / "en" / "about.json").read_text(encoding="utf-8")

    def test_write_string_verbatim(self, data_root):
        store.write("en/legal.md", "# New\n")
        assert store.read_text("en/legal.md") == "# New\n"

    def test_read_missing(self, data_root):
        with pytest.raises(FileNotFoundError):
            store.read_text("en/nope.json")

    def test_non_standard_constants_refused(self, data_root):
        (data_root / "en" / "nan.json").write_text('{"a": NaN, "b": Infinity}', encoding="utf-8")
        with pytest.raises(ValueError, match="NaN"):
            store.read_json("en/nan.json")
        with pytest.raises(ValueError):
            store.loads("[-Infinity]")
        with pytest.raises(ValueError):
            store.write("en/nan.json", {"a": float("nan")})

    def test_delete(self, data_root):
        store.delete("en/legal.md")
        assert not store.exists("en/legal.md")
        with pytest.raises(FileNotFoundError):
            store.delete("en/legal.md")


class TestLanguages:
    def test_list(self, data_root):
        assert store.list_languages() == [
            {"code": "en", "isMaster": False},
            {"code": "zh", "isMaster": True},
        ]

    def test_create_clones_master(self, data_root):
        store.create_language("fr")
        assert (data_root / "fr" / "products" / "p1.json").is_file()
        assert store.read_json("fr/home.json")["title"] == "首页"

    def test_create_existing(self, data_root):
        with pytest.raises(FileExistsError):
            store.create_language("en")

    @pytest.mark.parametrize("code", ["", "EN", "english", "../x"])
    def test_create_invalid(self, data_root, code):
        with pytest.raises(ValueError):
            store.create_language(code)

    def test_create_region_code(self, data_root):
        store.create_language("pt-BR")
        assert "pt-BR" in store.language_codes()

    def test_delete_master_refused(self, data_root):
        with pytest.raises(PermissionError):
            store.delete_language("zh")
        assert (data_root / "zh").is_dir()

    def test_delete(self, data_root):
        store.delete_language("en")
        assert store.language_codes() == ["zh"]

    def test_delete_unknown(self, data_root):
        with pytest.raises(FileNotFoundError):
            store.delete_language("fr")

    def test_master_path(self, data_root):
        assert store.master_path("en/products/a.json") == "zh/products/a.json"
        with pytest.raises(ValueError):
            store.master_path("home.json")


class TestImages:
    def test_save_data_url_and_list(self, data_root):
        payload = "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()
        assert store.save_image("logo.png", payload) == "/images/logo.png"
        assert store.list_images() == ["/images/logo.png"]
        assert store.list_images("LOGO") == ["/images/logo.png"]
        assert store.list_images("hero") == []

    def test_non_images_not_listed(self, data_root):
        (store.images_dir() / "notes.txt").write_text("x")
        assert store.list_images() == []

    @pytest.mark.parametrize("name", ["", "../x.png", "a/b.png", ".hidden.png", "doc.pdf"])
    def test_bad_filename(self, data_root, name):
        with pytest.raises(ValueError):
            store.save_image(name, base64.b64encode(b"x").decode())

    def test_bad_base64(self, data_root):
        with pytest.raises(ValueError):
            store.save_image("a.png", "not base64!!")


class TestPages:
    def test_safe_name(self):
        assert store.safe_name("My Product_2") == "my-product-2"

    def test_product_page(self, data_root):
        rel = store.create_page("en", "product", "Smart Lock")
        assert rel == "en/products/smart-lock.json"
        doc = store.read_json(rel)
        assert doc["id"] == "smart-lock"
        assert doc["icon"] == "Box"

    def test_solution_page_has_blocks(self, data_root):
        rel = store.create_page("en", "solution", "retail")
        assert [b["type"] for b in store.read_json(rel)["blocks"]] == ["hero", "features"]

    def test_blank_page_free_path(self, data_root):
        assert store.create_page("en", "blank", "about/team") == "en/about/team.json"
        assert store.read_json("en/about/team.json") == {}

    def test_existing_page(self, data_root):
        with pytest.raises(FileExistsError):
            store.create_page("zh", "product", "p1")

    def test_unknown_kind(self, data_root):
        with pytest.raises(ValueError):
            store.create_page("en", "news", "x")
