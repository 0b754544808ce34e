"""Logo and gallery path resolution never raises and always yields a path."""

from herohub import assets
from herohub.assets import detail_image, logo_candidates, resolve_gallery_image, resolve_logo


class TestLogo:

    def test_existing_path_wins(self):
        assert resolve_logo("Bruce Wayne", "bruce", "DC", logo="cdn/bruce.png") == "cdn/bruce.png"

    def test_first_candidate_without_probe(self):
        assert resolve_logo("Tony Stark", "tony", "Marvel") == f"{assets.config.ASSETS_BASE}/logos/tony_stark_logo.jpeg"

    def test_candidates_order(self):
        base = f"{assets.config.ASSETS_BASE}/logos"
        assert logo_candidates("Peter Parker", "spider-man", "Marvel") == [
            f"{base}/peter_parker_logo.jpeg",
            f"{base}/spider_man_logo.jpeg",
            f"{base}/spider-man_logo.jpeg",
            f"{base}/marvel_logo.jpeg",
        ]

    def test_probe_falls_back_to_universe(self):
        hit = resolve_logo("Naruto Uzumaki", "naruto", "Anime", exists=lambda p: p.endswith("anime_logo.jpeg"))
        assert hit.endswith("logos/anime_logo.jpeg")

    def test_placeholder_when_nothing_exists(self):
        hit = resolve_logo("Diana Prince", "diana", "DC", exists=lambda p: False)
        assert hit == "https://via.placeholder.com/300x400/1a1a2e/ffffff?text=D"

    def test_probe_errors_are_absorbed(self):
        def broken(path):
            raise OSError("permission denied")

        assert resolve_logo("Clark", "clark", "DC", exists=broken).startswith("https://via.placeholder.com/")

    def test_missing_name(self):
        base = f"{assets.config.ASSETS_BASE}/logos"
        assert resolve_logo(None, None, None) == f"{base}/default_logo.jpeg"


class TestGallery:

    def test_path_kept(self):
        assert resolve_gallery_image("https://cdn.example.org/a.jpeg", "bruce") == "https://cdn.example.org/a.jpeg"

    def test_characters_folder_first(self):
        assert resolve_gallery_image("bruce_1.jpeg", "bruce") == f"{assets.config.ASSETS_BASE}/characters/bruce_1.jpeg"

    def test_placeholder_uses_stem(self):
        hit = resolve_gallery_image("bruce 1.jpeg", "bruce", exists=lambda p: False)
        assert hit == "https://via.placeholder.com/600x800/1a1a2e/ffffff?text=bruce%201"

    def test_empty_filename(self):
        assert resolve_gallery_image("", "bruce").startswith("https://via.placeholder.com/600x800/")


class TestDetailImage:

    def test_gallery_first(self, catalog):
        assert detail_image(catalog.get("bruce")).endswith("characters/bruce_1.jpeg")

    def test_logo_otherwise(self, catalog):
        assert detail_image(catalog.get("alfred")) == catalog.get("alfred").logo


class TestLocalAssetPath:

    def test_inside_and_outside(self, tmp_path, monkeypatch):
        logo = tmp_path / "assets" / "images" / "logos" / "dc_logo.jpeg"
        logo.parent.mkdir(parents=True)
        logo.write_bytes(b"x")
        (tmp_path / "assets" / "notes.txt").write_text("x", encoding="utf-8")
        monkeypatch.setattr(assets.config, "ASSETS_ROOT", str(tmp_path))
        monkeypatch.setattr(assets.config, "ASSETS_BASE", "assets/images")

        assert assets.local_asset_path("assets/images/logos/dc_logo.jpeg") == str(logo.resolve())
        assert assets.local_asset_path("/assets/images/logos/dc_logo.jpeg") == str(logo.resolve())
        assert assets.local_asset_path("assets/images/../notes.txt") is None
        assert assets.local_asset_path("assets/notes.txt") is None
        assert assets.local_asset_path("https://cdn.example.org/assets/images/x.jpeg") is None
        assert assets.local_asset_path("assets/images/logos/missing.jpeg") is None
