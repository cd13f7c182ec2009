"""Tests for the protocol text helpers."""

from services.playlist_service.src.scraper.text import (
    SEPARATOR,
    album_line,
    looks_like_url,
    normalize,
    search_text,
    strip_noise,
    top_line,
    track_line,
)


class TestNormalize:
    """Test whitespace normalization."""

    def test_collapses_whitespace(self):
        assert normalize("  Daft \n\t Punk  ") == "Daft Punk"

    def test_empty_values(self):
        assert normalize(None) == ""
        assert normalize("   ") == ""


class TestStripNoise:
    """Test cleanup of free-form titles."""

    def test_removes_bracketed_tags(self):
        assert strip_noise("[FRESH] Radiohead - Daydreaming") == "Radiohead - Daydreaming"

    def test_removes_noisy_parentheticals(self):
        assert strip_noise("Radiohead - Creep (Official Video)") == "Radiohead - Creep"
        assert strip_noise("Portishead - Roads (1994)") == "Portishead - Roads"
        assert strip_noise("Air – La Femme d'Argent (HD)") == "Air - La Femme d'Argent"

    def test_keeps_meaningful_parentheticals(self):
        assert strip_noise("Björk - Joga (String Version)") == "Björk - Joga (String Version)"

    def test_removes_quotes_and_normalizes_dashes(self):
        assert strip_noise('Massive Attack — "Teardrop"') == "Massive Attack - Teardrop"

    def test_empty(self):
        assert strip_noise(None) == ""
        assert strip_noise("[tag]") == ""


class TestLineBuilders:
    """Test intermediate protocol line builders."""

    def test_track_line(self):
        assert track_line("Air", "Playground Love") == "Air\t-\tPlayground Love"

    def test_album_line(self):
        assert album_line("Air" + SEPARATOR + "Moon Safari") == "#album Air\t-\tMoon Safari"

    def test_top_line(self):
        assert top_line("Air") == "#top Air"

    def test_search_text_drops_separator(self):
        assert search_text("Air\t-\tPlayground Love") == "Air Playground Love"
        assert search_text("  Air  ") == "Air"

    def test_looks_like_url(self):
        assert looks_like_url("https://youtu.be/abc")
        assert looks_like_url("see http://example.com")
        assert not looks_like_url("Air - Playground Love")
