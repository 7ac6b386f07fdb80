"""Tests for media_gallery.config: defaults and environment loading."""

from pathlib import Path

import pytest

from media_gallery.config import GalleryConfig
from media_gallery.time_utils import DurationParseError


class TestDefaults:
    def test_defaults(self):
        cfg = GalleryConfig()
        assert cfg.port == 3001
        assert cfg.public_base_url == "http://localhost:3001"
        assert cfg.scan_interval == 3600
        assert cfg.search_ttl == 300
        assert cfg.tag_write_policy == "proceed"
        assert cfg.sort_listings is False
        assert cfg.static_dir is None

    def test_base_url_follows_port(self):
        assert GalleryConfig(port=8080).public_base_url == "http://localhost:8080"

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            GalleryConfig(tag_write_policy="retry")


class TestFromEnv:
    def test_empty_env_gives_defaults(self):
        assert GalleryConfig.from_env({}) == GalleryConfig()

    def test_all_variables(self, tmp_path):
        env = {
            "MEDIA_GALLERY_ROOT": str(tmp_path / "media"),
            "MEDIA_GALLERY_INDEX": str(tmp_path / "index.json"),
            "HOST": "127.0.0.1",
            "PORT": "9000",
            "MEDIA_GALLERY_BASE_URL": "https://gallery.local",
            "MEDIA_GALLERY_SCAN_INTERVAL": "00:30:00",
            "MEDIA_GALLERY_SEARCH_TTL": "60",
            "MEDIA_GALLERY_TAG_WRITE_POLICY": "FAIL",
            "MEDIA_GALLERY_SORT_LISTINGS": "yes",
            "MEDIA_GALLERY_STATIC_DIR": str(tmp_path / "dist"),
        }
        cfg = GalleryConfig.from_env(env)
        assert cfg.media_root == tmp_path / "media"
        assert cfg.index_path == Path(tmp_path / "index.json")
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 9000
        assert cfg.public_base_url == "https://gallery.local"
        assert cfg.scan_interval == 1800
        assert cfg.search_ttl == 60
        assert cfg.tag_write_policy == "fail"
        assert cfg.sort_listings is True
        assert cfg.static_dir == tmp_path / "dist"

    def test_bad_duration(self):
        with pytest.raises(DurationParseError):
            GalleryConfig.from_env({"MEDIA_GALLERY_SCAN_INTERVAL": "soon"})

    def test_bad_boolean(self):
        with pytest.raises(ValueError):
            GalleryConfig.from_env({"MEDIA_GALLERY_SORT_LISTINGS": "maybe"})
