"""Tests for media_gallery.scanner: per-folder catalog entries."""

import os

from media_gallery.scanner import IMAGE_EXTENSIONS, FolderScanner

from .conftest import make_folder


def _scanner(media_root, **kwargs):
    return FolderScanner(media_root, "http://testserver/", **kwargs)


class TestScanFolder:
    def test_cat_video_scenario(self, media_root, cat_video):
        """Video, cover and tags are all picked up from the folder."""
        entry = _scanner(media_root).scan_folder("cat_video")
        assert entry is not None
        assert entry.id == "cat_video"
        assert entry.name == "cat_video"
        assert entry.tags == ["cat", "funny"]
        assert entry.video_url == "http://testserver/videos/cat_video/clip.mp4"
        assert entry.cover_url == "http://testserver/videos/cat_video/thumb.png"
        assert entry.created_at.endswith("Z")

    def test_folder_without_video_is_skipped(self, media_root):
        make_folder(media_root, "photos", {"a.jpg": b"", "notes.txt": b""}, tags="x")
        assert _scanner(media_root).scan_folder("photos") is None

    def test_extension_match_is_case_insensitive(self, media_root):
        make_folder(media_root, "loud", {"CLIP.MOV": b"", "COVER.JPEG": b""})
        entry = _scanner(media_root).scan_folder("loud")
        assert entry.video_url.endswith("/CLIP.MOV")
        assert entry.cover_url.endswith("/COVER.JPEG")

    def test_cover_is_optional(self, media_root):
        make_folder(media_root, "bare", {"movie.mkv": b""})
        entry = _scanner(media_root).scan_folder("bare")
        assert entry.cover_url is None
        assert entry.tags == []

    def test_cover_follows_listing_order(self, media_root):
        """With several images the first one in directory order wins."""
        folder = make_folder(media_root, "multi", {"v.avi": b"", "b.jpg": b"", "a.png": b"", "c.gif": b""})
        expected = next(
            name for name in os.listdir(folder) if os.path.splitext(name)[1].lower() in IMAGE_EXTENSIONS
        )
        entry = _scanner(media_root).scan_folder("multi")
        assert entry.cover_url.endswith("/" + expected)

    def test_sorted_listings(self, media_root):
        """sort_listings picks the alphabetically first candidates."""
        make_folder(media_root, "sorted", {"z.mp4": b"", "a.mkv": b"", "y.png": b"", "b.gif": b""})
        entry = _scanner(media_root, sort_listings=True).scan_folder("sorted")
        assert entry.video_url.endswith("/a.mkv")
        assert entry.cover_url.endswith("/b.gif")

    def test_urls_are_quoted(self, media_root):
        make_folder(media_root, "my video", {"part 1.mp4": b""})
        entry = _scanner(media_root).scan_folder("my video")
        assert entry.video_url == "http://testserver/videos/my%20video/part%201.mp4"

    def test_missing_folder_returns_none(self, media_root):
        assert _scanner(media_root).scan_folder("ghost") is None


class TestListFolders:
    def test_only_directories(self, media_root):
        make_folder(media_root, "one", {"a.mp4": b""})
        make_folder(media_root, "two")
        (media_root / "stray.mp4").write_bytes(b"")
        assert sorted(_scanner(media_root).list_folders()) == ["one", "two"]

    def test_sorted(self, media_root):
        for name in ("c", "a", "b"):
            make_folder(media_root, name)
        assert _scanner(media_root, sort_listings=True).list_folders() == ["a", "b", "c"]
