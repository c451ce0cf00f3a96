"""Tests for the image reference checker."""

from responsive_images.checker import (
    INVALID,
    MALFORMED,
    OK,
    UNPARSEABLE,
    check_document,
    check_href,
)
from responsive_images.variants import Variant


class TestCheckHref:
    """Tests for check_href function."""

    def test_plain_image_ignored(self):
        assert check_href("img/photo.jpg") is None

    def test_valid_convention(self):
        finding = check_href("img/photo__800-600_400-300-webp.jpg", line=3)
        assert finding.status == OK
        assert finding.line == 3
        assert finding.is_problem is False
        assert finding.variants == [Variant(400, 300, ".webp"), Variant(800, 600, ".jpg")]
        assert finding.message == "400x300.webp, 800x600.jpg"

    def test_malformed(self):
        finding = check_href("img/photo__400x300.jpg")
        assert finding.status == MALFORMED
        assert finding.is_problem is True
        assert "photo__400x300.jpg" in finding.message

    def test_invalid_dimensions(self):
        finding = check_href("img/photo__0-300.jpg")
        assert finding.status == INVALID

    def test_unparseable(self):
        finding = check_href("http://[::1/a__1-1.jpg")
        assert finding.status == UNPARSEABLE


class TestCheckDocument:
    """Tests for check_document function."""

    def test_reports_convention_images_only(self):
        content = (
            "Intro ![plain](a.png)\n"
            "![good](b__1-1.png)\n"
            "![typo](c__1x1.png)\n"
        )
        findings = check_document(content)
        assert [(f.line, f.status) for f in findings] == [(2, OK), (3, MALFORMED)]

    def test_empty_document(self):
        assert check_document("") == []
