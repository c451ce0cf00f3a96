"""Tests for responsive_images markdown utilities."""

from responsive_images import markdown_utils
from responsive_images.config import Config, ImageConfig, MarkdownConfig


class TestExtractImageReferences:
    """Tests for extract_image_references() function."""

    def test_empty_content(self):
        """Returns an empty list for empty content."""
        assert markdown_utils.extract_image_references("") == []

    def test_finds_images_with_line_numbers(self):
        """Reports each image with its 1-based line number."""
        content = "# Title\n\n![a](one__1-1.jpg)\ntext ![b](two.png) more"
        assert markdown_utils.extract_image_references(content) == [
            (3, "one__1-1.jpg"),
            (4, "two.png"),
        ]

    def test_ignores_titles(self):
        """Titles are not part of the href."""
        content = '![a](img/a__1-1.jpg "A title")'
        assert markdown_utils.extract_image_references(content) == [(1, "img/a__1-1.jpg")]

    def test_angle_bracket_href(self):
        """Hrefs in angle brackets may contain spaces."""
        content = "![a](<my photo__1-1.jpg>)"
        assert markdown_utils.extract_image_references(content) == [(1, "my photo__1-1.jpg")]

    def test_ignores_links(self):
        """Plain links are not images."""
        assert markdown_utils.extract_image_references("[a](page.md)") == []


class TestParseMarkdownFile:
    """Tests for parse_markdown_file() function."""

    def test_splits_front_matter(self, tmp_path):
        """Front matter becomes metadata, the rest is content."""
        page = tmp_path / "page.md"
        page.write_text("---\ntitle: Gallery\n---\n![a](a__1-1.jpg)\n", encoding="utf-8")

        metadata, content = markdown_utils.parse_markdown_file(page)

        assert metadata == {"title": "Gallery"}
        assert content.strip() == "![a](a__1-1.jpg)"

    def test_without_front_matter(self, tmp_path):
        """Files without front matter have empty metadata."""
        page = tmp_path / "page.md"
        page.write_text("Just text\n", encoding="utf-8")

        metadata, content = markdown_utils.parse_markdown_file(page)

        assert metadata == {}
        assert content.strip() == "Just text"

    def test_invalid_yaml(self, tmp_path):
        """Broken front matter yields empty results."""
        page = tmp_path / "page.md"
        page.write_text("---\ntitle: [unclosed\n---\nbody\n", encoding="utf-8")

        assert markdown_utils.parse_markdown_file(page) == ({}, "")


class TestRenderMarkdown:
    """Tests for render_markdown() function."""

    def test_default_config(self):
        """Renders responsive images with the default configuration."""
        html = markdown_utils.render_markdown("![a](a__1-1_2-2.jpg)")
        assert 'srcset="a__1-1.jpg 1w, a__2-2.jpg 2w"' in html
        assert 'loading="lazy"' in html

    def test_uses_image_config(self):
        """Image options are passed to the extension."""
        config = Config(images=ImageConfig(sizes="100vw", lazy=False))
        html = markdown_utils.render_markdown("![a](a__1-1.jpg)", config)
        assert 'sizes="100vw"' in html
        assert "loading=" not in html

    def test_loads_extra_extensions(self):
        """Configured markdown extensions are enabled alongside."""
        config = Config(markdown=MarkdownConfig(extensions=["tables"]))
        html = markdown_utils.render_markdown("| a |\n|---|\n| ![x](x__1-1.jpg) |", config)
        assert "<table>" in html
        assert 'srcset="x__1-1.jpg 1w"' in html

    def test_converter_reset_between_documents(self):
        """References from one document do not leak into the next."""
        markdown_utils.render_markdown("![h][hero]\n\n[hero]: hero__1-1.jpg")
        html = markdown_utils.render_markdown("![h][hero]")
        assert "srcset=" not in html
