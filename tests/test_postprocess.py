"""Tests for postprocess module."""

from responsive_images.postprocess import ImageSummary, summarize_images


class TestSummarizeImages:
    """Tests for summarize_images function."""

    def test_splits_responsive_and_plain(self):
        html = (
            '<p><img class="md-img" src="a__1-1.jpg" srcset="a__1-1.jpg 1w">'
            '<img alt="" src="b.png" /></p>'
        )
        summary = summarize_images(html)
        assert summary.responsive == ["a__1-1.jpg"]
        assert summary.plain == ["b.png"]
        assert summary.total == 2

    def test_class_without_srcset_is_plain(self):
        html = '<img class="md-img" src="a.jpg">'
        assert summarize_images(html).plain == ["a.jpg"]

    def test_no_images(self):
        assert summarize_images("<p>text</p>") == ImageSummary()
