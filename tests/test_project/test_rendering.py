"""Tests for Markdown image rewriting and rendering."""

import pytest

from manuscript_studio.project.rendering import render_markdown, rewrite_image_links


class TestRewriteImageLinks:
    def test_wiki_embed_points_at_images(self):
        assert rewrite_image_links("![[photo.png]]") == (
            "![photo.png](/project-assets/images/photo.png)"
        )

    def test_wiki_embed_with_space_is_quoted(self):
        assert rewrite_image_links("![[my photo.png]]") == (
            "![my photo.png](/project-assets/images/my%20photo.png)"
        )

    def test_relative_image_routed_through_assets(self):
        assert rewrite_image_links("![cap](notes/x.png)") == (
            "![cap](/project-assets/notes/x.png)"
        )

    def test_title_preserved(self):
        assert rewrite_image_links('![cap](x.png "A title")') == (
            '![cap](/project-assets/x.png "A title")'
        )

    def test_angle_bracket_target(self):
        assert rewrite_image_links("![a](<my pic.png>)") == (
            "![a](/project-assets/my%20pic.png)"
        )

    @pytest.mark.parametrize(
        "title", [" 'Single'", " (Parens)", ' "Double"']
    )
    def test_title_forms_preserved(self, title):
        assert rewrite_image_links(f"![cap](<x y.png>{title})") == (
            f"![cap](/project-assets/x%20y.png{title})"
        )
        assert rewrite_image_links(f"![cap](x.png{title})") == (
            f"![cap](/project-assets/x.png{title})"
        )

    def test_angle_bracket_web_url_untouched(self):
        source = "![a](<https://ex.com/x.png>)"
        assert rewrite_image_links(source) == source

    def test_rendered_angle_bracket_image(self):
        html = render_markdown("![a](<my pic.png> 'Cap')")
        assert 'src="/project-assets/my%20pic.png"' in html
        assert 'title="Cap"' in html

    @pytest.mark.parametrize(
        "source",
        [
            "![cap](https://ex.com/x.png)",
            "![cap](http://ex.com/x.png)",
            "![cap](data:image/png;base64,AAAA)",
            "![cap](/project-assets/images/x.png)",
        ],
    )
    def test_absolute_urls_untouched(self, source):
        assert rewrite_image_links(source) == source

    def test_plain_links_untouched(self):
        assert rewrite_image_links("[text](notes/x.md)") == "[text](notes/x.md)"

    def test_mixed_text(self):
        text = "Intro ![[a.png]] and ![b](b.png) end"
        assert rewrite_image_links(text) == (
            "Intro ![a.png](/project-assets/images/a.png) and "
            "![b](/project-assets/b.png) end"
        )


class TestRenderMarkdown:
    def test_renders_heading_and_paragraph(self):
        html = render_markdown("# Title\n\nHello.")
        assert "<h1>Title</h1>" in html
        assert "<p>Hello.</p>" in html

    def test_renders_rewritten_image(self):
        html = render_markdown("![[photo.png]]")
        assert 'src="/project-assets/images/photo.png"' in html
        assert 'alt="photo.png"' in html
