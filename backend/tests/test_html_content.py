"""
Tests for job content sanitizing.
"""
from careers.services.html_content import sanitize_html, sanitize_imported_html


def test_keeps_formatting_tags():
    content = "<h2>About</h2><p>We <strong>build</strong> things.</p><ul><li>Python</li></ul>"
    assert sanitize_html(content) == content


def test_drops_scripts_with_content():
    cleaned = sanitize_html("<p>Hello</p><script>alert('x')</script>")
    assert cleaned == "<p>Hello</p>"


def test_strips_attributes_and_unknown_tags():
    cleaned = sanitize_html('<div class="x"><p onclick="evil()" style="color:red">Hi</p></div>')
    assert cleaned == "<p>Hi</p>"


def test_links_keep_only_safe_href():
    assert sanitize_html('<a href="https://acme.com" target="_blank">Site</a>') == '<a href="https://acme.com">Site</a>'
    assert sanitize_html('<a href="javascript:alert(1)">Bad</a>') == "<a>Bad</a>"


def test_none_passes_through():
    assert sanitize_html(None) is None
    assert sanitize_imported_html("") is None


def test_imported_html_is_unescaped_first():
    cleaned = sanitize_imported_html("&lt;p&gt;Join us&lt;/p&gt;&lt;script&gt;x&lt;/script&gt;")
    assert cleaned == "<p>Join us</p>"
