"""Comment body rendering and HTML sanitization.

Comment bodies are untrusted Markdown. They are rendered to HTML first and
the rendered HTML is then reduced to an allow-list suited for user generated
content. Both steps are exposed separately so the sanitizer can be exercised
against arbitrary renderer output.
"""

import re
from urllib.parse import urlsplit

import markdown
from bs4 import BeautifulSoup
from bs4.element import PreformattedString

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

# Removed together with everything inside them.
DROPPED_TAGS = frozenset(
    {
        "applet", "base", "button", "embed", "form", "frame", "frameset",
        "head", "iframe", "input", "link", "math", "meta", "noscript",
        "object", "script", "select", "style", "svg", "template",
        "textarea", "title",
    }
)

ALLOWED_TAGS = frozenset(
    {
        "a", "abbr", "acronym", "b", "blockquote", "br", "caption", "cite",
        "code", "col", "colgroup", "dd", "del", "details", "dfn", "div",
        "dl", "dt", "em", "figcaption", "figure", "h1", "h2", "h3", "h4",
        "h5", "h6", "hr", "i", "img", "ins", "kbd", "li", "mark", "ol", "p",
        "pre", "q", "rp", "rt", "ruby", "s", "samp", "small", "span",
        "strike", "strong", "sub", "summary", "sup", "table", "tbody", "td",
        "tfoot", "th", "thead", "time", "tr", "tt", "u", "ul", "var", "wbr",
    }
)

GLOBAL_ATTRIBUTES = frozenset({"title", "dir", "lang"})

TAG_ATTRIBUTES = {
    "a": frozenset({"href"}),
    "abbr": frozenset({"title"}),
    "blockquote": frozenset({"cite"}),
    "code": frozenset({"class"}),
    "col": frozenset({"span"}),
    "colgroup": frozenset({"span"}),
    "del": frozenset({"cite", "datetime"}),
    "img": frozenset({"src", "alt", "width", "height"}),
    "ins": frozenset({"cite", "datetime"}),
    "li": frozenset({"value"}),
    "ol": frozenset({"start", "reversed", "type"}),
    "q": frozenset({"cite"}),
    "td": frozenset({"colspan", "rowspan", "align", "style"}),
    "th": frozenset({"colspan", "rowspan", "align", "scope", "style"}),
    "time": frozenset({"datetime"}),
}

URL_SCHEMES = {
    "href": frozenset({"http", "https", "mailto"}),
    "cite": frozenset({"http", "https"}),
    "src": frozenset({"http", "https"}),
}

CODE_CLASS_RE = re.compile(r"^language-[\w+#.-]+$")
# Table alignment is the only inline style the renderer emits.
TEXT_ALIGN_RE = re.compile(r"^text-align:\s*(left|right|center);?$")
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def render_markdown(raw: str) -> str:
    """Render a comment body to HTML.

    The result is untrusted: raw HTML in the body passes straight through.
    """
    return markdown.markdown(
        raw or "", extensions=MARKDOWN_EXTENSIONS, output_format="html"
    )


def _safe_url(value: str, schemes: frozenset[str]) -> bool:
    if CONTROL_CHARS_RE.search(value):
        return False
    try:
        scheme = urlsplit(value.strip()).scheme.lower()
    except ValueError:
        return False
    # Relative URLs have no scheme.
    return scheme == "" or scheme in schemes


def _clean_attributes(tag) -> dict:
    allowed = GLOBAL_ATTRIBUTES | TAG_ATTRIBUTES.get(tag.name, frozenset())
    cleaned = {}

    for name, value in tag.attrs.items():
        name = name.lower()
        if name not in allowed:
            continue

        if name == "class":
            classes = value if isinstance(value, list) else str(value).split()
            classes = [c for c in classes if CODE_CLASS_RE.match(c)]
            if classes:
                cleaned[name] = classes
            continue

        if isinstance(value, list):
            value = " ".join(value)
        value = value or ""

        if name in URL_SCHEMES and not _safe_url(value, URL_SCHEMES[name]):
            continue
        if name == "style" and not TEXT_ALIGN_RE.match(value.strip()):
            continue

        cleaned[name] = value

    if tag.name == "a" and "href" in cleaned:
        cleaned["rel"] = "nofollow"

    return cleaned


def sanitize_html(html: str) -> str:
    """Strip everything outside the allow-list from an HTML fragment.

    Disallowed elements in DROPPED_TAGS are removed with their content, other
    disallowed elements are replaced by their children. Comments, doctypes
    and processing instructions are removed. Never raises on malformed input.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for node in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
        node.extract()

    for tag in soup.find_all(sorted(DROPPED_TAGS)):
        # Nested matches are gone once their ancestor is.
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        tag.attrs = _clean_attributes(tag)

    return str(soup)


def render_safe(raw: str) -> str:
    """Render a comment body and sanitize the result."""
    return sanitize_html(render_markdown(raw))
