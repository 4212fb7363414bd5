import re

SCRAPE_CHAR_LIMIT = 8000

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def extract_text(html, limit: int = SCRAPE_CHAR_LIMIT) -> str:
    """
    Strip markup from a page body and return at most `limit` characters of text.

    Scripts and styles go first (with their contents), then every other tag,
    then whitespace runs collapse to one space. Anything that is not markup
    passes through untouched, so this never fails on junk input.
    """
    if html is None:
        return ""
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    elif not isinstance(html, str):
        html = str(html)

    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _WS_RE.sub(" ", text).strip()
    # the cut can land right after a space; drop it so a second pass is a no-op
    return text[:limit].rstrip()
