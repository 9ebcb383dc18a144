"""
HTML → Markdown / plain-text export for editor content.

This is ordered regex substitution, not an HTML parser. Only the tags the
rich-text editor emits are converted; anything else (tables, images, ...)
passes through untouched, and Markdown special characters in text are not
escaped. Rule order matters: e.g. <br> must be handled before the <b> rule,
whose pattern would otherwise match it.
"""

import re

_FLAGS = re.IGNORECASE

_SCRIPT = re.compile(r"<script[^>]*>[\s\S]*?</script>", _FLAGS)
_STYLE = re.compile(r"<style[^>]*>[\s\S]*?</style>", _FLAGS)

_HEADINGS = [
    (re.compile(rf"<h{level}[^>]*>(.*?)</h{level}>", _FLAGS), "#" * level)
    for level in range(1, 7)
]

_PARAGRAPH = re.compile(r"<p[^>]*>(.*?)</p>", _FLAGS)
_LINE_BREAK = re.compile(r"<br\s*/?>", _FLAGS)
_STRONG = re.compile(r"<strong[^>]*>(.*?)</strong>", _FLAGS)
_BOLD = re.compile(r"<b[^>]*>(.*?)</b>", _FLAGS)
_EMPHASIS = re.compile(r"<em[^>]*>(.*?)</em>", _FLAGS)
_ITALIC = re.compile(r"<i[^>]*>(.*?)</i>", _FLAGS)
_LINK = re.compile(r"<a[^>]*href=\"([^\"]*)\"[^>]*>(.*?)</a>", _FLAGS)
_UNORDERED_LIST = re.compile(r"<ul[^>]*>([\s\S]*?)</ul>", _FLAGS)
_ORDERED_LIST = re.compile(r"<ol[^>]*>([\s\S]*?)</ol>", _FLAGS)
_LIST_ITEM = re.compile(r"<li[^>]*>(.*?)</li>", _FLAGS)
_BLOCKQUOTE = re.compile(r"<blockquote[^>]*>([\s\S]*?)</blockquote>", _FLAGS)
_PRE = re.compile(r"<pre[^>]*>([\s\S]*?)</pre>", _FLAGS)
_INLINE_CODE = re.compile(r"<code[^>]*>(.*?)</code>", _FLAGS)
_HORIZONTAL_RULE = re.compile(r"<hr[^>]*>", _FLAGS)

_EXCESS_NEWLINES = re.compile(r"\n\s*\n\s*\n")
_ANY_TAG = re.compile(r"<[^>]+>")
_FILENAME_UNSAFE = re.compile(r"[^a-z0-9]", re.ASCII)


def _unordered_list(match: re.Match) -> str:
    return _LIST_ITEM.sub(lambda item: f"- {item.group(1)}\n", match.group(1)) + "\n"


def _ordered_list(match: re.Match) -> str:
    counter = 0

    def number(item: re.Match) -> str:
        nonlocal counter
        counter += 1
        return f"{counter}. {item.group(1)}\n"

    return _LIST_ITEM.sub(number, match.group(1)) + "\n"


def _blockquote(match: re.Match) -> str:
    lines = match.group(1).split("\n")
    return "\n".join(f"> {line.strip()}" for line in lines) + "\n\n"


def html_to_markdown(html: str) -> str:
    """Convert an editor HTML fragment to Markdown (best effort, lossy)."""
    markdown = html

    markdown = _SCRIPT.sub("", markdown)
    markdown = _STYLE.sub("", markdown)

    for pattern, hashes in _HEADINGS:
        markdown = pattern.sub(lambda m, h=hashes: f"{h} {m.group(1)}\n\n", markdown)

    markdown = _PARAGRAPH.sub(lambda m: f"{m.group(1)}\n\n", markdown)
    markdown = _LINE_BREAK.sub("\n", markdown)

    markdown = _STRONG.sub(lambda m: f"**{m.group(1)}**", markdown)
    markdown = _BOLD.sub(lambda m: f"**{m.group(1)}**", markdown)
    markdown = _EMPHASIS.sub(lambda m: f"*{m.group(1)}*", markdown)
    markdown = _ITALIC.sub(lambda m: f"*{m.group(1)}*", markdown)

    markdown = _LINK.sub(lambda m: f"[{m.group(2)}]({m.group(1)})", markdown)

    markdown = _UNORDERED_LIST.sub(_unordered_list, markdown)
    markdown = _ORDERED_LIST.sub(_ordered_list, markdown)
    markdown = _BLOCKQUOTE.sub(_blockquote, markdown)

    markdown = _PRE.sub(lambda m: f"```\n{m.group(1)}\n```\n\n", markdown)
    markdown = _INLINE_CODE.sub(lambda m: f"`{m.group(1)}`", markdown)
    markdown = _HORIZONTAL_RULE.sub("---\n\n", markdown)

    # Whitespace cleanup: at most one blank line, no leading/trailing space per line
    markdown = _EXCESS_NEWLINES.sub("\n\n", markdown)
    markdown = "\n".join(line.strip() for line in markdown.split("\n"))
    return markdown.strip()


def html_to_text(html: str, separator: str = "") -> str:
    """Plain-text export: replace every tag with `separator`, keep the text as-is."""
    return _ANY_TAG.sub(separator, html)


def export_filename(title: str, extension: str) -> str:
    """Download name for an exported article, e.g. 'My Post!' -> 'my-post-.md'."""
    stem = title.strip()
    if not stem:
        return f"blog-post.{extension}"
    return f"{_FILENAME_UNSAFE.sub('-', stem.lower())}.{extension}"
