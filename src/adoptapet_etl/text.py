"""
Description cleanup for the three output formats.

- sanitize_html: drop ##123## reference codes, keep markup
- clean_text: plain text (entities decoded, tags stripped, whitespace collapsed)
- html_to_markdown: Markdown with exactly one blank line between blocks
"""
from __future__ import annotations
import html, re, sys
from typing import Optional

from markdownify import markdownify

REFERENCE_CODE_RE = re.compile(r"##\d+##")
HTML_TAG_RE = re.compile(r"<[^>]*>")
WHITESPACE_RE = re.compile(r"\s+")
MULTI_NEWLINE_RE = re.compile(r"\n{2,}")

def strip_reference_codes(text: str) -> str:
    return REFERENCE_CODE_RE.sub("", text).strip()

def sanitize_html(raw: str) -> str:
    """Remove reference codes but keep the HTML structure."""
    return strip_reference_codes(raw)

def decode_entities(raw: str) -> str:
    try:
        return html.unescape(raw)
    except (TypeError, ValueError):
        return raw

def clean_text(raw: str) -> str:
    """Plain-text rendition of an HTML description. Never raises."""
    decoded = decode_entities(raw)
    no_tags = HTML_TAG_RE.sub(" ", decoded)
    no_refs = strip_reference_codes(no_tags)
    return WHITESPACE_RE.sub(" ", no_refs).strip()

def html_to_markdown(raw: str) -> Optional[str]:
    """
    Convert an HTML description to Markdown.
    Blank-line runs are first collapsed to one newline, then every newline is
    doubled, so paragraphs end up separated by exactly one blank line.
    Returns None if the converter chokes on the markup.
    """
    sanitized = sanitize_html(raw)
    try:
        converted = markdownify(sanitized, heading_style="ATX")
    except Exception as e:
        print(f"[warn] markdown conversion failed: {e}", file=sys.stderr)
        return None
    collapsed = MULTI_NEWLINE_RE.sub("\n", converted.strip())
    return collapsed.replace("\n", "\n\n")
