"""Building blocks shared by every notification email.

Every email follows the same grammar: a heading, a greeting, a few content
blocks (paragraphs, fact callouts, tip lists), one primary button and a
footer. Helpers return :class:`Html` fragments; any other value passed to a
helper is escaped before it reaches the document.
"""

from __future__ import annotations

import html
from collections.abc import Iterable, Sequence
from typing import Literal
from urllib.parse import urlsplit

BRAND_NAME = "CareerSync"
COPYRIGHT_LINE = f"© {BRAND_NAME}. All rights reserved."

BASE_STYLES = """
  body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif; background-color: #f6f9fc; margin: 0; padding: 0; }
  .container { max-width: 600px; margin: 0 auto; background-color: #ffffff; }
  .content { padding: 40px 48px; }
  h1 { color: #1f2937; font-size: 28px; font-weight: bold; margin: 0 0 24px 0; }
  p { color: #374151; font-size: 16px; line-height: 24px; margin: 16px 0; }
  .button { display: inline-block; background-color: #2563eb; color: #ffffff; text-decoration: none; padding: 12px 24px; border-radius: 6px; font-weight: bold; margin: 24px 0; }
  .info-box { background-color: #f0fdf4; border-left: 4px solid #10b981; border-radius: 8px; padding: 20px; margin: 24px 0; }
  .warning-box { background-color: #fef3c7; border-left: 4px solid #f59e0b; border-radius: 8px; padding: 20px; margin: 24px 0; }
  .info-label { color: #6b7280; font-size: 12px; font-weight: bold; text-transform: uppercase; margin: 8px 0 4px 0; }
  .info-value { color: #1f2937; font-size: 16px; font-weight: bold; margin: 0 0 12px 0; }
  .tips-box { background-color: #eff6ff; border-radius: 8px; padding: 20px; margin: 24px 0; }
  .tip-item { color: #374151; font-size: 14px; line-height: 24px; margin: 8px 0; }
  .card { background-color: #f9fafb; border: 1px solid #e5e7eb; border-radius: 8px; padding: 16px; margin-bottom: 12px; }
  .note { text-align: center; color: #6b7280; font-size: 14px; font-style: italic; margin-top: 24px; }
  .footer { color: #6b7280; font-size: 12px; padding: 0 48px 24px 48px; margin-top: 32px; border-top: 1px solid #e5e7eb; padding-top: 24px; }
"""

BoxVariant = Literal["info", "warning", "tips"]

LINK_STYLE = "color: #2563eb; text-decoration: underline;"
BOX_TITLE_STYLE = "font-weight: bold; margin: 0 0 12px 0;"
QUOTE_STYLE = "color: #374151; font-size: 15px; line-height: 22px; margin: 12px 0; font-style: italic;"
SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto"})


class Html(str):
    """Markup that is already safe to embed in a document."""


def escape(value: object) -> str:
    """Escape ``value`` unless it is already :class:`Html`."""

    if isinstance(value, Html):
        return value
    return html.escape("" if value is None else str(value), quote=True)


def join(fragments: Iterable[object]) -> Html:
    return Html("".join(escape(fragment) for fragment in fragments if fragment))


def safe_url(url: str) -> str:
    """Return ``url`` unless it uses a scheme other than http(s) or mailto."""

    try:
        scheme = urlsplit(url.strip()).scheme.lower()
    except ValueError:
        return "#"
    if scheme and scheme not in SAFE_URL_SCHEMES:
        return "#"
    return url.strip()


def strong(text: object) -> Html:
    return Html(f"<strong>{escape(text)}</strong>")


def link(url: str, label: object | None = None, *, style: str = LINK_STYLE) -> Html:
    return Html(
        f'<a href="{escape(safe_url(url))}" style="{style}">{escape(url if label is None else label)}</a>'
    )


def paragraph(*parts: object, style: str | None = None) -> Html:
    style_attr = f' style="{style}"' if style else ""
    return Html(f"<p{style_attr}>{join(parts)}</p>")


def note(*parts: object) -> Html:
    return Html(f'<p class="note">{join(parts)}</p>')


def has_value(value: object) -> bool:
    """Return ``True`` when ``value`` should be rendered."""

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def fact_box(
    facts: Sequence[tuple[str, object]],
    *,
    variant: BoxVariant = "info",
    title: str | None = None,
) -> Html:
    """Render label/value pairs inside a callout.

    Pairs whose value is missing are left out entirely, labels included.
    """

    rows = [
        f'<p class="info-label">{escape(label)}:</p><p class="info-value">{escape(value)}</p>'
        for label, value in facts
        if has_value(value)
    ]
    if not rows and title is None:
        return Html("")
    heading = f'<p style="{BOX_TITLE_STYLE}">{escape(title)}</p>' if title else ""
    return Html(f'<div class="{variant}-box">{heading}{"".join(rows)}</div>')


def quote_box(label: str, text: object, *, variant: BoxVariant = "info") -> Html:
    """Render a quoted free-text message, or nothing when ``text`` is empty."""

    if not has_value(text):
        return Html("")
    return Html(
        f'<div class="{variant}-box"><p class="info-label">{escape(label)}:</p>'
        f'<p style="{QUOTE_STYLE}">&quot;{escape(text)}&quot;</p></div>'
    )


def tips_box(
    title: str,
    items: Iterable[object],
    *,
    bullet: str = "•",
    variant: BoxVariant = "tips",
) -> Html:
    """Render a titled list; an empty ``items`` renders nothing."""

    rows = [f'<p class="tip-item">{escape(bullet)} {escape(item)}</p>' for item in items]
    if not rows:
        return Html("")
    return Html(
        f'<div class="{variant}-box"><p style="{BOX_TITLE_STYLE}">{escape(title)}</p>'
        f'{"".join(rows)}</div>'
    )


def highlight_box(*parts: object, variant: BoxVariant = "warning") -> Html:
    """Render a centered callout for a headline number or name."""

    return Html(f'<div class="{variant}-box" style="text-align: center;">{join(parts)}</div>')


def card(*parts: object) -> Html:
    return Html(f'<div class="card">{join(parts)}</div>')


def button(label: str, url: str) -> Html:
    return Html(f'<a href="{escape(safe_url(url))}" class="button">{escape(label)}</a>')


def format_number(value: float | int) -> str:
    """Render whole floats without a trailing ``.0``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_document(
    *,
    heading: object,
    greeting: str | None,
    blocks: Iterable[object],
    footer: object,
    hero_icon: str | None = None,
) -> str:
    """Assemble a complete, self-contained HTML email."""

    if hero_icon:
        header = (
            '<div style="text-align: center; margin-bottom: 24px;">'
            f'<div style="font-size: 72px; margin: 20px 0;">{escape(hero_icon)}</div>'
            f'<h1 style="margin: 0;">{escape(heading)}</h1></div>'
        )
    else:
        header = f"<h1>{escape(heading)}</h1>"
    greeting_html = paragraph(greeting) if greeting else ""
    body = join(blocks)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f"<head><meta charset=\"utf-8\"><style>{BASE_STYLES}</style></head>\n"
        "<body>\n"
        '  <div class="container">\n'
        f'    <div class="content">{header}{greeting_html}{body}</div>\n'
        f'    <div class="footer">{paragraph(footer)}{paragraph(COPYRIGHT_LINE)}</div>\n'
        "  </div>\n"
        "</body>\n"
        "</html>\n"
    )


def greet(name: str) -> str:
    return f"Hi {name},"


__all__ = [
    "BRAND_NAME",
    "Html",
    "button",
    "card",
    "escape",
    "fact_box",
    "format_number",
    "greet",
    "has_value",
    "highlight_box",
    "join",
    "link",
    "note",
    "paragraph",
    "quote_box",
    "render_document",
    "safe_url",
    "strong",
    "tips_box",
]
