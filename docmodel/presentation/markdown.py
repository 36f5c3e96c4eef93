"""
Markdown - Display parts to renderable markdown or HTML fragments

Used by themes when rendering comment text. Link tags whose target is a
reflection are resolved to a URL through the caller's `url_to`; string
targets are used verbatim. Targets that never bound to a reflection
(ReflectionSymbolId) were already given up on during resolution and render
as plain text.

Relative links are rewritten by the rendering pipeline, not here, so they
produce no output.

Usage:
    md = display_parts_to_markdown(comment.summary, router.url_to, config=config.markdown)
"""

from typing import List, Callable, Optional, TYPE_CHECKING

from ..errors import SerializationError
from ..models.comments import CommentDisplayPart, TextPart, CodePart, InlineTagPart, RelativeLinkPart
from ..models.kind import ReflectionKind
from ..models.reflections import Reflection

if TYPE_CHECKING:
    from ..config import MarkdownConfig


LINK_TAGS = ("@link", "@linkcode", "@linkplain")

# Consumed while building the model; never rendered
HIDDEN_INLINE_TAGS = ("@label", "@inheritdoc")


def display_parts_to_markdown(
    parts: List[CommentDisplayPart],
    url_to: Callable[[Reflection], str],
    use_html: Optional[bool] = None,
    config: Optional['MarkdownConfig'] = None
) -> str:
    """
    Render parts to a markdown string.

    Args:
        parts: Summary or tag content
        url_to: Resolves a reflection to its page URL
        use_html: Emit `<a>` links carrying the target's kind class
                  instead of markdown links (default: config.use_html)
        config: The `markdown` config section

    Returns:
        Markdown text, suitable for a markdown renderer
    """
    if use_html is None:
        use_html = config.use_html if config else False

    result = []

    for part in parts:
        if isinstance(part, (TextPart, CodePart)):
            result.append(part.text)
        elif isinstance(part, InlineTagPart):
            result.append(_render_inline_tag(part, url_to, use_html))
        elif isinstance(part, RelativeLinkPart):
            continue
        else:
            raise SerializationError(f"Unknown display part: {part!r}")

    return "".join(result)


def _render_inline_tag(
    part: InlineTagPart,
    url_to: Callable[[Reflection], str],
    use_html: bool
) -> str:
    if part.tag in HIDDEN_INLINE_TAGS:
        return ""

    if part.tag not in LINK_TAGS:
        return f"{{{part.tag} {part.text}}}"

    if not part.target:
        return part.text

    url: Optional[str] = None
    kind_class: Optional[str] = None
    if isinstance(part.target, str):
        url = part.target
    elif isinstance(part.target, Reflection):
        url = url_to(part.target)
        kind_class = ReflectionKind.class_string(part.target.kind)

    if use_html:
        text = f"<code>{part.text}</code>" if part.tag == "@linkcode" else part.text
        if not url:
            return part.text
        class_attr = f' class="{kind_class}"' if kind_class else ""
        return f'<a href="{url}"{class_attr}>{text}</a>'

    text = f"`{part.text}`" if part.tag == "@linkcode" else part.text
    return f"[{text}]({url})" if url else text
