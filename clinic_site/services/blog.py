"""
Blog Render Services

Reading time, slugs, and the markdown-to-HTML pipeline used for the public
article view and the admin preview.

Rendering is a fixed, ordered list of regex substitutions rather than a
parser. Order matters: later passes must not re-match HTML produced by
earlier ones. Raw HTML already present in the content is passed through
untouched.
"""

import math
import re

from markupsafe import escape

WORDS_PER_MINUTE = 200

PARAGRAPH_OPEN = '<p class="mb-4 leading-relaxed">'
PARAGRAPH_CLOSE = '</p>'

_UL_ITEM = 'ul-item'
_OL_ITEM = 'ol-item'

_FIGURE_MARKER = '\x00figure-%d\x00'

# (pattern, replacement) pairs, applied top to bottom
RENDER_PASSES = [
    # Code first so its body sits inside <pre>/<code> before other passes run
    (re.compile(r'```([^`]+)```'),
     r'<pre class="code-block"><code>\1</code></pre>'),
    (re.compile(r'`([^`\n]+)`'),
     r'<code class="inline-code">\1</code>'),
    # Headers, longest marker first
    (re.compile(r'^##### (.*)$', re.MULTILINE), r'<h5>\1</h5>'),
    (re.compile(r'^#### (.*)$', re.MULTILINE), r'<h4>\1</h4>'),
    (re.compile(r'^### (.*)$', re.MULTILINE), r'<h3>\1</h3>'),
    (re.compile(r'^## (.*)$', re.MULTILINE), r'<h2>\1</h2>'),
    (re.compile(r'^# (.*)$', re.MULTILINE), r'<h1>\1</h1>'),
    (re.compile(r'^> (.*)$', re.MULTILINE), r'<blockquote>\1</blockquote>'),
    # List markers before emphasis so a leading "* " is never read as italic
    (re.compile(r'^[*-] (.+)$', re.MULTILINE), rf'<li class="{_UL_ITEM}">\1</li>'),
    (re.compile(r'^\d+\. (.+)$', re.MULTILINE), rf'<li class="{_OL_ITEM}">\1</li>'),
    # Emphasis, strongest first
    (re.compile(r'\*\*\*([^*]+)\*\*\*'), r'<strong><em>\1</em></strong>'),
    (re.compile(r'\*\*([^*]+)\*\*'), r'<strong>\1</strong>'),
    (re.compile(r'\*([^*]+)\*'), r'<em>\1</em>'),
    # Images before links, the link pattern is a suffix of the image one
    (re.compile(r'!\[([^\]]*)\]\(([^)]+)\)'), r'<img src="\2" alt="\1" class="blog-image">'),
    (re.compile(r'\[([^\]]+)\]\(([^)]+)\)'), r'<a href="\2" target="_blank" rel="noopener">\1</a>'),
]

_LIST_RUNS = [
    (_UL_ITEM, '<ul class="blog-list">', '</ul>'),
    (_OL_ITEM, '<ol class="blog-list">', '</ol>'),
]


def word_count(content):
    return len((content or '').split())


def calculate_reading_time(content):
    """Minutes to read at 200 words per minute, never less than one."""
    return max(1, math.ceil(word_count(content) / WORDS_PER_MINUTE))


def slugify(title):
    slug = re.sub(r'[^a-z0-9]+', '-', (title or '').lower())
    return slug.strip('-')


def _image_snippet(image):
    alt = image.get('alt') or image.get('name') or ''
    html = f'<figure class="blog-figure"><img src="{image.get("base64") or ""}" alt="{escape(alt)}">'
    if image.get('caption'):
        html += f'<figcaption>{escape(image["caption"])}</figcaption>'
    return html + '</figure>'


def replace_image_placeholders(content, inline_images, substitute=None):
    """Swap ``{{image:<id>}}`` tokens for their figure markup.

    The editor inserts placeholders wrapped as ``![alt]({{image:<id>}})``;
    the wrapper is consumed along with the token. Unknown ids are left as
    literal text. When given, ``substitute(snippet)`` returns the text to
    insert instead of the snippet itself.
    """
    html = content
    for image in inline_images or []:
        image_id = image.get('id')
        if not image_id:
            continue
        snippet = _image_snippet(image)
        if substitute is not None:
            snippet = substitute(snippet)
        token = re.escape('{{image:%s}}' % image_id)
        html = re.sub(r'!\[[^\]]*\]\(' + token + r'\)', lambda _m: snippet, html)
        html = re.sub(token, lambda _m: snippet, html)
    return html


def _merge_list_items(html, item_class, open_tag, close_tag):
    item = rf'<li class="{item_class}">(?:(?!</li>).)*</li>'
    run = re.compile(rf'(?:{item}(?:<br>)*)+')

    def wrap(match):
        items = match.group(0).replace('<br>', '')
        return open_tag + items.replace(f' class="{item_class}"', '') + close_tag

    return run.sub(wrap, html)


def render_content(content, inline_images=None):
    """Render stored post content to HTML. Pure: same input, same output."""
    html = (content or '').replace('\r\n', '\n').replace('\x00', '')

    # Figures wait behind markers so no pass can touch their alt or caption
    figures = []

    def park(snippet):
        figures.append(snippet)
        return _FIGURE_MARKER % (len(figures) - 1)

    html = replace_image_placeholders(html, inline_images, park)

    for pattern, replacement in RENDER_PASSES:
        html = pattern.sub(replacement, html)

    html = html.replace('\n\n', PARAGRAPH_CLOSE + PARAGRAPH_OPEN).replace('\n', '<br>')
    html = PARAGRAPH_OPEN + html + PARAGRAPH_CLOSE

    for item_class, open_tag, close_tag in _LIST_RUNS:
        html = _merge_list_items(html, item_class, open_tag, close_tag)

    for index, figure in enumerate(figures):
        html = html.replace(_FIGURE_MARKER % index, figure)
    return html
