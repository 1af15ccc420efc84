"""Default sanitization policy.

The default follows what GitHub allows in user content: prose markup,
lists, tables, links and images, no scripts, no styles, no event handlers,
ids and names prefixed against DOM clobbering.

This module is data only. It is versioned separately from the cleaner so
that policy changes never touch the algorithm; build variations with
``DEFAULT_SCHEMA.extend()`` rather than editing it.

Thread Safety:
DEFAULT_SCHEMA is built once at import and is immutable.
"""

from sanitree.schema import Schema

SCHEMA_VERSION = "github-2016"

DEFAULT_SCHEMA: Schema = Schema(
    tag_names=[
        # Headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # Text formatting
        "br",
        "b",
        "i",
        "strong",
        "em",
        "tt",
        "ins",
        "del",
        "sup",
        "sub",
        "kbd",
        "q",
        "samp",
        "var",
        "s",
        "strike",
        # Links and images
        "a",
        "img",
        # Blocks
        "pre",
        "code",
        "div",
        "p",
        "blockquote",
        "hr",
        # Lists
        "ol",
        "ul",
        "li",
        "dl",
        "dt",
        "dd",
        # Tables
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "td",
        "th",
        # Ruby annotations
        "ruby",
        "rt",
        "rp",
        # Disclosure
        "summary",
        "details",
        # Task list checkboxes
        "input",
    ],
    attributes={
        "a": ["href"],
        "img": ["src", "longDesc"],
        "div": ["itemScope", "itemType"],
        "blockquote": ["cite"],
        "del": ["cite"],
        "ins": ["cite"],
        "q": ["cite"],
        "*": [
            "abbr",
            "accept",
            "acceptCharset",
            "accessKey",
            "action",
            "align",
            "alt",
            "axis",
            "border",
            "cellPadding",
            "cellSpacing",
            "char",
            "charOff",
            "charSet",
            "checked",
            "clear",
            "cols",
            "colSpan",
            "color",
            "compact",
            "coords",
            "dateTime",
            "dir",
            "disabled",
            "encType",
            "htmlFor",
            "frame",
            "headers",
            "height",
            "hrefLang",
            "hSpace",
            "isMap",
            "id",
            "label",
            "lang",
            "maxLength",
            "media",
            "method",
            "multiple",
            "name",
            "noHref",
            "noShade",
            "noWrap",
            "open",
            "prompt",
            "readOnly",
            "rel",
            "rev",
            "rows",
            "rowSpan",
            "rules",
            "scope",
            "selected",
            "shape",
            "size",
            "span",
            "start",
            "summary",
            "tabIndex",
            "target",
            "title",
            "type",
            "useMap",
            "vAlign",
            "value",
            "vSpace",
            "width",
            "itemProp",
        ],
    },
    protocols={
        "href": ["http", "https", "mailto"],
        "cite": ["http", "https"],
        "src": ["http", "https"],
        "longDesc": ["http", "https"],
    },
    ancestors={
        "li": ["ol", "ul"],
        "tbody": ["table"],
        "tfoot": ["table"],
        "thead": ["table"],
        "td": ["table"],
        "th": ["table"],
        "tr": ["table"],
    },
    clobber=["name", "id"],
    clobber_prefix="user-content-",
    strip=["script"],
)

# Alias naming the policy the default is modeled on
GITHUB_SCHEMA: Schema = DEFAULT_SCHEMA
