"""Common literal values used across book_pages.

These constants keep template names and context values centralized so the
renderer, the built-in theme, and tests can import the same values without
drifting. Intended for internal use within the book_pages package.

Examples
--------
>>> from book_pages import _constants
>>> _constants.INDEX_TEMPLATE
'index'
>>> sorted(_constants.PLAYPEN_EDITOR_ASSETS)[0]
'ace_js'
"""

HTML_CONFIG_NAMESPACE = "output.html"

INDEX_TEMPLATE = "index"
HEADER_PARTIAL = "header"
INDEX_TEMPLATE_FILE = "index.jinja"
HEADER_PARTIAL_FILE = "header.jinja"

LANGUAGE = "en"
FAVICON = "favicon.ico"
SPACER = "_spacer_"

PLAYPEN_EDITOR_ASSETS: dict[str, str] = {
    "editor_js": "editor.js",
    "ace_js": "ace.js",
    "mode_rust_js": "mode-rust.js",
    "theme_dawn_js": "theme-dawn.js",
    "theme_tomorrow_night_js": "theme-tomorrow_night.js",
}
