"""Common literal values used across blog_pages.

These constants keep the share-card parameters, the rendering engine table,
and output naming centralized so the filters, generators, and tests can import
the same values without drifting. Intended for internal use within the
blog_pages package.

Examples
--------
>>> from blog_pages import _constants
>>> _constants.SOCIAL_CLOUD_NAME
'mslooten'
>>> sorted(_constants.RENDERED_FORMATS)
['html', 'jinja', 'md', 'njk']
"""

CLOUDINARY_BASE_URL = "https://res.cloudinary.com"

SOCIAL_CLOUD_NAME = "mslooten"
SOCIAL_IMAGE_PUBLIC_ID = "social-share-card"
SOCIAL_TITLE_FONT = "Open Sans"
SOCIAL_TITLE_EXTRA_CONFIG = "_bold"
SOCIAL_TITLE_FONT_SIZE = 64
SOCIAL_TAGLINE_FONT = "Open Sans"
SOCIAL_TAGLINE_FONT_SIZE = 36
SOCIAL_TEXT_COLOR = "4a5568"
SOCIAL_IMAGE_WIDTH = 1280
SOCIAL_IMAGE_HEIGHT = 669
SOCIAL_TEXT_AREA_WIDTH = 760
SOCIAL_TEXT_LEFT_OFFSET = 480
SOCIAL_TITLE_BOTTOM_OFFSET = 254
SOCIAL_TAGLINE_TOP_OFFSET = 445

RENDERED_FORMATS = frozenset({"md", "njk", "html", "jinja"})
DEFAULT_TEMPLATE_FORMATS = ("md", "njk", "html")

DEFAULT_INPUT_DIR = "."
DEFAULT_OUTPUT_DIR = "_site"
DEFAULT_INCLUDES_DIR = "_includes"

# Directories never scanned for templates or matched by glob passthrough rules.
IGNORED_DIRECTORIES = frozenset({"node_modules"})
