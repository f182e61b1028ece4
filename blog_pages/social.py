"""Build social share-card image URLs for rendered posts.

The ``social`` template filter turns a post title and description into a
Cloudinary URL that overlays both strings onto the ``social-share-card`` base
image. Nothing is fetched while building the URL: Cloudinary renders the card
lazily the first time a crawler requests it, so the filter stays a pure string
function that can run once per template render.

Examples
--------
>>> from blog_pages.social import social
>>> url = social("Hello World", "A test post")
>>> url.startswith("https://res.cloudinary.com/mslooten/image/upload/")
True
>>> "Hello%20World" in url
True
"""

from __future__ import annotations

import dataclasses as dc
import re
from urllib.parse import quote

from ._constants import (
    CLOUDINARY_BASE_URL,
    SOCIAL_CLOUD_NAME,
    SOCIAL_IMAGE_HEIGHT,
    SOCIAL_IMAGE_PUBLIC_ID,
    SOCIAL_IMAGE_WIDTH,
    SOCIAL_TAGLINE_FONT,
    SOCIAL_TAGLINE_FONT_SIZE,
    SOCIAL_TAGLINE_TOP_OFFSET,
    SOCIAL_TEXT_AREA_WIDTH,
    SOCIAL_TEXT_COLOR,
    SOCIAL_TEXT_LEFT_OFFSET,
    SOCIAL_TITLE_BOTTOM_OFFSET,
    SOCIAL_TITLE_EXTRA_CONFIG,
    SOCIAL_TITLE_FONT,
    SOCIAL_TITLE_FONT_SIZE,
)

# Characters Cloudinary treats as transformation delimiters even when
# percent-encoded once.
_DOUBLE_ENCODE_PATTERN = re.compile(r"%(23|2C|2F|3F|5C)")
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dc.dataclass(frozen=True, slots=True)
class ShareCardSpec:
    """Fixed layout of the share card; only the text varies per post."""

    cloud_name: str = SOCIAL_CLOUD_NAME
    image_public_id: str = SOCIAL_IMAGE_PUBLIC_ID
    title_font: str = SOCIAL_TITLE_FONT
    title_font_size: int = SOCIAL_TITLE_FONT_SIZE
    title_extra_config: str = SOCIAL_TITLE_EXTRA_CONFIG
    tagline_font: str = SOCIAL_TAGLINE_FONT
    tagline_font_size: int = SOCIAL_TAGLINE_FONT_SIZE
    text_color: str = SOCIAL_TEXT_COLOR
    image_width: int = SOCIAL_IMAGE_WIDTH
    image_height: int = SOCIAL_IMAGE_HEIGHT
    text_area_width: int = SOCIAL_TEXT_AREA_WIDTH
    text_left_offset: int = SOCIAL_TEXT_LEFT_OFFSET
    title_bottom_offset: int = SOCIAL_TITLE_BOTTOM_OFFSET
    tagline_top_offset: int = SOCIAL_TAGLINE_TOP_OFFSET

    def build_url(self, title: str, tagline: str) -> str:
        """Return the Cloudinary URL rendering ``title`` and ``tagline``.

        Parameters
        ----------
        title : str
            Headline drawn above the baseline in the title font.
        tagline : str
            Secondary line drawn below the title in the tagline font.

        Returns
        -------
        str
            Deterministic URL; identical arguments always yield identical
            output.
        """
        image_config = ",".join(
            [
                f"w_{self.image_width}",
                f"h_{self.image_height}",
                "c_fill",
                "q_auto",
                "f_auto",
            ]
        )
        title_config = ",".join(
            [
                f"w_{self.text_area_width}",
                "c_fit",
                f"co_rgb:{self.text_color}",
                "g_south_west",
                f"x_{self.text_left_offset}",
                f"y_{self.title_bottom_offset}",
                (
                    f"l_text:{_encode_font(self.title_font)}_{self.title_font_size}"
                    f"{self.title_extra_config}:{_clean_text(title)}"
                ),
            ]
        )
        tagline_config = ",".join(
            [
                f"w_{self.text_area_width}",
                "c_fit",
                f"co_rgb:{self.text_color}",
                "g_north_west",
                f"x_{self.text_left_offset}",
                f"y_{self.tagline_top_offset}",
                (
                    f"l_text:{_encode_font(self.tagline_font)}_"
                    f"{self.tagline_font_size}:{_clean_text(tagline)}"
                ),
            ]
        )
        segments = [
            CLOUDINARY_BASE_URL,
            self.cloud_name,
            "image",
            "upload",
            image_config,
            title_config,
            tagline_config,
            self.image_public_id,
        ]
        return "/".join(segments)


DEFAULT_SHARE_CARD = ShareCardSpec()


def social(title: str, description: str) -> str:
    """Return the share-card URL for a post ``title`` and ``description``."""
    return DEFAULT_SHARE_CARD.build_url(title, description)


def _clean_text(text: str) -> str:
    """Percent-encode overlay text, double-encoding Cloudinary delimiters."""
    encoded = quote(text, safe=_URI_COMPONENT_SAFE)
    return _DOUBLE_ENCODE_PATTERN.sub(r"%25\1", encoded)


def _encode_font(font: str) -> str:
    return quote(font, safe="")


__all__ = ["DEFAULT_SHARE_CARD", "ShareCardSpec", "social"]
