"""
XLIFF constants and the built-in classification tables.

The tables mirror the WPML export of the hostel site: content-type tags come
from the `unit` extradata entry (or the trans-unit resname) and route a unit to
one of the three translation strategies.
"""

# Metadata hints outside the content-type tables
SEO_PURPOSE_MARKER = "seo_"
SEO_GROUP = "Yoast SEO"

BRAND_VOICE_CONTENT_TYPES = (
    "Paragraph",
    "Heading (H2)",
    "Heading (H3)",
    "Hostel Content",
    "Hostel Services",
    "Hostel Feature Description",
    "Hostel Services Description H4",
    "excerpt",
    "Yoast Faq Block",
)

METADATA_CONTENT_TYPES = (
    "Meta Description",
    "Focus Keyword",
    "Twitter Title",
    "Twitter Description",
    "Opengraph Description",
    "Opengraph Title",
    "JSON LD",
    "Title",
    "Alt Text",
    "category",
    "post_tag",
)

# "Email" stays out of this list: mailbox fields are caught by the email pattern
NON_TRANSLATABLE_CONTENT_TYPES = (
    "URL",
    "Map IFrame",
    "Hostel Map IFrame",
    "Hostel Slug",
    "Hostel Email",
    "Hostel Number",
    "Hostel Number Url",
    "Hostel Address Url",
    "Hostel City POSTAL CODE",
    "Hostel Header Video",
    "Html",
    "Hostel Name",
    "Hostel Island",
    "Hostel Address 1",
    "Hostel City",
)

NON_TRANSLATABLE_EXACT_MATCHES = (
    "duque-nest",
    "Duque Nest",
    "nestshostels.cloudbeds.com",
    "Tenerife",
    "Teneriffa",
    "Costa Adeje",
    "Playa del Duque",
    "Santa Cruz de Tenerife",
    "duquenesthostel@gmail.com",
    "+34 655 01 20 55",
    "+34 670 01 20 55",
    "38660",
    "38679",
    "ES",
    "EUR",
    "Mo-Su 08:00-23:00",
    "13:00:00",
    "10:30:00",
    "NEST PASS",
    "Nests Hostels",
    "Medano Nest",
)

# Whole-value patterns, checked in this order
NON_TRANSLATABLE_PATTERNS = {
    "url": r"^https?://",
    "email": r"^[^\s@]+@[^\s@]+\.[^\s@]+$",
    "shortcode": r"^\[[\w_-]+.*\]$",
    "phone": r"^\+?\d[\d\s-]{8,}$",
    "coordinate": r"^-?\d+\.\d+$",
    "json_ld": r"^\s*\{\s*\"@context\"",
    "iframe": r"(?is)<iframe.*</iframe>",
    "postal_code": r"^\d{5}(-\d{4})?$",
    "youtube_url": r"youtube\.be/|youtu\.be/",
    "whatsapp_url": r"wa\.me/",
    "google_maps": r"google\.com/maps/embed",
    "wordpress_comment": r"(?s)<!--.*-->",
}

# Markup/code fragments anywhere in the value
NON_TRANSLATABLE_CONTENT_PATTERNS = {
    "gutenberg_comment": r"<!-- /wp:",
    "cdata_section": r"(?s)<!\[CDATA\[.*\]\]>",
    "html_entity": r"&[a-zA-Z]+;",
    "css_style": r"(?i)style\s*=\s*[\"'].*[\"']",
    "html_attributes": r"(?i)(width|height|src|href|alt|title)\s*=\s*[\"'].*[\"']",
}
