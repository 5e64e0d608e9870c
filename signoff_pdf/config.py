"""
Shared configuration and constants.
"""

import dataclasses


POINTS_PER_INCH = 72.0
PIXELS_PER_INCH = 96.0

# A4 portrait in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
PAGE_MARGIN = 48.0

PDF_HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
PDF_MIME_TYPE = "application/pdf"
TEXT_ENCODING = "cp1252"

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
FONT_KEY_REGULAR = "F1"
FONT_KEY_BOLD = "F2"

HEURISTIC_WIDTH_REGULAR = 0.60
HEURISTIC_WIDTH_BOLD = 0.62
METRICS_BACKENDS = ("reportlab", "truetype", "heuristic")
DEFAULT_METRICS_BACKEND = "reportlab"

BUSINESS_NAME_SIZE = 18.0
BUSINESS_NAME_GAP = 12.0
TITLE_SIZE = 24.0
TITLE_GAP = 24.0
SECTION_SIZE = 16.0
SECTION_GAP = 16.0
TEXT_BLOCK_GAP = 12.0
LABEL_SIZE = 11.0
VALUE_SIZE = 12.0
LINE_LEADING = 4.0
FIELD_GAP = 8.0
STATEMENT_TITLE_SIZE = 13.0
STATEMENT_TITLE_GAP = 10.0
STATEMENT_BODY_GAP = 16.0
BULLET_INDENT = 18.0
BULLET_PREFIX = "• "
BULLET_CONTINUATION = "  "
BULLET_ITEM_GAP = 4.0
SIGNATURE_SECTION_GAP = 12.0
SIGNATURE_HEADING_GAP = 20.0
SIGNATURE_BOX_HEIGHT = 120.0
SIGNATURE_BOX_GAP = 24.0
SIGNATURE_PADDING = 12.0
SIGNATURE_LINE_WIDTH = 1.5
TABLE_HEADER_SIZE = 10.0
TABLE_CELL_SIZE = 10.0
TABLE_CELL_PADDING = 6.0
TABLE_RULE_HEIGHT = 0.5

HEADING_COLOR = (0.1, 0.13, 0.2)
LABEL_COLOR = (0.4, 0.45, 0.55)
BODY_COLOR = (0.1, 0.13, 0.2)
ACCENT_COLOR = (0.15, 0.18, 0.26)
BULLET_COLOR = (0.3, 0.2, 0.2)
SIGNATURE_INK_COLOR = (0.07, 0.07, 0.07)
SIGNATURE_BOX_FILL = (0.96, 0.97, 0.99)
SIGNATURE_BOX_STROKE = (0.8, 0.82, 0.86)
TABLE_RULE_COLOR = (0.8, 0.82, 0.86)

LOGO_RESOURCE_NAME = "Im1"
LOGO_MIME_TYPE = "image/jpeg"
LOGO_MAX_WIDTH = 240.0 / PIXELS_PER_INCH * POINTS_PER_INCH
LOGO_MAX_HEIGHT = 120.0 / PIXELS_PER_INCH * POINTS_PER_INCH

DEFAULT_BUSINESS_NAME = "CustomerProjectDB"
PLACEHOLDER_TEXT = "Not provided"
EMPTY_VALUE_TEXT = "—"
EMPTY_TABLE_TEXT = "No items recorded"

# Part Number, Qty, Description, Designations
BOM_COLUMN_FRACTIONS = (0.22, 0.1, 0.43, 0.25)


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	width: float = PAGE_WIDTH
	height: float = PAGE_HEIGHT
	margin: float = PAGE_MARGIN

	@property
	def content_width(self) -> float:
		return self.width - self.margin * 2.0

	@property
	def top(self) -> float:
		return self.height - self.margin


#============================================
def pixels_to_points(value: float) -> float:
	"""
	Convert CSS pixels to points.

	Args:
		value: Pixel value.

	Returns:
		Points value.
	"""
	return value / PIXELS_PER_INCH * POINTS_PER_INCH


#============================================
def points_to_pixels(value: float) -> float:
	"""
	Convert points to CSS pixels.

	Args:
		value: Points value.

	Returns:
		Pixel value.
	"""
	return value / POINTS_PER_INCH * PIXELS_PER_INCH
