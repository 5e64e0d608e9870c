"""
Content stream drawing primitives.
"""

# Standard Library
import dataclasses
import math
import unicodedata

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.records


TEXT_ENCODING = sopdf.config.TEXT_ENCODING
SIGNATURE_INK_COLOR = sopdf.config.SIGNATURE_INK_COLOR
SIGNATURE_LINE_WIDTH = sopdf.config.SIGNATURE_LINE_WIDTH
SIGNATURE_PADDING = sopdf.config.SIGNATURE_PADDING

Rgb = tuple[float, float, float]


@dataclasses.dataclass(frozen=True)
class Box:
	x: float
	y: float
	width: float
	height: float


#============================================
def format_number(value: float) -> str:
	"""
	Format a number for the content stream.

	Args:
		value: Numeric value.

	Returns:
		"0" near zero, otherwise two decimals without a trailing ".00".
	"""
	if not math.isfinite(value):
		raise ValueError(f"Cannot write non-finite number {value!r} to a content stream")
	if abs(value) < 1e-6:
		return "0"
	fixed = f"{value:.2f}"
	if fixed.endswith(".00"):
		return fixed[:-3]
	return fixed


#============================================
def format_color(color: Rgb) -> str:
	"""
	Format an RGB triple.

	Args:
		color: Color channels in 0.0-1.0 range.

	Returns:
		Space separated channel values.
	"""
	return " ".join(format_number(channel) for channel in color)


#============================================
def normalize_pdf_text(value: str) -> str:
	"""
	Fold text into the WinAnsi repertoire of the standard fonts.

	Args:
		value: Input text.

	Returns:
		Text encodable as cp1252.
	"""
	result: list[str] = []
	for char in value:
		try:
			char.encode(TEXT_ENCODING)
			result.append(char)
			continue
		except UnicodeEncodeError:
			pass
		if char.isspace():
			result.append(" ")
			continue
		decomposed = unicodedata.normalize("NFKD", char)
		folded = decomposed.encode(TEXT_ENCODING, "ignore").decode(TEXT_ENCODING)
		result.append(folded or "?")
	return "".join(result)


#============================================
def escape_pdf_text(text: str) -> str:
	"""
	Escape text for a PDF literal string.

	Args:
		text: Raw text.

	Returns:
		Escaped text safe inside parentheses.
	"""
	escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
	return escaped.replace("\r", "\\r").replace("\n", "\\n")


class ContentStream:
	"""
	Single writer for one page's drawing instructions.
	"""

	def __init__(self):
		self._parts: list[str] = []

	def text_line(
		self,
		text: str,
		x: float,
		y: float,
		font_key: str,
		font_size: float,
		color: Rgb,
	) -> None:
		"""
		Show one line of text at a baseline position.

		Args:
			text: Text to show.
			x: Baseline x in points.
			y: Baseline y in points.
			font_key: Font resource key (F1 regular, F2 bold).
			font_size: Font size in points.
			color: Fill color.
		"""
		escaped = escape_pdf_text(normalize_pdf_text(text))
		self._parts.append(
			f"BT\n/{font_key} {format_number(font_size)} Tf\n"
			f"{format_color(color)} rg\n"
			f"1 0 0 1 {format_number(x)} {format_number(y)} Tm\n"
			f"({escaped}) Tj\nET\n"
		)

	def rectangle(
		self,
		x: float,
		y: float,
		width: float,
		height: float,
		fill: Rgb,
		stroke: Rgb,
	) -> None:
		"""
		Draw a filled and stroked rectangle.

		Args:
			x: Lower left x.
			y: Lower left y.
			width: Rectangle width.
			height: Rectangle height.
			fill: Fill color.
			stroke: Stroke color.
		"""
		self._parts.append(f"{format_color(fill)} rg\n")
		self._parts.append(f"{format_color(stroke)} RG\n1 w\n")
		self._parts.append(
			f"{format_number(x)} {format_number(y)} "
			f"{format_number(width)} {format_number(height)} re B\n"
		)

	def signature(
		self,
		strokes: sopdf.records.SignatureStrokes,
		dimensions: sopdf.records.SignatureDimensions,
		box: Box,
		padding: float = SIGNATURE_PADDING,
	) -> int:
		"""
		Draw signature ink scaled from capture pixels into a box.

		The capture area is scaled uniformly to fit the padded box, centered,
		and flipped from a top-left to a bottom-left origin.

		Args:
			strokes: Recorded strokes in capture space.
			dimensions: Capture area size in pixels.
			box: Destination box in points.
			padding: Inner padding in points.

		Returns:
			Number of strokes drawn.
		"""
		if not strokes or dimensions.width <= 0 or dimensions.height <= 0:
			return 0

		available_width = max(box.width - padding * 2.0, 1.0)
		available_height = max(box.height - padding * 2.0, 1.0)
		scale = min(available_width / dimensions.width, available_height / dimensions.height)
		offset_x = box.x + padding + (available_width - dimensions.width * scale) / 2.0
		offset_y = box.y + padding + (available_height - dimensions.height * scale) / 2.0

		def transform(point: sopdf.records.SignaturePoint) -> str:
			x = offset_x + point.x * scale
			y = offset_y + (dimensions.height - point.y) * scale
			return f"{format_number(x)} {format_number(y)}"

		self._parts.append(
			f"{format_color(SIGNATURE_INK_COLOR)} RG\n{format_number(SIGNATURE_LINE_WIDTH)} w\n"
		)
		drawn = 0
		for stroke in strokes:
			if not stroke or len(stroke) < 2:
				continue
			self._parts.append(f"{transform(stroke[0])} m\n")
			for point in stroke[1:]:
				self._parts.append(f"{transform(point)} l\n")
			self._parts.append("S\n")
			drawn += 1
		return drawn

	def image(self, name: str, x: float, y: float, width: float, height: float) -> None:
		"""
		Place an image XObject.

		Args:
			name: XObject resource name.
			x: Lower left x.
			y: Lower left y.
			width: Draw width in points.
			height: Draw height in points.
		"""
		self._parts.append(
			f"q {format_number(width)} 0 0 {format_number(height)} "
			f"{format_number(x)} {format_number(y)} cm /{name} Do Q\n"
		)

	def text(self) -> str:
		return "".join(self._parts)

	def to_bytes(self) -> bytes:
		return self.text().encode(TEXT_ENCODING)
