"""
Glyph width measurement and greedy word wrapping.
"""

# Standard Library
import re

# PIP3 modules
import PIL.ImageFont
import reportlab.pdfbase.pdfmetrics

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config


DEFAULT_FONT_REGULAR = sopdf.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = sopdf.config.DEFAULT_FONT_BOLD
HEURISTIC_WIDTH_REGULAR = sopdf.config.HEURISTIC_WIDTH_REGULAR
HEURISTIC_WIDTH_BOLD = sopdf.config.HEURISTIC_WIDTH_BOLD
METRICS_BACKENDS = sopdf.config.METRICS_BACKENDS
DEFAULT_METRICS_BACKEND = sopdf.config.DEFAULT_METRICS_BACKEND

PARAGRAPH_SPLIT = re.compile(r"\r?\n")


#============================================
def heuristic_width(text: str, font_size: float, bold: bool) -> float:
	"""
	Approximate a rendered width from the character count.

	Args:
		text: Text to measure.
		font_size: Font size in points.
		bold: Whether the bold face is used.

	Returns:
		Width in points.
	"""
	factor = HEURISTIC_WIDTH_BOLD if bold else HEURISTIC_WIDTH_REGULAR
	return len(text) * font_size * factor


class GlyphWidthOracle:
	"""
	Measure text widths in points for the regular and bold faces.

	The reportlab backend reads the standard Type1 AFM metrics, which are
	already expressed in points. The truetype backend measures with Pillow in
	pixels and converts with the 72/96 ratio. Whenever a backend cannot answer
	the character count heuristic is used instead.
	"""

	def __init__(
		self,
		backend: str = DEFAULT_METRICS_BACKEND,
		font_regular: str = DEFAULT_FONT_REGULAR,
		font_bold: str = DEFAULT_FONT_BOLD,
		regular_font_path: str | None = None,
		bold_font_path: str | None = None,
	):
		if backend not in METRICS_BACKENDS:
			raise ValueError(f"Unknown metrics backend: {backend}")
		self.backend = backend
		self.font_regular = font_regular
		self.font_bold = font_bold
		self.regular_font_path = regular_font_path
		self.bold_font_path = bold_font_path or regular_font_path
		self._truetype_cache: dict[tuple[bool, float], PIL.ImageFont.FreeTypeFont | None] = {}

	def measure(self, text: str, font_size: float, bold: bool = False) -> float:
		"""
		Measure a single line of text.

		Args:
			text: Text to measure.
			font_size: Font size in points.
			bold: Whether the bold face is used.

		Returns:
			Width in points, never 0 for non-empty text.
		"""
		if not text:
			return 0.0
		width = None
		if self.backend == "reportlab":
			width = self._measure_reportlab(text, font_size, bold)
		elif self.backend == "truetype":
			width = self._measure_truetype(text, font_size, bold)
		if width is None or width <= 0.0:
			width = heuristic_width(text, font_size, bold)
		return width

	def _measure_reportlab(self, text: str, font_size: float, bold: bool) -> float | None:
		font_name = self.font_bold if bold else self.font_regular
		try:
			return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)
		except KeyError:
			# font name not registered with reportlab
			return None

	def _measure_truetype(self, text: str, font_size: float, bold: bool) -> float | None:
		pixel_size = sopdf.config.points_to_pixels(font_size)
		key = (bold, pixel_size)
		if key not in self._truetype_cache:
			self._truetype_cache[key] = self._load_truetype(bold, pixel_size)
		font = self._truetype_cache[key]
		if font is None:
			return None
		return sopdf.config.pixels_to_points(font.getlength(text))

	def _load_truetype(self, bold: bool, pixel_size: float) -> PIL.ImageFont.FreeTypeFont | None:
		path = self.bold_font_path if bold else self.regular_font_path
		if not path:
			return None
		try:
			return PIL.ImageFont.truetype(path, pixel_size)
		except OSError:
			return None


#============================================
def wrap_text(
	text: str,
	max_width: float,
	font_size: float,
	bold: bool,
	oracle: GlyphWidthOracle,
) -> list[str]:
	"""
	Greedy word wrap of one or more newline separated paragraphs.

	Args:
		text: Input text.
		max_width: Maximum line width in points.
		font_size: Font size in points.
		bold: Whether the bold face is used.
		oracle: Width oracle.

	Returns:
		Wrapped lines. Blank paragraphs yield an empty line and a word wider
		than max_width is kept whole on its own line.
	"""
	lines: list[str] = []
	for paragraph in PARAGRAPH_SPLIT.split(text):
		words = paragraph.split()
		if not words:
			lines.append("")
			continue
		current = words[0]
		for word in words[1:]:
			candidate = f"{current} {word}"
			if oracle.measure(candidate, font_size, bold) <= max_width:
				current = candidate
			else:
				lines.append(current)
				current = word
		lines.append(current)
	return lines
