"""
Single page top-to-bottom layout cursor.
"""

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.content
import signoff_pdf.metrics
import signoff_pdf.records


ContentStream = sopdf.content.ContentStream
Box = sopdf.content.Box
GlyphWidthOracle = sopdf.metrics.GlyphWidthOracle
PageGeometry = sopdf.config.PageGeometry
Rgb = sopdf.content.Rgb

FONT_KEY_REGULAR = sopdf.config.FONT_KEY_REGULAR
FONT_KEY_BOLD = sopdf.config.FONT_KEY_BOLD
LABEL_SIZE = sopdf.config.LABEL_SIZE
VALUE_SIZE = sopdf.config.VALUE_SIZE
LINE_LEADING = sopdf.config.LINE_LEADING
FIELD_GAP = sopdf.config.FIELD_GAP
SECTION_SIZE = sopdf.config.SECTION_SIZE
TEXT_BLOCK_GAP = sopdf.config.TEXT_BLOCK_GAP
BULLET_INDENT = sopdf.config.BULLET_INDENT
BULLET_PREFIX = sopdf.config.BULLET_PREFIX
BULLET_CONTINUATION = sopdf.config.BULLET_CONTINUATION
BULLET_ITEM_GAP = sopdf.config.BULLET_ITEM_GAP
HEADING_COLOR = sopdf.config.HEADING_COLOR
LABEL_COLOR = sopdf.config.LABEL_COLOR
BODY_COLOR = sopdf.config.BODY_COLOR
BULLET_COLOR = sopdf.config.BULLET_COLOR
SIGNATURE_BOX_FILL = sopdf.config.SIGNATURE_BOX_FILL
SIGNATURE_BOX_STROKE = sopdf.config.SIGNATURE_BOX_STROKE
PLACEHOLDER_TEXT = sopdf.config.PLACEHOLDER_TEXT


class LayoutCursor:
	"""
	Track the vertical write position while emitting page content.

	The cursor starts at the top margin and only moves down the page, which
	in PDF space means decreasing y. There is no pagination: content that
	runs past the bottom margin is still emitted and flagged by overflowed.

	Attributes:
		content: ContentStream owned by this cursor.
		oracle: Width oracle used for wrapping.
		geometry: Page size and margin.
		cursor: Current y position in points.
		placeholder: Text shown for empty values.
	"""

	def __init__(
		self,
		oracle: GlyphWidthOracle,
		geometry: PageGeometry | None = None,
		placeholder: str = PLACEHOLDER_TEXT,
	):
		self.oracle = oracle
		self.geometry = geometry or PageGeometry()
		self.content = ContentStream()
		self.cursor = self.geometry.top
		self.placeholder = placeholder

	@property
	def margin(self) -> float:
		return self.geometry.margin

	@property
	def content_width(self) -> float:
		return self.geometry.content_width

	@property
	def overflowed(self) -> bool:
		return self.cursor < self.geometry.margin

	def move_down(self, amount: float) -> None:
		self.cursor -= amount

	def wrap(self, text: str, width: float, size: float, bold: bool) -> list[str]:
		return sopdf.metrics.wrap_text(text, width, size, bold, self.oracle)

	def line(
		self,
		text: str,
		size: float,
		bold: bool = False,
		color: Rgb = BODY_COLOR,
		x: float | None = None,
	) -> None:
		"""
		Drop the cursor by the font size and emit one line of text there.

		Args:
			text: Line text.
			size: Font size in points.
			bold: Whether the bold face is used.
			color: Fill color.
			x: Optional x position, defaults to the left margin.
		"""
		self.cursor -= size
		font_key = FONT_KEY_BOLD if bold else FONT_KEY_REGULAR
		left = self.margin if x is None else x
		self.content.text_line(text, left, self.cursor, font_key, size, color)

	def heading(self, text: str, size: float, gap_after: float) -> None:
		"""
		Emit a bold heading.

		Args:
			text: Heading text.
			size: Font size in points.
			gap_after: Space below the heading.
		"""
		self.line(text, size, bold=True, color=HEADING_COLOR)
		self.cursor -= gap_after

	def paragraph(
		self,
		text: str,
		size: float = VALUE_SIZE,
		bold: bool = False,
		color: Rgb = BODY_COLOR,
		last_gap: float = LINE_LEADING,
	) -> list[str]:
		"""
		Emit a wrapped paragraph.

		Args:
			text: Paragraph text.
			size: Font size in points.
			bold: Whether the bold face is used.
			color: Fill color.
			last_gap: Space below the last line instead of the leading.

		Returns:
			The wrapped lines.
		"""
		lines = self.wrap(text, self.content_width, size, bold)
		for index, line in enumerate(lines):
			self.line(line, size, bold=bold, color=color)
			if index == len(lines) - 1:
				self.cursor -= last_gap
			else:
				self.cursor -= LINE_LEADING
		return lines

	def label_value(self, label: str, value: str | None) -> list[str]:
		"""
		Emit an uppercase label followed by its wrapped value.

		Args:
			label: Field label.
			value: Field value, the placeholder is used when blank.

		Returns:
			The wrapped value lines.
		"""
		self.line(label.upper(), LABEL_SIZE, bold=True, color=LABEL_COLOR)
		self.cursor -= LINE_LEADING
		text = value if value and value.strip() else self.placeholder
		lines = self.paragraph(text)
		self.cursor -= FIELD_GAP
		return lines

	def text_block(self, title: str, value: str | None) -> list[str]:
		"""
		Emit a section heading followed by a wrapped free text block.

		Args:
			title: Block heading.
			value: Block text, the placeholder is used when blank.

		Returns:
			The wrapped lines.
		"""
		self.heading(title, SECTION_SIZE, TEXT_BLOCK_GAP)
		text = value if value and value.strip() else self.placeholder
		lines = self.paragraph(text)
		self.cursor -= FIELD_GAP
		return lines

	def bullet_list(self, items: tuple[str, ...] | list[str], size: float = VALUE_SIZE) -> int:
		"""
		Emit a bulleted list with hanging continuation lines.

		Args:
			items: Item texts in display order.
			size: Font size in points.

		Returns:
			Number of lines emitted.
		"""
		emitted = 0
		width = self.content_width - BULLET_INDENT
		for item in items:
			lines = self.wrap(item, width, size, False)
			for index, line in enumerate(lines):
				prefix = BULLET_PREFIX if index == 0 else BULLET_CONTINUATION
				self.line(f"{prefix}{line}", size, color=BULLET_COLOR)
				self.cursor -= LINE_LEADING
				emitted += 1
			self.cursor -= BULLET_ITEM_GAP
		return emitted

	def signature_box(
		self,
		strokes: sopdf.records.SignatureStrokes,
		dimensions: sopdf.records.SignatureDimensions,
		height: float,
	) -> Box:
		"""
		Emit a signature box hanging from the cursor with the ink inside it.

		Args:
			strokes: Signature strokes in capture space.
			dimensions: Capture area size in pixels.
			height: Box height in points.

		Returns:
			The box that was drawn.
		"""
		box = Box(
			x=self.margin,
			y=self.cursor - height,
			width=self.content_width,
			height=height,
		)
		self.content.rectangle(
			box.x,
			box.y,
			box.width,
			box.height,
			SIGNATURE_BOX_FILL,
			SIGNATURE_BOX_STROKE,
		)
		self.content.signature(strokes, dimensions, box)
		self.cursor = box.y
		return box

	def table_row(
		self,
		cells: list[str],
		widths: list[float],
		size: float,
		bold: bool = False,
		color: Rgb = BODY_COLOR,
		padding: float = 0.0,
	) -> int:
		"""
		Emit one table row with every cell wrapped to its column.

		Args:
			cells: Cell texts, left to right.
			widths: Column widths in points.
			size: Font size in points.
			bold: Whether the bold face is used.
			color: Fill color.
			padding: Space kept free at the right of each column.

		Returns:
			Number of lines the row occupies.
		"""
		font_key = FONT_KEY_BOLD if bold else FONT_KEY_REGULAR
		wrapped = [
			self.wrap(cell, max(width - padding, 1.0), size, bold)
			for cell, width in zip(cells, widths)
		]
		row_lines = max(len(lines) for lines in wrapped)
		for index in range(row_lines):
			self.cursor -= size
			x = self.margin
			for lines, width in zip(wrapped, widths):
				if index < len(lines) and lines[index]:
					self.content.text_line(lines[index], x, self.cursor, font_key, size, color)
				x += width
			self.cursor -= LINE_LEADING
		return row_lines

	def rule(self, height: float, color: Rgb) -> None:
		"""
		Emit a full width horizontal rule below the cursor.

		Args:
			height: Rule thickness in points.
			color: Rule color.
		"""
		self.content.rectangle(
			self.margin,
			self.cursor - height,
			self.content_width,
			height,
			color,
			color,
		)
		self.cursor -= height
