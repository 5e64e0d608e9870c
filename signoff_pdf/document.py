"""
Shared single page document engine used by every composer.
"""

# Standard Library
import dataclasses

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.content
import signoff_pdf.encoding
import signoff_pdf.images
import signoff_pdf.layout
import signoff_pdf.metrics
import signoff_pdf.pdf_objects
import signoff_pdf.records


GlyphWidthOracle = sopdf.metrics.GlyphWidthOracle
LayoutCursor = sopdf.layout.LayoutCursor
PageGeometry = sopdf.config.PageGeometry
PdfObjectGraph = sopdf.pdf_objects.PdfObjectGraph
StreamObject = sopdf.pdf_objects.StreamObject
ValueObject = sopdf.pdf_objects.ValueObject
ImageResource = sopdf.images.ImageResource
format_number = sopdf.content.format_number
reference = sopdf.pdf_objects.reference

DEFAULT_FONT_REGULAR = sopdf.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = sopdf.config.DEFAULT_FONT_BOLD
FONT_KEY_REGULAR = sopdf.config.FONT_KEY_REGULAR
FONT_KEY_BOLD = sopdf.config.FONT_KEY_BOLD
DEFAULT_BUSINESS_NAME = sopdf.config.DEFAULT_BUSINESS_NAME
BUSINESS_NAME_SIZE = sopdf.config.BUSINESS_NAME_SIZE
BUSINESS_NAME_GAP = sopdf.config.BUSINESS_NAME_GAP
SECTION_SIZE = sopdf.config.SECTION_SIZE
SIGNATURE_SECTION_GAP = sopdf.config.SIGNATURE_SECTION_GAP
SIGNATURE_HEADING_GAP = sopdf.config.SIGNATURE_HEADING_GAP
SIGNATURE_BOX_HEIGHT = sopdf.config.SIGNATURE_BOX_HEIGHT
SIGNATURE_BOX_GAP = sopdf.config.SIGNATURE_BOX_GAP
PLACEHOLDER_TEXT = sopdf.config.PLACEHOLDER_TEXT


@dataclasses.dataclass(frozen=True)
class LogoPlacement:
	resource: ImageResource
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class RenderedDocument:
	pdf_bytes: bytes
	object_count: int
	overflowed: bool

	@property
	def data_url(self) -> str:
		return sopdf.encoding.encode_data_url(self.pdf_bytes)


class SinglePageDocument:
	"""
	One page document with an optional logo and business name header.

	Composers drive the layout cursor between header() and finish().
	"""

	def __init__(
		self,
		business_name: str | None,
		logo: sopdf.records.BusinessLogo | None = None,
		oracle: GlyphWidthOracle | None = None,
		geometry: PageGeometry | None = None,
		placeholder: str = PLACEHOLDER_TEXT,
	):
		self.geometry = geometry or PageGeometry()
		self.business_name = (business_name or "").strip() or DEFAULT_BUSINESS_NAME
		self.layout = LayoutCursor(oracle or GlyphWidthOracle(), self.geometry, placeholder)
		self.logo = self._place_logo(logo) if logo is not None else None

	def _place_logo(self, logo: sopdf.records.BusinessLogo) -> LogoPlacement:
		resource = sopdf.images.build_image_object(logo)
		width, height = sopdf.images.fit_logo(resource.width_px, resource.height_px)
		return LogoPlacement(
			resource=resource,
			x=self.geometry.margin + self.geometry.content_width - width,
			y=self.geometry.top - height,
			width=width,
			height=height,
		)

	def header(self) -> None:
		"""
		Emit the logo and business name, leaving the cursor under both.
		"""
		layout = self.layout
		if self.logo is not None:
			layout.content.image(
				self.logo.resource.name,
				self.logo.x,
				self.logo.y,
				self.logo.width,
				self.logo.height,
			)
		layout.line(self.business_name, BUSINESS_NAME_SIZE, bold=True, color=sopdf.config.HEADING_COLOR)
		baseline = layout.cursor
		if self.logo is not None:
			baseline = min(baseline, self.logo.y)
		layout.cursor = baseline - BUSINESS_NAME_GAP

	def signature_section(
		self,
		title: str,
		strokes: sopdf.records.SignatureStrokes,
		dimensions: sopdf.records.SignatureDimensions,
	) -> sopdf.content.Box:
		"""
		Emit the signature heading and box, leaving room for signer fields.

		Args:
			title: Section heading.
			strokes: Signature strokes.
			dimensions: Capture area size.

		Returns:
			The signature box.
		"""
		layout = self.layout
		layout.move_down(SIGNATURE_SECTION_GAP)
		layout.heading(title, SECTION_SIZE, SIGNATURE_HEADING_GAP)
		box = layout.signature_box(strokes, dimensions, SIGNATURE_BOX_HEIGHT)
		layout.move_down(SIGNATURE_BOX_GAP)
		return box

	def build_objects(self) -> tuple[PdfObjectGraph, int]:
		"""
		Register fonts, logo, content, page, pages and catalog objects.

		Returns:
			Tuple of (graph, catalog object number).
		"""
		graph = PdfObjectGraph()
		font_regular = graph.add(ValueObject(font_dictionary(DEFAULT_FONT_REGULAR)))
		font_bold = graph.add(ValueObject(font_dictionary(DEFAULT_FONT_BOLD)))
		resources = [
			f"/Font << /{FONT_KEY_REGULAR} {reference(font_regular)} "
			f"/{FONT_KEY_BOLD} {reference(font_bold)} >>"
		]
		if self.logo is not None:
			logo_ref = graph.add(self.logo.resource.object)
			resources.append(f"/XObject << /{self.logo.resource.name} {reference(logo_ref)} >>")

		contents = graph.add(StreamObject(data=self.layout.content.to_bytes()))
		page = graph.reserve()
		pages = graph.reserve()
		media_box = f"[0 0 {format_number(self.geometry.width)} {format_number(self.geometry.height)}]"
		graph.set(
			page,
			ValueObject(
				f"<< /Type /Page /Parent {reference(pages)} /MediaBox {media_box} "
				f"/Resources << {' '.join(resources)} >> /Contents {reference(contents)} >>"
			),
		)
		graph.set(pages, ValueObject(f"<< /Type /Pages /Kids [{reference(page)}] /Count 1 >>"))
		catalog = graph.add(ValueObject(f"<< /Type /Catalog /Pages {reference(pages)} >>"))
		return graph, catalog

	def finish(self) -> RenderedDocument:
		graph, catalog = self.build_objects()
		return RenderedDocument(
			pdf_bytes=graph.to_bytes(catalog),
			object_count=len(graph),
			overflowed=self.layout.overflowed,
		)


#============================================
def font_dictionary(base_font: str) -> str:
	return f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} /Encoding /WinAnsiEncoding >>"
