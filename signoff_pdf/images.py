"""
JPEG logo packaging as PDF image XObjects.
"""

# Standard Library
import dataclasses
import io

# PIP3 modules
import PIL.Image

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.encoding
import signoff_pdf.errors
import signoff_pdf.pdf_objects
import signoff_pdf.records


BusinessLogo = sopdf.records.BusinessLogo
StreamObject = sopdf.pdf_objects.StreamObject
UnsupportedImageFormatError = sopdf.errors.UnsupportedImageFormatError

LOGO_MIME_TYPE = sopdf.config.LOGO_MIME_TYPE
LOGO_RESOURCE_NAME = sopdf.config.LOGO_RESOURCE_NAME
LOGO_MAX_WIDTH = sopdf.config.LOGO_MAX_WIDTH
LOGO_MAX_HEIGHT = sopdf.config.LOGO_MAX_HEIGHT

COLOR_SPACES = {
	"L": "/DeviceGray",
	"RGB": "/DeviceRGB",
	"CMYK": "/DeviceCMYK",
}
INVERTED_CMYK_DECODE = "1 0 1 0 1 0 1 0"


@dataclasses.dataclass(frozen=True)
class ImageResource:
	object: StreamObject
	name: str
	width_px: int
	height_px: int


#============================================
def read_jpeg_header(data: bytes) -> tuple[int, int, str, bool]:
	"""
	Read the pixel size and color space of JPEG bytes.

	CMYK data carrying an Adobe APP14 marker is stored inverted, which is
	how Pillow and Photoshop write it.

	Args:
		data: Encoded image bytes.

	Returns:
		Tuple of (width, height, color_space, inverted).
	"""
	try:
		with PIL.Image.open(io.BytesIO(data)) as image:
			image_format = image.format
			width, height = image.size
			mode = image.mode
			adobe = "adobe" in image.info
	except (PIL.UnidentifiedImageError, OSError) as error:
		raise UnsupportedImageFormatError(LOGO_MIME_TYPE, "Image data could not be read.") from error
	if image_format != "JPEG":
		raise UnsupportedImageFormatError(
			LOGO_MIME_TYPE,
			f"Image data is {image_format}, not JPEG.",
		)
	color_space = COLOR_SPACES.get(mode)
	if color_space is None:
		raise UnsupportedImageFormatError(LOGO_MIME_TYPE, f"JPEG mode {mode} is not supported.")
	inverted = mode == "CMYK" and adobe
	return width, height, color_space, inverted


#============================================
def build_image_object(logo: BusinessLogo, resource_name: str = LOGO_RESOURCE_NAME) -> ImageResource:
	"""
	Package a JPEG logo as an image XObject.

	The JPEG bytes are embedded as-is behind a DCTDecode filter.

	Args:
		logo: Logo data URL and display size.
		resource_name: XObject resource name.

	Returns:
		ImageResource with the stream object and display pixel size.
	"""
	mime_type, data = sopdf.encoding.decode_data_url(logo.data_url)
	if mime_type != LOGO_MIME_TYPE:
		raise UnsupportedImageFormatError(mime_type)
	pixel_width, pixel_height, color_space, inverted = read_jpeg_header(data)

	width_px = max(1, round(logo.width)) if logo.width > 0 else pixel_width
	height_px = max(1, round(logo.height)) if logo.height > 0 else pixel_height

	entries = (
		f"/Type /XObject /Subtype /Image /Width {pixel_width} /Height {pixel_height} "
		f"/ColorSpace {color_space} /BitsPerComponent 8 /Filter /DCTDecode"
	)
	if inverted:
		entries += f" /Decode [{INVERTED_CMYK_DECODE}]"
	return ImageResource(
		object=StreamObject(data=data, entries=entries),
		name=resource_name,
		width_px=width_px,
		height_px=height_px,
	)


#============================================
def fit_logo(
	width_px: float,
	height_px: float,
	max_width: float = LOGO_MAX_WIDTH,
	max_height: float = LOGO_MAX_HEIGHT,
) -> tuple[float, float]:
	"""
	Compute the draw size of a logo inside the logo box.

	Args:
		width_px: Display width in pixels.
		height_px: Display height in pixels.
		max_width: Box width in points.
		max_height: Box height in points.

	Returns:
		Tuple of (width, height) in points, never upscaled.
	"""
	width_pt = sopdf.config.pixels_to_points(width_px)
	height_pt = sopdf.config.pixels_to_points(height_px)
	scale = min(max_width / width_pt, max_height / height_pt, 1.0)
	return (width_pt * scale, height_pt * scale)
