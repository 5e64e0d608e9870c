# PIP3 modules
import pytest

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.encoding
import signoff_pdf.errors
import signoff_pdf.images
import signoff_pdf.records

import pdf_fixture_utils


BusinessLogo = sopdf.records.BusinessLogo


#============================================
def make_logo(data: bytes, mime_type: str = "image/jpeg", width: float = 0.0, height: float = 0.0) -> BusinessLogo:
	data_url = sopdf.encoding.encode_data_url(data, mime_type)
	return BusinessLogo(data_url=data_url, width=width, height=height)


#============================================
def test_jpeg_logo_becomes_dct_xobject() -> None:
	"""
	JPEG bytes are embedded untouched with their pixel size.
	"""
	data = pdf_fixture_utils.make_jpeg_bytes(40, 20)
	resource = sopdf.images.build_image_object(make_logo(data, width=80, height=40))
	assert resource.name == "Im1"
	assert resource.object.data == data
	entries = resource.object.entries
	assert "/Subtype /Image" in entries
	assert "/Width 40 /Height 20" in entries
	assert "/ColorSpace /DeviceRGB" in entries
	assert "/BitsPerComponent 8" in entries
	assert entries.endswith("/Filter /DCTDecode")
	assert (resource.width_px, resource.height_px) == (80, 40)


#============================================
def test_missing_display_size_uses_pixels() -> None:
	data = pdf_fixture_utils.make_jpeg_bytes(30, 10)
	resource = sopdf.images.build_image_object(make_logo(data))
	assert (resource.width_px, resource.height_px) == (30, 10)


#============================================
def test_grayscale_jpeg_uses_device_gray() -> None:
	data = pdf_fixture_utils.make_jpeg_bytes(16, 16, mode="L")
	resource = sopdf.images.build_image_object(make_logo(data))
	assert "/ColorSpace /DeviceGray" in resource.object.entries


#============================================
def test_png_mime_type_is_rejected() -> None:
	data = pdf_fixture_utils.make_png_bytes(16, 16)
	with pytest.raises(sopdf.errors.UnsupportedImageFormatError) as excinfo:
		sopdf.images.build_image_object(make_logo(data, mime_type="image/png"))
	assert excinfo.value.mime_type == "image/png"


#============================================
def test_png_bytes_labelled_as_jpeg_are_rejected() -> None:
	data = pdf_fixture_utils.make_png_bytes(16, 16)
	with pytest.raises(sopdf.errors.UnsupportedImageFormatError):
		sopdf.images.build_image_object(make_logo(data))


#============================================
def test_garbage_bytes_are_rejected() -> None:
	with pytest.raises(sopdf.errors.UnsupportedImageFormatError):
		sopdf.images.read_jpeg_header(b"not an image at all")


#============================================
@pytest.mark.parametrize("data_url", ["", "image/jpeg;base64,AAAA", "data:image/jpeg;base64,@@@"])
def test_invalid_data_url_is_rejected(data_url: str) -> None:
	logo = BusinessLogo(data_url=data_url, width=10, height=10)
	with pytest.raises(sopdf.errors.InvalidDataUrlError):
		sopdf.images.build_image_object(logo)


#============================================
def test_fit_logo_never_upscales() -> None:
	# 64x32 px is 48x24 pt, well inside the logo box
	assert sopdf.images.fit_logo(64, 32) == pytest.approx((48.0, 24.0))


#============================================
@pytest.mark.parametrize(
	"width_px, height_px",
	[(960, 240), (240, 960), (2000, 1000), (400, 121)],
)
def test_fit_logo_stays_in_box_and_keeps_aspect(width_px: int, height_px: int) -> None:
	width, height = sopdf.images.fit_logo(width_px, height_px)
	assert width <= 180.0 + 1e-9
	assert height <= 90.0 + 1e-9
	assert width / height == pytest.approx(width_px / height_px)
	# one side touches the box when the logo is too large
	assert width == pytest.approx(180.0) or height == pytest.approx(90.0)


#============================================
def test_adobe_cmyk_jpeg_gets_inverting_decode() -> None:
	"""
	Adobe CMYK data is stored inverted and needs a flipping decode array.
	"""
	data = pdf_fixture_utils.make_cmyk_jpeg_bytes(16, 16, (255, 0, 0))
	width, height, color_space, inverted = sopdf.images.read_jpeg_header(data)
	assert (width, height, color_space) == (16, 16, "/DeviceCMYK")
	assert inverted
	resource = sopdf.images.build_image_object(make_logo(data))
	assert resource.object.entries.endswith("/Filter /DCTDecode /Decode [1 0 1 0 1 0 1 0]")


#============================================
def test_rgb_jpeg_has_no_decode_array() -> None:
	data = pdf_fixture_utils.make_jpeg_bytes(16, 16)
	assert sopdf.images.read_jpeg_header(data)[3] is False
	resource = sopdf.images.build_image_object(make_logo(data))
	assert "/Decode" not in resource.object.entries
