"""
Base64 data URL encoding and decoding.
"""

# Standard Library
import base64
import binascii
import re

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.errors


PDF_MIME_TYPE = sopdf.config.PDF_MIME_TYPE
EncodingUnavailableError = sopdf.errors.EncodingUnavailableError
InvalidDataUrlError = sopdf.errors.InvalidDataUrlError

# multiple of 3 so chunk encodings concatenate without padding
ENCODE_CHUNK_SIZE = 3 * 0x8000
DATA_URL_PATTERN = re.compile(r"^data:(.+?);base64,(.*)$", re.DOTALL)


#============================================
def encode_base64(payload: bytes) -> str:
	"""
	Encode bytes as standard base64 in fixed size chunks.

	Args:
		payload: Bytes to encode.

	Returns:
		Base64 text.
	"""
	if not isinstance(payload, (bytes, bytearray, memoryview)):
		raise EncodingUnavailableError(type(payload).__name__)
	view = memoryview(payload)
	chunks = []
	for start in range(0, len(view), ENCODE_CHUNK_SIZE):
		chunk = view[start:start + ENCODE_CHUNK_SIZE]
		chunks.append(base64.b64encode(chunk).decode("ascii"))
	return "".join(chunks)


#============================================
def encode_data_url(payload: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
	"""
	Wrap bytes as a base64 data URL.

	Args:
		payload: Bytes to encode.
		mime_type: MIME type for the URL.

	Returns:
		Data URL string.
	"""
	return f"data:{mime_type};base64,{encode_base64(payload)}"


#============================================
def decode_data_url(data_url: str) -> tuple[str, bytes]:
	"""
	Split a base64 data URL into its MIME type and bytes.

	Args:
		data_url: "data:<mime>;base64,<payload>" string.

	Returns:
		Tuple of (mime_type, data).
	"""
	match = DATA_URL_PATTERN.match(data_url.strip())
	if match is None:
		raise InvalidDataUrlError("expected data:<mime>;base64,<payload>")
	mime_type, payload = match.groups()
	payload = "".join(payload.split())
	try:
		data = base64.b64decode(payload, validate=True)
	except binascii.Error as error:
		raise InvalidDataUrlError(str(error)) from error
	return mime_type.strip().lower(), data
