"""
Exception hierarchy for document generation.
"""


class SignOffPdfError(Exception):
	"""
	Base exception for all document generation errors.
	"""


class UnsupportedImageFormatError(SignOffPdfError, ValueError):
	"""
	Raised when a raster payload is not the supported JPEG encoding.
	"""

	def __init__(self, mime_type: str, reason: str | None = None):
		self.mime_type = mime_type
		message = f"Unsupported logo format '{mime_type}'; expected JPEG data."
		if reason:
			message = f"{message} {reason}"
		super().__init__(message)


class InvalidDataUrlError(UnsupportedImageFormatError):
	"""
	Raised when a logo payload is not a base64 data URL.
	"""

	def __init__(self, reason: str):
		super().__init__("unknown", f"Invalid data URL: {reason}")


class EncodingUnavailableError(SignOffPdfError):
	"""
	Raised when a payload cannot be handed to the base64 encoder.
	"""

	def __init__(self, payload_type: str):
		self.payload_type = payload_type
		super().__init__(f"No base64 encoder available for payload of type {payload_type}")


class UnknownDecisionError(SignOffPdfError, ValueError):
	"""
	Raised when an acceptance decision code is not one of the fixed options.
	"""

	def __init__(self, decision: object):
		self.decision = decision
		super().__init__(f"Unknown sign off decision: {decision!r}")


class RecordError(SignOffPdfError, ValueError):
	"""
	Raised when an input record payload cannot be loaded.
	"""

	def __init__(self, field: str, reason: str):
		self.field = field
		super().__init__(f"Invalid record field '{field}': {reason}")
