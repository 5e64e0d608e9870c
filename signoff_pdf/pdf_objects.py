"""
PDF object graph assembly and cross-reference serialization.
"""

# Standard Library
import dataclasses

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config


PDF_HEADER = sopdf.config.PDF_HEADER


@dataclasses.dataclass(frozen=True)
class ValueObject:
	content: str


@dataclasses.dataclass(frozen=True)
class StreamObject:
	data: bytes
	entries: str = ""


PdfObject = ValueObject | StreamObject


@dataclasses.dataclass(frozen=True)
class SerializedPdf:
	data: bytes
	offsets: tuple[int, ...]
	xref_offset: int


#============================================
def reference(index: int) -> str:
	return f"{index} 0 R"


#============================================
def encode_object(index: int, obj: PdfObject) -> bytes:
	"""
	Serialize one indirect object.

	Args:
		index: 1-based object number.
		obj: Value or stream object.

	Returns:
		Bytes from "N 0 obj" through "endobj".
	"""
	if isinstance(obj, ValueObject):
		return f"{index} 0 obj\n{obj.content}\nendobj\n".encode("latin-1")
	if obj.entries:
		dictionary = f"<< {obj.entries} /Length {len(obj.data)} >>"
	else:
		dictionary = f"<< /Length {len(obj.data)} >>"
	start = f"{index} 0 obj\n{dictionary}\nstream\n".encode("latin-1")
	return start + obj.data + b"\nendstream\nendobj\n"


#============================================
def serialize_pdf(objects: list[PdfObject], root: int | None = None) -> SerializedPdf:
	"""
	Serialize objects in order and build the cross-reference table.

	Offsets are taken from the running byte count while emitting, so each
	one is exactly the position of its "N 0 obj" marker.

	Args:
		objects: Objects in object-number order, numbered from 1.
		root: Catalog object number, defaults to the last object.

	Returns:
		SerializedPdf with the bytes, per-object offsets and xref offset.
	"""
	if not objects:
		raise ValueError("A PDF needs at least one object")
	if root is None:
		root = len(objects)
	if root < 1 or root > len(objects):
		raise ValueError(f"Root object {root} out of range")

	buffer = bytearray(PDF_HEADER)
	offsets: list[int] = []
	for index, obj in enumerate(objects, start=1):
		offsets.append(len(buffer))
		buffer.extend(encode_object(index, obj))

	xref_offset = len(buffer)
	size = len(objects) + 1
	buffer.extend(f"xref\n0 {size}\n0000000000 65535 f \n".encode("ascii"))
	for offset in offsets:
		buffer.extend(f"{offset:010d} 00000 n \n".encode("ascii"))
	buffer.extend(
		f"trailer\n<< /Size {size} /Root {reference(root)} >>\n"
		f"startxref\n{xref_offset}\n%%EOF\n".encode("ascii")
	)
	return SerializedPdf(data=bytes(buffer), offsets=tuple(offsets), xref_offset=xref_offset)


#============================================
def assemble_pdf(objects: list[PdfObject], root: int | None = None) -> bytes:
	"""
	Assemble a complete PDF file.

	Args:
		objects: Objects in object-number order.
		root: Catalog object number, defaults to the last object.

	Returns:
		PDF bytes.
	"""
	return serialize_pdf(objects, root).data


class PdfObjectGraph:
	"""
	Two-phase object arena.

	Objects are registered first and receive their object number, either by
	adding them directly or by reserving a number for an object whose
	content depends on numbers assigned later. Serialization happens once
	every reservation is filled.
	"""

	def __init__(self):
		self._objects: list[PdfObject | None] = []

	def __len__(self) -> int:
		return len(self._objects)

	def reserve(self) -> int:
		self._objects.append(None)
		return len(self._objects)

	def add(self, obj: PdfObject) -> int:
		self._objects.append(obj)
		return len(self._objects)

	def set(self, handle: int, obj: PdfObject) -> None:
		if handle < 1 or handle > len(self._objects):
			raise ValueError(f"Unknown object handle {handle}")
		if self._objects[handle - 1] is not None:
			raise ValueError(f"Object {handle} is already set")
		self._objects[handle - 1] = obj

	def objects(self) -> list[PdfObject]:
		missing = [index for index, obj in enumerate(self._objects, start=1) if obj is None]
		if missing:
			raise ValueError(f"Unresolved object reservations: {missing}")
		return list(self._objects)

	def serialize(self, root: int) -> SerializedPdf:
		return serialize_pdf(self.objects(), root)

	def to_bytes(self, root: int) -> bytes:
		return self.serialize(root).data
