"""
Input records consumed by the document composers.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.errors


RecordError = sopdf.errors.RecordError
UnknownDecisionError = sopdf.errors.UnknownDecisionError

DECISIONS = ("option1", "option2", "option3")


@dataclasses.dataclass(frozen=True)
class SignaturePoint:
	x: float
	y: float


@dataclasses.dataclass(frozen=True)
class SignatureDimensions:
	width: float
	height: float


SignatureStroke = tuple[SignaturePoint, ...]
SignatureStrokes = tuple[SignatureStroke, ...]

EMPTY_DIMENSIONS = SignatureDimensions(width=0.0, height=0.0)


@dataclasses.dataclass(frozen=True)
class BusinessLogo:
	data_url: str
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class ProjectMachine:
	machine_serial_number: str
	tool_serial_numbers: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class AcceptanceSignOffInput:
	business_name: str
	project_number: str
	customer_name: str
	signed_by_name: str
	signed_by_position: str
	decision: str
	completed_at: str
	snags: tuple[str, ...] = ()
	signature_paths: SignatureStrokes = ()
	signature_dimensions: SignatureDimensions = EMPTY_DIMENSIONS
	business_logo: BusinessLogo | None = None
	line_reference: str | None = None
	machines: tuple[ProjectMachine, ...] = ()
	machine_serial_numbers: tuple[str, ...] = ()
	tool_serial_numbers: tuple[str, ...] = ()
	supplier_order_number: str | None = None
	customer_order_number: str | None = None
	salesperson_name: str | None = None
	start_date: str | None = None
	proposed_completion_date: str | None = None


@dataclasses.dataclass(frozen=True)
class OnsiteReportInput:
	business_name: str
	project_number: str
	customer_name: str
	report_date: str
	engineer_name: str
	work_summary: str
	signed_by_name: str
	created_at: str
	signature_paths: SignatureStrokes = ()
	signature_dimensions: SignatureDimensions = EMPTY_DIMENSIONS
	business_logo: BusinessLogo | None = None
	site_address: str | None = None
	arrival_time: str | None = None
	departure_time: str | None = None
	customer_contact: str | None = None
	materials_used: str | None = None
	additional_notes: str | None = None
	signed_by_position: str | None = None
	machine_serial_number: str | None = None
	firmware_version: str | None = None
	service_information: str | None = None


@dataclasses.dataclass(frozen=True)
class BomRow:
	part_number: str
	quantity: str
	description: str
	designations: str = ""


@dataclasses.dataclass(frozen=True)
class BillOfMaterialsInput:
	business_name: str
	project_number: str
	customer_name: str
	created_at: str
	rows: tuple[BomRow, ...] = ()
	business_logo: BusinessLogo | None = None


#============================================
def normalize_decision(value: object) -> str:
	"""
	Normalize a decision code to its option key.

	Args:
		value: "option1".."option3", or 1..3 as int or string.

	Returns:
		Option key string.
	"""
	if isinstance(value, bool):
		raise UnknownDecisionError(value)
	if isinstance(value, int):
		value = str(value)
	if isinstance(value, str):
		key = value.strip().lower()
		if key.isdigit():
			key = f"option{key}"
		if key in DECISIONS:
			return key
	raise UnknownDecisionError(value)


#============================================
def _optional_text(payload: dict, field: str) -> str | None:
	value = payload.get(field)
	if value is None:
		return None
	if not isinstance(value, str):
		raise RecordError(field, "expected a string")
	return value


#============================================
def _required_text(payload: dict, field: str) -> str:
	value = _optional_text(payload, field)
	if value is None:
		raise RecordError(field, "missing required field")
	return value


#============================================
def _text_tuple(payload: dict, field: str) -> tuple[str, ...]:
	values = payload.get(field) or []
	if not isinstance(values, list):
		raise RecordError(field, "expected a list of strings")
	for value in values:
		if not isinstance(value, str):
			raise RecordError(field, "expected a list of strings")
	return tuple(values)


#============================================
def _finite_number(value: object, field: str) -> float:
	"""
	Convert a JSON number to a finite float.

	Args:
		value: JSON value.
		field: Field name reported on failure.

	Returns:
		Float value.
	"""
	if isinstance(value, bool):
		raise RecordError(field, f"expected a number, got {value!r}")
	try:
		number = float(value)
	except (TypeError, ValueError) as error:
		raise RecordError(field, f"expected a number, got {value!r}") from error
	# json.load accepts NaN and Infinity
	if not math.isfinite(number):
		raise RecordError(field, f"expected a finite number, got {value!r}")
	return number


#============================================
def _quantity_text(value: object) -> str:
	if value is None:
		return ""
	if isinstance(value, bool) or not isinstance(value, (int, float, str)):
		raise RecordError("rows", f"invalid quantity {value!r}")
	if isinstance(value, float) and not math.isfinite(value):
		raise RecordError("rows", f"invalid quantity {value!r}")
	return str(value)


#============================================
def parse_point(value: object) -> SignaturePoint:
	"""
	Parse a signature point from {"x", "y"} or [x, y].

	Args:
		value: JSON value.

	Returns:
		SignaturePoint.
	"""
	if isinstance(value, dict) and "x" in value and "y" in value:
		x, y = value["x"], value["y"]
	elif isinstance(value, (list, tuple)) and len(value) == 2:
		x, y = value
	else:
		raise RecordError("signature_paths", f"invalid point {value!r}")
	return SignaturePoint(
		x=_finite_number(x, "signature_paths"),
		y=_finite_number(y, "signature_paths"),
	)


#============================================
def parse_strokes(value: object) -> SignatureStrokes:
	"""
	Parse signature strokes from JSON.

	Args:
		value: List of strokes, each a list of points.

	Returns:
		Tuple of strokes.
	"""
	if value is None:
		return ()
	if not isinstance(value, list):
		raise RecordError("signature_paths", "expected a list of strokes")
	strokes = []
	for stroke in value:
		if not isinstance(stroke, list):
			raise RecordError("signature_paths", "expected each stroke to be a list")
		strokes.append(tuple(parse_point(point) for point in stroke))
	return tuple(strokes)


#============================================
def parse_dimensions(value: object) -> SignatureDimensions:
	"""
	Parse signature capture dimensions.

	Args:
		value: {"width", "height"} mapping or None.

	Returns:
		SignatureDimensions.
	"""
	if value is None:
		return EMPTY_DIMENSIONS
	if not isinstance(value, dict):
		raise RecordError("signature_dimensions", "expected an object")
	return SignatureDimensions(
		width=_finite_number(value.get("width", 0.0), "signature_dimensions"),
		height=_finite_number(value.get("height", 0.0), "signature_dimensions"),
	)


#============================================
def parse_logo(value: object) -> BusinessLogo | None:
	"""
	Parse an optional business logo.

	Args:
		value: {"data_url", "width", "height"} mapping or None.

	Returns:
		BusinessLogo or None.
	"""
	if value is None:
		return None
	if not isinstance(value, dict) or not isinstance(value.get("data_url"), str):
		raise RecordError("business_logo", "expected an object with a data_url")
	return BusinessLogo(
		data_url=value["data_url"],
		width=_finite_number(value.get("width", 0.0), "business_logo"),
		height=_finite_number(value.get("height", 0.0), "business_logo"),
	)


#============================================
def load_acceptance_record(payload: dict) -> AcceptanceSignOffInput:
	"""
	Build an acceptance sign off record from a JSON payload.

	Args:
		payload: Decoded JSON object.

	Returns:
		AcceptanceSignOffInput.
	"""
	machines = []
	for entry in payload.get("machines") or []:
		if not isinstance(entry, dict):
			raise RecordError("machines", "expected a list of objects")
		machines.append(
			ProjectMachine(
				machine_serial_number=_optional_text(entry, "machine_serial_number") or "",
				tool_serial_numbers=_text_tuple(entry, "tool_serial_numbers"),
			)
		)
	return AcceptanceSignOffInput(
		business_name=_optional_text(payload, "business_name") or "",
		project_number=_required_text(payload, "project_number"),
		customer_name=_required_text(payload, "customer_name"),
		signed_by_name=_required_text(payload, "signed_by_name"),
		signed_by_position=_optional_text(payload, "signed_by_position") or "",
		decision=normalize_decision(payload.get("decision")),
		completed_at=_required_text(payload, "completed_at"),
		snags=_text_tuple(payload, "snags"),
		signature_paths=parse_strokes(payload.get("signature_paths")),
		signature_dimensions=parse_dimensions(payload.get("signature_dimensions")),
		business_logo=parse_logo(payload.get("business_logo")),
		line_reference=_optional_text(payload, "line_reference"),
		machines=tuple(machines),
		machine_serial_numbers=_text_tuple(payload, "machine_serial_numbers"),
		tool_serial_numbers=_text_tuple(payload, "tool_serial_numbers"),
		supplier_order_number=_optional_text(payload, "supplier_order_number"),
		customer_order_number=_optional_text(payload, "customer_order_number"),
		salesperson_name=_optional_text(payload, "salesperson_name"),
		start_date=_optional_text(payload, "start_date"),
		proposed_completion_date=_optional_text(payload, "proposed_completion_date"),
	)


#============================================
def load_onsite_record(payload: dict) -> OnsiteReportInput:
	"""
	Build an onsite report record from a JSON payload.

	Args:
		payload: Decoded JSON object.

	Returns:
		OnsiteReportInput.
	"""
	return OnsiteReportInput(
		business_name=_optional_text(payload, "business_name") or "",
		project_number=_required_text(payload, "project_number"),
		customer_name=_required_text(payload, "customer_name"),
		report_date=_optional_text(payload, "report_date") or "",
		engineer_name=_optional_text(payload, "engineer_name") or "",
		work_summary=_optional_text(payload, "work_summary") or "",
		signed_by_name=_required_text(payload, "signed_by_name"),
		created_at=_required_text(payload, "created_at"),
		signature_paths=parse_strokes(payload.get("signature_paths")),
		signature_dimensions=parse_dimensions(payload.get("signature_dimensions")),
		business_logo=parse_logo(payload.get("business_logo")),
		site_address=_optional_text(payload, "site_address"),
		arrival_time=_optional_text(payload, "arrival_time"),
		departure_time=_optional_text(payload, "departure_time"),
		customer_contact=_optional_text(payload, "customer_contact"),
		materials_used=_optional_text(payload, "materials_used"),
		additional_notes=_optional_text(payload, "additional_notes"),
		signed_by_position=_optional_text(payload, "signed_by_position"),
		machine_serial_number=_optional_text(payload, "machine_serial_number"),
		firmware_version=_optional_text(payload, "firmware_version"),
		service_information=_optional_text(payload, "service_information"),
	)


#============================================
def load_bom_record(payload: dict) -> BillOfMaterialsInput:
	"""
	Build a bill of materials record from a JSON payload.

	Args:
		payload: Decoded JSON object.

	Returns:
		BillOfMaterialsInput.
	"""
	rows = []
	for entry in payload.get("rows") or []:
		if not isinstance(entry, dict):
			raise RecordError("rows", "expected a list of objects")
		rows.append(
			BomRow(
				part_number=_optional_text(entry, "part_number") or "",
				quantity=_quantity_text(entry.get("quantity")),
				description=_optional_text(entry, "description") or "",
				designations=_optional_text(entry, "designations") or "",
			)
		)
	return BillOfMaterialsInput(
		business_name=_optional_text(payload, "business_name") or "",
		project_number=_required_text(payload, "project_number"),
		customer_name=_required_text(payload, "customer_name"),
		created_at=_required_text(payload, "created_at"),
		rows=tuple(rows),
		business_logo=parse_logo(payload.get("business_logo")),
	)
