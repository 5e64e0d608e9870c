"""
Display formatting for record fields.
"""

# Standard Library
import datetime

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.records


PLACEHOLDER_TEXT = sopdf.config.PLACEHOLDER_TEXT
ProjectMachine = sopdf.records.ProjectMachine

DATE_FORMAT = "%d/%m/%Y"
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"


#============================================
def parse_iso(value: str) -> datetime.datetime | None:
	"""
	Parse an ISO 8601 date or timestamp.

	Args:
		value: Input string, a trailing "Z" is accepted.

	Returns:
		Parsed datetime or None when unparsable.
	"""
	text = value.strip()
	if text.endswith("Z"):
		text = text[:-1] + "+00:00"
	try:
		return datetime.datetime.fromisoformat(text)
	except ValueError:
		return None


#============================================
def format_date(value: str | None) -> str:
	"""
	Format a date for display.

	Args:
		value: ISO date string or None.

	Returns:
		Formatted date, the raw value when unparsable, or the placeholder.
	"""
	if not value or not value.strip():
		return PLACEHOLDER_TEXT
	parsed = parse_iso(value)
	if parsed is None:
		return value
	return parsed.strftime(DATE_FORMAT)


#============================================
def format_timestamp(value: str | None) -> str:
	"""
	Format a timestamp for display.

	Args:
		value: ISO timestamp string or None.

	Returns:
		Formatted timestamp, the raw value when unparsable, or the placeholder.
	"""
	if not value or not value.strip():
		return PLACEHOLDER_TEXT
	parsed = parse_iso(value)
	if parsed is None:
		return value
	return parsed.strftime(TIMESTAMP_FORMAT)


#============================================
def value_or_placeholder(value: str | None, placeholder: str = PLACEHOLDER_TEXT) -> str:
	if value and value.strip():
		return value
	return placeholder


#============================================
def format_machines_and_tools(
	machines: tuple[ProjectMachine, ...],
	machine_serial_numbers: tuple[str, ...],
	tool_serial_numbers: tuple[str, ...],
) -> str:
	"""
	Describe the machines and tools installed on a project.

	Args:
		machines: Machines with their tool serials.
		machine_serial_numbers: Flat machine serials, used without machines.
		tool_serial_numbers: Flat tool serials, used without machines.

	Returns:
		One line per machine, or empty text when nothing was recorded.
	"""
	if machines:
		lines = []
		for machine in machines:
			machine_label = machine.machine_serial_number.strip() or "Not specified"
			tools = [entry.strip() for entry in machine.tool_serial_numbers if entry.strip()]
			if not tools:
				lines.append(f"{machine_label} — No tools recorded")
			else:
				lines.append(f"{machine_label} — Tools: {', '.join(tools)}")
		return "\n".join(lines)

	parts = []
	if machine_serial_numbers:
		parts.append(f"Machines: {', '.join(machine_serial_numbers)}")
	if tool_serial_numbers:
		parts.append(f"Tools: {', '.join(tool_serial_numbers)}")
	return "\n".join(parts)
