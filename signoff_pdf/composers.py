"""
Document composers for sign off sheets, onsite reports and bills of materials.
"""

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.config
import signoff_pdf.document
import signoff_pdf.formatting
import signoff_pdf.metrics
import signoff_pdf.records


AcceptanceSignOffInput = sopdf.records.AcceptanceSignOffInput
OnsiteReportInput = sopdf.records.OnsiteReportInput
BillOfMaterialsInput = sopdf.records.BillOfMaterialsInput
GlyphWidthOracle = sopdf.metrics.GlyphWidthOracle
RenderedDocument = sopdf.document.RenderedDocument
SinglePageDocument = sopdf.document.SinglePageDocument
format_date = sopdf.formatting.format_date
format_timestamp = sopdf.formatting.format_timestamp
value_or_placeholder = sopdf.formatting.value_or_placeholder

TITLE_SIZE = sopdf.config.TITLE_SIZE
TITLE_GAP = sopdf.config.TITLE_GAP
SECTION_SIZE = sopdf.config.SECTION_SIZE
SECTION_GAP = sopdf.config.SECTION_GAP
TEXT_BLOCK_GAP = sopdf.config.TEXT_BLOCK_GAP
LINE_LEADING = sopdf.config.LINE_LEADING
STATEMENT_TITLE_SIZE = sopdf.config.STATEMENT_TITLE_SIZE
STATEMENT_TITLE_GAP = sopdf.config.STATEMENT_TITLE_GAP
STATEMENT_BODY_GAP = sopdf.config.STATEMENT_BODY_GAP
ACCENT_COLOR = sopdf.config.ACCENT_COLOR
LABEL_COLOR = sopdf.config.LABEL_COLOR
TABLE_HEADER_SIZE = sopdf.config.TABLE_HEADER_SIZE
TABLE_CELL_SIZE = sopdf.config.TABLE_CELL_SIZE
TABLE_CELL_PADDING = sopdf.config.TABLE_CELL_PADDING
TABLE_RULE_HEIGHT = sopdf.config.TABLE_RULE_HEIGHT
TABLE_RULE_COLOR = sopdf.config.TABLE_RULE_COLOR
BOM_COLUMN_FRACTIONS = sopdf.config.BOM_COLUMN_FRACTIONS
EMPTY_VALUE_TEXT = sopdf.config.EMPTY_VALUE_TEXT
EMPTY_TABLE_TEXT = sopdf.config.EMPTY_TABLE_TEXT

ACCEPTANCE_STATEMENTS = {
	"option1": {
		"title": "Option 1 — Completed without issues",
		"description": (
			"Installation was completed successfully with no outstanding issues and the "
			"system is running/ready to run. I authorise invoicing of the Final Acceptance "
			"within 10 days unless {business} are notified in writing of any further issues."
		),
	},
	"option2": {
		"title": "Option 2 — Completed with outstanding issues",
		"description": (
			"Installation was completed and the system is running/ready to run, but there "
			"are outstanding issues that have been agreed with the Installation Engineer "
			"that require resolving. A plan will be agreed to ensure these points are "
			"addressed and the system will be invoiced 10 days from completion or within "
			"60 days from today as per {business} standard terms."
		),
	},
	"option3": {
		"title": "Option 3 — Installation incomplete",
		"description": (
			"Installation is not complete and the line cannot be run. {business} will "
			"complete any additional work required and return to complete the installation "
			"at an agreed upon date."
		),
	},
}

BOM_HEADERS = ("Part Number", "Qty", "Description", "Designations")


#============================================
def acceptance_statement(decision: object, business_name: str) -> tuple[str, str]:
	"""
	Look up the acceptance statement for a decision code.

	Args:
		decision: Decision code, see records.normalize_decision.
		business_name: Business named in the statement text.

	Returns:
		Tuple of (title, description).
	"""
	copy = ACCEPTANCE_STATEMENTS[sopdf.records.normalize_decision(decision)]
	return copy["title"], copy["description"].format(business=business_name)


#============================================
def render_acceptance_sign_off(
	record: AcceptanceSignOffInput,
	oracle: GlyphWidthOracle | None = None,
) -> RenderedDocument:
	"""
	Lay out a customer acceptance sign off sheet.

	Args:
		record: Sign off input record.
		oracle: Optional width oracle.

	Returns:
		RenderedDocument.
	"""
	document = SinglePageDocument(
		record.business_name,
		logo=record.business_logo,
		oracle=oracle,
		placeholder=EMPTY_VALUE_TEXT,
	)
	title, description = acceptance_statement(record.decision, document.business_name)
	layout = document.layout
	document.header()

	layout.heading("Customer Sign Off", TITLE_SIZE, TITLE_GAP)
	layout.label_value("Customer", record.customer_name)
	layout.label_value("Project", record.project_number)
	layout.label_value("Completed", format_timestamp(record.completed_at))

	layout.heading("Project Information", SECTION_SIZE, SECTION_GAP)
	layout.label_value("Line No/Name", value_or_placeholder(record.line_reference))
	layout.label_value(
		"Machines & Tools",
		sopdf.formatting.format_machines_and_tools(
			record.machines,
			record.machine_serial_numbers,
			record.tool_serial_numbers,
		),
	)
	layout.label_value("Supplier Order Number", value_or_placeholder(record.supplier_order_number))
	layout.label_value("Customer Order Number", value_or_placeholder(record.customer_order_number))
	layout.label_value("Salesperson", value_or_placeholder(record.salesperson_name))
	layout.label_value("Project Start Date", format_date(record.start_date))
	layout.label_value("Proposed Completion", format_date(record.proposed_completion_date))

	layout.heading("Acceptance Statement", SECTION_SIZE, SECTION_GAP)
	layout.paragraph(
		title,
		size=STATEMENT_TITLE_SIZE,
		bold=True,
		color=ACCENT_COLOR,
		last_gap=STATEMENT_TITLE_GAP,
	)
	layout.paragraph(description, last_gap=STATEMENT_BODY_GAP)

	if record.snags:
		layout.heading("Snag List", SECTION_SIZE, TEXT_BLOCK_GAP)
		layout.bullet_list(record.snags)

	document.signature_section(
		"Authorisation",
		record.signature_paths,
		record.signature_dimensions,
	)
	signed_by = f"{record.signed_by_name} — {record.signed_by_position}"
	if not record.signed_by_position.strip():
		signed_by = record.signed_by_name
	layout.label_value("Signed by", signed_by)
	return document.finish()


#============================================
def render_onsite_report(
	record: OnsiteReportInput,
	oracle: GlyphWidthOracle | None = None,
) -> RenderedDocument:
	"""
	Lay out an onsite service report.

	Args:
		record: Onsite report input record.
		oracle: Optional width oracle.

	Returns:
		RenderedDocument.
	"""
	document = SinglePageDocument(record.business_name, logo=record.business_logo, oracle=oracle)
	layout = document.layout
	document.header()

	layout.heading("Onsite Report", TITLE_SIZE, TITLE_GAP)
	layout.label_value("Customer", record.customer_name)
	layout.label_value("Project", record.project_number)
	layout.label_value("Site Address", record.site_address)
	layout.label_value("Created", format_timestamp(record.created_at))

	layout.heading("Visit Details", SECTION_SIZE, SECTION_GAP)
	layout.label_value("Report Date", format_date(record.report_date))
	layout.label_value("Engineer", record.engineer_name)
	layout.label_value("Arrival Time", record.arrival_time)
	layout.label_value("Departure Time", record.departure_time)
	layout.label_value("Customer Contact", record.customer_contact)

	machine_fields = (
		record.machine_serial_number,
		record.firmware_version,
		record.service_information,
	)
	if any(field is not None for field in machine_fields):
		layout.heading("Machine Service", SECTION_SIZE, SECTION_GAP)
		layout.label_value("Machine", record.machine_serial_number)
		layout.label_value("Firmware Version", record.firmware_version)
		layout.text_block("Service Information", record.service_information)

	layout.text_block("Work Summary", record.work_summary)
	layout.text_block("Materials Used", record.materials_used)
	layout.text_block("Additional Notes", record.additional_notes)

	document.signature_section(
		"Customer Sign Off",
		record.signature_paths,
		record.signature_dimensions,
	)
	signed_by = record.signed_by_name
	if record.signed_by_position and record.signed_by_position.strip():
		signed_by = f"{record.signed_by_name} — {record.signed_by_position}"
	layout.label_value("Signed By", signed_by)
	layout.label_value("Signed At", format_timestamp(record.created_at))
	return document.finish()


#============================================
def render_bill_of_materials(
	record: BillOfMaterialsInput,
	oracle: GlyphWidthOracle | None = None,
) -> RenderedDocument:
	"""
	Lay out a bill of materials table.

	Args:
		record: Bill of materials input record.
		oracle: Optional width oracle.

	Returns:
		RenderedDocument.
	"""
	document = SinglePageDocument(record.business_name, logo=record.business_logo, oracle=oracle)
	layout = document.layout
	document.header()

	layout.heading("Bill of Materials", TITLE_SIZE, TITLE_GAP)
	layout.label_value("Customer", record.customer_name)
	layout.label_value("Project", record.project_number)
	layout.label_value("Created", format_timestamp(record.created_at))

	layout.heading("Components", SECTION_SIZE, TEXT_BLOCK_GAP)
	widths = [layout.content_width * fraction for fraction in BOM_COLUMN_FRACTIONS]
	layout.table_row(
		[header.upper() for header in BOM_HEADERS],
		widths,
		TABLE_HEADER_SIZE,
		bold=True,
		color=LABEL_COLOR,
		padding=TABLE_CELL_PADDING,
	)
	layout.rule(TABLE_RULE_HEIGHT, TABLE_RULE_COLOR)
	layout.move_down(LINE_LEADING)
	if not record.rows:
		layout.paragraph(EMPTY_TABLE_TEXT, size=TABLE_CELL_SIZE)
	for row in record.rows:
		layout.table_row(
			[row.part_number, row.quantity, row.description, row.designations],
			widths,
			TABLE_CELL_SIZE,
			padding=TABLE_CELL_PADDING,
		)
		layout.rule(TABLE_RULE_HEIGHT, TABLE_RULE_COLOR)
		layout.move_down(LINE_LEADING)
	return document.finish()


#============================================
def generate_acceptance_sign_off_pdf(record: AcceptanceSignOffInput) -> str:
	return render_acceptance_sign_off(record).data_url


#============================================
def generate_onsite_report_pdf(record: OnsiteReportInput) -> str:
	return render_onsite_report(record).data_url


#============================================
def generate_bill_of_materials_pdf(record: BillOfMaterialsInput) -> str:
	return render_bill_of_materials(record).data_url
