# Standard Library
import dataclasses
import io
import re

# PIP3 modules
import pypdf
import pytest

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.composers
import signoff_pdf.encoding
import signoff_pdf.errors
import signoff_pdf.records

import pdf_fixture_utils


TEXT_Y_PATTERN = re.compile(r"1 0 0 1 -?[\d.]+ (-?[\d.]+) Tm\n\(")


#============================================
def rendered_strings(pdf_bytes: bytes) -> list[str]:
	return pdf_fixture_utils.shown_strings(pdf_fixture_utils.page_content(pdf_bytes))


#============================================
def test_acceptance_document_structure(acceptance_record, heuristic_oracle) -> None:
	"""
	The file parses, has one page and a consistent cross-reference table.
	"""
	result = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	data = result.pdf_bytes
	assert data.startswith(b"%PDF-1.")
	assert data.endswith(b"%%EOF\n")
	assert result.object_count == 6
	# the full sign off layout runs past the bottom margin of A4
	assert result.overflowed

	_, offsets = pdf_fixture_utils.read_xref(data)
	assert len(offsets) == result.object_count
	for index, offset in enumerate(offsets, start=1):
		assert data[offset:].startswith(f"{index} 0 obj".encode("ascii"))

	reader = pypdf.PdfReader(io.BytesIO(data))
	assert len(reader.pages) == 1
	assert float(reader.pages[0].mediabox.width) == pytest.approx(595.28)
	assert float(reader.pages[0].mediabox.height) == pytest.approx(841.89)
	text = reader.pages[0].extract_text()
	assert "Customer Sign Off" in text
	assert "Acme Automation" in text


#============================================
def test_acceptance_without_snags(acceptance_record, heuristic_oracle) -> None:
	result = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert strings[0] == "Acme Automation"
	assert "Snag List" not in strings
	assert "Option 1 — Completed without issues" in strings
	body = " ".join(strings)
	assert "no outstanding issues" in body
	assert "unless Acme Automation are notified" in body
	assert "Option 2 — Completed with outstanding issues" not in strings


#============================================
def test_acceptance_field_values(acceptance_record, heuristic_oracle) -> None:
	result = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert strings.index("CUSTOMER") + 1 == strings.index("Sample Customer (UK) Ltd")
	assert "01/01/2024 09:30" in strings
	assert "20/11/2023" in strings
	assert "05/01/2024" in strings
	assert "M-100 — Tools: T-1, T-2" in strings
	assert "M-200 — No tools recorded" in strings
	assert "SIGNED BY" in strings
	assert strings[-1] == "Jordan Smith — Plant Manager"


#============================================
def test_acceptance_with_snags_in_order(acceptance_record, heuristic_oracle) -> None:
	snags = ("Guard loose on infeed", "Label missing on panel", "Sensor misaligned")
	record = dataclasses.replace(acceptance_record, decision="option2", snags=snags)
	result = sopdf.composers.render_acceptance_sign_off(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert "Option 2 — Completed with outstanding issues" in strings
	snag_index = strings.index("Snag List")
	assert strings.index("Acceptance Statement") < snag_index < strings.index("Authorisation")
	bullets = [text for text in strings if text.startswith("• ")]
	assert bullets == [f"• {snag}" for snag in snags]


#============================================
def test_acceptance_signature_ink(acceptance_record, heuristic_oracle) -> None:
	result = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	content = pdf_fixture_utils.page_content(result.pdf_bytes)
	# two strokes drawn, the single point tap is dropped
	assert len(re.findall(r" m\n", content)) == 2
	assert len(re.findall(r" l\n", content)) == 3
	assert "0.07 0.07 0.07 RG\n1.50 w\n" in content


#============================================
def test_acceptance_empty_signature(acceptance_record, heuristic_oracle) -> None:
	record = dataclasses.replace(
		acceptance_record,
		signature_paths=(),
		signature_dimensions=sopdf.records.EMPTY_DIMENSIONS,
	)
	result = sopdf.composers.render_acceptance_sign_off(record, heuristic_oracle)
	content = pdf_fixture_utils.page_content(result.pdf_bytes)
	assert " re B\n" in content
	assert " m\n" not in content


#============================================
def test_unknown_decision_raises(acceptance_record, heuristic_oracle) -> None:
	record = dataclasses.replace(acceptance_record, decision="option9")
	with pytest.raises(sopdf.errors.UnknownDecisionError):
		sopdf.composers.render_acceptance_sign_off(record, heuristic_oracle)


#============================================
@pytest.mark.parametrize("decision", ["option3", 3, "3"])
def test_decision_codes_select_statement(decision) -> None:
	title, description = sopdf.composers.acceptance_statement(decision, "Acme")
	assert title == "Option 3 — Installation incomplete"
	assert description.startswith("Installation is not complete")
	assert "Acme will complete" in description


#============================================
def test_blank_business_name_uses_default(acceptance_record, heuristic_oracle) -> None:
	record = dataclasses.replace(acceptance_record, business_name="  ")
	result = sopdf.composers.render_acceptance_sign_off(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert strings[0] == "CustomerProjectDB"
	assert "unless CustomerProjectDB are notified" in " ".join(strings)


#============================================
def test_onsite_report_fields(onsite_record, heuristic_oracle) -> None:
	result = sopdf.composers.render_onsite_report(onsite_record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert strings[:2] == ["Acme Automation", "Onsite Report"]
	assert "1 Factory Road" in strings
	assert "03/02/2024" in strings
	assert "03/02/2024 16:45" in strings
	assert "Machine Service" not in strings
	assert strings.index("Work Summary") < strings.index("Materials Used") < strings.index("Additional Notes")
	assert "Jordan Smith — Supervisor" in strings
	assert strings[-2:] == ["SIGNED AT", "03/02/2024 16:45"]


#============================================
def test_onsite_report_empty_fields_use_placeholder(heuristic_oracle) -> None:
	record = sopdf.records.OnsiteReportInput(
		business_name="",
		project_number="P-1",
		customer_name="Customer",
		report_date="",
		engineer_name="",
		work_summary="",
		signed_by_name="Pat",
		created_at="2024-02-03T10:00:00",
	)
	result = sopdf.composers.render_onsite_report(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	# site address, report date, engineer, arrival, departure, contact and three text blocks
	assert strings.count("Not provided") == 9
	assert "Machine Service" not in strings
	assert strings.index("SIGNED BY") + 1 == strings.index("Pat")


#============================================
def test_onsite_report_machine_service(onsite_record, heuristic_oracle) -> None:
	record = dataclasses.replace(onsite_record, firmware_version="v2.1.0", service_information="Replaced belts.")
	result = sopdf.composers.render_onsite_report(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	machine_index = strings.index("Machine Service")
	assert strings[machine_index + 1:machine_index + 3] == ["MACHINE", "Not provided"]
	assert "v2.1.0" in strings
	assert "Replaced belts." in strings
	assert machine_index < strings.index("Work Summary")


#============================================
def test_logo_changes_only_image_and_offsets(acceptance_record, jpeg_logo, heuristic_oracle) -> None:
	"""
	A logo adds the image XObject and shifts the body by one constant offset.
	"""
	plain = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	with_logo = sopdf.composers.render_acceptance_sign_off(
		dataclasses.replace(acceptance_record, business_logo=jpeg_logo),
		heuristic_oracle,
	)
	assert with_logo.object_count == plain.object_count + 1
	assert b"/Subtype /Image" in with_logo.pdf_bytes
	assert b"/Subtype /Image" not in plain.pdf_bytes
	assert b"/XObject << /Im1 " in with_logo.pdf_bytes

	plain_content = pdf_fixture_utils.page_content(plain.pdf_bytes)
	logo_content = pdf_fixture_utils.page_content(with_logo.pdf_bytes)
	assert "/Im1 Do" not in plain_content
	# 64x32 px logo is drawn at 48x24 pt in the top right corner
	assert logo_content.startswith("q 48 0 0 24 499.28 769.89 cm /Im1 Do Q\n")
	assert pdf_fixture_utils.shown_strings(plain_content) == pdf_fixture_utils.shown_strings(logo_content)

	plain_ys = [float(value) for value in TEXT_Y_PATTERN.findall(plain_content)]
	logo_ys = [float(value) for value in TEXT_Y_PATTERN.findall(logo_content)]
	assert plain_ys[0] == pytest.approx(logo_ys[0], abs=0.01)
	shifts = [a - b for a, b in zip(plain_ys[1:], logo_ys[1:])]
	# business name baseline drops to the logo bottom edge
	assert shifts[0] == pytest.approx(6.0, abs=0.02)
	for shift in shifts:
		assert shift == pytest.approx(shifts[0], abs=0.02)


#============================================
def test_non_jpeg_logo_fails_whole_call(acceptance_record, heuristic_oracle) -> None:
	data_url = sopdf.encoding.encode_data_url(pdf_fixture_utils.make_png_bytes(8, 8), "image/png")
	logo = sopdf.records.BusinessLogo(data_url=data_url, width=8, height=8)
	record = dataclasses.replace(acceptance_record, business_logo=logo)
	with pytest.raises(sopdf.errors.UnsupportedImageFormatError):
		sopdf.composers.render_acceptance_sign_off(record, heuristic_oracle)


#============================================
def test_bill_of_materials_rows(heuristic_oracle) -> None:
	record = sopdf.records.BillOfMaterialsInput(
		business_name="Acme Automation",
		project_number="P-1234",
		customer_name="Sample Customer",
		created_at="2024-03-01T12:00:00",
		rows=(
			sopdf.records.BomRow("PN-001", "2", "Servo motor 400W", "M1, M2"),
			sopdf.records.BomRow("PN-002", "1", "Safety relay"),
		),
	)
	result = sopdf.composers.render_bill_of_materials(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	header_index = strings.index("PART NUMBER")
	assert strings[header_index:header_index + 4] == ["PART NUMBER", "QTY", "DESCRIPTION", "DESIGNATIONS"]
	assert strings[header_index + 4:] == ["PN-001", "2", "Servo motor 400W", "M1, M2", "PN-002", "1", "Safety relay"]
	assert "No items recorded" not in strings
	assert not result.overflowed


#============================================
def test_bill_of_materials_empty(heuristic_oracle) -> None:
	record = sopdf.records.BillOfMaterialsInput(
		business_name="Acme Automation",
		project_number="P-1234",
		customer_name="Sample Customer",
		created_at="2024-03-01T12:00:00",
	)
	result = sopdf.composers.render_bill_of_materials(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert strings[-1] == "No items recorded"


#============================================
def test_generate_returns_pdf_data_url(acceptance_record) -> None:
	data_url = sopdf.composers.generate_acceptance_sign_off_pdf(acceptance_record)
	assert data_url.startswith("data:application/pdf;base64,")
	pdf_bytes = pdf_fixture_utils.decode_pdf_data_url(data_url)
	assert pdf_bytes.startswith(b"%PDF-1.4")


#============================================
def test_generation_is_deterministic(acceptance_record, heuristic_oracle) -> None:
	first = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	second = sopdf.composers.render_acceptance_sign_off(acceptance_record, heuristic_oracle)
	assert first.pdf_bytes == second.pdf_bytes


#============================================
def test_bill_of_materials_missing_quantity_is_blank(heuristic_oracle) -> None:
	record = sopdf.records.load_bom_record({
		"project_number": "P-1234",
		"customer_name": "Sample Customer",
		"created_at": "2024-03-01T12:00:00",
		"rows": [{"part_number": "PN-001", "quantity": None, "description": "Cable gland"}],
	})
	result = sopdf.composers.render_bill_of_materials(record, heuristic_oracle)
	strings = rendered_strings(result.pdf_bytes)
	assert "None" not in strings
	header_index = strings.index("DESIGNATIONS")
	assert strings[header_index + 1:] == ["PN-001", "Cable gland"]
