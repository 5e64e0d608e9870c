"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import sys

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# PIP3 modules
import pytest

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.encoding
import signoff_pdf.metrics
import signoff_pdf.records
import pdf_fixture_utils


@pytest.fixture
def heuristic_oracle() -> sopdf.metrics.GlyphWidthOracle:
	return sopdf.metrics.GlyphWidthOracle(backend="heuristic")


@pytest.fixture
def jpeg_logo() -> sopdf.records.BusinessLogo:
	data_url = sopdf.encoding.encode_data_url(pdf_fixture_utils.make_jpeg_bytes(64, 32), "image/jpeg")
	return sopdf.records.BusinessLogo(data_url=data_url, width=64, height=32)


@pytest.fixture
def signature() -> tuple[sopdf.records.SignatureStrokes, sopdf.records.SignatureDimensions]:
	strokes = pdf_fixture_utils.make_strokes([
		[(10.0, 10.0), (60.0, 80.0), (120.0, 20.0)],
		[(200.0, 100.0), (300.0, 140.0)],
		[(5.0, 5.0)],
	])
	return strokes, sopdf.records.SignatureDimensions(width=400.0, height=150.0)


@pytest.fixture
def acceptance_record(signature) -> sopdf.records.AcceptanceSignOffInput:
	strokes, dimensions = signature
	return sopdf.records.AcceptanceSignOffInput(
		business_name="Acme Automation",
		project_number="P-1234",
		customer_name="Sample Customer (UK) Ltd",
		signed_by_name="Jordan Smith",
		signed_by_position="Plant Manager",
		decision="option1",
		completed_at="2024-01-01T09:30:00Z",
		signature_paths=strokes,
		signature_dimensions=dimensions,
		line_reference="Line 4",
		machines=(
			sopdf.records.ProjectMachine("M-100", ("T-1", "T-2")),
			sopdf.records.ProjectMachine("M-200", ()),
		),
		supplier_order_number="SO-77",
		customer_order_number="PO-88",
		salesperson_name="Alex Doe",
		start_date="2023-11-20",
		proposed_completion_date="2024-01-05",
	)


@pytest.fixture
def onsite_record(signature) -> sopdf.records.OnsiteReportInput:
	strokes, dimensions = signature
	return sopdf.records.OnsiteReportInput(
		business_name="Acme Automation",
		project_number="P-1234",
		customer_name="Sample Customer",
		report_date="2024-02-03",
		engineer_name="Sam Engineer",
		work_summary="Replaced the gripper and recalibrated the vision system.",
		signed_by_name="Jordan Smith",
		created_at="2024-02-03T16:45:00",
		signature_paths=strokes,
		signature_dimensions=dimensions,
		site_address="1 Factory Road",
		arrival_time="08:00",
		departure_time="16:30",
		customer_contact="Pat Contact",
		materials_used="Gripper kit x1",
		additional_notes="Return visit in two weeks.",
		signed_by_position="Supervisor",
	)
