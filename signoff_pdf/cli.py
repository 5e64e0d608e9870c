"""
CLI entry points for document generation.
"""

# Standard Library
import argparse
import json
import pathlib
import time

# local repo modules
import signoff_pdf as sopdf
import signoff_pdf.composers
import signoff_pdf.config
import signoff_pdf.document
import signoff_pdf.errors
import signoff_pdf.metrics
import signoff_pdf.records


METRICS_BACKENDS = sopdf.config.METRICS_BACKENDS
DEFAULT_METRICS_BACKEND = sopdf.config.DEFAULT_METRICS_BACKEND

DOCUMENT_TYPES = {
	"acceptance": (
		sopdf.records.load_acceptance_record,
		sopdf.composers.render_acceptance_sign_off,
	),
	"onsite": (
		sopdf.records.load_onsite_record,
		sopdf.composers.render_onsite_report,
	),
	"bom": (
		sopdf.records.load_bom_record,
		sopdf.composers.render_bill_of_materials,
	),
}


#============================================
def build_oracle(args: argparse.Namespace) -> sopdf.metrics.GlyphWidthOracle:
	"""
	Build the width oracle from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		GlyphWidthOracle.
	"""
	return sopdf.metrics.GlyphWidthOracle(
		backend=args.metrics,
		regular_font_path=args.font_path,
		bold_font_path=args.bold_font_path,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Generate sign off, onsite report and BOM PDFs from JSON records.")
	parser.add_argument("document_type", choices=sorted(DOCUMENT_TYPES), help="Document to generate.")
	parser.add_argument("input_path", help="Input record JSON file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-u", "--data-url", dest="data_url_path", default=None, help="Also write the base64 data URL to this path.")

	metrics_group = parser.add_argument_group("Metrics")
	metrics_group.add_argument(
		"-m",
		"--metrics",
		dest="metrics",
		choices=METRICS_BACKENDS,
		default=DEFAULT_METRICS_BACKEND,
		help="Glyph width backend used for word wrapping.",
	)
	metrics_group.add_argument("-f", "--font-path", dest="font_path", default=None, help="TrueType font for the truetype backend.")
	metrics_group.add_argument("-b", "--bold-font-path", dest="bold_font_path", default=None, help="Bold TrueType font for the truetype backend.")

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> sopdf.document.RenderedDocument:
	"""
	Load the record, render the document and write the outputs.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderedDocument.
	"""
	print(f"Document type: {args.document_type}")
	print(f"Input record: {args.input_path}")
	print(f"Output PDF: {args.output_path}")
	print(f"Metrics backend: {args.metrics}")

	loader, renderer = DOCUMENT_TYPES[args.document_type]
	input_path = pathlib.Path(args.input_path)
	with input_path.open("r", encoding="utf-8") as handle:
		payload = json.load(handle)
	if not isinstance(payload, dict):
		raise sopdf.errors.RecordError("<root>", "expected a JSON object")
	record = loader(payload)

	start_time = time.perf_counter()
	result = renderer(record, build_oracle(args))
	render_time = time.perf_counter() - start_time

	output_path = pathlib.Path(args.output_path)
	output_path.write_bytes(result.pdf_bytes)
	print(f"Objects written: {result.object_count}")
	print(f"Bytes written: {len(result.pdf_bytes)}")
	if result.overflowed:
		print("Warning: content runs past the bottom margin of the page.")

	if args.data_url_path:
		data_url_path = pathlib.Path(args.data_url_path)
		data_url_path.write_text(result.data_url, encoding="ascii")
		print(f"Data URL written: {data_url_path}")

	print(f"Timing: render={render_time * 1000.0:.2f}ms")
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	run_pipeline(args)


if __name__ == "__main__":
	main()
