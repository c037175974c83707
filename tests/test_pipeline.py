from __future__ import annotations

import tempfile
from pathlib import Path
import unittest

import fitz  # PyMuPDF

from cvlayout import config
from cvlayout.layout.planner import layout_document
from cvlayout.models import LayoutReport, ResumeDocument, SectionHeightEstimate, SectionKind, SpacingPlan
from cvlayout.pipeline.ingest import parse_document, slug_from_title
from cvlayout.pipeline.render_pdf import content_bottom_mm, place_sections, section_offsets, write_pdf
from cvlayout.storage import artifact_path

from conftest import FULL_PAYLOAD, SMALL_PAYLOAD


def _long_projects_document() -> ResumeDocument:
    description = " ".join(["overflowing"] * 48)
    return parse_document(
        {
            "projects": [{"title": f"Project {i}", "description": description} for i in range(5)],
            "accomplishments": ["Shipped the planner"],
            "awards": [{"title": "Prize"}],
        }
    )


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        config.set_out_dir(Path(self.temp_dir.name))

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_slug_generation(self) -> None:
        self.assertEqual(slug_from_title("Ada Lovelace"), "ada-lovelace")

    def test_artifact_paths_live_under_out_dir(self) -> None:
        path = artifact_path("ada-lovelace", "pdf_a4")
        self.assertEqual(path, Path(self.temp_dir.name) / "ada-lovelace" / "a4.pdf")
        self.assertTrue(path.parent.is_dir())

    def test_pdf_output(self) -> None:
        document = parse_document(FULL_PAYLOAD)
        template = config.get_template("template-2")
        report = layout_document(document, config.page_budget_for(template))
        a4 = write_pdf("ada-lovelace", document, report, template)
        self.assertTrue(a4.exists())
        self.assertTrue(a4.read_bytes().startswith(b"%PDF"))

    def test_distributed_offsets_end_at_the_budget(self) -> None:
        report = layout_document(parse_document(SMALL_PAYLOAD), 207)
        offsets = section_offsets(report)
        self.assertEqual(offsets, [0.0, 195.0])
        last = report.estimates[-1]
        self.assertEqual(offsets[-1] + last.height_mm, report.page_budget_mm)

    def test_packed_offsets_use_planned_spacing(self) -> None:
        estimates = tuple(SectionHeightEstimate(kind=SectionKind.PROJECTS, height_mm=h) for h in (20, 30, 10))
        report = LayoutReport(SpacingPlan(12, False), 207, 60, estimates)
        self.assertEqual(section_offsets(report), [0.0, 32.0, 74.0])

    def test_empty_document_has_no_offsets(self) -> None:
        report = layout_document(ResumeDocument(), 207)
        self.assertEqual(section_offsets(report), [])

    def test_sections_follow_wrapped_text(self) -> None:
        document = _long_projects_document()
        report = layout_document(document, 207)
        placed = place_sections(document, report, config.get_template("template-1"))
        self.assertEqual(placed[0].top_mm, 0.0)
        self.assertGreater(placed[0].bottom_mm, section_offsets(report)[1])
        for above, below in zip(placed, placed[1:]):
            self.assertGreaterEqual(below.top_mm, above.bottom_mm + report.plan.inter_section_spacing_mm)
        self.assertEqual(content_bottom_mm(placed), placed[-1].bottom_mm)

    def test_short_text_keeps_planned_offsets(self) -> None:
        report = layout_document(parse_document(SMALL_PAYLOAD), 207)
        placed = place_sections(parse_document(SMALL_PAYLOAD), report, config.get_template(None))
        self.assertEqual([p.top_mm for p in placed], section_offsets(report))

    def test_wrapped_text_stays_above_the_next_section_title(self) -> None:
        document = _long_projects_document()
        template = config.get_template("template-1")
        report = layout_document(document, config.page_budget_for(template))
        a4 = write_pdf("long-projects", document, report, template)
        with fitz.open(a4) as doc:
            page = doc.load_page(0)
            titles = page.search_for("Key Accomplishments")
            words = [word for word in page.get_text("words") if word[4] == "overflowing"]
        self.assertEqual(len(titles), 1)
        self.assertTrue(words)
        self.assertLessEqual(max(word[3] for word in words), titles[0].y0)


if __name__ == "__main__":
    unittest.main()
