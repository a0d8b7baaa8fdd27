"""End-to-end pipeline tests against a temporary workspace."""
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

from glyphpack.config import Settings
from glyphpack.errors import FilesystemError, InvalidPixelTokenError, MalformedGlyphError, NonSquareGlyphError
from glyphpack.pipeline import compile_icons, read_icon_set, run

from piskel_source import piskel_source

CROSS = ["#..#", ".##.", ".##.", "#..#"]
TOP_BAR = ["####", "....", "....", "...."]


class Ticker:
    """Clock that advances one second per call."""

    def __init__(self):
        self.now = datetime(2024, 5, 1, 8, 0, 0)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


class PipelineTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.input = self.root / "icons-input.c"
        self.out_dir = self.root / "src" / "icons"
        self.config = Settings(INPUT_PATH=str(self.input), OUTPUT_DIR=str(self.out_dir))

    def tearDown(self):
        self._tmp.cleanup()

    def write_input(self, text):
        self.input.write_text(text, encoding="utf-8")

    def output_text(self, size=4):
        return (self.out_dir / f"icons{size}.rs").read_text(encoding="utf-8")


class TestCompile(PipelineTestCase):

    def test_document_contents(self):
        self.write_input(piskel_source([CROSS, TOP_BAR]))
        document = compile_icons(read_icon_set(self.config), self.config)

        self.assertEqual(document.path, self.out_dir / "icons4.rs")
        self.assertEqual(document.struct_name, "Icons4")
        self.assertEqual(
            [e.packed for e in document.entries],
            [
                ("0b10010000", "0b01100000", "0b01100000", "0b10010000"),
                ("0b11110000", "0b00000000", "0b00000000", "0b00000000"),
            ],
        )
        self.assertIn("pub Icons4: 4 {", document.text)
        self.assertIn("         *    #  #    *", document.text)

    def test_order_preserved(self):
        self.write_input(piskel_source([TOP_BAR, CROSS]))
        text = compile_icons(read_icon_set(self.config), self.config).text
        self.assertLess(text.index("0b11110000"), text.index("0b10010000"))
        self.assertLess(text.index("ICON_0"), text.index("ICON_1"))

    def test_frame_count_mismatch(self):
        source = piskel_source([CROSS]).replace("FRAME_COUNT 1", "FRAME_COUNT 2")
        self.write_input(source)
        with self.assertRaises(MalformedGlyphError):
            compile_icons(read_icon_set(self.config), self.config)

    def test_renderer_failure_is_not_fatal(self):
        self.write_input(piskel_source([CROSS]))
        with patch("glyphpack.pipeline.render_glyph", side_effect=RuntimeError("boom")):
            with self.assertLogs("glyphpack.pipeline", level="WARNING"):
                document = compile_icons(read_icon_set(self.config), self.config)
        self.assertIn("// icon #0", document.text)
        self.assertIn("0b10010000", document.text)


class TestRun(PipelineTestCase):

    def test_writes_output(self):
        self.write_input(piskel_source([CROSS]))
        run(self.config, Ticker())
        self.assertIn("ICON_0: icon_0 = &[", self.output_text())

    def test_repeated_runs_archive_each_previous_output(self):
        clock = Ticker()
        self.write_input(piskel_source([CROSS]))
        run(self.config, clock)
        self.write_input(piskel_source([TOP_BAR]))
        run(self.config, clock)
        self.write_input(piskel_source([TOP_BAR, CROSS]))
        run(self.config, clock)

        archives = sorted(p.name for p in self.out_dir.glob("icons4_*.old.rs"))
        self.assertEqual(len(archives), 2)
        self.assertEqual(len(set(archives)), 2)

        latest = self.output_text()
        self.assertIn("ICON_1", latest)
        self.assertLess(latest.index("0b11110000"), latest.index("0b10010000"))

    def test_invalid_input_writes_nothing(self):
        self.write_input(piskel_source([CROSS]).replace("0xff000000", "0x12345678", 1))
        with self.assertRaises(InvalidPixelTokenError):
            run(self.config, Ticker())
        self.assertFalse(self.out_dir.exists())

    def test_invalid_input_keeps_previous_output(self):
        self.write_input(piskel_source([CROSS]))
        run(self.config, Ticker())
        before = self.output_text()

        self.write_input(piskel_source([CROSS], width=4, height=5))
        with self.assertRaises(NonSquareGlyphError):
            run(self.config, Ticker())

        self.assertEqual(self.output_text(), before)
        self.assertEqual(list(self.out_dir.glob("*.old.rs")), [])

    def test_missing_input(self):
        with self.assertRaises(FilesystemError):
            run(self.config, Ticker())

    def test_non_utf8_input(self):
        source = "/* \xa9 2024 Example */\n" + piskel_source([CROSS])
        self.input.write_bytes(source.encode("latin-1"))
        with self.assertRaises(FilesystemError) as ctx:
            run(self.config, Ticker())
        self.assertIn("not valid UTF-8", str(ctx.exception))
        self.assertFalse(self.out_dir.exists())


if __name__ == "__main__":
    unittest.main()
