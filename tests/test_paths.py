"""Tests for output path construction."""

from pathlib import Path

from ditherer.core.algorithms import AlgorithmName
from ditherer.utils.paths import DEFAULT_OUTPUT_DIR, output_path_for


class TestOutputPathFor:
    def test_floyd(self):
        path = output_path_for("photos/cat.jpg", AlgorithmName.FLOYD_STEINBERG)
        assert path == Path("out/cat.floyd.jpg")

    def test_atkinson_custom_dir(self, tmp_path):
        path = output_path_for(Path("/a/b/dog.png"), "atkinson", tmp_path)
        assert path == tmp_path / "dog.atkinson.png"

    def test_keeps_extension_case(self):
        assert output_path_for("x.PNG", "floyd").name == "x.floyd.PNG"

    def test_only_last_suffix_replaced(self):
        assert output_path_for("archive.tar.gif", "floyd").name == "archive.tar.floyd.gif"

    def test_no_extension_falls_back_to_png(self):
        assert output_path_for("scan", "atkinson").name == "scan.atkinson.png"

    def test_default_dir(self):
        assert DEFAULT_OUTPUT_DIR == Path("out")
