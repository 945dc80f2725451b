"""Tests for the wgslr command-line interface."""

import json
import pytest
from pathlib import Path

from wgslr.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


class TestCli:
    def test_writes_json(self, tmp_path, capsys):
        main([str(FIXTURES / "triangle.wgsl"), "-o", str(tmp_path)])
        out_path = tmp_path / "triangle.reflect.json"
        assert out_path.exists()
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert data["source"] == "triangle.wgsl"
        assert f"Wrote {out_path}" in capsys.readouterr().out

    def test_default_output_dir(self, tmp_path):
        shader = tmp_path / "s.wgsl"
        shader.write_text("@vertex fn vs() {}", encoding="utf-8")
        main([str(shader)])
        assert (tmp_path / "s.reflect.json").exists()

    def test_stdout(self, capsys):
        main([str(FIXTURES / "particles.wgsl"), "--stdout"])
        data = json.loads(capsys.readouterr().out)
        assert data["entry_points"]["compute"] == ["simulate"]

    def test_dump_tree(self, capsys):
        main([str(FIXTURES / "triangle.wgsl"), "--dump-tree"])
        assert capsys.readouterr().out.startswith("(translation_unit")

    def test_no_input_prints_help(self, capsys):
        with pytest.raises(SystemExit) as info:
            main([])
        assert info.value.code == 0
        assert "usage" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as info:
            main([str(tmp_path / "nope.wgsl")])
        assert info.value.code == 1
        assert "file not found" in capsys.readouterr().err

    def test_reflection_error(self, tmp_path, capsys):
        shader = tmp_path / "bad.wgsl"
        shader.write_text("var<private> x: f32;", encoding="utf-8")
        with pytest.raises(SystemExit) as info:
            main([str(shader), "--stdout"])
        assert info.value.code == 1
        assert "Error: Unknown address_space: private" in capsys.readouterr().err
