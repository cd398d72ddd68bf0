"""
End-to-end expansion tests

Tests the command line pipeline: input file → env_check → source_read →
shortcodes_expand → output_write, for text, JSON and YAML sources.
"""

import json
from pathlib import Path

import pytest
import yaml

from atcode.__main__ import (
    env_check,
    source_read,
    shortcodes_expand,
    output_write,
    results_report,
    format_detect,
)
from atcode.models import ProgramState, pipeline


def state_make(inputdir: Path, outputdir: Path, inputFile: str, **kwargs) -> ProgramState:
    """Initial state as the CLI would build it"""
    return ProgramState(inputdir=inputdir, outputdir=outputdir, inputFile=inputFile, verbosity=0, **kwargs)


def pipeline_run(state: ProgramState) -> ProgramState:
    return pipeline(state, env_check, source_read, shortcodes_expand, output_write, results_report)


@pytest.fixture
def dirs(tmp_path):
    inputdir = tmp_path / "in"
    outputdir = tmp_path / "out"
    inputdir.mkdir()
    return inputdir, outputdir


class TestFormatDetection:
    """Test source format from suffix"""

    @pytest.mark.parametrize("name, expected", [
        ("a.json", "json"),
        ("a.yaml", "yaml"),
        ("a.YML", "yaml"),
        ("a.txt", "text"),
        ("README", "text"),
    ])
    def test_suffixes(self, name, expected):
        assert format_detect(Path(name)) == expected


class TestTextExpansion:
    """Test plain text sources"""

    def test_text_file(self, dirs):
        """Text is expanded as one string"""
        inputdir, outputdir = dirs
        (inputdir / "notes.txt").write_text("Root: [@cwd]\nKeep \\[@cwd] and [@unknown]\n")

        state = pipeline_run(state_make(inputdir, outputdir, "notes.txt", cwd="/srv/site"))

        assert (outputdir / "notes.txt").read_text() == "Root: /srv/site\nKeep [@cwd] and [@unknown]\n"
        assert state.expandResult == {"status": True, "format": "text", "match_count": 3}

    def test_cwd_defaults_to_inputdir(self, dirs):
        """Without --cwd, [@cwd] is the resolved inputdir"""
        inputdir, outputdir = dirs
        (inputdir / "a.txt").write_text("[@cwd]")

        pipeline_run(state_make(inputdir, outputdir, "a.txt"))

        assert (outputdir / "a.txt").read_text() == str(inputdir.resolve())

    def test_output_file_name(self, dirs):
        """--outputFile renames the result"""
        inputdir, outputdir = dirs
        (inputdir / "a.txt").write_text("x")

        state = pipeline_run(state_make(inputdir, outputdir, "a.txt", outputFile="sub/b.txt"))

        assert state.outputTargetFile == outputdir / "sub" / "b.txt"
        assert (outputdir / "sub" / "b.txt").read_text() == "x"


class TestTreeExpansion:
    """Test JSON and YAML sources"""

    def test_json_file(self, dirs):
        """JSON string leaves are expanded, structure kept"""
        inputdir, outputdir = dirs
        source = {"root": "[@cwd]", "items": ["[@cwd]/a", 2], "flag": True}
        (inputdir / "config.json").write_text(json.dumps(source))

        state = pipeline_run(state_make(inputdir, outputdir, "config.json", cwd="/c"))

        assert json.loads((outputdir / "config.json").read_text()) == {
            "root": "/c",
            "items": ["/c/a", 2],
            "flag": True,
        }
        assert state.expandResult["format"] == "json"

    def test_yaml_file(self, dirs):
        """YAML string leaves are expanded, key order kept"""
        inputdir, outputdir = dirs
        (inputdir / "settings.yaml").write_text("zeta: '[@cwd]'\nalpha:\n  - plain\n  - '[@cwd]'\n")

        pipeline_run(state_make(inputdir, outputdir, "settings.yaml", cwd="/c"))

        text = (outputdir / "settings.yaml").read_text()
        assert yaml.safe_load(text) == {"zeta": "/c", "alpha": ["plain", "/c"]}
        assert text.index("zeta") < text.index("alpha")


class TestFailures:
    """Test exits on bad input"""

    def test_missing_input(self, dirs):
        """Missing input file exits with status 1"""
        inputdir, outputdir = dirs

        with pytest.raises(SystemExit) as info:
            env_check(state_make(inputdir, outputdir, "missing.txt"))

        assert info.value.code == 1

    def test_invalid_json(self, dirs):
        """Unparseable JSON exits with status 1"""
        inputdir, outputdir = dirs
        (inputdir / "bad.json").write_text("{not json")

        with pytest.raises(SystemExit):
            source_read(env_check(state_make(inputdir, outputdir, "bad.json")))

    def test_report_without_result(self, dirs):
        """results_report refuses a state that was never expanded"""
        inputdir, outputdir = dirs

        with pytest.raises(SystemExit):
            results_report(state_make(inputdir, outputdir, "a.txt"))
