"""
Tests for the command line entry point and the logging setup.
"""
import json
import logging

import pytest

from fencelayout.logging_config import setup_logging
from fencelayout.main import build_parser, main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("fencelayout")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def spec_file(tmp_path, full_spec):
    path = tmp_path / "gate.json"
    path.write_text(json.dumps(full_spec.to_dict()), encoding="utf-8")
    return path


class TestMain:

    def test_writes_svg(self, spec_file, tmp_path):
        out = tmp_path / "gate.svg"
        assert main([str(spec_file), "-o", str(out)]) == 0
        assert "<svg" in out.read_text(encoding="utf-8")

    def test_writes_png_with_scale_override(self, spec_file, tmp_path):
        out = tmp_path / "gate.png"
        assert main([str(spec_file), "-o", str(out), "--dpi", "40", "--scale", "0.05"]) == 0
        assert out.read_bytes().startswith(b"\x89PNG")

    def test_sheet(self, tmp_path):
        sheet = tmp_path / "sheet.json"
        sheet.write_text(json.dumps({
            "scale": 0.1,
            "modules": [
                {"title": "Span", "outer_w": 2000, "outer_h": 1200, "with_frame": False,
                 "panels": [100] * 6, "gaps": [120] * 5},
                {"title": "Wicket", "outer_w": 1000, "outer_h": 1200, "frame_thickness": 50,
                 "panels": [100] * 6, "gaps": [70] * 7},
            ],
        }), encoding="utf-8")
        out = tmp_path / "sheet.svg"
        assert main([str(sheet), "-o", str(out)]) == 0
        content = out.read_text(encoding="utf-8")
        assert ">Span</text>" in content and ">Wicket</text>" in content

    @pytest.mark.parametrize("content", ["{ broken", json.dumps({"outer_w": 1})])
    def test_invalid_input(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        assert main([str(path), "-o", str(tmp_path / "out.svg")]) == 1
        assert not (tmp_path / "out.svg").exists()

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.json"), "-o", str(tmp_path / "out.svg")]) == 1

    def test_bad_suffix(self, spec_file, tmp_path):
        assert main([str(spec_file), "-o", str(tmp_path / "out.bmp")]) == 1

    def test_bad_scale(self, spec_file, tmp_path):
        assert main([str(spec_file), "-o", str(tmp_path / "out.svg"), "--scale", "0"]) == 1

    def test_unbalanced_spec_warns(self, tmp_path, scenario_spec, caplog):
        path = tmp_path / "scenario.json"
        path.write_text(json.dumps(scenario_spec.to_dict()), encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="fencelayout"):
            assert main([str(path), "-o", str(tmp_path / "out.svg")]) == 0
        assert any("sum to 1360.00" in r.getMessage() for r in caplog.records)

    def test_parser_requires_output(self, spec_file):
        with pytest.raises(SystemExit):
            build_parser().parse_args([str(spec_file)])


class TestLogging:

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        logging.getLogger("fencelayout.test").info("hello")
        for handler in logging.getLogger("fencelayout").handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "fencelayout.test - INFO - hello" in text

    def test_handlers_not_duplicated(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("fencelayout").handlers) == 1

    def test_cli_log_file_is_overwritten(self, spec_file, tmp_path):
        log_file = tmp_path / "run.log"
        log_file.write_text("stale entry\n", encoding="utf-8")
        assert main([str(spec_file), "-o", str(tmp_path / "gate.svg"), "--log-file", str(log_file)]) == 0
        text = log_file.read_text(encoding="utf-8")
        assert "stale entry" not in text
        assert "Done: 1 module(s) written to" in text
