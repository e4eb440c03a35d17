"""Tests for settings, the CLI and the demo show."""

import json
import sys
from pathlib import Path

import pytest

from shows.basic_show import build_spec, run_headless
from vizanim.builder import AnimationBuilder
from vizanim.cli import main, parse_base_values, run_demo_basic
from vizanim.config import DEFAULT_FPS, PlaybackSettings, load_settings
from vizanim.spec import dumps


class TestSettings:
    def test_defaults(self) -> None:
        assert load_settings({}) == PlaybackSettings()

    def test_from_environment(self) -> None:
        settings = load_settings({"VIZANIM_FPS": "30", "VIZANIM_LOG_LEVEL": "debug"})
        assert settings.fps == 30.0
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw,expected", [("abc", DEFAULT_FPS), ("0", 1.0), ("1000", 240.0)])
    def test_fps_parsing(self, raw: str, expected: float) -> None:
        assert load_settings({"VIZANIM_FPS": raw}).fps == expected

    def test_bad_log_level(self) -> None:
        assert load_settings({"VIZANIM_LOG_LEVEL": "chatty"}).log_level == "WARNING"


@pytest.fixture
def spec_file(tmp_path: Path) -> Path:
    spec = (
        AnimationBuilder()
        .node("a")
        .to({"x": 320}, duration=1200)
        .wait(600)
        .to({"x": 120}, duration=1200)
        .build()
    )
    path = tmp_path / "spec.json"
    path.write_text(dumps(spec))
    return path


class TestCli:
    def test_inspect(self, spec_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["inspect", str(spec_file)])
        out = capsys.readouterr().out
        assert "viz-anim/1" in out
        assert "Duration: 3000ms" in out
        assert "node:a|x: 0-1200, 1800-3000" in out

    def test_sample(self, spec_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["sample", str(spec_file), "--at", "600", "--at", "2400", "--set", "node:a.x=120"])
        result = json.loads(capsys.readouterr().out)
        assert result["600"]["node:a|x"] == pytest.approx(220)
        assert result["2400"]["node:a|x"] == pytest.approx(220)

    def test_bad_version(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "old.json"
        path.write_text(json.dumps({"version": "viz-anim/0", "tweens": []}))
        with pytest.raises(SystemExit) as exc:
            main(["inspect", str(path)])
        assert exc.value.code == 1
        assert "Unsupported" in capsys.readouterr().err

    def test_non_object_tween(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"version": "viz-anim/1", "tweens": [1]}))
        with pytest.raises(SystemExit) as exc:
            main(["inspect", str(path)])
        assert exc.value.code == 1
        assert "must be an object" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["inspect", str(tmp_path / "nope.json")])

    def test_no_command(self) -> None:
        with pytest.raises(SystemExit):
            main([])

    def test_demo_basic_unavailable(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr(sys, "path", list(sys.path))
        monkeypatch.setitem(sys.modules, "shows.basic_show", None)
        with pytest.raises(SystemExit) as exc:
            run_demo_basic(fps=30)
        assert exc.value.code == 1
        assert "shows/basic_show.py" in capsys.readouterr().err

    def test_parse_base_values(self) -> None:
        assert parse_base_values(["edge:a->b.opacity=0.5"]) == {"edge:a->b|opacity": 0.5}
        with pytest.raises(ValueError):
            parse_base_values(["node:a=3"])


class TestBasicShow:
    def test_spec_shape(self) -> None:
        spec = build_spec()
        assert len(spec.extensions) == 1
        assert max(t.end for t in spec.tweens) == 3000

    def test_runs_to_completion(self) -> None:
        scene = run_headless()
        assert scene.node("a").runtime["x"] == 120
        assert scene.node("b").runtime["opacity"] == 1.0
        assert scene.edge("a->b").runtime["strokeDashoffset"] == -200
        assert scene.overlay("progress").params["value"] == 1.0
