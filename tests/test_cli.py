from __future__ import annotations

import json
from pathlib import Path

import pytest

from scenekit.cli import main

GAUGE_DOC = {
    "fields": {"dimensions": ["kpi"], "measures": ["pct"]},
    "rows": [{"kpi": {"value": "NPS"}, "pct": {"value": 62}}],
}


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("SCENEKIT_WIDTH", "SCENEKIT_HEIGHT", "SCENEKIT_COORDINATE_PRECISION", "SCENEKIT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def _write_query(tmp_path: Path, doc: dict, name: str = "q.json") -> Path:
    p = tmp_path / name
    p.write_text(json.dumps(doc))
    return p


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_render_writes_scene_and_fingerprint(tmp_path: Path, capsys) -> None:
    q = _write_query(tmp_path, GAUGE_DOC)
    out = tmp_path / "out" / "scene.json"

    code = _run(["render", "--kind", "gauge", "--data", str(q), "--out", str(out), "--precision", "2"])

    assert code == 0
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["chart"] == "gauge"
    assert (doc["width"], doc["height"]) == (600.0, 400.0)
    stdout = capsys.readouterr().out
    assert "[INFO] Wrote scene to" in stdout
    assert "[INFO] Fingerprint" in stdout


def test_render_to_stdout_uses_settings_and_options(tmp_path: Path, capsys) -> None:
    q = _write_query(tmp_path, GAUGE_DOC)
    (tmp_path / "scenekit.toml").write_text("[engine]\nwidth = 320\nheight = 240\n")
    opts = tmp_path / "opts.toml"
    opts.write_text("[options]\ntitle_display = false\nshow_min_max_labels = false\n")

    code = _run(["render", "--kind", "gauge", "--data", str(q), "--options", str(opts)])

    assert code == 0
    doc = json.loads(capsys.readouterr().out)
    assert (doc["width"], doc["height"]) == (320.0, 240.0)
    assert [p["kind"] for p in doc["primitives"]] == ["arc", "arc", "polygon", "text"]


def test_render_failed_scene_exits_one(tmp_path: Path, capsys) -> None:
    doc = dict(GAUGE_DOC, rows=GAUGE_DOC["rows"] * 2)
    q = _write_query(tmp_path, doc)

    code = _run(["render", "--kind", "gauge", "--data", str(q)])

    assert code == 1
    captured = capsys.readouterr()
    assert json.loads(captured.out)["error"] is not None
    assert "single value" in captured.err


def test_render_from_csv_with_html_preview(tmp_path: Path, capsys) -> None:
    data = tmp_path / "grid.csv"
    data.write_text("x,y,v\nA,P,1\nB,P,2\nA,Q,3\n")
    html = tmp_path / "grid.html"

    code = _run(
        ["render", "--kind", "heatmap", "--data", str(data), "--out", "scene.json", "--html", str(html)]
    )

    assert code == 0
    assert html.exists()
    assert (tmp_path / "scene.json").exists()
    assert "[INFO] Wrote preview to" in capsys.readouterr().out


def test_render_bad_options_exit_two(tmp_path: Path, capsys) -> None:
    q = _write_query(tmp_path, GAUGE_DOC)
    opts = tmp_path / "opts.json"
    opts.write_text('{"gauge_min": "low"}')

    assert _run(["render", "--kind", "gauge", "--data", str(q), "--options", str(opts)]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_validate_ok_and_failure(tmp_path: Path, capsys) -> None:
    q = _write_query(tmp_path, GAUGE_DOC)
    assert _run(["validate", "--kind", "gauge", "--data", str(q)]) == 0
    assert "[INFO] OK: gauge dims=1 measures=1 rows=1" in capsys.readouterr().out

    assert _run(["validate", "--kind", "heatmap", "--data", str(q)]) == 1
    assert "two dimensions" in capsys.readouterr().err


def test_validate_missing_file_exits_two(tmp_path: Path, capsys) -> None:
    assert _run(["validate", "--kind", "radar", "--data", str(tmp_path / "nope.json")]) == 2
    assert "not found" in capsys.readouterr().err


def test_fingerprint_is_stable(tmp_path: Path, capsys) -> None:
    q = _write_query(tmp_path, GAUGE_DOC)
    _run(["render", "--kind", "gauge", "--data", str(q), "--out", "scene.json"])
    written = capsys.readouterr().out.splitlines()[-1].split()[-1]

    assert _run(["fingerprint", "--scene", "scene.json"]) == 0
    digest = capsys.readouterr().out.strip()
    assert len(digest) == 64
    assert int(digest, 16) >= 0
    assert digest == written


def test_unknown_command(capsys) -> None:
    assert _run(["explode"]) == 2
    assert "Unknown command" in capsys.readouterr().err


def test_no_args_prints_help(capsys) -> None:
    main([])
    assert "scenekit" in capsys.readouterr().out


def test_render_negative_width_is_an_input_error(tmp_path: Path, capsys) -> None:
    q = _write_query(tmp_path, GAUGE_DOC)

    code = _run(["render", "--kind", "gauge", "--data", str(q), "--width", "-5"])

    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err


@pytest.mark.parametrize("command", ["render", "validate"])
def test_non_utf8_query_is_an_input_error(tmp_path: Path, capsys, command: str) -> None:
    q = tmp_path / "q.json"
    q.write_bytes(b'\xff\xfe{"rows": []}')

    code = _run([command, "--kind", "gauge", "--data", str(q)])

    assert code == 2
    assert "invalid JSON" in capsys.readouterr().err
