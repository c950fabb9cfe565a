"""
Tests for the command-line interface.

main() attaches its log handler to sys.stderr at call time, so capsys
sees everything it reports.
"""
from pathlib import Path

import pytest
from PIL import Image

from cutout import __version__
from cutout.cli import build_parser, main
from cutout.core.models import Origin


def _files(directory: Path):
    return sorted(p.name for p in directory.iterdir())


# ─────────────────────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

def test_parser_defaults():
    args = build_parser().parse_args(["-c", "a:0x0:1x1", "in.png"])
    assert args.origin is Origin.TOP_LEFT
    assert args.capture == ["a:0x0:1x1"]
    assert args.inputs == [Path("in.png")]
    assert args.verbose is False
    assert args.dry_run is False
    assert args.jobs is None


def test_parser_repeatable_capture_and_aliases():
    args = build_parser().parse_args(
        ["--origin", "Bottom_Left", "-c", "a:0x0:1x1", "--capture", "b:1x1:2x2", "-v", "--dry-run", "-j", "3", "x", "y"]
    )
    assert args.origin is Origin.BOTTOM_LEFT
    assert args.capture == ["a:0x0:1x1", "b:1x1:2x2"]
    assert args.inputs == [Path("x"), Path("y")]
    assert args.verbose and args.dry_run
    assert args.jobs == 3


def test_invalid_origin_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--origin", "middle", "-c", "a:0x0:1x1", "in.png"])
    assert exc.value.code == 2
    assert "Invalid origin 'middle'. Supported values: tl, bl" in capsys.readouterr().err


def test_capture_is_required(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["in.png"])
    assert exc.value.code == 2


def test_inputs_are_required():
    with pytest.raises(SystemExit) as exc:
        main(["-c", "a:0x0:1x1"])
    assert exc.value.code == 2


@pytest.mark.parametrize("jobs", ["0", "-2", "many"])
def test_invalid_jobs_is_usage_error(jobs):
    with pytest.raises(SystemExit) as exc:
        main(["-j", jobs, "-c", "a:0x0:1x1", "in.png"])
    assert exc.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


# ─────────────────────────────────────────────────────────────────────────────
# Runs
# ─────────────────────────────────────────────────────────────────────────────

def test_bad_spec_exits_before_touching_images(tmp_path, capsys):
    # Input does not exist; a spec error must be reported first
    code = main(["-c", "ok:0x0:1x1", "-c", "bad:1x1:0x5", str(tmp_path / "missing.png")])

    assert code == 1
    err = capsys.readouterr().err
    assert "Width and height must be positive in capture spec 'bad:1x1:0x5'" in err
    assert "missing.png" not in err


def test_normal_run_writes_outputs(make_image, capsys):
    a = make_image("a.png", size=(100, 100))
    b = make_image("b.jpg", size=(100, 100))

    code = main(["-c", "tl:0x0:10x10", "-c", "br:90x90:10x10", str(a), str(b)])

    assert code == 0
    assert _files(a.parent) == ["a.png", "a_br.png", "a_tl.png", "b.jpg", "b_br.jpg", "b_tl.jpg"]
    assert capsys.readouterr().err == ""


def test_bottom_left_origin(tmp_path):
    img = Image.new("RGB", (4, 4), "black")
    img.putpixel((0, 3), (255, 0, 0))
    path = tmp_path / "p.png"
    img.save(path)

    assert main(["--origin", "bl", "-c", "corner:0x0:1x1", str(path)]) == 0

    with Image.open(tmp_path / "p_corner.png") as crop:
        assert crop.getpixel((0, 0)) == (255, 0, 0)


def test_failing_image_sets_exit_code_but_others_written(make_image, capsys):
    good = make_image("good.png", size=(100, 100))
    small = make_image("small.png", size=(20, 20))

    code = main(["-j", "2", "-c", "big:0x0:50x50", str(good), str(small)])

    assert code == 1
    assert good.with_name("good_big.png").exists()
    assert not small.with_name("small_big.png").exists()
    err = capsys.readouterr().err
    assert f"Failed to process input image: {small}" in err
    assert "exceeds image bounds 20x20" in err
    assert "1 of 2 images failed" in err


@pytest.mark.parametrize("jobs", ["1", "2"])
def test_corrupt_image_reported_not_raised(make_image, make_corrupt_png, capsys, jobs):
    good = make_image("good.png", size=(64, 64))
    corrupt = make_corrupt_png("bad.png")

    code = main(["-j", jobs, "-c", "a:0x0:10x10", str(good), str(corrupt)])

    assert code == 1
    assert good.with_name("good_a.png").exists()
    assert not corrupt.with_name("bad_a.png").exists()
    err = capsys.readouterr().err
    assert f"Failed to process input image: {corrupt}" in err
    assert "broken PNG file" in err
    assert "1 of 2 images failed; 1 files were written" in err


def test_verbose_prints_timings(make_image, capsys):
    a = make_image("a.png")

    assert main(["-v", "-c", "x:0x0:5x5", str(a)]) == 0

    err = capsys.readouterr().err
    assert f"Processed {a} (decode:" in err
    assert "=== Timing Summary ===" in err


def test_dry_run_writes_nothing_and_lists_outputs(make_image, capsys):
    a = make_image("a.png", size=(100, 100))

    code = main(["--dry-run", "-c", "one:0x0:10x10", "-c", "two:10x10:10x10", str(a)])

    assert code == 0
    assert _files(a.parent) == ["a.png"]
    err = capsys.readouterr().err
    assert f"'one' -> {a.with_name('a_one.png')}" in err
    assert f"'two' -> {a.with_name('a_two.png')}" in err
    assert "Validation successful" in err


def test_dry_run_invalid_spec_fails_and_writes_nothing(make_image, capsys):
    a = make_image("a.png", size=(100, 100))

    code = main(["--dry-run", "--origin", "bl", "-c", "high:0x101:10x10", str(a)])

    assert code == 1
    assert _files(a.parent) == ["a.png"]
    assert "y=101 is outside image height=100" in capsys.readouterr().err


def test_duplicate_names_warn_but_run(make_image, capsys):
    a = make_image("a.png", size=(100, 100))

    code = main(["-c", "dup:0x0:10x10", "-c", "dup:5x5:20x20", str(a)])

    assert code == 0
    with Image.open(a.with_name("a_dup.png")) as crop:
        assert crop.size == (20, 20)  # last one wins
    assert "capture name 'dup' used 2 times" in capsys.readouterr().err
