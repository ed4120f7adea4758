from __future__ import annotations

import json

import pytest

from sfx_renamer.__main__ import EXIT_LOAD_FAILED, EXIT_OK, build_parser, run_cli


def make_sounds(tmp_path, *names):
    directory = tmp_path / "sounds"
    directory.mkdir()
    for name in names:
        (directory / name).write_bytes(b"RIFF")
    return directory


def test_parser_defaults():
    args = build_parser().parse_args(["terms.csv", "sounds"])
    assert args.engine is None
    assert not args.apply
    assert args.config is None


def test_preview_does_not_rename(tmp_path, catalogue_csv, capsys):
    sounds = make_sounds(tmp_path, "door slam 02.wav")

    assert run_cli([str(catalogue_csv), str(sounds)]) == EXIT_OK

    out = capsys.readouterr().out
    assert "door slam 02.wav -> DOORWood_" in out
    assert "1/1 files processed" in out
    assert (sounds / "door slam 02.wav").exists()


def test_apply_renames(tmp_path, catalogue_csv):
    sounds = make_sounds(tmp_path, "glass break 1.wav")

    assert run_cli([str(catalogue_csv), str(sounds), "--apply", "--engine", "fuzzy"]) == EXIT_OK

    names = [p.name for p in sounds.iterdir()]
    assert names == ["GLASBrk_玻璃_Glass Break_玻璃破碎_1.wav"]


def test_empty_directory(tmp_path, catalogue_csv, capsys):
    sounds = make_sounds(tmp_path, "readme.txt")
    assert run_cli([str(catalogue_csv), str(sounds)]) == EXIT_OK
    assert "No audio files found" in capsys.readouterr().out


def test_bad_catalogue(tmp_path):
    sounds = make_sounds(tmp_path, "wind.wav")
    assert run_cli([str(tmp_path / "missing.csv"), str(sounds)]) == EXIT_LOAD_FAILED


def test_bad_config(tmp_path, catalogue_csv):
    sounds = make_sounds(tmp_path, "wind.wav")
    assert run_cli([str(catalogue_csv), str(sounds), "--config", str(tmp_path / "none.json")]) == EXIT_LOAD_FAILED


def test_mistyped_config_key_is_ignored(tmp_path, catalogue_csv, capsys):
    sounds = make_sounds(tmp_path, "wind 3.wav")
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"matching": {"noun_bost": 2.0}}), encoding="utf-8")

    assert run_cli([str(catalogue_csv), str(sounds), "--config", str(profile)]) == EXIT_OK
    assert "1/1 files processed" in capsys.readouterr().out


def test_invalid_config_value(tmp_path, catalogue_csv, capsys):
    sounds = make_sounds(tmp_path, "wind 3.wav")
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"classification": {"strategies": {"pos": {"priority": "high"}}}}), encoding="utf-8")

    assert run_cli([str(catalogue_csv), str(sounds), "--config", str(profile)]) == EXIT_LOAD_FAILED
    assert "Invalid configuration" in capsys.readouterr().err


def test_config_profile(tmp_path, catalogue_csv, capsys):
    sounds = make_sounds(tmp_path, "wind 3.wav")
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"naming": {"elements": ["catID", "fxName"], "separator": "-"}}), encoding="utf-8")

    assert run_cli([str(catalogue_csv), str(sounds), "--config", str(profile)]) == EXIT_OK
    assert "wind 3.wav -> AMBWind-Wind-3.wav" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exit_info:
        run_cli(["--version"])
    assert exit_info.value.code == 0
    assert "SFX Renamer v1.0.0" in capsys.readouterr().out
