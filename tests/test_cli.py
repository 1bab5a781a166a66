import sys

import pytest

import config
import miring_eval
from config import PathConfig, ValidatorConfig


@pytest.fixture
def hml_dir(tmp_path, valid_hml, hml_missing_quality_score):
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    (input_dir / "valid.xml").write_text(valid_hml, encoding="utf-8")
    (input_dir / "missing_quality_score.xml").write_text(hml_missing_quality_score, encoding="utf-8")
    return input_dir


@pytest.fixture
def fresh_path_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_global_path_config", None)


def test_run_validation_writes_reports(hml_dir, tmp_path):
    output_dir = tmp_path / "results"
    validator_config = ValidatorConfig(paths=PathConfig(tmp_path))

    assert miring_eval.run_validation(str(hml_dir), str(output_dir), config=validator_config, quiet=True)

    assert (output_dir / "xml" / "valid_miring_report.xml").exists()
    assert (output_dir / "xml" / "missing_quality_score_miring_report.xml").exists()
    assert (output_dir / "json" / "miring_validation_report.json").exists()
    assert (output_dir / "miring_validation_report.xlsx").exists()


def test_run_validation_selected_formats(hml_dir, tmp_path):
    output_dir = tmp_path / "results"
    validator_config = ValidatorConfig(paths=PathConfig(tmp_path), output_formats=["json"])

    assert miring_eval.run_validation(str(hml_dir), str(output_dir), config=validator_config, quiet=True)

    assert (output_dir / "json" / "miring_validation_report.json").exists()
    assert not (output_dir / "xml").exists()
    assert not (output_dir / "miring_validation_report.xlsx").exists()


def test_run_validation_missing_directory(tmp_path):
    assert not miring_eval.run_validation(str(tmp_path / "absent"), str(tmp_path / "out"), quiet=True)


def test_run_validation_bad_configuration(hml_dir, tmp_path):
    validator_config = ValidatorConfig(paths=PathConfig(tmp_path), catalog_path=str(tmp_path / "absent.json"))
    assert not miring_eval.run_validation(str(hml_dir), str(tmp_path / "out"), config=validator_config, quiet=True)


def test_single_file_prints_report(hml_dir, capsys):
    assert miring_eval.run_single_file(str(hml_dir / "valid.xml"))

    output = capsys.readouterr().out
    assert output.startswith("<?xml")
    assert 'miringCompliant="true"' in output


def test_single_file_not_compliant(hml_dir, capsys):
    assert not miring_eval.run_single_file(str(hml_dir / "missing_quality_score.xml"))
    assert 'miringRuleID="5.6.a"' in capsys.readouterr().out


def test_main_exit_status(hml_dir, monkeypatch, fresh_path_config):
    monkeypatch.setattr(sys, "argv", ["miring_eval.py", "--xml-file", str(hml_dir / "valid.xml")])

    with pytest.raises(SystemExit) as exit_info:
        miring_eval.main()

    assert exit_info.value.code == 0


def test_main_batch_run(hml_dir, tmp_path, monkeypatch, fresh_path_config):
    output_dir = tmp_path / "out"
    monkeypatch.setattr(sys, "argv", [
        "miring_eval.py", "--xml-dir", str(hml_dir), "--output-dir", str(output_dir),
        "--no-schematron", "--formats", "json", "-q"
    ])

    with pytest.raises(SystemExit) as exit_info:
        miring_eval.main()

    assert exit_info.value.code == 0
    assert (output_dir / "json" / "miring_validation_report.json").exists()
    assert (tmp_path / "logs" / "miring_validation.log").exists()


def test_main_without_arguments(monkeypatch, fresh_path_config):
    monkeypatch.setattr(sys, "argv", ["miring_eval.py"])

    with pytest.raises(SystemExit) as exit_info:
        miring_eval.main()

    assert exit_info.value.code == 1
