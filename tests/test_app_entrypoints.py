import logging

import pytest

import app
from aleph_niqqud import main as app_main
from aleph_niqqud.application.bootstrap import initialize_app_services
from aleph_niqqud.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    monkeypatch.setenv("NIQQUD_MODEL_PATH", str(tmp_path / "missing.pt"))
    monkeypatch.setenv("NIQQUD_USE_GPU", "0")
    monkeypatch.setenv("NIQQUD_PREWARM_ENABLED", "0")
    monkeypatch.delenv("NIQQUD_REPO_ID", raising=False)
    monkeypatch.delenv("TORCH_NUM_THREADS", raising=False)
    yield
    for name in (LOGGER_NAME, "py.warnings", "huggingface_hub"):
        routed = logging.getLogger(name)
        for handler in list(routed.handlers):
            handler.close()
            routed.removeHandler(handler)
    logging.captureWarnings(False)


def test_strip_mode_does_not_need_a_model(capsys):
    assert app.main(["--strip", "--text", "ש\u05c1\u05b8לו\u05b9ם"]) == 0
    assert capsys.readouterr().out == "שלום\n"


def test_strip_mode_reads_file(tmp_path, capsys):
    source = tmp_path / "input.txt"
    source.write_text("ב\u05bc\u05b7ית\n", encoding="utf-8")
    assert app.main(["--strip", "--file", str(source)]) == 0
    assert capsys.readouterr().out == "בית\n"


def test_missing_model_reports_error_and_exit_code(capsys):
    assert app.main(["--text", "שלום"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Niqqud model error: Failed to load the niqqud model." in captured.err
    assert "Model file not found" in captured.err


def test_unusable_model_output_exits_with_error(monkeypatch, capsys):
    def build_with_broken_model(config, logger):
        with open(config.model_path, "wb") as handle:
            handle.write(b"weights")
        return initialize_app_services(
            config=config,
            cuda_available=False,
            logger=logger,
            loader=lambda _path, _device: (lambda _inputs: ("bad", "bad", "bad")),
        )

    monkeypatch.setattr(app, "build_services", build_with_broken_model)

    assert app.main(["--text", "שלום"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Niqqud model error: could not convert" in captured.err


def test_vocalize_prints_model_output(monkeypatch, capsys):
    class _Api:
        def add_niqqud(self, text):
            return f"[{text}]"

    class _Controller:
        def __init__(self):
            self.shutdown_calls = 0

        def shutdown(self):
            self.shutdown_calls += 1

    controller = _Controller()
    monkeypatch.setattr(
        app,
        "build_services",
        lambda _config, _logger: type("S", (), {"api": _Api(), "controller": controller})(),
    )

    assert app.main(["--text", "שלום\n"]) == 0
    assert capsys.readouterr().out == "[שלום]\n"
    assert controller.shutdown_calls == 1


def test_apply_overrides_replaces_only_given_fields(tmp_path):
    config = app.load_config()
    args = app.build_parser().parse_args(
        ["--model-path", str(tmp_path / "custom.pt"), "--max-len", "1", "--cpu"]
    )
    updated = app.apply_overrides(config, args)

    assert updated.model_path == str(tmp_path / "custom.pt")
    assert updated.max_len == 2
    assert updated.use_gpu is False
    assert updated.debounce_seconds == config.debounce_seconds

    untouched = app.apply_overrides(config, app.build_parser().parse_args([]))
    assert untouched is config


def test_package_main_exits_with_app_status(monkeypatch):
    monkeypatch.setattr(app, "main", lambda: 3)
    with pytest.raises(SystemExit) as exc:
        app_main.main()
    assert exc.value.code == 3
