from types import SimpleNamespace

import pytest
import torch

from aleph_niqqud.application import bootstrap
from aleph_niqqud.application.local_api import LocalNiqqudApi
from aleph_niqqud.constants import DAGESH_TABLE, NIQQUD_TABLE, SIN_TABLE
from aleph_niqqud.errors import ModelLoadError, PredictionError


def _minimal_config(tmp_path, **overrides):
    model_path = tmp_path / "nakdimon.pt"
    model_path.write_bytes(b"weights")
    base = {
        "model_path": str(model_path),
        "repo_id": "",
        "model_filename": "nakdimon.pt",
        "max_len": 16,
        "debounce_seconds": 0.0,
        "use_gpu": False,
        "fold_final_forms": False,
        "prewarm_enabled": False,
    }
    base.update(overrides)
    return SimpleNamespace(**base)


def _identity_model(inputs):
    length = inputs.shape[1]
    return {
        "niqqud": torch.nn.functional.one_hot(torch.ones(1, length).long(), len(NIQQUD_TABLE)),
        "dagesh": torch.nn.functional.one_hot(torch.ones(1, length).long(), len(DAGESH_TABLE)),
        "sin": torch.nn.functional.one_hot(torch.ones(1, length).long(), len(SIN_TABLE)),
    }


def test_initialize_app_services_builds_bundle(tmp_path, logger):
    loads = []

    def loader(path, device):
        loads.append((path, device))
        return _identity_model

    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path),
        cuda_available=True,
        logger=logger,
        loader=loader,
    )
    try:
        assert services.model_manager.device == "cpu"
        assert services.model_manager.max_len == 16
        assert services.app_state.max_len == 16
        assert services.app_state.alphabet is services.alphabet
        assert isinstance(services.api, LocalNiqqudApi)
        assert loads == []

        assert services.api.add_niqqud("שלום") == "שלום"
        assert services.api.add_niqqud("") == ""
        assert loads == [(str(tmp_path / "nakdimon.pt"), "cpu")]
        assert services.api.remove_niqqud("ש\u05b8לו\u05b9ם") == "שלום"
    finally:
        services.controller.shutdown()


def test_fold_final_forms_reaches_alphabet(tmp_path, logger):
    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path, fold_final_forms=True),
        cuda_available=False,
        logger=logger,
    )
    try:
        assert services.alphabet.encode_text("ם") == services.alphabet.encode_text("מ")
    finally:
        services.controller.shutdown()


def test_controller_uses_configured_pipeline(tmp_path, logger):
    results = []
    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path),
        cuda_available=False,
        logger=logger,
        observer=results.append,
        loader=lambda _path, _device: _identity_model,
    )
    try:
        services.controller.generate("אבג")
        assert services.controller.wait(5.0) is True
        assert services.controller.output == "אבג"
        assert [result.output for result in results] == ["אבג"]
    finally:
        services.controller.shutdown()


def test_prewarm_flag_starts_background_load(tmp_path, logger, monkeypatch):
    started = []
    monkeypatch.setattr(
        bootstrap,
        "_prewarm_in_background",
        lambda manager, _logger: started.append(manager),
    )
    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path, prewarm_enabled=True),
        cuda_available=False,
        logger=logger,
    )
    try:
        assert started == [services.model_manager]
    finally:
        services.controller.shutdown()


def test_prewarm_loads_model_in_background(tmp_path, logger):
    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path),
        cuda_available=False,
        logger=logger,
        loader=lambda _path, _device: _identity_model,
    )
    try:
        thread = bootstrap._prewarm_in_background(services.model_manager, logger)
        thread.join(5.0)
        assert services.model_manager.is_loaded is True
        assert "Niqqud model prewarm finished" in logger.infos
    finally:
        services.controller.shutdown()


def test_failed_prewarm_is_reported_and_surfaces_on_request(tmp_path, logger):
    def broken_loader(_path, _device):
        raise RuntimeError("corrupt artifact")

    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path),
        cuda_available=False,
        logger=logger,
        loader=broken_loader,
    )
    try:
        thread = bootstrap._prewarm_in_background(services.model_manager, logger)
        thread.join(5.0)
        assert any("prewarm failed" in message for message in logger.warnings)
        with pytest.raises(ModelLoadError, match="corrupt artifact"):
            services.api.add_niqqud("שלום")
    finally:
        services.controller.shutdown()


def test_local_api_requires_initialized_state():
    api = LocalNiqqudApi(state_provider=lambda: None)
    with pytest.raises(RuntimeError, match="not initialized"):
        api.add_niqqud("שלום")
    assert api.add_niqqud("") == ""


def test_unusable_model_output_surfaces_as_prediction_error(tmp_path, logger):
    services = bootstrap.initialize_app_services(
        config=_minimal_config(tmp_path),
        cuda_available=False,
        logger=logger,
        loader=lambda _path, _device: (lambda _inputs: ("bad", "bad", "bad")),
    )
    try:
        with pytest.raises(PredictionError, match="could not convert"):
            services.api.add_niqqud("שלום")
    finally:
        services.controller.shutdown()
