import json
import logging

import pytest

from pendulum_core.camera import Camera2D
from pendulum_core.config import SimulationConfig, config_from_mapping, load_config
from pendulum_core.errors import ConfigurationError

# --- 1. Defaults and overrides ---


def test_defaults_match_constants():
    cfg = load_config(None)
    assert cfg == SimulationConfig()
    assert cfg.gravity == 9.81
    assert cfg.dt == 0.01
    assert cfg.path_limit == 2000
    assert (cfg.segment_length, cfg.segment_mass) == (0.7, 1.0)
    assert cfg.anchor == (0.0, 0.5)
    assert cfg.append_anchor == (0.0, 0.75)


def test_with_overrides_skips_none():
    cfg = SimulationConfig().with_overrides(initial_segments=None, dt=0.02)
    assert cfg.initial_segments == 1
    assert cfg.dt == 0.02


@pytest.mark.parametrize("overrides", [
    {"dt": 0.0},
    {"dt": float("nan")},
    {"segment_length": -1.0},
    {"segment_mass": 0},
    {"path_limit": 0},
    {"path_limit": 2.5},
    {"initial_segments": 0},
    {"initial_segments": True},
    {"anchor": [1.0]},
    {"anchor": "xy"},
    {"gravity": float("inf")},
])
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**overrides)


# --- 2. JSON files ---


def test_load_config_from_file(tmp_path):
    path = tmp_path / "chain.json"
    path.write_text(json.dumps({
        "gravity": 1.62,
        "initial_segments": 4,
        "anchor": [0.0, 0.0],
    }), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg.gravity == 1.62
    assert cfg.initial_segments == 4
    assert cfg.anchor == (0.0, 0.0)
    assert cfg.dt == 0.01


def test_unknown_keys_are_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="pendulum_core.config"):
        cfg = config_from_mapping({"dt": 0.005, "colour": "red"})
    assert cfg.dt == 0.005
    assert "colour" in caplog.text


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "nope.json"))


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_non_object_json_raises(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


# --- 3. Camera ---


def test_camera_centers_origin_and_flips_y():
    cam = Camera2D(viewport_size=(800, 800))
    assert cam.upp == pytest.approx(0.005)
    assert cam.world_to_screen((0.0, 0.0)) == (400, 400)
    assert cam.world_to_screen((0.0, 0.5)) == (400, 300)
    assert cam.world_to_screen((2.0, -2.0)) == (800, 800)


def test_camera_round_trip():
    cam = Camera2D(viewport_size=(800, 600))
    wx, wy = cam.screen_to_world(cam.world_to_screen((0.35, -0.2)))
    assert wx == pytest.approx(0.35, abs=cam.upp)
    assert wy == pytest.approx(-0.2, abs=cam.upp)


def test_camera_zoom_keeps_pivot_fixed():
    cam = Camera2D(viewport_size=(800, 800))
    before = cam.screen_to_world((600, 200))
    cam.zoom(2.0, (600, 200))
    assert cam.upp == pytest.approx(0.0025)
    after = cam.screen_to_world((600, 200))
    assert after == pytest.approx(before)


def test_camera_resize_refits_view():
    cam = Camera2D(viewport_size=(800, 800))
    cam.set_viewport_size(400, 400)
    assert cam.upp == pytest.approx(0.01)
    # the shorter side still spans [-2, 2]
    assert cam.world_to_screen((2.0, -2.0)) == (400, 400)


def test_camera_resize_keeps_zoom():
    cam = Camera2D(viewport_size=(800, 800))
    cam.zoom(2.0)
    cam.set_viewport_size(400, 600)
    assert cam.upp == pytest.approx(cam.fit_units_per_pixel() / 2.0)
    assert cam.upp == pytest.approx(0.005)
