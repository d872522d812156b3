"""Tests for visualizer options."""

import logging

import pytest

from forcegraph3d.config import VisualizerOptions


class TestFromMapping:
    def test_none_gives_defaults(self) -> None:
        assert VisualizerOptions.from_mapping(None) == VisualizerOptions()

    def test_camel_and_snake_keys(self) -> None:
        opts = VisualizerOptions.from_mapping({
            "desiredDistance": 200,
            "min_distance": 40,
            "edgeSpringConstant": 0.2,
            "highlightSearchColor": "#000000",
        })

        assert opts.desired_distance == 200
        assert opts.min_distance == 40
        assert opts.edge_spring_constant == 0.2
        assert opts.highlight_search_color == "#000000"
        assert opts.repulsion_force == 5000.0

    def test_unknown_key_warns_and_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="forcegraph3d.config"):
            opts = VisualizerOptions.from_mapping({"nodeRadius": 20, "gravity": 9.81})

        assert opts.node_radius == 20
        assert not hasattr(opts, "gravity")
        assert "gravity" in caplog.text

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_node_speed"):
            VisualizerOptions.from_mapping({"maxNodeSpeed": -1})


class TestValidate:
    @pytest.mark.parametrize("name", [
        "desired_distance",
        "repulsion_force",
        "max_node_speed",
        "projection_distance",
        "min_projection_denominator",
        "node_radius",
    ])
    def test_must_be_positive(self, name: str) -> None:
        with pytest.raises(ValueError, match=name):
            VisualizerOptions(**{name: 0}).validate()

    def test_negative_spring_constant(self) -> None:
        with pytest.raises(ValueError, match="edge_spring_constant"):
            VisualizerOptions(edge_spring_constant=-0.1).validate()

    def test_negative_min_distance(self) -> None:
        with pytest.raises(ValueError, match="min_distance"):
            VisualizerOptions(min_distance=-1).validate()

    def test_min_distance_above_desired(self) -> None:
        with pytest.raises(ValueError, match="exceeds"):
            VisualizerOptions(min_distance=200, desired_distance=150).validate()

    def test_zero_spring_constant_allowed(self) -> None:
        VisualizerOptions(edge_spring_constant=0.0).validate()


def test_with_overrides_returns_validated_copy() -> None:
    base = VisualizerOptions()

    changed = base.with_overrides(show_guide_axes=True, node_radius=8)

    assert changed.show_guide_axes and changed.node_radius == 8
    assert base.show_guide_axes is False
    with pytest.raises(ValueError):
        base.with_overrides(node_radius=0)


def test_min_z_leaves_room_for_denominator() -> None:
    opts = VisualizerOptions(projection_distance=500, min_projection_denominator=2)

    assert opts.min_z == -498
