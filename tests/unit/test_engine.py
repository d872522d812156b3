"""Tests for the GraphVisualizer facade: construction, lifecycle and the end-to-end scenario."""

import numpy as np
import pytest

from forcegraph3d.config import VisualizerOptions
from forcegraph3d.controller.engine import FRAME_READY, GraphVisualizer
from forcegraph3d.controller.interaction import CURSOR_CHANGED, PointerButton
from forcegraph3d.controller.surfaces import (
    SurfaceNotFoundError,
    register_surface,
    resolve_surface,
    unregister_surface,
)
from forcegraph3d.model.state import InteractionMode


class TestConstruction:
    def test_unknown_surface_fails(self, surface) -> None:
        with pytest.raises(SurfaceNotFoundError, match="nope"):
            GraphVisualizer("nope", surfaces={"canvas": surface})

    def test_surface_not_found_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            resolve_surface("missing", {})

    def test_global_registry(self, surface) -> None:
        register_surface("registry-test", surface)
        try:
            viz = GraphVisualizer("registry-test")
            assert viz.surface is surface
            with pytest.raises(KeyError):
                register_surface("registry-test", surface)
        finally:
            unregister_surface("registry-test")

        with pytest.raises(SurfaceNotFoundError):
            GraphVisualizer("registry-test")

    def test_viewport_size_read_from_surface(self, visualizer: GraphVisualizer) -> None:
        cam = visualizer.view.camera
        assert (cam.width, cam.height) == (800.0, 600.0)

    def test_default_options(self, visualizer: GraphVisualizer) -> None:
        assert visualizer.options == VisualizerOptions()

    def test_camel_case_options(self, surface) -> None:
        viz = GraphVisualizer(
            "c",
            {"repulsionForce": 8000, "maxNodeSpeed": 4, "showGuideAxes": True},
            surfaces={"c": surface},
        )

        assert viz.options.repulsion_force == 8000
        assert viz.options.max_node_speed == 4
        assert viz.options.show_guide_axes is True

    def test_options_instance_used_as_is(self, surface) -> None:
        opts = VisualizerOptions(node_radius=30)

        viz = GraphVisualizer("c", opts, surfaces={"c": surface})

        assert viz.options is opts
        assert viz.layout.options is opts and viz.camera.options is opts

    def test_invalid_options_rejected(self, surface) -> None:
        with pytest.raises(ValueError, match="projection_distance"):
            GraphVisualizer("c", {"projectionDistance": 0}, surfaces={"c": surface})


class TestGraphApi:
    def test_add_node_idempotent(self, visualizer: GraphVisualizer) -> None:
        assert visualizer.add_node("A") is visualizer.add_node("A")
        assert len(visualizer.nodes) == 1

    def test_add_edge_on_empty_graph(self, visualizer: GraphVisualizer) -> None:
        edge = visualizer.add_edge("X", "Y", "rel")

        assert len(visualizer.nodes) == 2
        assert len(visualizer.edges) == 1
        assert (edge.source.label, edge.target.label, edge.label) == ("X", "Y", "rel")

    def test_clear_resets_graph_highlights_and_drag(self, visualizer: GraphVisualizer) -> None:
        node = visualizer.add_node("A")
        node.x, node.y, node.z = 0.0, 0.0, 0.0
        visualizer.search_by_substring("a")
        visualizer.pointer_down(400.0, 300.0)

        visualizer.clear()

        assert visualizer.nodes == [] and visualizer.edges == []
        assert visualizer.highlights.results == []
        assert visualizer.mode == InteractionMode.IDLE
        assert visualizer.selected_node is None

    def test_clear_during_pan_restores_cursor(self, visualizer: GraphVisualizer) -> None:
        cursors = []
        visualizer.on(CURSOR_CHANGED, cursors.append)
        visualizer.pointer_down(5.0, 5.0, PointerButton.SECONDARY)

        visualizer.clear()

        assert cursors == ["grabbing", "grab"]
        assert visualizer.mode == InteractionMode.IDLE

    def test_clear_during_drag_has_no_node_left(self, visualizer: GraphVisualizer) -> None:
        node = visualizer.add_node("A")
        node.x, node.y, node.z = 0.0, 0.0, 0.0
        visualizer.pointer_down(400.0, 300.0)

        visualizer.clear()
        visualizer.pointer_move(10.0, 10.0)
        visualizer.pointer_up()

        assert node.position == (0.0, 0.0, 0.0)
        assert len(visualizer.nodes) == 0

    def test_project_and_rotate_delegate_to_camera(self, visualizer: GraphVisualizer) -> None:
        node = visualizer.add_node("A")
        node.x, node.y, node.z = 10.0, 20.0, 0.0

        assert visualizer.rotate(node) == pytest.approx((10.0, 20.0, 0.0))
        assert visualizer.project(visualizer.rotate(node)) == pytest.approx((410.0, 320.0, 1.0))

    def test_resize_moves_projection_centre(self, visualizer: GraphVisualizer) -> None:
        visualizer.resize(200, 100)

        assert visualizer.project((0.0, 0.0, 0.0))[:2] == pytest.approx((100.0, 50.0))


class TestLoop:
    def test_start_ticks_until_stopped(self, visualizer, scheduler) -> None:
        frames = []
        visualizer.on(FRAME_READY, frames.append)
        visualizer.add_edge("A", "B", "rel")
        before = visualizer.store.positions()

        handle = visualizer.start(scheduler)
        scheduler.run(3)

        assert handle.active and visualizer.running
        assert frames == [visualizer] * 3
        assert not np.allclose(before, visualizer.store.positions())

        handle.stop()
        scheduler.run(3)

        assert not handle.active and not visualizer.running
        assert len(frames) == 3
        assert scheduler.stopped == 1

    def test_restart_stops_previous_loop(self, visualizer, scheduler) -> None:
        first = visualizer.start(scheduler)
        second = visualizer.start(scheduler)

        assert not first.active and second.active
        assert scheduler.started == 2 and scheduler.stopped == 1

    def test_stop_is_idempotent(self, visualizer, scheduler) -> None:
        handle = visualizer.start(scheduler)

        visualizer.stop()
        visualizer.stop()
        handle.stop()

        assert scheduler.stopped == 1


def test_end_to_end_path_graph(visualizer: GraphVisualizer, scheduler, events_log) -> None:
    for label in "ABCDEF":
        visualizer.add_node(label)
    for source, target in [("A", "B"), ("A", "C"), ("C", "D"), ("D", "E"), ("E", "F")]:
        visualizer.add_edge(source, target, "next")

    visualizer.start(scheduler)
    scheduler.run(200)
    visualizer.stop()

    positions = visualizer.store.positions()
    distances = np.linalg.norm(positions[:, None, :] - positions[None, :, :], axis=2)
    assert np.all(distances[~np.eye(len(positions), dtype=bool)] > 0)

    opts = visualizer.options
    bound = 3 * opts.desired_distance + np.sqrt(opts.repulsion_force)
    for edge in visualizer.edges:
        assert np.linalg.norm(np.subtract(edge.source.position, edge.target.position)) < bound

    for node in visualizer.nodes:
        assert node.speed <= opts.max_node_speed + 1e-9
        assert node.z >= opts.min_z

    # Search then pick the first match on screen
    visualizer.search_and_highlight("c")
    c = visualizer.store.get("C")
    assert events_log[-1] == ("nodeSelected", c)

    screen = visualizer.project(visualizer.rotate(c))
    assert visualizer.pick(screen.x, screen.y) is not None


def test_callback_can_unsubscribe_itself(visualizer: GraphVisualizer, scheduler) -> None:
    calls = []

    def once(viz) -> None:
        calls.append(viz)
        visualizer.events.off(FRAME_READY, once)

    visualizer.on(FRAME_READY, once)
    visualizer.start(scheduler)
    scheduler.run(3)

    assert calls == [visualizer]
    # Removing an unknown callback is a no-op
    visualizer.events.off(FRAME_READY, once)
