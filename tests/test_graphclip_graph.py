from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from graphclip import (
    EmptyInputError,
    Graph,
    GraphConfig,
    InvalidFunctionError,
    InvalidRangeError,
    SeriesPoint,
    functions_by_series,
    graph,
    load_graph_config,
)


class GraphTests(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = Graph()

    def test_default_config_matches_chart_defaults(self) -> None:
        cfg = GraphConfig()
        self.assertEqual(cfg.plot_width, 540)
        self.assertEqual(cfg.plot_height, 340)
        vp = cfg.viewport()
        self.assertEqual((vp.x_min, vp.x_max, vp.y_min, vp.y_max), (0.0, 100.0, 0.0, 100.0))
        self.assertFalse(vp.allow_overflow)
        self.assertEqual(self.graph.sampler.resolve_resolution((0.0, 100.0)), 27)

    def test_line_from_function_stops_at_top_edge(self) -> None:
        def f(x: float) -> float:
            return 1.5 * x + 10.0

        runs = self.graph.line_from_function("line", f)
        self.assertEqual(len(runs), 1)
        run = runs[0]
        self.assertEqual(run.samples[0].x, 0.0)
        self.assertAlmostEqual(run.samples[-1].x, 60.0, places=5)
        self.assertLessEqual(run.samples[-1].y, 100.0)
        self.assertEqual(run.functions, (f,))
        self.assertEqual(run.style, {"stroke-width": 1.5})
        self.assertEqual(run.interpolation, "linear")
        self.assertEqual(run.series, "line")

    def test_line_from_function_keeps_caller_style(self) -> None:
        runs = self.graph.line_from_function(
            "s", lambda x: 50.0, style={"stroke": "red", "stroke-width": "wide"}, interpolation="monotone"
        )
        self.assertEqual(runs[0].style, {"stroke": "red", "stroke-width": 1.5})
        self.assertEqual(runs[0].interpolation, "monotone")

    def test_line_from_function_rejects_bad_functions(self) -> None:
        with self.assertRaises(InvalidFunctionError):
            self.graph.line_from_function("s", lambda x: None)
        with self.assertRaises(InvalidFunctionError):
            self.graph.line_from_function("s", lambda x: (1.0, 2.0))

    def test_area_between_clamps_boundaries(self) -> None:
        runs = self.graph.area_between("band", lambda x: x - 20.0, lambda x: x + 20.0)
        self.assertEqual(len(runs), 1)
        run = runs[0]
        self.assertEqual(len(run), 27)
        self.assertTrue(run.is_area)
        for sample in run.samples:
            bottom, top = sample.values
            self.assertGreaterEqual(bottom, 0.0)
            self.assertLessEqual(top, 100.0)
            self.assertLess(bottom, top)
        self.assertEqual(len(run.functions), 2)

    def test_line_from_coordinates_sorts_and_cuts(self) -> None:
        runs = self.graph.line_from_coordinates("c", [(3, 3), (1, 1), (2, 2), (4, 400), (5, 5)])
        self.assertEqual([run.coords() for run in runs], [[(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]])

    def test_line_from_coordinates_empty(self) -> None:
        with self.assertRaises(EmptyInputError):
            self.graph.line_from_coordinates("c", [])

    def test_lines_from_points_drop_stroke(self) -> None:
        points = [SeriesPoint("a", 1.0, 1.0), SeriesPoint("a", 2.0, 2.0)]
        out = self.graph.lines_from_points(points, style={"stroke": "blue"})
        self.assertEqual(out["a"][0].style, {"stroke-width": 1.5})

    def test_point_line_styles_are_independent(self) -> None:
        points = [SeriesPoint(s, x, x) for s in ("a", "b") for x in (1.0, 2.0)]
        out = self.graph.lines_from_points(points)
        out["a"][0].style["stroke-width"] = 4
        self.assertEqual(out["b"][0].style, {"stroke-width": 1.5})

    def test_functions_by_series(self) -> None:
        def f(x: float) -> float:
            return 10.0

        def g(x: float) -> float:
            return 20.0

        runs = (
            self.graph.line_from_function("a", f)
            + self.graph.line_from_function("a", f, x_range=(0.0, 50.0))
            + self.graph.line_from_function("b", g)
        )
        self.assertEqual(functions_by_series(runs, "a"), [f])
        self.assertEqual(functions_by_series(runs, "b"), [g])
        self.assertEqual(functions_by_series(runs, "c"), [])


class GraphConfigTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".toml", delete=False)
        with tmp:
            tmp.write(text)
        self.addCleanup(Path(tmp.name).unlink)
        return Path(tmp.name)

    def test_load_graph_config_from_toml(self) -> None:
        path = self._write(
            """
allow_overflow = true
width = 500
sample_spacing_px = 10.0

[axis.x]
min = -10
max = 10

[margins]
left = 50
"""
        )
        cfg = load_graph_config(path)
        self.assertTrue(cfg.allow_overflow)
        self.assertEqual((cfg.x_min, cfg.x_max), (-10.0, 10.0))
        self.assertEqual((cfg.y_min, cfg.y_max), (0.0, 100.0))
        self.assertEqual(cfg.plot_width, 500 - 50 - 20)
        self.assertEqual(cfg.sample_spacing_px, 10.0)

        g = graph(path)
        runs = g.line_from_function("s", lambda x: 1000.0)
        self.assertEqual(len(runs), 1)

    def test_unknown_keys_are_logged(self) -> None:
        path = self._write("colour = 'red'\n")
        with self.assertLogs("graphclip.config", level="WARNING") as logs:
            load_graph_config(path)
        self.assertIn("colour", logs.output[0])

    def test_bad_values_raise(self) -> None:
        with self.assertRaises(ValueError):
            load_graph_config(self._write("allow_overflow = 'yes'\n"))
        with self.assertRaises(ValueError):
            load_graph_config(self._write("width = 10\n"))
        with self.assertRaises(FileNotFoundError):
            load_graph_config("/nonexistent/graph.toml")

    def test_inverted_axis_raises_on_graph_build(self) -> None:
        with self.assertRaises(InvalidRangeError):
            graph(x_min=10.0, x_max=5.0)
