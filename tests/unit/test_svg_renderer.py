"""Unit tests for the SVG renderer module."""

import xml.etree.ElementTree as ET

from bpmnflow.models import NO_NODES_MESSAGE
from bpmnflow.svg_renderer import SVG_NS, SVGRenderer, _fmt


def _parse(svg):
    return ET.fromstring(svg)


def _all(root, tag):
    return root.findall(f".//{{{SVG_NS}}}{tag}")


class TestFormatNumber:
    """Tests for number formatting."""

    def test_integers_lose_decimal_point(self):
        assert _fmt(150.0) == "150"

    def test_fractions_trimmed(self):
        assert _fmt(247.5) == "247.5"
        assert _fmt(1 / 3) == "0.333"


class TestSVGRenderer:
    """Tests for SVGRenderer."""

    def test_canvas_size(self, generator, linear_input):
        result = generator.generate(linear_input)
        root = _parse(SVGRenderer().render(result))
        assert root.get("width") == _fmt(result.diagram.canvas_width)
        assert root.get("height") == _fmt(result.diagram.canvas_height)

    def test_shapes_per_kind(self, generator, branching_input):
        root = _parse(SVGRenderer().render(generator.generate(branching_input)))
        assert len(_all(root, "circle")) == 2
        assert len(_all(root, "rect")) == 2
        assert len(_all(root, "polygon")) == 1

    def test_one_path_per_routed_edge(self, generator, branching_input):
        root = _parse(SVGRenderer().render(generator.generate(branching_input)))
        edge_paths = [
            path for path in _all(root, "path") if path.get("marker-end")
        ]
        assert len(edge_paths) == 5

    def test_edge_labels_drawn(self, generator, branching_input):
        root = _parse(SVGRenderer().render(generator.generate(branching_input)))
        texts = [text.text for text in _all(root, "text")]
        assert "yes" in texts
        assert "no" in texts

    def test_actor_drawn_on_task(self, generator, linear_input):
        root = _parse(SVGRenderer().render(generator.generate(linear_input)))
        actors = [t for t in _all(root, "text") if t.get("class") == "bpmn-actor"]
        assert [actor.text for actor in actors] == ["Alice"]
        assert actors[0].get("text-anchor") == "end"

    def test_node_groups_carry_ids(self, generator, linear_input):
        root = _parse(SVGRenderer().render(generator.generate(linear_input)))
        groups = {g.get("id"): g.get("class") for g in _all(root, "g")}
        assert groups == {
            "s": "bpmn-startEvent",
            "t": "bpmn-task",
            "e": "bpmn-endEvent",
        }

    def test_dangling_edge_not_drawn(self, generator, dangling_input):
        root = _parse(SVGRenderer().render(generator.generate(dangling_input)))
        edge_paths = [
            path for path in _all(root, "path") if path.get("marker-end")
        ]
        assert len(edge_paths) == 1

    def test_empty_result_shows_message(self, generator):
        svg = SVGRenderer().render(generator.generate("   "))
        root = _parse(svg)
        texts = _all(root, "text")
        assert [text.text for text in texts] == [NO_NODES_MESSAGE]

    def test_labels_are_escaped(self, generator):
        svg = SVGRenderer().render(generator.generate('task t "a < b & c"'))
        assert "a &lt; b &amp; c" in svg
        assert _all(_parse(svg), "text")[0].text == "a < b & c"
