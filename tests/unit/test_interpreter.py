"""
Unit tests for the canvas-lang Interpreter.

Evaluation is pure: these tests inspect the returned Scene and never touch
the terminal.
"""

import logging

import pytest

from canvaslang.compiler.ast_nodes import ASTVisitor, Canvas, Circle, Wait
from canvaslang.config import RuntimeConfig
from canvaslang.render.renderer import Renderer
from canvaslang.render.shapes import draw_circle, draw_rect
from canvaslang.runtime.interpreter import Interpreter, animation_timing, evaluate
from canvaslang.runtime.timeline import Pause, Show


def circle(radius: float) -> str:
    return draw_circle(radius, "red", enabled=False)


def rect(width: float, height: float) -> str:
    return draw_rect(width, height, "blue", enabled=False)


class TestAnimationTiming:
    """Frame delay and step count of animate blocks."""

    def test_three_frames_one_second(self):
        assert animation_timing(1000, 3) == (333, 4)

    def test_minimum_delay(self):
        assert animation_timing(100, 10) == (50, 2)

    def test_even_split(self):
        assert animation_timing(1000, 4) == (250, 4)

    def test_zero_duration(self):
        assert animation_timing(0, 2) == (50, 0)

    def test_custom_minimum(self):
        assert animation_timing(100, 10, min_delay=5) == (10, 10)


class TestDrawing:
    """Top-level drawing commands append to the canvas output."""

    def test_empty_canvas(self, evaluate):
        scene = evaluate("canvas { }")
        assert scene.canvas_output == ""
        assert scene.background == "black"
        assert scene.timeline == []
        assert scene.frames == ()

    def test_shapes_stack_in_order(self, evaluate):
        scene = evaluate(
            'canvas { circle at(0, 0) radius 1 fill "red"; rect at(5, 5) width 2 height 1 fill "blue"; }'
        )
        assert scene.canvas_output == circle(1) + rect(2, 1)

    def test_position_is_ignored(self, evaluate):
        a = evaluate('canvas { circle at(0, 0) radius 2 fill "red"; }')
        b = evaluate('canvas { circle at(30, 9) radius 2 fill "red"; }')
        assert a.canvas_output == b.canvas_output

    def test_text_goes_through_figlet(self, evaluate):
        scene = evaluate('canvas { text "Hi" at(0, 0) size 20 color "red"; }')
        assert "\n" in scene.canvas_output
        assert scene.canvas_output != "Hi"

    def test_line(self, evaluate):
        scene = evaluate('canvas { line from(0, 0) to(3, 0) color "green"; }')
        assert scene.canvas_output.count("●") == 4


class TestState:
    """Background and variables."""

    def test_background_keeps_quotes(self, evaluate):
        assert evaluate('canvas { background "navy"; }').background == '"navy"'

    def test_last_background_wins(self, evaluate):
        scene = evaluate('canvas { background "red"; background "blue"; }')
        assert scene.background == '"blue"'

    def test_variables_stored(self, evaluate):
        scene = evaluate("canvas { var a = 1; var b = 2.5; var a = 3; }")
        assert scene.variables == {"a": 3.0, "b": 2.5}

    def test_background_does_not_draw(self, evaluate):
        assert evaluate('canvas { background "red"; }').canvas_output == ""

    def test_interpreter_reusable(self, parse, renderer):
        interpreter = Interpreter(renderer)
        first = interpreter.evaluate(parse("canvas { var a = 1; frame { } }"))
        second = interpreter.evaluate(parse("canvas { }"))
        assert first.variables == {"a": 1.0}
        assert second.variables == {}
        assert second.frames == ()


class TestTimeline:
    """Wait, rainbow and animate record display steps."""

    def test_wait(self, evaluate):
        assert evaluate("canvas { wait 250; }").timeline == [Pause(250)]

    def test_wait_does_not_draw(self, evaluate):
        assert evaluate("canvas { wait 1; }").canvas_output == ""

    def test_rainbow_steps(self, evaluate):
        scene = evaluate('canvas { rainbow "Hi" at(0, 0) duration 3; }')
        assert len(scene.timeline) == 3
        assert all(isinstance(step, Show) for step in scene.timeline)
        assert all(step.hold_ms == 10 for step in scene.timeline)
        assert scene.timeline[0].text == "Hi"

    def test_rainbow_shows_output_so_far(self, evaluate):
        scene = evaluate(
            'canvas { circle at(0, 0) radius 1 fill "red"; rainbow "Hi" at(0, 0) duration 1; }'
        )
        assert scene.timeline[0].text == circle(1) + "Hi"

    def test_rainbow_not_in_final_output(self, evaluate):
        scene = evaluate('canvas { rainbow "Hi" at(0, 0) duration 2; }')
        assert scene.canvas_output == ""

    def test_rainbow_offsets_colored(self, parse):
        scene = Interpreter(Renderer(RuntimeConfig(color=True))).evaluate(
            parse('canvas { rainbow "ab" at(0, 0) duration 2; }')
        )
        assert scene.timeline[0].overlay != scene.timeline[1].overlay

    def test_rainbow_zero_duration(self, evaluate):
        assert evaluate('canvas { rainbow "Hi" at(0, 0) duration 0; }').timeline == []

    def test_long_rainbow_shares_buffer_and_overlays(self, parse):
        scene = Interpreter(Renderer(RuntimeConfig(color=True))).evaluate(
            parse(
                "canvas { rect at(0, 0) width 80 height 40 fill \"red\"; "
                'rainbow "Hi" at(0, 0) duration 5000; }'
            )
        )
        steps = scene.timeline
        assert len(steps) == 5000
        assert len({id(step.content) for step in steps}) == 1
        assert len({id(step.overlay) for step in steps}) == 360
        distinct = {id(step.content): step.content for step in steps}
        distinct.update({id(step.overlay): step.overlay for step in steps})
        # One copy of the rect plus 360 small overlays, not 5000 copies.
        assert sum(len(text) for text in distinct.values()) < 2 * len(steps[0].content)

    def test_rainbow_hue_wraps(self, parse):
        scene = Interpreter(Renderer(RuntimeConfig(color=True))).evaluate(
            parse('canvas { rainbow "ab" at(0, 0) duration 362; }')
        )
        assert scene.timeline[360].overlay == scene.timeline[0].overlay
        assert scene.timeline[361].overlay != scene.timeline[0].overlay

    def test_steps_record_current_background(self, evaluate):
        scene = evaluate(
            'canvas { background "red"; rainbow "a" at(0, 0) duration 1; background "blue"; }'
        )
        assert scene.timeline[0].background == '"red"'
        assert scene.background == '"blue"'

    def test_animate(self, evaluate):
        scene = evaluate(
            """
            canvas {
                animate {
                    frame { circle at(0, 0) radius 1 fill "red"; }
                    frame { circle at(0, 0) radius 2 fill "red"; }
                    frame { circle at(0, 0) radius 3 fill "red"; }
                } for 1000;
            }
            """
        )
        assert [step.hold_ms for step in scene.timeline] == [333, 333, 333, 333]
        assert [step.content for step in scene.timeline] == [
            circle(1),
            circle(2),
            circle(3),
            circle(1),
        ]
        assert scene.frames == ()
        assert scene.canvas_output == ""

    def test_animate_without_frames_warns(self, evaluate, caplog):
        with caplog.at_level(logging.WARNING, logger="canvaslang.runtime.interpreter"):
            scene = evaluate("canvas { animate { } for 1000; }")
        assert scene.timeline == []
        assert "nothing to play" in caplog.text

    def test_animate_ignores_non_frame_children(self, evaluate):
        scene = evaluate(
            'canvas { animate { wait 5; frame { rect at(0, 0) width 1 height 1 fill "blue"; } } for 100; }'
        )
        assert scene.timeline == [Show(rect(1, 1), "black", 100)]

    def test_animate_frames_start_from_empty_buffer(self, evaluate):
        scene = evaluate(
            'canvas { circle at(0, 0) radius 1 fill "red"; animate { frame { wait 1; } } for 50; }'
        )
        assert scene.timeline[-1].content == ""


class TestFrames:
    """Frame blocks register output for the endless loop."""

    def test_frame_registered(self, evaluate):
        scene = evaluate('canvas { frame { circle at(0, 0) radius 1 fill "red"; } }')
        assert scene.frames == (circle(1),)
        assert scene.loops_forever

    def test_frame_output_not_in_canvas(self, evaluate):
        scene = evaluate(
            'canvas { rect at(0, 0) width 1 height 1 fill "blue"; frame { circle at(0, 0) radius 1 fill "red"; } }'
        )
        assert scene.canvas_output == rect(1, 1)
        assert scene.frames == (circle(1),)

    def test_frame_side_effects_apply(self, evaluate):
        scene = evaluate('canvas { frame { background "red"; var x = 1; wait 5; } }')
        assert scene.background == '"red"'
        assert scene.variables == {"x": 1.0}
        assert scene.timeline == [Pause(5)]
        assert scene.frames == ("",)

    def test_nested_frames_register_inner_first(self, evaluate):
        scene = evaluate(
            'canvas { frame { rect at(0, 0) width 1 height 1 fill "blue"; frame { circle at(0, 0) radius 1 fill "red"; } } }'
        )
        assert scene.frames == (circle(1), rect(1, 1))

    def test_frames_inside_animate_frames_register(self, evaluate):
        scene = evaluate("canvas { animate { frame { frame { } } } for 100; }")
        assert scene.frames == ("",)

    def test_no_frames(self, evaluate):
        assert not evaluate("canvas { wait 1; }").loops_forever


class TestScene:
    def test_total_duration(self, evaluate):
        scene = evaluate('canvas { wait 100; rainbow "a" at(0, 0) duration 3; }')
        assert scene.total_duration_ms == 130

    def test_evaluate_helper(self, parse):
        scene = evaluate(parse("canvas { var a = 1; }"), RuntimeConfig(color=False))
        assert scene.variables == {"a": 1.0}


class TestVisitorDispatch:
    """Missing handlers fail loudly."""

    def test_unhandled_node_raises(self):
        class OnlyCanvas(ASTVisitor):
            def visit_canvas(self, node):
                return [self.visit(c) for c in node.commands]

        with pytest.raises(NotImplementedError, match="Wait"):
            OnlyCanvas().visit(Canvas((Wait(1),)))

    def test_handled_nodes(self):
        class Radii(ASTVisitor):
            def visit_canvas(self, node):
                return [self.visit(c) for c in node.commands]

            def visit_circle(self, node):
                return node.radius

        assert Radii().visit(Canvas((Circle(0, 0, 2, '"red"'),))) == [2]
