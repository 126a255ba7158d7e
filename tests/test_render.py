"""Tests for termsnake.render"""
import threading

import pytest

from termsnake.body import Advance, Outcome
from termsnake.food import FoodDrop
from termsnake.geometry import Position
from termsnake.render import Drawer, Glyph, score_line

from conftest import RecordingSurface


class TestScoreLine:
    @pytest.mark.parametrize("width", [40, 60, 80])
    def test_fields(self, width):
        text = score_line(123, 9, width, "Snake Jr.")
        assert text.startswith("Score: 000123")
        assert "Len: 9" in text
        assert text.endswith("Snake Jr.")

    def test_wider_boards_spread_out(self):
        assert len(score_line(0, 3, 80, "x")) > len(score_line(0, 3, 60, "x")) > len(score_line(0, 3, 40, "x"))


class TestGlyph:
    def test_food_glyphs(self):
        assert Glyph.for_food(FoodDrop(Position(0, 0), 0)) is Glyph.FOOD_MAGIC
        assert Glyph.for_food(FoodDrop(Position(0, 0), 3)) is Glyph.FOOD_CYAN
        assert Glyph.for_food(FoodDrop(Position(0, 0), 10)) is Glyph.FOOD_BLUE


class TestDrawer:
    def test_move_paints_body_head_and_erases_tail(self):
        surface = RecordingSurface()
        drawer = Drawer(surface, 10, 10)
        step = Advance(Outcome.ALIVE, head=Position(3, 3), removed=Position(0, 3))
        drawer.draw_move(Position(2, 3), step)
        assert surface.calls == [
            ("paint", Position(2, 3), Glyph.BODY),
            ("paint", Position(3, 3), Glyph.HEAD),
            ("erase", Position(0, 3)),
            ("refresh",),
        ]

    def test_stall_draws_nothing(self):
        surface = RecordingSurface()
        Drawer(surface, 10, 10).draw_move(Position(2, 3), Advance(Outcome.ALIVE))
        assert surface.calls == []

    def test_no_food_draws_nothing(self):
        surface = RecordingSurface()
        Drawer(surface, 10, 10).draw_food(None)
        assert surface.calls == []

    def test_flag_is_set_only_while_drawing(self):
        drawer = Drawer(RecordingSurface(), 10, 10)
        assert not drawer.drawing
        with drawer.draw_call():
            assert drawer.drawing
        assert not drawer.drawing

    def test_render_failure_is_swallowed_and_flag_cleared(self):
        surface = RecordingSurface(fail_on={"erase"})
        drawer = Drawer(surface, 10, 10)
        drawer.draw_move(Position(0, 0), Advance(Outcome.ALIVE, head=Position(1, 0), removed=Position(0, 0)))
        assert not drawer.drawing
        assert ("refresh",) not in surface.calls

    def test_other_errors_propagate_and_flag_cleared(self):
        drawer = Drawer(RecordingSurface(), 10, 10)
        with pytest.raises(ZeroDivisionError):
            with drawer.draw_call():
                1 / 0
        assert not drawer.drawing
        # lock released
        assert drawer.lock.acquire(blocking=False)
        drawer.lock.release()

    def test_draw_calls_are_serialized(self):
        drawer = Drawer(RecordingSurface(), 10, 10)
        inside = threading.Event()
        release = threading.Event()
        done = threading.Event()

        def hold():
            with drawer.draw_call():
                inside.set()
                release.wait(2.0)

        def other():
            drawer.show_score(1, 3)
            done.set()

        t1 = threading.Thread(target=hold)
        t1.start()
        assert inside.wait(2.0)
        t2 = threading.Thread(target=other)
        t2.start()
        assert not done.wait(0.05)
        release.set()
        assert done.wait(2.0)
        t1.join()
        t2.join()

    def test_message_and_score_pass_board_size(self):
        surface = RecordingSurface()
        drawer = Drawer(surface, 12, 8)
        drawer.show_message("Game Over")
        drawer.show_score(5, 3)
        drawer.draw_board()
        assert ("message", "Game Over") in surface.calls
        assert ("score", 5, 3, 12) in surface.calls
        assert ("clear", 12, 8) in surface.calls
