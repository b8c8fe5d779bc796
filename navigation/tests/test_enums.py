"""
test_enums.py - Heading arithmetic
"""

import pytest

from navigation.utils.enums import Face, Heading, Movement

ALL_HEADINGS = list(Heading)


class TestHeadingRotation:

    @pytest.mark.parametrize("heading", ALL_HEADINGS)
    def test_left_undoes_right(self, heading):
        assert heading.turned_right().turned_left() == heading
        assert heading.turned_left().turned_right() == heading

    @pytest.mark.parametrize("heading", ALL_HEADINGS)
    def test_four_left_turns_close(self, heading):
        h = heading
        for _ in range(4):
            h = h.turned_left()
        assert h == heading

    def test_clockwise_cycle(self):
        assert [Heading.N.rotate(k) for k in range(4)] == [Heading.N, Heading.E, Heading.S, Heading.W]

    def test_negative_and_large_steps(self):
        assert Heading.N.rotate(-1) == Heading.W
        assert Heading.E.rotate(2) == Heading.W
        assert Heading.S.rotate(-6) == Heading.N
        assert Heading.W.rotate(5) == Heading.N

    def test_deltas_are_unit_steps(self):
        assert Heading.N.delta() == (0, -1)
        assert Heading.E.delta() == (1, 0)
        assert Heading.S.delta() == (0, 1)
        assert Heading.W.delta() == (-1, 0)


class TestEnumValues:

    def test_face_ids_match_renderer(self):
        assert [int(f) for f in Face] == [0, 1, 2, 3, 4, 5]
        assert Face(4) == Face.TOP

    def test_movement_prefixes(self):
        assert {m.value for m in Movement} == {"FW", "BW", "TL", "TR"}
