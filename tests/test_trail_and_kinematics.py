import math

import pytest

from pendulum_core.chain_state import ChainState
from pendulum_core.constants import ANCHOR, APPEND_ANCHOR, PATH_LIMIT
from pendulum_core.data_models import Segment
from pendulum_core.errors import ConfigurationError
from pendulum_core.kinematics import compute_tip_positions, terminal_tip
from pendulum_core.trail import TrailBuffer

# --- 1. Trail buffer ---


def test_default_capacity_is_path_limit():
    assert TrailBuffer().capacity == PATH_LIMIT == 2000


def test_trail_evicts_oldest_first():
    buf = TrailBuffer(3)
    for i in range(5):
        buf.append((i, i * 10))
    assert len(buf) == 3
    assert buf.snapshot() == [(2.0, 20.0), (3.0, 30.0), (4.0, 40.0)]


def test_trail_never_exceeds_capacity():
    buf = TrailBuffer(PATH_LIMIT)
    points = [(float(i), 0.5) for i in range(PATH_LIMIT + 500)]
    for i, p in enumerate(points):
        buf.append(p)
        assert len(buf) == min(i + 1, PATH_LIMIT)
    assert buf.snapshot() == points[-PATH_LIMIT:]


def test_trail_clear():
    buf = TrailBuffer(4)
    buf.append((1.0, 2.0))
    buf.clear()
    assert len(buf) == 0
    assert list(buf) == []


@pytest.mark.parametrize("capacity", [0, -1, 2.5, True])
def test_trail_rejects_bad_capacity(capacity):
    with pytest.raises(ConfigurationError):
        TrailBuffer(capacity)


# --- 2. Kinematics ---


def test_single_hanging_segment_tip():
    chain = ChainState(Segment(0.7, 1.0), theta=0.0, omega=0.0)
    assert compute_tip_positions(chain, (0.0, 0.5)) == [(0.0, 0.5 - 0.7)]


def test_default_anchor_is_physics_anchor():
    chain = ChainState(Segment(0.7, 1.0), theta=0.0, omega=0.0)
    assert ANCHOR == (0.0, 0.5)
    assert compute_tip_positions(chain) == compute_tip_positions(chain, (0.0, 0.5))


def test_tips_accumulate_along_chain():
    chain = ChainState(Segment(1.0, 1.0), theta=math.pi / 2, omega=0.0)
    chain.push_segment(Segment(0.5, 1.0), 0.0, 0.0)
    chain.push_segment(Segment(0.25, 1.0), math.pi, 0.0)

    tips = compute_tip_positions(chain, (0.0, 0.0))

    assert len(tips) == 3
    assert tips[0] == pytest.approx((1.0, 0.0), abs=1e-12)
    assert tips[1] == pytest.approx((1.0, -0.5), abs=1e-12)
    assert tips[2] == pytest.approx((1.0, -0.25), abs=1e-12)
    assert terminal_tip(chain, (0.0, 0.0)) == tips[-1]


def test_append_anchor_shifts_every_tip():
    chain = ChainState.initial()
    chain.push_segment(Segment(0.7, 1.0), math.pi / 4, 0.0)
    low = compute_tip_positions(chain, ANCHOR)
    high = compute_tip_positions(chain, APPEND_ANCHOR)
    for (x0, y0), (x1, y1) in zip(low, high):
        assert x1 == pytest.approx(x0)
        assert y1 - y0 == pytest.approx(0.25)


def test_kinematics_does_not_mutate_chain():
    chain = ChainState.initial()
    compute_tip_positions(chain)
    assert chain.theta == [math.pi]
    assert chain.omega == [0.5]
