from __future__ import annotations

from .thermal import Reading

# (m, Th_in, Th_out, Tc_in, Tc_out), equal hot/cold flow
_DEMO_ROWS = [
    (0.22, 78.0, 65.0, 29.0, 46.0),
    (0.25, 85.0, 70.0, 30.0, 50.0),
    (0.30, 90.0, 75.0, 35.0, 55.0),
]


def demo_readings() -> list[Reading]:
    """Three laboratory readings used as the initial data set."""
    return [
        Reading.with_shared_flow(m, th_in, th_out, tc_in, tc_out, label=f"Reading {i}")
        for i, (m, th_in, th_out, tc_in, tc_out) in enumerate(_DEMO_ROWS, start=1)
    ]
