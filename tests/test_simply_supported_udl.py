# File: tests/test_simply_supported_udl.py
"""
TEST: SIMPLY SUPPORTED BEAM WITH UNIFORM DISTRIBUTED LOAD (UDL)
================================================================

Compares the solver against the exact beam-theory solution:

- Midspan moment:     M_max = wL²/8
- Midspan deflection: δ_max = 5wL⁴/(384EI)
- Support reactions:  R = wL/2

Internal forces are recovered exactly from statics along each element, and
deflection from integrating that moment diagram twice, so a single element
already gives the exact moment and deflection curves without a midspan node.
"""

import numpy as np

from planeframe import Element, Load, LoadKind, Node, solve

E, A, I = 200.0, 100.0, 100.0
EI = E * 1e6 * I * 1e-6

L = 4.0
w = 5.0  # kN/m, acting downward


def station_at(element_result, x):
    return min(element_result.stations, key=lambda st: abs(st.x - x))


def test_simply_supported_udl_midspan_moment_single_element():
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, L, 0.0, (False, True, False)),
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [Load("w", LoadKind.DISTRIBUTED, -w, element_id=1)]

    result = solve(nodes, elements, loads)
    r = result.element(1)

    M_expected = w * L**2 / 8
    assert np.isclose(station_at(r, L / 2).moment, M_expected, atol=1e-3)
    assert np.isclose(r.max_moment, M_expected, atol=1e-3)

    # Shear runs linearly from +wL/2 to -wL/2
    assert np.isclose(r.stations[0].shear, w * L / 2, atol=1e-3)
    assert np.isclose(r.stations[-1].shear, -w * L / 2, atol=1e-3)

    # Pinned ends carry no moment
    assert np.isclose(r.stations[0].moment, 0.0, atol=1e-3)
    assert np.isclose(r.stations[-1].moment, 0.0, atol=1e-3)

    assert np.isclose(result.reaction(1).fy, w * L / 2, atol=1e-3)
    assert np.isclose(result.reaction(2).fy, w * L / 2, atol=1e-3)


def test_simply_supported_udl_deflection_single_element():
    """6 m span, 10 kN/m: 5wL⁴/(384EI) = 8.4375 mm with no node at midspan."""
    span, load = 6.0, 10.0
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, span, 0.0, (False, True, False)),
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [Load("w", LoadKind.DISTRIBUTED, -load, element_id=1)]

    result = solve(nodes, elements, loads)
    r = result.element(1)

    delta_mm = 5 * load * span**4 / (384 * EI) * 1000
    assert np.isclose(delta_mm, 8.4375)
    assert np.isclose(station_at(r, span / 2).deflection, -delta_mm, atol=1e-4)
    assert np.isclose(result.max_deflection, delta_mm, atol=1e-4)

    # Symmetric about midspan
    assert np.isclose(station_at(r, 1.5).deflection, station_at(r, 4.5).deflection, atol=1e-4)


def test_simply_supported_udl_deflection():
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, L / 2, 0.0),
        Node(3, L, 0.0, (False, True, False)),
    ]
    elements = [
        Element(1, 1, 2, E=E, A=A, I=I),
        Element(2, 2, 3, E=E, A=A, I=I),
    ]
    loads = [
        Load("w1", LoadKind.DISTRIBUTED, -w, element_id=1),
        Load("w2", LoadKind.DISTRIBUTED, -w, element_id=2),
    ]

    result = solve(nodes, elements, loads)

    delta_expected = 5 * w * L**4 / (384 * EI)
    uy_mid = result.element(1).u_local[4]

    assert np.isclose(uy_mid, -delta_expected, rtol=1e-6), \
        f"Midspan deflection {uy_mid:.6e} != {-delta_expected:.6e}"

    # Same value from the second element's start, and as the global maximum (mm)
    assert np.isclose(result.element(2).u_local[1], -delta_expected, rtol=1e-6)
    assert np.isclose(result.max_deflection, delta_expected * 1000, atol=1e-3)

    # Midspan moment where the two elements meet
    M_expected = w * L**2 / 8
    assert np.isclose(result.element(1).stations[-1].moment, M_expected, atol=1e-3)
    assert np.isclose(result.element(2).stations[0].moment, M_expected, atol=1e-3)


def test_point_load_off_center_steps_shear():
    """
    Single element, point load P at a = L/4:
    R1 = 3P/4, R2 = P/4, M under the load = 3PL/16.
    """
    P = 8.0
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, L, 0.0, (False, True, False)),
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [Load("P", LoadKind.POINT, -P, element_id=1, location=0.25)]

    result = solve(nodes, elements, loads)
    r = result.element(1)

    assert np.isclose(result.reaction(1).fy, 0.75 * P, atol=1e-3)
    assert np.isclose(result.reaction(2).fy, 0.25 * P, atol=1e-3)

    a = 0.25 * L
    xs = [st.x for st in r.stations]
    assert a in xs
    assert np.isclose(station_at(r, a).moment, 3 * P * L / 16, atol=1e-3)

    before = station_at(r, a - 0.001)
    after = station_at(r, a + 0.001)
    assert np.isclose(before.shear, 0.75 * P, atol=1e-3)
    assert np.isclose(after.shear, -0.25 * P, atol=1e-3)

    # Deflection for x >= a: P·a·(L-x)·(2Lx - x² - a²) / (6EIL)
    def expected_mm(x):
        return -P * a * (L - x) * (2 * L * x - x**2 - a**2) / (6 * EI * L) * 1000

    assert np.isclose(station_at(r, a).deflection, -0.3, atol=1e-4)
    for x in (a, 2.0, 3.0):
        assert np.isclose(station_at(r, x).deflection, expected_mm(x), atol=1e-4)

    # Largest deflection P·a·(L²-a²)^1.5 / (9√3·EI·L) at L - sqrt((L²-a²)/3)
    delta_max_mm = P * a * (L**2 - a**2)**1.5 / (9 * np.sqrt(3) * EI * L) * 1000
    assert np.isclose(result.max_deflection, delta_max_mm, atol=1e-3)


def test_applied_moment_jumps_moment_diagram():
    """
    Single element, counterclockwise moment M0 at midspan:
    reactions ±M0/L, moment diagram jumps by -M0 across the load.
    """
    M0 = 6.0
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, L, 0.0, (False, True, False)),
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [Load("M", LoadKind.MOMENT, M0, element_id=1)]

    result = solve(nodes, elements, loads)
    r = result.element(1)

    assert np.isclose(result.reaction(1).fy, M0 / L, atol=1e-3)
    assert np.isclose(result.reaction(2).fy, -M0 / L, atol=1e-3)

    before = station_at(r, L / 2 - 0.001)
    after = station_at(r, L / 2 + 0.001)
    assert np.isclose(before.moment, M0 / 2, atol=1e-2)
    assert np.isclose(after.moment, -M0 / 2, atol=1e-2)
    assert np.isclose(r.stations[-1].moment, 0.0, atol=1e-3)

    # Antisymmetric deflection: zero at midspan, ±0.75/EI (m) at the quarter points
    assert np.isclose(station_at(r, L / 2).deflection, 0.0, atol=1e-4)
    assert np.isclose(station_at(r, L / 4).deflection, -0.75 / EI * 1000, atol=1e-4)
    assert np.isclose(station_at(r, 3 * L / 4).deflection, 0.75 / EI * 1000, atol=1e-4)
