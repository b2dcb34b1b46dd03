# File: demos/run_pratt_truss.py
"""
DEMO: PRATT TRUSS FROM A TEMPLATE
=================================

PURPOSE:
--------
Generate a parallel-chord truss with generate_geometry(), load every inner
bottom-chord joint, and print member forces.

Every member is pinned at both ends, so no joint has rotational stiffness.
The solver decouples those rotation equations and the structure behaves as
an ideal pin-jointed truss: members carry axial force only.
"""

import logging

from planeframe import (
    Load,
    LoadKind,
    StructureType,
    TemplateParams,
    generate_geometry,
    solve,
)


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    params = TemplateParams(width=12.0, height=2.0, num_spans=6, E=210.0, A=20.0, I=50.0)
    nodes, elements = generate_geometry(StructureType.TRUSS, params)

    panels = params.num_spans
    bottom = nodes[:panels + 1]
    loads = [
        Load(f"P{n.id}", LoadKind.POINT, -20.0, node_id=n.id)
        for n in bottom[1:-1]
    ]

    result = solve(nodes, elements, loads)
    by_id = {n.id: n for n in nodes}

    print("=" * 60)
    print(f"DEMO: PRATT TRUSS ({panels} panels, {len(elements)} members)")
    print("=" * 60)
    print(f"{'member':>6} {'from':>12} {'to':>12} {'N (kN)':>10} {'max M':>8}")
    for e in elements:
        r = result.element(e.id)
        a, b = by_id[e.start], by_id[e.end]
        print(f"{e.id:>6} ({a.x:4.1f},{a.y:4.1f}) ({b.x:4.1f},{b.y:4.1f}) "
              f"{r.stations[0].axial:10.3f} {r.max_moment:8.3f}")
    print()

    total = sum(load.magnitude for load in loads)
    print(f"Applied load:      {total:8.2f} kN")
    for reaction in result.reactions:
        print(f"Reaction node {reaction.node_id:>2}:  Fx = {reaction.fx:8.3f}  Fy = {reaction.fy:8.3f}")
    print(f"Max deflection:    {result.max_deflection:8.3f} mm")


if __name__ == "__main__":
    main()
