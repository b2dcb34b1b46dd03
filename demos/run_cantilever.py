# File: demos/run_cantilever.py
"""
DEMO: CANTILEVER WITH A TIP LOAD
================================

A 3 m steel cantilever, fixed at the wall, with 10 kN hanging off the tip.

Textbook answers:
- tip deflection  δ = PL³/3EI
- tip rotation    θ = PL²/2EI
- wall reaction   R = P, M = PL

The three stiffness modes are compared at the end: AXIALLY_RIGID leaves a
horizontal cantilever unchanged, RIGID makes it 10⁴ times stiffer.
"""

from planeframe import Element, Load, LoadKind, Node, StiffnessMode, solve


def main():
    # ========================================================================
    # STEP 1: DEFINE THE PHYSICAL PROBLEM
    # ========================================================================
    L = 3.0      # m
    P = 10.0     # kN, downward
    E = 200.0    # GPa
    A = 100.0    # cm²
    I = 100.0    # 10⁻⁶ m⁴
    EI = E * 1e6 * I * 1e-6

    nodes = [
        Node(1, 0.0, 0.0, (True, True, True)),   # wall
        Node(2, L, 0.0),                         # tip
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [Load("P", LoadKind.POINT, -P, node_id=2)]

    # ========================================================================
    # STEP 2: SOLVE
    # ========================================================================
    result = solve(nodes, elements, loads)
    r = result.element(1)
    wall = result.reaction(1)

    # ========================================================================
    # STEP 3: PRINT RESULTS
    # ========================================================================
    print("=" * 60)
    print("DEMO: CANTILEVER WITH A TIP LOAD")
    print("=" * 60)
    print(f"Tip deflection (mm):  {r.stations[-1].deflection:10.4f}"
          f"   expected {-P * L**3 / (3 * EI) * 1000:10.4f}")
    print(f"Tip rotation (rad):   {r.u_local[5]:10.6f}"
          f"   expected {-P * L**2 / (2 * EI):10.6f}")
    print(f"Wall reaction Fy (kN):{wall.fy:10.4f}   expected {P:10.4f}")
    print(f"Wall reaction M (kNm):{wall.m:10.4f}   expected {P * L:10.4f}")
    print()

    print("Moment diagram (every 0.5 m):")
    for st in r.stations:
        if abs(st.x / 0.5 - round(st.x / 0.5)) < 1e-9:
            print(f"  x = {st.x:4.2f} m   M = {st.moment:8.3f} kNm   V = {st.shear:6.3f} kN")
    print()

    print("Stiffness modes:")
    for mode in StiffnessMode:
        mode_result = solve(nodes, elements, loads, mode)
        print(f"  {mode.value:<14} max deflection = {mode_result.max_deflection:.6f} mm")


if __name__ == "__main__":
    main()
