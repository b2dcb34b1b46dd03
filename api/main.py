# api/main.py
"""
FastAPI backend for planeframe - exposes the solver and connectivity repair as REST API.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from planeframe import (
    Direction,
    Element,
    Load,
    LoadKind,
    Node,
    StiffnessMode,
    StructureType,
    TemplateParams,
    generate_geometry,
    prune_dangling_loads,
    repair_connectivity,
    solve,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="planeframe API",
    description="2D frame / truss / beam analysis by the direct stiffness method",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class NodeData(BaseModel):
    id: int
    x: float
    y: float
    restraints: Tuple[bool, bool, bool] = Field((False, False, False), description="Fix ux, uy, rz")


class ElementData(BaseModel):
    id: int
    start: int
    end: int
    E: float = Field(..., gt=0, description="Elastic modulus (GPa)")
    A: float = Field(..., gt=0, description="Area (cm²)")
    I: float = Field(..., ge=0, description="Moment of inertia (10⁻⁶ m⁴)")
    release_start: bool = False
    release_end: bool = False


class LoadData(BaseModel):
    id: str
    kind: LoadKind
    magnitude: float = Field(..., description="kN, kN/m or kNm")
    node_id: Optional[int] = None
    element_id: Optional[int] = None
    direction: Direction = Direction.Y
    location: Optional[float] = Field(None, ge=0.0, le=1.0)


class ModelData(BaseModel):
    nodes: List[NodeData]
    elements: List[ElementData]
    loads: List[LoadData] = []


class SolveRequest(ModelData):
    stiffness_mode: StiffnessMode = StiffnessMode.ELASTIC


class StationData(BaseModel):
    x: float
    deflection: float
    axial: float
    shear: float
    moment: float
    global_x: float
    global_y: float


class EndForcesData(BaseModel):
    fx: float
    fy: float
    m: float


class ElementResultData(BaseModel):
    element_id: int
    stations: List[StationData]
    max_moment: float
    max_shear: float
    max_axial: float
    u_local: List[float]
    start_forces: EndForcesData


class ReactionData(BaseModel):
    node_id: int
    fx: float
    fy: float
    m: float


class AnalysisData(BaseModel):
    elements: List[ElementResultData]
    max_deflection: float = Field(..., description="Largest |deflection| (mm)")
    reactions: List[ReactionData]


class TemplateParamsData(BaseModel):
    """Input parameters for geometry templates."""
    width: float = Field(10.0, gt=0, description="Total width (m)")
    height: float = Field(4.0, gt=0, description="Height (m)")
    roof_height: float = Field(2.0, ge=0, description="Gable rise (m)")
    num_spans: int = Field(2, ge=1, le=20, description="Spans / truss panels")
    num_stories: int = Field(2, ge=1, le=20)
    num_bays: int = Field(2, ge=1, le=20)
    E: float = Field(210.0, gt=0, description="GPa")
    A: float = Field(50.0, gt=0, description="cm²")
    I: float = Field(100.0, ge=0, description="10⁻⁶ m⁴")


# =============================================================================
# Conversion
# =============================================================================

def to_model(data: ModelData):
    """Pydantic payload -> planeframe dataclasses. ValueError on bad input."""
    nodes = [Node(n.id, n.x, n.y, tuple(n.restraints)) for n in data.nodes]
    elements = [Element(**e.model_dump()) for e in data.elements]
    loads = [Load(**l.model_dump()) for l in data.loads]
    return nodes, elements, loads


def from_model(nodes, elements, loads) -> ModelData:
    return ModelData(
        nodes=[NodeData(id=n.id, x=n.x, y=n.y, restraints=n.restraints) for n in nodes],
        elements=[
            ElementData(id=e.id, start=e.start, end=e.end, E=e.E, A=e.A, I=e.I,
                        release_start=e.release_start, release_end=e.release_end)
            for e in elements
        ],
        loads=[
            LoadData(id=l.id, kind=l.kind, magnitude=l.magnitude, node_id=l.node_id,
                     element_id=l.element_id, direction=l.direction, location=l.location)
            for l in loads
        ],
    )


def _parse(data: ModelData):
    try:
        return to_model(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "planeframe API"}


@app.post("/api/solve", response_model=AnalysisData)
async def solve_model(request: SolveRequest):
    """Solve a model. Loads on missing targets are dropped first."""
    nodes, elements, loads = _parse(request)
    loads = prune_dangling_loads(nodes, elements, loads)
    result = solve(nodes, elements, loads, request.stiffness_mode)

    return AnalysisData(
        elements=[
            ElementResultData(
                element_id=r.element_id,
                stations=[StationData(**vars(st)) for st in r.stations],
                max_moment=r.max_moment,
                max_shear=r.max_shear,
                max_axial=r.max_axial,
                u_local=[float(u) for u in r.u_local],
                start_forces=EndForcesData(**vars(r.start_forces)),
            )
            for r in result.elements
        ],
        max_deflection=result.max_deflection,
        reactions=[ReactionData(**vars(r)) for r in result.reactions],
    )


@app.post("/api/repair", response_model=ModelData)
async def repair_model(data: ModelData):
    """Split elements crossed by foreign nodes."""
    nodes, elements, loads = _parse(data)
    return from_model(*repair_connectivity(nodes, elements, loads))


@app.post("/api/templates/{kind}", response_model=ModelData)
async def template_model(kind: StructureType, params: Optional[TemplateParamsData] = None):
    """Canonical geometry for a structure type (no loads)."""
    params = params or TemplateParamsData()
    try:
        nodes, elements = generate_geometry(kind, TemplateParams(**params.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.debug("Generated %s: %d nodes, %d elements", kind.value, len(nodes), len(elements))
    return from_model(nodes, elements, [])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
