"""Violations report routes.

  GET /builds/{build_number}/violations               → summary + health
  GET /builds/{build_number}/violations/types/{type}  → files for a category
  GET /builds/{build_number}/violations/graph?build=N → SVG trend graph
  GET /builds/{build_number}/violations/file/{path}   → file violations page
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from ..deps import get_build_repository, get_config
from ..schemas import FileCountInfo, HealthInfo, ReportSummary, TypeFiles, TypeReportInfo
from ...core.build import ViolationsBuildAction
from ...core.parser import ModelParseError
from ...core.render import NoViolationsFile, PathNode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/builds/{build_number}/violations", tags=["violations"])


def _require_report(repository, build_number: int):
    """Validate the build exists and has a violations report."""
    build = repository.get_build(build_number)
    if build is None:
        raise HTTPException(status_code=404, detail="Build not found")
    action = build.get_action(ViolationsBuildAction)
    if action is None:
        raise HTTPException(
            status_code=404,
            detail=f"No violations report recorded for build #{build_number}",
        )
    return action.get_report()


def _parse_build_number(value: Optional[str]) -> int:
    """Build number from a query value; 0 (this build) when missing or invalid."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return number if number > 0 else 0


@router.get("", response_model=ReportSummary)
async def get_report(
    build_number: int,
    repository=Depends(get_build_repository),
):
    """Counts, per-category health and overall health for a build."""
    report = _require_report(repository, build_number)

    health = report.get_build_health()
    return ReportSummary(
        build=build_number,
        health=HealthInfo(**health.to_dict()) if health is not None else None,
        healths=[HealthInfo(**h.to_dict()) for h in report.get_build_healths()],
        violations=dict(report.get_violations()),
        type_reports=[
            TypeReportInfo(type=t.type, icon=t.icon, number=t.number)
            for t in report.get_type_reports().values()
        ],
        unstable=report.is_unstable(),
    )


@router.get("/types/{type_name}", response_model=TypeFiles)
async def get_type_files(
    build_number: int,
    type_name: str,
    repository=Depends(get_build_repository),
):
    """Files with violations of one category, worst first."""
    report = _require_report(repository, build_number)

    return TypeFiles(
        build=build_number,
        type=type_name,
        number=report.get_violations().get(type_name),
        files=[
            FileCountInfo(name=fc.name, count=fc.counts.get(type_name, 0), counts=fc.counts)
            for fc in report.get_type_files(type_name)
        ],
    )


@router.get("/graph")
async def get_graph(
    build_number: int,
    build: Optional[str] = Query(default=None, description="Build to graph; this build if omitted or invalid"),
    width: int = Query(default=500, ge=50, le=2000),
    height: int = Query(default=200, ge=50, le=2000),
    repository=Depends(get_build_repository),
):
    """Trend graph of violation counts up to the requested build.

    Responds 204 when the resolved build has no violations data.
    """
    report = _require_report(repository, build_number)

    image = report.do_graph(_parse_build_number(build), width=width, height=height)
    if image is None:
        return Response(status_code=204)
    return Response(content=image.content, media_type=image.media_type)


@router.get("/file/{file_path:path}")
async def get_file(
    build_number: int,
    file_path: str,
    request: Request,
    repository=Depends(get_build_repository),
    config=Depends(get_config),
):
    """Violations recorded against one file, or a "no violations" placeholder."""
    report = _require_report(repository, build_number)

    node = report.get_dynamic(file_path, context_path=request.scope.get("root_path", ""))
    try:
        return node.to_dict(limit=config.limit)
    except ModelParseError as e:
        logger.warning(f"Unable to parse file report for '{node.name}': {e.message}")
        fallback = PathNode(node.prefix, node.name, NoViolationsFile(node.name, report.build))
        return fallback.to_dict()
