from fastapi import APIRouter, Depends, HTTPException

from rims.repositories.registry import Repositories, get_repos
from rims.schemas.bom import BOM, BOMAvailability, BOMCostBreakdown, BOMCreate, BOMDuplicate, BOMUpdate
from rims.services import bom_service

router = APIRouter(prefix="/boms", tags=["Bills of Materials"])


@router.get("", response_model=list[BOM])
def list_boms(item_id: int | None = None, repos: Repositories = Depends(get_repos)):
    if item_id is not None:
        return bom_service.get_boms_containing_item(repos, item_id)
    return bom_service.list_boms(repos)


@router.post("", response_model=BOM, status_code=201)
def create_bom(data: BOMCreate, repos: Repositories = Depends(get_repos)):
    bom = bom_service.create_bom(repos, data)
    if not bom:
        raise HTTPException(503, "Database not ready")
    return bom


@router.get("/{bom_id}", response_model=BOM)
def get_bom(bom_id: int, repos: Repositories = Depends(get_repos)):
    bom = bom_service.get_bom(repos, bom_id)
    if not bom:
        raise HTTPException(404, "BOM not found")
    return bom


@router.patch("/{bom_id}", response_model=BOM)
def update_bom(bom_id: int, data: BOMUpdate, repos: Repositories = Depends(get_repos)):
    bom = bom_service.update_bom(repos, bom_id, data)
    if not bom:
        raise HTTPException(404, "BOM not found")
    return bom


@router.delete("/{bom_id}", status_code=204)
def delete_bom(bom_id: int, repos: Repositories = Depends(get_repos)):
    if not bom_service.delete_bom(repos, bom_id):
        raise HTTPException(404, "BOM not found")


@router.post("/{bom_id}/duplicate", response_model=BOM, status_code=201)
def duplicate_bom(bom_id: int, data: BOMDuplicate, repos: Repositories = Depends(get_repos)):
    bom = bom_service.duplicate_bom(repos, bom_id, data.name)
    if not bom:
        raise HTTPException(404, "BOM not found")
    return bom


@router.get("/{bom_id}/cost", response_model=BOMCostBreakdown)
def bom_cost(bom_id: int, repos: Repositories = Depends(get_repos)):
    breakdown = bom_service.calculate_bom_cost(repos, bom_id)
    if not breakdown:
        raise HTTPException(404, "BOM not found")
    return breakdown


@router.get("/{bom_id}/availability", response_model=BOMAvailability)
def bom_availability(bom_id: int, repos: Repositories = Depends(get_repos)):
    availability = bom_service.check_availability(repos, bom_id)
    if not availability:
        raise HTTPException(404, "BOM not found")
    return availability
