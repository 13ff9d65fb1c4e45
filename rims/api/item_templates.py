from fastapi import APIRouter, Depends, HTTPException

from rims.repositories.registry import Repositories, get_repos
from rims.schemas.item_template import ItemTemplate, ItemTemplateCreate, ItemTemplateFromItem, ItemTemplateUpdate
from rims.services import item_service, item_template_service

router = APIRouter(prefix="/item-templates", tags=["Item Templates"])


@router.get("", response_model=list[ItemTemplate])
def list_templates(category: str | None = None, repos: Repositories = Depends(get_repos)):
    if category is not None:
        return item_template_service.get_templates_for_category(repos, category)
    return item_template_service.list_templates(repos)


@router.post("", response_model=ItemTemplate, status_code=201)
def create_template(data: ItemTemplateCreate, repos: Repositories = Depends(get_repos)):
    template = item_template_service.create_template(repos, data)
    if not template:
        raise HTTPException(503, "Database not ready")
    return template


@router.post("/from-item", response_model=ItemTemplate, status_code=201)
def create_template_from_item(data: ItemTemplateFromItem, repos: Repositories = Depends(get_repos)):
    item = item_service.get_item(repos, data.item_id)
    if not item:
        raise HTTPException(404, "Item not found")
    return item_template_service.create_template_from_item(repos, data.name, item)


@router.get("/{template_id}", response_model=ItemTemplate)
def get_template(template_id: int, repos: Repositories = Depends(get_repos)):
    template = item_template_service.get_template(repos, template_id)
    if not template:
        raise HTTPException(404, "Template not found")
    return template


@router.patch("/{template_id}", response_model=ItemTemplate)
def update_template(template_id: int, data: ItemTemplateUpdate, repos: Repositories = Depends(get_repos)):
    template = item_template_service.update_template(repos, template_id, data)
    if not template:
        raise HTTPException(404, "Template not found")
    return template


@router.delete("/{template_id}", status_code=204)
def delete_template(template_id: int, repos: Repositories = Depends(get_repos)):
    if not item_template_service.delete_template(repos, template_id):
        raise HTTPException(404, "Template not found")
