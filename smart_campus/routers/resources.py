from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from smart_campus.campus import CampusSystem, get_campus
from smart_campus.schemas.resource import (
    ResourceCreate,
    ResourceUpdate,
    ResourceCheckout,
    ResourceResponse,
)
from smart_campus.utils.errors import CampusError
from smart_campus.utils.http_errors import http_error
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/resources",
    tags=["resources"],
)


def lookup(campus, resource_id):
    try:
        return campus.get_resource(resource_id)
    except CampusError as e:
        logger.error(f"Resource not found: {resource_id}")
        raise http_error(e)


@router.post("/", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
def create_resource(resource: ResourceCreate, campus: CampusSystem = Depends(get_campus)):
    try:
        db_resource = campus.add_resource(resource.id, resource.name, resource.type, resource.status)
    except CampusError as e:
        logger.error(f"Resource rejected: {e}")
        raise http_error(e)
    logger.debug(f"Created resource: {db_resource.id}")
    return db_resource


@router.get("/", response_model=List[ResourceResponse])
def get_resources(skip: int = 0, limit: int = 100, campus: CampusSystem = Depends(get_campus)):
    return campus.directory.resources[skip:skip + limit]


@router.get("/search/", response_model=ResourceResponse)
def search_resources(term: str, campus: CampusSystem = Depends(get_campus)):
    """
    First resource whose ID equals `term` or whose name contains it, ignoring case.
    """
    resource = campus.search_resources(term)
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No resource found")
    return resource


@router.get("/{resource_id}", response_model=ResourceResponse)
def get_resource(resource_id: str, campus: CampusSystem = Depends(get_campus)):
    return lookup(campus, resource_id)


@router.put("/{resource_id}", response_model=ResourceResponse)
def update_resource(resource_id: str, resource_update: ResourceUpdate, campus: CampusSystem = Depends(get_campus)):
    resource = lookup(campus, resource_id)
    try:
        campus.edit_resource(resource, resource_update.name, resource_update.type, resource_update.status)
    except CampusError as e:
        logger.error(f"Update rejected for resource {resource_id}: {e}")
        raise http_error(e)
    return resource


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(resource_id: str, campus: CampusSystem = Depends(get_campus)):
    resource = lookup(campus, resource_id)
    campus.delete_resource(resource)
    logger.debug(f"Deleted resource: {resource_id}")
    return None


@router.post("/{resource_id}/checkout", response_model=ResourceResponse)
def checkout_resource(resource_id: str, checkout: ResourceCheckout, campus: CampusSystem = Depends(get_campus)):
    """
    Check an available resource out to a registered student.
    """
    resource = lookup(campus, resource_id)
    try:
        campus.check_out_resource(resource, checkout.student_id)
    except CampusError as e:
        logger.error(f"Checkout rejected for resource {resource_id}: {e}")
        raise http_error(e)
    logger.debug(f"Checked out resource {resource_id} to {resource.checked_out_by}")
    return resource


@router.post("/{resource_id}/return", response_model=ResourceResponse)
def return_resource(resource_id: str, campus: CampusSystem = Depends(get_campus)):
    resource = lookup(campus, resource_id)
    try:
        campus.return_resource(resource)
    except CampusError as e:
        logger.error(f"Return rejected for resource {resource_id}: {e}")
        raise http_error(e)
    logger.debug(f"Returned resource: {resource_id}")
    return resource
