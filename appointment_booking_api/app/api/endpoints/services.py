"""
Service catalog endpoints.

These routes provide CRUD operations for bookable services.  Business
rule failures raised by ``CatalogService`` are translated into HTTP
errors here; the application's exception handlers wrap them in the
standard response envelope.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ...core.db import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER
from ...core.exceptions import BookingError
from ...schemas.common import ApiResponse
from ...schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from ...services.catalog_service import CatalogService
from ..deps import get_catalog_service


router = APIRouter()


@router.get("", response_model=ApiResponse[List[ServiceRead]])
def list_services(
    catalog: CatalogService = Depends(get_catalog_service),
) -> ApiResponse[List[ServiceRead]]:
    """List all services."""
    return ApiResponse(
        success=True,
        message="Services retrieved successfully",
        data=catalog.list_services(),
    )


@router.get("/{service_id}", response_model=ApiResponse[ServiceRead])
def get_service(
    service_id: int = Path(
        ..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, description="ID of the service"
    ),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ApiResponse[ServiceRead]:
    """Retrieve a single service.  Returns 404 if it does not exist."""
    try:
        service = catalog.get_service(service_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Service retrieved successfully", data=service)


@router.post(
    "",
    response_model=ApiResponse[ServiceRead],
    status_code=status.HTTP_201_CREATED,
)
def create_service(
    body: ServiceCreate,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ApiResponse[ServiceRead]:
    """Create a new service.

    Name and description must not be blank and the duration must lie
    between 1 and 1440 minutes; otherwise 400 is returned.
    """
    try:
        service = catalog.create_service(body)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Service created successfully", data=service)


@router.put("/{service_id}", response_model=ApiResponse[ServiceRead])
def update_service(
    body: ServiceUpdate,
    service_id: int = Path(
        ..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, description="ID of the service"
    ),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ApiResponse[ServiceRead]:
    """Replace a service.

    Returns 404 for an unknown service, 400 for an invalid payload and
    409 if the new duration would make existing appointments overlap.
    """
    try:
        service = catalog.update_service(service_id, body)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Service updated successfully", data=service)


@router.delete("/{service_id}", response_model=ApiResponse[str])
def delete_service(
    service_id: int = Path(
        ..., ge=SQLITE_MIN_INTEGER, le=SQLITE_MAX_INTEGER, description="ID of the service"
    ),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ApiResponse[str]:
    """Delete a service.

    Returns 409 while appointments still reference the service and 404
    if it does not exist.
    """
    try:
        catalog.delete_service(service_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ApiResponse(success=True, message="Service deleted successfully", data="Service deleted")
