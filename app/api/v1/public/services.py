"""
Public services API - the treatments a customer can pick from
File: app/api/v1/public/services.py
"""
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.services.catalog.catalog_repository import CatalogRepository

router = APIRouter()


@router.get("")
def list_services(db: Session = Depends(get_db)):
    """Active services in display order"""
    services = CatalogRepository(db).list_active_services()
    return {"services": [service.to_dict() for service in services]}


@router.get("/{service_id}")
def get_service(
        service_id: str = Path(..., description="Service ID"),
        db: Session = Depends(get_db)
):
    service = CatalogRepository(db).get_service(service_id)
    if service is None or not service.is_active:
        raise HTTPException(status_code=404, detail="Service not found")
    return service.to_dict()
