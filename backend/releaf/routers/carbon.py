"""Carbon footprint calculator route."""
from fastapi import APIRouter

from releaf.schemas.carbon import CarbonInput, CarbonResult
from releaf.services import carbon_service

router = APIRouter()


@router.post("/", response_model=CarbonResult)
def calculate(payload: CarbonInput):
    """Estimate weekly footprint by category, with reduction tips."""
    return carbon_service.calculate_footprint(payload)
