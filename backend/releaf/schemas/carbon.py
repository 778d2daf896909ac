"""Pydantic schemas for the carbon footprint calculator."""
from pydantic import BaseModel


class CarbonInput(BaseModel):
    """Typical weekly usage."""

    model_config = {"allow_inf_nan": False}

    # Transportation
    car_miles: float = 0
    public_transport_miles: float = 0
    flight_hours: float = 0

    # Home
    electricity_usage: float = 0  # kWh
    gas_usage: float = 0  # kWh
    household_size: float = 1

    # Food
    meat_consumption: float = 0  # meals
    dairy_consumption: float = 0  # servings
    local_food_percentage: float = 0


class CarbonResult(BaseModel):
    """Footprint in kg CO2e."""

    transportation: float
    home: float
    food: float
    total: float
    recommendations: list[str]
