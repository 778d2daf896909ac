"""Weekly carbon footprint estimate (kg CO2e) with reduction tips."""
import math

from fastapi import HTTPException, status

from releaf.schemas.carbon import CarbonInput

# kg CO2e per unit
CAR_PER_MILE = 0.35
PUBLIC_TRANSPORT_PER_MILE = 0.15
FLIGHT_PER_HOUR = 90
ELECTRICITY_PER_KWH = 0.191
GAS_PER_KWH = 0.203
MEAT_PER_MEAL = 50
DAIRY_PER_SERVING = 1.13
LOCAL_FOOD_REDUCTION_PER_PERCENT = 0.3

TRANSPORT_THRESHOLD = 100
HOME_THRESHOLD = 50
FOOD_THRESHOLD = 100

_NON_NEGATIVE = {
    "car_miles": "Car miles cannot be negative",
    "public_transport_miles": "Public transport miles cannot be negative",
    "flight_hours": "Flight hours cannot be negative",
    "electricity_usage": "Electricity usage cannot be negative",
    "gas_usage": "Gas usage cannot be negative",
    "meat_consumption": "Meat consumption cannot be negative",
    "dairy_consumption": "Dairy consumption cannot be negative",
}


def validate_inputs(data: CarbonInput) -> dict[str, str]:
    """Field name -> error message for every invalid input."""
    errors = {field: message for field, message in _NON_NEGATIVE.items() if getattr(data, field) < 0}
    if data.household_size < 1:
        errors["household_size"] = "Household size must be at least 1"
    if data.local_food_percentage < 0 or data.local_food_percentage > 100:
        errors["local_food_percentage"] = "Local food percentage must be between 0 and 100"
    return errors


def get_recommendations(transportation: float, home: float, food: float) -> list[str]:
    recommendations = []
    if transportation > TRANSPORT_THRESHOLD:
        recommendations.append("Consider carpooling or using public transport more frequently")
        recommendations.append("Look into electric vehicles for your next car purchase")
    if home > HOME_THRESHOLD:
        recommendations.append("Switch to renewable energy sources for your home")
        recommendations.append("Improve home insulation to reduce energy consumption")
    if food > FOOD_THRESHOLD:
        recommendations.append("Reduce your meat consumption by having plant-based meals several times a week")
        recommendations.append("Try to buy more locally sourced food to reduce transportation emissions")
    recommendations.append("Support our reforestation efforts by making a donation")
    return recommendations


def calculate_footprint(data: CarbonInput) -> dict:
    errors = validate_inputs(data)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Validation failed", "details": errors},
        )

    # Household size is a divisor, not a consumption figure
    consumption = data.model_dump(exclude={"household_size"})
    if not any(value > 0 for value in consumption.values()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter at least one value to calculate your carbon footprint",
        )

    transportation = (
        data.car_miles * CAR_PER_MILE
        + data.public_transport_miles * PUBLIC_TRANSPORT_PER_MILE
        + data.flight_hours * FLIGHT_PER_HOUR
    )
    home = (data.electricity_usage * ELECTRICITY_PER_KWH + data.gas_usage * GAS_PER_KWH) / max(1, data.household_size)
    food = (
        data.meat_consumption * MEAT_PER_MEAL
        + data.dairy_consumption * DAIRY_PER_SERVING
        - data.local_food_percentage * LOCAL_FOOD_REDUCTION_PER_PERCENT
    )
    total = transportation + home + food
    if not all(math.isfinite(value) for value in (transportation, home, food, total)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Values are too large to calculate a carbon footprint",
        )

    result = {
        "transportation": max(0, transportation),
        "home": max(0, home),
        "food": max(0, food),
        "total": max(0, total),
    }
    result["recommendations"] = get_recommendations(result["transportation"], result["home"], result["food"])
    return result
