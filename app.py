from fastapi import FastAPI, HTTPException, Body
from pydantic import BaseModel, ConfigDict, Field
import uuid
import time
from typing import Optional, List, Dict, Any

# Import configuration
from energix.config import config, logger

from energix import (
    RegressionResult,
    MonthlyAggregate,
    validate,
    aggregate_by_month,
    aggregate_by_vehicle,
    aggregate_by_type,
    process_emission_data,
    NoDataError,
    FuelType,
    calculate_reference_consumption,
    calculate_improvement,
    calculate_target_consumption,
    extract_coefficients,
    build_ser_analysis,
    summarize_ser_period,
    regression_quality,
    format_equation,
    calculate_dashboard_stats,
)

# Initialize FastAPI
app = FastAPI(title="ENERGIX SER Analysis Server")


def _request_id() -> str:
    return str(uuid.uuid4())[:8]


def _records_from_body(data: Any) -> List[Dict[str, Any]]:
    """Accept either a bare list of records or ``{"records": [...]}``."""
    if isinstance(data, dict):
        data = data.get('records', data.get('data'))
    if not isinstance(data, list):
        raise HTTPException(status_code=400, detail="Expected a list of vehicle records")
    return data


# Request bodies; records stay plain dicts so invalid rows reach the validator
class EmissionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    records: List[Dict[str, Any]] = Field(default_factory=list)
    vehicle_type: str = Field(default="all", alias='vehicleType')
    fuel_type: FuelType = Field(default=FuelType.DIESEL, alias='fuelType')


class SerAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    records: Optional[List[Dict[str, Any]]] = None
    monthly_data: Optional[List[MonthlyAggregate]] = Field(default=None, alias='monthlyData')
    regression: Optional[RegressionResult] = None
    coefficients: Optional[Dict[str, float]] = None
    improvement_goal: Optional[float] = Field(default=None, alias='improvementGoal')


class ReferenceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    coefficients: Dict[str, float]
    kilometrage: float
    tonnage: float = 0.0
    actual: Optional[float] = None
    improvement_goal: Optional[float] = Field(default=None, alias='improvementGoal')


# Define FastAPI endpoints
@app.get("/")
def root():
    """Health check with the configured backend."""
    return {"status": "ok", "service": "energix-ser", "backend": config.api_url}


@app.post("/validate")
def validate_records(data: Any = Body(...)):
    """Advisory validation of vehicle records."""
    return validate(_records_from_body(data))


@app.post("/aggregate/monthly")
def monthly_aggregates(data: Any = Body(...), sort: bool = True):
    """Monthly totals and average IPE."""
    records = _records_from_body(data)
    return aggregate_by_month(records, sort=sort)


@app.post("/aggregate/vehicles")
def vehicle_aggregates(data: Any = Body(...)):
    """Per-vehicle totals and average IPE."""
    return aggregate_by_vehicle(_records_from_body(data))


@app.post("/aggregate/types")
def type_breakdown(data: Any = Body(...)):
    """Consumption breakdown by vehicle type."""
    return aggregate_by_type(_records_from_body(data))


@app.post("/emissions")
def emissions(request: EmissionRequest):
    """CO2 and LCA figures; 404 when there is nothing to compute."""
    request_id = _request_id()
    try:
        return process_emission_data(request.records, request.vehicle_type, request.fuel_type)
    except NoDataError as e:
        logger.info(f"[{request_id}] No emission data for {request.vehicle_type}")
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"[{request_id}] Error in /emissions: {e}")
        raise HTTPException(status_code=500, detail=f"Error processing emissions: {str(e)}")


@app.post("/ser/analysis")
def ser_analysis(request: SerAnalysisRequest):
    """
    SER table and period summary.

    Monthly data is taken from ``monthlyData`` when given, otherwise
    aggregated from ``records``. Coefficients come from ``regression``
    (backend result) or an explicit ``coefficients`` mapping.
    """
    request_id = _request_id()
    start_time = time.time()

    if request.monthly_data is not None:
        monthly = request.monthly_data
    elif request.records is not None:
        monthly = aggregate_by_month(request.records)
    else:
        raise HTTPException(status_code=400, detail="Provide monthlyData or records")

    if request.regression is not None:
        coefficients = extract_coefficients(request.regression)
        r_squared = request.regression.r_squared
        equation = request.regression.regression_equation or format_equation(request.regression)
    elif request.coefficients is not None:
        coefficients = request.coefficients
        r_squared = None
        equation = format_equation({
            'coefficients': {k: v for k, v in coefficients.items() if k != 'intercept'},
            'intercept': coefficients.get('intercept', 0.0),
        })
    else:
        raise HTTPException(status_code=400, detail="Provide regression or coefficients")

    try:
        rows = build_ser_analysis(monthly, coefficients, request.improvement_goal)
        summary = summarize_ser_period(monthly, coefficients, request.improvement_goal)
    except Exception as e:
        logger.exception(f"[{request_id}] Error in /ser/analysis: {e}")
        raise HTTPException(status_code=500, detail=f"Error processing SER analysis: {str(e)}")

    logger.info(f"[{request_id}] SER analysis of {len(rows)} months in {time.time() - start_time:.3f}s")
    return {
        "rows": rows,
        "summary": summary,
        "equation": equation,
        "quality": regression_quality(r_squared) if r_squared is not None else None,
    }


@app.post("/ser/reference")
def ser_reference(request: ReferenceRequest):
    """Reference consumption for one (kilometrage, tonnage) pair."""
    reference = calculate_reference_consumption(request.coefficients, request.kilometrage, request.tonnage)
    goal = config.default_improvement_goal if request.improvement_goal is None else request.improvement_goal

    response = {"referenceConsumption": reference}
    if request.actual is not None:
        response["improvement"] = calculate_improvement(request.actual, reference)
        response["targetConsumption"] = calculate_target_consumption(request.actual, goal)
    return response


@app.post("/dashboard/stats")
def dashboard_stats(data: Any = Body(...)):
    """Overview card statistics."""
    return calculate_dashboard_stats(_records_from_body(data))
