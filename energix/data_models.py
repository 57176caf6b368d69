from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, List, Optional, Union

# Field names follow Python conventions; aliases match the backend JSON
# (Spring/MongoDB VehicleRecord and RegressionResult documents).

RawValue = Union[bool, int, float, str]


class VehicleRecord(BaseModel):
    """One vehicle-month observation as returned by ``/api/records``."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    id: Optional[str] = None
    type: str = ""
    matricule: str = ""
    mois: Optional[str] = None
    year: str = ""
    region: Optional[str] = None
    consommation_l: Optional[float] = Field(default=None, alias='consommationL')
    consommation_tep: Optional[float] = Field(default=None, alias='consommationTEP')
    cout_dt: Optional[float] = Field(default=None, alias='coutDT')
    kilometrage: Optional[float] = None
    produits_tonnes: Optional[float] = Field(default=None, alias='produitsTonnes')
    ipe_l100km: Optional[float] = Field(default=None, alias='ipeL100km')
    ipe_l100_tonne_km: Optional[float] = Field(default=None, alias='ipeL100TonneKm')
    raw_values: Dict[str, RawValue] = Field(default_factory=dict, alias='rawValues')

    @field_validator('year', mode='before')
    @classmethod
    def _year_as_text(cls, value):
        if value is None:
            return ""
        return str(value)


class MonthlyAggregate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: str
    year: str = ""
    consommation: float = 0.0
    kilometrage: float = 0.0
    produits_tonnes: float = Field(default=0.0, alias='produitsTonnes')
    tonnage: float = 0.0  # same as produits_tonnes, chart components read this name
    cout_dt: float = Field(default=0.0, alias='coutDT')
    ipe: float = 0.0
    ipe_tonne: float = Field(default=0.0, alias='ipeTonne')
    count: int = 0

    @model_validator(mode='after')
    def _sync_tonnage(self):
        # Backend payloads carry only produitsTonnes, chart payloads only tonnage
        given = self.model_fields_set
        if 'tonnage' not in given and 'produits_tonnes' in given:
            self.tonnage = self.produits_tonnes
        elif 'produits_tonnes' not in given and 'tonnage' in given:
            self.produits_tonnes = self.tonnage
        return self


class VehicleAggregate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    matricule: str
    type: str = ""
    consommation: float = 0.0
    kilometrage: float = 0.0
    produits_tonnes: float = Field(default=0.0, alias='produitsTonnes')
    cout_dt: float = Field(default=0.0, alias='coutDT')
    ipe: float = 0.0
    ipe_tonne: float = Field(default=0.0, alias='ipeTonne')
    count: int = 0
    emissions: float = 0.0


class VehicleTypeBreakdown(BaseModel):
    name: str
    value: float = 0.0


class MonthlyValue(BaseModel):
    month: str
    value: float = 0.0


class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias='isValid')
    errors: List[str] = Field(default_factory=list)


class EmissionData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_emissions: float = Field(alias='totalEmissions')
    lca_score: float = Field(alias='lcaScore')
    monthly_emissions: List[MonthlyValue] = Field(default_factory=list, alias='monthlyEmissions')
    vehicle_type: str = Field(alias='vehicleType')


class RegressionResult(BaseModel):
    """Regression fitted by the backend. Never modified by this package."""
    model_config = ConfigDict(populate_by_name=True, extra='allow', frozen=True)

    id: Optional[str] = None
    type: str = ""
    regression_equation: str = Field(default="", alias='regressionEquation')
    slope: Optional[float] = None
    coefficients: Dict[str, float] = Field(default_factory=dict)
    intercept: float = 0.0
    r_squared: float = Field(default=0.0, alias='rSquared')
    adjusted_r_squared: float = Field(default=0.0, alias='adjustedRSquared')
    mse: float = 0.0
    monthly_data: Optional[List[MonthlyValue]] = Field(default=None, alias='monthlyData')


class LinePoint(BaseModel):
    x: float
    y: float


class SerAnalysisRow(MonthlyAggregate):
    reference_consumption: float = Field(default=0.0, alias='referenceConsumption')
    improvement: Optional[float] = None
    target_consumption: float = Field(default=0.0, alias='targetConsumption')


class SerSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_consommation: float = Field(default=0.0, alias='totalConsommation')
    total_kilometrage: float = Field(default=0.0, alias='totalKilometrage')
    total_tonnage: float = Field(default=0.0, alias='totalTonnage')
    total_reference_consumption: float = Field(default=0.0, alias='totalReferenceConsumption')
    improvement: float = 0.0
    target_consumption: float = Field(default=0.0, alias='targetConsumption')
    improvement_goal: float = Field(default=3.0, alias='improvementGoal')
    progress: float = 0.0


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_vehicles: int = Field(default=0, alias='totalVehicles')
    total_consommation: float = Field(default=0.0, alias='totalConsommation')
    total_consommation_tep: float = Field(default=0.0, alias='totalConsommationTEP')
    total_cout_dt: float = Field(default=0.0, alias='totalCoutDT')
    total_kilometrage: float = Field(default=0.0, alias='totalKilometrage')
    total_tonnage: float = Field(default=0.0, alias='totalTonnage')
    avg_ipe: float = Field(default=0.0, alias='avgIPE')
    co2_emissions: float = Field(default=0.0, alias='co2Emissions')
    cost_savings: float = Field(default=0.0, alias='costSavings')
    monthly_data: List[MonthlyAggregate] = Field(default_factory=list, alias='monthlyData')
    vehicle_type_breakdown: List[VehicleTypeBreakdown] = Field(
        default_factory=list, alias='vehicleTypeBreakdown'
    )
