from .algorithms import (
    ALGORITHM_VERSION,
    calculate_treatment,
    calculate_treatment_quick,
    validate_calculation_input,
)
from .errors import CalculationError, InvalidArgument, InvalidConfiguration

__all__ = [
    "ALGORITHM_VERSION",
    "calculate_treatment",
    "calculate_treatment_quick",
    "validate_calculation_input",
    "CalculationError",
    "InvalidArgument",
    "InvalidConfiguration",
]
