from enum import Enum


class PricingBasis(str, Enum):
    LINEAR = "linear"
    AREA = "area"


class TreatmentCategory(str, Enum):
    """Treatment category values as stored on treatment rows."""

    CURTAINS = "curtains"
    SHEER_CURTAINS = "sheer_curtains"
    BLOCKOUT_CURTAINS = "blockout_curtains"
    ROMAN_BLINDS = "roman_blinds"
    ROLLER_BLINDS = "roller_blinds"
    VENETIAN_BLINDS = "venetian_blinds"
    VERTICAL_BLINDS = "vertical_blinds"
    CELLULAR_BLINDS = "cellular_blinds"
    ZEBRA_BLINDS = "zebra_blinds"
    PANEL_GLIDE = "panel_glide"
    SHUTTERS = "shutters"
    AWNINGS = "awnings"

    @property
    def pricing_basis(self) -> PricingBasis:
        if self in _LINEAR_CATEGORIES:
            return PricingBasis.LINEAR
        return PricingBasis.AREA


_LINEAR_CATEGORIES = frozenset(
    {
        TreatmentCategory.CURTAINS,
        TreatmentCategory.SHEER_CURTAINS,
        TreatmentCategory.BLOCKOUT_CURTAINS,
        TreatmentCategory.ROMAN_BLINDS,
    }
)


class FabricOrientation(str, Enum):
    VERTICAL = "vertical"
    RAILROADED = "railroaded"


class MarkupSource(str, Enum):
    MATERIAL = "material"
    SUPPLIER = "supplier"
    CATEGORY = "category"
    DEFAULT = "default"
    FALLBACK = "fallback"


class OptionPricingMethod(str, Enum):
    FIXED = "fixed"
    PER_UNIT = "per_unit"
    PER_METER = "per_meter"
    PER_SQM = "per_sqm"
    PERCENTAGE = "percentage"
