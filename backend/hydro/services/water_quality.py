"""
Water quality index (ICA) of a receiving source

Sub-indices are computed from the raw lab measurements of a monitoring:
iod (dissolved oxygen), isst (suspended solids), idqo (chemical oxygen
demand), ice (conductivity), iph (pH) and irnp (N/P ratio). Five or six
of them are weighted into the ICA coefficient, which gives the quality
classification used by the invoice regional factor.
"""
import math
from decimal import Decimal, Context, ROUND_HALF_UP
from typing import Optional

from hydro.models.discharge import QualityClassification

DEFAULT_CONTEXT = Context(prec=11, rounding=ROUND_HALF_UP)
ICA_CONTEXT = Context(prec=3, rounding=ROUND_HALF_UP)

ONE = Decimal("1")
ZERO = Decimal("0")


def to_decimal(value) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_iod(od) -> Optional[Decimal]:
    od = to_decimal(od)
    if od is None:
        return None
    ctx = DEFAULT_CONTEXT
    percent = ctx.multiply(Decimal("0.01"), od)
    if od > 100:
        return ctx.subtract(ONE, ctx.subtract(percent, ONE))
    return ctx.subtract(ONE, ctx.subtract(ONE, percent))


def calculate_isst(sst) -> Optional[Decimal]:
    sst = to_decimal(sst)
    if sst is None:
        return None
    if sst <= Decimal("4.5"):
        return ONE
    if sst >= 320:
        return ZERO
    ctx = DEFAULT_CONTEXT
    return ctx.subtract(Decimal("1.02"), ctx.multiply(Decimal("0.003"), sst))


def calculate_idqo(dqo) -> Optional[Decimal]:
    dqo = to_decimal(dqo)
    if dqo is None:
        return None
    if dqo <= 20:
        return Decimal("0.91")
    if dqo <= 25:
        return Decimal("0.71")
    if dqo <= 40:
        return Decimal("0.51")
    if dqo <= 80:
        return Decimal("0.26")
    return Decimal("0.125")


def calculate_ice(ce) -> Optional[Decimal]:
    """ice = 1 - 10^(-3.26 + 1.34 * log10(ce)), floored at 0"""
    ce = to_decimal(ce)
    if ce is None:
        return None
    if ce <= 0:
        raise ValueError("CE value must be greater than 0 for logarithm calculation")

    ice_value = 1.0 - math.pow(10, -3.26 + 1.34 * math.log10(float(ce)))
    if ice_value < 0:
        ice_value = 0.0
    return DEFAULT_CONTEXT.plus(Decimal(ice_value))


def calculate_iph(ph) -> Optional[Decimal]:
    ph = to_decimal(ph)
    if ph is None:
        return None
    if ph < 4:
        return Decimal("0.1")
    if ph <= 7:
        return DEFAULT_CONTEXT.plus(Decimal(0.02628419 * math.exp(float(ph) * 0.520025)))
    if ph <= 8:
        return ONE
    if ph <= 11:
        return DEFAULT_CONTEXT.plus(Decimal(math.exp((float(ph) - 8.0) * -0.5187742)))
    return Decimal("0.1")


def calculate_rnp(n, p) -> Optional[Decimal]:
    """N/P ratio, None when either value is missing or p is zero"""
    n, p = to_decimal(n), to_decimal(p)
    if n is None or p is None or p == 0:
        return None
    return DEFAULT_CONTEXT.divide(n, p)


def calculate_irnp(rnp) -> Optional[Decimal]:
    rnp = to_decimal(rnp)
    if rnp is None:
        return None
    if 5 < rnp <= 10:
        return Decimal("0.35")
    if 10 < rnp < 15:
        return Decimal("0.6")
    if 15 <= rnp <= 20:
        return Decimal("0.8")
    return Decimal("0.15")


def calculate_ica_coefficient(
    iod: Optional[Decimal],
    isst: Optional[Decimal],
    idqo: Optional[Decimal],
    ice: Optional[Decimal],
    iph: Optional[Decimal],
    irnp: Optional[Decimal],
) -> Optional[Decimal]:
    """
    Weighted ICA coefficient (3 significant digits).

    Five variables: iod, isst, idqo, ice and iph weigh 0.2 each, irnp is
    left out. Six variables weigh 0.17 each except iph, which weighs 0.15.
    Fewer than five variables give no coefficient.
    """
    indices = [iod, isst, idqo, ice, iph, irnp]
    count = sum(1 for value in indices if value is not None)

    if count < 5:
        return None

    if count == 5:
        weights = [Decimal("0.2")] * 5 + [ZERO]
    else:
        weights = [Decimal("0.17")] * 4 + [Decimal("0.15"), Decimal("0.17")]

    ctx = ICA_CONTEXT
    result = ZERO
    for value, weight in zip(indices, weights):
        if value is not None and weight:
            result = ctx.add(result, ctx.multiply(value, weight))
    return result


def classify_quality(ica_coefficient) -> Optional[QualityClassification]:
    """
    Raises:
        ValueError: coefficient outside [0, 1]
    """
    ica = to_decimal(ica_coefficient)
    if ica is None:
        return None
    if ica < 0 or ica > 1:
        raise ValueError(f"ICA coefficient must be between 0 and 1, but was: {ica}")
    if ica <= Decimal("0.25"):
        return QualityClassification.VERY_POOR
    if ica <= Decimal("0.5"):
        return QualityClassification.POOR
    if ica <= Decimal("0.7"):
        return QualityClassification.REGULAR
    if ica <= Decimal("0.9"):
        return QualityClassification.ACCEPTABLE
    return QualityClassification.GOOD


def apply_monitoring_indices(monitoring) -> None:
    """
    Fill the computed fields of a DischargeMonitoring or a station
    Monitoring from its raw values

    Usage:
        apply_monitoring_indices(db_monitoring)
    """
    monitoring.iod = calculate_iod(monitoring.od)
    monitoring.isst = calculate_isst(monitoring.sst)
    monitoring.idqo = calculate_idqo(monitoring.dqo)
    monitoring.ice = calculate_ice(monitoring.ce)
    monitoring.iph = calculate_iph(monitoring.ph)
    monitoring.rnp = calculate_rnp(monitoring.n, monitoring.p)
    monitoring.irnp = calculate_irnp(monitoring.rnp)

    indices = [monitoring.iod, monitoring.isst, monitoring.idqo,
               monitoring.ice, monitoring.iph, monitoring.irnp]
    monitoring.number_ica_variables = sum(1 for value in indices if value is not None)
    monitoring.ica_coefficient = calculate_ica_coefficient(*indices)
    monitoring.quality_classification = classify_quality(monitoring.ica_coefficient)
