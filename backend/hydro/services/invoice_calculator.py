"""
Retributive rate figures

    regional_factor = environmental + socioeconomic - economic
    amount_to_pay   = regional_factor * minimum tariff * contaminant load

All intermediate operations keep 10 significant digits (half up), the
amounts to pay are rounded to whole pesos.
"""
from decimal import Decimal, Context, ROUND_HALF_UP
from typing import Iterable, Optional

from hydro.models.discharge import QualityClassification

CALC_CONTEXT = Context(prec=10, rounding=ROUND_HALF_UP)

ZERO = Decimal("0")

ICA_COEFFICIENTS = {
    QualityClassification.GOOD: Decimal("1.00"),
    QualityClassification.ACCEPTABLE: Decimal("1.60"),
    QualityClassification.REGULAR: Decimal("2.80"),
    QualityClassification.POOR: Decimal("4.00"),
    QualityClassification.VERY_POOR: Decimal("5.50"),
}


def calculate_cnbi(nbi) -> Decimal:
    """Coefficient of the unsatisfied basic needs index (integer part of the percentage)"""
    if nbi is None:
        raise ValueError("The municipality NBI cannot be empty")
    value = int(nbi)
    if 0 <= value <= 20:
        return Decimal("5.50")
    if 20 < value <= 40:
        return Decimal("4.37")
    if 40 < value <= 60:
        return Decimal("3.25")
    if 60 < value <= 80:
        return Decimal("2.12")
    return Decimal("1.00")


def calculate_socioeconomic_variable(category_value, cnbi: Decimal) -> Decimal:
    if category_value is None:
        raise ValueError("The municipality category value cannot be empty")
    ctx = CALC_CONTEXT
    return ctx.add(
        ctx.multiply(Decimal(str(category_value)), Decimal("0.1")),
        ctx.multiply(cnbi, Decimal("0.1")),
    )


def calculate_percentage_coefficient(percentage) -> Decimal:
    if percentage is None:
        return ZERO
    value = int(percentage)
    if 0 <= value <= 20:
        return ZERO
    if 20 < value <= 40:
        return Decimal("0.25")
    if 40 < value <= 60:
        return Decimal("0.50")
    if 60 < value <= 80:
        return Decimal("0.75")
    return Decimal("1.00")


def calculate_economic_variable(cci: Decimal, cev: Decimal, cds: Decimal, ccs: Decimal) -> Decimal:
    ctx = CALC_CONTEXT
    result = ctx.multiply(cci, Decimal("0.25"))
    result = ctx.add(result, ctx.multiply(cev, Decimal("0.25")))
    result = ctx.add(result, ctx.multiply(cds, Decimal("0.10")))
    return ctx.add(result, ctx.multiply(ccs, Decimal("0.40")))


def calculate_ica_coefficient(quality: QualityClassification) -> Decimal:
    if quality is None:
        raise ValueError("The quality classification cannot be empty")
    return ICA_COEFFICIENTS[QualityClassification(quality)]


def _average_ratio(values: list, count: int, divisor) -> Decimal:
    ctx = CALC_CONTEXT
    total = sum((Decimal(str(v)) for v in values if v is not None), ZERO)
    if total == 0:
        return ZERO
    return ctx.divide(ctx.divide(total, Decimal(count)), Decimal(str(divisor)))


def calculate_rq(caudals: Iterable, monitoring_caudal) -> Decimal:
    """Average parameter flow over the flow measured at the source"""
    caudals = list(caudals)
    if not caudals:
        return ZERO
    if monitoring_caudal is None or Decimal(str(monitoring_caudal)) == 0:
        raise ValueError("The monitoring caudal/volume cannot be zero or empty")
    return _average_ratio(caudals, len(caudals), monitoring_caudal)


def calculate_r_coefficient(rq: Decimal) -> Decimal:
    if rq <= Decimal("0.2"):
        return Decimal("1.00")
    if rq <= Decimal("0.4"):
        return Decimal("2.12")
    if rq <= Decimal("0.6"):
        return Decimal("3.25")
    if rq <= Decimal("0.8"):
        return Decimal("4.37")
    return Decimal("5.50")


def calculate_rb(concentrations: Iterable, dqo) -> Decimal:
    """Average DBO concentration over the DQO of the source"""
    concentrations = list(concentrations)
    if not concentrations:
        return ZERO
    if dqo is None or Decimal(str(dqo)) == 0:
        raise ValueError("The discharge DQO cannot be zero or empty")
    return _average_ratio(concentrations, len(concentrations), dqo)


def calculate_b_coefficient(rb: Decimal) -> Decimal:
    if rb <= Decimal("0.2"):
        return Decimal("5.50")
    if rb <= Decimal("0.4"):
        return Decimal("4.0")
    if rb <= Decimal("0.6"):
        return Decimal("2.5")
    return Decimal("1.00")


def calculate_environmental_variable(ica: Decimal, r: Decimal, b: Decimal) -> Decimal:
    ctx = CALC_CONTEXT
    result = ctx.add(ctx.multiply(ica, Decimal("0.16")), ctx.multiply(r, Decimal("0.16")))
    return ctx.add(result, ctx.multiply(b, Decimal("0.48")))


def calculate_amount_to_pay(regional_factor: Decimal, tariff, load) -> Decimal:
    ctx = CALC_CONTEXT
    amount = ctx.multiply(ctx.multiply(regional_factor, Decimal(str(tariff))), Decimal(str(load)))
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def calculate_invoice_figures(
    *,
    nbi,
    category_value,
    quality: QualityClassification,
    monitoring_caudal,
    parameter_caudals: list,
    parameter_dbo_concentrations: list,
    dqo,
    dbo_tariff,
    sst_tariff,
    cc_dbo_total,
    cc_sst_total,
    cci_percentage: Optional[Decimal] = None,
    cev_percentage: Optional[Decimal] = None,
    cds_percentage: Optional[Decimal] = None,
    ccs_percentage: Optional[Decimal] = None,
) -> dict:
    """
    Compute every figure of an invoice

    Returns:
        Dict with the variables, coefficients and amounts, keyed by the
        Invoice column names

    Raises:
        ValueError: a required input is missing or a divisor is zero
    """
    ctx = CALC_CONTEXT

    cnbi = calculate_cnbi(nbi)
    socioeconomic = calculate_socioeconomic_variable(category_value, cnbi)

    economic = calculate_economic_variable(
        calculate_percentage_coefficient(cci_percentage),
        calculate_percentage_coefficient(cev_percentage),
        calculate_percentage_coefficient(cds_percentage),
        calculate_percentage_coefficient(ccs_percentage),
    )

    ica = calculate_ica_coefficient(quality)
    r = calculate_r_coefficient(calculate_rq(parameter_caudals, monitoring_caudal))
    b = calculate_b_coefficient(calculate_rb(parameter_dbo_concentrations, dqo))
    environmental = calculate_environmental_variable(ica, r, b)

    regional_factor = ctx.subtract(ctx.add(environmental, socioeconomic), economic)

    cc_dbo = Decimal(str(cc_dbo_total or 0))
    cc_sst = Decimal(str(cc_sst_total or 0))
    amount_dbo = calculate_amount_to_pay(regional_factor, dbo_tariff, cc_dbo)
    amount_sst = calculate_amount_to_pay(regional_factor, sst_tariff, cc_sst)

    return {
        "environmental_variable": environmental,
        "socioeconomic_variable": socioeconomic,
        "economic_variable": economic,
        "regional_factor": regional_factor,
        "cc_dbo": cc_dbo,
        "cc_sst": cc_sst,
        "minimum_tariff_dbo": Decimal(str(dbo_tariff)),
        "minimum_tariff_sst": Decimal(str(sst_tariff)),
        "amount_to_pay_dbo": amount_dbo,
        "amount_to_pay_sst": amount_sst,
        "total_amount_to_pay": ctx.add(amount_dbo, amount_sst),
        "ica_coefficient": ica,
        "r_coefficient": r,
        "b_coefficient": b,
    }
