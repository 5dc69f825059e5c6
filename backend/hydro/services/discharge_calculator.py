"""
Contaminant load calculations of a discharge

Loads are expressed in kg/year. Each monthly parameter gets its own DBO and
SST load, the discharge aggregates them: DISCHARGE origin months are
extrapolated to twelve months, INTAKE origin months are summed and
subtracted.
"""
from decimal import Decimal, Context, ROUND_HALF_UP
from typing import Iterable, List

from hydro.models.discharge import ParameterOrigin

LOAD_CONTEXT = Context(prec=9, rounding=ROUND_HALF_UP)

# l/s * mg/l * h -> kg
UNIT_FACTOR = Decimal("0.0036")
MONTHS_PER_YEAR = 12


def _dec(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate_parameter_loads(parameter) -> None:
    """
    Set cc_dbo and cc_sst of a DischargeParameter

    factor = caudal_volumen * 0.0036 * frequency * duration
    cc_dbo = factor * conc_dbo, cc_sst = factor * conc_sst

    Left untouched when any input is missing.
    """
    inputs = (parameter.caudal_volumen, parameter.frequency, parameter.duration,
              parameter.conc_dbo, parameter.conc_sst)
    if any(value is None for value in inputs):
        return

    factor = _dec(parameter.caudal_volumen) * UNIT_FACTOR * _dec(parameter.frequency) * _dec(parameter.duration)
    parameter.cc_dbo = factor * _dec(parameter.conc_dbo)
    parameter.cc_sst = factor * _dec(parameter.conc_sst)


def yearly_discharge_load(loads: List[Decimal]) -> Decimal:
    """sum + (12 - months) * average, 9 significant digits"""
    if not loads:
        return Decimal("0")
    ctx = LOAD_CONTEXT
    total = sum(loads, Decimal("0"))
    average = ctx.divide(total, Decimal(len(loads)))
    complement = ctx.multiply(Decimal(MONTHS_PER_YEAR - len(loads)), average)
    return ctx.add(total, complement)


def calculate_discharge_loads(discharge, parameters: Iterable = None) -> None:
    """
    Set the cc_*_vert, cc_*_cap and cc_*_total columns of a Discharge

    Only parameters with both loads computed take part.
    """
    parameters = list(parameters if parameters is not None else discharge.parameters)
    computed = [p for p in parameters if p.cc_dbo is not None and p.cc_sst is not None]

    vert = [p for p in computed if p.origin == ParameterOrigin.DISCHARGE]
    cap = [p for p in computed if p.origin == ParameterOrigin.INTAKE]

    discharge.cc_dbo_vert = yearly_discharge_load([_dec(p.cc_dbo) for p in vert])
    discharge.cc_sst_vert = yearly_discharge_load([_dec(p.cc_sst) for p in vert])
    discharge.cc_dbo_cap = sum((_dec(p.cc_dbo) for p in cap), Decimal("0"))
    discharge.cc_sst_cap = sum((_dec(p.cc_sst) for p in cap), Decimal("0"))
    discharge.cc_dbo_total = discharge.cc_dbo_vert - discharge.cc_dbo_cap
    discharge.cc_sst_total = discharge.cc_sst_vert - discharge.cc_sst_cap
