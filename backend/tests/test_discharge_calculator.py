from decimal import Decimal
from types import SimpleNamespace

from hydro.models import ParameterOrigin
from hydro.services.discharge_calculator import (
    calculate_discharge_loads,
    calculate_parameter_loads,
    yearly_discharge_load,
)


def _parameter(origin=ParameterOrigin.DISCHARGE, cc_dbo=None, cc_sst=None, **values):
    fields = dict(caudal_volumen=None, frequency=None, duration=None, conc_dbo=None, conc_sst=None)
    fields.update(values)
    return SimpleNamespace(origin=origin, cc_dbo=cc_dbo, cc_sst=cc_sst, **fields)


def test_parameter_loads():
    parameter = _parameter(
        caudal_volumen=Decimal("10"), frequency=Decimal("30"), duration=Decimal("24"),
        conc_dbo=Decimal("200"), conc_sst=Decimal("100"),
    )

    calculate_parameter_loads(parameter)

    assert parameter.cc_dbo == Decimal("5184")
    assert parameter.cc_sst == Decimal("2592")


def test_parameter_loads_need_every_input():
    parameter = _parameter(caudal_volumen=Decimal("10"), frequency=Decimal("30"), duration=Decimal("24"),
                           conc_dbo=Decimal("200"))

    calculate_parameter_loads(parameter)

    assert parameter.cc_dbo is None
    assert parameter.cc_sst is None


def test_yearly_load_extrapolates_missing_months():
    assert yearly_discharge_load([Decimal("100"), Decimal("200")]) == Decimal("1800")
    assert yearly_discharge_load([Decimal("50")] * 12) == Decimal("600")
    assert yearly_discharge_load([]) == 0


def test_discharge_loads_subtract_intake():
    discharge = SimpleNamespace(parameters=[
        _parameter(cc_dbo=Decimal("100"), cc_sst=Decimal("50")),
        _parameter(cc_dbo=Decimal("200"), cc_sst=Decimal("50")),
        _parameter(ParameterOrigin.INTAKE, cc_dbo=Decimal("30"), cc_sst=Decimal("10")),
        # not computed, ignored
        _parameter(cc_dbo=Decimal("999"), cc_sst=None),
    ])

    calculate_discharge_loads(discharge)

    assert discharge.cc_dbo_vert == Decimal("1800")
    assert discharge.cc_sst_vert == Decimal("600")
    assert discharge.cc_dbo_cap == Decimal("30")
    assert discharge.cc_sst_cap == Decimal("10")
    assert discharge.cc_dbo_total == Decimal("1770")
    assert discharge.cc_sst_total == Decimal("590")


def test_discharge_loads_without_parameters():
    discharge = SimpleNamespace(parameters=[])

    calculate_discharge_loads(discharge)

    assert discharge.cc_dbo_total == 0
    assert discharge.cc_sst_total == 0
