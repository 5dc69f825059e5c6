from decimal import Decimal

import pytest

from hydro.models import QualityClassification
from hydro.services.invoice_calculator import (
    calculate_amount_to_pay,
    calculate_b_coefficient,
    calculate_cnbi,
    calculate_economic_variable,
    calculate_invoice_figures,
    calculate_percentage_coefficient,
    calculate_r_coefficient,
    calculate_rb,
    calculate_rq,
)


@pytest.mark.parametrize(
    "nbi, expected",
    [("0", "5.50"), ("20.9", "5.50"), ("35.4", "4.37"), ("60", "3.25"), ("75", "2.12"), ("95", "1.00")],
)
def test_cnbi(nbi, expected):
    assert calculate_cnbi(Decimal(nbi)) == Decimal(expected)


def test_cnbi_requires_value():
    with pytest.raises(ValueError):
        calculate_cnbi(None)


def test_economic_variable_from_progress():
    coefficients = [calculate_percentage_coefficient(Decimal(p)) for p in ("50", "85", "10", "30")]

    assert coefficients == [Decimal("0.50"), Decimal("1.00"), Decimal("0"), Decimal("0.25")]
    assert calculate_economic_variable(*coefficients) == Decimal("0.475")
    assert calculate_percentage_coefficient(None) == 0


def test_rq_and_r_coefficient():
    rq = calculate_rq([Decimal("10"), Decimal("30")], Decimal("100"))

    assert rq == Decimal("0.2")
    assert calculate_r_coefficient(rq) == Decimal("1.00")
    assert calculate_r_coefficient(Decimal("0.9")) == Decimal("5.50")
    assert calculate_rq([], Decimal("100")) == 0


def test_rq_requires_monitoring_caudal():
    with pytest.raises(ValueError):
        calculate_rq([Decimal("10")], Decimal("0"))
    with pytest.raises(ValueError):
        calculate_rq([Decimal("10")], None)


def test_rb_and_b_coefficient():
    rb = calculate_rb([Decimal("100"), Decimal("200")], Decimal("500"))

    assert rb == Decimal("0.3")
    assert calculate_b_coefficient(rb) == Decimal("4.0")
    assert calculate_b_coefficient(Decimal("0.1")) == Decimal("5.50")
    assert calculate_b_coefficient(Decimal("0.7")) == Decimal("1.00")
    # Missing concentrations count in the average
    assert calculate_rb([Decimal("300"), None], Decimal("500")) == Decimal("0.3")


def test_rb_requires_dqo():
    with pytest.raises(ValueError):
        calculate_rb([Decimal("100")], None)


def test_amount_to_pay_rounds_half_up():
    assert calculate_amount_to_pay(Decimal("2.985"), Decimal("150.5"), Decimal("1000")) == Decimal("449243")


def _figures(**overrides):
    inputs = dict(
        nbi=Decimal("35.4"),
        category_value=Decimal("2.12"),
        quality=QualityClassification.ACCEPTABLE,
        monitoring_caudal=Decimal("100"),
        parameter_caudals=[Decimal("10"), Decimal("30")],
        parameter_dbo_concentrations=[Decimal("100"), Decimal("200")],
        dqo=Decimal("500"),
        dbo_tariff=Decimal("150.5"),
        sst_tariff=Decimal("64.3"),
        cc_dbo_total=Decimal("1000"),
        cc_sst_total=Decimal("2000"),
    )
    inputs.update(overrides)
    return calculate_invoice_figures(**inputs)


def test_invoice_figures():
    figures = _figures()

    assert figures["socioeconomic_variable"] == Decimal("0.649")
    assert figures["economic_variable"] == 0
    assert figures["ica_coefficient"] == Decimal("1.60")
    assert figures["r_coefficient"] == Decimal("1.00")
    assert figures["b_coefficient"] == Decimal("4.0")
    assert figures["environmental_variable"] == Decimal("2.336")
    assert figures["regional_factor"] == Decimal("2.985")
    assert figures["amount_to_pay_dbo"] == Decimal("449243")
    assert figures["amount_to_pay_sst"] == Decimal("383871")
    assert figures["total_amount_to_pay"] == Decimal("833114")


def test_invoice_figures_with_project_progress():
    figures = _figures(
        cci_percentage=Decimal("50"),
        cev_percentage=Decimal("85"),
        cds_percentage=Decimal("10"),
        ccs_percentage=Decimal("30"),
    )

    assert figures["economic_variable"] == Decimal("0.475")
    assert figures["regional_factor"] == Decimal("2.510")


def test_invoice_figures_missing_category():
    with pytest.raises(ValueError):
        _figures(category_value=None)
