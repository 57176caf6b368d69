import pytest

from energix import (
    MonthlyAggregate,
    RegressionResult,
    build_ser_analysis,
    calculate_improvement,
    calculate_reference_consumption,
    calculate_target_consumption,
    extract_coefficients,
    format_equation,
    reconstruct_line,
    regression_quality,
    summarize_ser_period,
)

COEFFICIENTS = {'kilometrage': 0.05, 'tonnage': 0.02, 'intercept': 10}


@pytest.fixture
def backend_result():
    return RegressionResult(**{
        'id': 'reg-1',
        'type': 'camions',
        'regressionEquation': 'Y = 0.0500*X1 + 0.0200*X2 + 10.0000',
        'coefficients': {'kilometrage': 0.05, 'tonnage': 0.02},
        'intercept': 10.0,
        'rSquared': 0.82,
        'adjustedRSquared': 0.79,
        'mse': 12.5,
    })


def test_reference_consumption():
    assert calculate_reference_consumption(COEFFICIENTS, 1000, 5) == 10 + 0.05 * 1000 + 0.02 * 5


def test_reference_consumption_from_backend_result(backend_result):
    assert calculate_reference_consumption(backend_result, 1000, 5) == pytest.approx(60.1)


@pytest.mark.parametrize("coefficients, kilometrage, tonnage", [
    (COEFFICIENTS, None, 5),
    (COEFFICIENTS, 1000, float('nan')),
    (COEFFICIENTS, '1000', 5),
    (COEFFICIENTS, float('inf'), 5),
    ({'kilometrage': 0.05, 'intercept': 10}, 1000, 5),
    (None, 1000, 5),
])
def test_reference_consumption_degenerate_inputs(coefficients, kilometrage, tonnage):
    assert calculate_reference_consumption(coefficients, kilometrage, tonnage) == 0


def test_improvement():
    assert calculate_improvement(100, 90) == pytest.approx(10.0)
    assert calculate_improvement(100, 110) == pytest.approx(-10.0)


@pytest.mark.parametrize("actual, reference", [(0, 50), (None, 50), (float('nan'), 50), (100, 0)])
def test_improvement_guards(actual, reference):
    assert calculate_improvement(actual, reference) == 0


def test_target_consumption():
    assert calculate_target_consumption(200) == pytest.approx(194.0)
    assert calculate_target_consumption(200, 10) == pytest.approx(180.0)
    assert calculate_target_consumption(0) == 0
    assert calculate_target_consumption(None) == 0


def test_reconstruct_line_uses_domain_extremes():
    points = reconstruct_line({'slope': 0.5, 'intercept': 2.0}, [300, 100, 200])

    assert [(p.x, p.y) for p in points] == [(100.0, 52.0), (300.0, 152.0)]


def test_reconstruct_line_degenerate_domain():
    points = reconstruct_line({'slope': 2.0, 'intercept': 1.0}, [])
    assert [(p.x, p.y) for p in points] == [(0.0, 1.0), (0.0, 1.0)]

    points = reconstruct_line({'slope': 2.0, 'intercept': 1.0}, [None, 5])
    assert (points[0].x, points[1].x) == (0.0, 5.0)


def test_extract_coefficients(backend_result):
    assert extract_coefficients(backend_result) == {'kilometrage': 0.05, 'tonnage': 0.02, 'intercept': 10.0}
    assert extract_coefficients(RegressionResult(coefficients={'kilometrage': 0.1})) == {
        'kilometrage': 0.1, 'tonnage': 0.0, 'intercept': 0.0
    }


def test_backend_result_is_read_only(backend_result):
    with pytest.raises(Exception):
        backend_result.intercept = 0


@pytest.mark.parametrize("r_squared, label", [
    (0.95, 'Excellent'), (0.7, 'Acceptable'), (0.6, 'Acceptable'),
    (0.5, 'Faible'), (-3, 'Faible'), (None, 'Faible'), (4.0, 'Excellent'),
])
def test_regression_quality(r_squared, label):
    assert regression_quality(r_squared) == label


def test_format_equation():
    assert format_equation({'slope': 0.12345, 'intercept': 5}) == "y = 0.1235 × x + 5.00"
    assert format_equation(RegressionResult(
        coefficients={'tonnage': 0.2412, 'kilometrage': 0.1468}, intercept=305.0161
    )) == "Y = 0.1468*X1 + 0.2412*X2 + 305.0161"


def test_format_equation_negative_terms():
    assert format_equation({
        'coefficients': {'kilometrage': 0.1, 'tonnage': -0.2}, 'intercept': -5
    }) == "Y = 0.1000*X1 - 0.2000*X2 - 5.0000"
    assert format_equation({
        'coefficients': {'kilometrage': -0.1}, 'intercept': 2
    }) == "Y = -0.1000*X1 + 2.0000"
    assert format_equation({'slope': 0.5, 'intercept': -3}) == "y = 0.5000 × x - 3.00"


def test_ser_analysis_rows():
    monthly = [
        MonthlyAggregate(month='Février', consommation=0.0, kilometrage=0.0, tonnage=0.0, count=1),
        MonthlyAggregate(month='Janvier', consommation=70.0, kilometrage=1000.0, tonnage=5.0, count=1),
    ]
    rows = build_ser_analysis(monthly, COEFFICIENTS, improvement_goal=10)

    assert [r.month for r in rows] == ['Janvier', 'Février']
    janvier = rows[0]
    assert janvier.reference_consumption == pytest.approx(60.1)
    assert janvier.improvement == pytest.approx((70.0 - 60.1) / 70.0 * 100)
    assert janvier.target_consumption == pytest.approx(63.0)
    assert janvier.kilometrage == 1000.0
    assert rows[1].improvement is None
    assert rows[1].target_consumption == 0


def test_backend_tonnage_name_feeds_reference():
    monthly = [MonthlyAggregate.model_validate(
        {'month': 'Janvier', 'consommation': 70, 'kilometrage': 1000, 'produitsTonnes': 500}
    )]
    assert monthly[0].tonnage == 500

    rows = build_ser_analysis(monthly, COEFFICIENTS)
    assert rows[0].reference_consumption == pytest.approx(70.0)
    assert summarize_ser_period(monthly, COEFFICIENTS).total_tonnage == pytest.approx(500.0)

    chart_item = MonthlyAggregate(month='Mars', tonnage=8.0)
    assert chart_item.produits_tonnes == 8.0


def test_ser_period_counts_intercept_once():
    monthly = [
        MonthlyAggregate(month='Janvier', consommation=50.0, kilometrage=500.0, tonnage=0.0),
        MonthlyAggregate(month='Février', consommation=50.0, kilometrage=500.0, tonnage=0.0),
    ]
    summary = summarize_ser_period(monthly, COEFFICIENTS)

    assert summary.total_consommation == pytest.approx(100.0)
    assert summary.total_reference_consumption == pytest.approx(10 + 0.05 * 1000)
    assert summary.improvement == pytest.approx(40.0)
    assert summary.progress == 0.0
    assert summary.target_consumption == pytest.approx(97.0)


def test_ser_period_progress_toward_goal():
    monthly = [MonthlyAggregate(month='Janvier', consommation=58.5, kilometrage=1000.0, tonnage=0.0)]
    # reference 60, actual 58.5 -> improvement -2.5641% of a 3% goal
    summary = summarize_ser_period(monthly, COEFFICIENTS, improvement_goal=3)

    assert summary.improvement == pytest.approx((58.5 - 60.0) / 58.5 * 100)
    assert summary.progress == pytest.approx(abs(summary.improvement) / 3 * 100)

    capped = summarize_ser_period(
        [MonthlyAggregate(month='Janvier', consommation=30.0, kilometrage=1000.0)], COEFFICIENTS
    )
    assert capped.progress == 100.0


def test_ser_period_without_data():
    summary = summarize_ser_period([], COEFFICIENTS)
    assert summary.improvement == 0.0
    assert summary.total_consommation == 0.0
