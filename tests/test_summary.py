from health_pdf.summary import FitnessSummary, summarize_fitness


def test_heart_rate_skips_missing_entries():
    summary = summarize_fitness([{"heart_rate": 70}, {"heart_rate": None}, {"heart_rate": 130}])
    assert summary.avg_heart_rate == 100
    assert summary.min_heart_rate == 70
    assert summary.max_heart_rate == 130
    assert summary.heart_rate_entries == 2


def test_totals_and_averages():
    logs = [
        {"steps": 8000, "calories": 320, "distance_km": 6.234, "water_ml": 2000, "heart_rate": 72},
        {"steps": 12000, "calories": 510, "distance_km": 9.1, "water_ml": 2501},
        {"steps": None, "calories": None, "distance_km": None, "water_ml": None},
    ]
    summary = summarize_fitness(logs)

    assert summary.total_steps == 20000
    assert summary.total_calories == 830
    assert summary.total_distance == 15.33
    # water is averaged over every entry, including ones without a value
    assert summary.avg_water == 1500
    assert summary.avg_heart_rate == 72


def test_average_water_rounds_half_up():
    summary = summarize_fitness([{"water_ml": 250}, {"water_ml": 251}])
    assert summary.avg_water == 251


def test_no_logs():
    summary = summarize_fitness([])
    assert summary == FitnessSummary()
    assert summary.total_distance == 0.0
    assert summary.heart_rate_status == "No data"


def test_heart_rate_status():
    assert FitnessSummary(avg_heart_rate=101, heart_rate_entries=1).heart_rate_status == "Elevated (Tachycardia)"
    assert FitnessSummary(avg_heart_rate=59, heart_rate_entries=1).heart_rate_status == "Low (Bradycardia)"
    assert FitnessSummary(avg_heart_rate=100, heart_rate_entries=1).heart_rate_status == "Normal"
    assert FitnessSummary(avg_heart_rate=60, heart_rate_entries=1).heart_rate_status == "Normal"
