import pytest

from constants import PipelineDefaults
from dtos.internal import PipelineConfig
from services.cost_calculator import CostCalculator, chunk_count


@pytest.fixture
def calculator():
    return CostCalculator()


def test_cost_for_partial_chunks(calculator):
    estimate = calculator.calculate_cost(212, PipelineConfig())

    assert estimate.total_chunks == 4
    assert estimate.breakdown.dubbing_cost == 0.85
    assert estimate.breakdown.processing_cost == 0.04
    assert estimate.total_cost == 0.89
    assert estimate.cost_per_chunk == 0.22


def test_watermark_halves_dubbing_cost(calculator):
    estimate = calculator.calculate_cost(600, PipelineConfig(use_watermark=True, chunk_duration=120))

    assert estimate.total_chunks == 5
    assert estimate.breakdown.dubbing_cost == 1.2
    assert estimate.total_cost == 1.25


def test_zero_length_video(calculator):
    estimate = calculator.calculate_cost(0, PipelineConfig())

    assert estimate.total_chunks == 0
    assert estimate.cost_per_chunk == 0.0
    assert estimate.total_cost == 0.0


def test_time_estimate_batches_dubbing(calculator):
    estimate = calculator.calculate_time(240, PipelineConfig())

    assert estimate.breakdown.download == 180
    assert estimate.breakdown.chunking == 4
    assert estimate.breakdown.dubbing == 300
    assert estimate.breakdown.merging == 8
    assert estimate.breakdown.finalization == 5
    assert estimate.total_time == 497


def test_more_parallel_jobs_shorten_dubbing(calculator):
    serial = calculator.calculate_time(600, PipelineConfig(max_parallel_jobs=1))
    parallel = calculator.calculate_time(600, PipelineConfig(max_parallel_jobs=5))

    assert serial.breakdown.dubbing == 10 * 60 * 2.5
    assert parallel.breakdown.dubbing == 2 * 60 * 2.5


@pytest.mark.parametrize("duration, expected", [(120, 60), (299, 60), (300, 120), (1200, 120), (1799, 120), (3600, 300)])
def test_optimal_chunk_duration(duration, expected):
    suggested = CostCalculator.calculate_optimal_chunk_duration(duration)

    assert suggested == expected
    assert suggested in PipelineDefaults.ALLOWED_CHUNK_DURATIONS


def test_breakdown_serializes_camel_case(calculator):
    payload = calculator.calculate_cost(212, PipelineConfig()).to_api()

    assert payload["breakdown"] == {"dubbingCost": 0.85, "processingCost": 0.04}
    assert payload["costPerChunk"] == 0.22


def test_formatting():
    assert CostCalculator.format_cost(0.888) == "$0.89"
    assert CostCalculator.format_time(45) == "45s"
    assert CostCalculator.format_time(250) == "4m 10s"
    assert CostCalculator.format_time(3900) == "1h 5m"
    assert CostCalculator.format_time(7200) == "2h"


def test_chunk_count_rounds_up():
    assert chunk_count(61, 60) == 2
    assert chunk_count(60, 60) == 1
