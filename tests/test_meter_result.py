import pytest

from cpumeter.models.meter_result import MeterResult
from cpumeter.models.sample import Sample


@pytest.fixture
def result():
    return MeterResult(
        average_cpu_percent=20.0,
        peak_cpu_percent=30.0,
        min_cpu_percent=10.0,
        runtime_ms=300,
        sample_count=3,
        interval_ms=100,
        samples=[Sample(0, 10.0), Sample(100, 20.0), Sample(200, 30.0)],
    )


def test_sample_is_immutable():
    sample = Sample(0, 10.0)
    with pytest.raises(AttributeError):
        sample.cpu_percent = 99.0


def test_to_dict_layout(result):
    data = result.to_dict()

    assert data["average_cpu_percent"] == 20.0
    assert data["runtime_ms"] == 300
    assert data["samples"][1] == {"elapsed_ms": 100, "cpu_percent": 20.0}


def test_save_and_load(result, tmp_path):
    path = tmp_path / "result.json"
    result.save_to_file(str(path))

    assert MeterResult.load_from_file(str(path)) == result


def test_print_summary(result, capsys):
    result.print_summary()
    out = capsys.readouterr().out

    assert "avg=20.0%" in out
    assert "peak=30.0%" in out
    assert "runtime: 300ms  samples=3  interval=100ms" in out
