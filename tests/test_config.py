import pytest

from aws_subnet_exporter.config import ExporterConfig
from aws_subnet_exporter.exceptions import ConfigurationError
from aws_subnet_exporter.utils.duration import parse_duration


class TestParseDuration:
    @pytest.mark.parametrize(
        "value, seconds",
        [
            ("60s", 60.0),
            ("1m30s", 90.0),
            ("5m", 300.0),
            ("1.5h", 5400.0),
            ("500ms", 0.5),
            ("45", 45.0),
            (" 2m ", 120.0),
        ],
    )
    def test_valid(self, value: str, seconds: float) -> None:
        assert parse_duration(value) == pytest.approx(seconds)

    @pytest.mark.parametrize("value", ["", "s", "10x", "1m 30s", "ten seconds", "inf"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_duration(value)


class TestExporterConfig:
    def test_defaults(self) -> None:
        cfg = ExporterConfig()
        assert cfg.PORT == 8080
        assert cfg.REGION == "eu-west-2"
        assert cfg.FILTER == "*"
        assert cfg.PERIOD_SECONDS == 60.0
        assert cfg.FAIL_FAST is True

    def test_set_port_from_string(self) -> None:
        cfg = ExporterConfig()
        cfg.set_port("9100")
        assert cfg.PORT == 9100

    @pytest.mark.parametrize("port", ["http", "0", "70000"])
    def test_rejects_bad_port(self, port: str) -> None:
        with pytest.raises(ConfigurationError):
            ExporterConfig().set_port(port)

    def test_rejects_non_positive_period(self) -> None:
        with pytest.raises(ConfigurationError):
            ExporterConfig().set_period(0)
