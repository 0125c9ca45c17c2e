import pytest

from voider.runtime import LogSettings, telemetry


def test_log_settings_default_to_quiet_console() -> None:
    settings = LogSettings.from_env({})

    assert settings == LogSettings()
    assert settings.console is False
    assert settings.file is None


def test_log_settings_read_voider_variables() -> None:
    settings = LogSettings.from_env(
        {
            "VOIDER_LOG_LEVEL": "debug",
            "VOIDER_LOG_CONSOLE": "yes",
            "VOIDER_NO_COLOR": "1",
            "VOIDER_LOG_FILE": "voider.log",
            "VOIDER_PROFILE": "off",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.console is True
    assert settings.colored is False
    assert settings.file == "voider.log"
    assert settings.profiling is False


def test_configure_rebuilds_cached_loggers() -> None:
    before = telemetry.get_logger("voider.tests")
    assert telemetry.get_logger("voider.tests") is before

    applied = telemetry.configure(LogSettings(level="WARNING"))

    assert applied.level == "WARNING"
    assert telemetry.get_logger("voider.tests") is not before
    telemetry.configure()


def test_span_collects_metadata_and_reraises() -> None:
    with pytest.raises(KeyError):
        with telemetry.span(
            "tests::span", component=True, metadata={"rows": 3}
        ) as handle:
            handle.add_metadata("match", (0, 1))
            raise KeyError("missing")

    assert handle.component == "tests::span"
    assert handle.metadata == {"rows": "3", "match": "(0, 1)"}
