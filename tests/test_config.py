import logging

from league import show_config_warnings


def test_startup_log_names_the_configuration_in_use(flask_app, caplog):
    caplog.set_level(logging.INFO, logger="league")
    show_config_warnings(flask_app, "testing")
    assert "starting with 'testing' configuration" in caplog.text


def test_debug_in_production_is_flagged(flask_app, caplog):
    caplog.set_level(logging.INFO, logger="league")
    flask_app.config["DEBUG"] = True

    show_config_warnings(flask_app, "production")

    assert any(
        r.levelno == logging.WARNING and "DEBUG mode" in r.getMessage()
        for r in caplog.records
    )
