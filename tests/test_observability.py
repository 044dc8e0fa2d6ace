import io
import logging

from orchestrator_client.core.logging import LogfmtFormatter, setup_logging
from orchestrator_client.core.observability import DEFAULT_LOGGER_NAME, log_event


def test_log_event_attaches_fields_as_extras(caplog):
    with caplog.at_level(logging.DEBUG, logger=DEFAULT_LOGGER_NAME):
        log_event("orchestrator.leader_resolved", leader="http://orc1:3000/api")

    record = next(
        r for r in caplog.records if r.getMessage() == "orchestrator.leader_resolved"
    )
    assert record.levelno == logging.DEBUG
    assert record.event == "orchestrator.leader_resolved"
    assert record.leader == "http://orc1:3000/api"


def test_log_event_drops_reserved_keys(caplog):
    with caplog.at_level(logging.DEBUG, logger=DEFAULT_LOGGER_NAME):
        log_event("orchestrator.request", name="clobber", module="x", status=200)

    record = next(r for r in caplog.records if r.getMessage() == "orchestrator.request")
    assert record.name == DEFAULT_LOGGER_NAME
    assert record.status == 200


def test_log_event_is_silent_below_debug(caplog):
    with caplog.at_level(logging.INFO, logger=DEFAULT_LOGGER_NAME):
        log_event("orchestrator.request", status=200)

    assert not [r for r in caplog.records if r.getMessage() == "orchestrator.request"]


def test_logfmt_formatter_renders_known_extras():
    record = logging.LogRecord(
        name="orchestrator_client.client",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="orchestrator.request",
        args=(),
        exc_info=None,
    )
    record.method = "GET"
    record.path = "/begin-downtime/db1/3306/admin/planned work"
    record.status = 200
    record.duration_ms = 4

    line = LogfmtFormatter().format(record)

    assert line.startswith("level=debug logger=orchestrator_client.client")
    assert "event=orchestrator.request" in line
    assert "method=GET" in line
    assert 'path="/begin-downtime/db1/3306/admin/planned work"' in line
    assert "status=200" in line
    assert "duration_ms=4" in line
    assert "endpoint=" not in line


def test_logfmt_formatter_quotes_empty_and_lowercases_bools():
    record = logging.LogRecord(
        "orchestrator_client.leader", logging.DEBUG, __file__, 1, "leader.probe", (), None
    )
    record.leader = True
    record.path = ""

    line = LogfmtFormatter(fields=("leader", "path")).format(record)

    assert line.endswith('leader=true path=""')


def test_setup_logging_targets_named_logger():
    stream = io.StringIO()
    log = setup_logging("debug", logger_name="orchestrator_client.test", stream=stream)
    try:
        log_event("orchestrator.request", log, method="GET", status=200)
    finally:
        log.handlers.clear()
        log.setLevel(logging.NOTSET)

    assert stream.getvalue().strip() == (
        "level=debug logger=orchestrator_client.test event=orchestrator.request "
        "method=GET status=200"
    )
