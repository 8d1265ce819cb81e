"""Test log level filtering for file sinks."""

import pytest

from jjconflict.core.log import (
    ConsoleSink,
    FileSink,
    LevelFilteringExporter,
    setup_logger,
)


def _log_all_levels(tmp_path, level):
    log_file = tmp_path / f"{level}.log"
    logger = setup_logger(
        log_root=tmp_path,
        session_name="test",
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, level=level, path=str(log_file)),
    )

    logger.spew("SPEW message")
    logger.trace("TRACE message")
    logger.debug("DEBUG message")
    logger.info("INFO message")
    logger.warn("WARN message")
    logger.error("ERROR message")
    logger.close()

    return log_file.read_text()


@pytest.mark.parametrize(
    ("level", "included", "excluded"),
    [
        ("spew", ["SPEW", "TRACE", "DEBUG", "INFO"], []),
        ("trace", ["TRACE", "DEBUG", "INFO"], ["SPEW"]),
        ("debug", ["DEBUG", "INFO", "WARN"], ["SPEW", "TRACE"]),
        ("info", ["INFO", "WARN", "ERROR"], ["SPEW", "TRACE", "DEBUG"]),
        ("warn", ["WARN", "ERROR"], ["SPEW", "TRACE", "DEBUG", "INFO"]),
        ("error", ["ERROR"], ["SPEW", "TRACE", "DEBUG", "INFO", "WARN"]),
    ],
)
def test_file_sink_level_filtering(tmp_path, level, included, excluded):
    """Messages below the sink level are dropped."""
    content = _log_all_levels(tmp_path, level)

    for name in included:
        assert f"{name} message" in content
    for name in excluded:
        assert f"{name} message" not in content


def test_level_ordering():
    """Test level ordering: spew < trace < debug < info < ..."""
    thresholds = LevelFilteringExporter._level_thresholds

    assert thresholds['spew'] < thresholds['trace']
    assert thresholds['trace'] < thresholds['debug']
    assert thresholds['debug'] < thresholds['info']
    assert thresholds['info'] < thresholds['warn']
    assert thresholds['warn'] < thresholds['error']
    assert thresholds['error'] < thresholds['fatal']

    assert thresholds['spew'] == 1
    assert thresholds['trace'] == 3
    assert thresholds['debug'] == 5
    assert thresholds['info'] == 9


def test_parse_logs_discarded_block(tmp_path):
    """The parser reports unterminated blocks at debug level."""
    from jjconflict.conflict.parser import parse

    log_file = tmp_path / "parse.log"
    logger = setup_logger(
        log_root=tmp_path,
        session_name="test",
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, level="debug", path=str(log_file)),
    )

    parse(["<<<<<<<", "x"])
    logger.close()

    assert "Unterminated conflict block discarded" in log_file.read_text()


def test_parse_logs_markers_at_spew(tmp_path):
    """Structural markers are logged at spew, below trace."""
    from jjconflict.conflict.parser import parse

    lines = ["<<<<<<<", "x", "|||||||", "o", "=======", "y", ">>>>>>>"]
    contents = {}
    for level in ("spew", "trace"):
        log_file = tmp_path / f"markers-{level}.log"
        logger = setup_logger(
            log_root=tmp_path,
            session_name="test",
            console=ConsoleSink(enabled=False),
            file=FileSink(enabled=True, level=level, path=str(log_file)),
        )
        parse(lines)
        logger.close()
        contents[level] = log_file.read_text()

    for message in ("Ancestor marker", "Divider marker", "Finish marker"):
        assert message in contents["spew"]
        assert message not in contents["trace"]
    assert "Conflict block found" in contents["trace"]
