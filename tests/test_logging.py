"""Tests for logging helpers"""
import logging

from freshcart.logging import configure_logging, get_logger, sanitize_id_for_logging, sanitize_string_for_logging


def test_get_logger_is_cached():
    """Test the same logger object is returned"""
    assert get_logger("freshcart.test") is get_logger("freshcart.test")


def test_sanitize_id():
    """Test ids are escaped and truncated"""
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging("10") == "10"
    assert sanitize_id_for_logging("3f2b9c1e-aaaa-bbbb") == "3f2b9c1e"
    assert sanitize_id_for_logging("a\nb") == "a\\nb"


def test_sanitize_string():
    """Test user strings are escaped and capped"""
    assert sanitize_string_for_logging("") == "N/A"
    assert sanitize_string_for_logging("Fake\r\nINFO - admin") == "Fake\\r\\nINFO - admin"
    assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."


def test_configure_logging_installs_one_handler():
    """Test repeated configuration keeps a single package handler"""
    configure_logging()
    package_logger = configure_logging("debug")

    handlers = [h for h in package_logger.handlers if getattr(h, "_freshcart", False)]
    assert package_logger.name == "freshcart"
    assert len(handlers) == 1
    assert package_logger.level == logging.DEBUG

    configure_logging("info")
