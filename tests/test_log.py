import logging

from edgepurge.log import get_logger


def test_loggers_live_under_package_namespace() -> None:
    assert get_logger("edgepurge.purge").name == "edgepurge.purge"
    assert get_logger("tools").name == "edgepurge.tools"


def test_package_logger_does_not_propagate_to_root() -> None:
    get_logger(__name__)
    root = logging.getLogger("edgepurge")
    assert root.propagate is False
    assert len(root.handlers) == 1
    get_logger("edgepurge.other")
    assert len(root.handlers) == 1
