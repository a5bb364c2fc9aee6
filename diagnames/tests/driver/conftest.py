# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_cli_logging():
	"""
	Drop the stderr handler `main()` installs on the `diagnames` logger.

	The handler binds the stderr of the test that created it; later tests
	run under a different capture.
	"""
	yield
	logger = logging.getLogger("diagnames")
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	logger.setLevel(logging.NOTSET)
