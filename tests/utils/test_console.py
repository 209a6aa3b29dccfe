"""
Tests for the Console and Logging Utilities.
"""

import logging

from seqsynth.utils import console as console_module
from seqsynth.utils.console import console, log_info, log_success, log_warning, set_verbosity


def test_helpers_write_to_the_active_console(captured_console):
  log_info("searching [type]Point[/type]")
  log_success("stored 2 values")
  log_warning("type not considered")

  text = captured_console.export_text()
  assert "searching Point" in text
  assert "stored 2 values" in text
  assert "SUCCESS" in text
  assert "type not considered" in text


def test_proxy_forwards_to_backend(captured_console):
  assert console.backend is captured_console
  console.print("direct")
  assert "direct" in console.export_text()


def test_debug_traces_follow_verbosity(captured_console):
  trace = logging.getLogger("seqsynth.generation.producers")
  try:
    trace.debug("hidden trace")
    set_verbosity(logging.DEBUG)
    trace.debug("visible trace")
  finally:
    set_verbosity(logging.INFO)

  text = captured_console.export_text()
  assert "hidden trace" not in text
  assert "visible trace" in text


def test_only_one_rich_handler(captured_console):
  console_module.set_console(captured_console)
  handlers = [h for h in logging.getLogger("seqsynth").handlers if type(h).__name__ == "RichHandler"]
  assert len(handlers) == 1
