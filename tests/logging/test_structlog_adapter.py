# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

from pysession.core.config import Config
from pysession.logging.port import LoggingPort
from pysession.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pysession": {"logging": {"level": {"root": "DEBUG"}}}}))
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_json_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pysession": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_module_levels_are_applied(self):
        adapter = StructlogAdapter()
        config = Config({"pysession": {"logging": {"level": {"root": "INFO", "pysession.session": "warning"}}}})
        adapter.configure(config)
        assert logging.getLogger("pysession.session").level == logging.WARNING


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("pysession.test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "debug")

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("pysession.custom", "ERROR")
        assert logging.getLogger("pysession.custom").level == logging.ERROR
